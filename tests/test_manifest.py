import json

import pytest

from src.template_setup.errors import SetupError
from src.template_setup.manifest import (
    dump_manifest,
    is_configured,
    load_manifest,
    remove_script_entry,
)


def test_is_configured():
    assert is_configured({"name": "my-lib"}) is True
    assert is_configured({"name": "{{PACKAGE_NAME}}"}) is False
    assert is_configured({}) is True


def test_load_manifest_missing(tmp_path):
    with pytest.raises(SetupError):
        load_manifest(str(tmp_path / "package.json"))


def test_load_manifest_invalid_json(tmp_path):
    p = tmp_path / "package.json"
    p.write_text("{nope", encoding="utf-8")
    with pytest.raises(SetupError):
        load_manifest(str(p))


def test_load_manifest_rejects_non_object(tmp_path):
    p = tmp_path / "package.json"
    p.write_text("[]", encoding="utf-8")
    with pytest.raises(SetupError):
        load_manifest(str(p))


def test_remove_script_entry_rewrites_with_tabs(tmp_path):
    p = tmp_path / "package.json"
    p.write_text(
        json.dumps({"name": "x", "scripts": {"setup": "python -m x", "test": "bun test"}}),
        encoding="utf-8",
    )

    assert remove_script_entry(str(p), "setup") is True

    text = p.read_text(encoding="utf-8")
    assert text.endswith("}\n")
    assert '\n\t"scripts": {\n\t\t"test": "bun test"\n\t}' in text
    assert json.loads(text)["scripts"] == {"test": "bun test"}


def test_remove_script_entry_noop_without_entry(tmp_path):
    p = tmp_path / "package.json"
    original = '{"name": "x"}'
    p.write_text(original, encoding="utf-8")

    assert remove_script_entry(str(p), "setup") is False
    assert p.read_text(encoding="utf-8") == original


def test_dump_manifest_keeps_unicode():
    assert "Zoë" in dump_manifest({"author": "Zoë"})
