import os
import stat

from src.template_setup.placeholders import (
    TOKENS,
    build_replacements,
    find_placeholders,
    replace_in_file,
    replace_placeholders,
)
from src.template_setup.prompts import Answers


def _answers() -> Answers:
    return Answers(
        package_name="@acme/my-lib",
        repo_name="my-lib",
        github_user="acme",
        description="Widgets",
        author="Ada",
    )


def test_build_replacements_covers_every_token():
    r = build_replacements(_answers())
    assert set(r) == set(TOKENS)
    assert r["{{PACKAGE_NAME}}"] == "@acme/my-lib"
    assert r["{{GITHUB_USER}}"] == "acme"


def test_replace_placeholders_replaces_every_occurrence():
    text = "{{AUTHOR}} {{AUTHOR}} {{AUTHOR}} and {{REPO_NAME}}"
    out = replace_placeholders(text, {"{{AUTHOR}}": "y", "{{REPO_NAME}}": "r"})
    assert out == "y y y and r"


def test_replace_placeholders_is_literal():
    # Regex metacharacters in values must come through untouched.
    out = replace_placeholders("{{DESCRIPTION}}", {"{{DESCRIPTION}}": r"a.*b \1 $x"})
    assert out == r"a.*b \1 $x"


def test_replace_in_file_manifest_example(tmp_path):
    p = tmp_path / "package.json"
    p.write_text(
        '{\n\t"name": "{{PACKAGE_NAME}}",\n\t"bin": "{{PACKAGE_NAME}}",\n\t"author": "{{AUTHOR}}"\n}\n',
        encoding="utf-8",
    )

    assert replace_in_file(str(p), {"{{PACKAGE_NAME}}": "x", "{{AUTHOR}}": "y"}) is True

    content = p.read_text(encoding="utf-8")
    assert find_placeholders(content) == []
    assert content.count('"x"') == 2
    assert content.count('"y"') == 1


def test_replace_in_file_without_tokens_leaves_content(tmp_path):
    p = tmp_path / "config.json"
    original = '{"changelog": "@changesets/cli/changelog"}\n'
    p.write_text(original, encoding="utf-8")

    replace_in_file(str(p), build_replacements(_answers()))

    assert p.read_text(encoding="utf-8") == original


def test_replace_in_file_missing_file_is_skipped(tmp_path, capsys):
    p = tmp_path / ".changeset" / "config.json"

    assert replace_in_file(str(p), build_replacements(_answers())) is False

    assert not p.exists()
    assert "Skipping" in capsys.readouterr().out


def test_replace_in_file_keeps_mode_and_leaves_no_temp_files(tmp_path):
    p = tmp_path / "package.json"
    p.write_text("{{REPO_NAME}}", encoding="utf-8")
    os.chmod(p, 0o644)

    replace_in_file(str(p), {"{{REPO_NAME}}": "my-lib"})

    assert stat.S_IMODE(os.stat(p).st_mode) == 0o644
    assert sorted(os.listdir(tmp_path)) == ["package.json"]


def test_find_placeholders_reports_unique_markers():
    assert find_placeholders("{{A}} {{B_C}} {{A}} {not} {{lower}}") == ["{{A}}", "{{B_C}}"]
