from __future__ import annotations

import json
from typing import Any

from src.template_setup.errors import SetupError


def load_manifest(path: str) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as exc:
        raise SetupError(f"{path} not found. Run setup from the project root.") from exc
    except json.JSONDecodeError as exc:
        raise SetupError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise SetupError(f"{path} must contain a JSON object")
    return data


def is_configured(manifest: dict[str, Any]) -> bool:
    """A manifest still carrying a ``{{...}}`` name has not been set up yet."""
    return "{{" not in str(manifest.get("name") or "")


def dump_manifest(manifest: dict[str, Any]) -> str:
    # Tab indentation matches what the package manager writes.
    return json.dumps(manifest, indent="\t", ensure_ascii=False) + "\n"


def remove_script_entry(path: str, entry: str) -> bool:
    manifest = load_manifest(path)
    scripts = manifest.get("scripts")
    if not isinstance(scripts, dict) or entry not in scripts:
        return False
    del scripts[entry]
    with open(path, "w", encoding="utf-8") as f:
        f.write(dump_manifest(manifest))
    return True
