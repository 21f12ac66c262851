from __future__ import annotations

import os
import re
import shutil
import tempfile
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from src.template_setup.prompts import Answers

PACKAGE_NAME = "{{PACKAGE_NAME}}"
REPO_NAME = "{{REPO_NAME}}"
GITHUB_USER = "{{GITHUB_USER}}"
DESCRIPTION = "{{DESCRIPTION}}"
AUTHOR = "{{AUTHOR}}"

TOKENS = (PACKAGE_NAME, REPO_NAME, GITHUB_USER, DESCRIPTION, AUTHOR)

_MARKER_RE = re.compile(r"\{\{[A-Z0-9_]+\}\}")


def build_replacements(answers: Answers) -> dict[str, str]:
    return {
        PACKAGE_NAME: answers.package_name,
        REPO_NAME: answers.repo_name,
        GITHUB_USER: answers.github_user,
        DESCRIPTION: answers.description,
        AUTHOR: answers.author,
    }


def replace_placeholders(text: str, replacements: dict[str, str]) -> str:
    out = text
    for token, value in replacements.items():
        out = out.replace(token, value)
    return out


def find_placeholders(text: str) -> list[str]:
    return sorted(set(_MARKER_RE.findall(text or "")))


def _write_text(path: str, content: str) -> None:
    # Write next to the target and swap it in; a crash leaves the old file.
    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp = tempfile.mkstemp(prefix=".setup-", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        if os.path.exists(path):
            shutil.copymode(path, tmp)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


def replace_in_file(path: str, replacements: dict[str, str]) -> bool:
    """Substitute every placeholder in ``path``. Missing files are skipped."""
    if not os.path.isfile(path):
        print(f"  Skipping {path} (not found)")
        return False

    with open(path, encoding="utf-8", newline="") as f:
        content = f.read()
    _write_text(path, replace_placeholders(content, replacements))
    print(f"  Updated {path}")
    return True
