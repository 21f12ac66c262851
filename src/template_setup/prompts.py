from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import TextIO

from src.template_setup.errors import SetupCancelled

FALLBACK_REPO_NAME = "my-lib"


@dataclass(frozen=True)
class Answers:
    package_name: str
    repo_name: str
    github_user: str
    description: str
    author: str

    @property
    def repo_slug(self) -> str:
        return f"{self.github_user}/{self.repo_name}"


class Prompter:
    """Line-based prompts on an input/output stream pair.

    Acquire it once at program start (``with Prompter() as p:``); it is
    released on every exit path, including cancellation and fatal errors.
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._in = stdin or sys.stdin
        self._out = stdout or sys.stdout
        self._closed = False

    def __enter__(self) -> Prompter:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._out.flush()

    def question(self, prompt: str, default: str = "") -> str:
        if self._closed:
            raise RuntimeError("prompter is closed")
        display = f"{prompt} [{default}]: " if default else f"{prompt}: "
        self._out.write(display)
        self._out.flush()
        line = self._in.readline()
        if not line:
            # stdin closed (Ctrl-D or piped input ran out).
            raise SetupCancelled("input closed")
        return line.strip() or default

    def confirm(self, prompt: str, *, default: bool) -> bool:
        hint = "Y/n" if default else "y/N"
        answer = self.question(f"{prompt} ({hint})", "y" if default else "n").lower()
        # Only an explicit answer overrides the default.
        if default:
            return answer not in ("n", "no")
        return answer in ("y", "yes")


def derive_repo_name(package_name: str) -> str:
    name = (package_name or "").strip()
    if name.startswith("@"):
        _scope, _sep, rest = name.partition("/")
        return rest or FALLBACK_REPO_NAME
    return name


def collect_answers(
    prompter: Prompter,
    *,
    default_user: str = "",
    default_author: str = "",
) -> Answers:
    package_name = prompter.question(
        "Package name (e.g., @yourscope/my-lib or my-lib)", "my-lib"
    )
    repo_name = prompter.question("Repository name", derive_repo_name(package_name))
    github_user = prompter.question("GitHub username/org", default_user)
    description = prompter.question("Project description", "A TypeScript library")
    author = prompter.question("Author name", default_author or default_user)
    return Answers(
        package_name=package_name,
        repo_name=repo_name,
        github_user=github_user,
        description=description,
        author=author,
    )
