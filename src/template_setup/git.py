from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from src.template_setup.errors import ToolNotFoundError
from src.template_setup.runner import CommandResult, CommandRunner, SubprocessRunner

logger = logging.getLogger(__name__)


@dataclass
class Git:
    """git plumbing for the setup flow. Failures are reported, not raised."""

    runner: CommandRunner = field(default_factory=SubprocessRunner)
    cwd: str = "."

    def _run(self, args: list[str], *, capture: bool = True) -> CommandResult | None:
        try:
            return self.runner.run(["git", *args], capture=capture, cwd=self.cwd)
        except ToolNotFoundError:
            logger.warning("git is not installed")
            return None

    def _ok(self, args: list[str], *, capture: bool = True) -> bool:
        cp = self._run(args, capture=capture)
        if cp is None:
            return False
        if not cp.ok:
            logger.warning("git %s failed: %s", args[0], cp.output)
        return cp.ok

    def user_name(self) -> str:
        try:
            cp = self._run(["config", "user.name"])
        except OSError:
            return ""
        if cp is None or not cp.ok:
            return ""
        return cp.stdout.strip()

    def is_repo(self) -> bool:
        return os.path.exists(os.path.join(self.cwd, ".git"))

    def init(self, branch: str) -> bool:
        return self._ok(["init", "-b", branch], capture=False)

    def has_commits(self) -> bool:
        cp = self._run(["rev-parse", "--verify", "--quiet", "HEAD"])
        return bool(cp and cp.ok)

    def current_branch(self) -> str | None:
        cp = self._run(["rev-parse", "--abbrev-ref", "HEAD"])
        if cp is None or not cp.ok:
            return None
        return cp.stdout.strip() or None

    def add_all(self) -> bool:
        return self._ok(["add", "."], capture=False)

    def commit(self, message: str) -> bool:
        return self._ok(["commit", "-m", message], capture=False)

    def remote_url(self, name: str = "origin") -> str | None:
        cp = self._run(["remote", "get-url", name])
        if cp is None or not cp.ok:
            return None
        return cp.stdout.strip() or None

    def remove_remote(self, name: str = "origin") -> bool:
        # Absent remote is fine: nothing to remove.
        cp = self._run(["remote", "remove", name])
        return bool(cp and cp.ok)

    def add_remote(self, name: str, url: str) -> bool:
        return self._ok(["remote", "add", name, url])

    def push(self, remote: str, branch: str) -> bool:
        return self._ok(["push", "-u", remote, branch], capture=False)
