from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from typing import Protocol

from src.template_setup.errors import ToolNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        # Prefer stderr: CLIs put their error text there.
        return (self.stderr or self.stdout or "").strip()


class CommandRunner(Protocol):
    def run(
        self,
        args: list[str],
        *,
        capture: bool = True,
        input: str | None = None,
        cwd: str | None = None,
    ) -> CommandResult: ...


@dataclass
class SubprocessRunner:
    """Runs external tools synchronously, without a timeout.

    With ``capture=False`` the child inherits stdout/stderr so the user sees
    its progress. ``input`` is written to the child's stdin; secrets and JSON
    bodies travel this way and never appear in the argument list.
    """

    def run(
        self,
        args: list[str],
        *,
        capture: bool = True,
        input: str | None = None,
        cwd: str | None = None,
    ) -> CommandResult:
        logger.debug("run: %s", args[0] if args else "")
        try:
            cp = subprocess.run(
                args,
                cwd=cwd,
                input=input,
                text=True,
                capture_output=capture,
                check=False,
            )
        except FileNotFoundError as exc:
            raise ToolNotFoundError(args[0]) from exc
        if not capture:
            return CommandResult(returncode=cp.returncode)
        return CommandResult(
            returncode=cp.returncode,
            stdout=cp.stdout or "",
            stderr=cp.stderr or "",
        )


def tool_available(name: str) -> bool:
    return shutil.which(name) is not None
