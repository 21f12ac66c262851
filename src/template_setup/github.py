from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any

from src.template_setup.errors import ToolNotFoundError
from src.template_setup.runner import (
    CommandResult,
    CommandRunner,
    SubprocessRunner,
    tool_available,
)

logger = logging.getLogger(__name__)

_STATUS_LINE_RE = re.compile(r"^HTTP/\S+\s+(\d{3})\b", re.MULTILINE)


@dataclass(frozen=True)
class ApiResponse:
    ok: bool
    status: int | None
    body: str
    error: str

    @property
    def not_found(self) -> bool:
        if self.status is not None:
            return self.status == 404
        # No status line (older gh, proxy errors): fall back to the message.
        return "not found" in self.error.lower()


def parse_api_output(cp: CommandResult) -> ApiResponse:
    """Split ``gh api --include`` output into status, body and error text."""
    raw = cp.stdout or ""
    matches = list(_STATUS_LINE_RE.finditer(raw))
    status: int | None = None
    body = raw
    if matches:
        # Redirects print several header blocks; the last one is the answer.
        last = matches[-1]
        status = int(last.group(1))
        block = raw[last.start():].replace("\r\n", "\n")
        _headers, sep, rest = block.partition("\n\n")
        body = rest if sep else ""
    return ApiResponse(
        ok=cp.ok,
        status=status,
        body=body.strip(),
        error=(cp.stderr or "").strip(),
    )


@dataclass
class GitHubCLI:
    """The parts of the ``gh`` CLI the setup flow relies on."""

    runner: CommandRunner = field(default_factory=SubprocessRunner)

    def _run(
        self, args: list[str], *, capture: bool = True, input: str | None = None
    ) -> CommandResult:
        return self.runner.run(["gh", *args], capture=capture, input=input)

    def available(self) -> bool:
        if not tool_available("gh"):
            return False
        try:
            return self._run(["auth", "status"]).ok
        except (ToolNotFoundError, OSError):
            return False

    def current_user(self) -> str:
        try:
            cp = self._run(["api", "user", "--jq", ".login"])
        except (ToolNotFoundError, OSError):
            return ""
        return cp.stdout.strip() if cp.ok else ""

    def repo_exists(self, slug: str) -> bool:
        return self._run(["repo", "view", slug, "--json", "name"]).ok

    def create_repo(
        self,
        slug: str,
        *,
        description: str,
        visibility: str = "public",
        source: str = ".",
        remote: str = "origin",
        push: bool = True,
    ) -> bool:
        args = [
            "repo",
            "create",
            slug,
            f"--{visibility}",
            "--description",
            description,
            "--source",
            source,
            "--remote",
            remote,
        ]
        if push:
            args.append("--push")
        cp = self._run(args, capture=False)
        if not cp.ok:
            logger.warning("gh repo create %s exited with %d", slug, cp.returncode)
        return cp.ok

    def api(
        self,
        method: str,
        path: str,
        *,
        fields: dict[str, Any] | None = None,
        payload: Any = None,
    ) -> ApiResponse:
        args = ["api", "--include", "-X", method.upper(), path]
        for key, value in (fields or {}).items():
            if isinstance(value, bool):
                value = "true" if value else "false"
            args.extend(["-F", f"{key}={value}"])
        body: str | None = None
        if payload is not None:
            # Nested payloads do not fit -F flags; send the document on stdin.
            args.extend(["--input", "-"])
            body = json.dumps(payload)
        return parse_api_output(self._run(args, input=body))

    def set_secret(self, slug: str, name: str, value: str) -> bool:
        # The value goes through stdin so it never shows up in the process list.
        cp = self._run(["secret", "set", name, "--repo", slug], input=value)
        if not cp.ok:
            logger.warning("gh secret set %s failed: %s", name, cp.output)
        return cp.ok
