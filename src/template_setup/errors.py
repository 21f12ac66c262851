from __future__ import annotations


class SetupError(RuntimeError):
    """A required step failed; setup stops with exit status 1."""


class SetupCancelled(Exception):
    """The user declined to continue. Not an error: exit status 0."""


class ToolNotFoundError(RuntimeError):
    def __init__(self, tool: str):
        super().__init__(f"Command not found: {tool}")
        self.tool = tool
