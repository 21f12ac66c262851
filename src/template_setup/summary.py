from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from src.template_setup.prompts import Answers


@dataclass(frozen=True)
class SetupOutcome:
    pushed: bool = False
    protected: bool = False
    secret_set: bool = False


@dataclass
class NextSteps:
    steps: list[tuple[str, tuple[str, ...]]] = field(default_factory=list)

    def add(self, title: str, *lines: str) -> None:
        self.steps.append((title, tuple(lines)))

    def __len__(self) -> int:
        return len(self.steps)

    def render(self) -> str:
        out: list[str] = []
        for i, (title, lines) in enumerate(self.steps, 1):
            out.append(f"  {i}. {title}")
            out.extend(f"     {ln}" for ln in lines)
            out.append("")
        return "\n".join(out)


def build_next_steps(
    answers: Answers,
    outcome: SetupOutcome,
    *,
    branch: str,
    secret_name: str,
) -> NextSteps:
    steps = NextSteps()
    repo_url = f"https://github.com/{answers.repo_slug}"

    if not outcome.pushed:
        steps.add(
            "Push to GitHub:",
            f"git remote add origin {repo_url}.git",
            f"git push -u origin {branch}",
        )
    if not outcome.protected:
        steps.add("Configure branch protection:", f"{repo_url}/settings/branches")

    publish = [] if outcome.secret_set else [f"- Add {secret_name} secret to GitHub repo settings"]
    publish += [
        "- After first publish, configure OIDC trusted publishing at:",
        f"  https://www.npmjs.com/package/{answers.package_name}/access",
    ]
    steps.add("For npm publishing (first time):", *publish)

    steps.add(
        "Start coding:",
        "bun dev          # Watch mode",
        "bun test         # Run tests",
        "bun run build    # Build for production",
    )
    return steps
