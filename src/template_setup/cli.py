from __future__ import annotations

import logging
import os
import shutil
import sys
import sysconfig
from pathlib import Path

from src.template_setup import config
from src.template_setup.errors import SetupCancelled, SetupError, ToolNotFoundError
from src.template_setup.git import Git
from src.template_setup.github import GitHubCLI
from src.template_setup.manifest import is_configured, load_manifest, remove_script_entry
from src.template_setup.placeholders import (
    build_replacements,
    find_placeholders,
    replace_in_file,
)
from src.template_setup.prompts import Answers, Prompter, collect_answers
from src.template_setup.remote import configure_repository, provision_repository
from src.template_setup.runner import CommandRunner, SubprocessRunner
from src.template_setup.summary import SetupOutcome, build_next_steps

logger = logging.getLogger(__name__)

INITIAL_COMMIT_MESSAGE = "chore: initial project setup"


def _print_answers(answers: Answers) -> None:
    print("\nConfiguration Summary:\n")
    print(f"  Package name: {answers.package_name}")
    print(f"  Repository:   {answers.repo_slug}")
    print(f"  Description:  {answers.description}")
    print(f"  Author:       {answers.author}")


def _install_dependencies(runner: CommandRunner) -> None:
    cmd = config.install_command()
    print("\nInstalling dependencies...\n")
    try:
        cp = runner.run(cmd, capture=False)
    except ToolNotFoundError as exc:
        raise SetupError(f"Failed to install dependencies: {exc}") from exc
    if not cp.ok:
        raise SetupError(f"Failed to install dependencies ({' '.join(cmd)} exited with {cp.returncode})")


def _setup_script_target() -> str:
    return config.setup_script_path() or str(Path(__file__).resolve().parent)


def _is_installed_copy(target: str) -> bool:
    paths = sysconfig.get_paths()
    for key in ("purelib", "platlib"):
        raw = paths.get(key)
        if not raw:
            continue
        lib = os.path.abspath(raw)
        if os.path.commonpath([target, lib]) == lib:
            return True
    return False


def _remove_setup_script(manifest: str) -> None:
    """Delete the one-time setup entry point and its manifest script entry."""
    print("  Removing setup script (one-time use)...")
    target = os.path.abspath(_setup_script_target())
    root = os.path.abspath(".")
    # Never delete an installed copy, even one in a project-local venv.
    if os.path.commonpath([target, root]) != root or _is_installed_copy(target):
        logger.warning("Setup script %s is not part of the project; leaving it in place", target)
    else:
        try:
            if os.path.isdir(target):
                shutil.rmtree(target)
            elif os.path.exists(target):
                os.unlink(target)
        except OSError as exc:
            logger.warning("Could not remove %s: %s", target, exc)
    try:
        remove_script_entry(manifest, config.setup_script_entry())
    except (OSError, SetupError) as exc:
        logger.warning("Could not update %s: %s", manifest, exc)


def _github_phase(
    prompter: Prompter,
    gh: GitHubCLI,
    git: Git,
    answers: Answers,
    branch: str,
) -> SetupOutcome:
    if not answers.github_user:
        print("\n  No GitHub username given; skipping repository setup")
        return SetupOutcome()
    if not git.has_commits():
        print("\n  No commits yet; skipping repository setup")
        return SetupOutcome()
    if not prompter.confirm(
        f"\nCreate GitHub repository {answers.repo_slug} and configure settings?",
        default=True,
    ):
        return SetupOutcome()

    provisioned = provision_repository(
        gh,
        git,
        answers.repo_slug,
        description=answers.description,
        visibility=config.repo_visibility(),
        branch=branch,
    )
    if not provisioned.pushed:
        return SetupOutcome()

    result = configure_repository(
        gh,
        answers.repo_slug,
        branch=branch,
        required_check=config.required_status_check(),
        secret_name=config.secret_name(),
        secret_value=config.secret_value() or None,
    )
    return SetupOutcome(
        pushed=True,
        protected=result.protected,
        secret_set=result.secret_set,
    )


def run(prompter: Prompter, *, runner: CommandRunner | None = None) -> SetupOutcome:
    """The interactive setup flow. Raises SetupCancelled or SetupError."""
    r = runner or SubprocessRunner()
    git = Git(runner=r)
    gh = GitHubCLI(runner=r)
    manifest = config.manifest_path()

    print("\nTemplate Setup\n")
    print("This script will configure your project.\n")

    if is_configured(load_manifest(manifest)):
        print("Project appears to already be configured.")
        if not prompter.confirm("Continue anyway?", default=False):
            raise SetupCancelled("already configured")

    # Probe once; everything GitHub-related is gated on this.
    gh_ready = config.github_enabled() and gh.available()
    default_user = (gh.current_user() if gh_ready else "") or git.user_name()
    default_author = git.user_name()

    print("Project Details\n")
    answers = collect_answers(
        prompter, default_user=default_user, default_author=default_author
    )
    _print_answers(answers)

    if not prompter.confirm("\nProceed with setup?", default=True):
        raise SetupCancelled("declined")

    print("\nConfiguring files...\n")
    replacements = build_replacements(answers)
    for path in (manifest, config.changeset_config_path()):
        replace_in_file(path, replacements)
    with open(manifest, encoding="utf-8") as f:
        leftover = find_placeholders(f.read())
    if leftover:
        logger.warning("%s still contains placeholders: %s", manifest, ", ".join(leftover))

    _install_dependencies(r)

    print("\nSetting up git...\n")
    if not git.is_repo():
        git.init(config.default_branch())

    if config.self_remove_enabled():
        _remove_setup_script(manifest)

    if prompter.confirm("\nCreate initial commit?", default=True):
        if git.add_all() and git.commit(INITIAL_COMMIT_MESSAGE):
            print("  Created initial commit")
        else:
            logger.warning("Initial commit was not created")

    # Unborn branches have no name yet; fall back to the configured one.
    branch = git.current_branch() or config.default_branch()
    outcome = SetupOutcome()
    if config.github_enabled():
        if gh_ready:
            outcome = _github_phase(prompter, gh, git, answers, branch)
        else:
            print("\n  Tip: install and authenticate the GitHub CLI (gh auth login) to create the repository automatically.")

    steps = build_next_steps(
        answers,
        outcome,
        branch=branch,
        secret_name=config.secret_name(),
    )
    print("\nSetup complete!\n")
    print("Next steps:\n")
    print(steps.render())
    return outcome


def main() -> int:
    logging.basicConfig(
        level=getattr(logging, config.log_level()),
        format="[%(levelname)s] %(message)s",
    )
    with Prompter() as prompter:
        try:
            run(prompter)
        except (SetupCancelled, KeyboardInterrupt):
            print("\nSetup cancelled.")
            return 0
        except SetupError as exc:
            print(f"\nError: {exc}", file=sys.stderr)
            return 1
        except Exception as exc:
            logger.debug("setup failed", exc_info=True)
            print(f"\nSetup failed: {exc}", file=sys.stderr)
            return 1
    return 0
