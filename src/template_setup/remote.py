from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from src.template_setup.errors import ToolNotFoundError

if TYPE_CHECKING:  # pragma: no cover
    from src.template_setup.git import Git
    from src.template_setup.github import GitHubCLI

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoteConfigResult:
    ok: bool
    merge_settings: bool = False
    protected: bool = False
    secret_set: bool = False
    branch_missing: bool = False


@dataclass(frozen=True)
class ProvisionResult:
    pushed: bool
    created: bool = False


def merge_settings_fields() -> dict[str, Any]:
    return {
        "allow_squash_merge": True,
        "allow_merge_commit": False,
        "allow_rebase_merge": False,
        "delete_branch_on_merge": True,
        "allow_auto_merge": True,
    }


def branch_protection_payload(required_check: str) -> dict[str, Any]:
    return {
        "required_status_checks": {"strict": True, "contexts": [required_check]},
        "enforce_admins": True,
        "required_pull_request_reviews": {
            "dismiss_stale_reviews": True,
            "required_approving_review_count": 0,
        },
        "restrictions": None,
        "required_linear_history": True,
        "allow_force_pushes": False,
        "allow_deletions": False,
    }


def configure_repository(
    gh: GitHubCLI,
    slug: str,
    *,
    branch: str,
    required_check: str,
    secret_name: str,
    secret_value: str | None = None,
) -> RemoteConfigResult:
    """Apply merge settings, branch protection and the publishing secret.

    Steps are independent: a failed merge-settings call does not stop branch
    protection. The one exception is a missing branch, which would make every
    later step fail the same way, so it ends the configuration early.
    """
    print("\n  Configuring repository settings...")
    merge = gh.api("PATCH", f"repos/{slug}", fields=merge_settings_fields())
    if merge.ok:
        print("  Merge settings: squash only, auto-merge on, branches auto-deleted")
    else:
        logger.warning("Could not update merge settings: %s", merge.error or merge.body)

    print(f"  Protecting branch {branch}...")
    protection = gh.api(
        "PUT",
        f"repos/{slug}/branches/{branch}/protection",
        payload=branch_protection_payload(required_check),
    )
    if not protection.ok and protection.not_found:
        print(f"  Branch {branch} does not exist on GitHub yet. Push code first, then re-run.")
        return RemoteConfigResult(
            ok=False, merge_settings=merge.ok, branch_missing=True
        )
    if protection.ok:
        print(f"  Branch protection enabled (required check: {required_check})")
    else:
        logger.warning(
            "Could not configure branch protection: %s",
            protection.error or protection.body,
        )

    secret_set = False
    if secret_value:
        print(f"  Setting {secret_name} secret...")
        secret_set = gh.set_secret(slug, secret_name, secret_value)
        if secret_set:
            print(f"  {secret_name} secret configured")

    return RemoteConfigResult(
        ok=protection.ok,
        merge_settings=merge.ok,
        protected=protection.ok,
        secret_set=secret_set,
    )


def provision_repository(
    gh: GitHubCLI,
    git: Git,
    slug: str,
    *,
    description: str,
    visibility: str,
    branch: str,
    remote: str = "origin",
) -> ProvisionResult:
    """Create the GitHub repository or link an existing one, then push."""
    try:
        exists = gh.repo_exists(slug)
    except ToolNotFoundError:
        logger.warning("gh disappeared from PATH; skipping repository setup")
        return ProvisionResult(pushed=False)

    if not exists:
        print(f"\n  Creating {visibility} repository {slug}...")
        # Clones of the template still point at the template's origin.
        git.remove_remote(remote)
        created = gh.create_repo(
            slug,
            description=description,
            visibility=visibility,
            remote=remote,
            push=True,
        )
        if not created:
            logger.warning("Could not create repository %s", slug)
        return ProvisionResult(pushed=created, created=created)

    print(f"\n  Repository {slug} already exists")
    if git.remote_url(remote) is None:
        git.add_remote(remote, f"https://github.com/{slug}.git")
    print(f"  Pushing {branch} to {remote}...")
    pushed = git.push(remote, branch)
    if not pushed:
        logger.warning("Push to %s failed; skipping repository configuration", slug)
    return ProvisionResult(pushed=pushed)
