from __future__ import annotations

import os
import shlex


def _env_str(name: str) -> str:
    return str(os.environ.get(name) or "").strip()


def _env_bool(name: str, *, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in ("1", "true", "yes", "on"):
        return True
    if v in ("0", "false", "no", "off"):
        return False
    return default


def manifest_path() -> str:
    return _env_str("TEMPLATE_SETUP_MANIFEST") or "package.json"


def changeset_config_path() -> str:
    return _env_str("TEMPLATE_SETUP_CHANGESET_CONFIG") or os.path.join(
        ".changeset", "config.json"
    )


def setup_script_path() -> str:
    # Empty means "the directory this package was loaded from".
    return _env_str("TEMPLATE_SETUP_SCRIPT_PATH")


def setup_script_entry() -> str:
    return _env_str("TEMPLATE_SETUP_SCRIPT_ENTRY") or "setup"


def install_command() -> list[str]:
    raw = _env_str("TEMPLATE_SETUP_INSTALL_COMMAND") or "bun install"
    return shlex.split(raw) or ["bun", "install"]


def default_branch() -> str:
    return _env_str("TEMPLATE_SETUP_DEFAULT_BRANCH") or "main"


def required_status_check() -> str:
    return _env_str("TEMPLATE_SETUP_REQUIRED_CHECK") or "ci"


def secret_name() -> str:
    return _env_str("TEMPLATE_SETUP_SECRET_NAME") or "NPM_TOKEN"


def secret_value() -> str:
    # The secret itself lives under its own name, e.g. NPM_TOKEN=...
    return _env_str(secret_name())


def repo_visibility() -> str:
    # GitHub values: public/private/internal
    v = _env_str("TEMPLATE_SETUP_REPO_VISIBILITY").lower() or "public"
    return v if v in ("public", "private", "internal") else "public"


def github_enabled() -> bool:
    return _env_bool("TEMPLATE_SETUP_GITHUB", default=True)


def self_remove_enabled() -> bool:
    return _env_bool("TEMPLATE_SETUP_SELF_REMOVE", default=True)


def log_level() -> str:
    v = _env_str("TEMPLATE_SETUP_LOG_LEVEL").upper() or "WARNING"
    return v if v in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL") else "WARNING"
