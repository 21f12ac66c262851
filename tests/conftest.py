import sys
from pathlib import Path

import pytest

# Ensure the repo root is on sys.path so tests can import the local `src/` package.
ROOT = str(Path(__file__).resolve().parents[1])
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture(autouse=True)
def _isolate_setup_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # Self-removal deletes files; keep it opt-in per test.
    monkeypatch.setenv("TEMPLATE_SETUP_SELF_REMOVE", "0")
    for name in (
        "TEMPLATE_SETUP_GITHUB",
        "TEMPLATE_SETUP_SCRIPT_PATH",
        "TEMPLATE_SETUP_MANIFEST",
        "TEMPLATE_SETUP_CHANGESET_CONFIG",
        "TEMPLATE_SETUP_INSTALL_COMMAND",
        "TEMPLATE_SETUP_SECRET_NAME",
        "TEMPLATE_SETUP_REPO_VISIBILITY",
        "NPM_TOKEN",
    ):
        monkeypatch.delenv(name, raising=False)
