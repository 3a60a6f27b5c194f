from __future__ import annotations

from typing import Any

import pytest

REMOTE_LISTING = (
    "  origin/HEAD -> origin/main\n"
    "  origin/main\n"
    "  origin/feature/login\n"
    "  upstream/HEAD -> upstream/main\n"
    "  upstream/main\n"
)


@pytest.fixture
def remote_listing() -> bytes:
    return REMOTE_LISTING.encode()


@pytest.fixture
def login_answers() -> dict[str, Any]:
    return {
        "draft": True,
        "base": "main",
        "compare": "feature/login",
        "type": ["feature"],
        "description": "Add login",
        "ticket": "",
        "tests": None,
        "documentation": "nodoc",
        "postDeployment": "",
    }


@pytest.fixture
def piar_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    env = {"PIAR_REPO": "widgets", "PIAR_OWNER": "acme", "PIAR_GITHUB_TOKEN": "ghp_test"}
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("PIAR_LOG_LEVEL", raising=False)
    return env
