"""
Pytest configuration for unit tests.

Keeps the developer's GitHub credentials and pin-action settings out of
unit tests so every test starts from an unauthenticated default config.
"""

import os

import pytest


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove GitHub/pin-action environment variables for the test."""
    for name in list(os.environ):
        if name == "GITHUB_TOKEN" or name.startswith("PIN_ACTION_"):
            monkeypatch.delenv(name, raising=False)
