"""Shared test fixtures for tokengen."""

import pytest

from tokengen.core.generator import JWTGenerator

SETTINGS_ENV_VARS = ("TOKENGEN_ID", "TOKENGEN_KEY_LIFETIME", "TOKENGEN_TOKEN_LIFETIME")


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep generator settings independent of the host environment."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def generator() -> JWTGenerator:
    """Create a generator with default settings."""
    return JWTGenerator()
