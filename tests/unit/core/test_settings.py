"""Tests for environment-driven generator settings."""

from datetime import timedelta

import pytest

from tokengen.core.settings import (
    KEY_LIFETIME_DEFAULT,
    TOKEN_LIFETIME_DEFAULT,
    GeneratorSettings,
)


class TestGeneratorSettings:
    """Tests for settings defaults and environment overrides."""

    def test_defaults(self) -> None:
        settings = GeneratorSettings()
        assert settings.id is None
        assert settings.key_lifetime == KEY_LIFETIME_DEFAULT
        assert settings.token_lifetime == TOKEN_LIFETIME_DEFAULT

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TOKENGEN_ID", "issuer-a")
        monkeypatch.setenv("TOKENGEN_KEY_LIFETIME", "PT0S")
        monkeypatch.setenv("TOKENGEN_TOKEN_LIFETIME", "PT30S")
        settings = GeneratorSettings()
        assert settings.id == "issuer-a"
        assert settings.key_lifetime == timedelta(0)
        assert settings.token_lifetime == timedelta(seconds=30)
