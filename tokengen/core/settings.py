"""Generator settings loaded from environment variables."""

from datetime import timedelta

from pydantic_settings import BaseSettings, SettingsConfigDict

KEY_LIFETIME_DEFAULT = timedelta(days=1)
TOKEN_LIFETIME_DEFAULT = timedelta(hours=1)


class GeneratorSettings(BaseSettings):
    """Identity and lifetimes for a token generator."""

    model_config = SettingsConfigDict(env_prefix="TOKENGEN_")

    id: str | None = None
    key_lifetime: timedelta = KEY_LIFETIME_DEFAULT
    token_lifetime: timedelta = TOKEN_LIFETIME_DEFAULT
