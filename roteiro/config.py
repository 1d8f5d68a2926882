"""Studio configuration using pydantic-settings"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from roteiro.secrets import (
    CredentialStore,
    EnvCredentialStore,
    KeyringCredentialStore,
    MemoryCredentialStore,
)


class Settings(BaseSettings):
    """Settings loaded from ROTEIRO_* environment variables or .env"""

    model_config = SettingsConfigDict(
        env_prefix="ROTEIRO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # HTTP
    http_timeout: float = 120.0            # seconds, per request

    # Image job polling
    poll_interval: float = 2.0             # seconds between polls
    poll_deadline: float = 60.0            # wall-clock ceiling from submission

    # Defaults
    default_text_provider: str = "gemini"
    default_image_provider: str = "leonardo"
    default_voice_id: str = "9BWtsMINqrJLrRacOk9x"
    default_voice_model: str = "eleven_multilingual_v2"

    # Credentials
    credential_backend: Literal["keyring", "env", "memory"] = "keyring"


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def make_credential_store(settings: Settings) -> CredentialStore:
    """Build the credential backend named in settings"""
    if settings.credential_backend == "env":
        return EnvCredentialStore()
    if settings.credential_backend == "memory":
        return MemoryCredentialStore()
    return KeyringCredentialStore()
