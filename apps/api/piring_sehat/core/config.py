"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    auth_provider: Literal["mock", "firebase"] = "firebase"
    firebase_project_id: str | None = None
    firebase_client_email: str | None = None
    firebase_private_key: str | None = None

    store_backend: Literal["memory", "sql"] = "sql"
    database_url: str = "sqlite:///./piring_sehat.db"
    database_create_schema: bool = False

    cors_allowed_origins: list[str] = [
        "http://localhost:5173",
        "https://piring-sehat.vercel.app",
    ]
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    model_config = SettingsConfigDict(env_prefix="PIRING_", env_file=".env", extra="ignore")

    @field_validator("firebase_private_key")
    @classmethod
    def _unescape_private_key(cls, value: str | None) -> str | None:
        # Keys pasted into env files usually carry literal "\n" sequences.
        if value is None:
            return None
        return value.replace("\\n", "\n")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
