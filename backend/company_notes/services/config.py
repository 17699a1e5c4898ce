"""Application configuration helpers."""

from __future__ import annotations

from functools import lru_cache
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_NOTES_PATH = PROJECT_ROOT / "data" / "notes.json"
DEFAULT_CORS_ORIGINS = ("http://localhost:3000", "http://127.0.0.1:3000")


class AppConfig(BaseModel):
    """Runtime configuration loaded from environment variables."""

    model_config = ConfigDict(frozen=True)

    notes_file_path: Path = Field(..., description="JSON file backing notes when Firestore is off")
    firebase_service_account: Optional[str] = Field(
        default=None,
        description="Service account JSON; enables the Firestore backend when set",
    )
    environment: str = Field(default="development", description="Deployment environment name")
    allow_dev_auth_bypass: bool = Field(
        default=False,
        description="Accept caller-asserted X-User-Id headers even when Firebase is active",
    )
    jwt_secret_key: Optional[str] = Field(
        default=None,
        description="HMAC secret for JWT signing (optional)",
    )
    enable_local_mode: bool = Field(
        default=True,
        description="Allow local-dev token bypass when running locally",
    )
    local_dev_token: Optional[str] = Field(
        default="local-dev-token",
        description="Static token accepted in local mode for development",
    )
    openai_api_key: Optional[str] = Field(None, description="API key for company summaries")
    openai_model: str = Field(default="gpt-4o-mini", description="Chat model for summaries")
    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        description="Base URL of the chat completions API",
    )
    cors_origins: tuple[str, ...] = Field(default=DEFAULT_CORS_ORIGINS)

    @field_validator("notes_file_path", mode="before")
    @classmethod
    def _normalize_notes_path(cls, value: str | Path | None) -> Path:
        if value is None or value == "":
            raise ValueError("NOTES_FILE_PATH is required")
        if isinstance(value, Path):
            path = value
        else:
            path = Path(value)
        return path.expanduser().resolve()

    @field_validator("firebase_service_account", "openai_api_key", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        cleaned = value.strip()
        return cleaned or None

    @field_validator("jwt_secret_key", mode="before")
    @classmethod
    def _ensure_secret(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        cleaned = value.strip()
        if not cleaned:
            raise ValueError(
                "JWT_SECRET_KEY cannot be empty; unset the variable to disable JWT auth"
            )
        if len(cleaned) < 16:
            raise ValueError("JWT_SECRET_KEY must be at least 16 characters")
        return cleaned

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


def _read_env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(key, default)


def _read_flag(key: str, default: str) -> bool:
    return (_read_env(key, default) or "").lower() in {"1", "true", "yes"}


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Load and cache application configuration."""
    cors_raw = _read_env("CORS_ORIGIN")
    if cors_raw:
        cors_origins = tuple(origin.strip() for origin in cors_raw.split(",") if origin.strip())
    else:
        cors_origins = DEFAULT_CORS_ORIGINS

    return AppConfig(
        notes_file_path=_read_env("NOTES_FILE_PATH", str(DEFAULT_NOTES_PATH)),
        firebase_service_account=_read_env("FIREBASE_SERVICE_ACCOUNT"),
        environment=_read_env("ENVIRONMENT", "development"),
        allow_dev_auth_bypass=_read_flag("ALLOW_DEV_AUTH_BYPASS", "false"),
        jwt_secret_key=_read_env("JWT_SECRET_KEY"),
        enable_local_mode=_read_flag("ENABLE_LOCAL_MODE", "true"),
        local_dev_token=_read_env("LOCAL_DEV_TOKEN", "local-dev-token"),
        openai_api_key=_read_env("OPENAI_API_KEY"),
        openai_model=_read_env("OPENAI_MODEL", "gpt-4o-mini"),
        openai_base_url=_read_env("OPENAI_BASE_URL", "https://api.openai.com/v1"),
        cors_origins=cors_origins,
    )


def reload_config() -> AppConfig:
    """Clear cached config (useful for tests) and reload."""
    get_config.cache_clear()
    return get_config()


__all__ = [
    "AppConfig",
    "get_config",
    "reload_config",
    "PROJECT_ROOT",
    "DEFAULT_NOTES_PATH",
    "DEFAULT_CORS_ORIGINS",
]
