"""Runtime configuration.

Values come from ``AUTHBASE_*`` environment variables, then from a ``.env``
file in the working directory, then from the defaults below. The JWT secret
has no default: the service refuses to start without it, but the settings
object itself can be built without one so that CLI commands like ``info``
still work.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["development", "production", "testing"]


class Settings(BaseSettings):
    """authbase settings, validated once when first loaded."""

    model_config = SettingsConfigDict(
        env_prefix="AUTHBASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "authbase"
    app_version: str = "0.1.0"
    environment: Environment = "development"
    debug: bool = False
    api_prefix: str = "/api/v1"

    # HTTP server
    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)
    workers: int = Field(default=1, ge=1)

    # User store
    database_url: str = "sqlite+aiosqlite:///./data/authbase.db"
    db_echo: bool = False
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600

    # Tokens and credentials
    jwt_secret: str | None = Field(
        default=None,
        description="HMAC secret shared by access and refresh tokens",
    )
    jwt_algorithm: Literal["HS256", "HS384", "HS512"] = "HS256"
    access_token_expire_minutes: int = Field(default=15, gt=0)
    refresh_token_expire_days: int = Field(default=7, gt=0)
    password_hash_rounds: int = Field(
        default=12,
        ge=4,
        le=31,
        description="bcrypt cost factor for new password hashes",
    )

    # Refresh-token session store
    session_store: Literal["redis", "memory"] = "redis"
    redis_url: str = "redis://localhost:6379/0"
    redis_socket_timeout: float = Field(default=5.0, gt=0)

    # CORS
    cors_origins: list[str] = Field(default=["http://localhost:3000", "http://localhost:8000"])
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = Field(default=["*"])
    cors_allow_headers: list[str] = Field(default=["*"])

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    @field_validator("cors_origins", "cors_allow_methods", "cors_allow_headers", mode="before")
    @classmethod
    def split_comma_list(cls, v: str | list[str]) -> list[str]:
        """Accept ``"a, b"`` as well as a JSON list."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("jwt_secret", mode="before")
    @classmethod
    def blank_secret_is_unset(cls, v: str | None) -> str | None:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        return self.environment == "testing"

    @property
    def access_token_ttl_seconds(self) -> int:
        return self.access_token_expire_minutes * 60

    @property
    def refresh_token_ttl_seconds(self) -> int:
        return self.refresh_token_expire_days * 86400


@lru_cache
def get_settings() -> Settings:
    """Load settings from the environment once per process."""
    return Settings()
