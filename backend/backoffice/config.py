"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - SESSION_SECRET has no default: a missing, short or placeholder key fails
      at startup instead of accepting tokens anyone could sign
    - get_settings() is cached (lru_cache) — single instance per process
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_SESSION_SECRET_BYTES = 32
_PLACEHOLDER_SECRETS = ("change-me", "changeme", "secret", "your-secret")


def async_database_url(url: str) -> str:
    """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://backoffice:backoffice@db:5432/backoffice"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        return async_database_url(v) if isinstance(v, str) else v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Session tokens (issued by the identity provider, verified here)
    session_secret: str
    session_algorithm: str = "HS256"
    session_cookie_name: str = "backoffice.session-token"

    @field_validator("session_secret")
    @classmethod
    def reject_weak_secret(cls, v: str) -> str:
        if len(v.encode()) < MIN_SESSION_SECRET_BYTES:
            raise ValueError(
                f"SESSION_SECRET must be at least {MIN_SESSION_SECRET_BYTES} bytes",
            )
        if v.lower().startswith(_PLACEHOLDER_SECRETS):
            raise ValueError("SESSION_SECRET is still a placeholder value")
        return v

    # Object storage
    storage_bucket: str = ""
    storage_region: str = "us-east-1"
    storage_endpoint_url: str | None = None
    storage_folder_prefix: str = ""
    storage_url_ttl_seconds: int = Field(3600, ge=1, le=604_800)
    placeholder_image_path: str = "/placeholder-product.jpg"

    # Business rules
    employee_credit_limit: Decimal = Decimal("300")

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
