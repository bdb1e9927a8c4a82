"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - DATABASE_URL (or POSTGRES_URL) is required; absence is startup-fatal
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Missing required settings surface as ConfigurationError, not a raw
      pydantic ValidationError, so the lifespan fails with a clear code
"""

from functools import lru_cache

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = Field(
        validation_alias=AliasChoices("database_url", "postgres_url"),
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres provides postgres(ql):// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str):
            for prefix in ("postgresql://", "postgres://"):
                if v.startswith(prefix):
                    return v.replace(prefix, "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Auth
    auth_secret: str = "dev-secret-change-me"
    session_cookie_name: str = "session"
    session_max_age_seconds: int = 30 * 24 * 60 * 60
    public_path_prefixes: list[str] = ["/api/"]

    # Invoices
    # Deletion is refused unless explicitly enabled (see DESIGN.md, open question)
    invoice_delete_enabled: bool = False

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as e:
        missing = ", ".join(
            str(err["loc"][0]) for err in e.errors() if err["loc"]
        )
        raise ConfigurationError(
            f"Invalid or missing configuration: {missing or e}",
        ) from e
