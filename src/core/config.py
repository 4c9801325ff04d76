"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "CHANGE-ME-IN-PRODUCTION"


class Settings(BaseSettings):
    """DevNet settings, read from the environment or a ``.env`` file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="DevNet API")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000)

    # Document store
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/devnet",
        description="Async SQLAlchemy connection URL",
    )
    database_behind_pooler: bool = Field(
        default=False,
        description="Disable asyncpg statement caching for transaction-mode poolers",
    )
    auto_create_tables: bool = Field(
        default=True,
        description="Create the users, profiles and posts tables on startup",
    )

    # Session tokens
    jwt_secret_key: str = Field(default=DEFAULT_JWT_SECRET)
    jwt_algorithm: str = Field(default="HS256")
    jwt_expire_minutes: int = Field(
        default=6000,
        description="Session token lifetime; tokens cannot be revoked early",
    )
    auth_header_name: str = Field(
        default="x-auth-token",
        description="Request header carrying the session token",
    )

    # Avatars
    gravatar_base_url: str = Field(default="https://www.gravatar.com/avatar")

    # Rate limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable/disable rate limiting (disable for tests)",
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000",
        description="Comma-separated list of allowed origins",
    )

    @model_validator(mode="after")
    def _require_real_secret_in_production(self) -> "Settings":
        if self.is_production and self.jwt_secret_key == DEFAULT_JWT_SECRET:
            raise ValueError("JWT_SECRET_KEY must be set in production")
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """The database URL with an async driver.

        Hosting providers hand out ``postgres://`` or ``postgresql://`` URLs;
        the async engine needs ``postgresql+asyncpg://``.
        """
        url = self.database_url
        for scheme in ("postgres://", "postgresql://"):
            if url.startswith(scheme):
                return "postgresql+asyncpg://" + url[len(scheme):]
        return url

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
