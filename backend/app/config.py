from functools import lru_cache
from pathlib import Path
from typing import Annotated, List, Literal

from pydantic import AliasChoices, AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_name: str = Field(default="Hearth API", description="Human readable service name")
    environment: str = Field(default="development", description="Deployment environment name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Level for application loggers")

    cors_origins: Annotated[List[AnyHttpUrl], NoDecode] = Field(
        default_factory=lambda: [
            "http://localhost",
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1",
            "http://127.0.0.1:5173",
        ],
        description="List of allowed CORS origins",
    )

    database_user: str = Field(default="hearth", validation_alias=AliasChoices("DB_USER", "database_user"))
    database_password: str = Field(
        default="hearth", validation_alias=AliasChoices("DB_PASSWORD", "database_password")
    )
    database_host: str = Field(default="db", validation_alias=AliasChoices("DB_HOST", "database_host"))
    database_port: int = Field(default=3306, validation_alias=AliasChoices("DB_PORT", "database_port"))
    database_name: str = Field(default="hearth", validation_alias=AliasChoices("DB_NAME", "database_name"))
    database_url_override: str | None = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL", "database_url_override"),
        description="Full SQLAlchemy URL taking precedence over the DB_* fields",
    )

    session_cookie_name: str = Field(default="hearth_session")
    session_cookie_secure: bool = Field(default=False)
    session_cookie_samesite: Literal["lax", "strict", "none"] = Field(default="lax")
    session_ttl_seconds: int = Field(
        default=7 * 24 * 60 * 60,
        description="Lifetime of a server-side session",
    )
    session_cache_url: str | None = Field(
        default=None,
        description="Redis URL used to store sessions; in-process store when unset",
    )

    identity_provider_issuer: str = Field(
        default="https://id.example.com",
        description="Expected issuer of identity tokens",
    )
    identity_provider_authorize_url: str = Field(default="https://id.example.com/authorize")
    identity_provider_logout_url: str = Field(default="https://id.example.com/logout")
    identity_provider_client_id: str = Field(default="hearth")
    identity_callback_url: str = Field(
        default="http://localhost:5000/api/callback",
        description="Redirect URI registered with the identity provider",
    )
    identity_token_secret: str = Field(default="changeme")
    identity_token_algorithm: str = Field(default="HS256")

    feed_default_limit: int = Field(default=20)
    feed_max_limit: int = Field(default=100)
    notifications_default_limit: int = Field(default=20)
    post_max_length: int = Field(default=5000)
    comment_max_length: int = Field(default=2000)

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parents[2] / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return (
            f"mysql+pymysql://{self.database_user}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):  # type: ignore[override]
        if v in (None, "", Ellipsis):
            return v
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        if isinstance(v, (list, tuple, set)):
            return list(v)
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return str(value or "INFO").upper()


@lru_cache
def get_settings() -> Settings:
    return Settings()
