"""
Application configuration models and helpers.

Settings are grouped by concern and composed into ``AppSettings`` so the
FastAPI app, the dependency factories and ``scripts.check_env`` share one
configuration surface.
"""

from functools import lru_cache
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def load_env_file(path: str = ".env") -> None:
    """Load key=value pairs from a .env file; variables already set win."""
    load_dotenv(dotenv_path=path, override=False)


load_env_file()


class _EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore")


class GoogleSettings(_EnvSettings):
    """Google API project credentials."""

    client_id: str = Field(..., alias="GOOGLE_CLIENT_ID")
    client_secret: str = Field(..., alias="GOOGLE_CLIENT_SECRET")
    ios_client_id: Optional[str] = Field(
        None,
        alias="GOOGLE_IOS_CLIENT_ID",
        description="Client id that bearer tokens presented to /paste must be issued to.",
    )
    application_name: str = Field("Copy Paste", alias="APPLICATION_NAME")

    @property
    def expected_audience(self) -> str:
        return self.ios_client_id or self.client_id


class OAuthSettings(_EnvSettings):
    """OAuth endpoint and flow configuration."""

    scope: str = Field("https://www.googleapis.com/auth/plus.login", alias="OAUTH_SCOPE")
    # "postmessage" is the redirect URI for the server-side code flow.
    redirect_uri: str = Field("postmessage", alias="OAUTH_REDIRECT_URI")
    token_url: str = Field("https://accounts.google.com/o/oauth2/token", alias="OAUTH_TOKEN_URL")
    revoke_url: str = Field(
        "https://accounts.google.com/o/oauth2/revoke", alias="OAUTH_REVOKE_URL"
    )
    tokeninfo_url: str = Field(
        "https://www.googleapis.com/oauth2/v1/tokeninfo", alias="OAUTH_TOKENINFO_URL"
    )
    http_timeout_seconds: float = Field(10.0, alias="OAUTH_HTTP_TIMEOUT")


class SessionSettings(_EnvSettings):
    """Cookie session configuration."""

    secret_key: Optional[str] = Field(
        None,
        alias="SESSION_SECRET_KEY",
        description="Signing key for the session cookie. Defaults to the client secret.",
    )
    cookie_name: str = Field("sessionName", alias="SESSION_COOKIE_NAME")
    max_age_seconds: int = Field(14 * 24 * 60 * 60, alias="SESSION_MAX_AGE")
    https_only: bool = Field(False, alias="SESSION_HTTPS_ONLY")


class StorageSettings(_EnvSettings):
    """Datastore selection for copy/paste records."""

    backend: Literal["sqlite", "dynamodb"] = Field("sqlite", alias="STORAGE_BACKEND")
    sqlite_path: str = Field("data/copypaste.db", alias="SQLITE_PATH")
    dynamodb_table_name: Optional[str] = Field(None, alias="DYNAMODB_TABLE_NAME")
    region_name: str = Field("us-east-1", alias="AWS_REGION")

    @model_validator(mode="after")
    def _require_table_for_dynamodb(self) -> "StorageSettings":
        if self.backend == "dynamodb" and not self.dynamodb_table_name:
            raise ValueError("DYNAMODB_TABLE_NAME is required when STORAGE_BACKEND=dynamodb.")
        return self


class SecuritySettings(_EnvSettings):
    """Security-related configuration."""

    token_encryption_secret: Optional[str] = Field(
        None,
        alias="TOKEN_ENCRYPTION_SECRET",
        description="Secret used to derive the key that encrypts tokens kept in the session.",
    )


class AppSettings(_EnvSettings):
    """Root settings object for the FastAPI application."""

    environment: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="APP_LOG_LEVEL")
    google: GoogleSettings = Field(default_factory=GoogleSettings)
    oauth: OAuthSettings = Field(default_factory=OAuthSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "GoogleSettings",
    "OAuthSettings",
    "SecuritySettings",
    "SessionSettings",
    "StorageSettings",
    "get_settings",
    "load_env_file",
]
