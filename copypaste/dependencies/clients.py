"""
Factory functions to provide shared clients and services as FastAPI dependencies.

Process-wide collaborators are cached factories; request-scoped services take
their collaborators through ``Depends`` so tests can override any of them.
"""

from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends, Request
from fastapi.templating import Jinja2Templates

from copypaste.clients import DynamoDBClient, GoogleOAuthClient, SQLiteStore
from copypaste.core.config import AppSettings, get_settings
from copypaste.dependencies.config import get_app_settings
from copypaste.services import (
    MessageService,
    SessionState,
    TokenCipherService,
    TokenValidator,
)
from copypaste.services.messages import RecordStore

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


@lru_cache()
def _settings() -> AppSettings:
    """Internal helper to cache settings for client factories."""
    return get_settings()


@lru_cache()
def get_google_oauth_client() -> GoogleOAuthClient:
    """Create a singleton Google OAuth client."""
    settings = _settings()
    return GoogleOAuthClient(settings.google, settings.oauth)


@lru_cache()
def get_token_cipher_service() -> TokenCipherService:
    """Provide symmetric encryption helper for tokens kept in the session."""
    settings = _settings()
    secret = settings.security.token_encryption_secret or settings.google.client_secret
    return TokenCipherService(secret=secret)


@lru_cache()
def get_record_store() -> RecordStore:
    """Provide the datastore selected by ``STORAGE_BACKEND``."""
    storage = _settings().storage
    if storage.backend == "dynamodb":
        return DynamoDBClient(storage)
    return SQLiteStore(storage.sqlite_path)


@lru_cache()
def get_templates() -> Jinja2Templates:
    """Provide the page template renderer."""
    return Jinja2Templates(directory=str(TEMPLATES_DIR))


def get_session_state(
    request: Request,
    cipher: Annotated[TokenCipherService, Depends(get_token_cipher_service)],
) -> SessionState:
    """Wrap the current request's cookie session."""
    return SessionState(request.session, cipher)


def get_message_service(
    store: Annotated[RecordStore, Depends(get_record_store)],
) -> MessageService:
    """Build a message service over the configured datastore."""
    return MessageService(store)


def get_token_validator(
    oauth_client: Annotated[GoogleOAuthClient, Depends(get_google_oauth_client)],
    settings: Annotated[AppSettings, Depends(get_app_settings)],
) -> TokenValidator:
    """Build a bearer token validator expecting the configured audience."""
    return TokenValidator(oauth_client, expected_audience=settings.google.expected_audience)


__all__ = [
    "get_google_oauth_client",
    "get_message_service",
    "get_record_store",
    "get_session_state",
    "get_templates",
    "get_token_cipher_service",
    "get_token_validator",
]
