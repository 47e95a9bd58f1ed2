"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    get_google_oauth_client,
    get_message_service,
    get_record_store,
    get_session_state,
    get_templates,
    get_token_cipher_service,
    get_token_validator,
)
from .config import SettingsDependency, get_app_settings

__all__ = [
    "SettingsDependency",
    "get_app_settings",
    "get_google_oauth_client",
    "get_message_service",
    "get_record_store",
    "get_session_state",
    "get_templates",
    "get_token_cipher_service",
    "get_token_validator",
]
