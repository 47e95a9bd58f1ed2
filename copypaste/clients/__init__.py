"""Expose constructed client wrappers."""

from .dynamodb import DynamoDBClient
from .google_auth import GoogleOAuthClient, OAuthTokenExchangeError
from .sqlite_store import SQLiteStore

__all__ = [
    "DynamoDBClient",
    "GoogleOAuthClient",
    "OAuthTokenExchangeError",
    "SQLiteStore",
]
