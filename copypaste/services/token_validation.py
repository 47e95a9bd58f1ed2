"""
Bearer token validation for clients that call the API directly.

Checking the audience keeps tokens issued to some other application from being
replayed here (the confused deputy problem).
"""

from __future__ import annotations

import logging

from copypaste.clients.google_auth import GoogleOAuthClient
from copypaste.core.errors import TokenValidationError

logger = logging.getLogger(__name__)


class TokenValidator:
    """Resolve a bearer token to the Google user id it was issued for."""

    def __init__(self, oauth_client: GoogleOAuthClient, *, expected_audience: str) -> None:
        self._oauth = oauth_client
        self._expected_audience = expected_audience

    async def validate(self, authorization: str | None) -> str:
        """Return the token's user id, or raise ``TokenValidationError``."""
        token = (authorization or "").strip()
        scheme, _, credentials = token.partition(" ")
        if scheme.lower() == "bearer":
            token = credentials.strip()
        if not token:
            raise TokenValidationError("Missing bearer token.")

        info = await self._oauth.fetch_token_info(token)
        logger.info(
            "Audience: %s, expected audience: %s", info.audience, self._expected_audience
        )
        if info.audience != self._expected_audience:
            raise TokenValidationError("Validating token failed!")
        if not info.user_id:
            raise TokenValidationError("Token info carries no user id.")
        return info.user_id


__all__ = ["TokenValidator"]
