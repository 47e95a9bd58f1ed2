"""
Google OAuth utilities.

Thin wrappers over the token, revoke and tokeninfo endpoints used by the
sign-in flow and by bearer-token validation.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from fastapi import status
from pydantic import ValidationError

from copypaste.core.config import GoogleSettings, OAuthSettings
from copypaste.core.errors import ExternalServiceError
from copypaste.schemas import TokenInfo, TokenResponse

logger = logging.getLogger(__name__)


class OAuthTokenExchangeError(ExternalServiceError):
    """Raised when the token endpoint returns an error."""


class GoogleOAuthClient:
    """Exchange authorization codes, revoke tokens and introspect bearer tokens."""

    def __init__(
        self,
        google_settings: GoogleSettings,
        oauth_settings: OAuthSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._google = google_settings
        self._oauth = oauth_settings
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._oauth.http_timeout_seconds, transport=self._transport
        )

    async def exchange_authorization_code(self, code: str) -> TokenResponse:
        """Exchange a one-time authorization code for an access token and ID token."""
        payload = {
            "code": code,
            "client_id": self._google.client_id,
            "client_secret": self._google.client_secret,
            "redirect_uri": self._oauth.redirect_uri,
            "grant_type": "authorization_code",
        }

        try:
            async with self._client() as client:
                response = await client.post(self._oauth.token_url, data=payload)
        except httpx.HTTPError as exc:
            raise OAuthTokenExchangeError(f"Exchanging code: {exc}") from exc

        if response.status_code != status.HTTP_200_OK:
            raise OAuthTokenExchangeError(response.text)

        try:
            token = TokenResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise OAuthTokenExchangeError(f"Decoding access token: {exc}") from exc

        logger.info("Exchanged authorization code (token type %s)", token.token_type)
        return token

    async def revoke_token(self, token: str) -> None:
        """Revoke ``token``. Only a failed request is an error; the body is ignored."""
        try:
            async with self._client() as client:
                response = await client.get(self._oauth.revoke_url, params={"token": token})
        except httpx.HTTPError as exc:
            raise ExternalServiceError(f"Revoking token: {exc}") from exc

        if response.status_code != status.HTTP_200_OK:
            logger.warning("Token revocation returned status %s", response.status_code)

    async def fetch_token_info(self, token: str) -> TokenInfo:
        """Look up who ``token`` was issued to."""
        try:
            async with self._client() as client:
                response = await client.get(
                    self._oauth.tokeninfo_url, params={"access_token": token}
                )
        except httpx.HTTPError as exc:
            raise ExternalServiceError(f"Failed to validate token with error: {exc}") from exc

        try:
            return TokenInfo.model_validate_json(response.content)
        except ValidationError as exc:
            raise ExternalServiceError(f"Decoding validation response: {exc}") from exc


__all__ = ["GoogleOAuthClient", "OAuthTokenExchangeError"]
