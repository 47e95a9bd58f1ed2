"""
Anti-forgery state tokens and ID token decoding.

``decode_id_token`` does NOT verify the token signature. That is only
acceptable for tokens received directly from Google's token endpoint over TLS
in exchange for our client secret. Tokens handed over by any other party must
be verified before their claims are trusted.
"""

from __future__ import annotations

import base64
import binascii
import secrets

from pydantic import ValidationError

from copypaste.core.errors import MalformedTokenError
from copypaste.schemas import IdTokenClaims

STATE_TOKEN_BYTES = 64


def generate_state_token(length: int = STATE_TOKEN_BYTES) -> str:
    """Return ``length`` random bytes, standard base64 encoded."""
    return base64.b64encode(secrets.token_bytes(length)).decode("ascii")


def _urlsafe_b64decode(segment: str) -> bytes:
    padding = -len(segment) % 4
    return base64.urlsafe_b64decode(segment + "=" * padding)


def decode_id_token(id_token: str) -> str:
    """Return the Google+ ID (``sub`` claim) embedded in ``id_token``."""
    if not id_token:
        raise MalformedTokenError("Malformed ID token: empty token")

    parts = id_token.split(".")
    if len(parts) < 2:
        raise MalformedTokenError("Malformed ID token")

    try:
        payload = _urlsafe_b64decode(parts[1])
        claims = IdTokenClaims.model_validate_json(payload)
    except (binascii.Error, ValueError, ValidationError) as exc:
        raise MalformedTokenError(f"Malformed ID token: {exc}") from exc
    return claims.sub


__all__ = ["STATE_TOKEN_BYTES", "decode_id_token", "generate_state_token"]
