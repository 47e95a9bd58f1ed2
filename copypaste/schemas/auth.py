"""Schemas for payloads returned by Google's OAuth endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class TokenResponse(BaseModel):
    """Body returned by the token endpoint after a code exchange."""

    access_token: str
    token_type: Optional[str] = None
    expires_in: Optional[int] = None
    id_token: str = ""


class TokenInfo(BaseModel):
    """Body returned by the tokeninfo introspection endpoint."""

    model_config = ConfigDict(extra="ignore")

    issued_to: Optional[str] = None
    audience: Optional[str] = None
    user_id: Optional[str] = None
    scope: Optional[str] = None
    expires_in: Optional[int] = None
    access_type: Optional[str] = None
    error: Optional[str] = None


class IdTokenClaims(BaseModel):
    """Subset of the ID token claim set used by the server."""

    sub: str = Field(..., min_length=1, validation_alias=AliasChoices("sub", "Sub"))


__all__ = ["IdTokenClaims", "TokenInfo", "TokenResponse"]
