"""Public schema exports."""

from .auth import IdTokenClaims, TokenInfo, TokenResponse

__all__ = ["IdTokenClaims", "TokenInfo", "TokenResponse"]
