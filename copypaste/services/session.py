"""Typed access to the values kept in the signed session cookie."""

from __future__ import annotations

import secrets
from typing import Any, MutableMapping, Optional

from copypaste.core.errors import InvalidStateError
from copypaste.services.token_cipher import TokenCipherService


class SessionState:
    """Per-user transient state: anti-forgery token, access token, Google+ ID.

    Being connected means an access token is stored; the Google+ ID stays
    behind on disconnect, like the cookie it lives in.
    """

    STATE_KEY = "state"
    ACCESS_TOKEN_KEY = "accessToken"
    GPLUS_ID_KEY = "gplusID"

    def __init__(self, values: MutableMapping[str, Any], cipher: TokenCipherService) -> None:
        self._values = values
        self._cipher = cipher

    @property
    def state(self) -> Optional[str]:
        return self._values.get(self.STATE_KEY)

    def issue_state(self, token: str) -> None:
        self._values[self.STATE_KEY] = token

    def verify_state(self, candidate: Optional[str]) -> None:
        """Raise ``InvalidStateError`` unless ``candidate`` matches the stored state.

        The state is left in place so the page can connect and disconnect
        repeatedly without being reloaded.
        """
        expected = self.state
        if not expected or not candidate:
            raise InvalidStateError("Invalid state parameter")
        if not secrets.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8")):
            raise InvalidStateError("Invalid state parameter")

    @property
    def access_token(self) -> Optional[str]:
        encrypted = self._values.get(self.ACCESS_TOKEN_KEY)
        if not encrypted:
            return None
        return self._cipher.decrypt(encrypted)

    @property
    def gplus_id(self) -> Optional[str]:
        return self._values.get(self.GPLUS_ID_KEY)

    def is_connected_as(self, gplus_id: str) -> bool:
        return bool(self._values.get(self.ACCESS_TOKEN_KEY)) and self.gplus_id == gplus_id

    def connect(self, access_token: str, gplus_id: str) -> None:
        self._values[self.ACCESS_TOKEN_KEY] = self._cipher.encrypt(access_token)
        self._values[self.GPLUS_ID_KEY] = gplus_id

    def clear_access_token(self) -> None:
        self._values.pop(self.ACCESS_TOKEN_KEY, None)


__all__ = ["SessionState"]
