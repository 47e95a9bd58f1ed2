"""
Persistence of the copy/paste record, one per user identifier.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional, Protocol

from copypaste.core.errors import MalformedInputError, MessageNotFoundError
from copypaste.models import Message

logger = logging.getLogger(__name__)

_KIND = "copies"
_SORT_KEY = "message"


class RecordStore(Protocol):
    def put_item(self, item: Dict[str, Any]) -> None: ...

    def get_item(self, *, partition_key: str, sort_key: str) -> Optional[Dict[str, Any]]: ...


class MessageService:
    """Store the latest copied text per identifier (no history, last write wins)."""

    def __init__(self, store: RecordStore, clock: Callable[[], float] = time.time) -> None:
        self._store = store
        self._clock = clock

    @staticmethod
    def _partition_key(identifier: str) -> str:
        return f"{_KIND}#{identifier}"

    def save(self, identifier: str, text: str) -> Message:
        if not identifier:
            raise MalformedInputError("Message identifier must not be empty.")

        message = Message(identifier=identifier, text=text, time=int(self._clock()))
        self._store.put_item(
            {
                "pk": self._partition_key(identifier),
                "sk": _SORT_KEY,
                **message.model_dump(),
            }
        )
        logger.info("Stored message for %s", identifier)
        return message

    def get(self, identifier: str) -> Message:
        record = self._store.get_item(
            partition_key=self._partition_key(identifier), sort_key=_SORT_KEY
        )
        if not record:
            raise MessageNotFoundError(f"No message stored for {identifier}.")
        return Message.model_validate(record)


__all__ = ["MessageService", "RecordStore"]
