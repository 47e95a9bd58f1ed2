"""Domain models."""

from .message import CopyRequest, Message

__all__ = ["CopyRequest", "Message"]
