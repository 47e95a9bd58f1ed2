"""Service layer exports."""

from .identity import decode_id_token, generate_state_token
from .messages import MessageService
from .session import SessionState
from .token_cipher import TokenCipherService
from .token_validation import TokenValidator

__all__ = [
    "MessageService",
    "SessionState",
    "TokenCipherService",
    "TokenValidator",
    "decode_id_token",
    "generate_state_token",
]
