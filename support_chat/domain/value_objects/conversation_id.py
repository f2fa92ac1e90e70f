"""
ConversationId Value Object - UUID wrapper for conversation identity.

Session ids sent by clients are conversation ids; they are advisory, so a
value that is not a UUID simply names no conversation (see try_parse).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from uuid import UUID, uuid4


@dataclass(frozen=True)
class ConversationId:
    value: str  # conversation_id, presented as UUID string

    def __post_init__(self):
        if not self.value:
            raise ValueError("Conversation ID cannot be empty")
        if not self._is_valid_uuid(self.value):
            raise ValueError(f"Invalid conversation ID (UUID): {self.value}")

    @staticmethod
    def _is_valid_uuid(value: str) -> bool:
        """Check if string is a valid UUID."""
        try:
            UUID(value)
            return True
        except (ValueError, AttributeError, TypeError):
            return False

    @classmethod
    def generate(cls) -> ConversationId:
        return cls(str(uuid4()))

    @classmethod
    def try_parse(cls, value: Optional[str]) -> Optional[ConversationId]:
        """Return a ConversationId for a well-formed value, None otherwise."""
        if not value or not isinstance(value, str):
            return None
        candidate = value.strip()
        if not cls._is_valid_uuid(candidate):
            return None
        return cls(candidate)

    def __str__(self) -> str:
        return self.value
