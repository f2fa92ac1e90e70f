"""
Conversation Entity - A chat session between a customer and the assistant.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone

from support_chat.domain.value_objects.conversation_id import ConversationId


@dataclass
class Conversation:
    id: ConversationId
    created_at: datetime

    @classmethod
    def create(cls) -> Conversation:
        """Factory method to create a new, empty Conversation."""
        return cls(id=ConversationId.generate(), created_at=datetime.now(timezone.utc))
