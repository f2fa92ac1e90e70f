"""
Message Entity - A single immutable turn in a conversation.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4
from support_chat.domain.value_objects.message_id import MessageId
from support_chat.domain.value_objects.conversation_id import ConversationId
from support_chat.domain.value_objects.sender_role import SenderRole


@dataclass(frozen=True)
class Message:
    id: MessageId
    conversation_id: ConversationId
    sender: SenderRole
    text: str
    created_at: datetime

    def __post_init__(self):
        try:
            role = SenderRole(self.sender)
        except ValueError:
            raise ValueError(f"Invalid sender role: {self.sender}") from None
        object.__setattr__(self, "sender", role)

    @classmethod
    def create(
        cls,
        conversation_id: ConversationId,
        sender: SenderRole,
        text: str,
    ) -> Message:
        """Factory method to create a new Message with a generated ID and timestamp."""
        return cls(
            id=MessageId(str(uuid4())),
            conversation_id=conversation_id,
            sender=sender,
            text=text,
            created_at=datetime.now(timezone.utc),
        )
