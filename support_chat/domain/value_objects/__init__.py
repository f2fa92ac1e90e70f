"""
VALUE OBJECTS - Immutable domain types

Each value object:
- Has no identity (compared by value, not by ID)
- Is immutable (frozen dataclass)
- Validates itself on creation
- Pure Python (no framework dependencies)
"""

from support_chat.domain.value_objects.conversation_id import ConversationId
from support_chat.domain.value_objects.message_id import MessageId
from support_chat.domain.value_objects.sender_role import SenderRole

__all__ = [
    "ConversationId",
    "MessageId",
    "SenderRole",
]
