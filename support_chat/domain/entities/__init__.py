"""
ENTITIES - Business objects with identity

Each entity:
- Has a unique identifier
- Pure Python dataclasses (no ORM, no Pydantic)
"""

from support_chat.domain.entities.conversation import Conversation
from support_chat.domain.entities.message import Message

__all__ = [
    "Conversation",
    "Message",
]
