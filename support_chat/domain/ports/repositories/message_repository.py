"""
Message Repository Port - Interface for message persistence.
Implementations: support_chat/infrastructure/persistence/
"""

from abc import ABC, abstractmethod
from typing import Optional

from support_chat.domain.entities.message import Message
from support_chat.domain.value_objects.conversation_id import ConversationId


class MessageRepository(ABC):
    @abstractmethod
    async def get_by_conversation(
        self, conversation_id: ConversationId, limit: Optional[int] = None
    ) -> list[Message]:
        """Messages oldest first; with a limit, the most recent `limit` of them."""
        ...

    @abstractmethod
    async def save(self, message: Message) -> None:
        """Append a message. Fails if its conversation does not exist."""
        ...
