"""
Conversation Repository Port - Interface for conversation persistence.
Implementations: support_chat/infrastructure/persistence/
"""

from abc import ABC, abstractmethod
from typing import Optional
from support_chat.domain.entities.conversation import Conversation
from support_chat.domain.value_objects.conversation_id import ConversationId


class ConversationRepository(ABC):
    @abstractmethod
    async def get_by_id(
        self, conversation_id: ConversationId
    ) -> Optional[Conversation]: ...

    @abstractmethod
    async def exists(self, conversation_id: ConversationId) -> bool: ...

    @abstractmethod
    async def save(self, conversation: Conversation) -> None: ...
