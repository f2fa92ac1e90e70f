"""
In-memory conversation store.

Used when no database is configured (local development) and by the test
suite. One InMemoryStore is shared by the whole process; the repositories are
thin per-request views over it, mirroring the Prisma repositories.
"""

import asyncio
import logging
from typing import Optional

from support_chat.domain.entities.conversation import Conversation
from support_chat.domain.entities.message import Message
from support_chat.domain.exceptions import StorageError
from support_chat.domain.ports.repositories import (
    ConversationRepository,
    MessageRepository,
)
from support_chat.domain.value_objects.conversation_id import ConversationId

logger = logging.getLogger(__name__)


class InMemoryStore:
    """Conversations and their messages, kept in insertion order."""

    def __init__(self):
        self._conversations: dict[str, Conversation] = {}
        self._messages: dict[str, list[Message]] = {}
        self._lock = asyncio.Lock()

    async def put_conversation(self, conversation: Conversation) -> None:
        async with self._lock:
            key = conversation.id.value
            self._conversations[key] = conversation
            self._messages.setdefault(key, [])

    async def get_conversation(self, conversation_id: str) -> Optional[Conversation]:
        return self._conversations.get(conversation_id)

    async def append_message(self, message: Message) -> None:
        async with self._lock:
            key = message.conversation_id.value
            if key not in self._conversations:
                raise StorageError(f"Conversation {key} does not exist")
            messages = self._messages[key]
            # Stable sort keeps insertion order for equal timestamps
            messages.append(message)
            messages.sort(key=lambda m: m.created_at)

    async def list_messages(self, conversation_id: str) -> list[Message]:
        return list(self._messages.get(conversation_id, []))

    def stats(self) -> dict[str, int]:
        """Conversation and message counts, for inspection (tests, debugging)."""
        return {
            "conversations": len(self._conversations),
            "messages": sum(len(msgs) for msgs in self._messages.values()),
        }


class InMemoryConversationRepository(ConversationRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def get_by_id(
        self, conversation_id: ConversationId
    ) -> Optional[Conversation]:
        return await self._store.get_conversation(conversation_id.value)

    async def exists(self, conversation_id: ConversationId) -> bool:
        return await self._store.get_conversation(conversation_id.value) is not None

    async def save(self, conversation: Conversation) -> None:
        await self._store.put_conversation(conversation)
        logger.debug("Created conversation %s", conversation.id.value)


class InMemoryMessageRepository(MessageRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def get_by_conversation(
        self, conversation_id: ConversationId, limit: Optional[int] = None
    ) -> list[Message]:
        messages = await self._store.list_messages(conversation_id.value)
        if limit is not None:
            messages = messages[-limit:] if limit > 0 else []
        return messages

    async def save(self, message: Message) -> None:
        await self._store.append_message(message)
