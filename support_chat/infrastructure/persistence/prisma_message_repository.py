"""
Prisma Message Repository Implementation.

- Implements MessageRepository port from domain layer
- Uses Prisma client for database operations
- Maps between Prisma models and domain entities

Prisma Message Model (prisma/schema.prisma):
    model Message {
        id              String       @id @default(uuid())
        conversation_id String
        sender          String
        text            String
        created_at      DateTime     @default(now())
        conversation    Conversation @relation(...)
    }

Mapping:
- Prisma: id (str) <-> Domain: id (MessageId)
- Prisma: conversation_id (str) <-> Domain: conversation_id (ConversationId)
- Prisma: sender (str) <-> Domain: sender (SenderRole)
"""

import logging
from typing import TYPE_CHECKING, Optional
from prisma.errors import PrismaError
from support_chat.domain.entities.message import Message
from support_chat.domain.exceptions import StorageError
from support_chat.domain.ports.repositories.message_repository import MessageRepository
from support_chat.domain.value_objects.message_id import MessageId
from support_chat.domain.value_objects.conversation_id import ConversationId
from support_chat.domain.value_objects.sender_role import SenderRole

if TYPE_CHECKING:
    from prisma import Prisma
    from prisma.models import Message as PrismaMessage

logger = logging.getLogger(__name__)


class PrismaMessageRepository(MessageRepository):
    """
    Prisma implementation of MessageRepository.

    Handles persistence of Message entities to PostgreSQL via Prisma.
    """

    _prisma: "Prisma"

    def __init__(self, prisma: "Prisma"):
        """
        Initialize repository with Prisma client.

        Args:
            prisma: Connected Prisma client (injected by DI container)
        """
        self._prisma = prisma

    def _to_entity(self, record: "PrismaMessage") -> Message:
        """Map Prisma record to domain entity."""
        return Message(
            id=MessageId(record.id),
            conversation_id=ConversationId(record.conversation_id),
            sender=SenderRole(record.sender),
            text=record.text,
            created_at=record.created_at,
        )

    async def get_by_conversation(
        self, conversation_id: ConversationId, limit: Optional[int] = None
    ) -> list[Message]:
        """
        Get messages for a conversation, ordered chronologically (oldest first).

        Args:
            conversation_id: ConversationId value object
            limit: Optional maximum number of (most recent) messages to return

        Returns:
            List of Message entities in chronological order (oldest first)
        """
        if limit is None:
            records = await self._prisma.message.find_many(
                where={"conversation_id": conversation_id.value},
                order={"created_at": "asc"},
            )
        else:
            records = await self._prisma.message.find_many(
                where={"conversation_id": conversation_id.value},
                order={"created_at": "desc"},
                take=limit,
            )
            records.reverse()  # Now oldest first
        return [self._to_entity(record) for record in records]

    async def save(self, message: Message) -> None:
        """
        Insert a message.

        Raises:
            StorageError: If the conversation does not exist or the write fails
        """
        try:
            await self._prisma.message.create(
                data={
                    "id": message.id.value,
                    "conversation_id": message.conversation_id.value,
                    "sender": message.sender.value,
                    "text": message.text,
                    "created_at": message.created_at,
                }
            )
        except PrismaError as e:
            logger.error(
                "Failed to save message for conversation %s: %s",
                message.conversation_id.value,
                e,
            )
            raise StorageError(
                f"Could not save message to conversation {message.conversation_id.value}"
            ) from e
