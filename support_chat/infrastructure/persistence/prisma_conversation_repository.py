"""
Prisma Conversation Repository Implementation.

- Implements ConversationRepository port from domain layer
- Uses Prisma client for database operations
- Maps between Prisma models and domain entities

Prisma Conversation Model (prisma/schema.prisma):
    model Conversation {
        id         String    @id @default(uuid())
        created_at DateTime  @default(now())
        messages   Message[]
    }
"""

from typing import TYPE_CHECKING, Optional
from prisma.errors import PrismaError
from support_chat.domain.entities.conversation import Conversation
from support_chat.domain.exceptions import StorageError
from support_chat.domain.ports.repositories import ConversationRepository
from support_chat.domain.value_objects.conversation_id import ConversationId

if TYPE_CHECKING:
    from prisma import Prisma
    from prisma.models import Conversation as PrismaConversation


class PrismaConversationRepository(ConversationRepository):
    _prisma: "Prisma"

    def __init__(self, prisma: "Prisma"):
        self._prisma = prisma

    def _to_entity(self, record: "PrismaConversation") -> Conversation:
        """Map Prisma record to domain entity."""
        return Conversation(
            id=ConversationId(record.id),
            created_at=record.created_at,
        )

    async def get_by_id(
        self, conversation_id: ConversationId
    ) -> Optional[Conversation]:
        """Get conversation by ID."""
        record = await self._prisma.conversation.find_unique(
            where={"id": conversation_id.value}
        )
        return self._to_entity(record) if record else None

    async def exists(self, conversation_id: ConversationId) -> bool:
        count = await self._prisma.conversation.count(
            where={"id": conversation_id.value}
        )
        return count > 0

    async def save(self, conversation: Conversation) -> None:
        """Create the conversation row (conversations are never updated)."""
        try:
            await self._prisma.conversation.create(
                data={
                    "id": conversation.id.value,
                    "created_at": conversation.created_at,
                }
            )
        except PrismaError as e:
            raise StorageError(
                f"Could not create conversation {conversation.id.value}: {e}"
            ) from e
