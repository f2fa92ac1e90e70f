"""
Prisma storage provider.

Kept apart from container.py because importing `prisma` requires a generated
client (`prisma generate`).
"""

from typing import AsyncIterable

from dishka import Provider, Scope, provide
from prisma import Prisma

from support_chat.domain.ports.repositories import (
    ConversationRepository,
    MessageRepository,
)
from support_chat.infrastructure.persistence.prisma_conversation_repository import (
    PrismaConversationRepository,
)
from support_chat.infrastructure.persistence.prisma_message_repository import (
    PrismaMessageRepository,
)


class PrismaStorageProvider(Provider):
    @provide(scope=Scope.APP)
    async def get_prisma(self) -> AsyncIterable[Prisma]:
        """
        Provide Prisma client (singleton, app-scoped).

        Connected on first use, disconnected when the container closes.
        """
        prisma = Prisma()
        await prisma.connect()
        yield prisma
        await prisma.disconnect()

    @provide(scope=Scope.REQUEST)
    def get_conversation_repository(self, prisma: Prisma) -> ConversationRepository:
        return PrismaConversationRepository(prisma)

    @provide(scope=Scope.REQUEST)
    def get_message_repository(self, prisma: Prisma) -> MessageRepository:
        return PrismaMessageRepository(prisma)
