"""
Dishka DI Container Setup.

- Registers repositories, the reply generator and command/query handlers
- Maps abstract repository ports to the selected storage backend
- Manages lifecycle (Scope.APP = singleton, Scope.REQUEST = per request)

Storage backends:
  memory → InMemoryStorageProvider (process-local, lost on restart)
  prisma → PrismaStorageProvider (PostgreSQL via prisma-client-py)

Flow:
  Container → provides → MessageRepository → to → SendMessageHandler
                                    ↓
                            InMemory / Prisma implementation
"""

import logging
from typing import Optional

from dishka import AsyncContainer, Provider, Scope, make_async_container, provide

from support_chat.application.commands.chat import SendMessageHandler
from support_chat.application.queries.chat import GetChatHistoryHandler
from support_chat.config.settings import Config
from support_chat.domain.ports.repositories import (
    ConversationRepository,
    MessageRepository,
)
from support_chat.infrastructure.persistence import (
    InMemoryConversationRepository,
    InMemoryMessageRepository,
    InMemoryStore,
)
from support_chat.services.reply_generator import ReplyGenerator

logger = logging.getLogger(__name__)


class AppProvider(Provider):
    """Services and handlers shared by every storage backend."""

    def __init__(self, config: type[Config] = Config):
        super().__init__()
        self.config = config

    # ==================== SERVICES ====================

    @provide(scope=Scope.APP)
    def get_reply_generator(self) -> ReplyGenerator:
        return ReplyGenerator(config=self.config)

    # ==================== HANDLERS ====================

    @provide(scope=Scope.REQUEST)
    def get_send_message_handler(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
        reply_generator: ReplyGenerator,
    ) -> SendMessageHandler:
        return SendMessageHandler(
            conversation_repository, message_repository, reply_generator
        )

    @provide(scope=Scope.REQUEST)
    def get_chat_history_handler(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
    ) -> GetChatHistoryHandler:
        return GetChatHistoryHandler(conversation_repository, message_repository)


class InMemoryStorageProvider(Provider):
    """
    Process-local conversation store.

    The store is app-scoped so every request sees the same conversations.
    Pass an existing store to share it with the caller (tests do).
    """

    def __init__(self, store: Optional[InMemoryStore] = None):
        super().__init__()
        self._store = store

    @provide(scope=Scope.APP)
    def get_store(self) -> InMemoryStore:
        return self._store if self._store is not None else InMemoryStore()

    @provide(scope=Scope.REQUEST)
    def get_conversation_repository(
        self, store: InMemoryStore
    ) -> ConversationRepository:
        return InMemoryConversationRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_message_repository(self, store: InMemoryStore) -> MessageRepository:
        return InMemoryMessageRepository(store)


def storage_provider_for(config: type[Config]) -> Provider:
    if config.STORAGE_BACKEND == "prisma":
        # Needs a generated Prisma client, so only imported when selected
        from support_chat.setup.ioc.prisma_provider import PrismaStorageProvider

        return PrismaStorageProvider()
    if config.STORAGE_BACKEND != "memory":
        raise ValueError(f"Unknown STORAGE_BACKEND: {config.STORAGE_BACKEND}")
    return InMemoryStorageProvider()


def create_container(
    config: type[Config] = Config, *extra_providers: Provider
) -> AsyncContainer:
    """
    Build the app container.

    Providers passed in extra_providers are registered last and override
    earlier registrations of the same type.
    """
    logger.info("Using %s conversation storage", config.STORAGE_BACKEND)
    return make_async_container(
        AppProvider(config),
        storage_provider_for(config),
        *extra_providers,
    )
