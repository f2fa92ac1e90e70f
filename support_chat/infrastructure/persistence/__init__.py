"""
Persistence Layer - Conversation store implementations.

The in-memory repositories are exported here. The Prisma repositories are
imported by the Prisma storage provider (support_chat/setup/ioc/prisma_provider.py),
which is the only module that needs a generated Prisma client.
"""

from support_chat.infrastructure.persistence.in_memory_store import (
    InMemoryStore,
    InMemoryConversationRepository,
    InMemoryMessageRepository,
)

__all__ = [
    "InMemoryStore",
    "InMemoryConversationRepository",
    "InMemoryMessageRepository",
]
