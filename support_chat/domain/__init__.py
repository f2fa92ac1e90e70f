"""
DOMAIN LAYER - Conversations and their messages

This layer contains:
- Entities: Business objects with identity (Conversation, Message)
- Value Objects: Immutable types (ConversationId, MessageId, SenderRole)
- Ports: Interfaces that infrastructure implements
- Exceptions: Typed application errors carrying their HTTP status

RULES:
1. NO framework imports (no FastAPI, Prisma, Pydantic, etc.)
2. NO I/O operations (no database, no HTTP, no file system)
3. Only depends on Python stdlib
"""
