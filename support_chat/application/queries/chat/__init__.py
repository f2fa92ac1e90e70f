"""Chat queries."""

from .get_chat_history import (
    GetChatHistoryHandler,
    GetChatHistoryQuery,
    GetChatHistoryResult,
)

__all__ = [
    "GetChatHistoryHandler",
    "GetChatHistoryQuery",
    "GetChatHistoryResult",
]
