"""
GetChatHistory Query - Get a conversation with its full transcript.

Used by the frontend to reload a chat window for a stored session id.
"""

from dataclasses import dataclass
from typing import Optional

from support_chat.application.common.interfaces import Query, QueryHandler
from support_chat.domain.entities.conversation import Conversation
from support_chat.domain.entities.message import Message
from support_chat.domain.exceptions import EntityNotFoundError
from support_chat.domain.ports.repositories import ConversationRepository, MessageRepository
from support_chat.domain.value_objects.conversation_id import ConversationId


@dataclass
class GetChatHistoryResult:
    """Result containing conversation metadata and messages."""

    conversation: Conversation
    messages: list[Message]


@dataclass(frozen=True)
class GetChatHistoryQuery(Query[GetChatHistoryResult]):
    session_id: str
    limit: Optional[int] = None


class GetChatHistoryHandler(QueryHandler[GetChatHistoryResult]):
    def __init__(
        self,
        conv_repo: ConversationRepository,
        msg_repo: MessageRepository,
    ):
        self._conv_repo = conv_repo
        self._msg_repo = msg_repo

    async def execute(self, query: GetChatHistoryQuery) -> GetChatHistoryResult:
        """
        Get conversation with chat history.

        Raises:
            EntityNotFoundError: If the session id names no conversation
        """
        conversation_id = ConversationId.try_parse(query.session_id)
        conversation = (
            await self._conv_repo.get_by_id(conversation_id) if conversation_id else None
        )
        if not conversation:
            raise EntityNotFoundError("Conversation not found")

        messages = await self._msg_repo.get_by_conversation(
            conversation.id, limit=query.limit
        )

        return GetChatHistoryResult(
            conversation=conversation,
            messages=messages,
        )
