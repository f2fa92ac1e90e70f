"""
Chat API Router - FastAPI endpoints for the support chat widget.

Thin layer: validates the request body, builds a Command/Query and hands it to
the handler injected by Dishka. Typed AppErrors raised below bubble up to the
exception handlers registered in fastapi_app.py.

Flow:
  HTTP Request → Router → Command → Handler → Repository / ReplyGenerator
                                 ↓
  HTTP Response ← Router ← Result ←
"""

from logging import getLogger
from typing import Any, ClassVar, Optional

from fastapi import APIRouter, status
from dishka.integrations.fastapi import FromDishka, inject
from pydantic import BaseModel, Field, field_validator

from support_chat.application.commands.chat import (
    SendMessageCommand,
    SendMessageHandler,
)
from support_chat.application.queries.chat import (
    GetChatHistoryQuery,
    GetChatHistoryHandler,
)
from support_chat.application.dto.chat import (
    ConversationData,
    MessageDTO,
    SendMessageData,
)
from support_chat.config.settings import Config

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class SendMessageRequest(BaseModel):
    """
    Request body for POST /api/chat/message.

    {
        "message": "Where is my order?",
        "sessionId": "uuid"            # optional
    }

    The length bound comes from max_message_length; create_chat_router()
    derives a subclass carrying the app's configured limit.
    """

    max_message_length: ClassVar[int] = Config.MAX_MESSAGE_LENGTH

    message: Any = Field(default=None, validate_default=True)
    sessionId: Any = None

    @field_validator("message", mode="before")
    @classmethod
    def validate_message(cls, value):
        if value is None:
            raise ValueError("Message cannot be empty")
        if not isinstance(value, str):
            raise ValueError("Message must be a string")
        value = value.strip()
        if not value:
            raise ValueError("Message cannot be empty")
        if len(value) > cls.max_message_length:
            raise ValueError(
                f"Message cannot exceed {cls.max_message_length} characters"
            )
        return value

    @field_validator("sessionId", mode="before")
    @classmethod
    def validate_session_id(cls, value) -> Optional[str]:
        if value is None or value == "":
            return None
        if not isinstance(value, str):
            raise ValueError("Session ID must be a string")
        return value


class SendMessageResponse(BaseModel):
    status: str = "success"
    data: SendMessageData


class ConversationResponse(BaseModel):
    status: str = "success"
    data: ConversationData


# ==================== ROUTER ====================


def create_chat_router(config: type[Config] = Config) -> APIRouter:
    """Chat endpoints validated against `config` (message length bound)."""

    class ChatMessageRequest(SendMessageRequest):
        max_message_length = config.MAX_MESSAGE_LENGTH

    router = APIRouter(prefix="/api/chat", tags=["chat"])

    @router.post(
        "/message",
        response_model=SendMessageResponse,
        status_code=status.HTTP_200_OK,
    )
    @inject
    async def send_message(
        request: ChatMessageRequest,
        handler: FromDishka[SendMessageHandler],
    ):
        """Answer one user message, creating a conversation when needed."""
        command = SendMessageCommand(
            content=request.message,
            session_id=request.sessionId,
        )
        result = await handler.execute(command)

        return SendMessageResponse(
            data=SendMessageData(
                reply=result.reply,
                sessionId=result.conversation_id.value,
            )
        )

    @router.get(
        "/conversation/{session_id}",
        response_model=ConversationResponse,
        status_code=status.HTTP_200_OK,
    )
    @inject
    async def get_conversation(
        session_id: str,
        handler: FromDishka[GetChatHistoryHandler],
    ):
        """
        Full transcript for a session, oldest first.

        Raises EntityNotFoundError (404) when the session id names no conversation.
        """
        result = await handler.execute(GetChatHistoryQuery(session_id=session_id))

        return ConversationResponse(
            data=ConversationData(
                sessionId=result.conversation.id.value,
                messages=[MessageDTO.from_entity(m) for m in result.messages],
            )
        )

    return router
