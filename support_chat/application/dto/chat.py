"""Chat DTOs for API request/response."""

from datetime import datetime
from pydantic import BaseModel

from support_chat.domain.entities.message import Message


class MessageDTO(BaseModel):
    """DTO for a transcript message returned to the frontend."""

    sender: str
    text: str
    timestamp: datetime

    @classmethod
    def from_entity(cls, message: Message) -> "MessageDTO":
        return cls(
            sender=message.sender.value,
            text=message.text,
            timestamp=message.created_at,
        )


class SendMessageData(BaseModel):
    reply: str
    sessionId: str


class ConversationData(BaseModel):
    sessionId: str
    messages: list[MessageDTO]
