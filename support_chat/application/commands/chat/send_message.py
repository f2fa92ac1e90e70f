"""
SendMessage Command - Process one chat turn.

Handler:
1. Resolve the session id to a conversation (create one when absent/unknown)
2. Save the trimmed user message
3. Load the full transcript (including that message)
4. Ask the reply generator for the assistant turn
5. Save the assistant message
6. Return reply + conversation id

Session ids are trust-on-first-use: an id that does not resolve is not an
error, it just starts a new conversation.

The steps run strictly in order. If a later step fails, the user message from
step 2 stays persisted.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from support_chat.domain.value_objects.conversation_id import ConversationId
from support_chat.domain.value_objects.sender_role import SenderRole
from support_chat.domain.entities.conversation import Conversation
from support_chat.domain.entities.message import Message
from support_chat.domain.exceptions import AppError, ChatProcessingError
from support_chat.domain.ports.repositories.conversation_repository import ConversationRepository
from support_chat.domain.ports.repositories.message_repository import MessageRepository
from support_chat.application.common.interfaces import Command, CommandHandler
from support_chat.services.reply_generator import ChatTurn, ReplyGenerator
from support_chat.observability.metrics import increment_error, MetricsErrorType

logger = logging.getLogger(__name__)


@dataclass
class SendMessageResult:
    reply: str
    conversation_id: ConversationId


@dataclass(frozen=True)
class SendMessageCommand(Command[SendMessageResult]):
    content: str
    session_id: Optional[str] = None


class SendMessageHandler(CommandHandler[SendMessageResult]):
    def __init__(
        self,
        conv_repo: ConversationRepository,
        msg_repo: MessageRepository,
        reply_generator: ReplyGenerator,
    ):
        self.conv_repo = conv_repo
        self.msg_repo = msg_repo
        self.reply_generator = reply_generator

    async def execute(self, command: SendMessageCommand) -> SendMessageResult:
        try:
            conversation_id = await self._resolve_conversation(command.session_id)
            text = command.content.strip()

            await self.msg_repo.save(
                Message.create(
                    conversation_id=conversation_id,
                    sender=SenderRole.USER,
                    text=text,
                )
            )

            transcript = await self.msg_repo.get_by_conversation(conversation_id)
            history: list[ChatTurn] = [
                {"role": msg.sender.to_provider_role(), "content": msg.text}
                for msg in transcript
            ]

            reply = await self.reply_generator.generate_reply(history, text)

            await self.msg_repo.save(
                Message.create(
                    conversation_id=conversation_id,
                    sender=SenderRole.ASSISTANT,
                    text=reply,
                )
            )
            return SendMessageResult(reply=reply, conversation_id=conversation_id)
        except AppError:
            raise
        except Exception as e:
            logger.exception("Chat turn failed: %s", e)
            increment_error(MetricsErrorType.CHAT_FAILED)
            raise ChatProcessingError() from e

    async def _resolve_conversation(self, session_id: Optional[str]) -> ConversationId:
        conversation_id = ConversationId.try_parse(session_id)
        if conversation_id is not None and await self.conv_repo.exists(conversation_id):
            return conversation_id

        if session_id:
            logger.info("Unknown session id %r, starting a new conversation", session_id)
        conversation = Conversation.create()
        await self.conv_repo.save(conversation)
        return conversation.id
