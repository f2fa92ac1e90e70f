from support_chat.services.reply_generator import (
    ChatTurn,
    ReplyGenerator,
    classify_provider_error,
)

__all__ = ["ChatTurn", "ReplyGenerator", "classify_provider_error"]
