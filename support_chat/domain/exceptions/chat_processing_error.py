"""
ChatProcessingError - Unclassified failure while handling a chat turn.
Maps to: HTTP 500
"""

from support_chat.domain.exceptions.app_error import AppError


class ChatProcessingError(AppError):
    status_code = 500
    default_message = "Failed to process chat message"
