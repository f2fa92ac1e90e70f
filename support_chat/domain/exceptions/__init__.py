"""
DOMAIN EXCEPTIONS - Typed application errors

Every AppError carries the HTTP status the presentation layer answers with.
Anything that is not an AppError is an unclassified failure.
"""

from support_chat.domain.exceptions.app_error import AppError
from support_chat.domain.exceptions.entity_not_found import EntityNotFoundError
from support_chat.domain.exceptions.provider_errors import (
    ProviderBusyError,
    ProviderMisconfiguredError,
    ReplyGenerationError,
    UpstreamUnavailableError,
)
from support_chat.domain.exceptions.chat_processing_error import ChatProcessingError
from support_chat.domain.exceptions.storage_error import StorageError

__all__ = [
    "AppError",
    "EntityNotFoundError",
    "ProviderBusyError",
    "ProviderMisconfiguredError",
    "ReplyGenerationError",
    "UpstreamUnavailableError",
    "ChatProcessingError",
    "StorageError",
]
