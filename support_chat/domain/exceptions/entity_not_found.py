"""
EntityNotFoundError - Raised when a requested entity does not exist.
Maps to: HTTP 404 Not Found
"""

from support_chat.domain.exceptions.app_error import AppError


class EntityNotFoundError(AppError):
    """Exception raised when a requested entity is not found."""

    status_code = 404
    default_message = "The requested entity was not found."
