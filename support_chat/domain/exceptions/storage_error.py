"""
StorageError - Raised by a conversation store that cannot complete a write.

Not an AppError: callers only ever see it as a generic processing failure.
"""


class StorageError(Exception):
    """Exception raised when the conversation store rejects an operation."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
