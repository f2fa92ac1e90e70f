"""
AppError - Base class for classified failures.
Carries a caller-visible message and HTTP status code.
"""


class AppError(Exception):
    """Classified application error with its own status code."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    @property
    def status(self) -> str:
        return "error"
