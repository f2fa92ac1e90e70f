"""
SenderRole - who authored a message in a conversation transcript.
"""

from enum import Enum


class SenderRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"

    def to_provider_role(self) -> str:
        """Role name in the LLM provider's chat vocabulary."""
        return "user" if self is SenderRole.USER else "assistant"
