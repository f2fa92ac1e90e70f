"""
Centralized prompt management.
"""

from support_chat.prompts.chat import SYSTEM_PROMPT, FALLBACK_REPLY

__all__ = ["SYSTEM_PROMPT", "FALLBACK_REPLY"]
