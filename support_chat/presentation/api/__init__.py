"""
API Routers - FastAPI endpoint definitions.
"""

from support_chat.presentation.api.chat import create_chat_router
from support_chat.presentation.api.metrics import router as metrics_router

__all__ = [
    "create_chat_router",
    "metrics_router",
]
