"""Observability package for the support chat backend."""

from support_chat.observability.metrics import (
    observe_request_latency,
    observe_llm_tokens,
    increment_error,
    get_metrics_content,
    MetricsErrorType,
)

__all__ = [
    "get_metrics_content",
    "observe_request_latency",
    "observe_llm_tokens",
    "increment_error",
    "MetricsErrorType",
]
