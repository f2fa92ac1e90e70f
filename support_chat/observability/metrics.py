"""
Prometheus Metrics for the support chat backend.

METRIC TYPES:
    - Counter: Value only goes up (total count, e.g., errors)
    - Histogram: Distribution (for percentiles like P95, e.g., latency)
"""

from prometheus_client import (
    Histogram,
    Counter,
    generate_latest,
    CONTENT_TYPE_LATEST,
)


# =============================================================================
# METRICS DEFINITIONS
# =============================================================================
REQUEST_LATENCY = Histogram(
    "http_server_request_duration_seconds",
    "Http request latency in seconds",
    ["method", "route", "http_status_code"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, 30],
)

LLM_TOKENS_TOTAL = Histogram(
    "chat_llm_tokens_total",
    "Total number of LLM tokens used",
    ["type", "model"],
    buckets=[50, 100, 250, 500, 1000, 2000, 5000, 10000],
)

ERRORS_TOTAL = Counter(
    "chat_errors_total",
    "Total number of errors by type",
    ["error_type"],
)


# =============================================================================
# LABEL CONSTANTS
# =============================================================================
class MetricsErrorType:
    """Error type labels for chat_errors_total metric."""

    LLM_RATE_LIMITED = "llm_rate_limited"
    LLM_AUTH_FAILED = "llm_auth_failed"
    LLM_UNREACHABLE = "llm_unreachable"
    LLM_FAILED = "llm_failed"
    LLM_EMPTY_REPLY = "llm_empty_reply"
    CHAT_FAILED = "chat_failed"


# =============================================================================
# RECORDING FUNCTIONS
# =============================================================================
def observe_request_latency(method: str, route: str, status_code: int, duration: float):
    """Call to record request latency. Integration point: fastapi_app.MetricsMiddleware"""
    REQUEST_LATENCY.labels(
        method=method, route=route, http_status_code=str(status_code)
    ).observe(duration)


def observe_llm_tokens(type: str, model: str, token_count: int):
    """Call to record LLM token usage. Integration point: services/llm_client.py"""
    LLM_TOKENS_TOTAL.labels(type=type, model=model).observe(token_count)


def increment_error(error_type: str):
    """
    Call to record an error occurrence.

    Integration points:
        - services/reply_generator.py: llm_* errors
        - application/commands/chat/send_message.py: chat_failed
    """
    ERRORS_TOTAL.labels(error_type=error_type).inc()


# =============================================================================
# HELPER FOR /metrics ENDPOINT
# =============================================================================
def get_metrics_content():
    """
    Generate Prometheus metrics output.

    Returns:
        Tuple of (content_bytes, content_type_string)
    """
    return generate_latest(), CONTENT_TYPE_LATEST
