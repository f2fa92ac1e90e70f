"""
LLM provider failures, classified by what the caller can do about them.
"""

from support_chat.domain.exceptions.app_error import AppError


class ProviderBusyError(AppError):
    """Provider rate-limited the request. Maps to: HTTP 429"""

    status_code = 429
    default_message = "AI service is temporarily busy. Please try again in a moment."


class ProviderMisconfiguredError(AppError):
    """Missing or rejected provider credential. Maps to: HTTP 503"""

    status_code = 503
    default_message = (
        "AI provider authentication failed. Please verify the API key/configuration."
    )


class UpstreamUnavailableError(AppError):
    """Provider could not be reached. Maps to: HTTP 502"""

    status_code = 502
    default_message = "Network error contacting AI service. Please try again later."


class ReplyGenerationError(AppError):
    """Any other provider failure. Maps to: HTTP 500"""

    status_code = 500
    default_message = "Failed to generate AI response. Please try again later."
