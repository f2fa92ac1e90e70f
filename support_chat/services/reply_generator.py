"""
Reply generator - one assistant turn per call.

Builds the provider message list (system prompt + stored transcript + the new
user message), makes exactly one completion request, and turns whatever comes
back into plain text. Provider failures are translated into typed AppErrors so
the API layer can answer with the right status code.
"""

import logging
import re
import socket
from typing import Callable, Optional, TypedDict

import httpx
from httpx import Timeout
from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AuthenticationError,
    PermissionDeniedError,
    RateLimitError,
)

from support_chat.config.settings import Config
from support_chat.domain.exceptions import (
    AppError,
    ProviderBusyError,
    ProviderMisconfiguredError,
    ReplyGenerationError,
    UpstreamUnavailableError,
)
from support_chat.observability.metrics import increment_error, MetricsErrorType
from support_chat.prompts.chat import FALLBACK_REPLY, SYSTEM_PROMPT
from support_chat.services.llm_client import EchoChatClient, chat_completion, create_client
from support_chat.utils.completion_text import extract_reply_text

logger = logging.getLogger(__name__)

NETWORK_ERROR_PATTERN = re.compile(
    r"network|timeout|ECONNREFUSED|ENOTFOUND|connection refused|name resolution",
    re.IGNORECASE,
)

NETWORK_EXCEPTIONS = (
    APIConnectionError,
    APITimeoutError,
    httpx.TransportError,
    ConnectionError,
    TimeoutError,
    socket.gaierror,
)


class ChatTurn(TypedDict):
    role: str
    content: str


def _status_of(exc: Exception) -> Optional[int]:
    if isinstance(exc, APIStatusError):
        return exc.status_code
    status = getattr(exc, "status_code", None) or getattr(exc, "status", None)
    return status if isinstance(status, int) else None


def classify_provider_error(exc: Exception) -> AppError:
    """Map a provider/transport exception to the AppError the caller sees."""
    if isinstance(exc, AppError):
        return exc

    status = _status_of(exc)

    if isinstance(exc, RateLimitError) or status == 429:
        logger.warning("LLM provider rate limited the request: %s", exc)
        increment_error(MetricsErrorType.LLM_RATE_LIMITED)
        return ProviderBusyError()

    if isinstance(exc, (AuthenticationError, PermissionDeniedError)) or status in (401, 403):
        logger.error("LLM provider rejected the credential: %s", exc)
        increment_error(MetricsErrorType.LLM_AUTH_FAILED)
        return ProviderMisconfiguredError()

    if isinstance(exc, NETWORK_EXCEPTIONS) or NETWORK_ERROR_PATTERN.search(str(exc)):
        logger.error("LLM provider unreachable: %s", exc)
        increment_error(MetricsErrorType.LLM_UNREACHABLE)
        return UpstreamUnavailableError()

    logger.error("LLM request failed: %s", exc, exc_info=exc)
    increment_error(MetricsErrorType.LLM_FAILED)
    return ReplyGenerationError()


class ReplyGenerator:
    """
    Produces the assistant reply for a conversation.

    The credential is checked on every call and the provider client is built
    once per credential. Without a credential, non-production modes answer
    through a local echo client; production refuses.
    """

    def __init__(
        self,
        config: type[Config] = Config,
        client_factory: Optional[Callable[..., object]] = None,
    ):
        self.config = config
        self._client_factory = client_factory or create_client
        self._client = None
        self._client_key = None
        self._echo_client = EchoChatClient()
        self._timeout = Timeout(config.LLM_TIMEOUT, connect=config.LLM_CONNECT_TIMEOUT)

    def _get_client(self):
        api_key = (self.config.LLM_API_KEY or "").strip()
        if not api_key:
            if self.config.is_production():
                raise ProviderMisconfiguredError(
                    "AI provider misconfigured: GROQ_API_KEY is missing"
                )
            logger.warning(
                "No LLM API key configured, answering with the local echo client"
            )
            return self._echo_client

        if self._client is None or self._client_key != api_key:
            self._client = self._client_factory(
                api_key, base_url=self.config.LLM_BASE_URL, timeout=self._timeout
            )
            self._client_key = api_key
        return self._client

    def build_messages(self, history: list[ChatTurn], user_message: str) -> list[dict]:
        messages = [{"role": "system", "content": SYSTEM_PROMPT}]
        messages.extend({"role": t["role"], "content": t["content"]} for t in history)
        messages.append({"role": "user", "content": user_message})
        return messages

    async def generate_reply(self, history: list[ChatTurn], user_message: str) -> str:
        client = self._get_client()
        messages = self.build_messages(history, user_message)

        try:
            completion = await chat_completion(
                client=client,
                messages=messages,
                model=self.config.LLM_MODEL,
                temperature=self.config.LLM_TEMPERATURE,
                max_tokens=self.config.MAX_TOKENS,
                timeout=self._timeout,
            )
        except Exception as e:
            raise classify_provider_error(e) from e

        if not self.config.is_production():
            logger.debug("Raw LLM completion: %r", completion)

        reply = extract_reply_text(completion)
        if not reply:
            logger.warning("LLM returned no usable text, sending fallback reply")
            increment_error(MetricsErrorType.LLM_EMPTY_REPLY)
            return FALLBACK_REPLY
        return reply
