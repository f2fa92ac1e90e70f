"""
Centralized LLM client wrapper (async).

Uses AsyncOpenAI against an OpenAI-compatible endpoint (Groq by default) for
non-blocking LLM calls that don't hold the event loop.

Usage:
    from support_chat.services.llm_client import chat_completion, create_client

    client = create_client(api_key, base_url=Config.LLM_BASE_URL)
    response = await chat_completion(
        client=client,
        messages=[{"role": "user", "content": "Hello"}],
        model="llama3-8b-8192",
    )

One request per call: SDK retries are disabled and there is no fallback
provider.
"""

import logging
from types import SimpleNamespace
from typing import Any, Optional

from httpx import Timeout
from langsmith import traceable
from openai import AsyncOpenAI

from support_chat.observability.metrics import observe_llm_tokens
from support_chat.prompts.chat import DEV_ECHO_TEMPLATE

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = Timeout(40.0, connect=10.0)


def create_client(
    api_key: str,
    base_url: Optional[str] = None,
    timeout: Optional[Timeout] = None,
) -> AsyncOpenAI:
    return AsyncOpenAI(
        api_key=api_key,
        base_url=base_url,
        max_retries=0,
        timeout=timeout or DEFAULT_TIMEOUT,
    )


class _EchoCompletions:
    async def create(self, *, messages: list[dict], model: str = "", **_: Any) -> dict:
        user_message = next(
            (m.get("content") for m in reversed(messages) if m.get("role") == "user"),
            None,
        ) or "Hello"
        return {
            "object": "chat.completion",
            "model": model,
            "choices": [
                {
                    "index": 0,
                    "message": {
                        "role": "assistant",
                        "content": DEV_ECHO_TEMPLATE.format(message=user_message),
                    },
                    "finish_reason": "stop",
                }
            ],
        }


class EchoChatClient:
    """
    Local stand-in for the provider when no credential is configured.

    Exposes the same `client.chat.completions.create(...)` call shape and
    answers with a deterministic echo of the last user message.
    """

    def __init__(self):
        self.chat = SimpleNamespace(completions=_EchoCompletions())


def _record_usage(response: Any, model: str) -> None:
    usage = getattr(response, "usage", None)
    if usage is None and isinstance(response, dict):
        usage = response.get("usage")
    if not usage:
        return
    prompt_tokens = getattr(usage, "prompt_tokens", None)
    completion_tokens = getattr(usage, "completion_tokens", None)
    if isinstance(usage, dict):
        prompt_tokens = usage.get("prompt_tokens")
        completion_tokens = usage.get("completion_tokens")
    if prompt_tokens is not None:
        observe_llm_tokens("input", model, prompt_tokens)
    if completion_tokens is not None:
        observe_llm_tokens("output", model, completion_tokens)


@traceable(run_type="llm", name="chat_completion")
async def chat_completion(
    client,
    messages: list[dict],
    model: str,
    temperature: float = 0.7,
    max_tokens: int = 500,
    timeout: Optional[Timeout] = None,
) -> Any:
    """Basic chat completion.

    Args:
        client: AsyncOpenAI client instance (or EchoChatClient)
        messages: List of message dicts [{"role": "user", "content": "..."}]
        model: Model name (e.g., "llama3-8b-8192")
        temperature: Sampling temperature
        max_tokens: Max tokens to generate
        timeout: Request timeout (default: 40s total, 10s connect)

    Returns:
        The provider's completion object, unparsed
    """
    response = await client.chat.completions.create(
        model=model,
        messages=messages,
        temperature=temperature,
        max_tokens=max_tokens,
        timeout=timeout or DEFAULT_TIMEOUT,
    )
    _record_usage(response, model)
    return response
