"""
Rate limiting (slowapi).

One limit for every route except health and metrics: RATE_LIMIT_MAX_REQUESTS
per RATE_LIMIT_WINDOW_MS, keyed by client address, moving window.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from support_chat.config.settings import Config

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


def window_limit(config: type[Config] = Config) -> str:
    seconds = max(1, config.RATE_LIMIT_WINDOW_MS // 1000)
    return f"{config.RATE_LIMIT_MAX_REQUESTS} per {seconds} seconds"


def create_limiter(config: type[Config] = Config) -> Limiter:
    return Limiter(
        key_func=get_remote_address,
        default_limits=[window_limit(config)],
        strategy="moving-window",
        enabled=config.RATE_LIMIT_ENABLED,
    )


# SlowAPIMiddleware calls this without awaiting it, so it must stay sync
def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning(
        "Rate limit exceeded for %s on %s", get_remote_address(request), request.url.path
    )
    return JSONResponse(
        status_code=429,
        content={"status": "error", "message": RATE_LIMIT_MESSAGE, "statusCode": 429},
    )
