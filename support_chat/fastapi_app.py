"""
FastAPI Application Factory.
Creates and configures the FastAPI application with routers, middleware, and DI.

Endpoints:
- POST /api/chat/message, GET /api/chat/conversation/{session_id}
- GET /health, GET /metrics
"""

import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from support_chat.config.logging_config import setup_logging, correlation_id_var
from support_chat.config.settings import Config, get_config
from support_chat.domain.exceptions import AppError
from support_chat.observability.metrics import observe_request_latency
from support_chat.presentation.api import create_chat_router, metrics_router
from support_chat.presentation.api.metrics import metrics as metrics_endpoint
from support_chat.presentation.rate_limit import (
    create_limiter,
    rate_limit_exceeded_handler,
)
from support_chat.setup.ioc.container import create_container

logger = logging.getLogger(__name__)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Middleware to extract or generate the correlation ID for each request."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())

        # Set in contextvars (propagates to async tasks and logging)
        token = correlation_id_var.set(correlation_id)
        try:
            response = await call_next(request)
        finally:
            correlation_id_var.reset(token)

        response.headers["X-Correlation-ID"] = correlation_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Records request latency per route template."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        route = request.scope.get("route")
        observe_request_latency(
            method=request.method,
            route=getattr(route, "path", "unmatched"),
            status_code=response.status_code,
            duration=time.perf_counter() - start,
        )
        return response


def error_response(status_code: int, message: str, status: str = "error") -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": status, "message": message, "statusCode": status_code},
    )


def _validation_message(error: dict) -> str:
    message = error.get("msg", "Invalid request")
    if error.get("type") == "value_error":
        return message.removeprefix("Value error, ")
    loc = error.get("loc") or ()
    if error.get("type") == "missing" and loc and loc[-1] in ("body", "message"):
        return "Message cannot be empty"
    if error.get("type") == "json_invalid":
        return "Invalid JSON body"
    field = loc[-1] if loc else "request"
    return f"{field}: {message}"


def create_fastapi_app(
    config: Optional[type[Config]] = None,
    container: Optional[AsyncContainer] = None,
) -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Args:
        config: Config class to run with (default: chosen by APP_ENV/NODE_ENV)
        container: Prebuilt dishka container (default: built from config)

    Returns:
        FastAPI application instance
    """
    config = config or get_config()
    setup_logging(config.LOG_LEVEL, config.LOG_PATH)
    container = container or create_container(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not config.LLM_API_KEY and not config.is_development():
            logger.warning(
                "No LLM API key configured (GROQ_API_KEY) in %s mode", config.ENV
            )
        logger.info("Support chat API started in %s mode", config.ENV)
        yield
        await container.close()
        logger.info("Support chat API shut down, DI container closed")

    app = FastAPI(
        title="Support Chat API",
        description="AI customer-support chat backend",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Setup Dishka BEFORE app starts (must add middleware before startup)
    setup_dishka(container, app)

    limiter = create_limiter(config)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    app.add_middleware(MetricsMiddleware)
    app.add_middleware(CorrelationIdMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        messages = [_validation_message(e) for e in exc.errors()]
        logger.info("Rejected request to %s: %s", request.url.path, messages)
        return error_response(400, ", ".join(messages))

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
        return error_response(exc.status_code, exc.message, exc.status)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = "Route not found" if exc.status_code == 404 else str(exc.detail)
        return error_response(exc.status_code, message)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled %s on %s: %s", type(exc).__name__, request.url.path, exc,
            exc_info=exc,
        )
        message = "Something went wrong" if config.is_production() else str(exc)
        return error_response(500, message)

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "success", "message": "Server is running"}

    limiter.exempt(health)
    limiter.exempt(metrics_endpoint)

    app.include_router(create_chat_router(config))
    app.include_router(metrics_router)

    return app
