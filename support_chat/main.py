"""ASGI entry point: `uvicorn support_chat.main:app`."""

from support_chat.fastapi_app import create_fastapi_app

app = create_fastapi_app()
