"""
Main entry point for the support chat API.
Run this file to start the FastAPI server.

Usage:
    python run.py

Or with uvicorn directly:
    uvicorn support_chat.main:app --host 0.0.0.0 --port 3000 --reload
"""

import uvicorn

from support_chat.config.settings import get_config

if __name__ == "__main__":
    config = get_config()
    debug = config.is_development()

    print(f"Starting support chat API in {config.ENV} mode...")
    print(f"Server running on http://{config.HOST}:{config.PORT}")
    print(f"API docs available at http://{config.HOST}:{config.PORT}/docs")

    uvicorn.run(
        "support_chat.main:app",
        host=config.HOST,
        port=config.PORT,
        reload=debug,
        log_level="info" if debug else "warning",
    )
