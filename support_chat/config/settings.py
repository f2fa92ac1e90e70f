"""Application configuration settings"""

import os
from dotenv import load_dotenv

load_dotenv()

TRUTHY = {"1", "true", "yes", "on"}

# Checked in order; the first non-empty value is the provider credential.
LLM_API_KEY_ENV_NAMES = (
    "GROQ_API_KEY",
    "GROQ_API",
    "GROQ_API_TOKEN",
    "GROQ_KEY",
    "OPENAI_API_KEY",
)


def _first_env(names) -> str:
    for name in names:
        value = os.getenv(name, "").strip()
        if value:
            return value
    return ""


class Config:
    # Deployment mode: development | testing | production
    ENV = os.getenv("APP_ENV", os.getenv("NODE_ENV", "development")).strip().lower()
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "3000"))

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_PATH = os.getenv("LOG_PATH") or None
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s",
    )

    # LLM provider (OpenAI-compatible endpoint, Groq by default)
    LLM_API_KEY = _first_env(LLM_API_KEY_ENV_NAMES)
    LLM_BASE_URL = os.getenv("LLM_BASE_URL", "https://api.groq.com/openai/v1")
    LLM_MODEL = os.getenv("LLM_MODEL", "llama3-8b-8192")
    LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.7"))
    MAX_TOKENS = int(os.getenv("MAX_TOKENS", "500"))
    LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "40"))
    LLM_CONNECT_TIMEOUT = float(os.getenv("LLM_CONNECT_TIMEOUT", "10"))

    # Chat settings
    MAX_MESSAGE_LENGTH = int(os.getenv("MAX_MESSAGE_LENGTH", "2000"))

    # Rate limiting
    RATE_LIMIT_WINDOW_MS = int(os.getenv("RATE_LIMIT_WINDOW_MS", "900000"))
    RATE_LIMIT_MAX_REQUESTS = int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "1000"))
    RATE_LIMIT_ENABLED = os.getenv(
        "RATE_LIMIT_ENABLED", "false" if ENV == "development" else "true"
    ).lower() in TRUTHY

    # CORS
    FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

    # Postgresql Database settings
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")
    STORAGE_BACKEND: str = os.getenv(
        "STORAGE_BACKEND", "prisma" if DATABASE_URL else "memory"
    ).lower()

    @classmethod
    def is_production(cls) -> bool:
        return cls.ENV == "production"

    @classmethod
    def is_development(cls) -> bool:
        return cls.ENV == "development"


class DevelopmentConfig(Config):
    """Development configuration"""

    ENV = "development"


class TestingConfig(Config):
    """Testing configuration"""

    ENV = "testing"
    LLM_API_KEY = ""
    STORAGE_BACKEND = "memory"
    RATE_LIMIT_ENABLED = False
    LOG_PATH = None


class ProductionConfig(Config):
    """Production configuration"""

    ENV = "production"


# Configuration dictionary
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env=None):
    """Get configuration based on environment"""
    return config.get(env or Config.ENV, config["default"])
