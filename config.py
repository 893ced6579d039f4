"""
Configuration module for the PsyCanvas backend.
Handles environment variables and application settings.
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _split_origins(raw: str | None) -> list[str]:
    """Parse a comma-separated origin list, dropping blanks."""
    if not raw:
        return ["http://localhost:3000"]
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


class Config:
    """Application configuration class."""

    # API Keys
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    QDRANT_API_KEY: str | None = os.getenv("QDRANT_API_KEY")

    # API Configuration
    OPENAI_BASE_URL: str | None = os.getenv("OPENAI_BASE_URL") or None
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4.1-mini")
    EMBEDDING_MODEL: str = "text-embedding-3-small"
    QDRANT_URL: str | None = os.getenv("QDRANT_URL")

    # Application Settings
    APP_TITLE: str = "PsyCanvas Backend"
    APP_ENV: str = os.getenv("APP_ENV", "development")
    PORT: int = int(os.getenv("PORT", "3000"))
    ALLOWED_ORIGINS: list[str] = _split_origins(os.getenv("ALLOWED_ORIGINS"))

    # Logging
    LOG_DIR: str = os.getenv("LOG_DIR", ".")
    ERROR_LOG_FILE: str = "error.log"
    COMBINED_LOG_FILE: str = "combined.log"

    # Timeouts (in seconds)
    COMPLETION_TIMEOUT: float = 30.0

    # Rate limiting for /api/* paths
    RATE_LIMIT_PATH_PREFIX: str = "/api/"
    RATE_LIMIT_MAX_REQUESTS: int = 100
    RATE_LIMIT_WINDOW_MINUTES: int = 15

    # Ingestion
    VECTOR_COLLECTION: str = os.getenv("VECTOR_COLLECTION", "psycanvas")
    DOCUMENTS_DIR: str = os.getenv("DOCUMENTS_DIR", "documents")
    MIN_CHUNK_LENGTH: int = 50

    @classmethod
    def is_production(cls) -> bool:
        """Whether the service runs in production mode (console logging disabled)."""
        return cls.APP_ENV.lower() == "production"

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and print warnings for missing API keys."""
        if not cls.OPENAI_API_KEY:
            print("   WARNING: OPENAI_API_KEY not found in .env file")
            print("   /api/chat will answer with a configuration error until it is set.")


Config.validate()
