"""
Configuration management for the photo gallery service.
Uses Pydantic Settings for environment variable management.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    API_TITLE: str = "Photo Gallery API"
    API_VERSION: str = "0.1.0"
    API_DESCRIPTION: str = "Galleries with ordered photos and batch photo ingestion"

    # CORS Configuration
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8000",
    ]

    # Database Configuration
    # Empty DATABASE_URL falls back to an in-memory SQLite database
    DATABASE_URL: str = ""
    SQL_ECHO: bool = False
    CREATE_TABLES_ON_STARTUP: bool = False

    # Admin Password (bcrypt hash, see generate_password_hash.py)
    ADMIN_PASSWORD_HASH: str = ""

    # JWT Configuration
    # SECRET_KEY should be a long random string (e.g., generated with: openssl rand -hex 32)
    JWT_SECRET_KEY: str = "change-this-in-production-use-openssl-rand-hex-32"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields in .env that aren't defined in Settings
    )


# Global settings instance
settings = Settings()
