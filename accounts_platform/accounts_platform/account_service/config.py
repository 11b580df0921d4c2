"""
Configuration management for the Account Service
"""
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Development-only fallback. Any real deployment must set JWT_SECRET_KEY.
INSECURE_DEV_SIGNING_KEY = "insecure-dev-signing-key-do-not-use-in-production"


class Settings(BaseSettings):
    """Account Service configuration loaded from environment variables"""

    # Service
    SERVICE_NAME: str = "Account Service"
    SERVICE_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # Database
    DATABASE_URL: str = "sqlite:///./accounts.db"

    # Tokens
    JWT_SECRET_KEY: str = INSECURE_DEV_SIGNING_KEY
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_TTL_SECONDS: int = 600

    # Password hashing cost (pbkdf2_sha256 rounds)
    PASSWORD_HASH_ROUNDS: int = 29000

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def uses_insecure_signing_key(self) -> bool:
        return self.JWT_SECRET_KEY == INSECURE_DEV_SIGNING_KEY


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
