"""
Application configuration using Pydantic Settings
"""

from pydantic_settings import BaseSettings
from typing import List, Optional


REQUIRED_SETTINGS = (
    "CORE_DATABASE_URL",
    "MEDIAMINE_DATABASE_URL",
    "MEDIAMINE_API_KEY",
    "ZEROBOUNCE_API_KEY",
)


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Databases
    CORE_DATABASE_URL: Optional[str] = None
    MEDIAMINE_DATABASE_URL: Optional[str] = None
    DB_POOL_SIZE: int = 5

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 3001

    # Token signing
    MEDIAMINE_API_KEY: Optional[str] = None
    TOKEN_AUDIENCE: str = "urn:audience:test"
    TOKEN_ISSUER: str = "urn:issuer:test"
    TOKEN_SUBJECT: str = "1234567890"
    TOKEN_TTL_SECONDS: int = 60 * 60 * 4
    TOKEN_LEEWAY_SECONDS: int = 15

    # ZeroBounce
    ZEROBOUNCE_API_KEY: Optional[str] = None
    ZEROBOUNCE_API_URL: str = "https://api.zerobounce.net/v2"
    ZEROBOUNCE_BATCH_URL: str = "https://bulkapi.zerobounce.net/v2"
    ZEROBOUNCE_TIMEOUT: float = 120.0

    # Email validation batching
    VALIDATE_BATCH_SIZE: int = 100
    VALIDATE_ALL_BATCH_SIZE: int = 4
    VALIDATE_ALL_SUBSET: int = 10

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_SQL: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    def missing_required(self) -> List[str]:
        """Names of required settings that are unset or blank"""
        return [name for name in REQUIRED_SETTINGS if not (getattr(self, name) or "").strip()]


settings = Settings()
