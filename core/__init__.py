"""
Core utilities and configuration for the Mediamine API.

This package provides foundational components used throughout the service:

Modules:
    config: Application configuration and environment variable management
    database: Store wrapper (engine + session factory) for each database
    exceptions: Custom exception hierarchy for error handling
    logging: Logging configuration and utilities
    security: Password hashing and access token signing/verification

Usage:
    from core.config import settings
    from core.database import Store, Stores
    from core.exceptions import ResourceNotFoundError, NetworkError
    from core.logging import setup_logging

Example:
    # Initialize logging
    setup_logging()

    # Open a store and use a session
    store = Store("core", settings.CORE_DATABASE_URL)
    store.open()
    async with store.session() as session:
        # Perform database operations
        pass
"""

__all__ = [
    "settings",
    "Store",
    "Stores",
    "setup_logging",
    # Exceptions
    "MediamineException",
    "ConfigurationError",
    "AuthenticationError",
    "InvalidRequestError",
    "StoreError",
    "ResourceNotFoundError",
    "EmailValidationError",
    "NetworkError",
    "RateLimitError",
    "ValidationServiceAuthError",
]
