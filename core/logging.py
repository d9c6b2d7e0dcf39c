"""
Logging configuration for the API process and scripts
"""

import logging
import sys
from typing import Optional
from core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Third-party loggers kept at WARNING unless LOG_SQL is on
QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "httpx", "httpcore")


def setup_logging(level: Optional[str] = None):
    """
    Configure the root logger once per process.

    level overrides settings.LOG_LEVEL. uvicorn's access log is silenced
    because RequestContextMiddleware already logs one line per request.
    """
    name = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, name, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )

    for logger_name in QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
    if settings.LOG_SQL:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(f"Logging configured at {name} level ({settings.ENVIRONMENT})")
