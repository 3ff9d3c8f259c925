"""Structured logging for the EasyRAG SDK.

The SDK only emits log events; it never configures logging on import.
Applications that want the SDK's output call ``configure_logging`` (or
``configure_from_env``) once at startup.
"""

import logging
import os
import sys

import structlog

LOG_LEVEL_ENV = "EASYRAG_LOG_LEVEL"
LOG_JSON_ENV = "EASYRAG_LOG_JSON"
PACKAGE_LOGGER = "easyrag_sdk"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """
    Configure structlog over the standard library logging module.

    Args:
        level: Log level name for the root logger.
        json_output: Render JSON lines instead of the colored console format.
    """
    shared_processors = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=False)]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )


def configure_from_env() -> None:
    """Configure logging from EASYRAG_LOG_LEVEL and EASYRAG_LOG_JSON."""
    level = os.getenv(LOG_LEVEL_ENV, "INFO")
    json_output = os.getenv(LOG_JSON_ENV, "").lower() in ("1", "true", "yes")
    configure_logging(level=level, json_output=json_output)


def get_logger(name: str | None = None):
    """Get a structlog logger backed by the standard library logger ``name``."""
    return structlog.wrap_logger(
        logging.getLogger(name or PACKAGE_LOGGER),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
