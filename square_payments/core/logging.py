import logging
import sys
from typing import Any

import structlog

LOGGER_NAME = "square_payments"


def configure_logging(level: int = logging.INFO, *, json_output: bool = True) -> None:
    """Configure structlog for the plugin; use json_output=False for local console output."""
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )


def get_logger(*args: Any, **kwargs: Any) -> structlog.stdlib.BoundLogger:
    if not args:
        args = (LOGGER_NAME,)
    return structlog.get_logger(*args, **kwargs)
