"""structlog configuration for the CLI"""

import logging
import sys

import structlog


def configure_logging(log_level: str) -> None:
    """Render JSON log events through stdlib logging on stderr, filtered at log_level."""
    numeric_level = logging.getLevelName(log_level.upper())
    if isinstance(numeric_level, str):
        numeric_level = logging.WARNING
    logging.basicConfig(level=numeric_level, format="%(message)s", stream=sys.stderr)
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
