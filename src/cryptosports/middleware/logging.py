"""structlog setup for the API process."""

import logging
import sys

import structlog

from cryptosports.config import Settings

# The request-id middleware writes its own access line for /api calls
_QUIET_LOGGERS = ("uvicorn.access",)


def setup_logging(settings: Settings) -> None:
    """Configure structlog and the stdlib root logger.

    ``log_format`` picks JSON lines (default) or the console renderer, which is
    coloured only in debug mode. Service modules that log through stdlib
    ``logging`` end up on the same stream at the same level.
    """
    renderer: structlog.types.Processor
    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=settings.debug)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
