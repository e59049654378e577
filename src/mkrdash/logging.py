import logging
from typing import Any

import structlog


def configure_logging(level: int | str = logging.INFO, *, verbose: bool = False) -> None:
    """Configure structlog/standard logging bridge.

    Records go to stderr; stdout is reserved for command output.
    """

    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)
    renderer: Any = structlog.dev.ConsoleRenderer() if verbose else structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(level=logging.DEBUG if verbose else level, format="%(message)s")
