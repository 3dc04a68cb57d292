import logging

import structlog

from .config import settings


def setup_logging() -> None:
    level = (settings.log_level or "INFO").upper()
    logging.basicConfig(format="%(message)s", level=getattr(logging, level, logging.INFO))
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def bind_owner(owner_id: int) -> None:
    """Attach the acting owner to every log event emitted until cleared."""
    structlog.contextvars.bind_contextvars(owner_id=owner_id)


def clear_owner() -> None:
    structlog.contextvars.unbind_contextvars("owner_id")
