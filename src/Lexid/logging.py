# logging.py

import logging
import os
from logging.handlers import RotatingFileHandler

import structlog
from structlog.contextvars import merge_contextvars

from Lexid.config import Settings


def _level(name: str | None, default: int) -> int:
    return getattr(logging, (name or "").upper(), default)


def setup_logging(settings: Settings | None = None) -> None:
    """Initialize structlog + stdlib logging.

    Library modules only call ``structlog.get_logger()``; applications and
    scripts call this once at startup. Defaults: INFO level, console on,
    file off. A rotating JSON-lines file is added when ``logging_file`` is
    a level rather than ``NONE``.
    """
    settings = settings or Settings()
    level = _level(settings.logging_level, logging.INFO)

    # Route Python warnings through logging so they are captured in JSON too
    logging.captureWarnings(True)

    # ProcessorFormatter renders BOTH structlog and stdlib logs as JSON
    processor_formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.add_log_level,
            merge_contextvars,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer(),
        ],
        # For plain stdlib LogRecord -> turn into event-dict before processors run
        foreign_pre_chain=[
            structlog.processors.add_log_level,
            merge_contextvars,
        ],
    )

    root_handlers: list[logging.Handler] = []
    if settings.logging_console.upper() != "NONE":
        ch = logging.StreamHandler()
        ch.setLevel(_level(settings.logging_console, level))
        ch.setFormatter(processor_formatter)
        root_handlers.append(ch)

    if settings.logging_file.upper() != "NONE":
        path = settings.logging_file_path
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        fh = RotatingFileHandler(
            path,
            maxBytes=settings.logging_max_bytes,
            backupCount=settings.logging_backup_count,
        )
        fh.setLevel(_level(settings.logging_file, level))
        fh.setFormatter(processor_formatter)
        root_handlers.append(fh)

    # force=True replaces any prior configuration
    logging.basicConfig(level=level, handlers=root_handlers, force=True)

    # Emit into stdlib; ProcessorFormatter on the handlers renders final JSON
    structlog.configure(
        processors=[
            merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
