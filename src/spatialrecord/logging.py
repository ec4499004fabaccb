"""Structured logging setup: human-readable to stdout, optional JSON debug file."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import structlog


def setup_logging(
    log_dir: str | None = None,
    log_name: str = "debug",
    log_sql: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structlog; with log_dir set, also write DEBUG records as JSON lines to <log_dir>/<log_name>.log."""
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    # Clear existing handlers to avoid duplicates on repeated calls
    root_logger.handlers.clear()
    root_logger.addHandler(stdout_handler)

    file_handler = None
    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        # 10 MB per file, keep 5 backups
        file_handler = RotatingFileHandler(
            log_path / f"{log_name}.log",
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
        )
        file_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)

    # SQLAlchemy emits statements at INFO on this logger
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if log_sql else logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    stdout_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(),
        )
    )
    if file_handler is not None:
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=structlog.processors.JSONRenderer(),
            )
        )

    return structlog.get_logger("spatialrecord")


def debug_logging_enabled() -> bool:
    """True when a file handler is collecting DEBUG records."""
    return any(isinstance(h, RotatingFileHandler) for h in logging.getLogger().handlers)
