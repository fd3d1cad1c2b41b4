"""Configuración de structlog para Benford Engine.

structlog configuration for Benford Engine.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

import structlog
from pydantic import ValidationError

from benford_engine.config import LoggingConfig


def setup_logging(log_level: str = "INFO", log_file: Optional[Path] = None) -> structlog.BoundLogger:
    """Configura structlog y handlers de consola/archivo.

    English: Configure structlog and console/file handlers.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(log_file, maxBytes=10_000_000, backupCount=5, encoding="utf-8")
        )

    logging.basicConfig(
        level=log_level.upper(),
        handlers=handlers,
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(log_level.upper())),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    return structlog.get_logger()


def setup_logging_from_config(config: LoggingConfig, level_override: Optional[str] = None) -> structlog.BoundLogger:
    """Valida el nivel efectivo y configura logging desde ``LoggingConfig``.

    English: Validate the effective level and configure logging from ``LoggingConfig``.

    Raises:
        ValueError: If ``level_override`` is not a known log level.
    """
    if level_override:
        try:
            config = LoggingConfig(level=level_override, file=config.file)
        except ValidationError as exc:
            raise ValueError(f"Invalid log level: {level_override}") from exc
    return setup_logging(config.level, config.file)


def bind_context(
    logger: structlog.BoundLogger,
    source_id: Optional[str] = None,
    mode: Optional[str] = None,
) -> structlog.BoundLogger:
    """Adjunta contexto estándar al logger.

    English: Bind standard context to the logger.
    """
    context: dict[str, Any] = {}
    if source_id:
        context["source_id"] = source_id
    if mode:
        context["mode"] = mode
    return logger.bind(**context)
