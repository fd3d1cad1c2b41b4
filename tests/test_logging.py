"""Pruebas de configuración de logging estructurado.

Tests for structured logging configuration.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import structlog

from benford_engine.config import LoggingConfig
from benford_engine.logging import bind_context, setup_logging, setup_logging_from_config


def test_setup_logging_writes_json_lines(tmp_path: Path) -> None:
    """Bound context appears in every JSON event.

    El contexto enlazado aparece en cada evento JSON.
    """
    log_file = tmp_path / "logs" / "benford.log"
    setup_logging("INFO", log_file)
    logger = bind_context(structlog.get_logger("benford.test"), source_id="votes-a", mode="parallel")

    logger.info("evaluation_complete", total=3)
    logger.debug("aggregation_complete")

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    event = json.loads(lines[0])
    assert event["event"] == "evaluation_complete"
    assert event["source_id"] == "votes-a"
    assert event["mode"] == "parallel"
    assert event["level"] == "info"
    assert "timestamp" in event


def test_bind_context_skips_empty_values() -> None:
    logger = bind_context(structlog.get_logger("benford.test"), source_id="", mode=None)

    assert structlog.get_context(logger) == {}


def test_setup_logging_from_config_rejects_unknown_override() -> None:
    with pytest.raises(ValueError, match="Invalid log level"):
        setup_logging_from_config(LoggingConfig(), "LOUD")


def test_setup_logging_from_config_applies_override(tmp_path: Path) -> None:
    """The override level filters events; the configured file is kept.

    El nivel de override filtra eventos; se conserva el archivo configurado.
    """
    log_file = tmp_path / "benford.log"
    setup_logging_from_config(LoggingConfig(level="INFO", file=log_file), "warning")
    logger = structlog.get_logger("benford.test")

    logger.info("evaluation_complete")
    logger.warning("source_failed", reason="empty_histogram")

    events = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert [event["event"] for event in events] == ["source_failed"]
