"""Carga y valida la configuración de Benford Engine.

Loads and validates the Benford Engine configuration.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from benford_engine.core.evaluator import (
    DEFAULT_MAX_AVERAGE_DEVIATION,
    DEFAULT_MAX_LARGEST_VARIANCE,
    Thresholds,
)

CONFIG_PATH = Path("config") / "rules.yaml"
LOG_LEVEL_ENV = "BENFORD_LOG_LEVEL"
WORKERS_ENV = "BENFORD_WORKERS"
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ThresholdsConfig(BaseModel):
    """Umbrales del veredicto. (Verdict thresholds.)"""

    max_largest_variance: float = Field(default=DEFAULT_MAX_LARGEST_VARIANCE, gt=0)
    max_average_deviation: float = Field(default=DEFAULT_MAX_AVERAGE_DEVIATION, gt=0)

    def to_thresholds(self) -> Thresholds:
        return Thresholds(
            max_largest_variance=self.max_largest_variance,
            max_average_deviation=self.max_average_deviation,
        )


class AggregationConfig(BaseModel):
    """Modo de agregación y tamaño del pool. (Aggregation mode and pool size.)"""

    parallel: bool = False
    workers: int = Field(default=4, ge=1)


class LoggingConfig(BaseModel):
    """Nivel y archivo de log. (Log level and file.)"""

    level: str = "INFO"
    file: Optional[Path] = None

    @field_validator("level")
    @classmethod
    def level_must_be_known(cls, value: str) -> str:
        """Normaliza y valida el nivel. (Normalize and validate the level.)"""
        normalized = value.strip().upper()
        if normalized not in VALID_LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return normalized


class BenfordSettings(BaseModel):
    """Esquema raíz de rules.yaml. (Root schema for rules.yaml.)"""

    thresholds: ThresholdsConfig = Field(default_factory=ThresholdsConfig)
    aggregation: AggregationConfig = Field(default_factory=AggregationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"extra": "forbid"}


def _load_yaml_mapping(path: Path) -> dict[str, Any]:
    """Carga un mapa YAML o lanza un error orientado al usuario.

    English: Load a YAML mapping or raise a user-facing error. A missing file
    yields an empty mapping so defaults apply.
    """
    if not path.exists():
        return {}
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"{path.name} has YAML syntax errors") from exc
    if not isinstance(raw, dict):
        raise ValueError(f"{path.name} must be a YAML mapping")
    return raw


def _apply_env_overrides(payload: dict[str, Any]) -> dict[str, Any]:
    log_level = os.getenv(LOG_LEVEL_ENV)
    if log_level:
        payload.setdefault("logging", {})["level"] = log_level
    workers = os.getenv(WORKERS_ENV)
    if workers:
        payload.setdefault("aggregation", {})["workers"] = workers
    return payload


def load_config(path: Optional[Path] = None) -> BenfordSettings:
    """Carga y valida configuración, fallando con detalle.

    English: Load and validate configuration, failing with details.

    Raises:
        ValueError: If the file is malformed or a value is invalid.
    """
    payload = _apply_env_overrides(_load_yaml_mapping(path or CONFIG_PATH))
    try:
        return BenfordSettings.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration: {exc}") from exc
