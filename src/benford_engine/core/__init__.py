"""Núcleo de acumulación y evaluación de Benford.

Benford accumulation and evaluation core.
"""

from benford_engine.core.aggregator import aggregate, aggregate_parallel, aggregate_pixels
from benford_engine.core.digits import extract, first_digit, leading_digits, pixel_value
from benford_engine.core.distribution import DIGITS, benford, expected_distribution
from benford_engine.core.evaluator import (
    DeviationRow,
    EmptyHistogramError,
    Report,
    Thresholds,
    evaluate,
)
from benford_engine.core.histogram import (
    AtomicCounter,
    DigitHistogram,
    HistogramFrozenError,
    HistogramSnapshot,
)

__all__ = [
    "AtomicCounter",
    "DIGITS",
    "DeviationRow",
    "DigitHistogram",
    "EmptyHistogramError",
    "HistogramFrozenError",
    "HistogramSnapshot",
    "Report",
    "Thresholds",
    "aggregate",
    "aggregate_parallel",
    "aggregate_pixels",
    "benford",
    "evaluate",
    "expected_distribution",
    "extract",
    "first_digit",
    "leading_digits",
    "pixel_value",
]
