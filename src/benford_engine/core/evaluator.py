"""Evaluación de un histograma contra la distribución de Benford.

Evaluation of a histogram against the Benford distribution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence, Tuple

import numpy as np
from scipy.stats import chisquare

from benford_engine.core.distribution import DIGITS, benford, expected_distribution

DEFAULT_MAX_LARGEST_VARIANCE = 0.02
DEFAULT_MAX_AVERAGE_DEVIATION = 0.007


class EmptyHistogramError(ZeroDivisionError):
    """Raised when a histogram with ``total == 0`` is evaluated."""


class HistogramLike(Protocol):
    @property
    def buckets(self) -> Sequence[int]: ...

    @property
    def total(self) -> int: ...


@dataclass(frozen=True)
class Thresholds:
    """Umbrales exclusivos del veredicto.

    English: Exclusive verdict thresholds.
    """

    max_largest_variance: float = DEFAULT_MAX_LARGEST_VARIANCE
    max_average_deviation: float = DEFAULT_MAX_AVERAGE_DEVIATION


@dataclass(frozen=True)
class DeviationRow:
    """Fila por dígito: esperado, observado y desviación (esperado - observado).

    English: Per-digit row: expected, observed and deviation (expected - observed).
    """

    digit: int
    expected: float
    observed: float
    deviation: float

    def to_dict(self) -> dict:
        return {
            "digit": self.digit,
            "expected": self.expected,
            "observed": self.observed,
            "deviation": self.deviation,
        }


@dataclass(frozen=True)
class Report:
    """Resultado de Benford para una fuente.

    Español: Filas por dígito, mayor varianza con signo, desviación absoluta
    media, veredicto y chi-cuadrado de bondad de ajuste.
    English: Per-digit rows, signed largest variance, mean absolute deviation,
    verdict and chi-square goodness of fit.
    """

    rows: Tuple[DeviationRow, ...]
    largest_variance: float
    average_absolute_deviation: float
    passed: bool
    total: int
    chi2: float
    p_value: float

    def row(self, digit: int) -> DeviationRow:
        return self.rows[digit - 1]

    def to_dict(self) -> dict:
        return {
            "rows": [row.to_dict() for row in self.rows],
            "largest_variance": self.largest_variance,
            "average_absolute_deviation": self.average_absolute_deviation,
            "passed": self.passed,
            "total": self.total,
            "chi2": self.chi2,
            "p_value": self.p_value,
        }


def evaluate(histogram: HistogramLike, thresholds: Thresholds | None = None) -> Report:
    """Calcula desviaciones por dígito y el veredicto.

    Español: ``largest_variance`` conserva el signo y, en empates, el primer
    dígito encontrado. Ambos umbrales son estrictos (``<``).

    English: ``largest_variance`` keeps its sign and, on ties, the first digit
    seen. Both thresholds are strict (``<``).

    Raises:
        EmptyHistogramError: If ``histogram.total`` is zero.
    """
    thresholds = thresholds or Thresholds()
    total = histogram.total
    if total == 0:
        raise EmptyHistogramError("Cannot evaluate a histogram with total == 0")

    buckets = histogram.buckets
    rows = []
    largest_variance = 0.0
    absolute_sum = 0.0
    for digit in DIGITS:
        observed = buckets[digit - 1] / total
        expected = benford(digit)
        deviation = expected - observed
        rows.append(DeviationRow(digit=digit, expected=expected, observed=observed, deviation=deviation))
        if abs(deviation) > abs(largest_variance):
            largest_variance = deviation
        absolute_sum += abs(deviation)

    average_absolute_deviation = absolute_sum / len(rows)
    passed = (
        abs(largest_variance) < thresholds.max_largest_variance
        and average_absolute_deviation < thresholds.max_average_deviation
    )

    chi2, p_value = _chi_square(buckets)

    return Report(
        rows=tuple(rows),
        largest_variance=largest_variance,
        average_absolute_deviation=average_absolute_deviation,
        passed=passed,
        total=total,
        chi2=chi2,
        p_value=p_value,
    )


def _chi_square(buckets: Sequence[int]) -> Tuple[float, float]:
    counts = np.array(buckets, dtype=float)
    if counts.sum() == 0:
        return float("nan"), float("nan")
    chi_result = chisquare(counts, f_exp=expected_distribution() * counts.sum())
    return float(chi_result.statistic), float(chi_result.pvalue)
