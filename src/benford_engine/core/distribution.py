"""Distribución esperada de Benford para dígitos 1-9.

Expected Benford distribution for digits 1-9.
"""

from __future__ import annotations

import math

import numpy as np

DIGITS = range(1, 10)


def benford(digit: int) -> float:
    """Frecuencia teórica de Benford para un dígito.

    Español: Retorna ``log10(1 + 1/d)`` para ``d`` en 1..9 y 0 fuera del rango.
    English: Returns ``log10(1 + 1/d)`` for ``d`` in 1..9 and 0 outside the range.
    """
    if digit <= 0 or digit > 9:
        return 0.0
    return math.log10(1 + 1 / digit)


def expected_distribution() -> np.ndarray:
    """Distribución esperada de Benford para dígitos 1-9.

    Español: Retorna vector de probabilidades para dígitos 1 a 9.
    English: Returns probability vector for digits 1 to 9.
    """

    return np.array([benford(digit) for digit in DIGITS])
