"""
======================== ÍNDICE / INDEX ========================
1. Descripción general / Overview
2. Componentes principales / Main components
3. Notas de mantenimiento / Maintenance notes

======================== ESPAÑOL ========================
Archivo: `src/benford_engine/core/histogram.py`.
Histograma de primer dígito compartido por productores concurrentes. Cada
contador se actualiza con un ciclo optimista: leer, calcular, comparar e
intercambiar (CAS) y reintentar si otro hilo ganó la carrera.

Componentes detectados:
  - AtomicCounter
  - DigitHistogram
  - HistogramSnapshot
  - HistogramFrozenError

Notas:
- El CAS es atómico gracias a un ``threading.Lock`` por contador; el lock
  nunca se mantiene durante el ciclo de lectura y reintento.

======================== ENGLISH ========================
File: `src/benford_engine/core/histogram.py`.
Leading-digit histogram shared by concurrent producers. Every counter is
updated with an optimistic loop: read, compute, compare-and-swap (CAS) and
retry when another thread won the race.

Detected components:
  - AtomicCounter
  - DigitHistogram
  - HistogramSnapshot
  - HistogramFrozenError

Notes:
- The CAS is atomic thanks to one ``threading.Lock`` per counter; the lock is
  never held across the read-and-retry cycle.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Tuple

BUCKET_COUNT = 9


class HistogramFrozenError(RuntimeError):
    """Raised when a frozen histogram receives an increment."""


class AtomicCounter:
    """Contador entero con compare-and-swap.

    English: Integer counter with compare-and-swap.
    """

    __slots__ = ("_value", "_lock")

    def __init__(self, value: int = 0) -> None:
        self._value = value
        self._lock = threading.Lock()

    def load(self) -> int:
        return self._value

    def compare_and_swap(self, expected: int, new: int) -> bool:
        """Escribe ``new`` solo si el valor actual es ``expected``.

        English: Store ``new`` only if the current value equals ``expected``.
        """
        with self._lock:
            if self._value != expected:
                return False
            self._value = new
            return True

    def add(self, amount: int = 1) -> int:
        """Suma ``amount`` con reintento optimista y retorna el nuevo valor.

        English: Add ``amount`` with optimistic retry and return the new value.
        """
        while True:
            current = self._value
            updated = current + amount
            if self.compare_and_swap(current, updated):
                return updated

    def store(self, value: int) -> None:
        with self._lock:
            self._value = value


@dataclass(frozen=True)
class HistogramSnapshot:
    """Copia inmutable de los contadores del histograma.

    English: Immutable copy of the histogram counters.
    """

    buckets: Tuple[int, ...]
    total: int
    invalid: int = 0

    def count(self, digit: int) -> int:
        return self.buckets[digit - 1]

    def to_dict(self) -> dict:
        return {
            "buckets": {str(digit): count for digit, count in enumerate(self.buckets, start=1)},
            "total": self.total,
            "invalid": self.invalid,
        }


class DigitHistogram:
    """Histograma de 9 cubetas (dígitos 1-9) más total y registros inválidos.

    Español: Se escribe solo durante una agregación y se congela al
    terminarla; ``reset`` lo deja en cero y lo vuelve a habilitar.

    English: Written only during an aggregation run and frozen once it ends;
    ``reset`` zeroes it and makes it writable again.
    """

    def __init__(self) -> None:
        self._buckets = tuple(AtomicCounter() for _ in range(BUCKET_COUNT))
        self._total = AtomicCounter()
        self._invalid = AtomicCounter()
        self._frozen = False

    def _ensure_writable(self) -> None:
        if self._frozen:
            raise HistogramFrozenError("Histogram is frozen; reset it before a new run")

    def increment(self, digit: int, amount: int = 1) -> None:
        """Suma ``amount`` a la cubeta del dígito.

        English: Add ``amount`` to the digit's bucket.

        Raises:
            ValueError: If ``digit`` is outside 1..9.
            HistogramFrozenError: If the histogram is frozen.
        """
        if not 1 <= digit <= BUCKET_COUNT:
            raise ValueError(f"digit must be in 1..9, got {digit}")
        self._ensure_writable()
        self._buckets[digit - 1].add(amount)

    def increment_total(self, amount: int = 1) -> None:
        self._ensure_writable()
        self._total.add(amount)

    def increment_invalid(self, amount: int = 1) -> None:
        self._ensure_writable()
        self._invalid.add(amount)

    def reset(self) -> None:
        for counter in self._buckets:
            counter.store(0)
        self._total.store(0)
        self._invalid.store(0)
        self._frozen = False

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def buckets(self) -> Tuple[int, ...]:
        return tuple(counter.load() for counter in self._buckets)

    @property
    def total(self) -> int:
        return self._total.load()

    @property
    def invalid(self) -> int:
        return self._invalid.load()

    def snapshot(self) -> HistogramSnapshot:
        return HistogramSnapshot(buckets=self.buckets, total=self.total, invalid=self.invalid)

    def __repr__(self) -> str:
        return (
            f"DigitHistogram(buckets={self.buckets}, total={self.total}, "
            f"invalid={self.invalid}, frozen={self._frozen})"
        )
