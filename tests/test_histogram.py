"""Pruebas del histograma concurrente de primer dígito.

Tests for the concurrent leading-digit histogram.
"""

from __future__ import annotations

import dataclasses
import threading

import pytest

from benford_engine.core.histogram import (
    AtomicCounter,
    DigitHistogram,
    HistogramFrozenError,
    HistogramSnapshot,
)


class TestAtomicCounter:
    """Tests for AtomicCounter / Pruebas de AtomicCounter."""

    def test_compare_and_swap_requires_expected_value(self) -> None:
        counter = AtomicCounter(5)

        assert counter.compare_and_swap(4, 10) is False
        assert counter.load() == 5
        assert counter.compare_and_swap(5, 10) is True
        assert counter.load() == 10

    def test_add_returns_new_value(self) -> None:
        counter = AtomicCounter()

        assert counter.add() == 1
        assert counter.add(4) == 5

    def test_concurrent_adds_lose_no_updates(self) -> None:
        """Concurrent adders must not lose increments.

        Bilingual: Sumas concurrentes no deben perder incrementos.
        """
        counter = AtomicCounter()
        barrier = threading.Barrier(8)

        def worker() -> None:
            barrier.wait()
            for _ in range(5000):
                counter.add()

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert counter.load() == 40000


class TestDigitHistogram:
    """Tests for DigitHistogram / Pruebas de DigitHistogram."""

    def test_increment_updates_matching_bucket(self) -> None:
        histogram = DigitHistogram()

        histogram.increment(1)
        histogram.increment(9, 3)
        histogram.increment_total(4)
        histogram.increment_invalid()

        assert histogram.buckets == (1, 0, 0, 0, 0, 0, 0, 0, 3)
        assert histogram.total == 4
        assert histogram.invalid == 1

    @pytest.mark.parametrize("digit", [0, 10, -1])
    def test_increment_rejects_out_of_range_digit(self, digit: int) -> None:
        with pytest.raises(ValueError):
            DigitHistogram().increment(digit)

    def test_frozen_histogram_rejects_writes(self) -> None:
        """Frozen histograms are read-only until reset.

        Bilingual: Histogramas congelados son de solo lectura hasta reiniciarlos.
        """
        histogram = DigitHistogram()
        histogram.increment(2)
        histogram.freeze()

        with pytest.raises(HistogramFrozenError):
            histogram.increment(2)
        with pytest.raises(HistogramFrozenError):
            histogram.increment_total()
        with pytest.raises(HistogramFrozenError):
            histogram.increment_invalid()
        assert histogram.buckets[1] == 1

    def test_reset_zeroes_and_unfreezes(self) -> None:
        histogram = DigitHistogram()
        histogram.increment(5)
        histogram.increment_total()
        histogram.increment_invalid()
        histogram.freeze()

        histogram.reset()

        assert histogram.buckets == (0,) * 9
        assert histogram.total == 0
        assert histogram.invalid == 0
        assert histogram.frozen is False
        histogram.increment(5)

    def test_concurrent_increments_are_exact(self) -> None:
        histogram = DigitHistogram()

        def worker(digit: int) -> None:
            for _ in range(2000):
                histogram.increment(digit)
                histogram.increment_total()

        threads = [threading.Thread(target=worker, args=(digit % 9 + 1,)) for digit in range(18)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert histogram.buckets == (4000,) * 9
        assert histogram.total == 36000

    def test_snapshot_is_immutable_copy(self) -> None:
        histogram = DigitHistogram()
        histogram.increment(3)
        histogram.increment_total()

        snapshot = histogram.snapshot()
        histogram.increment(3)

        assert isinstance(snapshot, HistogramSnapshot)
        assert snapshot.count(3) == 1
        assert snapshot.total == 1
        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.total = 5  # type: ignore[misc]
        assert snapshot.to_dict() == {
            "buckets": {"1": 0, "2": 0, "3": 1, "4": 0, "5": 0, "6": 0, "7": 0, "8": 0, "9": 0},
            "total": 1,
            "invalid": 0,
        }
