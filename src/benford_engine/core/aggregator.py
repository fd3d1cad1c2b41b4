"""Agregación de observaciones en un histograma de primer dígito.

Aggregation of observations into a leading-digit histogram.

Invalid text records are counted in ``DigitHistogram.invalid`` and excluded
from both the buckets and ``total``, so ``sum(buckets) == total`` and
``total + invalid == len(batch)``.
"""

from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Any, Iterable, List, Optional, Sequence

import numpy as np
import structlog

from benford_engine.core.digits import extract, leading_digits
from benford_engine.core.distribution import DIGITS
from benford_engine.core.histogram import DigitHistogram

logger = structlog.get_logger(__name__)

DEFAULT_WORKERS = 4


def _materialize(observations: Iterable[Any]) -> Sequence[Any]:
    if isinstance(observations, (list, tuple, np.ndarray)):
        return observations
    return list(observations)


def _prepare(histogram: Optional[DigitHistogram]) -> DigitHistogram:
    if histogram is None:
        return DigitHistogram()
    histogram.reset()
    return histogram


def _process(observation: Any, histogram: DigitHistogram) -> None:
    digit = extract(observation)
    if digit is None:
        histogram.increment_invalid()
        return
    histogram.increment(digit)
    histogram.increment_total()


def _process_chunk(chunk: Sequence[Any], histogram: DigitHistogram) -> int:
    for observation in chunk:
        _process(observation, histogram)
    return len(chunk)


def partition(observations: Sequence[Any], workers: int) -> List[Sequence[Any]]:
    """Divide el lote en hasta ``workers`` bloques contiguos.

    English: Split the batch into at most ``workers`` contiguous chunks.
    """
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    size = len(observations)
    if size == 0:
        return []
    chunk_size = math.ceil(size / workers)
    return [observations[start : start + chunk_size] for start in range(0, size, chunk_size)]


def aggregate(
    observations: Iterable[Any],
    histogram: Optional[DigitHistogram] = None,
) -> DigitHistogram:
    """Recorre el lote en orden con un solo hilo.

    Español: Reinicia el histograma, procesa cada observación y lo congela.
    English: Resets the histogram, processes every observation and freezes it.
    """
    histogram = _prepare(histogram)
    batch = _materialize(observations)
    _process_chunk(batch, histogram)
    histogram.freeze()
    logger.debug(
        "aggregation_complete",
        mode="sequential",
        observations=len(batch),
        total=histogram.total,
        invalid=histogram.invalid,
    )
    return histogram


def aggregate_parallel(
    observations: Iterable[Any],
    histogram: Optional[DigitHistogram] = None,
    workers: int = DEFAULT_WORKERS,
) -> DigitHistogram:
    """Procesa el lote con un pool fijo de hilos y una barrera final.

    Español: El lote se parte estáticamente en bloques contiguos; el
    histograma se congela solo cuando todos los bloques terminaron.

    English: The batch is statically partitioned into contiguous chunks; the
    histogram is frozen only after every chunk has finished. A worker error is
    re-raised after the barrier and the histogram is left unfrozen.

    Raises:
        ValueError: If ``workers`` is lower than 1.
    """
    histogram = _prepare(histogram)
    batch = _materialize(observations)
    chunks = partition(batch, workers)

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="benford-worker") as executor:
        futures = [executor.submit(_process_chunk, chunk, histogram) for chunk in chunks]
        wait(futures)

    for future in futures:
        future.result()

    histogram.freeze()
    logger.debug(
        "aggregation_complete",
        mode="parallel",
        workers=workers,
        chunks=len(chunks),
        observations=len(batch),
        total=histogram.total,
        invalid=histogram.invalid,
    )
    return histogram


def aggregate_pixels(
    pixels: np.ndarray | Sequence[Sequence[int]],
    histogram: Optional[DigitHistogram] = None,
) -> DigitHistogram:
    """Ruta vectorizada para un arreglo ``(N, 4)`` de pixeles RGBA.

    English: Vectorized path for an ``(N, 4)`` RGBA pixel array. Produces the
    same counters as ``aggregate`` over the equivalent tuples.
    """
    histogram = _prepare(histogram)
    digits = leading_digits(pixels)
    counts = np.bincount(digits, minlength=10)
    for digit in DIGITS:
        if counts[digit]:
            histogram.increment(digit, int(counts[digit]))
    histogram.increment_total(int(digits.size))
    histogram.freeze()
    logger.debug("aggregation_complete", mode="vectorized", observations=int(digits.size))
    return histogram
