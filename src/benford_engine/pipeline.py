"""Pipeline por fuente: agregación, evaluación y registro.

Per-source pipeline: aggregation, evaluation and logging.

Every source gets its own histogram and its own ``Report`` value; callers
collect and render them.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional

import structlog

from benford_engine.config import BenfordSettings
from benford_engine.core.aggregator import aggregate, aggregate_parallel
from benford_engine.core.evaluator import EmptyHistogramError, Report, evaluate
from benford_engine.core.histogram import HistogramSnapshot
from benford_engine.logging import bind_context

logger = structlog.get_logger(__name__)

MAX_SOURCE_WORKERS = 4


@dataclass(frozen=True)
class SourceAnalysis:
    """Resultado de una fuente: reporte o error explícito.

    English: Result for one source: a report or an explicit error.
    """

    source_id: str
    histogram: HistogramSnapshot
    report: Optional[Report] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.report is not None

    def to_dict(self) -> dict:
        return {
            "source_id": self.source_id,
            "histogram": self.histogram.to_dict(),
            "report": self.report.to_dict() if self.report else None,
            "error": self.error,
        }


def _run_source(
    source_id: str,
    observations: Iterable[Any],
    settings: BenfordSettings,
) -> tuple[HistogramSnapshot, Report]:
    mode = "parallel" if settings.aggregation.parallel else "sequential"
    log = bind_context(logger, source_id=source_id, mode=mode)

    if settings.aggregation.parallel:
        histogram = aggregate_parallel(observations, workers=settings.aggregation.workers)
    else:
        histogram = aggregate(observations)
    snapshot = histogram.snapshot()

    report = evaluate(histogram, settings.thresholds.to_thresholds())
    log.info(
        "evaluation_complete",
        total=report.total,
        invalid=snapshot.invalid,
        largest_variance=report.largest_variance,
        average_absolute_deviation=report.average_absolute_deviation,
        passed=report.passed,
    )
    return snapshot, report


def analyze_source(
    source_id: str,
    observations: Iterable[Any],
    settings: Optional[BenfordSettings] = None,
) -> Report:
    """Analiza una fuente y retorna su reporte.

    English: Analyze one source and return its report.

    Raises:
        EmptyHistogramError: If no observation yields a valid digit.
    """
    _, report = _run_source(source_id, observations, settings or BenfordSettings())
    return report


def _analyze_isolated(
    source_id: str,
    observations: Iterable[Any],
    settings: BenfordSettings,
) -> SourceAnalysis:
    batch = list(observations)
    try:
        snapshot, report = _run_source(source_id, batch, settings)
    except EmptyHistogramError:
        logger.warning("source_failed", source_id=source_id, reason="empty_histogram", observations=len(batch))
        return SourceAnalysis(
            source_id=source_id,
            histogram=HistogramSnapshot(buckets=(0,) * 9, total=0, invalid=len(batch)),
            error="empty_histogram",
        )
    return SourceAnalysis(source_id=source_id, histogram=snapshot, report=report)


def analyze_sources(
    sources: Mapping[str, Iterable[Any]],
    settings: Optional[BenfordSettings] = None,
) -> List[SourceAnalysis]:
    """Analiza fuentes independientes en paralelo, en orden de entrada.

    Español: Cada fuente usa su propio histograma; una fuente vacía produce
    un error explícito sin detener las demás.

    English: Each source uses its own histogram; an empty source yields an
    explicit error without stopping the others.
    """
    settings = settings or BenfordSettings()
    if not sources:
        return []
    max_workers = min(MAX_SOURCE_WORKERS, len(sources))
    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="benford-source") as executor:
        futures = [
            executor.submit(_analyze_isolated, source_id, observations, settings)
            for source_id, observations in sources.items()
        ]
        return [future.result() for future in futures]
