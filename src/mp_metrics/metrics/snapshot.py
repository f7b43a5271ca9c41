"""Metrics – immutable snapshot types produced by ``collect()``."""
from __future__ import annotations

import dataclasses
import enum

from mp_metrics.metrics.info import Info


class MetricKind(enum.StrEnum):
    """Exposition ``# TYPE`` tag of a metric family."""

    COUNTER = "counter"
    GAUGE = "gauge"
    HISTOGRAM = "histogram"
    SUMMARY = "summary"


@dataclasses.dataclass(frozen=True)
class Sample:
    """One exposition line: ``<name><suffix>{labels} value``."""

    suffix: str
    labels: tuple[tuple[str, str], ...]
    value: float


@dataclasses.dataclass(frozen=True)
class MetricSnapshot:
    """Point-in-time view of a metric family."""

    info: Info
    kind: MetricKind
    samples: tuple[Sample, ...]

    @property
    def name(self) -> str:
        return self.info.name


@dataclasses.dataclass(frozen=True)
class HistogramValue:
    """Extracted histogram state; ``buckets`` holds cumulative counts."""

    buckets: tuple[tuple[float, int], ...]
    sum: float
    count: int


@dataclasses.dataclass(frozen=True)
class SummaryValue:
    """Extracted summary state; ``quantiles`` maps φ to its estimate."""

    quantiles: dict[float, float]
    sum: float
    count: int


__all__ = ["HistogramValue", "MetricKind", "MetricSnapshot", "Sample", "SummaryValue"]
