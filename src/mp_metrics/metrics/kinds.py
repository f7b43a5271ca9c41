"""Metrics – Counter, Gauge, Histogram, Summary.

Each kind is a typed container of mutable numeric state. Updates are atomic
transitions on internal cells and never raise for numeric input; validation of
the kind-specific configuration happens once, in the constructor.
"""
from __future__ import annotations

import abc
import bisect
import math
import threading
from collections.abc import Iterable, Sequence
from typing import Any, ClassVar, Self

from mp_metrics.kernel.errors import InvalidBucketsError, InvalidLabelsError
from mp_metrics.metrics.exposition import format_value
from mp_metrics.metrics.info import Info
from mp_metrics.metrics.quantiles import (
    DEFAULT_QUANTILES,
    CKMSEstimator,
    Quantile,
    QuantileSpec,
    normalise_quantiles,
)
from mp_metrics.metrics.snapshot import HistogramValue, MetricKind, MetricSnapshot, Sample, SummaryValue
from mp_metrics.metrics.values import AtomicFloat

DEFAULT_BUCKETS: tuple[float, ...] = (
    0.005, 0.01, 0.025, 0.05, 0.075, 0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0, 7.5, 10.0,
)


class Metric(abc.ABC):
    """Base class of every exportable metric (including vectors)."""

    kind: ClassVar[MetricKind]
    reserved_labels: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, info: Info) -> None:
        clash = self.reserved_labels & info.label_names
        if clash:
            raise InvalidLabelsError(
                f"Static label(s) {sorted(clash)} are reserved for {self.kind}", metric=info.name
            )
        self._info = info

    @property
    def info(self) -> Info:
        return self._info

    @property
    def name(self) -> str:
        return self._info.name

    @abc.abstractmethod
    def extract(self) -> Any:
        """Return the current value as plain data."""

    @abc.abstractmethod
    def samples(self) -> list[Sample]:
        """Exposition samples, without the family's static labels."""

    @abc.abstractmethod
    def spawn(self) -> Self:
        """Return a fresh, zeroed metric with the same identity and config."""

    def collect(self) -> MetricSnapshot:
        return MetricSnapshot(self._info, self.kind, tuple(self.samples()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class Counter(Metric):
    """Monotonically non-decreasing counter.

    ``inc`` ignores negative and NaN deltas and ``set`` only commits values
    larger than the current one, so the exported value never goes down.
    """

    kind = MetricKind.COUNTER

    def __init__(self, info: Info) -> None:
        super().__init__(info)
        self._value = AtomicFloat()

    def inc(self, delta: float = 1.0) -> None:
        delta = float(delta)
        if not delta >= 0.0:
            return
        self._value.add(delta)

    def set(self, value: float) -> None:
        self._value.set_if_greater(float(value))

    def extract(self) -> float:
        return self._value.get()

    def samples(self) -> list[Sample]:
        return [Sample("", (), self._value.get())]

    def spawn(self) -> Counter:
        return Counter(self._info)


class Gauge(Metric):
    """Freely shiftable gauge; values are stored as given, NaN included."""

    kind = MetricKind.GAUGE

    def __init__(self, info: Info) -> None:
        super().__init__(info)
        self._value = AtomicFloat()

    def inc(self, delta: float = 1.0) -> None:
        self._value.add(float(delta))

    def dec(self, delta: float = 1.0) -> None:
        self._value.add(-float(delta))

    def set(self, value: float) -> None:
        self._value.set(float(value))

    def extract(self) -> float:
        return self._value.get()

    def samples(self) -> list[Sample]:
        return [Sample("", (), self._value.get())]

    def spawn(self) -> Gauge:
        return Gauge(self._info)


def _validate_buckets(buckets: Iterable[float], metric: str) -> tuple[float, ...]:
    try:
        bounds = [float(b) for b in buckets]
    except (TypeError, ValueError) as exc:
        raise InvalidBucketsError(f"Bucket bounds must be numbers: {exc}", metric=metric, cause=exc) from exc
    if bounds and bounds[-1] == math.inf:
        bounds.pop()
    if not bounds:
        raise InvalidBucketsError("At least one finite bucket bound is required", metric=metric)
    if any(math.isnan(b) for b in bounds):
        raise InvalidBucketsError("Bucket bounds must not be NaN", metric=metric)
    if any(lo >= hi for lo, hi in zip(bounds, bounds[1:])):
        raise InvalidBucketsError(f"Bucket bounds must be strictly ascending: {bounds}", metric=metric)
    return tuple(bounds)


class Histogram(Metric):
    """Cumulative histogram with fixed upper bounds plus an implicit ``+Inf``."""

    kind = MetricKind.HISTOGRAM
    reserved_labels = frozenset({"le"})

    def __init__(self, info: Info, buckets: Sequence[float] = DEFAULT_BUCKETS) -> None:
        super().__init__(info)
        self._upper_bounds = _validate_buckets(buckets, info.name)
        self._counts = [0] * len(self._upper_bounds)
        self._sum = 0.0
        self._count = 0
        self._lock = threading.Lock()

    @property
    def upper_bounds(self) -> tuple[float, ...]:
        return self._upper_bounds

    def observe(self, value: float) -> None:
        value = float(value)
        if math.isnan(value):
            return
        first = bisect.bisect_left(self._upper_bounds, value)
        with self._lock:
            for i in range(first, len(self._counts)):
                self._counts[i] += 1
            self._sum += value
            self._count += 1

    def extract(self) -> HistogramValue:
        with self._lock:
            return HistogramValue(
                buckets=tuple(zip(self._upper_bounds, self._counts)),
                sum=self._sum,
                count=self._count,
            )

    def samples(self) -> list[Sample]:
        value = self.extract()
        samples = [Sample("_bucket", (("le", format_value(bound)),), count) for bound, count in value.buckets]
        samples.append(Sample("_bucket", (("le", "+Inf"),), value.count))
        samples.append(Sample("_sum", (), value.sum))
        samples.append(Sample("_count", (), value.count))
        return samples

    def spawn(self) -> Histogram:
        return Histogram(self._info, self._upper_bounds)


class Summary(Metric):
    """φ-quantile summary backed by a :class:`CKMSEstimator`."""

    kind = MetricKind.SUMMARY
    reserved_labels = frozenset({"quantile"})

    def __init__(self, info: Info, quantiles: Iterable[QuantileSpec] = DEFAULT_QUANTILES) -> None:
        super().__init__(info)
        self._targets = normalise_quantiles(quantiles, metric=info.name)
        self._estimator = CKMSEstimator(self._targets)
        self._sum = 0.0
        self._count = 0
        self._lock = threading.Lock()

    @property
    def targets(self) -> tuple[Quantile, ...]:
        return self._targets

    def observe(self, value: float) -> None:
        value = float(value)
        if math.isnan(value):
            return
        with self._lock:
            self._estimator.insert(value)
            self._sum += value
            self._count += 1

    def extract(self) -> SummaryValue:
        with self._lock:
            estimates = {t.phi: self._estimator.query(t.phi) for t in self._targets}
            return SummaryValue(quantiles=estimates, sum=self._sum, count=self._count)

    def samples(self) -> list[Sample]:
        value = self.extract()
        samples = [
            Sample("", (("quantile", format_value(phi)),), estimate)
            for phi, estimate in value.quantiles.items()
        ]
        samples.append(Sample("_sum", (), value.sum))
        samples.append(Sample("_count", (), value.count))
        return samples

    def spawn(self) -> Summary:
        return Summary(self._info, self._targets)


def counter(info: Info) -> Counter:
    """A monotonically increasing counter."""
    return Counter(info)


def gauge(info: Info) -> Gauge:
    """A freely shiftable gauge."""
    return Gauge(info)


def histogram(info: Info, buckets: Sequence[float] = DEFAULT_BUCKETS) -> Histogram:
    """A cumulative histogram over the given upper bounds."""
    return Histogram(info, buckets)


def summary(info: Info, quantiles: Iterable[QuantileSpec] = DEFAULT_QUANTILES) -> Summary:
    """A φ-quantile summary over the given targets."""
    return Summary(info, quantiles)


__all__ = [
    "DEFAULT_BUCKETS",
    "Counter",
    "Gauge",
    "Histogram",
    "Metric",
    "Summary",
    "counter",
    "gauge",
    "histogram",
    "summary",
]
