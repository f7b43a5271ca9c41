"""Metrics – MetricSet, Registry and the generic register/export traversal.

A :class:`MetricSet` is an explicit, ordered registration list of named
metrics. It is validated once, when it is built; traversal afterwards only
reads metric state and emits families in declaration order.
"""
from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, TypeVar

from mp_metrics.kernel.errors import DuplicateMetricError, MetricConstructionError
from mp_metrics.metrics.exposition import encode_all
from mp_metrics.metrics.kinds import Metric
from mp_metrics.metrics.snapshot import MetricSnapshot


class MetricSet:
    """Ordered, read-only collection of named metrics and vectors.

    Usage::

        app_metrics = MetricSet(
            requests=counter(Info("http_requests_total", "Requests served")),
            latency=vector("route", histogram(Info("http_latency_seconds", "Latency"))),
        )
        app_metrics.requests.inc()
        body = generic_export(app_metrics)
    """

    __slots__ = ("_fields",)

    def __init__(self, **metrics: Metric) -> None:
        object.__setattr__(self, "_fields", self._validate(metrics.items()))

    @classmethod
    def of(cls, fields: Mapping[str, Metric] | Iterable[tuple[str, Metric]]) -> MetricSet:
        """Build a set from a mapping or ``(field, metric)`` pairs, keeping their order."""
        items = list(fields.items()) if isinstance(fields, Mapping) else list(fields)
        instance = cls.__new__(cls)
        object.__setattr__(instance, "_fields", cls._validate(items))
        return instance

    @staticmethod
    def _validate(items: Iterable[tuple[str, Metric]]) -> dict[str, Metric]:
        fields: dict[str, Metric] = {}
        families: set[str] = set()
        for field, metric in items:
            if not isinstance(field, str) or not field.isidentifier() or field.startswith("_"):
                raise MetricConstructionError(f"Invalid metric set field name {field!r}")
            if hasattr(MetricSet, field):
                raise MetricConstructionError(f"Field name {field!r} shadows a MetricSet attribute")
            if field in fields:
                raise MetricConstructionError(f"Duplicate metric set field {field!r}")
            if not isinstance(metric, Metric):
                raise MetricConstructionError(
                    f"Field {field!r} holds {type(metric).__name__}, expected a metric or vector"
                )
            if metric.name in families:
                raise DuplicateMetricError(f"Metric family {metric.name!r} declared twice", metric=metric.name)
            families.add(metric.name)
            fields[field] = metric
        return fields

    def __getattr__(self, field: str) -> Metric:
        if field == "_fields":
            raise AttributeError(field)
        try:
            return self._fields[field]
        except KeyError:
            raise AttributeError(f"MetricSet has no field {field!r}") from None

    def __setattr__(self, field: str, value: Any) -> None:
        raise AttributeError("MetricSet is read-only")

    def __getitem__(self, field: str) -> Metric:
        return self._fields[field]

    def __iter__(self) -> Iterator[Metric]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def fields(self) -> list[tuple[str, Metric]]:
        return list(self._fields.items())

    def collect(self) -> list[MetricSnapshot]:
        return [metric.collect() for metric in self._fields.values()]

    def __repr__(self) -> str:
        return f"MetricSet({', '.join(self._fields)})"


TargetT = TypeVar("TargetT", bound=Metric | MetricSet)


class Registry:
    """Process-wide collection of metric families, exported in registration order."""

    def __init__(self) -> None:
        self._metrics: dict[str, Metric] = {}
        self._lock = threading.Lock()

    def register(self, target: TargetT) -> TargetT:
        """Attach *target* (a metric or a whole set) and return it unchanged.

        A set is registered atomically: if any of its families clashes with an
        already registered name, nothing is added.
        """
        metrics = list(target) if isinstance(target, MetricSet) else [target]
        for metric in metrics:
            if not isinstance(metric, Metric):
                raise MetricConstructionError(f"Cannot register {type(metric).__name__}")
        with self._lock:
            for metric in metrics:
                if metric.name in self._metrics:
                    raise DuplicateMetricError(
                        f"Metric family {metric.name!r} is already registered", metric=metric.name
                    )
            for metric in metrics:
                self._metrics[metric.name] = metric
        return target

    def unregister(self, name: str) -> None:
        with self._lock:
            self._metrics.pop(name, None)

    def clear(self) -> None:
        with self._lock:
            self._metrics.clear()

    def names(self) -> list[str]:
        with self._lock:
            return list(self._metrics)

    def get(self, name: str) -> Metric | None:
        with self._lock:
            return self._metrics.get(name)

    def collect(self) -> list[MetricSnapshot]:
        with self._lock:
            metrics = list(self._metrics.values())
        return [metric.collect() for metric in metrics]

    def export(self) -> bytes:
        return encode_all(self.collect())


REGISTRY = Registry()


def register(target: TargetT, registry: Registry | None = None) -> TargetT:
    """Register a metric or a set with *registry* (default :data:`REGISTRY`)."""
    return (registry or REGISTRY).register(target)


def generic_register(metric_set: MetricSet, registry: Registry | None = None) -> MetricSet:
    """Register every field of *metric_set*, in declaration order."""
    if not isinstance(metric_set, MetricSet):
        raise MetricConstructionError(f"Expected a MetricSet, got {type(metric_set).__name__}")
    return (registry or REGISTRY).register(metric_set)


def export(metric: Metric) -> bytes:
    """Exposition bytes of a single metric or vector."""
    return encode_all([metric.collect()])


def generic_export(metric_set: MetricSet) -> bytes:
    """Exposition bytes of every field of *metric_set*, in declaration order."""
    return encode_all(metric_set.collect())


__all__ = [
    "REGISTRY",
    "MetricSet",
    "Registry",
    "export",
    "generic_export",
    "generic_register",
    "register",
]
