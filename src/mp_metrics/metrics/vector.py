"""Metrics – Vector: a label-indexed family of one metric kind.

Members are only reachable through :func:`with_label`, so a labeled member is
never created unless something is about to update it.
"""
from __future__ import annotations

import threading
from collections.abc import Callable, Sequence
from typing import Generic, TypeVar

from mp_metrics.kernel.errors import InvalidLabelsError
from mp_metrics.metrics.info import validate_label_name
from mp_metrics.metrics.kinds import Metric
from mp_metrics.metrics.snapshot import MetricKind, Sample

M = TypeVar("M", bound=Metric)
R = TypeVar("R")

LabelValues = str | Sequence[object]


class Vector(Metric, Generic[M]):
    """Metrics of a single kind that differ only in their label values."""

    def __init__(self, label_names: str | Sequence[str], template: M) -> None:
        if isinstance(template, Vector):
            raise InvalidLabelsError("A vector cannot wrap another vector", metric=template.name)
        super().__init__(template.info)
        names = (label_names,) if isinstance(label_names, str) else tuple(label_names)
        if not names:
            raise InvalidLabelsError("A vector needs at least one label name", metric=self.name)
        for label in names:
            validate_label_name(label, metric=self.name)
            if label in template.reserved_labels:
                raise InvalidLabelsError(f"Label name {label!r} is reserved for {template.kind}", metric=self.name)
            if label in template.info.label_names:
                raise InvalidLabelsError(f"Label name {label!r} clashes with a static label", metric=self.name)
        if len(set(names)) != len(names):
            raise InvalidLabelsError(f"Duplicate label names in {names}", metric=self.name)
        self._label_names = names
        self._template: M = template.spawn()
        self._members: dict[tuple[str, ...], M] = {}
        self._lock = threading.Lock()

    @property
    def kind(self) -> MetricKind:  # type: ignore[override]
        return self._template.kind

    @property
    def label_names(self) -> tuple[str, ...]:
        return self._label_names

    def _key(self, label_values: LabelValues) -> tuple[str, ...]:
        values = (label_values,) if isinstance(label_values, str) else tuple(label_values)
        if len(values) != len(self._label_names):
            raise InvalidLabelsError(
                f"Expected {len(self._label_names)} label value(s) for {self._label_names}, got {len(values)}",
                metric=self.name,
            )
        return tuple(str(v) for v in values)

    def _member(self, label_values: LabelValues) -> M:
        key = self._key(label_values)
        member = self._members.get(key)
        if member is None:
            with self._lock:
                member = self._members.get(key)
                if member is None:
                    member = self._template.spawn()
                    self._members[key] = member
        return member

    def with_label(self, label_values: LabelValues, fn: Callable[[M], R]) -> R:
        """Resolve (or create) the member for *label_values* and apply *fn*."""
        return fn(self._member(label_values))

    def label_sets(self) -> list[tuple[str, ...]]:
        with self._lock:
            return sorted(self._members)

    def __len__(self) -> int:
        with self._lock:
            return len(self._members)

    def extract(self) -> dict[tuple[str, ...], object]:
        with self._lock:
            members = sorted(self._members.items())
        return {key: member.extract() for key, member in members}

    def samples(self) -> list[Sample]:
        with self._lock:
            members = sorted(self._members.items())
        samples: list[Sample] = []
        for key, member in members:
            labels = tuple(zip(self._label_names, key))
            samples.extend(Sample(s.suffix, labels + s.labels, s.value) for s in member.samples())
        return samples

    def spawn(self) -> Vector[M]:
        return Vector(self._label_names, self._template)

    def __repr__(self) -> str:
        return f"Vector(name={self.name!r}, labels={self._label_names!r}, kind={self.kind.value!r})"


def vector(label_names: str | Sequence[str], template: M) -> Vector[M]:
    """Build an empty vector of *template*'s kind; the template's state is discarded."""
    return Vector(label_names, template)


def with_label(label_values: LabelValues, vec: Vector[M], fn: Callable[[M], R]) -> R:
    """The only way to use a vector.

    Where a plain metric is used as ``metric.observe(2.6)``, a vector member
    is used as ``with_label("label", vec, lambda m: m.observe(2.6))``.
    """
    return vec.with_label(label_values, fn)


__all__ = ["LabelValues", "Vector", "vector", "with_label"]
