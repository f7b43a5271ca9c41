"""Metrics – Info: static name/help/label metadata of a metric family."""
from __future__ import annotations

import dataclasses
import re
from collections.abc import Iterable, Mapping

from mp_metrics.kernel.errors import InvalidInfoError, InvalidLabelsError

_METRIC_NAME_RE = re.compile(r"^[a-zA-Z_:][a-zA-Z0-9_:]*$")
_LABEL_NAME_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


def validate_label_name(label: str, *, metric: str | None = None) -> str:
    """Return *label* unchanged or raise :class:`InvalidLabelsError`."""
    if not isinstance(label, str) or not _LABEL_NAME_RE.match(label):
        raise InvalidLabelsError(f"Invalid label name {label!r}", metric=metric)
    if label.startswith("__"):
        raise InvalidLabelsError(f"Label name {label!r} is reserved for internal use", metric=metric)
    return label


@dataclasses.dataclass(frozen=True)
class Info:
    """Identity of a metric family.

    ``static_labels`` accepts a mapping or an iterable of ``(key, value)``
    pairs and is stored as a key-sorted tuple so the exported label order is
    stable.
    """

    name: str
    help: str = ""
    static_labels: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise InvalidInfoError("Metric name must be a non-empty string", metric=self.name or None)
        if not _METRIC_NAME_RE.match(self.name):
            raise InvalidInfoError(f"Invalid metric name {self.name!r}", metric=self.name)
        if not isinstance(self.help, str):
            raise InvalidInfoError("Help text must be a string", metric=self.name)
        object.__setattr__(self, "static_labels", self._normalise_labels(self.static_labels))

    def _normalise_labels(
        self, labels: Mapping[str, str] | Iterable[tuple[str, str]]
    ) -> tuple[tuple[str, str], ...]:
        pairs = list(labels.items()) if isinstance(labels, Mapping) else list(labels)
        seen: set[str] = set()
        normalised: list[tuple[str, str]] = []
        for key, value in pairs:
            try:
                validate_label_name(key, metric=self.name)
            except InvalidLabelsError as exc:
                raise InvalidInfoError(exc.message, metric=self.name, cause=exc) from exc
            if key in seen:
                raise InvalidInfoError(f"Duplicate static label {key!r}", metric=self.name)
            seen.add(key)
            normalised.append((key, str(value)))
        return tuple(sorted(normalised))

    @property
    def label_names(self) -> frozenset[str]:
        return frozenset(key for key, _ in self.static_labels)


def info(name: str, help: str = "", **static_labels: str) -> Info:  # noqa: A002
    """Shorthand for ``Info(name, help, static_labels)``."""
    return Info(name, help, tuple(static_labels.items()))


__all__ = ["Info", "info", "validate_label_name"]
