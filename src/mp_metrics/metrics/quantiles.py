"""Metrics – targeted-quantile streaming estimator.

Implements the biased-quantile stream of Cormode, Korn, Muthukrishnan and
Srivastava ("Effective Computation of Biased Quantiles over Data Streams",
ICDE 2005) restricted to a fixed set of targets. Observations are buffered and
merged into the compressed sample list in sorted batches; queries flush the
buffer first.

Not thread-safe on its own; :class:`~mp_metrics.metrics.kinds.Summary`
serialises access.
"""
from __future__ import annotations

import dataclasses
import math
from collections.abc import Iterable, Sequence

from mp_metrics.kernel.errors import InvalidQuantilesError

DEFAULT_ERROR = 0.01


@dataclasses.dataclass(frozen=True, order=True)
class Quantile:
    """A target φ with its allowed rank error ε."""

    phi: float
    error: float = DEFAULT_ERROR


QuantileSpec = Quantile | float | tuple[float, float]

DEFAULT_QUANTILES: tuple[Quantile, ...] = (
    Quantile(0.5, 0.05),
    Quantile(0.9, 0.01),
    Quantile(0.99, 0.001),
)


def normalise_quantiles(targets: Iterable[QuantileSpec], *, metric: str | None = None) -> tuple[Quantile, ...]:
    """Coerce *targets* into sorted :class:`Quantile` objects.

    Raises :class:`InvalidQuantilesError` for φ or ε outside ``(0, 1)``,
    duplicate φ, or an empty target list.
    """
    result: dict[float, Quantile] = {}
    for spec in targets:
        if isinstance(spec, Quantile):
            target = spec
        elif isinstance(spec, tuple):
            target = Quantile(float(spec[0]), float(spec[1]))
        else:
            target = Quantile(float(spec))
        if not 0.0 < target.phi < 1.0:
            raise InvalidQuantilesError(f"Quantile {target.phi!r} must lie in (0, 1)", metric=metric)
        if not 0.0 < target.error < 1.0:
            raise InvalidQuantilesError(f"Quantile error {target.error!r} must lie in (0, 1)", metric=metric)
        if target.phi in result:
            raise InvalidQuantilesError(f"Duplicate quantile {target.phi!r}", metric=metric)
        result[target.phi] = target
    if not result:
        raise InvalidQuantilesError("At least one quantile target is required", metric=metric)
    return tuple(sorted(result.values()))


class CKMSEstimator:
    """Streaming estimator for a fixed set of quantile targets."""

    def __init__(self, targets: Sequence[Quantile], buffer_size: int = 500) -> None:
        self._targets = tuple(targets)
        self._buffer_size = buffer_size
        self._buffer: list[float] = []
        # each entry: [value, width (g), delta]
        self._samples: list[list[float]] = []
        self._n = 0.0

    @property
    def targets(self) -> tuple[Quantile, ...]:
        return self._targets

    def insert(self, value: float) -> None:
        self._buffer.append(value)
        if len(self._buffer) >= self._buffer_size:
            self._flush()

    def query(self, phi: float) -> float:
        """Return the estimate for *phi*, or NaN when nothing was observed."""
        self._flush()
        if not self._samples:
            return math.nan
        rank = math.ceil(phi * self._n)
        rank += math.ceil(self._invariant(rank) / 2)
        prev = self._samples[0]
        r = 0.0
        for current in self._samples[1:]:
            r += prev[1]
            if r + current[1] + current[2] > rank:
                return prev[0]
            prev = current
        return prev[0]

    def _invariant(self, r: float) -> float:
        allowed = math.inf
        for target in self._targets:
            if target.phi * self._n <= r:
                f = 2 * target.error * r / target.phi
            else:
                f = 2 * target.error * (self._n - r) / (1 - target.phi)
            allowed = min(allowed, f)
        return allowed

    def _flush(self) -> None:
        if not self._buffer:
            return
        self._buffer.sort()
        samples = self._samples
        r = 0.0
        i = 0
        for value in self._buffer:
            while i < len(samples) and samples[i][0] <= value:
                r += samples[i][1]
                i += 1
            if i < len(samples):
                delta = max(0.0, math.floor(self._invariant(r)) - 1)
            else:
                delta = 0.0
            samples.insert(i, [value, 1.0, delta])
            i += 1
            self._n += 1
            r += 1
        self._buffer.clear()
        self._compress()

    def _compress(self) -> None:
        samples = self._samples
        if len(samples) < 2:
            return
        x = samples[-1]
        r = self._n - 1 - x[1]
        for i in range(len(samples) - 2, -1, -1):
            c = samples[i]
            if c[1] + x[1] + x[2] <= self._invariant(r):
                x[1] += c[1]
                del samples[i]
            else:
                x = c
            r -= c[1]


__all__ = ["CKMSEstimator", "DEFAULT_QUANTILES", "Quantile", "QuantileSpec", "normalise_quantiles"]
