"""Resilience – backoff strategies."""
from __future__ import annotations

import abc


class BackoffStrategy(abc.ABC):
    """Compute the wait (seconds) after the *attempt*-th failure (1-based)."""

    @abc.abstractmethod
    def compute(self, attempt: int) -> float: ...


class ExponentialBackoff(BackoffStrategy):
    """Delay grows exponentially: ``base_delay * factor^(attempt - 1)``.

    With the defaults the waits are 0.2, 0.4, 0.8, 1.6 ... seconds.
    """

    def __init__(self, base_delay: float = 0.2, factor: float = 2.0, max_delay: float | None = None) -> None:
        self._base = base_delay
        self._factor = factor
        self._max = max_delay

    @property
    def base_delay(self) -> float:
        return self._base

    def compute(self, attempt: int) -> float:
        delay = self._base * (self._factor ** max(attempt - 1, 0))
        return delay if self._max is None else min(delay, self._max)


__all__ = ["BackoffStrategy", "ExponentialBackoff"]
