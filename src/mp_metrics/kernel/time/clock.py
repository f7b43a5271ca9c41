"""Kernel time – MonotonicClock protocol + system implementation."""
from __future__ import annotations

import time
from typing import Protocol


class MonotonicClock(Protocol):
    """Port: a clock suitable for measuring elapsed durations."""

    def monotonic(self) -> float: ...


class SystemMonotonicClock:
    """Production clock backed by :func:`time.perf_counter`."""

    def monotonic(self) -> float:
        return time.perf_counter()


SYSTEM_CLOCK = SystemMonotonicClock()

__all__ = ["MonotonicClock", "SYSTEM_CLOCK", "SystemMonotonicClock"]
