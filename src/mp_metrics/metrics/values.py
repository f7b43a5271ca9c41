"""Metrics – AtomicFloat: a float cell whose transitions are atomic."""
from __future__ import annotations

import threading


class AtomicFloat:
    """A float protected by an internal mutex.

    Every public method is a single atomic transition; callers never see or
    hold the lock.
    """

    __slots__ = ("_lock", "_value")

    def __init__(self, value: float = 0.0) -> None:
        self._value = float(value)
        self._lock = threading.Lock()

    def add(self, amount: float) -> None:
        with self._lock:
            self._value += amount

    def set(self, value: float) -> None:
        with self._lock:
            self._value = value

    def set_if_greater(self, candidate: float) -> bool:
        """Store *candidate* only when it exceeds the current value."""
        with self._lock:
            if candidate > self._value:
                self._value = candidate
                return True
            return False

    def get(self) -> float:
        with self._lock:
            return self._value


__all__ = ["AtomicFloat"]
