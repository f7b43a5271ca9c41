"""Kernel time – clock abstraction for deterministic timing tests."""
from mp_metrics.kernel.time.clock import SYSTEM_CLOCK, MonotonicClock, SystemMonotonicClock

__all__ = ["MonotonicClock", "SYSTEM_CLOCK", "SystemMonotonicClock"]
