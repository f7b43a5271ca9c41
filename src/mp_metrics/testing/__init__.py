"""Testing support – fakes for deterministic timing and retry tests."""

from mp_metrics.testing.fakes import InlineDispatcher, RecordingSleeper, StepMonotonicClock

__all__ = ["InlineDispatcher", "RecordingSleeper", "StepMonotonicClock"]
