"""Testing fakes – in-memory doubles for the timing and retry ports."""
from mp_metrics.testing.fakes.clock import StepMonotonicClock
from mp_metrics.testing.fakes.dispatcher import InlineDispatcher
from mp_metrics.testing.fakes.sleeper import RecordingSleeper

__all__ = ["InlineDispatcher", "RecordingSleeper", "StepMonotonicClock"]
