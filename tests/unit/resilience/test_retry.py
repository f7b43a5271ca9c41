"""Unit tests for resilience – ExponentialBackoff and RetryPolicy."""

from __future__ import annotations

import asyncio

import pytest
import tenacity

from mp_metrics.resilience.retry import ExponentialBackoff, RetryPolicy
from mp_metrics.resilience.retry.policy import _last_outcome
from mp_metrics.testing import RecordingSleeper


class TestExponentialBackoff:
    def test_default_sequence(self) -> None:
        backoff = ExponentialBackoff()
        assert [backoff.compute(n) for n in range(1, 5)] == pytest.approx([0.2, 0.4, 0.8, 1.6])

    def test_custom_factor(self) -> None:
        assert ExponentialBackoff(base_delay=1.0, factor=3.0).compute(3) == 9.0

    def test_max_delay_caps(self) -> None:
        assert ExponentialBackoff(base_delay=1.0, max_delay=5.0).compute(10) == 5.0


class TestRetryPolicy:
    def test_invalid_max_attempts(self) -> None:
        with pytest.raises(ValueError):
            RetryPolicy(max_attempts=0)

    def test_returns_first_accepted_result(self) -> None:
        sleeper = RecordingSleeper()
        outcomes = iter([1, 2, 3, 4])
        result = RetryPolicy(sleep=sleeper).execute(lambda: next(outcomes), lambda r: r < 3)
        assert result == 3
        assert sleeper.delays == pytest.approx([0.2, 0.4])

    def test_returns_last_outcome_when_exhausted(self) -> None:
        sleeper = RecordingSleeper()
        calls: list[int] = []

        def attempt() -> int:
            calls.append(1)
            return len(calls)

        result = RetryPolicy(max_attempts=3, sleep=sleeper).execute(attempt, lambda _: True)
        assert result == 3
        assert len(calls) == 3
        assert sleeper.delays == pytest.approx([0.2, 0.4])

    def test_single_attempt_never_sleeps(self) -> None:
        sleeper = RecordingSleeper()
        assert RetryPolicy(max_attempts=1, sleep=sleeper).execute(lambda: "x", lambda _: True) == "x"
        assert sleeper.delays == []

    def test_before_sleep_called_between_attempts(self) -> None:
        seen: list[int] = []
        policy = RetryPolicy(max_attempts=3, sleep=RecordingSleeper())
        policy.execute(lambda: None, lambda _: True, before_sleep=lambda s: seen.append(s.attempt_number))
        assert seen == [1, 2]

    def test_async(self) -> None:
        sleeper = RecordingSleeper()
        outcomes = iter(["bad", "bad", "good"])

        async def attempt() -> str:
            return next(outcomes)

        policy = RetryPolicy(async_sleep=sleeper.sleep_async)
        result = asyncio.run(policy.execute_async(attempt, lambda r: r != "good"))
        assert result == "good"
        assert sleeper.delays == pytest.approx([0.2, 0.4])

    def test_exhaustion_without_outcome_is_an_error(self) -> None:
        state = tenacity.RetryCallState(tenacity.Retrying(), None, (), {})
        with pytest.raises(RuntimeError):
            _last_outcome(state)
