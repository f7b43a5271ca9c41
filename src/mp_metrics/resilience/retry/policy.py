"""Resilience – RetryPolicy backed by ``tenacity``.

Unlike exception-driven retry, the policy retries on the *result* of each
attempt: the attempt function returns an outcome value and ``should_retry``
decides whether another attempt is needed. When attempts run out the last
outcome is returned instead of raising ``tenacity.RetryError``.
"""
from __future__ import annotations

import asyncio
import time
from typing import Any, Awaitable, Callable, TypeVar

import tenacity

from mp_metrics.resilience.retry.backoff import BackoffStrategy, ExponentialBackoff

T = TypeVar("T")

BeforeSleep = Callable[[tenacity.RetryCallState], None]


def _last_outcome(retry_state: tenacity.RetryCallState) -> Any:
    if retry_state.outcome is None:
        raise RuntimeError("Retry stopped before any attempt completed")
    return retry_state.outcome.result()


class RetryPolicy:
    """Bounded retry with a pluggable backoff and sleep.

    Parameters
    ----------
    max_attempts:
        Maximum number of attempts, including the first one.
    backoff:
        Wait strategy between attempts; defaults to
        ``ExponentialBackoff(base_delay=0.2)`` (no jitter).
    sleep / async_sleep:
        Injected for tests; default to :func:`time.sleep` and
        :func:`asyncio.sleep`.
    """

    def __init__(
        self,
        max_attempts: int = 5,
        backoff: BackoffStrategy | None = None,
        sleep: Callable[[float], None] | None = None,
        async_sleep: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.max_attempts = max_attempts
        self.backoff = backoff or ExponentialBackoff()
        self._sleep = sleep or time.sleep
        self._async_sleep = async_sleep or asyncio.sleep

    def _wait(self, retry_state: tenacity.RetryCallState) -> float:
        return self.backoff.compute(retry_state.attempt_number)

    def _kwargs(self, should_retry: Callable[[Any], bool], before_sleep: BeforeSleep | None) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "stop": tenacity.stop_after_attempt(self.max_attempts),
            "wait": self._wait,
            "retry": tenacity.retry_if_result(should_retry),
            "retry_error_callback": _last_outcome,
        }
        if before_sleep is not None:
            kwargs["before_sleep"] = before_sleep
        return kwargs

    def execute(
        self,
        func: Callable[[], T],
        should_retry: Callable[[T], bool],
        before_sleep: BeforeSleep | None = None,
    ) -> T:
        """Call *func* until ``should_retry`` is false or attempts run out."""
        retrying = tenacity.Retrying(sleep=self._sleep, **self._kwargs(should_retry, before_sleep))
        return retrying(func)

    async def execute_async(
        self,
        func: Callable[[], Awaitable[T]],
        should_retry: Callable[[T], bool],
        before_sleep: BeforeSleep | None = None,
    ) -> T:
        """Async counterpart of :meth:`execute`."""
        retrying = tenacity.AsyncRetrying(sleep=self._async_sleep, **self._kwargs(should_retry, before_sleep))
        return await retrying(func)


__all__ = ["RetryPolicy"]
