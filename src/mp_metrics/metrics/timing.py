"""Metrics – time(): measure an action and record the duration asynchronously.

The duration is handed to a :class:`Dispatcher` which runs the recording
callback on its own schedule. Nothing is returned that could be awaited or
joined, so callers must not expect the observation to be visible as soon as
:func:`time` returns.
"""
from __future__ import annotations

import functools
import inspect
import threading
from collections.abc import Awaitable, Callable
from concurrent.futures import ThreadPoolExecutor
from typing import Any, ParamSpec, Protocol, TypeVar

from mp_metrics.kernel.time import SYSTEM_CLOCK, MonotonicClock
from mp_metrics.observability.logging import get_logger

T = TypeVar("T")
P = ParamSpec("P")
Recorder = Callable[[float], object]

logger = get_logger(__name__)


class Dispatcher(Protocol):
    """Port: fire-and-forget execution of a recording callback."""

    def submit(self, fn: Callable[..., object], /, *args: Any) -> None: ...


class ThreadPoolDispatcher:
    """Run callbacks on a lazily started :class:`ThreadPoolExecutor`.

    Failures inside a callback are logged and dropped; they never reach the
    caller of :func:`time`.
    """

    def __init__(self, max_workers: int = 1, thread_name_prefix: str = "mp-metrics-timing") -> None:
        self._max_workers = max_workers
        self._thread_name_prefix = thread_name_prefix
        self._executor: ThreadPoolExecutor | None = None
        self._lock = threading.Lock()

    def _ensure_executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._max_workers,
                    thread_name_prefix=self._thread_name_prefix,
                )
            return self._executor

    def submit(self, fn: Callable[..., object], /, *args: Any) -> None:
        self._ensure_executor().submit(self._run, fn, args)

    @staticmethod
    def _run(fn: Callable[..., object], args: tuple[Any, ...]) -> None:
        try:
            fn(*args)
        except Exception:
            logger.exception("timing.record_failed", callback=getattr(fn, "__qualname__", repr(fn)))

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker; with ``wait=True`` pending recordings finish first."""
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait)


DEFAULT_DISPATCHER = ThreadPoolDispatcher()


def time(
    action: Callable[[], T],
    record: Recorder,
    *,
    dispatcher: Dispatcher | None = None,
    clock: MonotonicClock | None = None,
) -> T:
    """Run *action*, then dispatch ``record(elapsed_seconds)`` without waiting.

    If *action* raises, the exception propagates and nothing is recorded.
    """
    clock = clock or SYSTEM_CLOCK
    start = clock.monotonic()
    result = action()
    elapsed = clock.monotonic() - start
    (dispatcher or DEFAULT_DISPATCHER).submit(record, elapsed)
    return result


async def time_async(
    action: Callable[[], Awaitable[T]],
    record: Recorder,
    *,
    dispatcher: Dispatcher | None = None,
    clock: MonotonicClock | None = None,
) -> T:
    """Coroutine counterpart of :func:`time`."""
    clock = clock or SYSTEM_CLOCK
    start = clock.monotonic()
    result = await action()
    elapsed = clock.monotonic() - start
    (dispatcher or DEFAULT_DISPATCHER).submit(record, elapsed)
    return result


def timed(
    record: Recorder,
    *,
    dispatcher: Dispatcher | None = None,
    clock: MonotonicClock | None = None,
) -> Callable[[Callable[P, Any]], Callable[P, Any]]:
    """Decorator form of :func:`time` / :func:`time_async`.

    Usage::

        @timed(request_latency.observe)
        async def handle(request): ...
    """

    def decorator(func: Callable[P, Any]) -> Callable[P, Any]:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> Any:
                return await time_async(
                    lambda: func(*args, **kwargs), record, dispatcher=dispatcher, clock=clock
                )

            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> Any:
            return time(lambda: func(*args, **kwargs), record, dispatcher=dispatcher, clock=clock)

        return wrapper

    return decorator


__all__ = [
    "DEFAULT_DISPATCHER",
    "Dispatcher",
    "Recorder",
    "ThreadPoolDispatcher",
    "time",
    "time_async",
    "timed",
]
