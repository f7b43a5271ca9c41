"""HTTP adapter – push exposition bytes to a Prometheus push gateway.

Every outcome is returned as a :data:`~mp_metrics.kernel.types.Result`;
nothing raised by the transport crosses the push boundary.
"""
from __future__ import annotations

from typing import Any, Callable

import httpx
import tenacity

from mp_metrics.config.settings import PushSettings
from mp_metrics.kernel.errors import (
    BadStatusError,
    ExportError,
    InvalidAddressError,
    PushError,
    PushTimeoutError,
    TransportError,
)
from mp_metrics.kernel.types import Err, Ok, Result
from mp_metrics.metrics.exposition import CONTENT_TYPE_LATEST
from mp_metrics.observability.logging import get_logger
from mp_metrics.resilience.retry import ExponentialBackoff, RetryPolicy

logger = get_logger(__name__)

ExportFn = Callable[[], bytes | str]
PushResult = Result[httpx.Response, PushError]
Outcome = httpx.Response | TransportError


def parse_address(address: str) -> httpx.URL:
    """Return *address* as an absolute http(s) URL or raise :class:`InvalidAddressError`."""
    if not isinstance(address, str) or not address.strip():
        raise InvalidAddressError(str(address), "address is empty")
    try:
        url = httpx.URL(address)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise InvalidAddressError(address, str(exc), cause=exc) from exc
    if url.scheme not in ("http", "https"):
        raise InvalidAddressError(address, "scheme must be http or https")
    if not url.host:
        raise InvalidAddressError(address, "host is missing")
    return url


def is_success(outcome: Outcome) -> bool:
    """An attempt succeeded iff a response arrived with a 2xx status."""
    return isinstance(outcome, httpx.Response) and 200 <= outcome.status_code < 300


def _body(export_fn: ExportFn) -> bytes:
    body = export_fn()
    return body.encode("utf-8") if isinstance(body, str) else body


class PushClient:
    """POST exposition bytes to a gateway with bounded exponential retry.

    Parameters
    ----------
    policy:
        Retry policy; defaults to 5 attempts with waits of 0.2, 0.4, 0.8 and
        1.6 seconds.
    timeout:
        Per-attempt transport timeout in seconds.
    transport / async_transport:
        Optional httpx transports (e.g. :class:`httpx.MockTransport` in tests,
        or a transport configured with TLS/auth).
    **client_kwargs:
        Forwarded to :class:`httpx.Client` / :class:`httpx.AsyncClient`.
    """

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
        async_transport: httpx.AsyncBaseTransport | None = None,
        **client_kwargs: Any,
    ) -> None:
        self._policy = policy or RetryPolicy()
        self._timeout = timeout
        self._transport = transport
        self._async_transport = async_transport
        self._client_kwargs = client_kwargs

    @classmethod
    def from_settings(cls, settings: PushSettings, **kwargs: Any) -> PushClient:
        policy = kwargs.pop("policy", None) or RetryPolicy(
            max_attempts=settings.max_attempts,
            backoff=ExponentialBackoff(base_delay=settings.base_delay),
        )
        return cls(policy=policy, timeout=settings.timeout, **kwargs)

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def push(self, export_fn: ExportFn, address: str) -> PushResult:
        """Export and POST to *address*; never raises for push failures."""
        prepared = self._prepare(export_fn, address)
        if isinstance(prepared, Err):
            return prepared
        url, body = prepared.unwrap()
        attempts = 0
        with httpx.Client(timeout=self._timeout, transport=self._transport, **self._client_kwargs) as client:

            def attempt() -> Outcome:
                nonlocal attempts
                attempts += 1
                try:
                    return client.post(url, content=body, headers={"Content-Type": CONTENT_TYPE_LATEST})
                except Exception as exc:  # noqa: BLE001
                    return self._transport_error(address, exc)

            outcome = self._policy.execute(attempt, self._should_retry, self._before_sleep(address))
        return self._finish(address, outcome, attempts)

    async def push_async(self, export_fn: ExportFn, address: str) -> PushResult:
        """Async counterpart of :meth:`push`."""
        prepared = self._prepare(export_fn, address)
        if isinstance(prepared, Err):
            return prepared
        url, body = prepared.unwrap()
        attempts = 0
        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._async_transport, **self._client_kwargs
        ) as client:

            async def attempt() -> Outcome:
                nonlocal attempts
                attempts += 1
                try:
                    return await client.post(url, content=body, headers={"Content-Type": CONTENT_TYPE_LATEST})
                except Exception as exc:  # noqa: BLE001
                    return self._transport_error(address, exc)

            outcome = await self._policy.execute_async(attempt, self._should_retry, self._before_sleep(address))
        return self._finish(address, outcome, attempts)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _prepare(export_fn: ExportFn, address: str) -> Result[tuple[httpx.URL, bytes], PushError]:
        try:
            url = parse_address(address)
        except InvalidAddressError as exc:
            logger.warning("push.invalid_address", address=address, reason=exc.reason)
            return Err(exc)
        try:
            body = _body(export_fn)
        except Exception as exc:  # noqa: BLE001
            error = ExportError(address, exc)
            logger.warning("push.export_failed", **error.to_dict())
            return Err(error)
        return Ok((url, body))

    @staticmethod
    def _should_retry(outcome: Outcome) -> bool:
        return not is_success(outcome)

    @staticmethod
    def _transport_error(address: str, exc: Exception) -> TransportError:
        if isinstance(exc, httpx.TimeoutException):
            return PushTimeoutError(f"Push to {address} timed out", address=address, cause=exc)
        return TransportError(f"Push to {address} failed: {exc!r}", address=address, cause=exc)

    @staticmethod
    def _before_sleep(address: str) -> Callable[[tenacity.RetryCallState], None]:
        def log_retry(retry_state: tenacity.RetryCallState) -> None:
            outcome = retry_state.outcome.result() if retry_state.outcome else None
            logger.debug(
                "push.attempt_failed",
                address=address,
                attempt=retry_state.attempt_number,
                status_code=getattr(outcome, "status_code", None),
                error=outcome.code if isinstance(outcome, TransportError) else None,
                delay=retry_state.next_action.sleep if retry_state.next_action else None,
            )

        return log_retry

    @staticmethod
    def _finish(address: str, outcome: Outcome, attempts: int) -> PushResult:
        if isinstance(outcome, httpx.Response):
            if is_success(outcome):
                logger.info("push.succeeded", address=address, status_code=outcome.status_code, attempts=attempts)
                return Ok(outcome)
            error: PushError = BadStatusError(address, outcome.status_code, response=outcome, attempts=attempts)
        else:
            outcome.attempts = attempts
            error = outcome
        logger.warning("push.exhausted", **error.to_dict())
        return Err(error)


def push(export_fn: ExportFn, gateway_address: str, *, client: PushClient | None = None) -> PushResult:
    """Push ``export_fn()`` to *gateway_address* (5 attempts, 0.2 s doubling backoff).

    Returns ``Ok(response)`` on a 2xx answer. Otherwise returns ``Err`` with
    an :class:`InvalidAddressError` or :class:`ExportError` (no attempt was
    made), a :class:`BadStatusError` carrying the last response, or a
    :class:`TransportError` carrying the last captured fault.
    """
    return (client or PushClient()).push(export_fn, gateway_address)


async def push_async(
    export_fn: ExportFn, gateway_address: str, *, client: PushClient | None = None
) -> PushResult:
    """Async counterpart of :func:`push`."""
    return await (client or PushClient()).push_async(export_fn, gateway_address)


__all__ = ["ExportFn", "PushClient", "PushResult", "is_success", "parse_address", "push", "push_async"]
