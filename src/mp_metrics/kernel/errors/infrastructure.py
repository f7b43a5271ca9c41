"""Infrastructure errors – push gateway failures.

These are never raised across the push boundary: :func:`push` wraps them in
``Err`` so the caller decides whether to log, alert or ignore.
"""

from __future__ import annotations

from typing import Any

from mp_metrics.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a definition error."""

    default_code = "infrastructure_error"


class PushError(InfrastructureError):
    """A push to the gateway did not succeed."""

    default_code = "push_error"
    context_fields = ("address", "attempts")

    def __init__(
        self,
        message: str,
        *,
        address: str | None = None,
        attempts: int = 0,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.address = address
        self.attempts = attempts


class InvalidAddressError(PushError):
    """The gateway address is not an absolute http(s) URL."""

    default_code = "invalid_address"
    context_fields = ("address", "reason")

    def __init__(self, address: str, reason: str | None = None, **kwargs: Any) -> None:
        msg = f"Invalid gateway address {address!r}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg, address=address, attempts=0, **kwargs)
        self.reason = reason


class ExportError(PushError):
    """``export_fn`` raised before anything was sent to the gateway."""

    default_code = "export_failed"

    def __init__(self, address: str, cause: BaseException) -> None:
        super().__init__(f"Exporting metrics for {address} failed: {cause!r}", address=address, cause=cause)


class TransportError(PushError):
    """The HTTP attempt failed before a response was received."""

    default_code = "transport_error"


class PushTimeoutError(TransportError):
    """The HTTP attempt exceeded the transport timeout."""

    default_code = "push_timeout"


class BadStatusError(PushError):
    """The gateway answered with a status outside ``[200, 300)``."""

    default_code = "bad_status"
    context_fields = ("address", "attempts", "status_code")

    def __init__(
        self,
        address: str,
        status_code: int,
        *,
        response: Any = None,
        attempts: int = 0,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            f"Gateway {address} answered HTTP {status_code}",
            address=address,
            attempts=attempts,
            **kwargs,
        )
        self.status_code = status_code
        self.response = response


__all__ = [
    "BadStatusError",
    "ExportError",
    "InfrastructureError",
    "InvalidAddressError",
    "PushError",
    "PushTimeoutError",
    "TransportError",
]
