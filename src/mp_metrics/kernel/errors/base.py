"""Root error class for the mp-metrics error hierarchy."""

from __future__ import annotations

from typing import Any, ClassVar


class BaseError(Exception):
    """Root of the error hierarchy.

    Subclasses name the attributes that identify what failed (the metric, the
    gateway address, the setting) in ``context_fields``; those attributes are
    carried into :meth:`to_dict` and ``str()`` whenever they are set.

    Args:
        message: Human-readable description.
        code: Machine-readable slug (defaults to ``default_code``).
        cause: Original exception that triggered this error.
    """

    default_code: ClassVar[str] = "base_error"
    context_fields: ClassVar[tuple[str, ...]] = ()

    def __init__(self, message: str, *, code: str | None = None, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    @property
    def context(self) -> dict[str, Any]:
        """The set ``context_fields`` of this error, in declaration order."""
        values = ((name, getattr(self, name, None)) for name in self.context_fields)
        return {name: value for name, value in values if value is not None}

    def __str__(self) -> str:
        context = ", ".join(f"{name}={value!r}" for name, value in self.context.items())
        return f"[{self.code}] {self.message} ({context})" if context else f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Flat, log-ready view: code, message, context fields and cause."""
        payload: dict[str, Any] = {"code": self.code, "message": self.message, **self.context}
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


__all__ = ["BaseError"]
