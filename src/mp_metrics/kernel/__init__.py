"""Kernel – framework-agnostic building blocks (errors, result, clock)."""

from mp_metrics.kernel.errors import (
    BaseError,
    DomainError,
    InfrastructureError,
    MetricConstructionError,
    PushError,
)
from mp_metrics.kernel.types import Err, Ok, Result

__all__ = [
    "BaseError",
    "DomainError",
    "Err",
    "InfrastructureError",
    "MetricConstructionError",
    "Ok",
    "PushError",
    "Result",
]
