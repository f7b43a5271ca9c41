"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   └── MetricConstructionError
    │       ├── InvalidInfoError
    │       ├── InvalidBucketsError
    │       ├── InvalidQuantilesError
    │       ├── InvalidLabelsError
    │       └── DuplicateMetricError
    ├── ApplicationError         (application.py)
    └── InfrastructureError      (infrastructure.py)
        └── PushError
            ├── InvalidAddressError
            ├── ExportError
            ├── TransportError
            │   └── PushTimeoutError
            └── BadStatusError
"""

from mp_metrics.kernel.errors.application import ApplicationError
from mp_metrics.kernel.errors.base import BaseError
from mp_metrics.kernel.errors.domain import (
    DomainError,
    DuplicateMetricError,
    InvalidBucketsError,
    InvalidInfoError,
    InvalidLabelsError,
    InvalidQuantilesError,
    MetricConstructionError,
)
from mp_metrics.kernel.errors.infrastructure import (
    BadStatusError,
    ExportError,
    InfrastructureError,
    InvalidAddressError,
    PushError,
    PushTimeoutError,
    TransportError,
)

__all__ = [
    "ApplicationError",
    "BadStatusError",
    "BaseError",
    "DomainError",
    "DuplicateMetricError",
    "ExportError",
    "InfrastructureError",
    "InvalidAddressError",
    "InvalidBucketsError",
    "InvalidInfoError",
    "InvalidLabelsError",
    "InvalidQuantilesError",
    "MetricConstructionError",
    "PushError",
    "PushTimeoutError",
    "TransportError",
]
