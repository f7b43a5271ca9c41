"""Domain errors – invalid metric definitions.

All of these are raised while a metric, vector or metric set is being
constructed; nothing in this module is ever raised by an update or an export.
"""

from __future__ import annotations

from typing import Any

from mp_metrics.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a metric definition rule is violated."""

    default_code = "domain_error"


class MetricConstructionError(DomainError):
    """A metric could not be built from the supplied definition."""

    default_code = "metric_construction_error"
    context_fields = ("metric",)

    def __init__(
        self,
        message: str,
        *,
        metric: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.metric = metric


class InvalidInfoError(MetricConstructionError):
    """Metric name, help text or static labels are malformed."""

    default_code = "invalid_info"


class InvalidBucketsError(MetricConstructionError):
    """Histogram bucket boundaries are empty, unsorted or NaN."""

    default_code = "invalid_buckets"


class InvalidQuantilesError(MetricConstructionError):
    """Summary quantile targets fall outside (0, 1)."""

    default_code = "invalid_quantiles"


class InvalidLabelsError(MetricConstructionError):
    """Label names are malformed, reserved, or a label tuple has the wrong arity."""

    default_code = "invalid_labels"


class DuplicateMetricError(MetricConstructionError):
    """Two metrics with the same family name in one set or registry."""

    default_code = "duplicate_metric"


__all__ = [
    "DomainError",
    "DuplicateMetricError",
    "InvalidBucketsError",
    "InvalidInfoError",
    "InvalidLabelsError",
    "InvalidQuantilesError",
    "MetricConstructionError",
]
