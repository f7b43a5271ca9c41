"""Resilience – retry."""

from mp_metrics.resilience.retry import BackoffStrategy, ExponentialBackoff, RetryPolicy

__all__ = ["BackoffStrategy", "ExponentialBackoff", "RetryPolicy"]
