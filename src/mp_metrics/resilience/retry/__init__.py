"""Resilience – result-driven retry with exponential backoff."""
from mp_metrics.resilience.retry.backoff import BackoffStrategy, ExponentialBackoff
from mp_metrics.resilience.retry.policy import RetryPolicy

__all__ = ["BackoffStrategy", "ExponentialBackoff", "RetryPolicy"]
