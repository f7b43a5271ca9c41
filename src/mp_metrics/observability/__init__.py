"""Observability – logging for the library's own operations."""

from mp_metrics.observability.logging import JsonLoggerFactory, get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
