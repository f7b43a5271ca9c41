"""Observability – structured logging helpers (structlog)."""
from mp_metrics.observability.logging.factory import JsonLoggerFactory
from mp_metrics.observability.logging.processors import add_library_version, get_logger

__all__ = ["JsonLoggerFactory", "add_library_version", "get_logger"]
