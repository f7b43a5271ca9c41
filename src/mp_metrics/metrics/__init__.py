"""Metrics – kinds, vectors, metric sets, exposition and timing."""
from mp_metrics.metrics.exposition import CONTENT_TYPE_LATEST, encode, encode_all, format_value, parse_header
from mp_metrics.metrics.info import Info, info
from mp_metrics.metrics.kinds import (
    DEFAULT_BUCKETS,
    Counter,
    Gauge,
    Histogram,
    Metric,
    Summary,
    counter,
    gauge,
    histogram,
    summary,
)
from mp_metrics.metrics.quantiles import DEFAULT_QUANTILES, Quantile
from mp_metrics.metrics.registry import (
    REGISTRY,
    MetricSet,
    Registry,
    export,
    generic_export,
    generic_register,
    register,
)
from mp_metrics.metrics.snapshot import HistogramValue, MetricKind, MetricSnapshot, Sample, SummaryValue
from mp_metrics.metrics.timing import Dispatcher, ThreadPoolDispatcher, time, time_async, timed
from mp_metrics.metrics.vector import Vector, vector, with_label

__all__ = [
    "CONTENT_TYPE_LATEST",
    "Counter",
    "DEFAULT_BUCKETS",
    "DEFAULT_QUANTILES",
    "Dispatcher",
    "Gauge",
    "Histogram",
    "HistogramValue",
    "Info",
    "Metric",
    "MetricKind",
    "MetricSet",
    "MetricSnapshot",
    "Quantile",
    "REGISTRY",
    "Registry",
    "Sample",
    "Summary",
    "SummaryValue",
    "ThreadPoolDispatcher",
    "Vector",
    "counter",
    "encode",
    "encode_all",
    "export",
    "format_value",
    "gauge",
    "generic_export",
    "generic_register",
    "histogram",
    "info",
    "parse_header",
    "register",
    "summary",
    "time",
    "time_async",
    "timed",
    "vector",
    "with_label",
]
