"""
mp_metrics – metric instrumentation, Prometheus text exposition and push.

Import path convention::

    from mp_metrics.metrics import Info, counter, histogram, vector, with_label
    from mp_metrics.metrics import MetricSet, generic_export
    from mp_metrics.adapters.http import push
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
