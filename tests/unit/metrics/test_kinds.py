"""Unit tests for metric kinds – Counter, Gauge, Histogram, Summary."""

from __future__ import annotations

import math
import threading

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mp_metrics.kernel.errors import (
    InvalidBucketsError,
    InvalidLabelsError,
    InvalidQuantilesError,
    MetricConstructionError,
)
from mp_metrics.metrics import (
    DEFAULT_BUCKETS,
    Counter,
    Gauge,
    Histogram,
    HistogramValue,
    Info,
    MetricKind,
    Summary,
    counter,
    gauge,
    histogram,
    summary,
)

_finite = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False)
_non_negative = st.floats(min_value=0, max_value=1e6, allow_nan=False, allow_infinity=False)


# ---------------------------------------------------------------------------
# Counter
# ---------------------------------------------------------------------------


class TestCounter:
    def test_starts_at_zero(self) -> None:
        assert counter(Info("jobs_total")).extract() == 0.0

    def test_inc_default_is_one(self) -> None:
        c = counter(Info("jobs_total"))
        c.inc()
        c.inc()
        assert c.extract() == 2.0

    def test_inc_by_delta(self) -> None:
        c = counter(Info("jobs_total"))
        c.inc(2.5)
        assert c.extract() == 2.5

    def test_negative_delta_is_ignored(self) -> None:
        c = counter(Info("jobs_total"))
        c.inc(3)
        c.inc(-1)
        assert c.extract() == 3.0

    def test_nan_delta_is_ignored(self) -> None:
        c = counter(Info("jobs_total"))
        c.inc(1)
        c.inc(math.nan)
        assert c.extract() == 1.0

    def test_set_larger_commits(self) -> None:
        c = counter(Info("jobs_total"))
        c.set(10)
        assert c.extract() == 10.0

    def test_set_smaller_or_equal_is_noop(self) -> None:
        c = counter(Info("jobs_total"))
        c.set(10)
        c.set(5)
        c.set(10)
        assert c.extract() == 10.0

    def test_kind(self) -> None:
        assert counter(Info("jobs_total")).kind is MetricKind.COUNTER

    @given(st.lists(_non_negative, max_size=50))
    def test_value_equals_sum_of_increments(self, deltas: list[float]) -> None:
        c = counter(Info("jobs_total"))
        for d in deltas:
            c.inc(d)
        assert c.extract() == pytest.approx(math.fsum(deltas))

    @given(_non_negative, _finite)
    def test_set_never_decreases(self, start: float, candidate: float) -> None:
        c = counter(Info("jobs_total"))
        c.set(start)
        before = c.extract()
        c.set(candidate)
        assert c.extract() == max(before, candidate)

    def test_concurrent_increments_are_not_lost(self) -> None:
        c = counter(Info("jobs_total"))

        def worker() -> None:
            for _ in range(1000):
                c.inc()

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert c.extract() == 8000.0

    def test_spawn_is_zeroed_with_same_info(self) -> None:
        c = counter(Info("jobs_total", "Jobs"))
        c.inc(4)
        fresh = c.spawn()
        assert isinstance(fresh, Counter)
        assert fresh.info == c.info
        assert fresh.extract() == 0.0


# ---------------------------------------------------------------------------
# Gauge
# ---------------------------------------------------------------------------


class TestGauge:
    def test_inc_dec_set(self) -> None:
        g = gauge(Info("queue_depth"))
        g.inc(5)
        g.dec(2)
        assert g.extract() == 3.0
        g.set(-7.5)
        assert g.extract() == -7.5

    def test_default_steps(self) -> None:
        g = gauge(Info("queue_depth"))
        g.inc()
        g.inc()
        g.dec()
        assert g.extract() == 1.0

    def test_nan_is_propagated(self) -> None:
        g = gauge(Info("queue_depth"))
        g.set(math.nan)
        assert math.isnan(g.extract())

    def test_infinity_is_propagated(self) -> None:
        g = gauge(Info("queue_depth"))
        g.set(math.inf)
        assert g.extract() == math.inf

    def test_kind(self) -> None:
        assert isinstance(gauge(Info("g")), Gauge)
        assert gauge(Info("g")).kind is MetricKind.GAUGE


# ---------------------------------------------------------------------------
# Histogram
# ---------------------------------------------------------------------------


class TestHistogramConstruction:
    def test_default_buckets(self) -> None:
        h = histogram(Info("latency_seconds"))
        assert h.upper_bounds == DEFAULT_BUCKETS

    def test_trailing_infinity_is_folded(self) -> None:
        h = histogram(Info("latency_seconds"), [1, 2, math.inf])
        assert h.upper_bounds == (1.0, 2.0)

    def test_unsorted_buckets_rejected(self) -> None:
        with pytest.raises(InvalidBucketsError):
            histogram(Info("latency_seconds"), [1.0, 0.5])

    def test_duplicate_buckets_rejected(self) -> None:
        with pytest.raises(InvalidBucketsError):
            histogram(Info("latency_seconds"), [1.0, 1.0])

    def test_empty_buckets_rejected(self) -> None:
        with pytest.raises(InvalidBucketsError):
            histogram(Info("latency_seconds"), [])

    def test_nan_bucket_rejected(self) -> None:
        with pytest.raises(InvalidBucketsError):
            histogram(Info("latency_seconds"), [0.1, math.nan])

    def test_non_numeric_bucket_rejected(self) -> None:
        with pytest.raises(MetricConstructionError):
            histogram(Info("latency_seconds"), [0.1, "big"])  # type: ignore[list-item]

    def test_error_names_metric(self) -> None:
        with pytest.raises(InvalidBucketsError) as exc_info:
            histogram(Info("latency_seconds"), [2, 1])
        assert exc_info.value.metric == "latency_seconds"

    def test_static_le_label_rejected(self) -> None:
        with pytest.raises(InvalidLabelsError) as exc_info:
            histogram(Info("latency_seconds", static_labels={"le": "x"}), [1.0])  # type: ignore[arg-type]
        assert exc_info.value.metric == "latency_seconds"

    def test_static_quantile_label_allowed_on_histogram(self) -> None:
        h = histogram(Info("latency_seconds", static_labels=(("quantile", "x"),)), [1.0])
        assert h.info.label_names == frozenset({"quantile"})


class TestHistogramObserve:
    def test_cumulative_counts(self) -> None:
        h = histogram(Info("latency_seconds"), [1, 2, 5])
        for v in (0.5, 1.0, 1.5, 3, 10):
            h.observe(v)
        value = h.extract()
        assert value == HistogramValue(buckets=((1.0, 2), (2.0, 3), (5.0, 4)), sum=16.0, count=5)

    def test_value_on_boundary_counts_in_that_bucket(self) -> None:
        h = histogram(Info("latency_seconds"), [1, 2])
        h.observe(2)
        assert h.extract().buckets == ((1.0, 0), (2.0, 1))

    def test_nan_observation_ignored(self) -> None:
        h = histogram(Info("latency_seconds"), [1])
        h.observe(math.nan)
        assert h.extract().count == 0

    def test_infinite_observation_only_in_inf_bucket(self) -> None:
        h = histogram(Info("latency_seconds"), [1])
        h.observe(math.inf)
        value = h.extract()
        assert value.buckets == ((1.0, 0),)
        assert value.count == 1

    @given(st.lists(_finite, max_size=60))
    def test_bucket_counts_match_observations(self, observations: list[float]) -> None:
        bounds = [-100.0, 0.0, 0.5, 10.0, 1000.0]
        h = Histogram(Info("latency_seconds"), bounds)
        for v in observations:
            h.observe(v)
        value = h.extract()
        for bound, count in value.buckets:
            assert count == sum(1 for v in observations if v <= bound)
        assert value.count == len(observations)
        assert value.sum == pytest.approx(math.fsum(observations), rel=1e-9, abs=1e-6)

    def test_samples_include_inf_sum_and_count(self) -> None:
        h = histogram(Info("latency_seconds"), [0.5])
        h.observe(0.25)
        h.observe(2)
        samples = [(s.suffix, s.labels, s.value) for s in h.samples()]
        assert samples == [
            ("_bucket", (("le", "0.5"),), 1),
            ("_bucket", (("le", "+Inf"),), 2),
            ("_sum", (), 2.25),
            ("_count", (), 2),
        ]

    def test_spawn_keeps_buckets(self) -> None:
        h = histogram(Info("latency_seconds"), [1, 2])
        h.observe(1)
        fresh = h.spawn()
        assert fresh.upper_bounds == (1.0, 2.0)
        assert fresh.extract().count == 0


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


class TestSummary:
    def test_invalid_quantile_rejected(self) -> None:
        with pytest.raises(InvalidQuantilesError):
            summary(Info("size_bytes"), [1.5])

    def test_zero_quantile_rejected(self) -> None:
        with pytest.raises(InvalidQuantilesError):
            summary(Info("size_bytes"), [0.0])

    def test_empty_quantiles_rejected(self) -> None:
        with pytest.raises(InvalidQuantilesError):
            summary(Info("size_bytes"), [])

    def test_static_quantile_label_rejected(self) -> None:
        with pytest.raises(InvalidLabelsError):
            summary(Info("size_bytes", static_labels=(("quantile", "x"),)), [0.5])

    def test_static_le_label_allowed_on_counter(self) -> None:
        c = counter(Info("jobs_total", static_labels=(("le", "x"),)))
        c.inc()
        assert c.extract() == 1.0

    def test_no_observations_exports_nan(self) -> None:
        s = summary(Info("size_bytes"), [0.5])
        value = s.extract()
        assert math.isnan(value.quantiles[0.5])
        assert value.count == 0
        assert value.sum == 0.0

    def test_sum_and_count(self) -> None:
        s = summary(Info("size_bytes"), [0.5])
        for v in (1, 2, 3):
            s.observe(v)
        value = s.extract()
        assert value.sum == 6.0
        assert value.count == 3

    def test_median_of_uniform_stream(self) -> None:
        s = summary(Info("size_bytes"), [(0.5, 0.01), (0.9, 0.01)])
        for v in range(1, 1001):
            s.observe(v)
        value = s.extract()
        assert value.quantiles[0.5] == pytest.approx(500, abs=20)
        assert value.quantiles[0.9] == pytest.approx(900, abs=20)

    def test_nan_observation_ignored(self) -> None:
        s = summary(Info("size_bytes"), [0.5])
        s.observe(math.nan)
        assert s.extract().count == 0

    def test_samples_order(self) -> None:
        metric = Summary(Info("size_bytes"), [0.9, 0.5])
        metric.observe(4)
        suffixes = [(s.suffix, s.labels) for s in metric.samples()]
        assert suffixes == [
            ("", (("quantile", "0.5"),)),
            ("", (("quantile", "0.9"),)),
            ("_sum", ()),
            ("_count", ()),
        ]

    def test_kind(self) -> None:
        assert summary(Info("size_bytes")).kind is MetricKind.SUMMARY
