"""Unit tests for kernel error hierarchy."""

from __future__ import annotations

import json

from mp_metrics.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError
from mp_metrics.kernel.errors import (
    ApplicationError,
    BadStatusError,
    BaseError,
    DomainError,
    DuplicateMetricError,
    ExportError,
    InfrastructureError,
    InvalidAddressError,
    InvalidBucketsError,
    InvalidInfoError,
    InvalidLabelsError,
    InvalidQuantilesError,
    MetricConstructionError,
    PushError,
    PushTimeoutError,
    TransportError,
)


class TestBaseError:
    def test_default_code(self) -> None:
        assert BaseError("m").code == "base_error"

    def test_to_dict_basic(self) -> None:
        assert BaseError("m", code="my_code").to_dict() == {"code": "my_code", "message": "m"}

    def test_cause_sets_dunder_cause(self) -> None:
        cause = RuntimeError("root")
        err = BaseError("wrap", cause=cause)
        assert err.__cause__ is cause
        assert "root" in err.to_dict()["cause"]

    def test_str_without_context(self) -> None:
        assert str(BaseError("oops", code="oops")) == "[oops] oops"

    def test_context_fields_flow_into_str_and_dict(self) -> None:
        err = InvalidBucketsError("unsorted", metric="latency_seconds")
        assert err.context == {"metric": "latency_seconds"}
        assert str(err) == "[invalid_buckets] unsorted (metric='latency_seconds')"
        assert json.loads(json.dumps(err.to_dict()))["metric"] == "latency_seconds"


class TestDomainErrors:
    def test_construction_errors_are_domain_errors(self) -> None:
        for cls in (InvalidInfoError, InvalidBucketsError, InvalidQuantilesError, InvalidLabelsError):
            assert issubclass(cls, MetricConstructionError)
            assert issubclass(cls, DomainError)

    def test_metric_name_in_dict(self) -> None:
        err = DuplicateMetricError("twice", metric="jobs_total")
        assert err.to_dict()["metric"] == "jobs_total"
        assert err.code == "duplicate_metric"

    def test_metric_omitted_when_unknown(self) -> None:
        assert "metric" not in InvalidBucketsError("bad").to_dict()


class TestPushErrors:
    def test_hierarchy(self) -> None:
        assert issubclass(PushError, InfrastructureError)
        assert issubclass(PushTimeoutError, TransportError)
        assert issubclass(BadStatusError, PushError)
        assert issubclass(InvalidAddressError, PushError)
        assert issubclass(ConfigError, ApplicationError)

    def test_invalid_address(self) -> None:
        err = InvalidAddressError("nope", "host is missing")
        assert err.address == "nope"
        assert err.reason == "host is missing"
        assert err.attempts == 0
        assert "host is missing" in err.message

    def test_bad_status_dict(self) -> None:
        err = BadStatusError("http://gw", 503, attempts=5)
        d = err.to_dict()
        assert d["status_code"] == 503
        assert d["attempts"] == 5
        assert d["address"] == "http://gw"
        assert d["code"] == "bad_status"

    def test_export_error(self) -> None:
        cause = KeyError("gone")
        err = ExportError("http://gw", cause)
        assert err.cause is cause
        assert err.to_dict()["code"] == "export_failed"
        assert err.attempts == 0


class TestConfigErrors:
    def test_missing_setting_context(self) -> None:
        err = MissingRequiredSettingError("METRICS_PUSH_GATEWAY_URL")
        assert err.to_dict() == {
            "code": "missing_required_setting",
            "message": "METRICS_PUSH_GATEWAY_URL must be set",
            "setting_name": "METRICS_PUSH_GATEWAY_URL",
        }

    def test_invalid_value_context(self) -> None:
        err = InvalidSettingValueError("timeout", -1.0, "must be > 0")
        assert err.context == {"setting_name": "timeout", "value": -1.0, "reason": "must be > 0"}
        assert isinstance(err, ConfigError)
