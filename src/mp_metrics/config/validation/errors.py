"""Config validation errors for ``METRICS_PUSH_*`` settings."""
from __future__ import annotations

from typing import Any

from mp_metrics.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Push settings could not be loaded or failed validation."""

    default_code = "config_error"
    context_fields = ("setting_name",)

    def __init__(self, message: str, *, setting_name: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.setting_name = setting_name


class MissingRequiredSettingError(ConfigError):
    """An environment variable without a default (e.g. the gateway URL) is unset."""

    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"{setting_name} must be set", setting_name=setting_name)


class InvalidSettingValueError(ConfigError):
    """A setting could not be coerced, or is out of range (attempts < 1, timeout <= 0, ...)."""

    default_code = "invalid_setting_value"
    context_fields = ("setting_name", "value", "reason")

    def __init__(self, setting_name: str, value: object, reason: str, **kwargs: Any) -> None:
        super().__init__(f"{setting_name}={value!r} rejected: {reason}", setting_name=setting_name, **kwargs)
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
