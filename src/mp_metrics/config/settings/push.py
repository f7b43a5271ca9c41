"""Config settings – PushSettings for the push gateway client."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from mp_metrics.config.settings.base import Settings
from mp_metrics.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class PushSettings(Settings):
    """Push gateway settings, read from ``METRICS_PUSH_*`` variables."""

    _prefix: ClassVar[str] = "METRICS_PUSH"

    gateway_url: str
    max_attempts: int = 5
    base_delay: float = 0.2
    timeout: float = 10.0

    def _validate(self) -> None:
        if self.max_attempts < 1:
            raise InvalidSettingValueError("max_attempts", self.max_attempts, "must be >= 1")
        if self.base_delay < 0:
            raise InvalidSettingValueError("base_delay", self.base_delay, "must be >= 0")
        if self.timeout <= 0:
            raise InvalidSettingValueError("timeout", self.timeout, "must be > 0")


__all__ = ["PushSettings"]
