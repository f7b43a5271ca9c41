"""Config – 12-factor settings for the push client."""

from mp_metrics.config.settings import EnvSettingsLoader, PushSettings, Settings, SettingsLoader
from mp_metrics.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "PushSettings",
    "Settings",
    "SettingsLoader",
]
