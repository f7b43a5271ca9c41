"""Config settings – 12-factor env-based configuration."""
from mp_metrics.config.settings.base import Settings
from mp_metrics.config.settings.loaders import EnvSettingsLoader, SettingsLoader
from mp_metrics.config.settings.push import PushSettings

__all__ = ["EnvSettingsLoader", "PushSettings", "Settings", "SettingsLoader"]
