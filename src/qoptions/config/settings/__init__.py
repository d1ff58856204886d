"""Config settings – 12-factor env-based configuration."""
from qoptions.config.settings.base import QuerySettings, Settings
from qoptions.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["EnvSettingsLoader", "QuerySettings", "Settings", "SettingsLoader"]
