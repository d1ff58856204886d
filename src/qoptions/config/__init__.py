"""Config – 12-factor settings and loaders."""

from qoptions.config.settings import EnvSettingsLoader, QuerySettings, Settings, SettingsLoader
from qoptions.config.validation import InvalidSettingValueError

__all__ = [
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "QuerySettings",
    "Settings",
    "SettingsLoader",
]
