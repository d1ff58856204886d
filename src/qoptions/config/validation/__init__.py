"""Config validation errors."""
from qoptions.config.validation.errors import InvalidSettingValueError

__all__ = ["InvalidSettingValueError"]
