"""Configuration – environment-driven registry settings."""
from feature_registry.config.settings import EnvSettingsLoader, RegistrySettings, Settings
from feature_registry.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "RegistrySettings",
    "Settings",
]
