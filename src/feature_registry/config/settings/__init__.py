"""Config settings – 12-factor env-based configuration."""
from feature_registry.config.settings.base import RegistrySettings, Settings
from feature_registry.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["EnvSettingsLoader", "RegistrySettings", "Settings", "SettingsLoader"]
