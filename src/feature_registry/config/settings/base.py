"""Config settings – Settings base class and RegistrySettings."""
from __future__ import annotations

import dataclasses
import logging

from feature_registry.config.validation.errors import InvalidSettingValueError

_DUPLICATE_POLICIES = frozenset({"reject", "replace"})


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class RegistrySettings(Settings):
    """Settings for :class:`FeatureRegistry`, read from ``FEATURE_REGISTRY_*``.

    ``key_prefix`` namespaces the persistent-store keys
    (``<prefix>groups`` and ``<prefix>flags``) and the Redis preference keys.
    ``log_level`` is applied by :func:`configure_logging_from_settings`.
    """

    _prefix: dataclasses.ClassVar[str] = "FEATURE_REGISTRY"

    key_prefix: str = "feature_flags_"
    duplicate_policy: str = "reject"
    query_param: str = "feature"
    redis_url: str = ""
    log_level: str = "INFO"

    def _validate(self) -> None:
        self.duplicate_policy = self.duplicate_policy.lower()
        if self.duplicate_policy not in _DUPLICATE_POLICIES:
            raise InvalidSettingValueError(
                "duplicate_policy", self.duplicate_policy, "expected 'reject' or 'replace'"
            )
        if not self.query_param:
            raise InvalidSettingValueError("query_param", self.query_param, "must not be empty")
        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown log level")

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)


__all__ = ["RegistrySettings", "Settings"]
