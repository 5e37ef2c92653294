"""Application feature flags – evaluation results and mutation outcomes."""
from __future__ import annotations

import dataclasses
import enum


class EvaluationReason(str, enum.Enum):
    """Why a flag resolved the way it did; the value is the display text."""

    PUBLISHED = "Published"
    ENFORCED = "Enforced"
    QUERY = "Using query string"
    USER_PREVIEW = "User preview"
    DISABLED = ""


@dataclasses.dataclass(frozen=True)
class Evaluation:
    """Result of resolving one flag for one caller context."""

    key: str
    enabled: bool
    reason: EvaluationReason = EvaluationReason.DISABLED

    def __bool__(self) -> bool:
        return self.enabled

    @classmethod
    def on(cls, key: str, reason: EvaluationReason) -> "Evaluation":
        return cls(key=key, enabled=True, reason=reason)

    @classmethod
    def off(cls, key: str) -> "Evaluation":
        return cls(key=key, enabled=False)


class RegistryOutcome(str, enum.Enum):
    """Closed set of successful mutation outcomes.

    Turning these into user-facing messages is left to the caller.
    """

    GROUP_CREATED = "group_created"
    GROUP_UPDATED = "group_updated"
    GROUP_UNCHANGED = "group_unchanged"
    GROUP_DELETED = "group_deleted"
    FLAG_ENABLED = "flag_enabled"
    FLAG_DISABLED = "flag_disabled"
    PREVIEW_ENABLED = "preview_enabled"
    PREVIEW_DISABLED = "preview_disabled"
    PREVIEW_SKIPPED = "preview_skipped"


class DuplicatePolicy(str, enum.Enum):
    """What :meth:`FeatureRegistry.add_flag` does with an existing key."""

    REJECT = "reject"
    REPLACE = "replace"


__all__ = ["DuplicatePolicy", "Evaluation", "EvaluationReason", "RegistryOutcome"]
