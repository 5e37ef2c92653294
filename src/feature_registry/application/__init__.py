"""Application – the flag registry and its store ports."""

from feature_registry.application.feature_flags import (
    CallerContext,
    FeatureRegistry,
    Flag,
    Group,
    PersistentStore,
    PreferenceStore,
)

__all__ = [
    "CallerContext",
    "FeatureRegistry",
    "Flag",
    "Group",
    "PersistentStore",
    "PreferenceStore",
]
