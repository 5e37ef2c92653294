"""Application feature flags – value objects, store ports and the registry."""
from feature_registry.application.feature_flags.context import CallerContext, QueryContext
from feature_registry.application.feature_flags.flag import Flag
from feature_registry.application.feature_flags.group import Group
from feature_registry.application.feature_flags.in_memory import (
    InMemoryPersistentStore,
    InMemoryPreferenceStore,
)
from feature_registry.application.feature_flags.outcome import (
    DuplicatePolicy,
    Evaluation,
    EvaluationReason,
    RegistryOutcome,
)
from feature_registry.application.feature_flags.ports import PersistentStore, PreferenceStore
from feature_registry.application.feature_flags.registry import FeatureRegistry

__all__ = [
    "CallerContext",
    "DuplicatePolicy",
    "Evaluation",
    "EvaluationReason",
    "FeatureRegistry",
    "Flag",
    "Group",
    "InMemoryPersistentStore",
    "InMemoryPreferenceStore",
    "PersistentStore",
    "PreferenceStore",
    "QueryContext",
    "RegistryOutcome",
]
