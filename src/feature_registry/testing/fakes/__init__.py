"""Testing fakes – in-memory doubles for the registry's store ports."""
from feature_registry.testing.fakes.stores import FakePersistentStore, FakePreferenceStore

__all__ = ["FakePersistentStore", "FakePreferenceStore"]
