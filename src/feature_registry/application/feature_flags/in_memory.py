"""Application feature flags – in-memory store implementations."""

from __future__ import annotations

import copy
from typing import Any

from feature_registry.application.feature_flags.ports import PersistentStore, PreferenceStore


class InMemoryPersistentStore(PersistentStore):
    """Dict-backed :class:`PersistentStore`.

    Values are deep-copied on the way in and out so callers never share
    mutable state with the store, the same as a serialising backend.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(data or {})

    async def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)


class InMemoryPreferenceStore(PreferenceStore):
    """Dict-backed :class:`PreferenceStore` keyed by user id."""

    def __init__(self, preferences: dict[str | int, dict[str, bool]] | None = None) -> None:
        self._prefs: dict[str | int, dict[str, bool]] = copy.deepcopy(preferences or {})

    async def get_preferences(self, user_id: str | int) -> dict[str, bool] | None:
        prefs = self._prefs.get(user_id)
        return dict(prefs) if prefs is not None else None

    async def set_preferences(self, user_id: str | int, preferences: dict[str, bool]) -> None:
        self._prefs[user_id] = dict(preferences)


__all__ = ["InMemoryPersistentStore", "InMemoryPreferenceStore"]
