"""Testing fakes – store doubles with failure injection and write recording."""
from __future__ import annotations

import asyncio
import copy
from typing import Any

from feature_registry.application.feature_flags.in_memory import (
    InMemoryPersistentStore,
    InMemoryPreferenceStore,
)
from feature_registry.kernel.errors import ConnectionError


class FakePersistentStore(InMemoryPersistentStore):
    """:class:`InMemoryPersistentStore` that can be told to fail.

    Every successful :meth:`set` is appended to :attr:`writes`.
    :meth:`delay_reads` makes :meth:`get` hand control back to the event
    loop after taking its snapshot, the way a network round trip would, so
    concurrent read-modify-write sequences actually interleave.

    Usage::

        store = FakePersistentStore().fail_writes()
        result = await registry.create_group("Beta")
        assert result.is_err()
        assert store.writes == []
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        super().__init__(data)
        self.writes: list[tuple[str, Any]] = []
        self._fail_reads = False
        self._fail_writes = False
        self._delay_reads = False

    async def get(self, key: str, default: Any = None) -> Any:
        if self._fail_reads:
            raise ConnectionError("fake-store", f"read of {key!r} failed")
        value = await super().get(key, default)
        if self._delay_reads:
            await asyncio.sleep(0)
        return value

    async def set(self, key: str, value: Any) -> None:
        if self._fail_writes:
            raise ConnectionError("fake-store", f"write of {key!r} failed")
        await super().set(key, value)
        self.writes.append((key, copy.deepcopy(value)))

    def fail_reads(self, enabled: bool = True) -> "FakePersistentStore":
        self._fail_reads = enabled
        return self

    def fail_writes(self, enabled: bool = True) -> "FakePersistentStore":
        self._fail_writes = enabled
        return self

    def delay_reads(self, enabled: bool = True) -> "FakePersistentStore":
        self._delay_reads = enabled
        return self

    def reset(self) -> None:
        self._data.clear()
        self.writes.clear()
        self._fail_reads = self._fail_writes = self._delay_reads = False


class FakePreferenceStore(InMemoryPreferenceStore):
    """:class:`InMemoryPreferenceStore` that can be told to fail or to yield on reads."""

    def __init__(self, preferences: dict[str | int, dict[str, bool]] | None = None) -> None:
        super().__init__(preferences)
        self.writes: list[tuple[str | int, dict[str, bool]]] = []
        self._fail_reads = False
        self._fail_writes = False
        self._delay_reads = False

    async def get_preferences(self, user_id: str | int) -> dict[str, bool] | None:
        if self._fail_reads:
            raise ConnectionError("fake-preferences", f"read for user {user_id!r} failed")
        prefs = await super().get_preferences(user_id)
        if self._delay_reads:
            await asyncio.sleep(0)
        return prefs

    async def set_preferences(self, user_id: str | int, preferences: dict[str, bool]) -> None:
        if self._fail_writes:
            raise ConnectionError("fake-preferences", f"write for user {user_id!r} failed")
        await super().set_preferences(user_id, preferences)
        self.writes.append((user_id, dict(preferences)))

    def fail_reads(self, enabled: bool = True) -> "FakePreferenceStore":
        self._fail_reads = enabled
        return self

    def fail_writes(self, enabled: bool = True) -> "FakePreferenceStore":
        self._fail_writes = enabled
        return self

    def delay_reads(self, enabled: bool = True) -> "FakePreferenceStore":
        self._delay_reads = enabled
        return self


__all__ = ["FakePersistentStore", "FakePreferenceStore"]
