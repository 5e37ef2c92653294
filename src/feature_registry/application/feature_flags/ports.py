"""Application feature flags – store ports.

Both stores hold whole collections: the registry reads a full value, mutates
it and writes it back. Implementations must give read-after-write
consistency within a process; serialising concurrent writers is done by the
registry's own locks.
"""
from __future__ import annotations

import abc
from typing import Any


class PersistentStore(abc.ABC):
    """Port: durable key/value storage for groups and the published set."""

    @abc.abstractmethod
    async def get(self, key: str, default: Any = None) -> Any: ...

    @abc.abstractmethod
    async def set(self, key: str, value: Any) -> None: ...


class PreferenceStore(abc.ABC):
    """Port: per-user ``{flag_key: bool}`` overrides.

    ``None`` from :meth:`get_preferences` means the user has no map yet and is
    treated as an empty mapping.
    """

    @abc.abstractmethod
    async def get_preferences(self, user_id: str | int) -> dict[str, bool] | None: ...

    @abc.abstractmethod
    async def set_preferences(self, user_id: str | int, preferences: dict[str, bool]) -> None: ...


__all__ = ["PersistentStore", "PreferenceStore"]
