"""Redis adapter – RedisPersistentStore, RedisPreferenceStore.

Values are stored as JSON strings. Redis errors surface as
:class:`ConnectionError`; undecodable payloads as :class:`SerializationError`.
"""
from __future__ import annotations

import json
from typing import Any

from feature_registry.application.feature_flags.ports import PersistentStore, PreferenceStore
from feature_registry.config.settings import RegistrySettings
from feature_registry.config.validation import MissingRequiredSettingError
from feature_registry.kernel.errors import ConnectionError, SerializationError


def _require_redis() -> Any:
    try:
        import redis.asyncio as aioredis
        return aioredis
    except ImportError as exc:
        raise ImportError("Install 'feature-registry[redis]' to use the Redis adapter") from exc


class _RedisJsonStore:
    def __init__(self, url: str, **kwargs: Any) -> None:
        aioredis = _require_redis()
        self._client = aioredis.from_url(url, **kwargs)
        self._redis_error: type[BaseException] = aioredis.RedisError

    async def _get_json(self, key: str) -> Any:
        try:
            raw = await self._client.get(key)
        except self._redis_error as exc:
            raise ConnectionError("redis", f"GET {key!r} failed: {exc}", cause=exc) from exc
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise SerializationError(
                f"Stored value under {key!r} is not valid JSON", payload_type="json", cause=exc
            ) from exc

    async def _set_json(self, key: str, value: Any) -> None:
        try:
            payload = json.dumps(value, ensure_ascii=False)
        except TypeError as exc:
            raise SerializationError(
                f"Value for {key!r} is not JSON serialisable", payload_type=type(value).__name__, cause=exc
            ) from exc
        try:
            await self._client.set(key, payload)
        except self._redis_error as exc:
            raise ConnectionError("redis", f"SET {key!r} failed: {exc}", cause=exc) from exc

    async def close(self) -> None:
        await self._client.aclose()


class RedisPersistentStore(_RedisJsonStore, PersistentStore):
    """:class:`PersistentStore` holding each collection as one JSON value."""

    @classmethod
    def from_settings(cls, settings: RegistrySettings, **kwargs: Any) -> "RedisPersistentStore":
        if not settings.redis_url:
            raise MissingRequiredSettingError("FEATURE_REGISTRY_REDIS_URL")
        return cls(settings.redis_url, **kwargs)

    async def get(self, key: str, default: Any = None) -> Any:
        value = await self._get_json(key)
        return default if value is None else value

    async def set(self, key: str, value: Any) -> None:
        if isinstance(value, (set, frozenset)):
            value = sorted(value)
        await self._set_json(key, value)


class RedisPreferenceStore(_RedisJsonStore, PreferenceStore):
    """:class:`PreferenceStore` with one JSON object per user at ``<prefix><user_id>``."""

    def __init__(self, url: str, *, prefix: str = "feature_flags_user_", **kwargs: Any) -> None:
        super().__init__(url, **kwargs)
        self._prefix = prefix

    @classmethod
    def from_settings(cls, settings: RegistrySettings, **kwargs: Any) -> "RedisPreferenceStore":
        if not settings.redis_url:
            raise MissingRequiredSettingError("FEATURE_REGISTRY_REDIS_URL")
        return cls(settings.redis_url, prefix=f"{settings.key_prefix}user_", **kwargs)

    def _key(self, user_id: str | int) -> str:
        return f"{self._prefix}{user_id}"

    async def get_preferences(self, user_id: str | int) -> dict[str, bool] | None:
        value = await self._get_json(self._key(user_id))
        if value is None:
            return None
        if not isinstance(value, dict):
            raise SerializationError(
                f"Preferences for user {user_id!r} are not a JSON object", payload_type="dict"
            )
        return {str(k): bool(v) for k, v in value.items()}

    async def set_preferences(self, user_id: str | int, preferences: dict[str, bool]) -> None:
        await self._set_json(self._key(user_id), preferences)


__all__ = ["RedisPersistentStore", "RedisPreferenceStore"]
