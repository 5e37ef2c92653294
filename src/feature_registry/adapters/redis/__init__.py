"""Redis adapter – persistent and preference stores."""
from feature_registry.adapters.redis.store import RedisPersistentStore, RedisPreferenceStore

__all__ = ["RedisPersistentStore", "RedisPreferenceStore"]
