"""Application feature flags – FeatureRegistry.

The registry owns the flags registered at start-up and the loaded group
set, and resolves flags against the publication set, enforcement, the
request's query override and per-user previews.

Every operation that can fail returns a :class:`Result`; nothing in the
error taxonomy is raised from here. Groups and the published set are stored
as whole collections under one key each and are always rewritten in full
under the registry's write lock.
"""
from __future__ import annotations

import asyncio
import dataclasses
import weakref
from collections.abc import Callable, Mapping
from typing import Any

from feature_registry.application.feature_flags.context import CallerContext, QueryContext
from feature_registry.application.feature_flags.flag import Flag
from feature_registry.application.feature_flags.group import Group
from feature_registry.application.feature_flags.outcome import (
    DuplicatePolicy,
    Evaluation,
    EvaluationReason,
    RegistryOutcome,
)
from feature_registry.application.feature_flags.ports import PersistentStore, PreferenceStore
from feature_registry.config.settings import RegistrySettings
from feature_registry.kernel.errors import (
    DomainError,
    DuplicateFlagError,
    DuplicateGroupError,
    FeatureFlagError,
    GroupNotFoundError,
    NotQueryableError,
    SerializationError,
    StoreFailureError,
    UnknownFlagError,
    UnstableFlagError,
    ValidationError,
)
from feature_registry.kernel.types import Err, Ok, Result, Slug
from feature_registry.observability.logging import get_logger

logger = get_logger(__name__)


class FeatureRegistry:
    """Flag/group registry and resolution engine.

    Construct one per application (usually via :meth:`create`) and pass it
    to whatever needs flag checks::

        registry = await FeatureRegistry.create(store, preferences)
        registry.add_flag(Flag("new_checkout", queryable=True, stable=True))

        result = await registry.is_enabled("new_checkout", CallerContext(user_id=42))
        if result.is_ok() and result.value.enabled:
            ...
    """

    def __init__(
        self,
        store: PersistentStore,
        preferences: PreferenceStore,
        *,
        settings: RegistrySettings | None = None,
        duplicate_policy: DuplicatePolicy | None = None,
    ) -> None:
        self._store = store
        self._preferences = preferences
        self._settings = settings or RegistrySettings()
        self._duplicate_policy = duplicate_policy or DuplicatePolicy(
            self._settings.duplicate_policy
        )
        self._flags: dict[str, Flag] = {}
        self._groups: list[Group] = []
        self._write_lock = asyncio.Lock()
        # entries vanish once no toggle for that user holds or awaits the lock
        self._user_locks: weakref.WeakValueDictionary[str | int, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    @classmethod
    async def create(
        cls,
        store: PersistentStore,
        preferences: PreferenceStore,
        **kwargs: Any,
    ) -> "FeatureRegistry":
        """Construct a registry and load its groups.

        Raises :class:`StoreFailureError` when the groups cannot be read,
        since a registry without its groups is not usable.
        """
        registry = cls(store, preferences, **kwargs)
        (await registry.load()).unwrap()
        return registry

    @property
    def groups_key(self) -> str:
        return f"{self._settings.key_prefix}groups"

    @property
    def published_key(self) -> str:
        return f"{self._settings.key_prefix}flags"

    @property
    def duplicate_policy(self) -> DuplicatePolicy:
        return self._duplicate_policy

    # ------------------------------------------------------------------
    # Flag registration
    # ------------------------------------------------------------------

    def add_flag(self, flag: Flag | Mapping[str, Any]) -> Result[Flag, DuplicateFlagError]:
        """Register *flag*; an existing key is rejected or replaced per policy."""
        if not isinstance(flag, Flag):
            flag = Flag.from_mapping(flag)
        if flag.key in self._flags:
            if self._duplicate_policy is DuplicatePolicy.REJECT:
                logger.warning("flag_duplicate_rejected", key=flag.key)
                return Err(DuplicateFlagError(flag.key))
            logger.info("flag_replaced", key=flag.key)
        self._flags[flag.key] = flag
        logger.debug("flag_registered", key=flag.key, enforced=flag.enforced, stable=flag.stable)
        return Ok(flag)

    def remove_flag(self, key: str) -> Result[Flag, UnknownFlagError]:
        """Unregister *key*. Groups that reference it are left alone."""
        flag = self._flags.pop(key, None)
        if flag is None:
            return Err(UnknownFlagError(key, operation="remove_flag"))
        logger.debug("flag_unregistered", key=key)
        return Ok(flag)

    def find_flag(self, key: str) -> Flag | None:
        return self._flags.get(key)

    def require_flag(self, key: str) -> Result[Flag, UnknownFlagError]:
        flag = self._flags.get(key)
        if flag is None:
            return Err(UnknownFlagError(key, operation="find_flag"))
        return Ok(flag)

    def list_flags(self, enforced: bool | None = False) -> list[Flag]:
        """Registered flags whose ``enforced`` matches; ``None`` returns all."""
        if enforced is None:
            return list(self._flags.values())
        return [f for f in self._flags.values() if f.enforced is enforced]

    def is_queryable(self, key: str) -> Result[bool, UnknownFlagError]:
        return self.require_flag(key).map(lambda f: f.queryable)

    def is_private(self, key: str) -> Result[bool, UnknownFlagError]:
        return self.require_flag(key).map(lambda f: f.private)

    def context_from_query(
        self, params: Mapping[str, str], user_id: str | int | None = None
    ) -> CallerContext:
        """Build a :class:`CallerContext` using the configured query parameter."""
        return CallerContext.from_query(params, user_id=user_id, param=self._settings.query_param)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    async def is_enabled(
        self, key: str, context: CallerContext | None = None
    ) -> Result[Evaluation, FeatureFlagError]:
        """Resolve *key* for *context* (or the ambient :class:`QueryContext`).

        Precedence, first match wins: published, enforced, query override,
        user preview. A query override naming a non-queryable flag is an
        error whichever flag is being resolved.
        """
        flag = self._flags.get(key)
        if flag is None:
            logger.warning("flag_not_registered", key=key)
            return Err(UnknownFlagError(key, operation="is_enabled"))

        ctx = context or QueryContext.get_or_empty()

        published = await self.get_published()
        if published.is_err():
            return published
        if key in published.value:
            return Ok(Evaluation.on(key, EvaluationReason.PUBLISHED))

        if flag.enforced:
            return Ok(Evaluation.on(key, EvaluationReason.ENFORCED))

        if ctx.query_flag:
            requested = self._flags.get(ctx.query_flag)
            if requested is None:
                logger.warning("query_flag_not_registered", key=ctx.query_flag)
                return Err(UnknownFlagError(ctx.query_flag, operation="query_override"))
            if not requested.queryable:
                logger.warning("query_flag_not_queryable", key=ctx.query_flag)
                return Err(NotQueryableError(ctx.query_flag, operation="query_override"))
            if requested.key == key:
                return Ok(Evaluation.on(key, EvaluationReason.QUERY))

        if ctx.user_id is not None:
            enabled = await self.has_user_enabled(key, ctx.user_id)
            if enabled.is_err():
                return enabled
            if enabled.value:
                return Ok(Evaluation.on(key, EvaluationReason.USER_PREVIEW))

        return Ok(Evaluation.off(key))

    async def evaluate(self, key: str, context: CallerContext | None = None) -> bool:
        """Like :meth:`is_enabled` but returns a bool and raises on error."""
        return (await self.is_enabled(key, context)).unwrap().enabled

    # ------------------------------------------------------------------
    # Per-user previews
    # ------------------------------------------------------------------

    async def get_user_preferences(
        self, user_id: str | int
    ) -> Result[dict[str, bool], StoreFailureError]:
        try:
            prefs = await self._preferences.get_preferences(user_id)
        except Exception as exc:  # noqa: BLE001
            return self._store_failure("get_preferences", str(user_id), exc)
        return Ok(dict(prefs or {}))

    async def has_user_enabled(
        self, key: str, user_id: str | int | None
    ) -> Result[bool, StoreFailureError]:
        if user_id is None:
            return Ok(False)
        return (await self.get_user_preferences(user_id)).map(lambda p: bool(p.get(key, False)))

    async def toggle_feature_preview(
        self, key: str, user_id: str | int | None
    ) -> Result[RegistryOutcome, FeatureFlagError]:
        """Flip *user_id*'s preview of *key*; absent counts as off.

        Without an identified user this is a no-op reported as
        ``PREVIEW_SKIPPED``.
        """
        if user_id is None:
            return Ok(RegistryOutcome.PREVIEW_SKIPPED)
        if key not in self._flags:
            return Err(UnknownFlagError(key, operation="toggle_feature_preview"))

        async with self._user_lock(user_id):
            prefs = await self.get_user_preferences(user_id)
            if prefs.is_err():
                return prefs
            updated = dict(prefs.value)
            updated[key] = not updated.get(key, False)
            try:
                await self._preferences.set_preferences(user_id, updated)
            except Exception as exc:  # noqa: BLE001
                return self._store_failure("set_preferences", key, exc)

        logger.info("flag_preview_toggled", key=key, user_id=user_id, enabled=updated[key])
        if updated[key]:
            return Ok(RegistryOutcome.PREVIEW_ENABLED)
        return Ok(RegistryOutcome.PREVIEW_DISABLED)

    def _user_lock(self, user_id: str | int) -> asyncio.Lock:
        lock = self._user_locks.get(user_id)
        if lock is None:
            lock = self._user_locks[user_id] = asyncio.Lock()
        return lock

    # ------------------------------------------------------------------
    # Publication
    # ------------------------------------------------------------------

    async def get_published(self) -> Result[set[str], StoreFailureError]:
        return (await self._read_published()).map(set)

    async def is_published(self, key: str) -> Result[bool, FeatureFlagError]:
        if key not in self._flags:
            return Err(UnknownFlagError(key, operation="is_published"))
        return (await self.get_published()).map(lambda keys: key in keys)

    async def toggle_feature_publication(
        self, key: str
    ) -> Result[RegistryOutcome, FeatureFlagError]:
        """Publish *key* if it is stable and unpublished, otherwise unpublish it."""
        flag = self._flags.get(key)
        if flag is None:
            return Err(UnknownFlagError(key, operation="toggle_feature_publication"))

        async with self._write_lock:
            current = await self._read_published()
            if current.is_err():
                return current
            published = list(current.value)
            if key in published:
                published.remove(key)
                outcome = RegistryOutcome.FLAG_DISABLED
            elif not flag.stable:
                logger.warning("flag_publication_rejected", key=key, reason="unstable")
                return Err(UnstableFlagError(key, operation="toggle_feature_publication"))
            else:
                published.append(key)
                outcome = RegistryOutcome.FLAG_ENABLED
            try:
                await self._store.set(self.published_key, published)
            except Exception as exc:  # noqa: BLE001
                return self._store_failure("set_published", key, exc)

        logger.info("flag_publication_toggled", key=key, outcome=outcome.value)
        return Ok(outcome)

    async def _read_published(self) -> Result[list[str], StoreFailureError]:
        try:
            raw = await self._store.get(self.published_key, [])
        except Exception as exc:  # noqa: BLE001
            return self._store_failure("get_published", None, exc)
        if isinstance(raw, (set, frozenset)):
            return Ok(sorted(raw))
        if not isinstance(raw, (list, tuple)):
            return Ok([])
        return Ok(list(dict.fromkeys(raw)))

    # ------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------

    @property
    def groups(self) -> list[Group]:
        """Copies of the loaded groups, in stored order."""
        return [_copy_group(g) for g in self._groups]

    async def load(self) -> Result[list[Group], StoreFailureError]:
        """Replace the in-memory group set with what the store holds."""
        result = await self.get_groups()
        if result.is_ok():
            self._groups = result.value
            logger.debug("groups_loaded", count=len(self._groups))
        return result.map(lambda groups: [_copy_group(g) for g in groups])

    async def get_groups(self) -> Result[list[Group], StoreFailureError]:
        try:
            raw = await self._store.get(self.groups_key, [])
        except Exception as exc:  # noqa: BLE001
            return self._store_failure("get_groups", None, exc)
        if not isinstance(raw, (list, tuple)):
            return Ok([])
        try:
            return Ok([g if isinstance(g, Group) else Group.from_dict(g) for g in raw])
        except (KeyError, TypeError, AttributeError) as exc:
            cause = SerializationError(f"Malformed group payload: {exc}", payload_type="Group")
            return self._store_failure("get_groups", None, cause)

    async def save_groups(self, groups: list[Group]) -> Result[None, StoreFailureError]:
        """Write *groups* as the complete group set, then adopt it in memory."""
        try:
            await self._store.set(self.groups_key, [g.to_dict() for g in groups])
        except Exception as exc:  # noqa: BLE001
            return self._store_failure("save_groups", None, exc)
        self._groups = [_copy_group(g) for g in groups]
        return Ok(None)

    def find_group(self, key: str) -> Group | None:
        for group in self._groups:
            if group.key == key:
                return _copy_group(group)
        return None

    async def create_group(
        self,
        key: str,
        name: str = "",
        description: str = "",
        *,
        private: bool = True,
    ) -> Result[RegistryOutcome, DomainError]:
        """Create a group keyed by the slug of *key* and persist the full set."""
        try:
            slug = str(Slug.from_text(key))
        except ValidationError as exc:
            return Err(exc)

        async with self._write_lock:
            current = await self.get_groups()
            if current.is_err():
                return current
            groups = current.value
            if any(g.key == slug for g in groups):
                return Err(DuplicateGroupError(slug))
            groups.append(Group(key=slug, name=name, description=description, private=private))
            saved = await self.save_groups(groups)
            if saved.is_err():
                return saved

        logger.info("group_created", key=slug)
        return Ok(RegistryOutcome.GROUP_CREATED)

    async def delete_group(self, key: str) -> Result[RegistryOutcome, FeatureFlagError]:
        async with self._write_lock:
            current = await self.get_groups()
            if current.is_err():
                return current
            groups = current.value
            index = _index_of(groups, key)
            if index is None:
                return Err(GroupNotFoundError(key, operation="delete_group"))
            del groups[index]
            saved = await self.save_groups(groups)
            if saved.is_err():
                return saved

        logger.info("group_deleted", key=key)
        return Ok(RegistryOutcome.GROUP_DELETED)

    async def add_to_group(
        self, group_key: str, flag_key: str
    ) -> Result[RegistryOutcome, FeatureFlagError]:
        return await self._update_membership(
            group_key, "add_to_group", lambda g: g.add_flag(flag_key)
        )

    async def remove_from_group(
        self, group_key: str, flag_key: str
    ) -> Result[RegistryOutcome, FeatureFlagError]:
        return await self._update_membership(
            group_key, "remove_from_group", lambda g: g.remove_flag(flag_key)
        )

    async def _update_membership(
        self,
        group_key: str,
        operation: str,
        mutate: Callable[[Group], bool],
    ) -> Result[RegistryOutcome, FeatureFlagError]:
        async with self._write_lock:
            current = await self.get_groups()
            if current.is_err():
                return current
            groups = current.value
            index = _index_of(groups, group_key)
            if index is None:
                return Err(GroupNotFoundError(group_key, operation=operation))
            if not mutate(groups[index]):
                return Ok(RegistryOutcome.GROUP_UNCHANGED)
            saved = await self.save_groups(groups)
            if saved.is_err():
                return saved

        logger.info("group_updated", key=group_key, operation=operation)
        return Ok(RegistryOutcome.GROUP_UPDATED)

    # ------------------------------------------------------------------

    def _store_failure(
        self, operation: str, key: str | None, exc: BaseException
    ) -> Err[StoreFailureError]:
        logger.error("store_failure", operation=operation, key=key, error=repr(exc))
        return Err(StoreFailureError(operation, key=key, cause=exc))


def _index_of(groups: list[Group], key: str) -> int | None:
    for index, group in enumerate(groups):
        if group.key == key:
            return index
    return None


def _copy_group(group: Group) -> Group:
    return dataclasses.replace(group, flags=list(group.flags))


__all__ = ["FeatureRegistry"]
