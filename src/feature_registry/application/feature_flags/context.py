"""Application feature flags – CallerContext and the ambient QueryContext."""
from __future__ import annotations

import contextlib
import dataclasses
from contextvars import ContextVar
from typing import Iterator, Mapping


@dataclasses.dataclass(frozen=True)
class CallerContext:
    """Per-call inputs to flag resolution.

    ``user_id`` identifies the current user (``None`` for anonymous calls).
    ``query_flag`` is the flag key requested by the incoming request, if any.
    """

    user_id: str | int | None = None
    query_flag: str | None = None

    @classmethod
    def from_query(
        cls,
        params: Mapping[str, str],
        user_id: str | int | None = None,
        param: str = "feature",
    ) -> "CallerContext":
        """Read the requested flag key from request query parameters."""
        return cls(user_id=user_id, query_flag=params.get(param) or None)


_CTX_VAR: ContextVar[CallerContext | None] = ContextVar("_feature_registry_caller_ctx", default=None)


class QueryContext:
    """Ambient :class:`CallerContext` stored in a ``ContextVar``.

    Request middleware sets it once; :meth:`FeatureRegistry.is_enabled` falls
    back to it when no explicit context is passed.
    """

    @staticmethod
    def set(ctx: CallerContext) -> None:
        _CTX_VAR.set(ctx)

    @staticmethod
    def get() -> CallerContext | None:
        return _CTX_VAR.get()

    @staticmethod
    def get_or_empty() -> CallerContext:
        return _CTX_VAR.get() or CallerContext()

    @staticmethod
    def clear() -> None:
        _CTX_VAR.set(None)

    @staticmethod
    @contextlib.contextmanager
    def scope(ctx: CallerContext) -> Iterator[CallerContext]:
        """Bind *ctx* for the duration of a ``with`` block."""
        token = _CTX_VAR.set(ctx)
        try:
            yield ctx
        finally:
            _CTX_VAR.reset(token)


__all__ = ["CallerContext", "QueryContext"]
