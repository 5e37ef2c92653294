"""Feature-registry errors – the taxonomy returned from registry operations.

Every error carries ``detail={"key": ..., "operation": ...}`` so callers can
map it to their own messages without parsing strings.
"""

from __future__ import annotations

from typing import Any

from feature_registry.kernel.errors.domain import ConflictError, DomainError, NotFoundError
from feature_registry.kernel.errors.infrastructure import InfrastructureError


def _detail(key: str | None, operation: str | None) -> dict[str, Any]:
    return {"key": key, "operation": operation}


class FeatureFlagError(DomainError):
    """Base of the registry error taxonomy."""

    default_code = "feature_flag_error"

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        operation: str | None = None,
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault("detail", _detail(key, operation))
        super().__init__(message, **kwargs)
        self.key = key
        self.operation = operation


class UnknownFlagError(FeatureFlagError, NotFoundError):
    """Lookup or resolution of a key that was never registered."""

    default_code = "unknown_flag"

    def __init__(self, key: str, *, operation: str | None = None) -> None:
        super().__init__(
            f"Flag '{key}' is not registered",
            key=key,
            operation=operation,
            resource="Flag",
            identifier=key,
        )


class NotQueryableError(FeatureFlagError):
    """A query override referenced a flag that is not queryable."""

    default_code = "not_queryable"

    def __init__(self, key: str, *, operation: str | None = None) -> None:
        super().__init__(
            f"Flag '{key}' cannot be activated from a query", key=key, operation=operation
        )


class UnstableFlagError(FeatureFlagError):
    """Publication requested for a flag that is not marked stable."""

    default_code = "unpublishable_unstable"

    def __init__(self, key: str, *, operation: str | None = None) -> None:
        super().__init__(
            f"Flag '{key}' is unstable and cannot be published", key=key, operation=operation
        )


class GroupNotFoundError(FeatureFlagError, NotFoundError):
    """A group key that is not present in the loaded group set."""

    default_code = "group_not_found"

    def __init__(self, key: str, *, operation: str | None = None) -> None:
        super().__init__(
            f"Group '{key}' not found",
            key=key,
            operation=operation,
            resource="Group",
            identifier=key,
        )


class DuplicateFlagError(FeatureFlagError, ConflictError):
    """A flag with the same key is already registered."""

    default_code = "duplicate_flag"

    def __init__(self, key: str, *, operation: str | None = "add_flag") -> None:
        super().__init__(
            f"Flag '{key}' is already registered",
            key=key,
            operation=operation,
            resource="Flag",
            identifier=key,
        )


class DuplicateGroupError(FeatureFlagError, ConflictError):
    """A group with the same slug already exists."""

    default_code = "duplicate_group"

    def __init__(self, key: str, *, operation: str | None = "create_group") -> None:
        super().__init__(
            f"Group '{key}' already exists",
            key=key,
            operation=operation,
            resource="Group",
            identifier=key,
        )


class StoreFailureError(FeatureFlagError, InfrastructureError):
    """A persistent or preference store call failed.

    The original exception is kept as ``cause`` (and ``__cause__``).
    """

    default_code = "store_failure"

    def __init__(
        self,
        operation: str,
        *,
        key: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(
            f"Store failure during '{operation}'",
            key=key,
            operation=operation,
            cause=cause,
        )


__all__ = [
    "DuplicateFlagError",
    "DuplicateGroupError",
    "FeatureFlagError",
    "GroupNotFoundError",
    "NotQueryableError",
    "StoreFailureError",
    "UnknownFlagError",
    "UnstableFlagError",
]
