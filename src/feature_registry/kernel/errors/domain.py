"""Domain errors – business rule and invariant violations."""

from __future__ import annotations

from typing import Any

from feature_registry.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a domain rule / invariant is violated."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Input data does not meet validation rules.

    ``errors`` is a list of field-level validation failures.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


class NotFoundError(DomainError):
    """The requested resource does not exist.

    *message* defaults to ``"<resource> '<identifier>' not found"``.
    """

    default_code = "not_found"

    def __init__(
        self,
        message: str | None = None,
        *,
        resource: str = "Resource",
        identifier: Any = None,
        **kwargs: Any,
    ) -> None:
        if message is None:
            message = f"{resource} not found"
            if identifier is not None:
                message = f"{resource} '{identifier}' not found"
        super().__init__(message, **kwargs)
        self.resource = resource
        self.identifier = identifier


class ConflictError(DomainError):
    """The operation conflicts with existing state."""

    default_code = "conflict"

    def __init__(
        self,
        message: str | None = None,
        *,
        resource: str = "Resource",
        identifier: Any = None,
        **kwargs: Any,
    ) -> None:
        if message is None:
            message = f"{resource} '{identifier}' already exists"
        super().__init__(message, **kwargs)
        self.resource = resource
        self.identifier = identifier


__all__ = [
    "ConflictError",
    "DomainError",
    "NotFoundError",
    "ValidationError",
]
