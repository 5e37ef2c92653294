"""Kernel – framework-agnostic errors and value types."""

from feature_registry.kernel.errors import (
    BaseError,
    DomainError,
    FeatureFlagError,
    InfrastructureError,
)
from feature_registry.kernel.types import Err, Ok, Result, Slug

__all__ = [
    "BaseError",
    "DomainError",
    "Err",
    "FeatureFlagError",
    "InfrastructureError",
    "Ok",
    "Result",
    "Slug",
]
