"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   ├── ValidationError
    │   ├── NotFoundError
    │   ├── ConflictError
    │   └── FeatureFlagError     (feature_flags.py)
    │       ├── UnknownFlagError
    │       ├── NotQueryableError
    │       ├── UnstableFlagError
    │       ├── GroupNotFoundError
    │       ├── DuplicateFlagError
    │       ├── DuplicateGroupError
    │       └── StoreFailureError
    └── InfrastructureError      (infrastructure.py)
        ├── ConnectionError
        └── SerializationError
"""

from feature_registry.kernel.errors.base import BaseError
from feature_registry.kernel.errors.domain import (
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from feature_registry.kernel.errors.feature_flags import (
    DuplicateFlagError,
    DuplicateGroupError,
    FeatureFlagError,
    GroupNotFoundError,
    NotQueryableError,
    StoreFailureError,
    UnknownFlagError,
    UnstableFlagError,
)
from feature_registry.kernel.errors.infrastructure import (
    ConnectionError,
    InfrastructureError,
    SerializationError,
)

__all__ = [
    "BaseError",
    "ConflictError",
    "ConnectionError",
    "DomainError",
    "DuplicateFlagError",
    "DuplicateGroupError",
    "FeatureFlagError",
    "GroupNotFoundError",
    "InfrastructureError",
    "NotFoundError",
    "NotQueryableError",
    "SerializationError",
    "StoreFailureError",
    "UnknownFlagError",
    "UnstableFlagError",
    "ValidationError",
]
