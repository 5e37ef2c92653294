"""Kernel value types."""
from feature_registry.kernel.types.result import Err, Ok, Result
from feature_registry.kernel.types.slug import Slug

__all__ = ["Err", "Ok", "Result", "Slug"]
