"""Application feature flags – Flag value object."""
from __future__ import annotations

import dataclasses
from typing import Any, Mapping


@dataclasses.dataclass(frozen=True)
class Flag:
    """Describes one feature gate and its static attributes.

    Publication is not part of the flag: it lives in the persistent store
    and is looked up by :class:`FeatureRegistry` at evaluation time.
    ``private`` is carried as metadata only; nothing in the registry reads it.
    """

    key: str
    title: str = ""
    description: str = ""
    enforced: bool = False
    queryable: bool = False
    private: bool = False
    stable: bool = False

    def __post_init__(self) -> None:
        if not self.title:
            object.__setattr__(self, "title", self.key)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Flag":
        """Build a flag from a plain mapping; unknown keys are ignored."""
        names = {f.name for f in dataclasses.fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})


__all__ = ["Flag"]
