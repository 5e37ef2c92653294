"""Application feature flags – Group entity."""
from __future__ import annotations

import dataclasses
from typing import Any, Mapping

from feature_registry.kernel.types.slug import Slug


@dataclasses.dataclass
class Group:
    """Named, ordered collection of flag keys.

    Membership is by key, so a group stays valid after a flag disappears
    from the registry. Persisting changes is the registry's job.
    """

    key: str
    name: str = ""
    description: str = ""
    flags: list[str] = dataclasses.field(default_factory=list)
    private: bool = True

    def __post_init__(self) -> None:
        if not self.name:
            self.name = self.key
        # keys stay unique; first occurrence keeps its position
        self.flags = list(dict.fromkeys(self.flags))

    @classmethod
    def from_name(
        cls, name: str, description: str = "", *, private: bool = True
    ) -> "Group":
        """Create a group whose key is the slug of *name*."""
        return cls(
            key=str(Slug.from_text(name)),
            name=name,
            description=description,
            private=private,
        )

    def add_flag(self, key: str) -> bool:
        if self.has_flag(key):
            return False
        self.flags.append(key)
        return True

    def has_flag(self, key: str) -> bool:
        return key in self.flags

    def remove_flag(self, key: str) -> bool:
        if not self.has_flag(key):
            return False
        self.flags.remove(key)
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "name": self.name,
            "description": self.description,
            "flags": list(self.flags),
            "private": self.private,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Group":
        return cls(
            key=data["key"],
            name=data.get("name", ""),
            description=data.get("description", ""),
            flags=list(data.get("flags", [])),
            private=data.get("private", True),
        )


__all__ = ["Group"]
