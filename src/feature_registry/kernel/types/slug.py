"""URL-safe slug value object used for group keys."""

from __future__ import annotations

import dataclasses
import re
import unicodedata
from typing import Final

from feature_registry.kernel.errors.domain import ValidationError

_SLUG_PATTERN: Final = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


@dataclasses.dataclass(frozen=True, slots=True)
class Slug:
    """URL-safe lowercase slug."""

    value: str

    def __post_init__(self) -> None:
        if not _SLUG_PATTERN.match(self.value):
            raise ValidationError(
                f"Invalid slug (must be lowercase alphanumeric + hyphens): {self.value!r}",
                errors=[{"field": "key", "value": self.value}],
            )

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_text(cls, text: str) -> "Slug":
        """Normalise arbitrary text into a URL-safe slug.

        ``"Beta Users"`` becomes ``"beta-users"``. Rules applied in order:
        fold accents to ASCII (``"Café"`` becomes ``"cafe"``), lowercase and
        strip, drop anything that is not a word char, space or
        hyphen, turn whitespace/underscore runs into a hyphen, collapse
        repeated hyphens, strip edge hyphens.
        """
        value = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode()
        value = value.lower().strip()
        value = re.sub(r"[^\w\s-]", "", value)
        value = re.sub(r"[\s_]+", "-", value)
        value = re.sub(r"-+", "-", value).strip("-")
        return cls(value)


__all__ = ["Slug"]
