"""Unit tests for kernel value types – Result and Slug."""

from __future__ import annotations

import pytest

from feature_registry.kernel.errors import UnknownFlagError, ValidationError
from feature_registry.kernel.types import Err, Ok, Slug


class TestResult:
    def test_ok(self) -> None:
        result = Ok(3)
        assert result.is_ok() and not result.is_err()
        assert result.unwrap() == 3
        assert result.unwrap_or(0) == 3

    def test_ok_map(self) -> None:
        assert Ok(2).map(lambda v: v * 2) == Ok(4)

    def test_err_unwrap_raises(self) -> None:
        error = UnknownFlagError("beta")
        result = Err(error)
        assert result.is_err()
        with pytest.raises(UnknownFlagError):
            result.unwrap()

    def test_err_unwrap_or_and_map(self) -> None:
        result = Err(UnknownFlagError("beta"))
        assert result.unwrap_or(False) is False
        assert result.map(lambda v: v) is result

    def test_equality(self) -> None:
        error = UnknownFlagError("beta")
        assert Ok("a") == Ok("a")
        assert Ok("a") != Ok("b")
        assert Err(error) == Err(error)
        assert Ok("a") != Err(error)

    def test_repr(self) -> None:
        assert repr(Ok(1)) == "Ok(1)"


class TestSlug:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Beta Users", "beta-users"),
            ("  Early  Access!! ", "early-access"),
            ("snake_case_name", "snake-case-name"),
            ("already-a-slug", "already-a-slug"),
            ("--Edge--", "edge"),
            ("Café Users", "cafe-users"),
            ("Überprüfung", "uberprufung"),
        ],
    )
    def test_from_text(self, text: str, expected: str) -> None:
        assert str(Slug.from_text(text)) == expected

    def test_rejects_empty(self) -> None:
        with pytest.raises(ValidationError):
            Slug.from_text("!!!")

    def test_rejects_text_without_ascii_letters(self) -> None:
        with pytest.raises(ValidationError):
            Slug.from_text("日本")

    def test_rejects_invalid_value(self) -> None:
        with pytest.raises(ValidationError):
            Slug("Not A Slug")
