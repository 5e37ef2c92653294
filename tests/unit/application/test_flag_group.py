"""Unit tests for Flag, Group, CallerContext and outcome value objects."""

from __future__ import annotations

import pytest

from feature_registry.application.feature_flags import (
    CallerContext,
    Evaluation,
    EvaluationReason,
    Flag,
    Group,
    QueryContext,
)
from feature_registry.kernel.errors import ValidationError


# ---------------------------------------------------------------------------
# Flag
# ---------------------------------------------------------------------------


class TestFlag:
    def test_title_defaults_to_key(self) -> None:
        assert Flag(key="dark_mode").title == "dark_mode"

    def test_defaults(self) -> None:
        flag = Flag(key="dark_mode")
        assert flag.description == ""
        assert not (flag.enforced or flag.queryable or flag.private or flag.stable)

    def test_explicit_title_kept(self) -> None:
        assert Flag(key="dark_mode", title="Dark mode").title == "Dark mode"

    def test_frozen(self) -> None:
        flag = Flag(key="dark_mode")
        with pytest.raises((AttributeError, TypeError)):
            flag.key = "other"  # type: ignore[misc]

    def test_from_mapping_ignores_unknown_keys(self) -> None:
        flag = Flag.from_mapping(
            {"key": "beta", "title": "Beta", "stable": True, "owner": "growth"}
        )
        assert flag == Flag(key="beta", title="Beta", stable=True)


# ---------------------------------------------------------------------------
# Group
# ---------------------------------------------------------------------------


class TestGroup:
    def test_name_defaults_to_key(self) -> None:
        group = Group(key="beta-users")
        assert group.name == "beta-users"
        assert group.flags == []
        assert group.private is True

    def test_from_name_slugifies(self) -> None:
        group = Group.from_name("Beta Users", "Early adopters", private=False)
        assert group.key == "beta-users"
        assert group.name == "Beta Users"
        assert group.description == "Early adopters"
        assert group.private is False

    def test_from_name_rejects_unsluggable(self) -> None:
        with pytest.raises(ValidationError):
            Group.from_name("???")

    def test_add_flag_is_idempotent(self) -> None:
        group = Group(key="g")
        assert group.add_flag("a") is True
        assert group.add_flag("a") is False
        assert group.flags == ["a"]

    def test_add_preserves_order(self) -> None:
        group = Group(key="g")
        for key in ("c", "a", "b"):
            group.add_flag(key)
        assert group.flags == ["c", "a", "b"]

    def test_has_and_remove(self) -> None:
        group = Group(key="g", flags=["a", "b"])
        assert group.has_flag("a")
        assert group.remove_flag("a") is True
        assert not group.has_flag("a")
        assert group.remove_flag("a") is False
        assert group.flags == ["b"]

    def test_constructor_drops_duplicates_keeping_first(self) -> None:
        group = Group(key="g", flags=["b", "a", "b", "a"])
        assert group.flags == ["b", "a"]
        assert group.to_dict()["flags"] == ["b", "a"]

    def test_dict_round_trip_drops_duplicates(self) -> None:
        group = Group.from_dict({"key": "g", "flags": ["a", "a", "b"]})
        assert group.flags == ["a", "b"]
        assert group.name == "g"
        assert Group.from_dict(group.to_dict()) == group


# ---------------------------------------------------------------------------
# CallerContext / QueryContext
# ---------------------------------------------------------------------------


class TestCallerContext:
    def test_from_query(self) -> None:
        ctx = CallerContext.from_query({"feature": "beta"}, user_id=7)
        assert ctx == CallerContext(user_id=7, query_flag="beta")

    def test_from_query_custom_param_and_blank(self) -> None:
        assert CallerContext.from_query({"ff": "x"}, param="ff").query_flag == "x"
        assert CallerContext.from_query({"feature": ""}).query_flag is None

    def test_ambient_scope_restores_previous(self) -> None:
        QueryContext.clear()
        with QueryContext.scope(CallerContext(user_id=1)) as ctx:
            assert QueryContext.get() is ctx
        assert QueryContext.get() is None
        assert QueryContext.get_or_empty() == CallerContext()


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


class TestEvaluation:
    def test_truthiness(self) -> None:
        assert Evaluation.on("a", EvaluationReason.ENFORCED)
        assert not Evaluation.off("a")

    def test_reason_text(self) -> None:
        assert EvaluationReason.QUERY.value == "Using query string"
        assert Evaluation.off("a").reason.value == ""


# ---------------------------------------------------------------------------
# Public surface smoke test
# ---------------------------------------------------------------------------


class TestPublicReExports:
    @pytest.mark.parametrize(
        "module",
        [
            "feature_registry.application.feature_flags",
            "feature_registry.kernel.errors",
            "feature_registry.kernel.types",
            "feature_registry.config",
            "feature_registry.testing.fakes",
        ],
    )
    def test_all_symbols_importable(self, module: str) -> None:
        import importlib

        mod = importlib.import_module(module)
        for name in mod.__all__:
            assert hasattr(mod, name), f"{name!r} missing"
