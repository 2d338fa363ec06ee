"""Tests for constraint models and the alias-aware parser."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from valmeta.domain.constraints import (
    KIND_ALIASES,
    ConstraintKind,
    CreditCard,
    LengthRange,
    Range,
    Regex,
    Required,
    TypeCheck,
    UnknownConstraint,
    normalize_kind,
    parse_constraint,
)


class TestConstraintKind:
    def test_every_alias_maps_to_a_kind(self) -> None:
        assert set(KIND_ALIASES.values()) == set(ConstraintKind)

    def test_values_are_strings(self) -> None:
        assert ConstraintKind.LENGTH_RANGE == "length"
        assert ConstraintKind.CREDIT_CARD == "credit_card"


class TestNormalizeKind:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Required", "required"),
            ("Length", "length"),
            ("CardScheme", "credit_card"),
            ("LessThanOrEqual", "less_than_or_equal"),
            ("range", "range"),
            ("NotBlank", "NotBlank"),
        ],
    )
    def test_aliases(self, raw: str, expected: str) -> None:
        assert normalize_kind(raw) == expected


class TestParseConstraint:
    def test_instance_passes_through(self) -> None:
        c = Required()
        assert parse_constraint(c) is c

    def test_canonical_kind(self) -> None:
        c = parse_constraint({"kind": "range", "min": 18, "max": 65})
        assert isinstance(c, Range)
        assert c.min == 18
        assert c.max == 65

    def test_alias_kind(self) -> None:
        c = parse_constraint({"kind": "Length", "max": 20})
        assert isinstance(c, LengthRange)
        assert c.kind == "length"
        assert c.min is None
        assert c.max == 20

    def test_card_scheme_alias(self) -> None:
        assert isinstance(parse_constraint({"kind": "CardScheme"}), CreditCard)

    def test_regex_with_html_pattern(self) -> None:
        c = parse_constraint({"kind": "regex", "pattern": "/^\\d+$/", "html_pattern": "^\\d+$"})
        assert isinstance(c, Regex)
        assert c.html_pattern == "^\\d+$"

    def test_numeric_string_bounds_kept_verbatim(self) -> None:
        c = parse_constraint({"kind": "range", "min": "5"})
        assert isinstance(c, Range)
        assert c.min == "5"

    def test_float_bounds(self) -> None:
        c = parse_constraint({"kind": "range", "max": 2.5})
        assert isinstance(c, Range)
        assert c.max == 2.5

    def test_type_check(self) -> None:
        c = parse_constraint({"kind": "Type", "type": "integer"})
        assert isinstance(c, TypeCheck)
        assert c.type == "integer"

    def test_unknown_kind_keeps_options(self) -> None:
        c = parse_constraint({"kind": "NotBlank", "message": "nope"})
        assert isinstance(c, UnknownConstraint)
        assert c.kind == "NotBlank"
        assert c.options == {"message": "nope"}

    def test_missing_kind_raises(self) -> None:
        with pytest.raises(ValueError, match="missing a 'kind'"):
            parse_constraint({"min": 3})

    @pytest.mark.parametrize("value", [5, "required", ["kind", "range"], None])
    def test_non_mapping_raises(self, value: object) -> None:
        with pytest.raises(ValueError, match="must be a mapping"):
            parse_constraint(value)  # type: ignore[arg-type]

    def test_empty_kind_raises(self) -> None:
        with pytest.raises(ValueError, match="missing a 'kind'"):
            parse_constraint({"kind": ""})

    def test_known_kind_with_bad_params_raises(self) -> None:
        with pytest.raises(ValidationError):
            parse_constraint({"kind": "regex"})

    def test_length_bounds_must_be_integers(self) -> None:
        with pytest.raises(ValidationError):
            parse_constraint({"kind": "length", "min": "abc"})


class TestModels:
    def test_frozen(self) -> None:
        c = Range(min=1, max=2)
        with pytest.raises(ValidationError):
            c.min = 3  # type: ignore[misc]

    def test_unknown_rejects_known_kind(self) -> None:
        with pytest.raises(ValidationError):
            UnknownConstraint(kind="required")

    def test_unknown_rejects_known_alias(self) -> None:
        with pytest.raises(ValidationError):
            UnknownConstraint(kind="Email")
