"""Constraint variants and the alias-aware constraint parser.

Each constraint kind is a frozen pydantic model carrying only the
parameters relevant to it. The ``kind`` literal is the discriminator.

Constraints arrive already resolved (discovery is the host's job), either
as model instances or as plain mappings read from a form file::

    {"kind": "range", "min": 18, "max": 65}
    {"kind": "Length", "max": 20}          # validator class name alias

Kinds this package does not know parse to :class:`UnknownConstraint` so
they can flow through the builder and be skipped there.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Annotated, Any, Literal, Self

from pydantic import BaseModel, Field, TypeAdapter, model_validator

# Bounds may also be strings (dates, numeric strings); they pass through verbatim.
Bound = int | float | str


class ConstraintKind(StrEnum):
    """Closed set of constraint kinds the builder translates."""

    REQUIRED = "required"
    REGEX = "regex"
    RANGE = "range"
    LENGTH_RANGE = "length"
    LESS_THAN_OR_EQUAL = "less_than_or_equal"
    GREATER_THAN_OR_EQUAL = "greater_than_or_equal"
    TYPE_CHECK = "type"
    DATE = "date"
    EMAIL = "email"
    CREDIT_CARD = "credit_card"
    URL = "url"


# Validator class names accepted in place of the canonical kind.
KIND_ALIASES: dict[str, ConstraintKind] = {
    "Required": ConstraintKind.REQUIRED,
    "Regex": ConstraintKind.REGEX,
    "Range": ConstraintKind.RANGE,
    "Length": ConstraintKind.LENGTH_RANGE,
    "LessThanOrEqual": ConstraintKind.LESS_THAN_OR_EQUAL,
    "GreaterThanOrEqual": ConstraintKind.GREATER_THAN_OR_EQUAL,
    "Type": ConstraintKind.TYPE_CHECK,
    "Date": ConstraintKind.DATE,
    "Email": ConstraintKind.EMAIL,
    "CardScheme": ConstraintKind.CREDIT_CARD,
    "Url": ConstraintKind.URL,
}


class BaseConstraint(BaseModel):
    """Common base for every constraint variant."""

    model_config = {"frozen": True}

    kind: str


class Required(BaseConstraint):
    kind: Literal["required"] = "required"


class Regex(BaseConstraint):
    """Pattern constraint.

    ``html_pattern`` is the browser-ready form of ``pattern`` (no
    delimiters or flags). When given it is emitted instead of ``pattern``.
    """

    kind: Literal["regex"] = "regex"
    pattern: str
    html_pattern: str | None = None


class Range(BaseConstraint):
    kind: Literal["range"] = "range"
    min: Bound | None = None
    max: Bound | None = None


class LengthRange(BaseConstraint):
    kind: Literal["length"] = "length"
    min: int | None = None
    max: int | None = None


class LessThanOrEqual(BaseConstraint):
    kind: Literal["less_than_or_equal"] = "less_than_or_equal"
    value: Bound


class GreaterThanOrEqual(BaseConstraint):
    kind: Literal["greater_than_or_equal"] = "greater_than_or_equal"
    value: Bound


class TypeCheck(BaseConstraint):
    """Type constraint. Only numeric type names produce descriptors."""

    kind: Literal["type"] = "type"
    type: str


class Date(BaseConstraint):
    kind: Literal["date"] = "date"


class Email(BaseConstraint):
    kind: Literal["email"] = "email"


class CreditCard(BaseConstraint):
    kind: Literal["credit_card"] = "credit_card"


class Url(BaseConstraint):
    kind: Literal["url"] = "url"


class UnknownConstraint(BaseConstraint):
    """A constraint whose kind is not translated; carried, then skipped."""

    options: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _reject_known_kind(self) -> Self:
        if normalize_kind(self.kind) in _KNOWN_KINDS:
            msg = f"Kind '{self.kind}' is known; use its constraint model instead"
            raise ValueError(msg)
        return self


KnownConstraint = Annotated[
    Required
    | Regex
    | Range
    | LengthRange
    | LessThanOrEqual
    | GreaterThanOrEqual
    | TypeCheck
    | Date
    | Email
    | CreditCard
    | Url,
    Field(discriminator="kind"),
]

_KNOWN_ADAPTER: TypeAdapter[Any] = TypeAdapter(KnownConstraint)
_KNOWN_KINDS = frozenset(k.value for k in ConstraintKind)


def normalize_kind(kind: str) -> str:
    """Map a validator class name alias to its canonical kind.

    Unrecognized names come back unchanged.

    Examples:
        >>> normalize_kind("Length")
        'length'
        >>> normalize_kind("range")
        'range'
        >>> normalize_kind("NotBlank")
        'NotBlank'
    """
    alias = KIND_ALIASES.get(kind)
    if alias is not None:
        return alias.value
    return kind


def parse_constraint(value: BaseConstraint | Mapping[str, Any]) -> BaseConstraint:
    """Turn a mapping into a constraint model; model instances pass through.

    Raises:
        pydantic.ValidationError: A known kind carries invalid parameters.
        ValueError: *value* is not a mapping, or has no ``kind`` key.
    """
    if isinstance(value, BaseConstraint):
        return value
    if not isinstance(value, Mapping):
        msg = f"Constraint must be a mapping with a 'kind': {value!r}"
        raise ValueError(msg)

    data = dict(value)
    raw_kind = data.pop("kind", None)
    if not isinstance(raw_kind, str) or not raw_kind:
        msg = f"Constraint is missing a 'kind': {dict(value)!r}"
        raise ValueError(msg)

    kind = normalize_kind(raw_kind)
    if kind in _KNOWN_KINDS:
        return _KNOWN_ADAPTER.validate_python({"kind": kind, **data})
    return UnknownConstraint(kind=raw_kind, options=data)
