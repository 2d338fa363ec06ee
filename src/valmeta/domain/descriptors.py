"""Rule descriptor maps and their markup attribute form.

A :class:`RuleDescriptors` is the builder's output for one field: an
ordered, immutable mapping of unprefixed rule keys (``"val"``,
``"required"``, ``"range-min"``, ...) to scalar values. Insertion order
follows constraint processing order; a repeated key keeps its first
position but takes the last value.

Serializing keys into markup attributes is the host's job, but the
conventional ``data-val`` form is provided by :meth:`as_attributes` and
:func:`merge_attributes`.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

DescriptorValue = str | int | float | bool

VALIDATION_MARKER = "val"
DEFAULT_ATTRIBUTE_PREFIX = "data-val"

# Emitted keys per constraint kind, in emission order.
KIND_KEYS: dict[str, tuple[str, ...]] = {
    "required": ("required",),
    "regex": ("regex", "regex-pattern"),
    "range": ("range-min", "range-max", "range"),
    "length": ("length-min", "length-max", "length"),
    "less_than_or_equal": ("length-max", "length"),
    "greater_than_or_equal": ("length-min", "length"),
    "type": ("digits", "number"),
    "date": ("date",),
    "email": ("email",),
    "credit_card": ("creditcard",),
    "url": ("url",),
}


class RuleDescriptors(Mapping[str, DescriptorValue]):
    """Immutable ordered mapping of rule keys to values."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, DescriptorValue] | None = None) -> None:
        self._entries: dict[str, DescriptorValue] = dict(entries or {})

    def __getitem__(self, key: str) -> DescriptorValue:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"RuleDescriptors({self._entries!r})"

    def __hash__(self) -> int:
        return hash(tuple(self._entries.items()))

    @property
    def has_rules(self) -> bool:
        """True when the field carries client-side validation rules."""
        return self._entries.get(VALIDATION_MARKER) is True

    def to_dict(self) -> dict[str, DescriptorValue]:
        return dict(self._entries)

    def as_attributes(self, prefix: str = DEFAULT_ATTRIBUTE_PREFIX) -> dict[str, str]:
        """Render as markup attributes.

        Examples:
            >>> RuleDescriptors({"val": True, "range-min": 5}).as_attributes()
            {'data-val': 'true', 'data-val-range-min': '5'}
        """
        return {
            _attribute_name(prefix, key): _attribute_value(value)
            for key, value in self._entries.items()
        }


def merge_attributes(
    attrs: Mapping[str, Any],
    descriptors: RuleDescriptors,
    prefix: str = DEFAULT_ATTRIBUTE_PREFIX,
) -> dict[str, Any]:
    """Return a copy of *attrs* with the descriptor attributes laid over it.

    *attrs* itself is left untouched.
    """
    merged = dict(attrs)
    merged.update(descriptors.as_attributes(prefix))
    return merged


def _attribute_name(prefix: str, key: str) -> str:
    if key == VALIDATION_MARKER:
        return prefix
    return f"{prefix}-{key}"


def _attribute_value(value: DescriptorValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
