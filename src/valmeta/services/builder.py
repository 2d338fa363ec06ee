"""RuleDescriptorBuilder: constraints in, rule descriptors out.

For one field, the builder walks the constraint list in order and writes
descriptor entries into a fresh map:

- an empty list gives an empty map;
- otherwise ``val = True`` comes first, then each constraint's entries;
- a later write to an existing key replaces its value (last write wins);
- unknown kinds and non-numeric type checks write nothing.

Messages go through the optional translator, which substitutes the
``{{ placeholder }}`` slots itself. When nothing translates (no
translator, or a disabled domain) the builder fills the slots of the
English message id, so descriptors always carry concrete text.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from valmeta.config.models import RulesConfig
from valmeta.domain import messages
from valmeta.domain.constraints import (
    BaseConstraint,
    ConstraintKind,
    GreaterThanOrEqual,
    LengthRange,
    LessThanOrEqual,
    Range,
    Regex,
    TypeCheck,
)
from valmeta.domain.descriptors import VALIDATION_MARKER, DescriptorValue, RuleDescriptors
from valmeta.domain.translation import TranslationDomain, Translator
from valmeta.infrastructure.templates import interpolate

logger = logging.getLogger(__name__)

INTEGER_TYPES = frozenset({"integer", "int", "long"})
NUMBER_TYPES = frozenset({"float", "numeric", "real"})

# Bounds treated as absent when zero_bound_is_empty is on.
_LOOSE_EMPTY: tuple[object, ...] = (0, "", "0")


class MalformedConstraintError(ValueError):
    """Raised in strict mode for bounds that can never be satisfied."""

    def __init__(self, constraint: BaseConstraint, reason: str) -> None:
        super().__init__(f"{constraint.kind}: {reason}")
        self.constraint = constraint
        self.reason = reason


class _Emission:
    """Mutable scratch state for a single build() call."""

    __slots__ = ("entries", "field_name", "domain")

    def __init__(self, field_name: str, domain: TranslationDomain) -> None:
        self.entries: dict[str, DescriptorValue] = {VALIDATION_MARKER: True}
        self.field_name = field_name
        self.domain = domain


class RuleDescriptorBuilder:
    """Translate a field's constraints into client-side rule descriptors.

    Args:
        translator: Optional message translator. Without one, message ids
            pass through untranslated.
        translation_domain: Default domain for every message; ``False``
            disables translation. Per-call domains take precedence.
        rules: Bound emptiness, one-sided range and strictness policy.

    Builders hold no per-call state and may be shared across threads.
    """

    def __init__(
        self,
        translator: Translator | None = None,
        translation_domain: TranslationDomain | str | bool | None = None,
        *,
        rules: RulesConfig | None = None,
    ) -> None:
        self.translator = translator
        self.translation_domain = TranslationDomain.coerce(translation_domain)
        self.rules = rules or RulesConfig()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(
        self,
        constraints: Iterable[BaseConstraint],
        label: str,
        translation_domain: TranslationDomain | str | bool | None = None,
    ) -> RuleDescriptors:
        """Build the descriptor map for one field."""
        constraint_list = list(constraints)
        if not constraint_list:
            return RuleDescriptors()

        domain = self.translation_domain.resolve(TranslationDomain.coerce(translation_domain))
        emission = _Emission(self._translate(label, {}, domain), domain)

        for constraint in constraint_list:
            handler = _HANDLERS.get(constraint.kind)
            if handler is None:
                logger.debug("Skipping unrecognized constraint kind %r", constraint.kind)
                continue
            handler(self, emission, constraint)

        return RuleDescriptors(emission.entries)

    def translate(
        self,
        message_id: str,
        parameters: Mapping[str, object] | None = None,
        translation_domain: TranslationDomain | str | bool | None = None,
    ) -> str:
        """Translate *message_id*, or return it verbatim when untranslated.

        No translator, or a disabled resolved domain, returns *message_id*
        without placeholder substitution.
        """
        domain = self.translation_domain.resolve(TranslationDomain.coerce(translation_domain))
        return self._translate(message_id, parameters or {}, domain)

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def _translate(
        self,
        message_id: str,
        parameters: Mapping[str, object],
        domain: TranslationDomain,
    ) -> str:
        if self.translator is None or domain.is_disabled:
            return message_id
        return self.translator.translate(message_id, parameters, domain.name)

    def _message(self, emission: _Emission, message_id: str, **parameters: Any) -> str:
        parameters["field_name"] = emission.field_name
        if self.translator is None or emission.domain.is_disabled:
            return interpolate(message_id, parameters)
        return self.translator.translate(message_id, parameters, emission.domain.name)

    def _is_empty(self, bound: object) -> bool:
        if bound is None:
            return True
        if not self.rules.zero_bound_is_empty or isinstance(bound, bool):
            return False
        return bound in _LOOSE_EMPTY

    # ------------------------------------------------------------------
    # Per-kind handlers
    # ------------------------------------------------------------------

    def _required(self, emission: _Emission, constraint: BaseConstraint) -> None:
        emission.entries["required"] = self._message(emission, messages.REQUIRED)

    def _regex(self, emission: _Emission, constraint: Regex) -> None:
        emission.entries["regex"] = self._message(emission, messages.REGEX)
        emission.entries["regex-pattern"] = constraint.html_pattern or constraint.pattern

    def _range(self, emission: _Emission, constraint: Range) -> None:
        has_min = not self._is_empty(constraint.min)
        has_max = not self._is_empty(constraint.max)
        if self.rules.strict:
            _check_order(constraint, constraint.min, constraint.max, has_min and has_max)
        if not (has_min and has_max) and not self.rules.one_sided_range:
            return

        entries = emission.entries
        if has_min:
            entries["range-min"] = constraint.min
            entries["range"] = self._message(emission, messages.RANGE_MIN, limit=constraint.min)
        if has_max:
            entries["range-max"] = constraint.max
            entries["range"] = self._message(emission, messages.RANGE_MAX, limit=constraint.max)
        if has_min and has_max:
            entries["range"] = self._message(
                emission, messages.RANGE_BOTH, min=constraint.min, max=constraint.max
            )

    def _length(self, emission: _Emission, constraint: LengthRange) -> None:
        has_min = not self._is_empty(constraint.min)
        has_max = not self._is_empty(constraint.max)
        if self.rules.strict:
            for bound in (constraint.min, constraint.max):
                if bound is not None and bound < 0:
                    raise MalformedConstraintError(constraint, f"negative length bound {bound}")
            _check_order(constraint, constraint.min, constraint.max, has_min and has_max)

        entries = emission.entries
        if has_min:
            entries["length-min"] = constraint.min
            entries["length"] = self._message(emission, messages.LENGTH_MIN, limit=constraint.min)
        if has_max:
            entries["length-max"] = constraint.max
            entries["length"] = self._message(emission, messages.LENGTH_MAX, limit=constraint.max)
        if has_min and has_max:
            entries["length"] = self._message(
                emission, messages.LENGTH_BOTH, min=constraint.min, max=constraint.max
            )

    def _less_than_or_equal(self, emission: _Emission, constraint: LessThanOrEqual) -> None:
        emission.entries["length-max"] = constraint.value
        emission.entries["length"] = self._message(
            emission, messages.LESS_THAN_OR_EQUAL, limit=constraint.value
        )

    def _greater_than_or_equal(self, emission: _Emission, constraint: GreaterThanOrEqual) -> None:
        emission.entries["length-min"] = constraint.value
        emission.entries["length"] = self._message(
            emission, messages.GREATER_THAN_OR_EQUAL, limit=constraint.value
        )

    def _type(self, emission: _Emission, constraint: TypeCheck) -> None:
        if constraint.type in INTEGER_TYPES:
            emission.entries["digits"] = self._message(emission, messages.INTEGER)
        elif constraint.type in NUMBER_TYPES:
            emission.entries["number"] = self._message(emission, messages.NUMBER)

    def _date(self, emission: _Emission, constraint: BaseConstraint) -> None:
        emission.entries["date"] = self._message(emission, messages.DATE)

    def _email(self, emission: _Emission, constraint: BaseConstraint) -> None:
        emission.entries["email"] = self._message(emission, messages.EMAIL)

    def _credit_card(self, emission: _Emission, constraint: BaseConstraint) -> None:
        emission.entries["creditcard"] = self._message(emission, messages.CREDIT_CARD)

    def _url(self, emission: _Emission, constraint: BaseConstraint) -> None:
        emission.entries["url"] = self._message(emission, messages.URL)


def _check_order(constraint: BaseConstraint, low: Any, high: Any, both: bool) -> None:
    if not both:
        return
    try:
        inverted = low > high
    except TypeError as exc:
        msg = f"bounds {low!r} and {high!r} do not compare"
        raise MalformedConstraintError(constraint, msg) from exc
    if inverted:
        raise MalformedConstraintError(constraint, f"min {low!r} is greater than max {high!r}")


_Handler = Callable[[RuleDescriptorBuilder, _Emission, Any], None]

_HANDLERS: dict[str, _Handler] = {
    ConstraintKind.REQUIRED: RuleDescriptorBuilder._required,
    ConstraintKind.REGEX: RuleDescriptorBuilder._regex,
    ConstraintKind.RANGE: RuleDescriptorBuilder._range,
    ConstraintKind.LENGTH_RANGE: RuleDescriptorBuilder._length,
    ConstraintKind.LESS_THAN_OR_EQUAL: RuleDescriptorBuilder._less_than_or_equal,
    ConstraintKind.GREATER_THAN_OR_EQUAL: RuleDescriptorBuilder._greater_than_or_equal,
    ConstraintKind.TYPE_CHECK: RuleDescriptorBuilder._type,
    ConstraintKind.DATE: RuleDescriptorBuilder._date,
    ConstraintKind.EMAIL: RuleDescriptorBuilder._email,
    ConstraintKind.CREDIT_CARD: RuleDescriptorBuilder._credit_card,
    ConstraintKind.URL: RuleDescriptorBuilder._url,
}
