"""Field and form definitions: the builder's input, one per field."""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, field_validator

from valmeta.domain.constraints import BaseConstraint, parse_constraint
from valmeta.domain.translation import TranslationDomain

# A named domain; the empty string is neither a name nor "disabled".
DomainName = Annotated[str, Field(min_length=1)]


class FieldDescriptor(BaseModel):
    """A labelled field with its resolved, ordered constraints.

    Attributes:
        label: Human-readable field name, interpolated as ``field_name``.
        translation_domain: ``None`` for the builder default, ``False`` to
            disable translation, or a domain name.
        constraints: Constraints in declaration order.
    """

    model_config = {"frozen": True}

    label: str
    translation_domain: DomainName | Literal[False] | None = None
    constraints: tuple[BaseConstraint, ...] = ()

    @field_validator("constraints", mode="before")
    @classmethod
    def _parse_constraints(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, (list, tuple)):
            return tuple(parse_constraint(item) for item in value)
        return value

    @property
    def domain(self) -> TranslationDomain:
        return TranslationDomain.coerce(self.translation_domain)


class FormDefinition(BaseModel):
    """Named fields in render order, with an optional form-wide domain."""

    model_config = {"frozen": True}

    translation_domain: DomainName | Literal[False] | None = None
    fields: dict[str, FieldDescriptor] = Field(default_factory=dict)

    @property
    def domain(self) -> TranslationDomain:
        return TranslationDomain.coerce(self.translation_domain)

    def domain_for(self, name: str) -> TranslationDomain:
        """The field's own domain, falling back to the form-wide one."""
        return self.domain.resolve(self.fields[name].domain)
