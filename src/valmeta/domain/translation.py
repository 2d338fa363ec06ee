"""Translation domain selection and the translator contract.

A translation domain is one of three states:

- ``default``: no preference, defer to the next level up
  (field → builder → translator).
- ``explicit(name)``: look messages up in the named domain.
- ``disabled``: do not translate, use the raw message id.

Host configuration speaks the looser ``str | None | False`` dialect;
:meth:`TranslationDomain.coerce` converts it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol, runtime_checkable


class DomainMode(StrEnum):
    DEFAULT = "default"
    EXPLICIT = "explicit"
    DISABLED = "disabled"


@dataclass(frozen=True)
class TranslationDomain:
    """Tri-state translation domain selector."""

    mode: DomainMode = DomainMode.DEFAULT
    name: str | None = None

    def __post_init__(self) -> None:
        if (self.mode is DomainMode.EXPLICIT) != (self.name is not None):
            msg = "An explicit domain needs a name; other modes must not have one"
            raise ValueError(msg)

    @classmethod
    def default(cls) -> TranslationDomain:
        return cls()

    @classmethod
    def explicit(cls, name: str) -> TranslationDomain:
        return cls(DomainMode.EXPLICIT, name)

    @classmethod
    def disabled(cls) -> TranslationDomain:
        return cls(DomainMode.DISABLED)

    @classmethod
    def coerce(cls, value: TranslationDomain | str | bool | None) -> TranslationDomain:
        """Convert ``str | None | False`` (or an instance) to a selector.

        Examples:
            >>> TranslationDomain.coerce(None).mode
            <DomainMode.DEFAULT: 'default'>
            >>> TranslationDomain.coerce(False).mode
            <DomainMode.DISABLED: 'disabled'>
            >>> TranslationDomain.coerce("forms").name
            'forms'
        """
        if isinstance(value, TranslationDomain):
            return value
        if value is None:
            return cls.default()
        if value is False:
            return cls.disabled()
        if isinstance(value, str) and value:
            return cls.explicit(value)
        msg = f"Invalid translation domain: {value!r}"
        raise ValueError(msg)

    @property
    def is_default(self) -> bool:
        return self.mode is DomainMode.DEFAULT

    @property
    def is_disabled(self) -> bool:
        return self.mode is DomainMode.DISABLED

    def resolve(self, override: TranslationDomain | None) -> TranslationDomain:
        """Return *override* unless it is absent or ``default``."""
        if override is None or override.is_default:
            return self
        return override

    def __str__(self) -> str:
        if self.mode is DomainMode.EXPLICIT:
            return str(self.name)
        return self.mode.value


@runtime_checkable
class Translator(Protocol):
    """Message translation capability consumed by the builder.

    *domain* is ``None`` when the translator's own default applies.
    Implementations must be safe for concurrent reads.
    """

    def translate(
        self,
        message_id: str,
        parameters: Mapping[str, object],
        domain: str | None,
    ) -> str: ...
