"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, valmeta.toml only contains
overrides. An empty or missing file is a valid configuration.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from valmeta.domain.forms import DomainName
from valmeta.domain.translation import TranslationDomain

# Environment variables only carry strings.
_DISABLED_SPELLINGS = frozenset({"false", "0"})


class TranslationConfig(BaseModel):
    """[translation] section.

    ``domain`` is absent for the translator default, ``false`` to disable
    translation, or a domain name. The strings ``"false"`` and ``"0"``
    also disable it, so ``VALMETA_TRANSLATION__DOMAIN=false`` works.
    """

    model_config = {"frozen": True}

    enabled: bool = True
    domain: DomainName | Literal[False] | None = None
    locale: str = "en"
    catalog_dirs: list[str] = Field(default_factory=list)

    @field_validator("domain", mode="before")
    @classmethod
    def _disabled_spelling(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip().lower() in _DISABLED_SPELLINGS:
            return False
        return value

    @property
    def translation_domain(self) -> TranslationDomain:
        if not self.enabled:
            return TranslationDomain.disabled()
        return TranslationDomain.coerce(self.domain)


class RulesConfig(BaseModel):
    """[rules] section: how bounds and one-sided ranges are treated."""

    model_config = {"frozen": True}

    one_sided_range: bool = True
    zero_bound_is_empty: bool = True
    strict: bool = False


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    attribute_prefix: str = "data-val"
