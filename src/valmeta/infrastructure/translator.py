"""CatalogTranslator: the catalogue-backed :class:`Translator`."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

from valmeta.infrastructure.catalog import Catalogs, load_catalogs
from valmeta.infrastructure.templates import interpolate

DEFAULT_DOMAIN = "validators"


class CatalogTranslator:
    """Translate message ids through in-memory catalogues.

    Lookups that miss (unknown domain or id) fall back to the id itself.
    Parameters are substituted either way. Instances are read-only after
    construction and safe to share between threads.
    """

    def __init__(
        self,
        catalogs: Mapping[str, Mapping[str, str]] | None = None,
        *,
        locale: str = "en",
        default_domain: str = DEFAULT_DOMAIN,
    ) -> None:
        self._catalogs: Catalogs = {
            domain: dict(messages) for domain, messages in (catalogs or {}).items()
        }
        self.locale = locale
        self.default_domain = default_domain

    @classmethod
    def for_locale(
        cls,
        locale: str,
        search_dirs: Iterable[Path | str] = (),
        *,
        default_domain: str = DEFAULT_DOMAIN,
    ) -> CatalogTranslator:
        """Load packaged and user catalogues for *locale*.

        Raises:
            CatalogError: A catalogue cannot be loaded.
        """
        return cls(
            load_catalogs(locale, search_dirs),
            locale=locale,
            default_domain=default_domain,
        )

    @property
    def domains(self) -> list[str]:
        return sorted(self._catalogs)

    def lookup(self, message_id: str, domain: str | None = None) -> str | None:
        """Return the raw translated template, or None when missing."""
        return self._catalogs.get(domain or self.default_domain, {}).get(message_id)

    def translate(
        self,
        message_id: str,
        parameters: Mapping[str, object],
        domain: str | None,
    ) -> str:
        template = self.lookup(message_id, domain)
        if template is None:
            template = message_id
        return interpolate(template, parameters)
