"""Message catalogue loading with per-project override support.

Catalogues are flat YAML mappings of message id to translated template,
one file per domain and locale: ``<domain>.<locale>.yaml`` (``.yml`` is
accepted too). Packaged catalogues live in ``valmeta/translations``;
directories passed as *search_dirs* are layered on top, message by
message, in the order given.

Locale fallback: for ``fr_CA`` the ``fr`` catalogue loads first and
``fr_CA`` entries override it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from importlib.resources import files
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any

from jinja2 import TemplateSyntaxError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from valmeta.infrastructure.templates import compile_template

logger = logging.getLogger(__name__)

CATALOG_SUFFIXES = (".yaml", ".yml")

Catalogs = dict[str, dict[str, str]]


class CatalogError(Exception):
    """A catalogue file cannot be read or holds an invalid template."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


def locale_chain(locale: str) -> list[str]:
    """Locales to load, least specific first.

    Examples:
        >>> locale_chain("fr_CA")
        ['fr', 'fr_CA']
        >>> locale_chain("de")
        ['de']
    """
    normalized = locale.replace("-", "_")
    base = normalized.split("_", 1)[0]
    if base == normalized:
        return [normalized]
    return [base, normalized]


def packaged_catalog_root() -> Traversable:
    return files("valmeta") / "translations"


def load_catalogs(
    locale: str,
    search_dirs: Iterable[Path | str] = (),
    *,
    include_packaged: bool = True,
) -> Catalogs:
    """Load every catalogue for *locale*, merged per domain.

    Raises:
        CatalogError: A catalogue is unreadable, not a mapping, or holds a
            template that does not compile.
    """
    roots: list[Traversable] = []
    if include_packaged:
        roots.append(packaged_catalog_root())
    roots.extend(Path(d) for d in search_dirs)

    catalogs: Catalogs = {}
    for loc in locale_chain(locale):
        for root in roots:
            for domain, entry in _catalog_files(root, loc):
                messages = _read_catalog(entry)
                catalogs.setdefault(domain, {}).update(messages)
                logger.debug("Loaded %d messages from %s", len(messages), entry)
    return catalogs


def _catalog_files(root: Traversable, locale: str) -> Iterator[tuple[str, Traversable]]:
    """Yield ``(domain, file)`` pairs under *root* for *locale*."""
    if not root.is_dir():
        return
    for entry in sorted(root.iterdir(), key=lambda e: e.name):
        if not entry.is_file():
            continue
        name = entry.name
        suffix = next((s for s in CATALOG_SUFFIXES if name.endswith(s)), None)
        if suffix is None:
            continue
        domain, _, file_locale = name[: -len(suffix)].rpartition(".")
        if domain and file_locale == locale:
            yield domain, entry


def _read_catalog(entry: Traversable) -> dict[str, str]:
    source = str(entry)
    try:
        data: Any = YAML(typ="safe").load(entry.read_text(encoding="utf-8"))
    except (OSError, YAMLError) as exc:
        raise CatalogError(source, str(exc)) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise CatalogError(source, "catalogue must be a mapping of message id to text")

    messages: dict[str, str] = {}
    for message_id, text in data.items():
        if not isinstance(message_id, str) or not isinstance(text, str):
            raise CatalogError(source, f"non-string entry for {message_id!r}")
        try:
            compile_template(text)
        except TemplateSyntaxError as exc:
            raise CatalogError(source, f"invalid template for {message_id!r}: {exc}") from exc
        messages[message_id] = text
    return messages
