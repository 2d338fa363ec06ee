"""DescriptorService: whole-form descriptor building for hosts and the CLI.

Wraps a :class:`RuleDescriptorBuilder` and reports through
:class:`ServiceResult`. Domain precedence for a field, highest first:
call-site override, field domain, form domain, builder default.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from valmeta.domain.constraints import KIND_ALIASES, ConstraintKind
from valmeta.domain.descriptors import DEFAULT_ATTRIBUTE_PREFIX, KIND_KEYS
from valmeta.domain.translation import TranslationDomain
from valmeta.infrastructure.forms import FormDefinitionError, load_form
from valmeta.infrastructure.translator import CatalogTranslator
from valmeta.services.builder import MalformedConstraintError, RuleDescriptorBuilder
from valmeta.services.result import ServiceResult

if TYPE_CHECKING:
    from valmeta.config.settings import ValmetaSettings
    from valmeta.domain.forms import FormDefinition

logger = logging.getLogger(__name__)


class DescriptorService:
    """Builds descriptors for every field of a form."""

    def __init__(
        self,
        builder: RuleDescriptorBuilder | None = None,
        *,
        attribute_prefix: str = DEFAULT_ATTRIBUTE_PREFIX,
    ) -> None:
        self.builder = builder or RuleDescriptorBuilder()
        self.attribute_prefix = attribute_prefix

    @classmethod
    def from_settings(
        cls,
        settings: ValmetaSettings,
        *,
        locale: str | None = None,
    ) -> DescriptorService:
        """Wire a catalogue translator and rule policy from *settings*.

        Raises:
            CatalogError: A configured catalogue cannot be loaded.
        """
        translation = settings.translation
        translator = None
        if translation.enabled:
            translator = CatalogTranslator.for_locale(
                locale or translation.locale,
                settings.catalog_search_dirs(),
            )
        builder = RuleDescriptorBuilder(
            translator,
            translation.translation_domain,
            rules=settings.rules,
        )
        return cls(builder, attribute_prefix=settings.output.attribute_prefix)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def describe_form(
        self,
        form: FormDefinition,
        *,
        fields: Iterable[str] | None = None,
        domain: TranslationDomain | None = None,
        attributes: bool = False,
    ) -> ServiceResult:
        """Build descriptors for *fields* (default: all) of *form*."""
        op = "build_descriptors"
        names = list(fields) if fields else list(form.fields)
        unknown = [n for n in names if n not in form.fields]
        if unknown:
            return ServiceResult.failure(
                op,
                "UNKNOWN_FIELD",
                f"Unknown field(s): {', '.join(unknown)}",
                available=list(form.fields),
            )

        described: dict[str, dict[str, Any]] = {}
        warnings: list[str] = []
        for name in names:
            field = form.fields[name]
            field_domain = form.domain_for(name).resolve(domain)
            try:
                descriptors = self.builder.build(field.constraints, field.label, field_domain)
            except MalformedConstraintError as exc:
                return ServiceResult.failure(
                    op,
                    "MALFORMED_CONSTRAINT",
                    f"Field '{name}': {exc}",
                    field=name,
                    kind=exc.constraint.kind,
                )
            if attributes:
                described[name] = descriptors.as_attributes(self.attribute_prefix)
            else:
                described[name] = descriptors.to_dict()
            skipped = _skipped_kinds(field.constraints)
            if skipped:
                warnings.append(f"Field '{name}': skipped unsupported kind(s) {', '.join(skipped)}")

        logger.debug("Built descriptors for %d field(s)", len(described))
        return ServiceResult(
            ok=True,
            op=op,
            data={"fields": described, "count": len(described)},
            warnings=warnings,
        )

    def describe_file(self, path: Path, **kwargs: Any) -> ServiceResult:
        """Load a form definition file and describe it."""
        if not path.is_file():
            return ServiceResult.failure(
                "build_descriptors", "FORM_NOT_FOUND", f"No such form file: {path}"
            )
        try:
            form = load_form(path)
        except FormDefinitionError as exc:
            return ServiceResult.failure(
                "build_descriptors", "INVALID_FORM", exc.reason, path=str(path)
            )
        return self.describe_form(form, **kwargs)

    def translate_message(
        self,
        message_id: str,
        parameters: Mapping[str, object] | None = None,
        *,
        domain: TranslationDomain | None = None,
    ) -> ServiceResult:
        """Translate one message id exactly as the builder would look it up."""
        message = self.builder.translate(message_id, parameters, domain)
        resolved = self.builder.translation_domain.resolve(domain)
        return ServiceResult(
            ok=True,
            op="translate",
            data={"message_id": message_id, "message": message, "domain": str(resolved)},
        )

    def list_kinds(self) -> ServiceResult:
        """Describe the supported constraint kinds and the keys they emit."""
        aliases: dict[str, list[str]] = {}
        for alias, kind in KIND_ALIASES.items():
            aliases.setdefault(kind.value, []).append(alias)
        items = [
            {
                "kind": kind.value,
                "aliases": aliases.get(kind.value, []),
                "keys": list(KIND_KEYS[kind.value]),
            }
            for kind in ConstraintKind
        ]
        return ServiceResult(ok=True, op="list_kinds", data={"items": items, "count": len(items)})


def _skipped_kinds(constraints: Iterable[Any]) -> list[str]:
    known = {k.value for k in ConstraintKind}
    return [c.kind for c in constraints if c.kind not in known]
