"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides descriptor service construction and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from valmeta.domain.translation import TranslationDomain
from valmeta.infrastructure.catalog import CatalogError
from valmeta.output.formatters import OutputSettings, format_result
from valmeta.services.result import ServiceResult

if TYPE_CHECKING:
    from valmeta.config.settings import ValmetaSettings
    from valmeta.services.describe import DescriptorService


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``. Catalogues load only
    when a command asks for the service, so ``--help`` and ``--version``
    never touch the filesystem beyond config discovery.
    """

    def __init__(self, settings: ValmetaSettings) -> None:
        self.settings = settings

        from valmeta.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def service(self, op: str, *, locale: str | None = None) -> DescriptorService:
        """Build the descriptor service, emitting a failure for broken catalogues."""
        from valmeta.services.describe import DescriptorService

        try:
            return DescriptorService.from_settings(self.settings, locale=locale)
        except CatalogError as exc:
            self.emit(
                ServiceResult.failure(op, "CATALOG_ERROR", str(exc), source=exc.source)
            )
            raise  # unreachable: emit() exits on failure

    @staticmethod
    def domain_override(domain: str | None, no_translate: bool) -> TranslationDomain | None:
        """Map the ``--domain`` / ``--no-translate`` flags to an override."""
        if no_translate and domain:
            raise click.UsageError("--domain and --no-translate are mutually exclusive.")
        if no_translate:
            return TranslationDomain.disabled()
        if domain:
            return TranslationDomain.explicit(domain)
        return None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
