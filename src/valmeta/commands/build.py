"""Command: build rule descriptors for the fields of a form file."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from valmeta.commands._base import ValmetaCommand, domain_options

if TYPE_CHECKING:
    from valmeta.commands._context import AppContext


@click.command(
    cls=ValmetaCommand,
    examples="""\
  valmeta build forms/signup.yaml
  valmeta build forms/signup.yaml --field age --field email
  valmeta build forms/signup.toml --attrs
  valmeta build forms/signup.yaml --locale fr
  valmeta --json build forms/signup.json --no-translate""",
)
@click.argument("form_file", type=click.Path(path_type=Path))
@click.option("--field", "fields", multiple=True, help="Only build these fields (repeatable).")
@click.option("--attrs", is_flag=True, help="Emit prefixed markup attributes instead of keys.")
@domain_options
@click.pass_obj
def build(
    app: AppContext,
    form_file: Path,
    fields: tuple[str, ...],
    attrs: bool,
    domain: str | None,
    no_translate: bool,
    locale: str | None,
) -> None:
    """Build client-side rule descriptors for FORM_FILE."""
    override = app.domain_override(domain, no_translate)
    svc = app.service("build_descriptors", locale=locale)
    app.emit(
        svc.describe_file(
            form_file,
            fields=fields or None,
            domain=override,
            attributes=attrs,
        )
    )
