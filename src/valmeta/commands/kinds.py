"""Command: list supported constraint kinds."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from valmeta.commands._base import ValmetaCommand

if TYPE_CHECKING:
    from valmeta.commands._context import AppContext


@click.command(
    cls=ValmetaCommand,
    examples="""\
  valmeta kinds
  valmeta --json kinds""",
)
@click.pass_obj
def kinds(app: AppContext) -> None:
    """List constraint kinds, their aliases, and the rule keys they emit."""
    from valmeta.services.describe import DescriptorService

    app.emit(DescriptorService().list_kinds())
