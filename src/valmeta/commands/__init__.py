"""Subcommand modules for valmeta.

Provides register_commands() which uses deferred imports to keep
``valmeta --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from valmeta.commands.build import build
    from valmeta.commands.kinds import kinds
    from valmeta.commands.translate import translate

    cli.add_command(build)
    cli.add_command(kinds)
    cli.add_command(translate)
