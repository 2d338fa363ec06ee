"""Command: translate a single message id."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from valmeta.commands._base import ValmetaCommand, domain_options

if TYPE_CHECKING:
    from valmeta.commands._context import AppContext


def _parse_params(
    _ctx: click.Context, _param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    params: dict[str, str] = {}
    for raw in values:
        name, sep, value = raw.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected NAME=VALUE, got '{raw}'")
        params[name.strip()] = value
    return params


@click.command(
    cls=ValmetaCommand,
    examples="""\
  valmeta translate "The '{{ field_name }}' field is required." -p field_name=Age --locale fr
  valmeta translate "Age" --domain forms --locale de""",
)
@click.argument("message_id")
@click.option(
    "-p",
    "--param",
    "params",
    multiple=True,
    callback=_parse_params,
    help="Placeholder value as NAME=VALUE (repeatable).",
)
@domain_options
@click.pass_obj
def translate(
    app: AppContext,
    message_id: str,
    params: dict[str, str],
    domain: str | None,
    no_translate: bool,
    locale: str | None,
) -> None:
    """Translate MESSAGE_ID as the descriptor builder would."""
    override = app.domain_override(domain, no_translate)
    svc = app.service("translate", locale=locale)
    app.emit(svc.translate_message(message_id, params, domain=override))
