"""Placeholder interpolation for message templates via Jinja2.

Message templates use Jinja2 expression syntax (``{{ field_name }}``).
Rendering is sandboxed, unescaped, and leaves unknown placeholders in
place so a partial parameter set never blanks out text.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import lru_cache

from jinja2 import DebugUndefined, Template, TemplateError, TemplateSyntaxError
from jinja2.sandbox import SandboxedEnvironment

logger = logging.getLogger(__name__)


def build_template_environment() -> SandboxedEnvironment:
    """Build the sandboxed environment shared by all message templates."""
    return SandboxedEnvironment(
        undefined=DebugUndefined,
        autoescape=False,
        keep_trailing_newline=True,
    )


_ENV = build_template_environment()


@lru_cache(maxsize=1024)
def compile_template(source: str) -> Template:
    """Compile *source* once; compiled templates are safe to share.

    Raises:
        jinja2.TemplateSyntaxError: *source* is not a valid template.
    """
    return _ENV.from_string(source)


def interpolate(template: str, parameters: Mapping[str, object]) -> str:
    """Substitute ``{{ name }}`` placeholders from *parameters*.

    Without parameters the template is returned as-is. A template that
    fails to compile or to render is logged and returned untouched.

    Examples:
        >>> interpolate("{{ field_name }} is required.", {"field_name": "Age"})
        'Age is required.'
        >>> interpolate("from {{ min }} to {{ max }}", {"min": 2})
        'from 2 to {{ max }}'
    """
    if not parameters or "{" not in template:
        return template
    try:
        compiled = compile_template(template)
    except TemplateSyntaxError:
        logger.warning("Message template does not compile: %r", template, exc_info=True)
        return template
    try:
        return compiled.render(**parameters)
    except TemplateError:
        logger.warning("Message template does not render: %r", template, exc_info=True)
        return template
