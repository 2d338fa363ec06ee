"""Form definition files: YAML, TOML or JSON into a FormDefinition.

Layout (YAML shown)::

    translation_domain: forms        # optional, or false
    fields:
      age:
        label: Age
        constraints:
          - kind: required
          - {kind: range, min: 18, max: 65}
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from valmeta.domain.forms import FormDefinition

FORM_SUFFIXES = (".yaml", ".yml", ".toml", ".json")


class FormDefinitionError(Exception):
    """A form file is missing, unparseable, or does not validate."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


def parse_form_text(text: str, suffix: str) -> Any:
    """Parse raw form text according to the file *suffix*.

    Raises:
        ValueError: Unsupported suffix.
        YAMLError, tomllib.TOMLDecodeError, json.JSONDecodeError: Bad syntax.
    """
    if suffix in (".yaml", ".yml"):
        return YAML(typ="safe").load(text)
    if suffix == ".toml":
        return tomllib.loads(text)
    if suffix == ".json":
        return json.loads(text)
    msg = f"Unsupported form file type '{suffix}' (expected one of {', '.join(FORM_SUFFIXES)})"
    raise ValueError(msg)


def load_form(path: Path) -> FormDefinition:
    """Read and validate a form definition file.

    Raises:
        FormDefinitionError: The file cannot be read, parsed or validated.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FormDefinitionError(path, exc.strerror or str(exc)) from exc

    try:
        data = parse_form_text(text, path.suffix.lower())
    except (ValueError, YAMLError, tomllib.TOMLDecodeError) as exc:
        raise FormDefinitionError(path, str(exc)) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FormDefinitionError(path, "top level must be a mapping")

    try:
        return FormDefinition.model_validate(data)
    except ValidationError as exc:
        raise FormDefinitionError(path, _summarize(exc)) from exc


def _summarize(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)
