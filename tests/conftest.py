"""Shared pytest fixtures and test helpers for valmeta tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator, Mapping
from pathlib import Path

import pytest
from click.testing import CliRunner

from valmeta.services.builder import RuleDescriptorBuilder


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep VALMETA_* variables from the outer environment out of tests."""
    for key in list(os.environ):
        if key.startswith("VALMETA_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Generator[None]:
    """Undo the handler swap done by CLI invocations."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    pkg_level = logging.getLogger("valmeta").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("valmeta").setLevel(pkg_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary project directory used as the CWD."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def builder() -> RuleDescriptorBuilder:
    """A builder with no translator (passthrough messages)."""
    return RuleDescriptorBuilder()


SIGNUP_FORM_YAML = """\
fields:
  age:
    label: Age
    constraints:
      - kind: required
      - {kind: range, min: 18, max: 65}
  email:
    label: Email
    constraints:
      - kind: Email
      - kind: NotBlank
  nickname:
    label: Nickname
    constraints: []
"""


class RecordingTranslator:
    """Translator double that records calls and tags the output."""

    def __init__(self, prefix: str = "T:") -> None:
        self.prefix = prefix
        self.calls: list[tuple[str, dict[str, object], str | None]] = []

    def translate(
        self,
        message_id: str,
        parameters: Mapping[str, object],
        domain: str | None,
    ) -> str:
        self.calls.append((message_id, dict(parameters), domain))
        return f"{self.prefix}{message_id}"


def write_form(root: Path, name: str = "signup.yaml", text: str = SIGNUP_FORM_YAML) -> Path:
    """Write a form definition file under *root* and return its path."""
    path = root / name
    path.write_text(text, encoding="utf-8")
    return path
