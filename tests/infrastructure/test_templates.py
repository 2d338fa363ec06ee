"""Tests for Jinja2 placeholder interpolation."""

from __future__ import annotations

import logging

import pytest

from valmeta.infrastructure.templates import compile_template, interpolate


class TestInterpolate:
    def test_substitutes(self) -> None:
        assert interpolate("{{ a }} and {{ b }}", {"a": 1, "b": "two"}) == "1 and two"

    def test_unknown_placeholder_left_in_place(self) -> None:
        assert interpolate("{{ a }} / {{ b }}", {"a": 1}) == "1 / {{ b }}"

    def test_no_parameters_returns_template(self) -> None:
        assert interpolate("{{ a }}", {}) == "{{ a }}"

    def test_plain_text_untouched(self) -> None:
        assert interpolate("no placeholders", {"a": 1}) == "no placeholders"

    def test_values_not_escaped(self) -> None:
        assert interpolate("{{ v }}", {"v": "<b>&"}) == "<b>&"

    def test_trailing_newline_kept(self) -> None:
        assert interpolate("{{ v }}\n", {"v": "x"}) == "x\n"

    def test_bad_template_logged_and_returned(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="valmeta.infrastructure.templates"):
            assert interpolate("{{ oops", {"a": 1}) == "{{ oops"
        assert "does not compile" in caplog.text


    def test_render_error_logged_and_returned(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="valmeta.infrastructure.templates"):
            assert interpolate("{{ limit + 1 }}", {"field_name": "X"}) == "{{ limit + 1 }}"
        assert "does not render" in caplog.text

    def test_sandbox_violation_returned(self) -> None:
        template = "{{ v.__class__.__mro__[1].__subclasses__() }}"
        assert interpolate(template, {"v": "x"}) == template


class TestCompileTemplate:
    def test_cached(self) -> None:
        assert compile_template("{{ x }}") is compile_template("{{ x }}")
