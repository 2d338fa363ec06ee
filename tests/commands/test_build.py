"""Tests for the build command."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from tests.conftest import write_form
from valmeta.cli import cli


class TestBuildCommand:
    def test_human_output(self, cli_runner: CliRunner, project_root: Path) -> None:
        write_form(project_root)
        result = cli_runner.invoke(cli, ["build", "signup.yaml"])
        assert result.exit_code == 0, result.output
        assert "OK" in result.stdout
        assert "The 'Age' field is required." in result.stdout
        assert "(no rules)" in result.stdout

    def test_warnings_on_stderr(self, cli_runner: CliRunner, project_root: Path) -> None:
        write_form(project_root)
        result = cli_runner.invoke(cli, ["build", "signup.yaml"])
        assert "WARNING: Field 'email': skipped unsupported kind(s) NotBlank" in result.stderr
        assert "WARNING" not in result.stdout

    def test_json_output(self, cli_runner: CliRunner, project_root: Path) -> None:
        write_form(project_root)
        result = cli_runner.invoke(cli, ["--json", "build", "signup.yaml"])
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["ok"] is True
        assert payload["data"]["count"] == 3
        assert payload["data"]["fields"]["age"] == {
            "val": True,
            "required": "The 'Age' field is required.",
            "range-min": 18,
            "range-max": 65,
            "range": "The field 'Age' value should be in range 18 to 65.",
        }
        assert payload["data"]["fields"]["nickname"] == {}
        assert payload["warnings"] == ["Field 'email': skipped unsupported kind(s) NotBlank"]

    def test_quiet(self, cli_runner: CliRunner, project_root: Path) -> None:
        write_form(project_root)
        result = cli_runner.invoke(cli, ["-q", "build", "signup.yaml"])
        assert result.stdout.strip() == "OK: build_descriptors"

    def test_field_filter(self, cli_runner: CliRunner, project_root: Path) -> None:
        write_form(project_root)
        result = cli_runner.invoke(
            cli, ["--json", "build", "signup.yaml", "--field", "email", "--field", "age"]
        )
        assert list(json.loads(result.stdout)["data"]["fields"]) == ["email", "age"]

    def test_unknown_field(self, cli_runner: CliRunner, project_root: Path) -> None:
        write_form(project_root)
        result = cli_runner.invoke(cli, ["--json", "build", "signup.yaml", "--field", "nope"])
        assert result.exit_code == 1
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "UNKNOWN_FIELD"
        assert result.stdout == ""

    def test_attrs(self, cli_runner: CliRunner, project_root: Path) -> None:
        write_form(project_root)
        result = cli_runner.invoke(cli, ["--json", "build", "signup.yaml", "--attrs"])
        age = json.loads(result.stdout)["data"]["fields"]["age"]
        assert age["data-val"] == "true"
        assert age["data-val-range-min"] == "18"

    def test_attribute_prefix_from_config(
        self, cli_runner: CliRunner, project_root: Path
    ) -> None:
        write_form(project_root)
        (project_root / "valmeta.toml").write_text('[output]\nattribute_prefix = "data-rule"\n')
        result = cli_runner.invoke(cli, ["--json", "build", "signup.yaml", "--attrs"])
        age = json.loads(result.stdout)["data"]["fields"]["age"]
        assert age["data-rule-range-max"] == "65"

    def test_french(self, cli_runner: CliRunner, project_root: Path) -> None:
        write_form(project_root)
        result = cli_runner.invoke(cli, ["--json", "build", "signup.yaml", "--locale", "fr"])
        age = json.loads(result.stdout)["data"]["fields"]["age"]
        assert age["required"] == "Le champ « Age » est obligatoire."

    def test_no_translate(self, cli_runner: CliRunner, project_root: Path) -> None:
        write_form(project_root)
        result = cli_runner.invoke(
            cli, ["--json", "build", "signup.yaml", "--locale", "fr", "--no-translate"]
        )
        age = json.loads(result.stdout)["data"]["fields"]["age"]
        assert age["required"] == "The 'Age' field is required."

    def test_domain_override(self, cli_runner: CliRunner, project_root: Path) -> None:
        write_form(project_root)
        (project_root / "i18n").mkdir()
        (project_root / "i18n" / "forms.fr.yaml").write_text("Age: Âge\n", encoding="utf-8")
        (project_root / "valmeta.toml").write_text('[translation]\ncatalog_dirs = ["i18n"]\n')
        result = cli_runner.invoke(
            cli,
            ["--json", "build", "signup.yaml", "--locale", "fr", "--domain", "forms"],
        )
        age = json.loads(result.stdout)["data"]["fields"]["age"]
        assert age["required"] == "The 'Âge' field is required."

    def test_domain_and_no_translate_conflict(
        self, cli_runner: CliRunner, project_root: Path
    ) -> None:
        write_form(project_root)
        result = cli_runner.invoke(
            cli, ["build", "signup.yaml", "--domain", "forms", "--no-translate"]
        )
        assert result.exit_code == 2
        assert "mutually exclusive" in result.stderr

    def test_missing_file(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "build", "nope.yaml"])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "FORM_NOT_FOUND"

    def test_invalid_form(self, cli_runner: CliRunner, project_root: Path) -> None:
        write_form(project_root, "bad.yaml", "fields: [1, 2]\n")
        result = cli_runner.invoke(cli, ["build", "bad.yaml"])
        assert result.exit_code == 1
        assert "ERROR" in result.stderr
        assert "build_descriptors" in result.stderr

    def test_empty_field_domain(self, cli_runner: CliRunner, project_root: Path) -> None:
        text = "fields:\n  age:\n    label: Age\n    translation_domain: ''\n"
        write_form(project_root, "f.yaml", text)
        result = cli_runner.invoke(cli, ["--json", "build", "f.yaml"])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "INVALID_FORM"

    def test_non_mapping_constraint(self, cli_runner: CliRunner, project_root: Path) -> None:
        write_form(project_root, "f.yaml", "fields:\n  age: {label: Age, constraints: [5]}\n")
        result = cli_runner.invoke(cli, ["--json", "build", "f.yaml"])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "INVALID_FORM"

    def test_strict_from_config(self, cli_runner: CliRunner, project_root: Path) -> None:
        text = (
            "fields:\n  qty:\n    label: Qty\n"
            "    constraints:\n      - {kind: range, min: 9, max: 1}\n"
        )
        write_form(project_root, "qty.yaml", text)
        (project_root / "valmeta.toml").write_text("[rules]\nstrict = true\n")
        result = cli_runner.invoke(cli, ["--json", "build", "qty.yaml"])
        assert result.exit_code == 1
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "MALFORMED_CONSTRAINT"
        assert payload["error"]["detail"] == {"field": "qty", "kind": "range"}

    def test_broken_catalog(self, cli_runner: CliRunner, project_root: Path) -> None:
        write_form(project_root)
        (project_root / "i18n").mkdir()
        (project_root / "i18n" / "forms.en.yaml").write_text('a: "{{ oops"\n')
        (project_root / "valmeta.toml").write_text('[translation]\ncatalog_dirs = ["i18n"]\n')
        result = cli_runner.invoke(cli, ["--json", "build", "signup.yaml"])
        assert result.exit_code == 1
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "CATALOG_ERROR"
        assert payload["error"]["detail"]["source"].endswith("forms.en.yaml")

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["build", "--examples"])
        assert result.exit_code == 0
        assert "valmeta build forms/signup.yaml" in result.output
