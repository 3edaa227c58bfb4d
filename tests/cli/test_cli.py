"""
Tests for the udfreg command-line interface.
"""

import json
import textwrap

import pytest
import yaml
from typer.testing import CliRunner

from udfreg.cli.main import app

runner = CliRunner()

PLUGIN_SOURCE = textwrap.dedent(
    """
    def register_extensions(registry):
        registry.register_function("custom_add", ("bigint", ["bigint", "bigint"]), lambda a, b: a + b)
    """
)


def _dynamic_document(output_type: str = "bigint") -> dict:
    return {
        "dynamicLibrariesUdfMap": {
            "math": {
                "custom_add": [
                    {
                        "fileName": "custom_add",
                        "outputType": output_type,
                        "paramTypes": [output_type, output_type],
                    }
                ]
            }
        }
    }


@pytest.fixture
def project(tmp_path):
    """Project folder with a plugin, a signature file and project.toml."""
    library_dir = tmp_path / "plugins" / "math"
    library_dir.mkdir(parents=True)
    (library_dir / "custom_add.py").write_text(PLUGIN_SOURCE)
    (tmp_path / "project.toml").write_text(
        '[udf]\nplugin_dir = "plugins"\nconfig_files = ["udfs.json"]\n'
    )
    (tmp_path / "udfs.json").write_text(json.dumps(_dynamic_document()))
    return tmp_path


class TestMainCommand:
    """Tests for the top-level command."""

    def test_no_command_shows_help(self):
        """Test that help is shown when no command is given."""
        result = runner.invoke(app, [])
        assert result.exit_code == 0
        assert "parse" in result.output
        assert "verify" in result.output

    def test_missing_argument_shows_help(self):
        """Test that commands without their argument show help."""
        result = runner.invoke(app, ["parse"])
        assert result.exit_code == 0
        assert "signature" in result.output


class TestParseCommand:
    """Tests for the parse command."""

    def test_parse_remote_text(self, tmp_path):
        """Test text output for a remote document."""
        path = tmp_path / "remote.json"
        path.write_text(
            json.dumps(
                {
                    "udfSignatureMap": {
                        "square": [
                            {
                                "outputType": "integer",
                                "paramTypes": ["integer"],
                                "schema": "mySchema",
                                "docString": "x*x",
                            }
                        ],
                    }
                }
            )
        )
        result = runner.invoke(app, ["parse", str(path)])
        assert result.exit_code == 0
        assert f"Parsed 1 signatures for 1 functions from {path}" in result.output
        assert "(integer) -> integer" in result.output
        assert "schema=mySchema" in result.output

    def test_parse_dynamic_json(self, tmp_path):
        """Test JSON output for a dynamic document."""
        path = tmp_path / "udfs.json"
        path.write_text(json.dumps(_dynamic_document()))
        result = runner.invoke(app, ["parse", str(path), "--scope", "dynamic", "-f", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["custom_add"][0]["fileName"] == "custom_add"
        assert data["custom_add"][0]["paramTypes"] == ["bigint", "bigint"]

    def test_parse_yaml_output(self, tmp_path):
        """Test YAML output."""
        path = tmp_path / "udfs.json"
        path.write_text(json.dumps(_dynamic_document()))
        result = runner.invoke(app, ["parse", str(path), "--scope", "dynamic", "-f", "yaml"])
        assert result.exit_code == 0
        assert yaml.safe_load(result.output)["custom_add"][0]["outputType"] == "bigint"

    def test_parse_malformed_document(self, tmp_path):
        """Test that a malformed document exits with an error."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"udfSignatureMap": []}))
        result = runner.invoke(app, ["parse", str(path)])
        assert result.exit_code == 1
        assert "Input signatures should be an object" in result.output

    def test_invalid_format(self, tmp_path):
        """Test that an unknown format is rejected."""
        result = runner.invoke(app, ["parse", str(tmp_path / "x.json"), "-f", "xml"])
        assert result.exit_code != 0
        assert "'xml'" in result.output


class TestVerifyCommand:
    """Tests for the verify command."""

    def test_verify_passes(self, project):
        """Test a project whose libraries register what they declare."""
        result = runner.invoke(app, ["verify", str(project)])
        assert result.exit_code == 0, result.output
        assert "Declared 1 signatures for 1 functions in 1 libraries" in result.output
        assert "Loaded 1 libraries, 0 failed" in result.output
        assert "Verification passed" in result.output

    def test_verify_fails_on_missing_registration(self, project):
        """Test that an unfulfilled declaration fails verification."""
        (project / "udfs.json").write_text(json.dumps(_dynamic_document("double")))
        result = runner.invoke(app, ["verify", str(project)])
        assert result.exit_code == 1
        assert "Missing registrations:" in result.output
        assert "presto.default.custom_add(double,double) -> double" in result.output
        assert "Verification failed" in result.output

    def test_verify_without_project_toml(self, tmp_path):
        """Test that a folder without project.toml is an error."""
        result = runner.invoke(app, ["verify", str(tmp_path)])
        assert result.exit_code == 1
        assert "project.toml not found" in result.output
