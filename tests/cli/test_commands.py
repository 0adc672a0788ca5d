"""
Tests for the hipaa-guardian CLI.
"""

from __future__ import annotations

import json
from unittest.mock import patch

from rich.console import Console
from typer.testing import CliRunner

from hipaa_guardian import __version__
from hipaa_guardian.cli.app import app

runner = CliRunner()


class TestRootApp:
    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "serve" in result.output

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"hipaa-guardian {__version__}" in result.output

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert result.exit_code in (0, 2)


class TestServe:
    @patch("hipaa_guardian.mcp.server.run_guardian_mcp")
    def test_serve_defaults_to_stdio(self, mock_run, knowledge_base_file):
        result = runner.invoke(app, ["serve", "--knowledge-base", str(knowledge_base_file)])
        assert result.exit_code == 0, result.output
        mock_run.assert_called_once()
        assert mock_run.call_args.kwargs["transport"] == "stdio"

    @patch("hipaa_guardian.mcp.server.run_guardian_mcp")
    def test_serve_http_options(self, mock_run, knowledge_base_file):
        result = runner.invoke(
            app,
            [
                "serve",
                "--transport",
                "streamable-http",
                "--port",
                "9001",
                "--host",
                "0.0.0.0",
                "-k",
                str(knowledge_base_file),
            ],
        )
        assert result.exit_code == 0, result.output
        kwargs = mock_run.call_args.kwargs
        assert kwargs == {"transport": "streamable-http", "host": "0.0.0.0", "port": 9001}

    @patch("hipaa_guardian.mcp.server.run_guardian_mcp")
    def test_serve_reads_env_settings(self, mock_run, knowledge_base_file, monkeypatch):
        monkeypatch.setenv("HIPAA_GUARDIAN_KNOWLEDGE_BASE_PATH", str(knowledge_base_file))
        monkeypatch.setenv("HIPAA_GUARDIAN_PORT", "8200")
        result = runner.invoke(app, ["serve", "-t", "streamable-http"])
        assert result.exit_code == 0, result.output
        assert mock_run.call_args.kwargs["port"] == 8200

    @patch("hipaa_guardian.mcp.server.run_guardian_mcp")
    def test_serve_exits_nonzero_when_knowledge_base_missing(self, mock_run, tmp_path):
        result = runner.invoke(app, ["serve", "-k", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        mock_run.assert_not_called()

    @patch("hipaa_guardian.mcp.server.run_guardian_mcp")
    def test_serve_exits_nonzero_on_incomplete_knowledge_base(self, mock_run, write_knowledge_base):
        path = write_knowledge_base({"hipaa_fines": "Tier 1"})
        result = runner.invoke(app, ["serve", "-k", str(path)])
        assert result.exit_code == 1
        mock_run.assert_not_called()

    @patch("hipaa_guardian.mcp.server.run_guardian_mcp")
    def test_serve_rejects_unknown_log_level(self, mock_run, knowledge_base_file):
        result = runner.invoke(app, ["serve", "--log-level", "verbose", "-k", str(knowledge_base_file)])
        assert result.exit_code == 2
        assert "log_level" in result.output
        assert not isinstance(result.exception, AttributeError)
        mock_run.assert_not_called()

    @patch("hipaa_guardian.mcp.server.run_guardian_mcp")
    def test_serve_rejects_invalid_env_setting(self, mock_run, knowledge_base_file, monkeypatch):
        monkeypatch.setenv("HIPAA_GUARDIAN_PORT", "abc")
        result = runner.invoke(app, ["serve", "-k", str(knowledge_base_file)])
        assert result.exit_code == 2
        assert "port" in result.output
        mock_run.assert_not_called()

    @patch("hipaa_guardian.mcp.server.run_guardian_mcp")
    def test_serve_accepts_lowercase_log_level(self, mock_run, knowledge_base_file):
        result = runner.invoke(app, ["serve", "--log-level", "warning", "-k", str(knowledge_base_file)])
        assert result.exit_code == 0, result.output
        mock_run.assert_called_once()

    def test_serve_rejects_unknown_transport(self):
        result = runner.invoke(app, ["serve", "--transport", "websocket"])
        assert result.exit_code == 2


class TestTools:
    def test_tools_table(self, knowledge_base_file, registry):
        with patch("hipaa_guardian.cli.app.console", Console(width=200)):
            result = runner.invoke(app, ["tools", "-k", str(knowledge_base_file)])
        assert result.exit_code == 0, result.output
        for name in registry.names():
            assert name in result.output

    def test_tools_json(self, knowledge_base_file):
        result = runner.invoke(app, ["tools", "--json", "-k", str(knowledge_base_file)])
        assert result.exit_code == 0, result.output
        definitions = json.loads(result.stdout)
        assert len(definitions) == 15
        assert definitions[0]["name"] == "evaluateComplianceNeed"
        assert definitions[0]["inputSchema"]["type"] == "object"

    def test_tools_missing_knowledge_base(self, tmp_path):
        result = runner.invoke(app, ["tools", "-k", str(tmp_path / "missing.json")])
        assert result.exit_code == 1


class TestCall:
    def test_call_store_lookup(self, knowledge_base_file, sample_entries):
        result = runner.invoke(app, ["call", "getComplianceRoadmap", "-k", str(knowledge_base_file)])
        assert result.exit_code == 0, result.output
        assert sample_entries["becoming_hipaa_compliant"] in result.stdout

    def test_call_with_arguments(self, knowledge_base_file):
        result = runner.invoke(
            app,
            ["call", "getVendorVettingChecklist", "--arg", "vendorName=Acme", "-k", str(knowledge_base_file)],
        )
        assert result.exit_code == 0, result.output
        assert "Vetting Checklist for Acme" in result.stdout

    def test_call_unknown_operation(self, knowledge_base_file):
        result = runner.invoke(app, ["call", "getWeather", "-k", str(knowledge_base_file)])
        assert result.exit_code == 2

    def test_call_missing_argument(self, knowledge_base_file):
        result = runner.invoke(app, ["call", "getVendorVettingChecklist", "-k", str(knowledge_base_file)])
        assert result.exit_code == 2

    def test_call_malformed_argument(self, knowledge_base_file):
        result = runner.invoke(
            app, ["call", "getVendorVettingChecklist", "--arg", "Acme", "-k", str(knowledge_base_file)]
        )
        assert result.exit_code == 2
