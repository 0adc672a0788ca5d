"""Tests for core.settings module.

Covers:
- GuardianSettings instantiation with defaults
- Environment variable override with the HIPAA_GUARDIAN_ prefix
- Field types and validation
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from hipaa_guardian.core.settings import GuardianSettings


class TestGuardianSettingsDefaults:
    def test_default_transport(self):
        assert GuardianSettings().transport == "stdio"

    def test_default_network(self):
        s = GuardianSettings()
        assert s.host == "127.0.0.1"
        assert s.port == 8100

    def test_default_knowledge_base_is_bundled(self):
        assert GuardianSettings().knowledge_base_path is None

    def test_default_logging(self):
        s = GuardianSettings()
        assert s.log_level == "INFO"
        assert s.json_logs is None
        assert s.effective_log_level == "INFO"


class TestGuardianSettingsEnvOverride:
    def test_port_from_env(self, monkeypatch):
        monkeypatch.setenv("HIPAA_GUARDIAN_PORT", "9090")
        assert GuardianSettings().port == 9090

    def test_knowledge_base_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HIPAA_GUARDIAN_KNOWLEDGE_BASE_PATH", str(tmp_path / "kb.json"))
        s = GuardianSettings()
        assert s.knowledge_base_path == tmp_path / "kb.json"
        assert isinstance(s.knowledge_base_path, Path)

    def test_unprefixed_env_ignored(self, monkeypatch):
        monkeypatch.setenv("PORT", "1234")
        assert GuardianSettings().port == 8100

    def test_debug_forces_debug_level(self, monkeypatch):
        monkeypatch.setenv("HIPAA_GUARDIAN_DEBUG", "true")
        assert GuardianSettings().effective_log_level == "DEBUG"

    def test_explicit_kwargs_win(self, monkeypatch):
        monkeypatch.setenv("HIPAA_GUARDIAN_TRANSPORT", "stdio")
        s = GuardianSettings(transport="streamable-http")
        assert s.transport == "streamable-http"


class TestGuardianSettingsValidation:
    def test_unknown_transport_rejected(self):
        with pytest.raises(ValidationError):
            GuardianSettings(transport="websocket")

    def test_port_must_be_int(self, monkeypatch):
        monkeypatch.setenv("HIPAA_GUARDIAN_PORT", "not-a-port")
        with pytest.raises(ValidationError):
            GuardianSettings()

    def test_log_level_normalized(self, monkeypatch):
        monkeypatch.setenv("HIPAA_GUARDIAN_LOG_LEVEL", "warning")
        s = GuardianSettings()
        assert s.log_level == "WARNING"
        assert s.effective_log_level == "WARNING"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            GuardianSettings(log_level="verbose")
