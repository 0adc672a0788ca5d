"""Runtime settings for the HIPAA Compliance Guardian.

Configuration is explicit, validated and environment-driven. Every field can
be set through a ``HIPAA_GUARDIAN_``-prefixed environment variable or a
``.env`` file; command-line options override both.

Examples:
    >>> from hipaa_guardian.core.settings import GuardianSettings
    >>> settings = GuardianSettings(transport="streamable-http", port=9000)
    >>> settings.port
    9000

Tags:
    settings, configuration, pydantic, environment, hipaa-guardian

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TransportName = Literal["stdio", "streamable-http"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class GuardianSettings(BaseSettings):
    """Settings for the guardian server.

    Fields
    ──────
    knowledge_base_path : JSON knowledge base; ``None`` uses the bundled file
    transport           : ``stdio`` or ``streamable-http``
    host                : Bind address for the HTTP transport
    port                : Bind port for the HTTP transport
    debug               : Enable debug mode (forces DEBUG log level)
    log_level           : Structlog log level
    json_logs           : JSON log output; ``None`` auto-detects from the tty
    """

    model_config = SettingsConfigDict(
        env_prefix="HIPAA_GUARDIAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Knowledge base ───────────────────────────────────────────
    knowledge_base_path: Path | None = Field(
        default=None,
        description="Path to the HIPAA knowledge base JSON file",
    )

    # ── Network ──────────────────────────────────────────────────
    transport: TransportName = "stdio"
    host: str = "127.0.0.1"
    port: int = 8100

    # ── Observability ────────────────────────────────────────────
    debug: bool = False
    log_level: LogLevel = "INFO"
    json_logs: bool | None = None

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level
