"""Pydantic models for the server settings file."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from olm_mcp.tools import DEFAULT_TOOLSETS, TOOLSETS


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    otlp_endpoint: str | None = None
    export_to_console: bool = False


class ServerSettings(BaseModel):
    """Top-level settings, from YAML and/or command-line flags.

    Example YAML::

        port: 8080
        kubeconfig: ~/.kube/config
        toolsets: [csv, subscription]
        request_timeout: 15
        telemetry:
          enabled: true
          otlp_endpoint: http://localhost:4317
    """

    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)
    kubeconfig: str | None = None
    read_only: bool = True
    toolsets: list[str] = Field(default_factory=lambda: list(DEFAULT_TOOLSETS))
    request_timeout: float | None = Field(default=30.0, gt=0)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    server_name: str = "olm-mcp-server"
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @field_validator("toolsets")
    @classmethod
    def _known_toolsets(cls, value: list[str]) -> list[str]:
        unknown = [name for name in value if name not in TOOLSETS]
        if unknown:
            msg = f"unknown toolset(s): {', '.join(unknown)}"
            raise ValueError(msg)
        return value
