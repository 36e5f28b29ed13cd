"""Pydantic models for the server settings file consumed by ``mcptime serve``."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from mcptime.tools.timeutils import resolve_timezone


class GuardConfig(BaseModel):
    """Which browser origins may reach the server."""

    local_hosts: list[str] = Field(
        default_factory=lambda: ["localhost", "127.0.0.1", "0.0.0.0"],
        description="Development hostnames accepted on any port.",
    )
    allowed_hosts: list[str] = Field(
        default_factory=lambda: ["mcpcentral.io", "mcp.time.mcpcentral.io"],
        description="Production hostnames; their subdomains are accepted too.",
    )

    @field_validator("local_hosts", "allowed_hosts")
    @classmethod
    def _lowercase(cls, hosts: list[str]) -> list[str]:
        return [host.strip().lower() for host in hosts if host.strip()]


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    console: bool = False
    otlp_endpoint: str | None = None


class ServerSettings(BaseModel):
    """Top-level server configuration."""

    host: str = "127.0.0.1"
    port: int = Field(default=8787, ge=1, le=65535)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    default_timezone: str = "UTC"
    knowledge_path: Path | None = None
    guard: GuardConfig = Field(default_factory=GuardConfig)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @field_validator("default_timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            resolve_timezone(value)
        except Exception as exc:
            msg = f"unknown timezone {value!r}"
            raise ValueError(msg) from exc
        return value
