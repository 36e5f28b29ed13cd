"""Load a settings YAML file into :class:`ServerSettings`."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from mcptime.settings.errors import SettingsError
from mcptime.settings.models import ServerSettings


class SettingsLoader:
    """Load and validate a settings YAML file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> ServerSettings:
        """Read YAML, interpolate env vars, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing.  An empty file
        yields the defaults.

        Raises:
            SettingsError: On read errors, YAML parse errors or schema
                validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SettingsError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise SettingsError(f"YAML parse error: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise SettingsError("Settings YAML must be a mapping")

        knowledge_path = data.get("knowledge_path")
        if isinstance(knowledge_path, str) and not Path(knowledge_path).is_absolute():
            data["knowledge_path"] = str(self._path.parent / knowledge_path)

        try:
            return ServerSettings.model_validate(data)
        except ValidationError as exc:
            raise SettingsError(str(exc)) from exc


def load_settings(path: str | Path | None = None) -> ServerSettings:
    """Return settings from *path*, or the defaults when no path is given."""
    if path is None:
        return ServerSettings()
    return SettingsLoader(Path(path)).load()
