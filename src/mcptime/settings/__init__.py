"""Server settings — pydantic models and the YAML loader."""

from mcptime.settings.errors import SettingsError
from mcptime.settings.loader import SettingsLoader, load_settings
from mcptime.settings.models import GuardConfig, ServerSettings, TelemetrySettings

__all__ = [
    "GuardConfig",
    "ServerSettings",
    "SettingsError",
    "SettingsLoader",
    "TelemetrySettings",
    "load_settings",
]
