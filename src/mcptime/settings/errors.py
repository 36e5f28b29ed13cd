"""Settings error types."""

from __future__ import annotations


class SettingsError(Exception):
    """Raised when a settings file fails parsing or validation."""
