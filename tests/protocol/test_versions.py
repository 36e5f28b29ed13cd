"""Tests for protocol version negotiation."""

from __future__ import annotations

import pytest

from mcptime.protocol.versions import (
    CURRENT_PROTOCOL_VERSION,
    FALLBACK_PROTOCOL_VERSION,
    SUPPORTED_PROTOCOL_VERSIONS,
    is_supported_protocol_version,
    negotiate_protocol_version,
)


class TestSupportedVersions:
    def test_newest_first(self) -> None:
        assert SUPPORTED_PROTOCOL_VERSIONS == ("2025-06-18", "2025-03-26", "2024-11-05")
        assert SUPPORTED_PROTOCOL_VERSIONS[0] == CURRENT_PROTOCOL_VERSION

    @pytest.mark.parametrize("version", ["2025-06-18", "2025-03-26", "2024-11-05"])
    def test_supported(self, version: str) -> None:
        assert is_supported_protocol_version(version)

    @pytest.mark.parametrize("version", ["", "2024-01-01", "2025-06-18 ", "latest"])
    def test_unsupported(self, version: str) -> None:
        assert not is_supported_protocol_version(version)


class TestNegotiate:
    def test_missing_version_gets_current(self) -> None:
        assert negotiate_protocol_version(None) == CURRENT_PROTOCOL_VERSION
        assert negotiate_protocol_version("") == CURRENT_PROTOCOL_VERSION

    def test_supported_version_is_echoed(self) -> None:
        assert negotiate_protocol_version("2025-03-26") == "2025-03-26"
        assert negotiate_protocol_version("2024-11-05") == "2024-11-05"

    def test_unknown_version_falls_back(self) -> None:
        assert negotiate_protocol_version("1999-01-01") == FALLBACK_PROTOCOL_VERSION
        assert FALLBACK_PROTOCOL_VERSION == "2024-11-05"
