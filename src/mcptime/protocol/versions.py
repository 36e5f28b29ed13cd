"""Supported MCP protocol revisions and ``initialize`` negotiation."""

from __future__ import annotations

CURRENT_PROTOCOL_VERSION = "2025-06-18"
FALLBACK_PROTOCOL_VERSION = "2024-11-05"

# Newest first.
SUPPORTED_PROTOCOL_VERSIONS: tuple[str, ...] = (
    CURRENT_PROTOCOL_VERSION,
    "2025-03-26",
    FALLBACK_PROTOCOL_VERSION,
)


def is_supported_protocol_version(version: str) -> bool:
    """Return ``True`` if *version* is one of the revisions this server speaks."""
    return version in SUPPORTED_PROTOCOL_VERSIONS


def negotiate_protocol_version(requested: str | None) -> str:
    """Pick the revision to answer an ``initialize`` request with.

    A missing version is treated as the current revision.  A supported
    version is echoed back; anything else degrades to
    :data:`FALLBACK_PROTOCOL_VERSION`.  Negotiation never fails.
    """
    version = requested or CURRENT_PROTOCOL_VERSION
    if is_supported_protocol_version(version):
        return version
    return FALLBACK_PROTOCOL_VERSION
