"""BoundaryGuard — header checks applied before a request is dispatched.

Pure logic, no I/O.  The origin check defends against DNS rebinding: a
browser page may only reach the server from a development host (any
port) or from an allowed production host or one of its subdomains.
Requests without an ``Origin`` header (non-browser clients) pass.
"""

from __future__ import annotations

import logging

import httpx

from mcptime.protocol.versions import is_supported_protocol_version
from mcptime.server.errors import InvalidOriginError, UnsupportedProtocolVersionError
from mcptime.settings.models import GuardConfig

logger = logging.getLogger(__name__)


class BoundaryGuard:
    """Evaluate request headers against a :class:`GuardConfig`."""

    def __init__(self, config: GuardConfig | None = None) -> None:
        self._config = config or GuardConfig()

    @property
    def config(self) -> GuardConfig:
        return self._config

    def validate_origin(self, origin: str) -> bool:
        """Return ``True`` if *origin* may reach the server.

        Resolution order:
        1. Unparseable or host-less origins are rejected.
        2. ``local_hosts`` — accepted on any port.
        3. ``allowed_hosts`` — exact host or a dot-suffixed subdomain.
        """
        try:
            host = httpx.URL(origin).host
        except (httpx.InvalidURL, ValueError, TypeError):
            return False
        if not host:
            return False

        host = host.lower()
        if host in self._config.local_hosts:
            return True
        return any(
            host == allowed or host.endswith("." + allowed)
            for allowed in self._config.allowed_hosts
        )

    @staticmethod
    def validate_protocol_version(version: str) -> bool:
        return is_supported_protocol_version(version)

    def check(self, origin: str | None, protocol_version: str | None) -> None:
        """Raise a :class:`GuardRejection` if either header is unacceptable.

        Absent headers are not checked.
        """
        if origin and not self.validate_origin(origin):
            logger.warning("Rejected request from origin %r", origin)
            raise InvalidOriginError(origin)
        if protocol_version and not self.validate_protocol_version(protocol_version):
            logger.warning("Rejected request for protocol version %r", protocol_version)
            raise UnsupportedProtocolVersionError(protocol_version)
