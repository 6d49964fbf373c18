"""Connection gate with API version handshake.

Every public operation goes through ensure_connection() before touching the
server. The handshake runs only while the cached availability flag is
false, so a healthy adapter pays for one ping per process (or per outage).

The flag is read and written without a lock. A stale "available" read costs
one failed call before re-verification; a stale "unavailable" read costs one
extra handshake.
"""

import logging

from arguslive.argus.factory import ArgusConnection, ArgusFactory
from arguslive.argus.types import PingResult
from arguslive.core.cancellation import CancelSignal, check_cancelled
from arguslive.core.exceptions import ConfigurationError, TransportFault, VersionIncompatible
from arguslive.core.types import ConnectionState

logger = logging.getLogger(__name__)

SUPPORTED_API_VERSION = 66


class ConnectionGate:
    """Lazily verifies that the configured server speaks our API version."""

    def __init__(self, factory: ArgusFactory, api_version: int = SUPPORTED_API_VERSION):
        self._factory = factory
        self._api_version = api_version
        self.available = False
        self.state = ConnectionState.UNVERIFIED
        self.last_ping_result: PingResult | None = None

    @property
    def api_version(self) -> int:
        return self._api_version

    def ensure_connection(self, cancel: CancelSignal = None) -> ArgusConnection:
        """Return the server connection, handshaking first if needed.

        Handshake failures are logged, not raised: the connection is returned
        anyway and the caller's own request will fail against the server.

        Raises:
            ConfigurationError: server address or port not set
            OperationCancelled: cancel was set before the handshake
        """
        settings = self._factory.settings
        if not settings.is_configured:
            raise ConfigurationError("ARGUS TV server address and port must be configured")

        conn = self._factory.get_connection()
        if conn is None:
            raise ConfigurationError("ARGUS TV server address and port must be configured")

        if not self.available:
            check_cancelled(cancel, "connection handshake")
            self._handshake(conn)

        return conn

    def invalidate(self) -> None:
        """Force a handshake on the next call."""
        self.available = False
        self.state = ConnectionState.UNVERIFIED

    def _handshake(self, conn: ArgusConnection) -> None:
        settings = self._factory.settings
        logger.debug(
            "[GATE] Pinging %s:%s with API version %d",
            settings.server_ip,
            settings.server_port,
            self._api_version,
        )
        try:
            result = conn.core.ping(self._api_version)
            self.last_ping_result = result
            self._check_ping_result(result)
        except VersionIncompatible as e:
            logger.error("[GATE] %s", e)
            self.available = False
            self.state = ConnectionState.INCOMPATIBLE
            return
        except TransportFault as e:
            logger.error("[GATE] Ping to %s failed: %s", settings.base_url, e)
            self.available = False
            self.state = ConnectionState.UNVERIFIED
            return

        self.available = True
        self.state = ConnectionState.VERIFIED
        logger.info("[GATE] ARGUS TV API version %d verified", self._api_version)

    def _check_ping_result(self, result: PingResult) -> None:
        if result == PingResult.BACKEND_OLDER:
            raise VersionIncompatible(
                "ARGUS TV server is older than this plugin, please upgrade the server",
                plugin_too_new=True,
            )
        if result == PingResult.BACKEND_NEWER:
            raise VersionIncompatible(
                "This plugin is too old for the ARGUS TV server, please upgrade the plugin",
                plugin_too_new=False,
            )
