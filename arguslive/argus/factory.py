"""ARGUS TV client factory.

Creates and manages ArgusClient instances based on the current settings.
Provides a singleton pattern for the application-wide connection.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

import httpx

from arguslive.argus.client import ArgusClient
from arguslive.argus.managers.control import ControlManager
from arguslive.argus.managers.core import CoreManager
from arguslive.argus.managers.guide import GuideManager
from arguslive.argus.managers.scheduler import SchedulerManager
from arguslive.config import ArgusSettings, get_argus_settings

logger = logging.getLogger(__name__)


@dataclass
class ArgusConnection:
    """Container for the ARGUS TV client and its service managers."""

    client: ArgusClient
    core: CoreManager
    scheduler: SchedulerManager
    control: ControlManager
    guide: GuideManager

    def close(self) -> None:
        """Close the underlying client connection."""
        self.client.close()


class ArgusFactory:
    """Factory for creating and managing ARGUS TV connections.

    Thread-safe: only one active connection exists. The connection is
    recreated if the settings change.

    Usage:
        factory = ArgusFactory()

        conn = factory.get_connection()
        if conn:
            channels = conn.scheduler.get_all_channels(ChannelType.TELEVISION)

        # Force reconnect (after settings change)
        factory.reconnect()
    """

    def __init__(
        self,
        settings_provider: Callable[[], ArgusSettings] = get_argus_settings,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the factory.

        Args:
            settings_provider: Callable returning the current ArgusSettings
            transport: Optional httpx transport (tests use MockTransport)
        """
        self._settings_provider = settings_provider
        self._transport = transport
        self._connection: ArgusConnection | None = None
        self._lock = threading.Lock()
        self._settings_hash: str | None = None

    @property
    def settings(self) -> ArgusSettings:
        return self._settings_provider()

    @property
    def is_configured(self) -> bool:
        """Check if server address and port are set."""
        return self.settings.is_configured

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    def get_connection(self) -> ArgusConnection | None:
        """Get the ARGUS TV connection, creating if needed.

        Returns:
            ArgusConnection or None if not configured
        """
        settings = self.settings
        if not settings.is_configured:
            return None

        with self._lock:
            current_hash = self._get_settings_hash(settings)
            if self._connection and self._settings_hash != current_hash:
                logger.info("[ARGUS] Settings changed, reconnecting")
                self._close_connection()

            if not self._connection:
                self._connection = self._create_connection(settings)
                self._settings_hash = current_hash

            return self._connection

    def reconnect(self) -> ArgusConnection | None:
        """Force reconnection with current settings."""
        with self._lock:
            self._close_connection()
            self._settings_hash = None

        return self.get_connection()

    def close(self) -> None:
        """Close the current connection."""
        with self._lock:
            self._close_connection()

    def _create_connection(self, settings: ArgusSettings) -> ArgusConnection:
        client = ArgusClient(
            base_url=settings.base_url,
            timeout=settings.timeout,
            transport=self._transport,
        )
        logger.info("[ARGUS] Using server at %s", settings.base_url)
        return ArgusConnection(
            client=client,
            core=CoreManager(client),
            scheduler=SchedulerManager(client),
            control=ControlManager(client),
            guide=GuideManager(client),
        )

    def _close_connection(self) -> None:
        """Close the current connection (must hold lock)."""
        if self._connection:
            try:
                self._connection.close()
            except Exception as e:
                logger.warning("[ARGUS] Error closing connection: %s", e)
            self._connection = None

    @staticmethod
    def _get_settings_hash(settings: ArgusSettings) -> str:
        return f"{settings.server_ip}:{settings.server_port}:{settings.timeout}"


# =============================================================================
# GLOBAL FACTORY INSTANCE
# =============================================================================

_factory: ArgusFactory | None = None
_factory_lock = threading.Lock()


def get_factory() -> ArgusFactory:
    """Get the global ArgusFactory instance."""
    global _factory

    with _factory_lock:
        if _factory is None:
            _factory = ArgusFactory()
        return _factory


def close_argus() -> None:
    """Close the global connection and drop the factory."""
    global _factory

    with _factory_lock:
        if _factory:
            _factory.close()
            _factory = None
