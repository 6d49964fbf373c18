"""Core service: handshake and server version."""

import logging

from arguslive.argus.client import ArgusClient, decode
from arguslive.argus.types import NewVersionInfo, PingResult
from arguslive.core.exceptions import TransportFault

logger = logging.getLogger(__name__)


class CoreManager:
    """ARGUS TV Core service operations."""

    def __init__(self, client: ArgusClient):
        self._client = client

    def ping(self, api_version: int) -> PingResult:
        """Compare our API level with the server's.

        Returns:
            EQUAL, BACKEND_NEWER (-1) or BACKEND_OLDER (1)
        """
        data = self._client.get(f"Core/Ping/{api_version}")
        try:
            return PingResult(int(data))
        except (TypeError, ValueError) as e:
            raise TransportFault(f"Unexpected ping response: {data!r}") from e

    def get_server_version(self) -> str:
        """Get the server's display version."""
        data = self._client.get("Core/Version")
        return str(data) if data is not None else ""

    def is_newer_version_available(self) -> NewVersionInfo | None:
        """Ask the server whether a newer ARGUS TV release exists."""
        data = self._client.get("Core/IsNewerVersionAvailable")
        if not data:
            return None
        return decode(NewVersionInfo.from_api, data, "newer version")
