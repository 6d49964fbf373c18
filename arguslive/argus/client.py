"""ARGUS TV REST client.

Handles raw HTTP requests to the ARGUS TV services.
No data transformation - just send and return decoded JSON.

Every failure (connection error, timeout, non-2xx status, undecodable body)
is raised as TransportFault. There are no retries; the caller decides.
"""

import logging
import threading
from collections.abc import Callable
from typing import Any, TypeVar

import httpx

from arguslive.core.exceptions import TransportFault

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Raised by from_api on a payload that does not have the expected shape
_DECODE_ERRORS = (KeyError, TypeError, ValueError, AttributeError)


def decode(parse: Callable[[Any], T], data: Any, what: str) -> T:
    """Convert a decoded JSON body with parse, as TransportFault on bad shape."""
    try:
        return parse(data)
    except _DECODE_ERRORS as e:
        logger.warning("[ARGUS] Unexpected %s response: %r", what, e)
        raise TransportFault(f"Unexpected {what} response: {e!r}") from e


def decode_list(parse: Callable[[Any], T], data: Any, what: str) -> list[T]:
    """Like decode() for a JSON array; a missing body is an empty list."""
    return decode(lambda items: [parse(item) for item in items or []], data, what)


class ArgusClient:
    """Low-level ARGUS TV API client.

    Paths are relative to the service root, e.g. "Core/Ping/66".
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.Client | None = None
        self._lock = threading.Lock()

    @property
    def base_url(self) -> str:
        return self._base_url

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            with self._lock:
                # Double-check after acquiring lock
                if self._client is None:
                    self._client = httpx.Client(
                        base_url=self._base_url + "/",
                        timeout=self._timeout,
                        headers={"Accept": "application/json"},
                        transport=self._transport,
                    )
        return self._client

    def _request(self, method: str, path: str, json: Any = None) -> Any:
        """Send a request and decode the JSON body (None for empty bodies)."""
        try:
            client = self._get_client()
            response = client.request(method, path.lstrip("/"), json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            message = self.parse_api_error(e.response)
            logger.warning(
                "[ARGUS] HTTP %d for %s %s: %s",
                e.response.status_code,
                method,
                path,
                message,
            )
            raise TransportFault(
                f"{method} {path} failed: {message}",
                status_code=e.response.status_code,
            ) from e
        except (httpx.HTTPError, RuntimeError, OSError) as e:
            # RuntimeError: "Cannot send a request, as the client has been closed"
            logger.warning("[ARGUS] Request failed for %s %s: %s", method, path, e)
            raise TransportFault(f"{method} {path} failed: {e}") from e

        if not response.content or response.status_code == 204:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise TransportFault(f"{method} {path} returned invalid JSON") from e

    def get(self, path: str) -> Any:
        """GET a service path."""
        return self._request("GET", path)

    def post(self, path: str, json: Any = None) -> Any:
        """POST a JSON body to a service path."""
        return self._request("POST", path, json=json)

    @staticmethod
    def parse_api_error(response: httpx.Response) -> str:
        """Extract a readable error message from an error response."""
        try:
            data = response.json()
        except ValueError:
            return response.text[:200] or response.reason_phrase
        if isinstance(data, dict):
            for key in ("Message", "ExceptionMessage", "error", "detail"):
                if data.get(key):
                    return str(data[key])
        return str(data)[:200]

    def close(self) -> None:
        """Close the underlying HTTP client."""
        with self._lock:
            if self._client:
                self._client.close()
                self._client = None
