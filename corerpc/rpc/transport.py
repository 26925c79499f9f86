"""Synchronous HTTP transport for JSON-RPC calls."""

from __future__ import annotations

import itertools
import logging
from typing import Any, Protocol

import httpx

from corerpc.core.constants import DEFAULT_TIMEOUT
from corerpc.core.errors import TransportError
from corerpc.rpc.protocol import ParseError, parse_response, serialize_request
from corerpc.rpc.types import Request, Response

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Performs one blocking request/response exchange."""

    def send(self, method: str, params: list[Any]) -> Response:
        """Send a call and return the parsed reply.

        Raises:
            TransportError: If no well-formed JSON-RPC reply was received.
        """
        ...

    def close(self) -> None: ...


class HttpTransport:
    """JSON-RPC over HTTP POST using httpx.

    The transport holds a connection pool; it is as thread-safe as
    httpx.Client is.

    Usage:
        with HttpTransport("http://127.0.0.1:8332", credentials=("u", "p")) as t:
            response = t.send("getnetworkinfo", [])
    """

    def __init__(
        self,
        url: str,
        credentials: tuple[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            url: URL of the JSON-RPC endpoint.
            credentials: Optional (user, password) for HTTP basic auth.
            timeout: Request timeout in seconds.
            client: Optional preconfigured httpx.Client (e.g. with a mock
                transport). The caller keeps ownership of a passed client.
        """
        self._url = url
        self._timeout = timeout
        self._auth = httpx.BasicAuth(*credentials) if credentials else None
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout)
        self._ids = itertools.count(1)

    @property
    def url(self) -> str:
        return self._url

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"HttpTransport(url={self._url!r}, auth={'basic' if self._auth else 'none'})"

    def close(self) -> None:
        """Close the underlying httpx client if this transport created it."""
        if self._owns_client:
            self._client.close()

    def send(self, method: str, params: list[Any]) -> Response:
        request = Request(jsonrpc="2.0", method=method, params=params, id=next(self._ids))
        try:
            http_response = self._client.post(
                self._url,
                content=serialize_request(request),
                headers={"Content-Type": "application/json"},
                auth=self._auth,
            )
        except httpx.ConnectError as e:
            logger.warning("Connection failed to %s: %s", self._url, e)
            raise TransportError(method, f"connection failed: {e}") from e
        except httpx.TimeoutException as e:
            logger.warning("Request timed out: method=%s, timeout=%s", method, self._timeout)
            raise TransportError(method, f"request timed out: {e}") from e
        except httpx.HTTPError as e:
            raise TransportError(method, f"HTTP error: {e}") from e

        if http_response.status_code in (401, 403):
            raise TransportError(
                method, f"authentication rejected (HTTP {http_response.status_code})"
            )

        try:
            response = parse_response(http_response.text)
        except ParseError as e:
            # Servers answer HTTP errors like 404 or 503 with non-JSON-RPC bodies
            raise TransportError(
                method, f"invalid server response (HTTP {http_response.status_code}): {e.message}"
            ) from e

        if response.id is not None and response.id != request.id:
            raise TransportError(
                method, f"response id {response.id!r} does not match request id {request.id!r}"
            )
        return response
