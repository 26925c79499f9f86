"""JSON-RPC request and response types."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Request:
    """JSON-RPC request with positional parameters.

    Attributes:
        jsonrpc: Protocol version string sent to the server.
        method: Name of the method to invoke.
        params: Positional arguments, already encoded for the wire.
        id: Request identifier.
    """

    jsonrpc: str
    method: str
    params: list[Any] = field(default_factory=list)
    id: str | int | None = None


@dataclass
class Response:
    """JSON-RPC response.

    Attributes:
        jsonrpc: Protocol version, "2.0", or None for legacy 1.0 framing.
        id: Request identifier from the original request.
        result: Result of the method call (mutually exclusive with error).
        error: Error object if method failed (mutually exclusive with result).
    """

    jsonrpc: str | None
    id: str | int | None
    result: Any | None = None
    error: dict[str, Any] | None = None
