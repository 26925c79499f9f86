"""JSON-RPC framing for the client side of the connection.

Servers before v28 answer with 1.0-style framing: no "jsonrpc" member, and both
"result" and "error" present with one of them null. From v28 a request marked
"2.0" gets a strict 2.0 reply. parse_response accepts both.
"""

import json
from typing import Any

from corerpc.core.errors import CoreRpcError
from corerpc.rpc.types import Request, Response


class ParseError(CoreRpcError):
    """Raised when a reply body is not a JSON-RPC response."""


_JSONRPC_VERSIONS = (None, "1.0", "1.1", "2.0")


def serialize_request(request: Request) -> str:
    """Serialize a Request to a JSON line.

    Args:
        request: The Request object to serialize.

    Returns:
        A single line of JSON text (no trailing newline).
    """
    data: dict[str, Any] = {
        "jsonrpc": request.jsonrpc,
        "method": request.method,
        "params": request.params,
    }

    if request.id is not None:
        data["id"] = request.id

    return json.dumps(data, separators=(",", ":"))


def parse_response(line: str) -> Response:
    """Parse a JSON reply body into a Response.

    Args:
        line: The reply body.

    Returns:
        A parsed Response object. Exactly one of result/error is meaningful:
        error is None for a successful call.

    Raises:
        ParseError: If the JSON is invalid or required fields are missing.
    """
    try:
        data = json.loads(line)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ParseError("Response must be a JSON object")

    jsonrpc = data.get("jsonrpc")
    if jsonrpc not in _JSONRPC_VERSIONS:
        raise ParseError(f"unsupported jsonrpc version: {jsonrpc!r}")

    if "id" not in data:
        raise ParseError("Response must have 'id' field")
    response_id = data.get("id")
    if response_id is not None and not isinstance(response_id, (str, int)):
        raise ParseError(f"id must be string, number, or null, got: {type(response_id).__name__}")

    has_result = "result" in data
    has_error = "error" in data
    if not has_result and not has_error:
        raise ParseError("Response must have either 'result' or 'error'")

    error = data.get("error")
    if error is not None:
        if not isinstance(error, dict):
            raise ParseError(f"error must be an object, got: {type(error).__name__}")
        if "code" not in error or "message" not in error:
            raise ParseError("error must have 'code' and 'message' fields")
        if data.get("result") is not None:
            raise ParseError("Response cannot have both 'result' and 'error'")

    return Response(
        jsonrpc=jsonrpc,
        id=response_id,
        result=data.get("result"),
        error=error,
    )
