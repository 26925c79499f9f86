"""JSON-RPC framing, transport, credentials and argument encoding.

Example usage:
    from corerpc.rpc import HttpTransport, OperationSignature, optional, required

    sig = OperationSignature("setban", (required("subnet"), required("command"),
                                        optional("bantime", 0), optional("absolute", False)))
    with HttpTransport("http://127.0.0.1:8332", credentials=("user", "pass")) as t:
        t.send(sig.method, sig.encode({"subnet": "10.0.0.1", "command": "add"}))
"""

from corerpc.rpc.auth import (
    Auth,
    CookieFile,
    NoAuth,
    UserPassword,
    cookie_file_path,
    discover_cookie_file,
    read_cookie_file,
    resolve_credentials,
)
from corerpc.rpc.encoder import (
    NO_DEFAULT,
    OperationSignature,
    ParameterSlot,
    elide_defaults,
    optional,
    required,
)
from corerpc.rpc.protocol import ParseError, parse_response, serialize_request
from corerpc.rpc.transport import HttpTransport, Transport
from corerpc.rpc.types import Request, Response

__all__ = [
    # Types
    "Request",
    "Response",
    # Framing
    "serialize_request",
    "parse_response",
    "ParseError",
    # Transport
    "Transport",
    "HttpTransport",
    # Credentials
    "Auth",
    "NoAuth",
    "UserPassword",
    "CookieFile",
    "read_cookie_file",
    "resolve_credentials",
    "cookie_file_path",
    "discover_cookie_file",
    # Encoding
    "NO_DEFAULT",
    "ParameterSlot",
    "OperationSignature",
    "required",
    "optional",
    "elide_defaults",
]
