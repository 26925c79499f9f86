"""corerpc - version-normalizing JSON-RPC client for Bitcoin Core style nodes.

A Client is bound to one server release. It speaks that release's positional
parameter lists and response shapes, and returns one canonical model
regardless of the release.

Example:
    from corerpc import Client, ProtocolVersion, SetBanCommand

    with Client("http://127.0.0.1:8332", ProtocolVersion.V26) as client:
        client.set_ban("10.0.0.1", SetBanCommand.ADD, absolute=True)
        for entry in client.list_banned():
            print(entry.address, entry.time_remaining)
"""

from corerpc.client import Client
from corerpc.config import ClientConfig, load_config
from corerpc.core.errors import (
    AuthError,
    CallError,
    CoreRpcError,
    DecodeError,
    EncodeError,
    NormalizeError,
    ReturnedError,
    TransportError,
    UnexpectedServerVersionError,
    UnsupportedVersionError,
)
from corerpc.core.types import AddNodeCommand, RpcErrorCode, SetBanCommand
from corerpc.profile import Operation, ProtocolProfile, ProtocolVersion
from corerpc.rpc.auth import CookieFile, NoAuth, UserPassword

__version__ = "0.1.0"

__all__ = [
    "Client",
    "ClientConfig",
    "load_config",
    "ProtocolVersion",
    "ProtocolProfile",
    "Operation",
    "AddNodeCommand",
    "SetBanCommand",
    "RpcErrorCode",
    "NoAuth",
    "UserPassword",
    "CookieFile",
    "CoreRpcError",
    "CallError",
    "TransportError",
    "ReturnedError",
    "DecodeError",
    "EncodeError",
    "NormalizeError",
    "AuthError",
    "UnsupportedVersionError",
    "UnexpectedServerVersionError",
]
