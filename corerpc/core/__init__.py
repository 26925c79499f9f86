"""Core types, canonical model and errors."""

from corerpc.core.errors import (
    ArgumentConflictError,
    AuthError,
    CallError,
    ConfigError,
    CoreRpcError,
    DecodeError,
    EncodeError,
    InvalidCookieFileError,
    InvalidFieldError,
    MissingArgumentError,
    MissingDefaultError,
    MissingFieldError,
    MissingUserPasswordError,
    NormalizeError,
    ReturnedError,
    TransportError,
    UnexpectedServerVersionError,
    UnsupportedArgumentError,
    UnsupportedVersionError,
)
from corerpc.core.model import (
    ActiveCommand,
    AddedNode,
    AddedNodeAddress,
    BannedSubnet,
    LocalAddress,
    NetTotals,
    NetworkInfo,
    NetworkReachability,
    NodeAddress,
    PeerInfo,
    RpcInfo,
    SocketAddress,
    UploadTarget,
)
from corerpc.core.types import AddNodeCommand, RpcErrorCode, SetBanCommand

__all__ = [
    # Errors
    "CoreRpcError",
    "ConfigError",
    "UnsupportedVersionError",
    "UnexpectedServerVersionError",
    "CallError",
    "TransportError",
    "ReturnedError",
    "DecodeError",
    "EncodeError",
    "MissingDefaultError",
    "MissingArgumentError",
    "UnsupportedArgumentError",
    "ArgumentConflictError",
    "NormalizeError",
    "MissingFieldError",
    "InvalidFieldError",
    "AuthError",
    "InvalidCookieFileError",
    "MissingUserPasswordError",
    # Enums
    "AddNodeCommand",
    "SetBanCommand",
    "RpcErrorCode",
    # Canonical model
    "ActiveCommand",
    "AddedNode",
    "AddedNodeAddress",
    "BannedSubnet",
    "LocalAddress",
    "NetTotals",
    "NetworkInfo",
    "NetworkReachability",
    "NodeAddress",
    "PeerInfo",
    "RpcInfo",
    "SocketAddress",
    "UploadTarget",
]
