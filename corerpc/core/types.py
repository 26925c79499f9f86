"""Argument enums shared by every protocol version."""

from enum import Enum, IntEnum


class AddNodeCommand(str, Enum):
    """Command for the addnode operation."""

    ADD = "add"
    REMOVE = "remove"
    ONETRY = "onetry"


class SetBanCommand(str, Enum):
    """Command for the setban operation."""

    ADD = "add"
    REMOVE = "remove"


class RpcErrorCode(IntEnum):
    """Error codes a server returns in a JSON-RPC error object.

    The negative 32xxx codes are the JSON-RPC 2.0 standard ones; the rest are
    server-defined codes the network operations return.
    """

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603

    MISC_ERROR = -1
    TYPE_ERROR = -3
    INVALID_PARAMETER = -8
    CLIENT_NODE_ALREADY_ADDED = -23
    CLIENT_NODE_NOT_ADDED = -24
    CLIENT_NODE_NOT_CONNECTED = -29
    CLIENT_INVALID_IP_OR_SUBNET = -30
    CLIENT_P2P_DISABLED = -31
