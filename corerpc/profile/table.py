"""Capability table: which signature and response shape each release uses.

The table is static data. Each Binding covers one logical operation over an
inclusive range of releases; supporting a new release means adding or
extending entries here, nothing else. A ProtocolProfile selects the bindings
for one release once, at construction.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Any

from pydantic import StrictBool, StrictInt, TypeAdapter, ValidationError

from corerpc.core.errors import DecodeError, UnsupportedVersionError
from corerpc.profile import normalize as n
from corerpc.profile import shapes as s
from corerpc.profile.versions import ProtocolVersion
from corerpc.rpc.encoder import OperationSignature, optional, required

logger = logging.getLogger(__name__)

V = ProtocolVersion

# Shape of operations whose result is JSON null
NULL = type(None)


class Operation(str, Enum):
    """Version-independent logical operations."""

    GET_ADDED_NODE_INFO = "get_added_node_info"
    GET_NET_TOTALS = "get_net_totals"
    GET_NETWORK_INFO = "get_network_info"
    GET_PEER_INFO = "get_peer_info"
    GET_CONNECTION_COUNT = "get_connection_count"
    PING = "ping"
    SET_NETWORK_ACTIVE = "set_network_active"
    ADD_NODE = "add_node"
    CLEAR_BANNED = "clear_banned"
    SET_BAN = "set_ban"
    LIST_BANNED = "list_banned"
    DISCONNECT_NODE = "disconnect_node"
    GET_NODE_ADDRESSES = "get_node_addresses"
    GET_RPC_INFO = "get_rpc_info"


@dataclass(frozen=True)
class Binding:
    """How one logical operation is spoken to a range of releases.

    Attributes:
        operation: The logical operation.
        since: First release this binding applies to.
        until: Last release this binding applies to (None: still current).
        signature: Wire method and parameter slots.
        shape: Type the wire result is validated against (NULL for JSON null).
        normalizer: Pure function (version, raw) -> canonical value.
    """

    operation: Operation
    since: ProtocolVersion
    until: ProtocolVersion | None
    signature: OperationSignature
    shape: Any
    normalizer: Callable[[ProtocolVersion, Any], Any]

    def covers(self, version: ProtocolVersion) -> bool:
        return self.since <= version and (self.until is None or version <= self.until)

    @cached_property
    def _adapter(self) -> TypeAdapter[Any]:
        return TypeAdapter(self.shape)

    def decode(self, value: Any) -> Any:
        """Validate a wire result against this binding's shape.

        Raises:
            DecodeError: If the result does not have the expected shape.
        """
        try:
            return self._adapter.validate_python(value)
        except ValidationError as e:
            raise DecodeError(
                self.signature.method,
                f"result does not match the expected shape: {e.error_count()} error(s): "
                f"{_first_error(e)}",
            ) from e


def _first_error(e: ValidationError) -> str:
    err = e.errors()[0]
    loc = ".".join(str(part) for part in err["loc"]) or "<root>"
    return f"{loc}: {err['msg']}"


# === Signatures ===

_NO_ARGS = {
    op: OperationSignature(method)
    for op, method in (
        (Operation.GET_NET_TOTALS, "getnettotals"),
        (Operation.GET_NETWORK_INFO, "getnetworkinfo"),
        (Operation.GET_PEER_INFO, "getpeerinfo"),
        (Operation.GET_CONNECTION_COUNT, "getconnectioncount"),
        (Operation.PING, "ping"),
        (Operation.CLEAR_BANNED, "clearbanned"),
        (Operation.LIST_BANNED, "listbanned"),
        (Operation.GET_RPC_INFO, "getrpcinfo"),
    )
}

GET_ADDED_NODE_INFO = OperationSignature("getaddednodeinfo", (optional("node"),))
SET_NETWORK_ACTIVE = OperationSignature("setnetworkactive", (required("state"),))
ADD_NODE_V17 = OperationSignature("addnode", (required("node"), required("command")))
# The default for v2transport follows the node's -v2transport setting
ADD_NODE_V26 = OperationSignature(
    "addnode", (required("node"), required("command"), optional("v2transport"))
)
SET_BAN = OperationSignature(
    "setban",
    (required("subnet"), required("command"), optional("bantime", 0), optional("absolute", False)),
)
# Disconnecting by id sends an empty address first
DISCONNECT_NODE = OperationSignature(
    "disconnectnode",
    (optional("address", ""), optional("nodeid")),
    exactly_one_of=("address", "nodeid"),
)
GET_NODE_ADDRESSES_V18 = OperationSignature("getnodeaddresses", (optional("count", 1),))
GET_NODE_ADDRESSES_V22 = OperationSignature(
    "getnodeaddresses", (optional("count", 1), optional("network"))
)


def _b(
    operation: Operation,
    since: ProtocolVersion,
    until: ProtocolVersion | None,
    signature: OperationSignature,
    shape: Any,
    normalizer: Callable[[ProtocolVersion, Any], Any] = n.passthrough,
) -> Binding:
    return Binding(operation, since, until, signature, shape, normalizer)


_O = Operation

BINDINGS: tuple[Binding, ...] = (
    # getaddednodeinfo
    _b(_O.GET_ADDED_NODE_INFO, V.V17, None, GET_ADDED_NODE_INFO,
       list[s.AddedNodeV17], n.normalize_added_node_info),
    # getnettotals
    _b(_O.GET_NET_TOTALS, V.V17, None, _NO_ARGS[_O.GET_NET_TOTALS],
       s.NetTotalsV17, n.normalize_net_totals),
    # getnetworkinfo
    _b(_O.GET_NETWORK_INFO, V.V17, V.V18, _NO_ARGS[_O.GET_NETWORK_INFO],
       s.NetworkInfoV17, n.normalize_network_info),
    _b(_O.GET_NETWORK_INFO, V.V19, V.V20, _NO_ARGS[_O.GET_NETWORK_INFO],
       s.NetworkInfoV19, n.normalize_network_info),
    _b(_O.GET_NETWORK_INFO, V.V21, V.V27, _NO_ARGS[_O.GET_NETWORK_INFO],
       s.NetworkInfoV21, n.normalize_network_info),
    _b(_O.GET_NETWORK_INFO, V.V28, None, _NO_ARGS[_O.GET_NETWORK_INFO],
       s.NetworkInfoV28, n.normalize_network_info),
    # getpeerinfo
    _b(_O.GET_PEER_INFO, V.V17, V.V18, _NO_ARGS[_O.GET_PEER_INFO],
       list[s.PeerInfoV17], n.normalize_peer_info),
    _b(_O.GET_PEER_INFO, V.V19, V.V19, _NO_ARGS[_O.GET_PEER_INFO],
       list[s.PeerInfoV19], n.normalize_peer_info),
    _b(_O.GET_PEER_INFO, V.V20, V.V20, _NO_ARGS[_O.GET_PEER_INFO],
       list[s.PeerInfoV20], n.normalize_peer_info),
    _b(_O.GET_PEER_INFO, V.V21, V.V21, _NO_ARGS[_O.GET_PEER_INFO],
       list[s.PeerInfoV21], n.normalize_peer_info),
    _b(_O.GET_PEER_INFO, V.V22, V.V25, _NO_ARGS[_O.GET_PEER_INFO],
       list[s.PeerInfoV22], n.normalize_peer_info),
    _b(_O.GET_PEER_INFO, V.V26, V.V27, _NO_ARGS[_O.GET_PEER_INFO],
       list[s.PeerInfoV26], n.normalize_peer_info),
    _b(_O.GET_PEER_INFO, V.V28, None, _NO_ARGS[_O.GET_PEER_INFO],
       list[s.PeerInfoV28], n.normalize_peer_info),
    # getconnectioncount, ping, setnetworkactive
    _b(_O.GET_CONNECTION_COUNT, V.V17, None, _NO_ARGS[_O.GET_CONNECTION_COUNT], StrictInt),
    _b(_O.PING, V.V17, None, _NO_ARGS[_O.PING], NULL),
    _b(_O.SET_NETWORK_ACTIVE, V.V17, None, SET_NETWORK_ACTIVE, StrictBool),
    # addnode
    _b(_O.ADD_NODE, V.V17, V.V25, ADD_NODE_V17, NULL),
    _b(_O.ADD_NODE, V.V26, None, ADD_NODE_V26, NULL),
    # clearbanned, setban, listbanned
    _b(_O.CLEAR_BANNED, V.V17, None, _NO_ARGS[_O.CLEAR_BANNED], NULL),
    _b(_O.SET_BAN, V.V17, None, SET_BAN, NULL),
    _b(_O.LIST_BANNED, V.V17, V.V20, _NO_ARGS[_O.LIST_BANNED],
       list[s.BannedV17], n.normalize_list_banned),
    _b(_O.LIST_BANNED, V.V21, V.V21, _NO_ARGS[_O.LIST_BANNED],
       list[s.BannedV21], n.normalize_list_banned),
    _b(_O.LIST_BANNED, V.V22, None, _NO_ARGS[_O.LIST_BANNED],
       list[s.BannedV22], n.normalize_list_banned),
    # disconnectnode
    _b(_O.DISCONNECT_NODE, V.V17, None, DISCONNECT_NODE, NULL),
    # getnodeaddresses
    _b(_O.GET_NODE_ADDRESSES, V.V18, V.V21, GET_NODE_ADDRESSES_V18,
       list[s.NodeAddressV18], n.normalize_node_addresses),
    _b(_O.GET_NODE_ADDRESSES, V.V22, None, GET_NODE_ADDRESSES_V22,
       list[s.NodeAddressV22], n.normalize_node_addresses),
    # getrpcinfo
    _b(_O.GET_RPC_INFO, V.V18, V.V18, _NO_ARGS[_O.GET_RPC_INFO],
       s.RpcInfoV18, n.normalize_rpc_info),
    _b(_O.GET_RPC_INFO, V.V19, None, _NO_ARGS[_O.GET_RPC_INFO],
       s.RpcInfoV19, n.normalize_rpc_info),
)


def check_bindings(bindings: Iterable[Binding]) -> None:
    """Check that no release is covered twice for the same operation.

    Raises:
        ValueError: On overlapping or inverted ranges.
    """
    seen: dict[tuple[Operation, ProtocolVersion], Binding] = {}
    for binding in bindings:
        if binding.until is not None and binding.until < binding.since:
            raise ValueError(
                f"{binding.operation.value}: range {binding.since}..{binding.until} is inverted"
            )
        for version in ProtocolVersion:
            if not binding.covers(version):
                continue
            key = (binding.operation, version)
            if key in seen:
                raise ValueError(f"{binding.operation.value}: {version} is bound twice")
            seen[key] = binding


check_bindings(BINDINGS)


class ProtocolProfile:
    """The bindings of one release, selected once.

    Usage:
        profile = ProtocolProfile(ProtocolVersion.V26)
        binding = profile.binding(Operation.ADD_NODE)
        wire_args = binding.signature.encode({"node": "host:8333", "command": "add"})
    """

    def __init__(
        self,
        version: ProtocolVersion,
        bindings: Iterable[Binding] = BINDINGS,
    ) -> None:
        self._version = version
        self._bindings: dict[Operation, Binding] = {
            b.operation: b for b in bindings if b.covers(version)
        }
        logger.debug(
            "Protocol profile %s: %d of %d operations bound",
            version, len(self._bindings), len(Operation),
        )

    @property
    def version(self) -> ProtocolVersion:
        return self._version

    def __repr__(self) -> str:
        return f"ProtocolProfile({self._version})"

    def supports(self, operation: Operation) -> bool:
        return operation in self._bindings

    def binding(self, operation: Operation) -> Binding:
        """Get the binding for an operation.

        Raises:
            UnsupportedVersionError: If this release has no binding for it.
        """
        try:
            return self._bindings[operation]
        except KeyError:
            raise UnsupportedVersionError(operation.value, str(self._version)) from None

    def normalize(self, operation: Operation, raw: Any) -> Any:
        """Project a decoded raw response onto the canonical model."""
        return self.binding(operation).normalizer(self._version, raw)
