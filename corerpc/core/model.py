"""Canonical, version-independent results of the logical operations.

Every dataclass here is frozen. A field typed `X | None` is one that some
protocol version in the supported range does not report; None means "this
server version never sends it", which is distinct from an empty tuple or an
empty string the server did send.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SocketAddress:
    """A host (IP, hostname, onion or i2p address) and port."""

    host: str
    port: int

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class NetworkReachability:
    """Per-network reachability, an element of NetworkInfo.networks."""

    name: str
    limited: bool
    reachable: bool
    proxy: str
    proxy_randomize_credentials: bool


@dataclass(frozen=True)
class LocalAddress:
    """An address the node believes it is reachable on."""

    address: str
    port: int
    score: int


@dataclass(frozen=True)
class NetworkInfo:
    """Result of getnetworkinfo.

    Attributes:
        version: Server version integer, e.g. 260000.
        relay_fee: Minimum relay fee in sat/kvB.
        incremental_fee: Minimum fee increment for replacement in sat/kvB.
        local_services_names: Decoded service flags (v19+).
        connections_in: Inbound connection count (v21+).
        connections_out: Outbound connection count (v21+).
        warnings: Network and blockchain warnings, always a tuple.
    """

    version: int
    subversion: str
    protocol_version: int
    local_services: str
    local_services_names: tuple[str, ...] | None
    local_relay: bool
    time_offset: int
    connections: int
    connections_in: int | None
    connections_out: int | None
    network_active: bool
    networks: tuple[NetworkReachability, ...]
    relay_fee: int
    incremental_fee: int
    local_addresses: tuple[LocalAddress, ...]
    warnings: tuple[str, ...]


@dataclass(frozen=True)
class PeerInfo:
    """One connected peer, an element of the getpeerinfo result.

    `manual` is known for every version: it is read from `addnode` on older
    servers and from `connection_type` on newer ones. Per-message byte counters
    are (message, bytes) pairs sorted by message name.
    """

    id: int
    address: SocketAddress
    address_bind: SocketAddress | None
    address_local: SocketAddress | None
    network: str | None
    mapped_as: int | None
    services: str
    services_names: tuple[str, ...] | None
    relay_txes: bool
    last_send: int
    last_recv: int
    last_transaction: int | None
    last_block: int | None
    bytes_sent: int
    bytes_recv: int
    connection_time: datetime
    time_offset: int
    ping_time: float | None
    min_ping: float | None
    ping_wait: float | None
    version: int
    subversion: str
    inbound: bool
    manual: bool
    connection_type: str | None
    starting_height: int | None
    ban_score: int | None
    whitelisted: bool | None
    permissions: tuple[str, ...] | None
    synced_headers: int
    synced_blocks: int
    inflight: tuple[int, ...]
    bip152_hb_to: bool | None
    bip152_hb_from: bool | None
    addr_processed: int | None
    addr_rate_limited: int | None
    transport_protocol_type: str | None
    session_id: str | None
    bytes_sent_per_msg: tuple[tuple[str, int], ...]
    bytes_recv_per_msg: tuple[tuple[str, int], ...]


@dataclass(frozen=True)
class AddedNodeAddress:
    """A resolved address of a manually added node."""

    address: SocketAddress
    connected: str


@dataclass(frozen=True)
class AddedNode:
    """An element of the getaddednodeinfo result."""

    added_node: str
    connected: bool
    addresses: tuple[AddedNodeAddress, ...]


@dataclass(frozen=True)
class UploadTarget:
    """Outbound upload limit state."""

    timeframe: int
    target: int
    target_reached: bool
    serve_historical_blocks: bool
    bytes_left_in_cycle: int
    time_left_in_cycle: int


@dataclass(frozen=True)
class NetTotals:
    """Result of getnettotals."""

    total_bytes_recv: int
    total_bytes_sent: int
    time: datetime
    upload_target: UploadTarget


@dataclass(frozen=True)
class BannedSubnet:
    """An element of the listbanned result.

    `ban_reason` is only reported up to v20; `ban_duration` and
    `time_remaining` (seconds) only from v22.
    """

    address: str
    banned_until: datetime
    ban_created: datetime
    ban_reason: str | None
    ban_duration: int | None
    time_remaining: int | None


@dataclass(frozen=True)
class NodeAddress:
    """An element of the getnodeaddresses result."""

    time: datetime
    services: int
    address: str
    port: int
    network: str | None


@dataclass(frozen=True)
class ActiveCommand:
    """An RPC command currently running on the server."""

    method: str
    duration: int


@dataclass(frozen=True)
class RpcInfo:
    """Result of getrpcinfo."""

    active_commands: tuple[ActiveCommand, ...]
    log_path: str | None
