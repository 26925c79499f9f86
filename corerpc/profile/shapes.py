"""Raw response shapes, exactly as each server release returns them.

Each model mirrors one release's wire result; a field appears here only on the
releases that send it. Unknown extra members are ignored so that hidden
deprecated fields (enabled with -deprecatedrpc) do not break decoding. Field
names follow the wire, not Python naming.

Validation is strict: a member of the wrong JSON type (a string fee, 1 for a
boolean) is rejected rather than coerced. JSON integers are still accepted
where a float is expected.

Classes are named after the first release that returns the shape; the binding
table in corerpc.profile.table decides which releases use which shape.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class RawShape(BaseModel):
    """Base for raw response shapes."""

    model_config = ConfigDict(extra="ignore", frozen=True, strict=True)


# === getnetworkinfo ===


class NetworkEntry(RawShape):
    name: str
    limited: bool
    reachable: bool
    proxy: str
    proxy_randomize_credentials: bool


class LocalAddressEntry(RawShape):
    address: str
    port: int
    score: int


class NetworkInfoV17(RawShape):
    version: int
    subversion: str
    protocolversion: int
    localservices: str
    localrelay: bool
    timeoffset: int
    connections: int
    networkactive: bool
    networks: list[NetworkEntry]
    relayfee: float
    incrementalfee: float
    localaddresses: list[LocalAddressEntry]
    warnings: str


class NetworkInfoV19(NetworkInfoV17):
    localservicesnames: list[str]


class NetworkInfoV21(NetworkInfoV19):
    connections_in: int
    connections_out: int


class NetworkInfoV28(NetworkInfoV21):
    # A string before v28
    warnings: list[str]


# === getpeerinfo ===


class PeerCore(RawShape):
    """Members every release reports for a peer."""

    id: int
    addr: str
    addrbind: str | None = None
    addrlocal: str | None = None
    services: str
    relaytxes: bool
    lastsend: int
    lastrecv: int
    bytessent: int
    bytesrecv: int
    conntime: int
    timeoffset: int
    pingtime: float | None = None
    minping: float | None = None
    pingwait: float | None = None
    version: int
    subver: str
    inbound: bool
    synced_headers: int
    synced_blocks: int
    inflight: list[int]
    bytessent_per_msg: dict[str, int]
    bytesrecv_per_msg: dict[str, int]


class PeerInfoV17(PeerCore):
    addnode: bool
    banscore: int
    whitelisted: bool
    startingheight: int


class PeerInfoV19(PeerInfoV17):
    servicesnames: list[str]
    permissions: list[str]


class PeerInfoV20(PeerInfoV19):
    # Only sent when the node runs with -asmap
    mapped_as: int | None = None


class PeerModern(PeerCore):
    """Members introduced with connection types in v21, kept by every later release."""

    servicesnames: list[str]
    permissions: list[str]
    mapped_as: int | None = None
    network: str
    connection_type: str
    last_transaction: int
    last_block: int


class CompactRelayFields(RawShape):
    bip152_hb_to: bool
    bip152_hb_from: bool
    addr_processed: int
    addr_rate_limited: int


class TransportFields(RawShape):
    transport_protocol_type: str
    session_id: str


class PeerInfoV21(PeerModern):
    startingheight: int


class PeerInfoV22(PeerInfoV21, CompactRelayFields):
    pass


class PeerInfoV26(PeerInfoV22, TransportFields):
    pass


class PeerInfoV28(PeerModern, CompactRelayFields, TransportFields):
    """startingheight is only returned with -deprecatedrpc from v28."""


# === getaddednodeinfo ===


class AddedNodeAddressEntry(RawShape):
    address: str
    connected: str


class AddedNodeV17(RawShape):
    addednode: str
    connected: bool
    addresses: list[AddedNodeAddressEntry] = []


# === getnettotals ===


class UploadTargetEntry(RawShape):
    timeframe: int
    target: int
    target_reached: bool
    serve_historical_blocks: bool
    bytes_left_in_cycle: int
    time_left_in_cycle: int


class NetTotalsV17(RawShape):
    totalbytesrecv: int
    totalbytessent: int
    timemillis: int
    uploadtarget: UploadTargetEntry


# === listbanned ===


class BannedV17(RawShape):
    address: str
    banned_until: int
    ban_created: int
    ban_reason: str


class BannedV21(RawShape):
    address: str
    banned_until: int
    ban_created: int


class BannedV22(BannedV21):
    ban_duration: int
    time_remaining: int


# === getnodeaddresses ===


class NodeAddressV18(RawShape):
    time: int
    services: int
    address: str
    port: int


class NodeAddressV22(NodeAddressV18):
    network: str


# === getrpcinfo ===


class ActiveCommandEntry(RawShape):
    method: str
    duration: int


class RpcInfoV18(RawShape):
    active_commands: list[ActiveCommandEntry]


class RpcInfoV19(RpcInfoV18):
    logpath: str
