"""Projection of raw, version-specific responses onto the canonical model.

Each normalizer is a pure function of (version, raw). For every canonical field
it either reads the raw member directly, derives it from a differently named or
typed member, or reports None when the raw shape does not declare the member at
all. Absence is decided by the shape class, never by guessing: a member the
shape declares but the server left null stays None, and a member the shape
does not declare is None as well, while an empty list stays an empty tuple.

A member the shape guarantees but whose value cannot be represented raises
InvalidFieldError.
"""

from __future__ import annotations

import ipaddress
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from pydantic import BaseModel

from corerpc.core.errors import InvalidFieldError, MissingFieldError
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
from corerpc.profile.versions import ProtocolVersion

SATS_PER_BTC = Decimal(100_000_000)

# Overlay networks whose addresses are not IP literals
_OVERLAY_SUFFIXES = (".onion", ".i2p")


# === Field helpers ===


def reported(raw: BaseModel, name: str) -> Any | None:
    """Value of a member if the raw shape declares it, else None."""
    if name in type(raw).model_fields:
        return getattr(raw, name)
    return None


def _optional_tuple(raw: BaseModel, name: str) -> tuple[Any, ...] | None:
    value = reported(raw, name)
    return None if value is None else tuple(value)


def parse_socket_address(operation: str, field: str, text: str) -> SocketAddress:
    """Parse "host:port" or "[ipv6]:port".

    Raises:
        InvalidFieldError: If the text is not a host and a port in 0-65535.
    """
    if text.startswith("["):
        host, sep, port_text = text[1:].partition("]:")
        if not sep:
            raise InvalidFieldError(operation, field, f"unparsable address {text!r}")
        try:
            ipaddress.IPv6Address(host)
        except ValueError:
            raise InvalidFieldError(operation, field, f"invalid IPv6 host in {text!r}") from None
    else:
        host, sep, port_text = text.rpartition(":")
        if not sep or not host or ":" in host:
            raise InvalidFieldError(operation, field, f"unparsable address {text!r}")

    if not port_text.isdigit() or not 0 <= int(port_text) <= 65535:
        raise InvalidFieldError(operation, field, f"invalid port in {text!r}")
    return SocketAddress(host, int(port_text))


def _optional_socket_address(operation: str, field: str, text: str | None) -> SocketAddress | None:
    if text is None:
        return None
    return parse_socket_address(operation, field, text)


def to_datetime(operation: str, field: str, seconds: float) -> datetime:
    """Convert a Unix timestamp to an aware UTC datetime.

    Raises:
        InvalidFieldError: If the timestamp is negative or out of range.
    """
    if seconds < 0:
        raise InvalidFieldError(operation, field, f"negative timestamp {seconds}")
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise InvalidFieldError(
            operation, field, f"timestamp {seconds} outside representable range"
        ) from e


def btc_to_sat(operation: str, field: str, amount: float) -> int:
    """Convert a BTC amount (as sent on the wire) to whole satoshis.

    Raises:
        InvalidFieldError: If the amount is negative, not finite, or finer than
            one satoshi.
    """
    value = Decimal(repr(amount))
    if not value.is_finite() or value < 0:
        raise InvalidFieldError(operation, field, f"invalid amount {amount!r}")
    sats = value * SATS_PER_BTC
    if sats != sats.to_integral_value():
        raise InvalidFieldError(operation, field, f"sub-satoshi amount {amount!r}")
    return int(sats)


def _validate_subnet(operation: str, field: str, text: str) -> str:
    if text.endswith(_OVERLAY_SUFFIXES):
        return text
    try:
        ipaddress.ip_network(text, strict=False)
    except ValueError:
        raise InvalidFieldError(operation, field, f"unparsable subnet {text!r}") from None
    return text


# === Normalizers ===


def normalize_network_info(version: ProtocolVersion, raw: BaseModel) -> NetworkInfo:
    op = "getnetworkinfo"
    warnings = raw.warnings
    if isinstance(warnings, str):
        warnings = [warnings] if warnings else []

    return NetworkInfo(
        version=raw.version,
        subversion=raw.subversion,
        protocol_version=raw.protocolversion,
        local_services=raw.localservices,
        local_services_names=_optional_tuple(raw, "localservicesnames"),
        local_relay=raw.localrelay,
        time_offset=raw.timeoffset,
        connections=raw.connections,
        connections_in=reported(raw, "connections_in"),
        connections_out=reported(raw, "connections_out"),
        network_active=raw.networkactive,
        networks=tuple(
            NetworkReachability(
                name=n.name,
                limited=n.limited,
                reachable=n.reachable,
                proxy=n.proxy,
                proxy_randomize_credentials=n.proxy_randomize_credentials,
            )
            for n in raw.networks
        ),
        relay_fee=btc_to_sat(op, "relayfee", raw.relayfee),
        incremental_fee=btc_to_sat(op, "incrementalfee", raw.incrementalfee),
        local_addresses=tuple(
            LocalAddress(address=a.address, port=a.port, score=a.score)
            for a in raw.localaddresses
        ),
        warnings=tuple(warnings),
    )


def _manual_connection(op: str, raw: BaseModel) -> bool:
    # connection_type replaced the addnode flag in v21
    connection_type = reported(raw, "connection_type")
    if connection_type is not None:
        return connection_type == "manual"
    addnode = reported(raw, "addnode")
    if addnode is not None:
        return addnode
    raise MissingFieldError(op, "manual")


def normalize_peer(version: ProtocolVersion, raw: BaseModel) -> PeerInfo:
    op = "getpeerinfo"
    return PeerInfo(
        id=raw.id,
        address=parse_socket_address(op, "addr", raw.addr),
        address_bind=_optional_socket_address(op, "addrbind", raw.addrbind),
        address_local=_optional_socket_address(op, "addrlocal", raw.addrlocal),
        network=reported(raw, "network"),
        mapped_as=reported(raw, "mapped_as"),
        services=raw.services,
        services_names=_optional_tuple(raw, "servicesnames"),
        relay_txes=raw.relaytxes,
        last_send=raw.lastsend,
        last_recv=raw.lastrecv,
        last_transaction=reported(raw, "last_transaction"),
        last_block=reported(raw, "last_block"),
        bytes_sent=raw.bytessent,
        bytes_recv=raw.bytesrecv,
        connection_time=to_datetime(op, "conntime", raw.conntime),
        time_offset=raw.timeoffset,
        ping_time=raw.pingtime,
        min_ping=raw.minping,
        ping_wait=raw.pingwait,
        version=raw.version,
        subversion=raw.subver,
        inbound=raw.inbound,
        manual=_manual_connection(op, raw),
        connection_type=reported(raw, "connection_type"),
        starting_height=reported(raw, "startingheight"),
        ban_score=reported(raw, "banscore"),
        whitelisted=reported(raw, "whitelisted"),
        permissions=_optional_tuple(raw, "permissions"),
        synced_headers=raw.synced_headers,
        synced_blocks=raw.synced_blocks,
        inflight=tuple(raw.inflight),
        bip152_hb_to=reported(raw, "bip152_hb_to"),
        bip152_hb_from=reported(raw, "bip152_hb_from"),
        addr_processed=reported(raw, "addr_processed"),
        addr_rate_limited=reported(raw, "addr_rate_limited"),
        transport_protocol_type=reported(raw, "transport_protocol_type"),
        session_id=reported(raw, "session_id"),
        bytes_sent_per_msg=tuple(sorted(raw.bytessent_per_msg.items())),
        bytes_recv_per_msg=tuple(sorted(raw.bytesrecv_per_msg.items())),
    )


def normalize_peer_info(version: ProtocolVersion, raw: list[BaseModel]) -> list[PeerInfo]:
    return [normalize_peer(version, peer) for peer in raw]


def normalize_added_node_info(version: ProtocolVersion, raw: list[BaseModel]) -> list[AddedNode]:
    op = "getaddednodeinfo"
    return [
        AddedNode(
            added_node=node.addednode,
            connected=node.connected,
            addresses=tuple(
                AddedNodeAddress(
                    address=parse_socket_address(op, "addresses.address", a.address),
                    connected=a.connected,
                )
                for a in node.addresses
            ),
        )
        for node in raw
    ]


def normalize_net_totals(version: ProtocolVersion, raw: BaseModel) -> NetTotals:
    target = raw.uploadtarget
    return NetTotals(
        total_bytes_recv=raw.totalbytesrecv,
        total_bytes_sent=raw.totalbytessent,
        time=to_datetime("getnettotals", "timemillis", raw.timemillis / 1000),
        upload_target=UploadTarget(
            timeframe=target.timeframe,
            target=target.target,
            target_reached=target.target_reached,
            serve_historical_blocks=target.serve_historical_blocks,
            bytes_left_in_cycle=target.bytes_left_in_cycle,
            time_left_in_cycle=target.time_left_in_cycle,
        ),
    )


def normalize_list_banned(version: ProtocolVersion, raw: list[BaseModel]) -> list[BannedSubnet]:
    op = "listbanned"
    return [
        BannedSubnet(
            address=_validate_subnet(op, "address", entry.address),
            banned_until=to_datetime(op, "banned_until", entry.banned_until),
            ban_created=to_datetime(op, "ban_created", entry.ban_created),
            ban_reason=reported(entry, "ban_reason"),
            ban_duration=reported(entry, "ban_duration"),
            time_remaining=reported(entry, "time_remaining"),
        )
        for entry in raw
    ]


def normalize_node_addresses(version: ProtocolVersion, raw: list[BaseModel]) -> list[NodeAddress]:
    op = "getnodeaddresses"
    result = []
    for entry in raw:
        if not 0 <= entry.port <= 65535:
            raise InvalidFieldError(op, "port", f"port {entry.port} out of range")
        result.append(
            NodeAddress(
                time=to_datetime(op, "time", entry.time),
                services=entry.services,
                address=entry.address,
                port=entry.port,
                network=reported(entry, "network"),
            )
        )
    return result


def normalize_rpc_info(version: ProtocolVersion, raw: BaseModel) -> RpcInfo:
    return RpcInfo(
        active_commands=tuple(
            ActiveCommand(method=c.method, duration=c.duration) for c in raw.active_commands
        ),
        log_path=reported(raw, "logpath"),
    )


def passthrough(version: ProtocolVersion, raw: Any) -> Any:
    """Results whose wire value already is the canonical value (scalars, null)."""
    return raw
