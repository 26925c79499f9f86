"""Shared pytest fixtures: a mock JSON-RPC node and per-release payloads."""

import json
import sys
from collections.abc import Callable, Iterator
from types import SimpleNamespace
from typing import Any

import httpx
import pytest

from corerpc.client import Client
from corerpc.core.types import RpcErrorCode
from corerpc.profile.versions import ProtocolVersion
from corerpc.rpc.transport import HttpTransport

V = ProtocolVersion


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for platform-specific tests."""
    config.addinivalue_line("markers", "unix_only: mark test to run only on Unix")


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Auto-skip tests based on platform markers."""
    skip_unix = pytest.mark.skip(reason="Unix-only test")
    for item in items:
        if "unix_only" in item.keywords and sys.platform == "win32":
            item.add_marker(skip_unix)


class MockNode:
    """Answers JSON-RPC calls from a method -> result table.

    A result may be a callable taking the request params. A value built with
    error(code, message) produces an error reply. Replies use legacy 1.0
    framing before v28.
    """

    def __init__(self, version: ProtocolVersion) -> None:
        self.version = version
        self.results: dict[str, Any] = {}
        self.requests: list[dict[str, Any]] = []

    def error(self, code: int, message: str) -> dict[str, Any]:
        return {"__error__": (code, message)}

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(body)
        method = body["method"]
        if method not in self.results:
            not_found = (RpcErrorCode.METHOD_NOT_FOUND, "Method not found")
            return self._reply(body["id"], error=not_found, status=404)
        result = self.results[method]
        if callable(result):
            result = result(body["params"])
        if isinstance(result, dict) and "__error__" in result:
            return self._reply(body["id"], error=result["__error__"], status=500)
        return self._reply(body["id"], result=result)

    def _reply(
        self,
        request_id: int,
        result: Any = None,
        error: tuple[int, str] | None = None,
        status: int = 200,
    ) -> httpx.Response:
        error_obj = {"code": error[0], "message": error[1]} if error else None
        if self.version >= V.V28:
            data: dict[str, Any] = {"jsonrpc": "2.0", "id": request_id}
            if error_obj:
                data["error"] = error_obj
            else:
                data["result"] = result
            return httpx.Response(200, json=data)
        return httpx.Response(
            status, json={"result": result, "error": error_obj, "id": request_id}
        )

    @property
    def methods(self) -> list[str]:
        return [r["method"] for r in self.requests]

    @property
    def last_params(self) -> list[Any]:
        return self.requests[-1]["params"]


@pytest.fixture
def mock_node() -> Iterator[Callable[[ProtocolVersion], tuple[MockNode, Client]]]:
    """Factory returning a MockNode and a Client bound to the same release."""
    clients: list[Client] = []

    def _make(version: ProtocolVersion) -> tuple[MockNode, Client]:
        node = MockNode(version)
        http = httpx.Client(transport=httpx.MockTransport(node.handler))
        transport = HttpTransport("http://127.0.0.1:8332", client=http)
        client = Client(version=version, transport=transport)
        clients.append(client)
        return node, client

    yield _make
    for client in clients:
        client.close()


# === Wire payloads, shaped per release ===


def network_info_payload(version: ProtocolVersion) -> dict[str, Any]:
    data: dict[str, Any] = {
        "version": version.value * 10000 + 100,
        "subversion": f"/Satoshi:{version.value}.1.0/",
        "protocolversion": 70016,
        "localservices": "0000000000000409",
        "localrelay": True,
        "timeoffset": 0,
        "connections": 10,
        "networkactive": True,
        "networks": [
            {
                "name": "ipv4",
                "limited": False,
                "reachable": True,
                "proxy": "",
                "proxy_randomize_credentials": False,
            },
            {
                "name": "onion",
                "limited": True,
                "reachable": False,
                "proxy": "127.0.0.1:9050",
                "proxy_randomize_credentials": True,
            },
        ],
        "relayfee": 0.00001,
        "incrementalfee": 0.00001,
        "localaddresses": [{"address": "203.0.113.5", "port": 8333, "score": 4}],
        "warnings": "",
    }
    if version >= V.V19:
        data["localservicesnames"] = ["NETWORK", "WITNESS", "NETWORK_LIMITED"]
    if version >= V.V21:
        data["connections_in"] = 2
        data["connections_out"] = 8
    if version >= V.V28:
        data["warnings"] = []
    return data


def peer_payload(version: ProtocolVersion, **overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": 7,
        "addr": "198.51.100.7:8333",
        "addrbind": "192.168.1.10:51234",
        "addrlocal": "203.0.113.5:8333",
        "services": "0000000000000409",
        "relaytxes": True,
        "lastsend": 1700000100,
        "lastrecv": 1700000101,
        "bytessent": 1234,
        "bytesrecv": 5678,
        "conntime": 1700000000,
        "timeoffset": 0,
        "pingtime": 0.05,
        "minping": 0.04,
        "version": 70016,
        "subver": "/Satoshi:25.0.0/",
        "inbound": False,
        "synced_headers": 800000,
        "synced_blocks": 800000,
        "inflight": [],
        "bytessent_per_msg": {"ping": 32},
        "bytesrecv_per_msg": {"pong": 32},
    }
    if version <= V.V20:
        data.update(addnode=True, banscore=0, whitelisted=False)
    if version <= V.V27:
        data["startingheight"] = 799990
    if version >= V.V19:
        data["servicesnames"] = ["NETWORK", "WITNESS"]
        data["permissions"] = []
    if version >= V.V21:
        data.update(
            network="ipv4",
            connection_type="manual",
            last_transaction=0,
            last_block=1700000050,
        )
    if version >= V.V22:
        data.update(
            bip152_hb_to=False,
            bip152_hb_from=True,
            addr_processed=100,
            addr_rate_limited=0,
        )
    if version >= V.V26:
        data.update(transport_protocol_type="v2", session_id="ab" * 32)
    data.update(overrides)
    return data


def banned_payload(version: ProtocolVersion) -> dict[str, Any]:
    data: dict[str, Any] = {
        "address": "10.0.0.0/24",
        "banned_until": 1700086400,
        "ban_created": 1700000000,
    }
    if version <= V.V20:
        data["ban_reason"] = "manually added"
    if version >= V.V22:
        data["ban_duration"] = 86400
        data["time_remaining"] = 3600
    return data


def node_address_payload(version: ProtocolVersion) -> dict[str, Any]:
    data: dict[str, Any] = {
        "time": 1700000000,
        "services": 1033,
        "address": "198.51.100.7",
        "port": 8333,
    }
    if version >= V.V22:
        data["network"] = "ipv4"
    return data


NET_TOTALS_PAYLOAD = {
    "totalbytesrecv": 1000,
    "totalbytessent": 2000,
    "timemillis": 1700000000123,
    "uploadtarget": {
        "timeframe": 86400,
        "target": 0,
        "target_reached": False,
        "serve_historical_blocks": True,
        "bytes_left_in_cycle": 0,
        "time_left_in_cycle": 0,
    },
}

ADDED_NODE_PAYLOAD = [
    {
        "addednode": "198.51.100.7:8333",
        "connected": True,
        "addresses": [{"address": "198.51.100.7:8333", "connected": "outbound"}],
    }
]


@pytest.fixture
def payloads() -> SimpleNamespace:
    """Wire payload builders, shaped per release."""
    return SimpleNamespace(
        network_info=network_info_payload,
        peer=peer_payload,
        banned=banned_payload,
        node_address=node_address_payload,
        net_totals=NET_TOTALS_PAYLOAD,
        added_node=ADDED_NODE_PAYLOAD,
    )
