"""Synchronous client exposing version-independent logical operations.

A Client is bound to one ProtocolVersion for its whole lifetime. Each logical
operation looks up that release's binding, encodes its arguments (failing
before any network exchange on contract violations), performs one round trip,
validates the result against the release's response shape, and returns the
canonical model.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from corerpc.config.loader import load_config
from corerpc.config.schema import ClientConfig
from corerpc.core.constants import DEFAULT_TIMEOUT, DEFAULT_URL, TRACE
from corerpc.core.errors import (
    CallError,
    MissingUserPasswordError,
    ReturnedError,
    UnexpectedServerVersionError,
)
from corerpc.core.model import (
    AddedNode,
    BannedSubnet,
    NetTotals,
    NetworkInfo,
    NodeAddress,
    PeerInfo,
    RpcInfo,
)
from corerpc.core.types import AddNodeCommand, SetBanCommand
from corerpc.profile.table import Operation, ProtocolProfile
from corerpc.profile.versions import ProtocolVersion
from corerpc.rpc.auth import Auth, NoAuth, resolve_credentials
from corerpc.rpc.transport import HttpTransport, Transport

logger = logging.getLogger(__name__)


def log_response(method: str, result: Any = None, error: CallError | None = None) -> None:
    """Observe the outcome of a call.

    Errors are logged at DEBUG, successful results only at TRACE.
    """
    if error is not None:
        logger.debug("error: %s: %s", method, error)
    elif logger.isEnabledFor(TRACE):
        logger.log(TRACE, "response for %s: %r", method, result)


class Client:
    """JSON-RPC client for one server release.

    Usage:
        with Client("http://127.0.0.1:8332", ProtocolVersion.V26,
                    auth=CookieFile(Path("~/.bitcoin/.cookie").expanduser())) as client:
            client.check_expected_server_version()
            for peer in client.get_peer_info():
                print(peer.address, peer.network)

        # Or from ~/.corerpc/config.json and ./.corerpc/config.json:
        with Client.from_config() as client:
            info = client.get_network_info()
    """

    def __init__(
        self,
        url: str = DEFAULT_URL,
        version: ProtocolVersion | None = None,
        auth: Auth | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Transport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            url: URL of the node's JSON-RPC endpoint.
            version: Server release to bind to. Defaults to the newest supported.
            auth: Credential option. Defaults to NoAuth. Cookie files are read
                here, once.
            timeout: Request timeout in seconds.
            transport: Optional transport to use instead of an HttpTransport
                built from url/auth/timeout. The caller keeps ownership.

        Raises:
            InvalidCookieFileError: If auth is an unusable cookie file.
        """
        self._profile = ProtocolProfile(version or ProtocolVersion.latest())
        self._owns_transport = transport is None
        if transport is None:
            credentials = resolve_credentials(auth or NoAuth())
            transport = HttpTransport(url, credentials=credentials, timeout=timeout)
        self._transport = transport
        logger.debug("Client initialized: version=%s, transport=%r", self.version, transport)

    @classmethod
    def with_auth(
        cls,
        url: str,
        auth: Auth,
        version: ProtocolVersion | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Client:
        """Create a client that must authenticate.

        Raises:
            MissingUserPasswordError: If auth is NoAuth.
            InvalidCookieFileError: If auth is an unusable cookie file.
        """
        if isinstance(auth, NoAuth):
            raise MissingUserPasswordError()
        return cls(url, version=version, auth=auth, timeout=timeout)

    @classmethod
    def from_config(cls, config: ClientConfig | None = None) -> Client:
        """Create a client from a ClientConfig, loading the layered config if None."""
        config = config or load_config()
        return cls(
            config.url,
            version=config.protocol_version,
            auth=config.to_auth(),
            timeout=config.timeout,
        )

    def __enter__(self) -> Client:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"corerpc.Client({self.version}, {self._transport!r})"

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            self._transport.close()

    @property
    def version(self) -> ProtocolVersion:
        return self._profile.version

    @property
    def profile(self) -> ProtocolProfile:
        return self._profile

    # === Call core ===

    def invoke(self, method: str, args: Sequence[Any] = ()) -> Any:
        """Perform one round trip and return the raw wire result.

        Raises:
            TransportError: If no well-formed reply was received.
            ReturnedError: If the server answered with an error object.
        """
        params = list(args)
        logger.debug("request: %s %s", method, params)
        try:
            response = self._transport.send(method, params)
        except CallError as e:
            log_response(method, error=e)
            raise

        if response.error is not None:
            error = ReturnedError(
                method,
                response.error.get("code", -1),
                response.error.get("message", "Unknown error"),
                response.error.get("data"),
            )
            log_response(method, error=error)
            raise error

        log_response(method, result=response.result)
        return response.result

    def _raw(self, operation: Operation, **kwargs: Any) -> Any:
        binding = self._profile.binding(operation)
        args = binding.signature.encode(kwargs)
        return binding.decode(self.invoke(binding.signature.method, args))

    def call(self, operation: Operation, **kwargs: Any) -> Any:
        """Run a logical operation and return its canonical result.

        Raises:
            UnsupportedVersionError: If the bound release lacks the operation.
            EncodeError: On argument contract violations (nothing is sent).
            CallError: On transport, server, or decode failures.
            NormalizeError: If the result cannot be projected.
        """
        return self._profile.normalize(operation, self._raw(operation, **kwargs))

    # === Network operations ===

    def get_added_node_info(self, node: str | None = None) -> list[AddedNode]:
        """Information about manually added nodes, optionally only `node`."""
        return self.call(Operation.GET_ADDED_NODE_INFO, node=node)

    def get_net_totals(self) -> NetTotals:
        return self.call(Operation.GET_NET_TOTALS)

    def get_network_info(self) -> NetworkInfo:
        return self.call(Operation.GET_NETWORK_INFO)

    def server_version(self) -> int:
        """The server version integer reported by getnetworkinfo, e.g. 260100."""
        return self._raw(Operation.GET_NETWORK_INFO).version

    def check_expected_server_version(self) -> None:
        """Check the server runs the release this client is bound to.

        Raises:
            UnexpectedServerVersionError: On a release mismatch.
        """
        actual = self.server_version()
        if not self.version.matches_server_version(actual):
            raise UnexpectedServerVersionError(self.version.server_version, actual)

    def get_peer_info(self) -> list[PeerInfo]:
        return self.call(Operation.GET_PEER_INFO)

    def get_connection_count(self) -> int:
        return self.call(Operation.GET_CONNECTION_COUNT)

    def ping(self) -> None:
        """Request a ping to all peers."""
        self.call(Operation.PING)

    def set_network_active(self, state: bool) -> bool:
        """Enable or disable all P2P activity. Returns the new state."""
        return self.call(Operation.SET_NETWORK_ACTIVE, state=state)

    def add_node(
        self,
        node: str,
        command: AddNodeCommand,
        v2transport: bool | None = None,
    ) -> None:
        """Add, remove, or try once a connection to `node`.

        Args:
            node: Address of the node, "host:port".
            command: What to do with the node.
            v2transport: Attempt a v2 transport connection (v26+ only).
        """
        self.call(Operation.ADD_NODE, node=node, command=command, v2transport=v2transport)

    def clear_banned(self) -> None:
        self.call(Operation.CLEAR_BANNED)

    def set_ban(
        self,
        subnet: str,
        command: SetBanCommand,
        bantime: int | None = None,
        absolute: bool | None = None,
    ) -> None:
        """Add or remove a ban.

        Args:
            subnet: IP or subnet, e.g. "10.0.0.1" or "10.0.0.0/24".
            command: Add or remove.
            bantime: Seconds to ban for, or an absolute Unix time with absolute.
                The server default (0) means its -bantime setting.
            absolute: Whether bantime is an absolute timestamp.
        """
        self.call(
            Operation.SET_BAN,
            subnet=subnet,
            command=command,
            bantime=bantime,
            absolute=absolute,
        )

    def list_banned(self) -> list[BannedSubnet]:
        return self.call(Operation.LIST_BANNED)

    def disconnect_node(self, address: str | None = None, node_id: int | None = None) -> None:
        """Disconnect a peer by address or by id, exactly one of which is given.

        Raises:
            ArgumentConflictError: If both or neither are given.
        """
        self.call(Operation.DISCONNECT_NODE, address=address, nodeid=node_id)

    def get_node_addresses(
        self,
        count: int | None = None,
        network: str | None = None,
    ) -> list[NodeAddress]:
        """Known addresses from the node's address manager.

        Args:
            count: Maximum number of addresses (server default 1, 0 for all).
            network: Only return this network's addresses (v22+ only).
        """
        return self.call(Operation.GET_NODE_ADDRESSES, count=count, network=network)

    def get_rpc_info(self) -> RpcInfo:
        """Details of the RPC server (v18+)."""
        return self.call(Operation.GET_RPC_INFO)
