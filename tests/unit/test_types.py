"""Unit tests for corerpc.core.types and corerpc.core.model."""

from dataclasses import FrozenInstanceError

import pytest

from corerpc.core.model import ActiveCommand, RpcInfo, SocketAddress
from corerpc.core.types import AddNodeCommand, SetBanCommand


class TestCommands:
    """Tests for argument enums."""

    def test_add_node_wire_values(self):
        assert [c.value for c in AddNodeCommand] == ["add", "remove", "onetry"]

    def test_set_ban_wire_values(self):
        assert [c.value for c in SetBanCommand] == ["add", "remove"]

    def test_commands_compare_as_strings(self):
        assert AddNodeCommand.ONETRY == "onetry"
        assert SetBanCommand("remove") is SetBanCommand.REMOVE


class TestSocketAddress:
    """Tests for SocketAddress."""

    def test_str_ipv4(self):
        assert str(SocketAddress("198.51.100.7", 8333)) == "198.51.100.7:8333"

    def test_str_ipv6_bracketed(self):
        assert str(SocketAddress("2001:db8::1", 8333)) == "[2001:db8::1]:8333"

    def test_hashable(self):
        assert len({SocketAddress("a", 1), SocketAddress("a", 1)}) == 1


class TestCanonicalModel:
    """Tests for canonical result dataclasses."""

    def test_frozen(self):
        info = RpcInfo(active_commands=(ActiveCommand("getrpcinfo", 7),), log_path=None)
        with pytest.raises(FrozenInstanceError):
            info.log_path = "/tmp/debug.log"

    def test_equality(self):
        assert RpcInfo((), "/l") == RpcInfo((), "/l")
        assert RpcInfo((), None) != RpcInfo((), "/l")
