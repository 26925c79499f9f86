"""Unit tests for corerpc.core.errors module."""

from pathlib import Path

import pytest

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
from corerpc.core.types import RpcErrorCode


class TestCoreRpcError:
    """Tests for CoreRpcError base class."""

    def test_message_attribute(self):
        err = CoreRpcError("Something went wrong")
        assert err.message == "Something went wrong"
        assert str(err) == "Something went wrong"

    @pytest.mark.parametrize(
        "cls",
        [ConfigError, CallError, EncodeError, NormalizeError, AuthError,
         UnsupportedVersionError, UnexpectedServerVersionError],
    )
    def test_all_errors_derive_from_base(self, cls):
        assert issubclass(cls, CoreRpcError)


class TestStageAttribution:
    """Every failure belongs to exactly one stage."""

    @pytest.mark.parametrize("cls", [TransportError, ReturnedError, DecodeError])
    def test_call_stage(self, cls):
        assert issubclass(cls, CallError)
        assert not issubclass(cls, (EncodeError, NormalizeError))

    @pytest.mark.parametrize(
        "cls", [MissingDefaultError, UnsupportedArgumentError, ArgumentConflictError]
    )
    def test_encode_stage(self, cls):
        assert issubclass(cls, EncodeError)
        assert not issubclass(cls, CallError)

    @pytest.mark.parametrize("cls", [MissingFieldError, InvalidFieldError])
    def test_normalize_stage(self, cls):
        assert issubclass(cls, NormalizeError)


class TestErrorMessages:
    """Tests for structured error fields and messages."""

    def test_returned_error(self):
        err = ReturnedError("setban", -23, "Error: IP/Subnet already banned")
        assert err.method == "setban"
        assert err.code == -23
        assert err.error_message == "Error: IP/Subnet already banned"
        assert str(err) == "setban: RPC error -23: Error: IP/Subnet already banned"

    def test_returned_error_known_code(self):
        err = ReturnedError("addnode", -24, "Error: Node has not been added.")
        assert err.known_code is RpcErrorCode.CLIENT_NODE_NOT_ADDED

    def test_returned_error_unknown_code(self):
        """Codes outside the published set still raise, with no known_code."""
        err = ReturnedError("addnode", -99999, "something new")
        assert err.code == -99999
        assert err.known_code is None

    @pytest.mark.parametrize(
        "code, value",
        [
            (RpcErrorCode.METHOD_NOT_FOUND, -32601),
            (RpcErrorCode.INVALID_PARAMETER, -8),
            (RpcErrorCode.CLIENT_NODE_ALREADY_ADDED, -23),
            (RpcErrorCode.CLIENT_P2P_DISABLED, -31),
        ],
    )
    def test_error_code_values(self, code, value):
        assert code == value

    def test_missing_default(self):
        err = MissingDefaultError("gappy", 2, "y")
        assert err.operation == "gappy"
        assert "'y'" in str(err)
        assert "index 2" in str(err)

    def test_unsupported_version(self):
        err = UnsupportedVersionError("get_rpc_info", "v17")
        assert str(err) == "get_rpc_info is not supported by protocol version v17"

    def test_unexpected_server_version(self):
        err = UnexpectedServerVersionError(260000, 250100)
        assert (err.expected, err.actual) == (260000, 250100)

    def test_invalid_field(self):
        err = InvalidFieldError("getpeerinfo", "addr", "unparsable address 'x'")
        assert err.field == "addr"
        assert str(err).startswith("getpeerinfo: invalid field 'addr'")

    def test_invalid_cookie_file(self):
        err = InvalidCookieFileError(Path("/tmp/.cookie"), "file is empty")
        assert isinstance(err, AuthError)
        assert err.reason == "file is empty"
        assert "/tmp/.cookie" in str(err)

    def test_missing_user_password(self):
        assert isinstance(MissingUserPasswordError(), AuthError)
