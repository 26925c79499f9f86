"""Typed exception hierarchy for corerpc.

Every failure surfaced to callers derives from CoreRpcError and is attributable
to the stage that produced it:

- EncodeError: argument contract violations, raised before any network exchange
- CallError: transport failures, server-returned errors, undecodable results
- NormalizeError: a raw response that cannot be projected to the canonical model
- AuthError: unusable credential sources
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from corerpc.core.types import RpcErrorCode


class CoreRpcError(Exception):
    """Base class for all corerpc errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(CoreRpcError):
    """Raised for configuration issues (missing file, invalid JSON, validation failure)."""


# === Version binding ===


class UnsupportedVersionError(CoreRpcError):
    """Raised when an operation has no binding for the client's protocol version."""

    def __init__(self, operation: str, version: str) -> None:
        self.operation = operation
        self.version = version
        super().__init__(f"{operation} is not supported by protocol version {version}")


class UnexpectedServerVersionError(CoreRpcError):
    """Raised when the server reports a release other than the bound one."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"unexpected server version: expected {expected}, got {actual}")


# === Call stage ===


class CallError(CoreRpcError):
    """Base class for failures of a single RPC round trip."""

    def __init__(self, method: str, message: str) -> None:
        self.method = method
        super().__init__(f"{method}: {message}")


class TransportError(CallError):
    """Connection, timeout, HTTP-level, or framing failure."""


class ReturnedError(CallError):
    """The server answered with a JSON-RPC error object.

    `code` is the raw integer; `known_code` names it when it is one of the
    codes in RpcErrorCode.
    """

    def __init__(self, method: str, code: int, message: str, data: Any = None) -> None:
        self.code = code
        self.error_message = message
        self.data = data
        super().__init__(method, f"RPC error {code}: {message}")

    @property
    def known_code(self) -> RpcErrorCode | None:
        try:
            return RpcErrorCode(self.code)
        except ValueError:
            return None


class DecodeError(CallError):
    """The result does not match the response shape expected for this version."""


# === Encode stage ===


class EncodeError(CoreRpcError):
    """Base class for argument contract violations."""

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        super().__init__(f"{operation}: {message}")


class MissingDefaultError(EncodeError):
    """An unset optional slot sits before a set one and declares no default."""

    def __init__(self, operation: str, slot_index: int, slot_name: str) -> None:
        self.slot_index = slot_index
        self.slot_name = slot_name
        super().__init__(
            operation,
            f"missing default for argument {slot_name!r} (index {slot_index}); "
            "a later argument is set so this slot cannot be omitted",
        )


class MissingArgumentError(EncodeError):
    """A required slot was given no value."""

    def __init__(self, operation: str, slot_name: str) -> None:
        self.slot_name = slot_name
        super().__init__(operation, f"missing required argument {slot_name!r}")


class UnsupportedArgumentError(EncodeError):
    """An argument was supplied that this version's signature does not declare."""

    def __init__(self, operation: str, name: str) -> None:
        self.name = name
        super().__init__(operation, f"argument {name!r} is not accepted by this server version")


class ArgumentConflictError(EncodeError):
    """Exactly one of a group of arguments must be supplied."""

    def __init__(self, operation: str, names: tuple[str, ...], supplied: tuple[str, ...]) -> None:
        self.names = names
        self.supplied = supplied
        if supplied:
            detail = f"got {', '.join(supplied)}"
        else:
            detail = "got none"
        super().__init__(operation, f"exactly one of {', '.join(names)} is required, {detail}")


# === Normalize stage ===


class NormalizeError(CoreRpcError):
    """Base class for failures projecting a raw response to the canonical model."""

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        super().__init__(f"{operation}: {message}")


class MissingFieldError(NormalizeError):
    """A canonical field is required but this response shape cannot provide it."""

    def __init__(self, operation: str, field: str) -> None:
        self.field = field
        super().__init__(operation, f"missing required field {field!r}")


class InvalidFieldError(NormalizeError):
    """A field this version guarantees was present but failed validation."""

    def __init__(self, operation: str, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(operation, f"invalid field {field!r}: {reason}")


# === Credentials ===


class AuthError(CoreRpcError):
    """Base class for credential problems."""


class InvalidCookieFileError(AuthError):
    """The cookie file is unreadable, empty, or has no user:password separator."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"invalid cookie file {path}: {reason}")


class MissingUserPasswordError(AuthError):
    """An authenticated client was requested without credentials."""

    def __init__(self) -> None:
        super().__init__("authentication requested but no user/password or cookie file given")
