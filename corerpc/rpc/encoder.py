"""Positional argument encoding with trailing-default elision.

The server only accepts positional arguments. A signature lists its required
slots followed by its optional slots; an optional slot may declare the server's
own default value. When the caller leaves trailing optionals unset they are
dropped from the wire list so the server applies its defaults. When a later
optional is set, every unset optional before it is filled from its declared
default, since a positional list cannot have holes.

Example:
    sig = OperationSignature(
        "setban",
        (required("subnet"), required("command"),
         optional("bantime", 0), optional("absolute", False)),
    )
    sig.encode({"subnet": "10.0.0.1", "command": "add", "absolute": True})
    # -> ["10.0.0.1", "add", 0, True]
    sig.encode({"subnet": "10.0.0.1", "command": "add"})
    # -> ["10.0.0.1", "add"]

None is the "no value" marker throughout: a caller cannot send an explicit
JSON null in an optional position.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from corerpc.core.errors import (
    ArgumentConflictError,
    EncodeError,
    MissingArgumentError,
    MissingDefaultError,
    UnsupportedArgumentError,
)


class _NoDefault:
    """Marker for an optional slot with no usable default."""

    _instance: _NoDefault | None = None

    def __new__(cls) -> _NoDefault:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT: Any = _NoDefault()


@dataclass(frozen=True)
class ParameterSlot:
    """One positional argument of an operation signature.

    Attributes:
        name: Keyword name used by callers.
        required: Whether the slot must always be sent.
        default: The server's documented default for an optional slot, or
            NO_DEFAULT when none can be stated.
    """

    name: str
    required: bool = True
    default: Any = NO_DEFAULT

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT


def required(name: str) -> ParameterSlot:
    """Build a required slot."""
    return ParameterSlot(name, required=True)


def optional(name: str, default: Any = NO_DEFAULT) -> ParameterSlot:
    """Build an optional slot, with the server's default if one exists."""
    return ParameterSlot(name, required=False, default=default)


def to_wire(value: Any) -> Any:
    """Convert an argument to its JSON wire value."""
    if isinstance(value, Enum):
        return value.value
    return value


def elide_defaults(
    operation: str,
    slots: Sequence[ParameterSlot],
    values: Sequence[Any],
) -> list[Any]:
    """Collapse a fully-populated argument list into the shortest wire list.

    Optional slots are scanned right to left. Unset (None) optionals to the
    right of the rightmost set one are dropped; unset optionals to its left are
    filled from their declared defaults.

    Args:
        operation: Operation name, for error context.
        slots: The signature's slots, required first.
        values: One value per slot; a shorter list is padded with None.

    Returns:
        The wire argument list.

    Raises:
        EncodeError: If more values than slots are given.
        MissingArgumentError: If a required slot is None.
        MissingDefaultError: If a hole needs a default and the slot has none.
    """
    if len(values) > len(slots):
        raise EncodeError(operation, f"expected at most {len(slots)} arguments, got {len(values)}")

    args = list(values) + [None] * (len(slots) - len(values))
    required_num = sum(1 for slot in slots if slot.required)

    for i in range(required_num):
        if args[i] is None:
            raise MissingArgumentError(operation, slots[i].name)

    last_set_idx: int | None = None
    for i in range(len(slots) - 1, required_num - 1, -1):
        if args[i] is not None:
            if last_set_idx is None:
                last_set_idx = i
        elif last_set_idx is not None:
            slot = slots[i]
            if not slot.has_default:
                raise MissingDefaultError(operation, i, slot.name)
            args[i] = slot.default

    end = last_set_idx + 1 if last_set_idx is not None else required_num
    return [to_wire(arg) for arg in args[:end]]


@dataclass(frozen=True)
class OperationSignature:
    """The wire method and positional slots an operation uses on one version.

    Attributes:
        method: Wire method name.
        slots: Ordered slots; optional slots are contiguous and trailing.
        exactly_one_of: Names of optional slots of which exactly one must be
            supplied, or empty. A member set to its declared default counts
            as not supplied.
    """

    method: str
    slots: tuple[ParameterSlot, ...] = ()
    exactly_one_of: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        seen_optional = False
        for slot in self.slots:
            if slot.required and seen_optional:
                raise ValueError(
                    f"{self.method}: required slot {slot.name!r} follows an optional slot"
                )
            if not slot.required:
                seen_optional = True
        names = self.names
        if len(set(names)) != len(names):
            raise ValueError(f"{self.method}: duplicate slot names")
        for name in self.exactly_one_of:
            if name not in names:
                raise ValueError(f"{self.method}: unknown slot {name!r} in exactly_one_of")

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(slot.name for slot in self.slots)

    @property
    def required_count(self) -> int:
        return sum(1 for slot in self.slots if slot.required)

    def encode(self, values: Mapping[str, Any] | None = None) -> list[Any]:
        """Encode keyword arguments into the wire argument list.

        A keyword this signature does not declare is accepted only when its
        value is None, so a logical operation can pass an argument newer
        versions added without affecting older ones.

        Raises:
            UnsupportedArgumentError: A set keyword is not declared here.
            ArgumentConflictError: The exactly_one_of group is not satisfied.
            MissingArgumentError: A required slot is unset.
            MissingDefaultError: A hole needs a default the slot lacks.
        """
        values = values or {}
        names = self.names
        for name, value in values.items():
            if name not in names and value is not None:
                raise UnsupportedArgumentError(self.method, name)

        if self.exactly_one_of:
            supplied = tuple(n for n in self.exactly_one_of if self._is_supplied(n, values.get(n)))
            if len(supplied) != 1:
                raise ArgumentConflictError(self.method, self.exactly_one_of, supplied)

        return elide_defaults(self.method, self.slots, [values.get(n) for n in names])

    def _is_supplied(self, name: str, value: Any) -> bool:
        # A group member equal to its declared default is the filler
        # elide_defaults writes for a hole, not a choice.
        if value is None:
            return False
        slot = self.slots[self.names.index(name)]
        return not (slot.has_default and value == slot.default)

    def encode_positional(self, values: Sequence[Any]) -> list[Any]:
        """Encode a positional argument list, None marking unset slots."""
        if len(values) > len(self.slots):
            raise EncodeError(
                self.method, f"expected at most {len(self.slots)} arguments, got {len(values)}"
            )
        return self.encode(dict(zip(self.names, values)))
