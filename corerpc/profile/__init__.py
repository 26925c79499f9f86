"""Per-release protocol profiles: signatures, response shapes, normalization."""

from corerpc.profile.table import (
    BINDINGS,
    Binding,
    Operation,
    ProtocolProfile,
    check_bindings,
)
from corerpc.profile.versions import ProtocolVersion

__all__ = [
    "BINDINGS",
    "Binding",
    "Operation",
    "ProtocolProfile",
    "ProtocolVersion",
    "check_bindings",
]
