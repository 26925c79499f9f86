"""Server releases the client can be bound to."""

from __future__ import annotations

from enum import Enum


class ProtocolVersion(Enum):
    """A supported server release, ordered oldest to newest.

    The value is the major release number; the server reports its version
    as major * 10000 + minor * 100 + patch (e.g. 260100 for 26.1.0, and
    170100 for 0.17.1).
    """

    V17 = 17
    V18 = 18
    V19 = 19
    V20 = 20
    V21 = 21
    V22 = 22
    V23 = 23
    V24 = 24
    V25 = 25
    V26 = 26
    V27 = 27
    V28 = 28

    def __str__(self) -> str:
        return f"v{self.value}"

    def __lt__(self, other: ProtocolVersion) -> bool:
        if not isinstance(other, ProtocolVersion):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: ProtocolVersion) -> bool:
        if not isinstance(other, ProtocolVersion):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: ProtocolVersion) -> bool:
        if not isinstance(other, ProtocolVersion):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: ProtocolVersion) -> bool:
        if not isinstance(other, ProtocolVersion):
            return NotImplemented
        return self.value >= other.value

    @property
    def server_version(self) -> int:
        """The server version integer of the release's first version, e.g. 260000."""
        return self.value * 10000

    def matches_server_version(self, server_version: int) -> bool:
        """Check whether a reported server version belongs to this release."""
        return server_version // 10000 == self.value

    @classmethod
    def latest(cls) -> ProtocolVersion:
        return max(cls)

    @classmethod
    def parse(cls, text: str | int) -> ProtocolVersion:
        """Parse "v26", "26", "0.17", "26.1" or 26 into a ProtocolVersion.

        Raises:
            ValueError: If the text does not name a supported release.
        """
        if isinstance(text, int):
            major = text
        else:
            cleaned = text.strip().lower().removeprefix("v")
            parts = cleaned.split(".")
            # Releases before 22 were numbered 0.x
            if len(parts) > 1 and parts[0] == "0":
                parts = parts[1:]
            try:
                major = int(parts[0])
            except ValueError:
                raise ValueError(f"invalid protocol version: {text!r}") from None
        try:
            return cls(major)
        except ValueError:
            supported = ", ".join(str(v) for v in cls)
            raise ValueError(
                f"unsupported protocol version {text!r}, expected one of: {supported}"
            ) from None

    @classmethod
    def from_server_version(cls, server_version: int) -> ProtocolVersion:
        """Map a reported server version integer to its release."""
        return cls.parse(server_version // 10000)
