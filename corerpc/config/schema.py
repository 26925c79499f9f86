"""Pydantic models for corerpc configuration validation."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from corerpc.core.constants import DEFAULT_TIMEOUT, DEFAULT_URL
from corerpc.profile.versions import ProtocolVersion
from corerpc.rpc.auth import Auth, CookieFile, NoAuth, UserPassword


class ClientConfig(BaseModel):
    """Connection settings for a client.

    Example config.json:
        {
            "url": "http://127.0.0.1:18443",
            "protocol_version": "v26",
            "cookie_file": "~/.bitcoin/regtest/.cookie"
        }
    """

    model_config = ConfigDict(extra="forbid")

    url: str = DEFAULT_URL
    """URL of the node's JSON-RPC endpoint."""

    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    """Request timeout in seconds."""

    protocol_version: ProtocolVersion = Field(default_factory=ProtocolVersion.latest)
    """Server release the client is bound to, e.g. "v26"."""

    rpc_user: str | None = None
    """Static user name (requires rpc_password)."""

    rpc_password: str | None = Field(default=None, repr=False)
    """Static password."""

    cookie_file: Path | None = None
    """Path of the node's cookie file. Exclusive with rpc_user/rpc_password."""

    @field_validator("protocol_version", mode="before")
    @classmethod
    def parse_protocol_version(cls, v: object) -> object:
        """Accept "v26", "26", "0.17" and plain integers."""
        if isinstance(v, (str, int)) and not isinstance(v, bool):
            return ProtocolVersion.parse(v)
        return v

    @field_validator("cookie_file")
    @classmethod
    def expand_cookie_file(cls, v: Path | None) -> Path | None:
        return v.expanduser() if v is not None else None

    @model_validator(mode="after")
    def validate_credentials(self) -> "ClientConfig":
        """Ensure the credential options are used consistently."""
        if self.rpc_password is not None and self.rpc_user is None:
            raise ValueError("rpc_password requires rpc_user")
        if self.rpc_user is not None and self.rpc_password is None:
            raise ValueError("rpc_user requires rpc_password")
        if self.cookie_file is not None and self.rpc_user is not None:
            raise ValueError("cookie_file cannot be combined with rpc_user/rpc_password")
        return self

    def to_auth(self) -> Auth:
        """Build the credential option these settings describe."""
        if self.cookie_file is not None:
            return CookieFile(self.cookie_file)
        if self.rpc_user is not None and self.rpc_password is not None:
            return UserPassword(self.rpc_user, self.rpc_password)
        return NoAuth()
