"""Credential options for the JSON-RPC server.

Three mutually exclusive options are recognized:

    NoAuth()                          # no Authorization header
    UserPassword("alice", "secret")   # HTTP basic auth
    CookieFile(Path("~/.bitcoin/.cookie"))

The node writes its cookie file on startup as a single line `__cookie__:<hex>`.
Only the first line is read and it is split at the first colon, so passwords
may themselves contain colons.

Cookie files are expected to be readable by the owner only. A group- or
world-readable cookie file is still used, but a warning is logged.
"""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path

from corerpc.core.constants import get_default_datadir
from corerpc.core.errors import InvalidCookieFileError

logger = logging.getLogger(__name__)

COOKIE_FILE_NAME = ".cookie"

# Data directory subfolder per chain; mainnet lives at the top level
NETWORK_SUBDIRS = {
    "main": "",
    "test": "testnet3",
    "testnet4": "testnet4",
    "signet": "signet",
    "regtest": "regtest",
}


@dataclass(frozen=True)
class NoAuth:
    """Connect without credentials."""


@dataclass(frozen=True)
class UserPassword:
    """Static rpcuser/rpcpassword credentials."""

    user: str
    password: str

    def __repr__(self) -> str:
        return f"UserPassword(user={self.user!r}, password='***')"


@dataclass(frozen=True)
class CookieFile:
    """Credentials read from the node's cookie file at connect time."""

    path: Path


Auth = NoAuth | UserPassword | CookieFile


def check_cookie_file_permissions(path: Path) -> bool:
    """Check that a cookie file is not readable by group or others.

    Args:
        path: Path to the cookie file.

    Returns:
        True if permissions are 0600 or more restrictive, False otherwise
        (a warning is logged).

    Raises:
        OSError: If the file cannot be stat'd.
    """
    mode = path.stat().st_mode
    if mode & (stat.S_IRWXG | stat.S_IRWXO):
        logger.warning(
            "Cookie file %s has insecure permissions (%s). "
            "Should be 0600 (owner read/write only).",
            path, oct(mode)[-3:],
        )
        return False
    return True


def read_cookie_file(path: Path) -> tuple[str, str]:
    """Read a (user, password) pair from a cookie file.

    Args:
        path: Path to the cookie file.

    Returns:
        The user and password.

    Raises:
        InvalidCookieFileError: If the file cannot be read, is empty, or its
            first line contains no colon.
    """
    try:
        with open(path, encoding="utf-8") as f:
            line = f.readline()
        check_cookie_file_permissions(path)
    except OSError as e:
        raise InvalidCookieFileError(path, f"cannot read file: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise InvalidCookieFileError(path, "file is not valid UTF-8") from e

    line = line.rstrip("\r\n")
    if not line:
        raise InvalidCookieFileError(path, "file is empty")

    user, sep, password = line.partition(":")
    if not sep:
        raise InvalidCookieFileError(path, "no ':' separator in first line")
    return user, password


def resolve_credentials(auth: Auth) -> tuple[str, str] | None:
    """Convert a credential option into a (user, password) pair.

    Returns:
        None for NoAuth, otherwise the user and password.

    Raises:
        InvalidCookieFileError: For an unusable cookie file.
    """
    if isinstance(auth, NoAuth):
        return None
    if isinstance(auth, UserPassword):
        return auth.user, auth.password
    if isinstance(auth, CookieFile):
        return read_cookie_file(auth.path)
    raise TypeError(f"unknown auth option: {auth!r}")


def cookie_file_path(datadir: Path | None = None, network: str = "main") -> Path:
    """Get the cookie file path for a data directory and chain.

    Raises:
        ValueError: If network is not a known chain name.
    """
    if network not in NETWORK_SUBDIRS:
        raise ValueError(f"unknown network {network!r}, expected one of {sorted(NETWORK_SUBDIRS)}")
    base = (datadir or get_default_datadir()).expanduser()
    subdir = NETWORK_SUBDIRS[network]
    return (base / subdir / COOKIE_FILE_NAME) if subdir else (base / COOKIE_FILE_NAME)


def discover_cookie_file(datadir: Path | None = None, network: str = "main") -> Path | None:
    """Find a cookie file to authenticate with.

    Checks, in order:
    1. CORERPC_COOKIE_FILE environment variable
    2. <datadir>/<network subdir>/.cookie (datadir defaults to ~/.bitcoin)

    Returns:
        The path of an existing cookie file, or None.
    """
    env_path = os.environ.get("CORERPC_COOKIE_FILE")
    if env_path:
        candidate = Path(env_path).expanduser()
        if candidate.is_file():
            return candidate
        logger.debug("CORERPC_COOKIE_FILE points at missing file: %s", candidate)

    candidate = cookie_file_path(datadir, network)
    if candidate.is_file():
        logger.debug("Discovered cookie file at %s", candidate)
        return candidate
    logger.debug("No cookie file at %s", candidate)
    return None
