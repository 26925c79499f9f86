"""Core constants and paths for corerpc.

Single source of truth for global paths and defaults.
"""

import logging
from pathlib import Path

CORERPC_DIR_NAME = ".corerpc"

DEFAULT_URL = "http://127.0.0.1:8332"
DEFAULT_TIMEOUT = 60.0

# Below DEBUG; successful RPC results are only logged at this level.
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


def get_corerpc_dir() -> Path:
    """Get ~/.corerpc (global config directory)."""
    return Path.home() / CORERPC_DIR_NAME


def get_default_config_path() -> Path:
    """Get default config file path."""
    return get_corerpc_dir() / "config.json"


def get_default_datadir() -> Path:
    """Get the node's default data directory (~/.bitcoin)."""
    return Path.home() / ".bitcoin"
