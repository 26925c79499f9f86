"""Configuration loading and validation."""

from corerpc.config.loader import load_config
from corerpc.config.schema import ClientConfig

__all__ = [
    "ClientConfig",
    "load_config",
]
