"""Configuration loading with fail-fast behavior and layered merging.

Layers, later overriding earlier:
1. Global user config (~/.corerpc/config.json)
2. Project local config (<cwd>/.corerpc/config.json)

A layer is a JSON object. Nested objects merge key by key; any other value,
lists included, replaces the earlier one.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from corerpc.config.schema import ClientConfig
from corerpc.core.constants import CORERPC_DIR_NAME, get_default_config_path
from corerpc.core.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"


def load_config(path: Path | None = None, cwd: Path | None = None) -> ClientConfig:
    """Load client configuration.

    Args:
        path: Explicit config file path. If provided, only this file is read
            and it must exist.
        cwd: Working directory for the local layer. Defaults to Path.cwd().

    Returns:
        Validated ClientConfig. Pydantic defaults if no file exists.

    Raises:
        ConfigError: If a config file is unreadable, holds invalid JSON or a
            non-object, or the merged config fails validation.
    """
    if path is not None:
        layers = [path]
        data = _read_layer(path, required=True) or {}
        loaded_from = [path]
    else:
        global_config = get_default_config_path()
        local_config = (cwd or Path.cwd()) / CORERPC_DIR_NAME / CONFIG_FILE_NAME
        layers = [global_config]
        if local_config.resolve() != global_config.resolve():
            layers.append(local_config)

        data = {}
        loaded_from = []
        for layer in layers:
            layer_data = _read_layer(layer)
            if layer_data is None:
                continue
            data = _overlay(data, layer_data)
            loaded_from.append(layer)

    if loaded_from:
        logger.info("Config loaded from: %s", [str(p) for p in loaded_from])
    else:
        logger.debug("No config files found in %s, using defaults", [str(p) for p in layers])

    try:
        return ClientConfig.model_validate(data)
    except ValidationError as e:
        sources = ", ".join(str(p) for p in loaded_from) or "defaults"
        raise ConfigError(f"Config validation failed (merged from {sources}): {e}") from e


def _read_layer(path: Path, required: bool = False) -> dict[str, Any] | None:
    """Read one config layer.

    Returns:
        The layer's object, {} for an empty file, or None for a missing
        optional layer.

    Raises:
        ConfigError: If a required layer is missing, or the file cannot be
            read, is not valid JSON, or is not a JSON object.
    """
    resolved = path.resolve()
    if not resolved.is_file():
        if required:
            raise ConfigError(f"config file not found: {path}")
        logger.debug("No config layer at %s", resolved)
        return None

    try:
        text = resolved.read_text(encoding="utf-8-sig").strip()
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e
    if not text:
        return {}

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid JSON in config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(
            f"config file {path} must hold a JSON object, got {type(data).__name__}"
        )
    return data


def _overlay(lower: dict[str, Any], upper: dict[str, Any]) -> dict[str, Any]:
    """Lay `upper` over `lower` without modifying either."""
    merged = dict(lower)
    for key, value in upper.items():
        below = merged.get(key)
        if isinstance(below, dict) and isinstance(value, dict):
            value = _overlay(below, value)
        merged[key] = value
    return merged
