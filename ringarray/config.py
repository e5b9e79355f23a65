"""Configuration loading for the ringarray command line.

Settings live in ``ringarray.yaml`` in the working directory and are layered
over ``DEFAULT_CONFIG``:

    default_capacity: 8   # capacity of arrays built by the CLI
    separator: ","        # separator for the --values option of ``run``
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .array import DEFAULT_CAPACITY

CONFIG_FILENAME = "ringarray.yaml"

DEFAULT_CONFIG = {
    "default_capacity": DEFAULT_CAPACITY,
    "separator": ",",
}


class ConfigError(Exception):
    """Invalid configuration file.

    Attributes:
        config_path: Path to the configuration file.
        message: Human-readable error message.
    """

    def __init__(self, config_path: Path, message: str):
        self.config_path = config_path
        self.message = message
        super().__init__(f"{config_path}: {message}")


def load_config(project_root: Path) -> dict[str, Any]:
    """Load configuration from ringarray.yaml.

    Args:
        project_root: Directory containing the configuration file.

    Returns:
        Dictionary containing configuration values, with defaults applied.

    Raises:
        ConfigError: If the file is not valid YAML or holds invalid values.
    """
    config_path = project_root / CONFIG_FILENAME
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            try:
                loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(config_path, f"invalid YAML: {exc}") from exc
        if isinstance(loaded, dict):
            config.update(loaded)
    _validate(config_path, config)
    return config


def _validate(config_path: Path, config: dict[str, Any]) -> None:
    capacity = config["default_capacity"]
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
        raise ConfigError(
            config_path,
            f"default_capacity must be a positive integer, got {capacity!r}",
        )
    separator = config["separator"]
    if not isinstance(separator, str) or not separator:
        raise ConfigError(config_path, f"separator must be a non-empty string, got {separator!r}")
