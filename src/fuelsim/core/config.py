"""Configuration loader for YAML files.

This module provides configuration loading with support for nested access,
defaults, and merging of user overrides over the built-in defaults.

Typical usage example:
    from fuelsim.core.config import load_config

    config = load_config("fuelsim.yaml")
    rate = config.get("fuel_system.transfer_rate_lps", default=0.0)
"""

import copy
import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


# Launch state of the control panel, and the granular network layout.
DEFAULT_CONFIG: dict[str, Any] = {
    "simulation": {
        "initial": {
            "n1_level": 0.5,
            "n2_level": 0.5,
            "altitude": 10000.0,
            "payload": 0.0,
            "center_tank_volume": 100000.0,
            "left_wing_tank_volume": 56000.0,
            "right_wing_tank_volume": 56000.0,
        },
    },
    "fuel_system": {
        "transfer_rate_lps": 0.0,
        "low_fuel_fraction": 0.1,
        "initial_volumes": {},
        "pumps": [
            {"source": "left_outer", "target": "left_inner"},
            {"source": "right_outer", "target": "right_inner"},
            {"source": "left_inner", "target": "center"},
            {"source": "right_inner", "target": "center"},
            {"source": "left_inner", "target": "right_inner"},
        ],
    },
}


class ConfigError(Exception):
    """Raised when configuration operations fail."""


class ConfigLoader:
    """Configuration loader for YAML files.

    Provides loading, nested access, and default values for configuration.

    Examples:
        >>> config = ConfigLoader.load("fuelsim.yaml")
        >>> altitude = config.get("simulation.initial.altitude", default=0.0)
    """

    def __init__(self, data: dict[str, Any]) -> None:
        """Initialize with configuration data.

        Args:
            data: Configuration dictionary.
        """
        self._data = data

    @classmethod
    def load(cls, path: str | Path) -> "ConfigLoader":
        """Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file.

        Returns:
            ConfigLoader instance with loaded data.

        Raises:
            ConfigError: If file cannot be loaded or is not a mapping.
        """
        path = Path(path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except Exception as e:
            raise ConfigError(f"Failed to load configuration: {e}") from e

        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be a mapping: {path}")

        logger.info("Loaded configuration from: %s", path)
        return cls(data)

    @classmethod
    def defaults(cls) -> "ConfigLoader":
        """Build a loader holding a private copy of DEFAULT_CONFIG."""
        return cls(copy.deepcopy(DEFAULT_CONFIG))

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value using dot notation.

        Supports nested access like "simulation.initial.altitude".

        Args:
            key: Configuration key (supports dot notation).
            default: Default value if key not found.

        Returns:
            Configuration value or default.
        """
        keys = key.split(".")
        value = self._data

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def get_section(self, key: str) -> dict[str, Any]:
        """Get an entire configuration section.

        Args:
            key: Section key (supports dot notation).

        Returns:
            Configuration section as dictionary.

        Raises:
            ConfigError: If section not found or not a dict.
        """
        value = self.get(key)

        if value is None:
            raise ConfigError(f"Configuration section not found: {key}")

        if not isinstance(value, dict):
            raise ConfigError(f"Configuration key is not a section: {key}")

        return value

    def merge(self, other: "ConfigLoader") -> None:
        """Merge another configuration into this one.

        Args:
            other: ConfigLoader to merge from.

        Note:
            Other config values override existing ones. Lists are replaced,
            not concatenated.
        """
        self._data = self._merge_dicts(self._data, other._data)

    def _merge_dicts(self, base: dict, override: dict) -> dict:
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value

        return result

    def to_dict(self) -> dict[str, Any]:
        """Get the configuration as a dictionary.

        Returns:
            Configuration dictionary.
        """
        return self._data.copy()


def load_config(path: str | Path | None = None) -> ConfigLoader:
    """Load the simulation configuration.

    Args:
        path: Optional YAML file merged over DEFAULT_CONFIG.

    Returns:
        ConfigLoader with defaults and user overrides applied.

    Raises:
        ConfigError: If the user file cannot be loaded.
    """
    config = ConfigLoader.defaults()
    if path is not None:
        config.merge(ConfigLoader.load(path))
    return config
