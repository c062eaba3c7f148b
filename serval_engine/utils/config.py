"""
Configuration utility for the engine.
"""

import copy
import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "layout": {
        "viewport_width": 800
    },
    "paint": {
        "canvas_width": 800,
        "canvas_height": 800,
        "format": "png"
    },
    "logging": {
        "file": None,
        "console_level": "WARNING"
    }
}


def default_config_path() -> str:
    """
    Get the default config file path.

    Returns:
        str: ~/.serval/config.json
    """
    return os.path.join(os.path.expanduser("~"), ".serval", "config.json")


class Config:
    """Configuration manager backed by a JSON file."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the config file
        """
        self.config_path = config_path or default_config_path()
        self.config: Dict[str, Any] = {}

        # Load config if it exists
        self.load()

        logger.debug(f"Configuration initialized (config_path: {self.config_path})")

    def load(self) -> None:
        """
        Load configuration from file, layered over the defaults.

        A missing file leaves the defaults in place. A file that cannot be
        read or decoded is logged and ignored.
        """
        self._set_defaults()

        if not os.path.exists(self.config_path):
            logger.debug(f"Configuration file not found at {self.config_path}, using defaults")
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading configuration: {e}")
            return

        if not isinstance(loaded, dict):
            logger.error(f"Configuration in {self.config_path} is not a JSON object, ignoring it")
            return

        self._merge(self.config, loaded)
        logger.debug(f"Configuration loaded from {self.config_path}")

    def save(self) -> None:
        """
        Save configuration to file.

        Raises:
            OSError: If the file cannot be written
        """
        config_dir = os.path.dirname(self.config_path)
        if config_dir:
            os.makedirs(config_dir, exist_ok=True)

        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(self.config, f, indent=4)

        logger.debug(f"Configuration saved to {self.config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Configuration key (can be nested using dots, e.g. 'paint.format')
            default: Default value if key doesn't exist

        Returns:
            Any: Configuration value or default
        """
        config = self.config
        parts = key.split('.')

        for part in parts[:-1]:
            if part not in config or not isinstance(config[part], dict):
                return default
            config = config[part]

        return config.get(parts[-1], default)

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            key: Configuration key (can be nested using dots, e.g. 'paint.format')
            value: Configuration value
        """
        config = self.config
        parts = key.split('.')

        for part in parts[:-1]:
            if not isinstance(config.get(part), dict):
                config[part] = {}
            config = config[part]

        config[parts[-1]] = value

    def remove(self, key: str) -> bool:
        """
        Remove a configuration value.

        Args:
            key: Configuration key

        Returns:
            bool: True if key was removed
        """
        config = self.config
        parts = key.split('.')

        for part in parts[:-1]:
            if part not in config or not isinstance(config[part], dict):
                return False
            config = config[part]

        if parts[-1] in config:
            del config[parts[-1]]
            return True
        return False

    def get_all(self) -> Dict[str, Any]:
        """
        Get all configuration values.

        Returns:
            Dict[str, Any]: Copy of all configuration values
        """
        return copy.deepcopy(self.config)

    def _set_defaults(self) -> None:
        """Set default configuration values."""
        self.config = copy.deepcopy(DEFAULT_CONFIG)

    @classmethod
    def _merge(cls, target: Dict[str, Any], source: Dict[str, Any]) -> None:
        for key, value in source.items():
            if isinstance(value, dict) and isinstance(target.get(key), dict):
                cls._merge(target[key], value)
            else:
                target[key] = value
