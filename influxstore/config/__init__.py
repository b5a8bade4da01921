"""
Configuration management for influxstore.

Values are looked up by dotted keys (``influxdb2.host``). Environment
variables override file values, using the upper-cased key with dots
replaced by underscores (``INFLUXDB2_HOST``).
"""

import os
import json
import logging
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

# Initialize logger
LOG = logging.getLogger(__name__)

_MISSING = object()

TRUE_STRINGS = ('1', 'true', 'yes', 'on')
FALSE_STRINGS = ('0', 'false', 'no', 'off', '')

_default_store = None


class ConfigStore:
    """
    Read-only configuration store backed by a nested dictionary.
    Supports loading from YAML or JSON, with environment overrides.
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None, from_env: bool = True):
        """
        Args:
            data: Nested configuration dictionary
            from_env: Whether environment variables override stored values
        """
        self._data: Dict[str, Any] = dict(data or {})
        self.from_env = from_env

    @classmethod
    def from_file(cls, config_file: str, from_env: bool = True) -> 'ConfigStore':
        """Load a store from a YAML or JSON file. Problems leave the store empty."""
        try:
            if not os.path.exists(config_file):
                LOG.warning(f"Config file not found: {config_file}")
                return cls({}, from_env=from_env)

            with open(config_file, 'r') as f:
                if config_file.lower().endswith('.yaml') or config_file.lower().endswith('.yml'):
                    config = yaml.safe_load(f)
                elif config_file.lower().endswith('.json'):
                    config = json.load(f)
                else:
                    LOG.warning(f"Unsupported config file format: {config_file}")
                    return cls({}, from_env=from_env)

            if not isinstance(config, dict):
                LOG.warning(f"Config file {config_file} does not contain a mapping, ignoring it")
                return cls({}, from_env=from_env)

            LOG.info(f"Loaded configuration from {config_file}")
            return cls(config, from_env=from_env)

        except (OSError, ValueError, yaml.YAMLError) as e:
            LOG.error(f"Failed to load config from {config_file}: {e}")
            return cls({}, from_env=from_env)

    @staticmethod
    def env_name(key: str) -> str:
        return key.replace('.', '_').upper()

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a dotted key.

        Order: environment override, literal dotted key, nested traversal, default.
        """
        if self.from_env:
            env_value = os.getenv(self.env_name(key))
            if env_value is not None:
                return env_value

        if key in self._data:
            return self._data[key]

        node: Any = self._data
        for part in key.split('.'):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get(key, _MISSING)
        if value is _MISSING or value is None:
            return default
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return value != 0

        text = str(value).strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
        LOG.warning(f"Invalid boolean for {key}: {value!r}, using default {default}")
        return default

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._data)


def get_config() -> ConfigStore:
    """
    Return the process-wide configuration store, loading it on first use.

    The config file path comes from INFLUXSTORE_CONFIG_FILE (or a .env file).
    """
    global _default_store

    if _default_store is None:
        # Imported here, settings depends on this module
        from influxstore.config.settings import EnvConfig

        load_dotenv()
        env = EnvConfig()
        if env.config_file:
            _default_store = ConfigStore.from_file(env.config_file)
        else:
            LOG.debug("No config file set, using environment and defaults only")
            _default_store = ConfigStore({})
    return _default_store


def set_config(store: Optional[ConfigStore]) -> None:
    """Replace the process-wide store. None forces a reload on next use."""
    global _default_store
    _default_store = store
