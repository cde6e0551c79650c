"""
Configuration management module.

This module provides configuration loading and typed accessors for
the rolling covariance pipeline.
"""

import copy
import logging
import os
from typing import Any, Dict, Mapping, Optional

import yaml

from ..exceptions import ConfigError
from ..numeric.fixed_point import FixedFormat

DEFAULTS: Dict[str, Any] = {
    "ewma": {"lambda_percent": 94, "window": 30, "centering": "reference"},
    "fixed_point": {"integer_bits": 16, "fractional_bits": 16},
    "data": {"root_path": "./data"},
    "logging": {"level": "INFO"},
}


class Config:
    """
    Configuration manager.

    Loads configuration from YAML files with environment variable
    substitution; missing keys fall back to library defaults.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration manager.

        Parameters:
        -----------
        config_path : str, optional
            Path to configuration file
        """
        self.config_path = config_path or self._find_config_file()
        self.config = self._load_config()

    @classmethod
    def from_dict(cls, mapping: Mapping[str, Any]) -> "Config":
        """Build a configuration without a file."""
        instance = cls.__new__(cls)
        instance.config_path = None
        instance.config = instance._substitute_env_vars(copy.deepcopy(dict(mapping)))
        return instance

    def _find_config_file(self) -> str:
        """Find configuration file in standard locations."""
        possible_paths = [
            "config.yaml",
            "config.yml",
            os.path.join(os.path.dirname(__file__), "..", "..", "config.yaml"),
        ]

        for path in possible_paths:
            if os.path.exists(path):
                return path

        raise FileNotFoundError("No configuration file found")

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        with open(self.config_path, 'r') as f:
            config = yaml.safe_load(f) or {}

        if not isinstance(config, dict):
            raise ConfigError(f"Top level of {self.config_path} must be a mapping")
        return self._substitute_env_vars(config)

    def _substitute_env_vars(self, config: Any) -> Any:
        """Substitute environment variables in configuration."""
        if isinstance(config, dict):
            return {k: self._substitute_env_vars(v) for k, v in config.items()}
        elif isinstance(config, list):
            return [self._substitute_env_vars(item) for item in config]
        elif isinstance(config, str) and config.startswith("${") and config.endswith("}"):
            env_var = config[2:-1]
            return os.getenv(env_var, config)
        else:
            return config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Parameters:
        -----------
        key : str
            Configuration key (supports dot notation)
        default : Any
            Default value if key not found

        Returns:
        --------
        Any
            Configuration value
        """
        for source in (self.config, DEFAULTS):
            value = source
            for k in key.split('.'):
                if isinstance(value, dict) and k in value:
                    value = value[k]
                else:
                    break
            else:
                return value

        return default

    def get_int(self, key: str) -> int:
        """Integer value, accepting numeric strings from env substitution."""
        value = self.get(key)
        try:
            if isinstance(value, bool):
                raise TypeError
            if isinstance(value, float) and not value.is_integer():
                raise ValueError
            return int(value)
        except (TypeError, ValueError):
            raise ConfigError(f"'{key}' must be an integer, got {value!r}") from None

    def get_data_path(self, data_key: str) -> str:
        """Get full path to data file."""
        root_path = self.get('data.root_path', './data')
        file_path = self.get(f'data.{data_key}')

        if file_path is None:
            raise ConfigError(f"Data key '{data_key}' not found in configuration")

        return os.path.join(root_path, file_path)

    @property
    def fixed_format(self) -> FixedFormat:
        try:
            return FixedFormat(self.get_int('fixed_point.integer_bits'),
                               self.get_int('fixed_point.fractional_bits'))
        except ValueError as e:
            raise ConfigError(str(e)) from e

    @property
    def log_level(self) -> int:
        level = self.get('logging.level')
        if isinstance(level, int):
            return level
        resolved = logging.getLevelName(str(level).upper())
        if not isinstance(resolved, int):
            raise ConfigError(f"Unknown logging level {level!r}")
        return resolved
