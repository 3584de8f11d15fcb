"""
Configuration Sources - Load configuration from various sources.

This module provides implementations for loading configuration from environment
variables, configuration files and built-in defaults. Every source returns a
flat mapping of dotted keys ("section.field") to values.
"""
import os
import json
from typing import Dict, Any
from pathlib import Path

import yaml

from interfaces.configuration_interface import (
    IConfigurationSource, ConfigurationSource, ConfigurationError
)


def flatten_configuration(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """
    Flatten nested sections into dotted keys.

    {"robot": {"robot_name": "r1"}} becomes {"robot.robot_name": "r1"}.
    Keys that are already dotted are kept as they are.
    """
    flat = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            flat.update(flatten_configuration(value, full_key))
        else:
            flat[full_key] = value
    return flat


class EnvironmentConfigurationSource(IConfigurationSource):
    """
    Configuration source that loads from environment variables.

    Environment variable naming convention:
    - FLEET_CLIENT_<SECTION>_<KEY> (e.g., FLEET_CLIENT_ROBOT_ROBOT_NAME)
    - FLEET_CLIENT_<KEY> for keys without a section
    """

    def __init__(self, prefix: str = "FLEET_CLIENT_"):
        """
        Initialize environment configuration source.

        Args:
            prefix: Environment variable prefix
        """
        self.prefix = prefix

    def load_configuration(self) -> Dict[str, Any]:
        """
        Load configuration from environment variables.

        Returns:
            Dict[str, Any]: Configuration data

        Raises:
            ConfigurationError: If loading fails
        """
        try:
            config = {}
            for key, value in os.environ.items():
                if key.startswith(self.prefix):
                    config[self._convert_env_key_to_config_key(key)] = self._parse_env_value(value)
            return config
        except Exception as e:
            raise ConfigurationError(f"Failed to load environment configuration: {e}")

    def get_source_type(self) -> ConfigurationSource:
        """Get the source type."""
        return ConfigurationSource.ENVIRONMENT

    def is_available(self) -> bool:
        """Check if source is available."""
        return True

    def _convert_env_key_to_config_key(self, env_key: str) -> str:
        """
        Convert environment variable key to configuration key.

        Args:
            env_key: Environment variable key (e.g., FLEET_CLIENT_CLIENT_UPDATE_FREQUENCY)

        Returns:
            str: Configuration key (e.g., client.update_frequency)
        """
        key = env_key[len(self.prefix):].lower()

        parts = key.split('_')
        if len(parts) >= 2:
            section = parts[0]
            field = '_'.join(parts[1:])
            return f"{section}.{field}"
        else:
            return key

    def _parse_env_value(self, value: str) -> Any:
        """
        Parse environment variable value to appropriate type.

        Args:
            value: Environment variable value

        Returns:
            Any: Parsed value
        """
        # JSON covers numbers, lists, objects and lowercase booleans
        try:
            return json.loads(value)
        except (json.JSONDecodeError, ValueError):
            pass

        if value.lower() in ('true', 'false'):
            return value.lower() == 'true'

        return value


class FileConfigurationSource(IConfigurationSource):
    """
    Configuration source that loads from configuration files.

    Supports JSON and YAML formats, nested sections are flattened.
    """

    def __init__(self, file_path: str, file_format: str = "auto"):
        """
        Initialize file configuration source.

        Args:
            file_path: Path to configuration file
            file_format: File format ("json", "yaml", or "auto")
        """
        self.file_path = Path(file_path)
        self.file_format = file_format

    def load_configuration(self) -> Dict[str, Any]:
        """
        Load configuration from file.

        Returns:
            Dict[str, Any]: Configuration data

        Raises:
            ConfigurationError: If loading fails
        """
        if not self.file_path.exists():
            raise ConfigurationError(f"Configuration file not found: {self.file_path}")

        format_type = self._determine_format()
        try:
            if format_type == "json":
                data = self._load_json()
            elif format_type == "yaml":
                data = self._load_yaml()
            else:
                raise ConfigurationError(f"Unsupported file format: {format_type}")
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load file configuration: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file must contain a mapping: {self.file_path}")
        return flatten_configuration(data)

    def get_source_type(self) -> ConfigurationSource:
        """Get the source type."""
        return ConfigurationSource.FILE

    def is_available(self) -> bool:
        """Check if source is available."""
        return self.file_path.exists()

    def _determine_format(self) -> str:
        """
        Determine file format based on extension.

        Returns:
            str: File format ("json" or "yaml")
        """
        if self.file_format != "auto":
            return self.file_format

        suffix = self.file_path.suffix.lower()
        if suffix == ".json":
            return "json"
        elif suffix in (".yml", ".yaml"):
            return "yaml"

        # YAML is a superset of JSON
        return "yaml"

    def _load_json(self) -> Dict[str, Any]:
        """Load JSON configuration file."""
        with open(self.file_path, 'r') as f:
            return json.load(f)

    def _load_yaml(self) -> Dict[str, Any]:
        """Load YAML configuration file."""
        with open(self.file_path, 'r') as f:
            return yaml.safe_load(f)


class DefaultConfigurationSource(IConfigurationSource):
    """
    Configuration source that provides default values.

    This source provides sensible defaults for all configuration parameters.
    """

    def __init__(self):
        """Initialize default configuration source."""
        self._defaults = self._create_default_configuration()

    def load_configuration(self) -> Dict[str, Any]:
        """
        Load default configuration.

        Returns:
            Dict[str, Any]: Default configuration data
        """
        return self._defaults.copy()

    def get_source_type(self) -> ConfigurationSource:
        """Get the source type."""
        return ConfigurationSource.DEFAULT

    def is_available(self) -> bool:
        """Check if source is available."""
        return True

    def _create_default_configuration(self) -> Dict[str, Any]:
        """
        Create default configuration values.

        Returns:
            Dict[str, Any]: Default configuration
        """
        return {
            # Robot identity
            "robot.fleet_name": "fleet_name",
            "robot.robot_name": "robot_name",
            "robot.robot_model": "robot_model",
            "robot.level_name": "level_name",
            "robot.map_frame": "map",
            "robot.robot_frame": "base_footprint",

            # Worker cadence
            "client.update_frequency": 10.0,
            "client.publish_frequency": 1.0,
            "client.wait_timeout": 10.0,

            # Goal execution
            "navigation.max_dist_to_first_waypoint": 10.0,
            "navigation.max_goal_retries": 5,
            "navigation.translation_tolerance": 0.01,
            "navigation.yaw_tolerance": 0.01,
            "navigation.rotational_goal_tolerance": 3.14,

            # System configuration
            "system.log_level": "INFO",
            "system.log_file": None,
            "system.log_format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        }
