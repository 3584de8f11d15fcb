"""
Configuration Provider Implementation - Centralized configuration composition root.

This provider loads, merges, and validates configuration from all sources (env, file, defaults),
providing type-safe access and supporting reloads and runtime overrides.
"""
import logging
import threading
from typing import Dict, Any, Optional, List

from interfaces.configuration_interface import (
    IBusinessConfigurationProvider, IConfigurationSource, IConfigurationValidator,
    RobotConfig, ClientConfig, NavigationConfig, SystemConfig, ClientNodeConfig,
    ConfigurationSource, ConfigurationValue, ConfigurationError
)
from config.configuration_sources import (
    EnvironmentConfigurationSource, FileConfigurationSource, DefaultConfigurationSource
)
from config.configuration_validator import ConfigurationValidatorImpl


logger = logging.getLogger(__name__)


class ConfigurationProvider(IBusinessConfigurationProvider):
    """
    Centralized configuration provider that merges all sources and validates configuration.
    Thread-safe and supports reloads.
    """
    def __init__(self,
                 config_file: Optional[str] = None,
                 config_file_format: str = "auto",
                 env_prefix: str = "FLEET_CLIENT_",
                 validator: Optional[IConfigurationValidator] = None,
                 sources: Optional[List[IConfigurationSource]] = None):
        self._lock = threading.RLock()
        self._sources: List[IConfigurationSource] = []
        self._config: Dict[str, Any] = {}
        self._origins: Dict[str, ConfigurationSource] = {}
        self._overrides: Dict[str, Any] = {}
        self._validator = validator or ConfigurationValidatorImpl()
        self._errors: List[str] = []
        if sources is not None:
            self._sources = list(sources)
        else:
            self._init_sources(config_file, config_file_format, env_prefix)
        self.reload()

    def _init_sources(self, config_file, config_file_format, env_prefix):
        # Order: env > file > defaults
        self._sources = [
            EnvironmentConfigurationSource(prefix=env_prefix)
        ]
        if config_file:
            self._sources.append(FileConfigurationSource(config_file, config_file_format))
        self._sources.append(DefaultConfigurationSource())

    def reload(self) -> None:
        """Reload configuration from all sources and validate."""
        with self._lock:
            merged = {}
            origins = {}
            for source in reversed(self._sources):  # Defaults first, env last
                try:
                    conf = source.load_configuration()
                except ConfigurationError as e:
                    logger.warning(f"Skipping {source.get_source_type().value} configuration: {e}")
                    continue
                merged.update(conf)
                for key in conf:
                    origins[key] = source.get_source_type()
            self._config = merged
            self._origins = origins
            self._errors = self.validate()

    def validate(self) -> List[str]:
        """Validate all configuration sections and return errors."""
        errors = []
        try:
            errors.extend(self._validator.validate_robot_config(self.get_robot_config()))
            errors.extend(self._validator.validate_client_config(self.get_client_config()))
            errors.extend(self._validator.validate_navigation_config(self.get_navigation_config()))
            errors.extend(self._validator.validate_system_config(self.get_system_config()))
        except (TypeError, ValueError) as e:
            errors.append(f"Validation error: {e}")
        return errors

    def _merged(self) -> Dict[str, Any]:
        with self._lock:
            return {**self._config, **self._overrides}  # Overrides win

    def get_robot_config(self) -> RobotConfig:
        c = self._merged()
        return RobotConfig(
            fleet_name=c.get("robot.fleet_name", "fleet_name"),
            robot_name=c.get("robot.robot_name", "robot_name"),
            robot_model=c.get("robot.robot_model", "robot_model"),
            level_name=c.get("robot.level_name", "level_name"),
            map_frame=c.get("robot.map_frame", "map"),
            robot_frame=c.get("robot.robot_frame", "base_footprint"),
        )

    def get_client_config(self) -> ClientConfig:
        c = self._merged()
        return ClientConfig(
            update_frequency=c.get("client.update_frequency", 10.0),
            publish_frequency=c.get("client.publish_frequency", 1.0),
            wait_timeout=c.get("client.wait_timeout", 10.0),
        )

    def get_navigation_config(self) -> NavigationConfig:
        c = self._merged()
        return NavigationConfig(
            max_dist_to_first_waypoint=c.get("navigation.max_dist_to_first_waypoint", 10.0),
            max_goal_retries=c.get("navigation.max_goal_retries", 5),
            translation_tolerance=c.get("navigation.translation_tolerance", 0.01),
            yaw_tolerance=c.get("navigation.yaw_tolerance", 0.01),
            rotational_goal_tolerance=c.get("navigation.rotational_goal_tolerance", 3.14),
        )

    def get_system_config(self) -> SystemConfig:
        c = self._merged()
        return SystemConfig(
            log_level=c.get("system.log_level", "INFO"),
            log_file=c.get("system.log_file", None),
            log_format=c.get("system.log_format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
        )

    def get_client_node_config(self) -> ClientNodeConfig:
        return ClientNodeConfig(
            robot=self.get_robot_config(),
            client=self.get_client_config(),
            navigation=self.get_navigation_config(),
            system=self.get_system_config(),
        )

    def get_value(self, key: str, default: Any = None) -> ConfigurationValue:
        with self._lock:
            if key in self._overrides:
                value, source = self._overrides[key], ConfigurationSource.OVERRIDE
            else:
                value = self._config.get(key, default)
                source = self._origins.get(key, ConfigurationSource.DEFAULT)
        return ConfigurationValue(
            value=value,
            source=source,
            key=key,
            description=f"Config value for {key}",
            validation_errors=[]
        )

    def set_value(self, key: str, value: Any) -> None:
        with self._lock:
            self._overrides[key] = value
            self._errors = self.validate()

    @property
    def errors(self) -> List[str]:
        with self._lock:
            return list(self._errors)
