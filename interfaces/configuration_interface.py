"""
Configuration Management Interface - Centralized fleet client configuration.

This module provides interfaces for managing all client configuration parameters
with typed configuration sections, pluggable sources and validation.

Design Principles:
- **Single Responsibility**: Each configuration section has one clear purpose
- **Open/Closed**: New sources plug in through IConfigurationSource
- **Dependency Inversion**: Components depend on the section dataclasses, not on sources
"""
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field
from enum import Enum


class ConfigurationSource(Enum):
    """Configuration source types."""
    ENVIRONMENT = "environment"
    FILE = "file"
    DEFAULT = "default"
    OVERRIDE = "override"


@dataclass
class ConfigurationValue:
    """A configuration value with metadata."""
    value: Any
    source: ConfigurationSource
    key: str
    description: str
    validation_errors: Optional[List[str]] = None

    def __post_init__(self):
        if self.validation_errors is None:
            self.validation_errors = []


@dataclass
class RobotConfig:
    """Identity of this robot within its fleet and the frames it reports in."""
    fleet_name: str
    robot_name: str
    robot_model: str
    level_name: str  # level reported with every pose

    # Frames
    map_frame: str = "map"
    robot_frame: str = "base_footprint"


@dataclass
class ClientConfig:
    """Worker cadence and startup parameters."""
    update_frequency: float  # Hz
    publish_frequency: float  # Hz
    wait_timeout: float  # seconds to wait for collaborators at startup


@dataclass
class NavigationConfig:
    """Goal execution parameters."""
    # Proximity guard for path requests
    max_dist_to_first_waypoint: float  # meters

    # Retry ceiling: attempts per goal before the path is abandoned
    max_goal_retries: int

    # Motion detection between consecutive pose samples
    translation_tolerance: float  # meters
    yaw_tolerance: float  # radians

    # Forwarded to the navigation actuator with every goal
    rotational_goal_tolerance: float  # radians

    @property
    def goal_parameters(self) -> str:
        """Actuator parameter string attached to every goal."""
        return "{rotational_goal_tolerance: %s}" % self.rotational_goal_tolerance


@dataclass
class SystemConfig:
    """System-wide configuration."""
    # Logging parameters
    log_level: str
    log_file: Optional[str]
    log_format: str


@dataclass
class ClientNodeConfig:
    """All sections needed to build a ClientNode."""
    robot: RobotConfig
    client: ClientConfig
    navigation: NavigationConfig
    system: SystemConfig = field(default_factory=lambda: SystemConfig(
        log_level="INFO",
        log_file=None,
        log_format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    ))


class ConfigurationError(Exception):
    """Raised when configuration operations fail."""
    pass


class IBusinessConfigurationProvider(ABC):
    """
    Interface for business configuration providers.

    Provides typed access to all configuration sections.
    """

    @abstractmethod
    def get_robot_config(self) -> RobotConfig:
        """
        Get robot identity configuration.

        Returns:
            RobotConfig: Robot identity and frames
        """
        pass

    @abstractmethod
    def get_client_config(self) -> ClientConfig:
        """
        Get worker cadence configuration.

        Returns:
            ClientConfig: Worker frequencies and startup timeout
        """
        pass

    @abstractmethod
    def get_navigation_config(self) -> NavigationConfig:
        """
        Get goal execution configuration.

        Returns:
            NavigationConfig: Thresholds and retry ceiling
        """
        pass

    @abstractmethod
    def get_system_config(self) -> SystemConfig:
        """
        Get system-wide configuration.

        Returns:
            SystemConfig: Logging configuration
        """
        pass

    @abstractmethod
    def get_client_node_config(self) -> ClientNodeConfig:
        """
        Get all sections bundled for ClientNode construction.

        Returns:
            ClientNodeConfig: Complete client configuration
        """
        pass

    @abstractmethod
    def get_value(self, key: str, default: Any = None) -> ConfigurationValue:
        """
        Get a raw configuration value with metadata.

        Args:
            key: Dotted configuration key (e.g. "robot.robot_name")
            default: Value returned when the key is unknown

        Returns:
            ConfigurationValue: Value and the source it came from
        """
        pass

    @abstractmethod
    def set_value(self, key: str, value: Any) -> None:
        """
        Set a runtime override for a configuration value.

        Args:
            key: Dotted configuration key
            value: New value
        """
        pass

    @abstractmethod
    def reload(self) -> None:
        """Reload configuration from all sources."""
        pass

    @abstractmethod
    def validate(self) -> List[str]:
        """
        Validate the merged configuration.

        Returns:
            List[str]: Validation errors (empty if valid)
        """
        pass

    @property
    @abstractmethod
    def errors(self) -> List[str]:
        """Validation errors from the last reload or override."""
        pass


class IConfigurationValidator(ABC):
    """Interface for configuration validation."""

    @abstractmethod
    def validate_robot_config(self, config: RobotConfig) -> List[str]:
        """
        Validate robot configuration.

        Args:
            config: Robot configuration to validate

        Returns:
            List[str]: Validation errors
        """
        pass

    @abstractmethod
    def validate_client_config(self, config: ClientConfig) -> List[str]:
        """
        Validate worker cadence configuration.

        Args:
            config: Client configuration to validate

        Returns:
            List[str]: Validation errors
        """
        pass

    @abstractmethod
    def validate_navigation_config(self, config: NavigationConfig) -> List[str]:
        """
        Validate goal execution configuration.

        Args:
            config: Navigation configuration to validate

        Returns:
            List[str]: Validation errors
        """
        pass

    @abstractmethod
    def validate_system_config(self, config: SystemConfig) -> List[str]:
        """
        Validate system configuration.

        Args:
            config: System configuration to validate

        Returns:
            List[str]: Validation errors
        """
        pass


class IConfigurationSource(ABC):
    """Interface for configuration sources."""

    @abstractmethod
    def load_configuration(self) -> Dict[str, Any]:
        """
        Load configuration from this source.

        Returns:
            Dict[str, Any]: Flat mapping of dotted keys to values

        Raises:
            ConfigurationError: If loading fails
        """
        pass

    @abstractmethod
    def get_source_type(self) -> ConfigurationSource:
        """Get the source type."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the source can currently be loaded."""
        pass
