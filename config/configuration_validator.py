"""
Configuration Validator Implementation - Rule-based configuration validation.

Each configuration section has a list of validation rules; cross-field checks
live in the section's validate_* method.
"""
from typing import Callable, List
from dataclasses import dataclass

from interfaces.configuration_interface import (
    IConfigurationValidator, RobotConfig, ClientConfig, NavigationConfig,
    SystemConfig
)


@dataclass
class ValidationRule:
    """A validation rule with condition and error message."""
    condition: Callable
    error_message: str
    field_name: str


def _non_empty(value) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


class ConfigurationValidatorImpl(IConfigurationValidator):
    """
    Configuration validator for the fleet client.

    Responsibilities:
    - Validate all configuration sections
    - Provide detailed error messages prefixed with the section and field
    """

    VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

    def __init__(self):
        """Initialize validator with validation rules."""
        self._robot_rules = self._create_robot_validation_rules()
        self._client_rules = self._create_client_validation_rules()
        self._navigation_rules = self._create_navigation_validation_rules()
        self._system_rules = self._create_system_validation_rules()

    def validate_robot_config(self, config: RobotConfig) -> List[str]:
        """
        Validate robot identity configuration.

        Args:
            config: Robot configuration to validate

        Returns:
            List[str]: List of validation errors
        """
        return self._apply_rules("Robot", self._robot_rules, config)

    def validate_client_config(self, config: ClientConfig) -> List[str]:
        """
        Validate worker cadence configuration.

        Args:
            config: Client configuration to validate

        Returns:
            List[str]: List of validation errors
        """
        return self._apply_rules("Client", self._client_rules, config)

    def validate_navigation_config(self, config: NavigationConfig) -> List[str]:
        """
        Validate goal execution configuration.

        Args:
            config: Navigation configuration to validate

        Returns:
            List[str]: List of validation errors
        """
        errors = self._apply_rules("Navigation", self._navigation_rules, config)

        # Cross-field validation
        if (isinstance(config.max_goal_retries, bool)
                or not isinstance(config.max_goal_retries, int)):
            errors.append("Navigation.max_goal_retries: Retry ceiling must be an integer")

        return errors

    def validate_system_config(self, config: SystemConfig) -> List[str]:
        """
        Validate system configuration.

        Args:
            config: System configuration to validate

        Returns:
            List[str]: List of validation errors
        """
        errors = self._apply_rules("System", self._system_rules, config)

        # Cross-field validation
        if _non_empty(config.log_level) and config.log_level.upper() not in self.VALID_LOG_LEVELS:
            errors.append(f"System.log_level: Must be one of {self.VALID_LOG_LEVELS}")

        return errors

    def _apply_rules(self, section: str, rules: List[ValidationRule], config) -> List[str]:
        errors = []
        for rule in rules:
            try:
                passed = rule.condition(config)
            except (TypeError, ValueError):
                passed = False
            if not passed:
                errors.append(f"{section}.{rule.field_name}: {rule.error_message}")
        return errors

    def _create_robot_validation_rules(self) -> List[ValidationRule]:
        """Create validation rules for robot configuration."""
        return [
            ValidationRule(
                lambda c: _non_empty(c.fleet_name),
                "Fleet name cannot be empty",
                "fleet_name"
            ),
            ValidationRule(
                lambda c: _non_empty(c.robot_name),
                "Robot name cannot be empty",
                "robot_name"
            ),
            ValidationRule(
                lambda c: _non_empty(c.robot_model),
                "Robot model cannot be empty",
                "robot_model"
            ),
            ValidationRule(
                lambda c: _non_empty(c.map_frame),
                "Map frame cannot be empty",
                "map_frame"
            ),
            ValidationRule(
                lambda c: _non_empty(c.robot_frame),
                "Robot frame cannot be empty",
                "robot_frame"
            ),
        ]

    def _create_client_validation_rules(self) -> List[ValidationRule]:
        """Create validation rules for client configuration."""
        return [
            ValidationRule(
                lambda c: c.update_frequency > 0,
                "Update frequency must be positive",
                "update_frequency"
            ),
            ValidationRule(
                lambda c: c.publish_frequency > 0,
                "Publish frequency must be positive",
                "publish_frequency"
            ),
            ValidationRule(
                lambda c: c.wait_timeout >= 0,
                "Wait timeout must be non-negative",
                "wait_timeout"
            ),
        ]

    def _create_navigation_validation_rules(self) -> List[ValidationRule]:
        """Create validation rules for navigation configuration."""
        return [
            ValidationRule(
                lambda c: c.max_dist_to_first_waypoint > 0,
                "Max distance to first waypoint must be positive",
                "max_dist_to_first_waypoint"
            ),
            ValidationRule(
                lambda c: c.max_goal_retries >= 1,
                "Retry ceiling must be at least 1",
                "max_goal_retries"
            ),
            ValidationRule(
                lambda c: c.translation_tolerance >= 0,
                "Translation tolerance must be non-negative",
                "translation_tolerance"
            ),
            ValidationRule(
                lambda c: c.yaw_tolerance >= 0,
                "Yaw tolerance must be non-negative",
                "yaw_tolerance"
            ),
            ValidationRule(
                lambda c: c.rotational_goal_tolerance >= 0,
                "Rotational goal tolerance must be non-negative",
                "rotational_goal_tolerance"
            ),
        ]

    def _create_system_validation_rules(self) -> List[ValidationRule]:
        """Create validation rules for system configuration."""
        return [
            ValidationRule(
                lambda c: _non_empty(c.log_level),
                "Log level cannot be empty",
                "log_level"
            ),
            ValidationRule(
                lambda c: _non_empty(c.log_format),
                "Log format cannot be empty",
                "log_format"
            ),
        ]
