"""
Core interfaces for the fleet task client.

This module defines all the major interfaces that components must implement
to ensure proper decoupling and testability.
"""

# Fleet messages
from .fleet_messages import (
    RobotMode, Location, ModeParameter, ModeRequest, PathRequest,
    DestinationRequest, RobotState
)

# External collaborators
from .fleet_client_interface import IFleetClient
from .navigation_actuator_interface import (
    INavigationActuator, NavigationGoal, GoalState, NavigationActuatorError
)
from .telemetry_interface import (
    IPoseProvider, PoseStamped, BatteryState, PoseLookupError
)
from .service_call_interface import (
    IServiceCaller, ServiceResponse, ServiceCallError
)

# Controller components
from .goal_queue_interface import IGoalQueue, Goal
from .controller_state_interface import IControllerState, FlagSnapshot
from .request_validator_interface import IRequestValidator
from .docking_coordinator_interface import IDockingCoordinator
from .request_handler_interface import IRequestHandler
from .goal_execution_driver_interface import IGoalExecutionDriver

# Configuration
from .configuration_interface import (
    IBusinessConfigurationProvider, IConfigurationSource, IConfigurationValidator,
    RobotConfig, ClientConfig, NavigationConfig, SystemConfig, ClientNodeConfig,
    ConfigurationSource, ConfigurationValue, ConfigurationError
)

__all__ = [
    # Fleet messages
    'RobotMode', 'Location', 'ModeParameter', 'ModeRequest', 'PathRequest',
    'DestinationRequest', 'RobotState',

    # External collaborators
    'IFleetClient',
    'INavigationActuator', 'NavigationGoal', 'GoalState', 'NavigationActuatorError',
    'IPoseProvider', 'PoseStamped', 'BatteryState', 'PoseLookupError',
    'IServiceCaller', 'ServiceResponse', 'ServiceCallError',

    # Controller components
    'IGoalQueue', 'Goal',
    'IControllerState', 'FlagSnapshot',
    'IRequestValidator',
    'IDockingCoordinator',
    'IRequestHandler',
    'IGoalExecutionDriver',

    # Configuration
    'IBusinessConfigurationProvider', 'IConfigurationSource', 'IConfigurationValidator',
    'RobotConfig', 'ClientConfig', 'NavigationConfig', 'SystemConfig', 'ClientNodeConfig',
    'ConfigurationSource', 'ConfigurationValue', 'ConfigurationError',
]
