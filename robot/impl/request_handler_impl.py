"""
RequestHandler Implementation - validation and application of fleet commands.

One command is taken from the fleet client per update cycle. Mode commands
toggle controller flags (and may block on docking or tool calls); path and
destination commands replace the goal queue wholesale.
"""
import logging
from typing import List

from interfaces.configuration_interface import RobotConfig, NavigationConfig
from interfaces.docking_coordinator_interface import IDockingCoordinator
from interfaces.fleet_client_interface import IFleetClient
from interfaces.fleet_messages import (
    RobotMode, Location, ModeRequest, PathRequest, DestinationRequest
)
from interfaces.goal_queue_interface import IGoalQueue, Goal
from interfaces.navigation_actuator_interface import INavigationActuator, NavigationGoal
from interfaces.request_handler_interface import IRequestHandler
from interfaces.request_validator_interface import IRequestValidator
from robot.impl.controller_state_impl import ControllerStateImpl
from utils.geometry import distance_between_points


DOCKING_PARAMETER = "docking"
TOOL_PARAMETER = "tool_cmd"


class RequestHandlerImpl(IRequestHandler):
    """
    Applies mode, path and destination commands to the controller.

    **Threading Model**: UPDATE THREAD ONLY. Queue mutations go through the
    goal queue's own lock so the publish thread may snapshot concurrently.
    """

    def __init__(self,
                 fleet_client: IFleetClient,
                 validator: IRequestValidator,
                 state: ControllerStateImpl,
                 goal_queue: IGoalQueue,
                 actuator: INavigationActuator,
                 docking_coordinator: IDockingCoordinator,
                 robot_config: RobotConfig,
                 navigation_config: NavigationConfig):
        self._fleet_client = fleet_client
        self._validator = validator
        self._state = state
        self._flags = state.flags
        self._goal_queue = goal_queue
        self._actuator = actuator
        self._docking_coordinator = docking_coordinator
        self._robot_config = robot_config
        self._navigation_config = navigation_config
        self.logger = logging.getLogger(f"RequestHandler.{robot_config.robot_name}")

    def process_next_request(self) -> bool:
        mode_request = self._fleet_client.read_mode_request()
        if mode_request is not None and self._is_valid(mode_request):
            self.handle_mode_request(mode_request)
            return True

        path_request = self._fleet_client.read_path_request()
        if path_request is not None and self._is_valid(path_request):
            self.handle_path_request(path_request)
            return True

        destination_request = self._fleet_client.read_destination_request()
        if destination_request is not None and self._is_valid(destination_request):
            self.handle_destination_request(destination_request)
            return True

        return False

    def handle_mode_request(self, request: ModeRequest) -> bool:
        mode = request.mode

        if mode == RobotMode.PAUSED:
            self.logger.info("received a PAUSE command.")
            self._actuator.cancel_all()
            self._goal_queue.mark_head_unsent()
            self._flags.paused.set()
            self._flags.emergency.clear()
        elif mode == RobotMode.MOVING:
            self.logger.info("received an explicit RESUME command.")
            self._flags.paused.clear()
            self._flags.emergency.clear()
        elif mode == RobotMode.EMERGENCY:
            self.logger.info("received an EMERGENCY command.")
            self._flags.paused.clear()
            self._flags.emergency.set()
        elif mode == RobotMode.DOCKING:
            self.logger.info("received a DOCKING command.")
            if not self._docking_coordinator.dock(request.get_parameter(DOCKING_PARAMETER)):
                return False
        elif mode == RobotMode.USE_TOOL:
            self.logger.info("received a USE TOOL command.")
            if not self._docking_coordinator.use_tool(request.get_parameter(TOOL_PARAMETER)):
                return False

        self._accept(request.task_id)
        return True

    def handle_path_request(self, request: PathRequest) -> bool:
        if not request.path:
            self.logger.warning(f"received an empty path for task {request.task_id}, ignoring.")
            return False

        self.logger.info(f"received a Path command of size {len(request.path)}.")

        first = request.path[0]
        current_pose = self._state.get_pose()
        distance = distance_between_points(
            (current_pose.x, current_pose.y), (first.x, first.y))
        if distance > self._navigation_config.max_dist_to_first_waypoint:
            self.logger.warning(
                f"distance to first waypoint {distance:.2f} exceeds "
                f"{self._navigation_config.max_dist_to_first_waypoint:.2f}, rejecting path.")
            self._actuator.cancel_all()
            self._goal_queue.clear()
            self._flags.request_error.set()
            self._flags.emergency.clear()
            self._flags.paused.clear()
            return False

        self._goal_queue.replace(self._to_goals(request.path))
        self._flags.paused.clear()
        self._accept(request.task_id)
        return True

    def handle_destination_request(self, request: DestinationRequest) -> bool:
        destination = request.destination
        self.logger.info(
            f"received a Destination command, x: {destination.x:.2f}, "
            f"y: {destination.y:.2f}, yaw: {destination.yaw:.2f}")

        self._goal_queue.replace(self._to_goals([destination]))
        self._flags.paused.clear()
        self._accept(request.task_id)
        return True

    def _is_valid(self, request) -> bool:
        valid = self._validator.is_valid(request.fleet_name, request.robot_name, request.task_id)
        if not valid:
            self.logger.debug(
                f"ignoring {type(request).__name__} for {request.fleet_name}/{request.robot_name} "
                f"task '{request.task_id}'")
        return valid

    def _accept(self, task_id: str) -> None:
        """Take ownership of an applied command."""
        self._state.set_task_id(task_id)
        self._flags.request_error.clear()

    def _to_goals(self, locations: List[Location]) -> List[Goal]:
        return [
            Goal(area_label=location.level_name,
                 target_pose=self._to_navigation_goal(location),
                 scheduled_arrival=location.timestamp)
            for location in locations
        ]

    def _to_navigation_goal(self, location: Location) -> NavigationGoal:
        return NavigationGoal(
            frame_id=self._robot_config.map_frame,
            sec=location.sec,
            nanosec=location.nanosec,
            x=location.x,
            y=location.y,
            yaw=location.yaw,
            parameters=self._navigation_config.goal_parameters,
        )
