"""
ClientNode - fleet client controller for a single robot.

Composes the controller state, goal queue, request handling and goal execution
and runs them on two independent worker threads:

- update thread (update_frequency): refresh pose -> read one command -> drive goals
- publish thread (publish_frequency): report RobotState to the fleet coordinator

All shared state lives in ControllerStateImpl and GoalQueueImpl, each group
behind its own lock, so the two workers only contend where they touch the
same group.
"""
import logging
import threading
from typing import Callable, List, Optional

from interfaces.configuration_interface import ClientNodeConfig
from interfaces.fleet_client_interface import IFleetClient
from interfaces.fleet_messages import RobotMode, Location, RobotState
from interfaces.navigation_actuator_interface import INavigationActuator
from interfaces.service_call_interface import IServiceCaller
from interfaces.telemetry_interface import BatteryState, IPoseProvider, PoseLookupError
from robot.impl.controller_state_impl import ControllerStateImpl
from robot.impl.docking_coordinator_impl import DockingCoordinatorImpl
from robot.impl.goal_execution_driver_impl import GoalExecutionDriverImpl
from robot.impl.goal_queue_impl import GoalQueueImpl
from robot.impl.mode_resolver_impl import resolve_robot_mode
from robot.impl.request_handler_impl import RequestHandlerImpl
from robot.impl.request_validator_impl import RequestValidatorImpl
from utils.rate import Rate


class ClientNodeError(Exception):
    """Base error for the fleet client controller."""
    pass


class ClientNodeStartupError(ClientNodeError):
    """Raised when a required collaborator cannot be reached at startup."""
    pass


class ClientNode:
    """
    Task execution controller for one robot.

    Threading Model:
    - update_once(): UPDATE THREAD (or the caller, when driven manually)
    - publish_once(): PUBLISH THREAD, and the update thread for out-of-band
      reports during tool calls
    - battery_state_callback(): battery provider thread
    - start()/stop(): owner thread
    """

    def __init__(self,
                 config: ClientNodeConfig,
                 fleet_client: IFleetClient,
                 actuator: INavigationActuator,
                 pose_provider: IPoseProvider,
                 docking_caller: Optional[IServiceCaller] = None,
                 undocking_caller: Optional[IServiceCaller] = None,
                 tool_caller: Optional[IServiceCaller] = None,
                 clock: Optional[Callable[[], float]] = None):
        """
        Args:
            config: Robot, client and navigation configuration
            fleet_client: Request channel and state sink
            actuator: Navigation stack
            pose_provider: Source of robot pose samples
            docking_caller: Optional docking service
            undocking_caller: Optional undocking service
            tool_caller: Optional tool service
            clock: Time source for scheduled arrivals, defaults to time.time
        """
        self.config = config
        self.robot_id = config.robot.robot_name
        self.logger = logging.getLogger(f"ClientNode.{self.robot_id}")

        self._fleet_client = fleet_client
        self._actuator = actuator
        self._pose_provider = pose_provider
        self._docking_caller = docking_caller
        self._undocking_caller = undocking_caller
        self._tool_caller = tool_caller

        self.state = ControllerStateImpl()
        self.goal_queue = GoalQueueImpl()

        self.docking_coordinator = DockingCoordinatorImpl(
            self.state.flags,
            docking_caller=docking_caller,
            undocking_caller=undocking_caller,
            tool_caller=tool_caller,
            publish_state=self.publish_once,
            robot_id=self.robot_id,
        )
        self.validator = RequestValidatorImpl(
            config.robot.fleet_name, config.robot.robot_name, self.state)
        self.request_handler = RequestHandlerImpl(
            fleet_client,
            self.validator,
            self.state,
            self.goal_queue,
            actuator,
            self.docking_coordinator,
            config.robot,
            config.navigation,
        )

        driver_kwargs = {"robot_id": self.robot_id}
        if clock is not None:
            driver_kwargs["clock"] = clock
        self.driver = GoalExecutionDriverImpl(
            self.state.flags,
            self.goal_queue,
            actuator,
            self.docking_coordinator,
            config.navigation,
            **driver_kwargs,
        )

        self._stop_event = threading.Event()
        self._update_thread: Optional[threading.Thread] = None
        self._publish_thread: Optional[threading.Thread] = None

    @classmethod
    def make(cls,
             config: ClientNodeConfig,
             fleet_client: IFleetClient,
             actuator: INavigationActuator,
             pose_provider: IPoseProvider,
             docking_caller: Optional[IServiceCaller] = None,
             undocking_caller: Optional[IServiceCaller] = None,
             tool_caller: Optional[IServiceCaller] = None,
             clock: Optional[Callable[[], float]] = None) -> "ClientNode":
        """
        Wait for every collaborator to come up, then build the node.

        Raises:
            ClientNodeStartupError: If the actuator or a configured service
                is not reachable within wait_timeout
        """
        logger = logging.getLogger(f"ClientNode.{config.robot.robot_name}")
        wait_timeout = config.client.wait_timeout

        logger.info(f"waiting for navigation actuator, timeout {wait_timeout:.1f}s")
        if not actuator.wait_for_server(wait_timeout):
            raise ClientNodeStartupError("timed out waiting for the navigation actuator")
        logger.info("connected with navigation actuator")

        services = (("docking", docking_caller),
                    ("undocking", undocking_caller),
                    ("tool", tool_caller))
        for service_name, caller in services:
            if caller is None:
                continue
            if not caller.wait_for_existence(wait_timeout):
                raise ClientNodeStartupError(f"timed out waiting for {service_name} service")
            logger.info(f"connected with {service_name} service")

        return cls(config, fleet_client, actuator, pose_provider,
                   docking_caller=docking_caller,
                   undocking_caller=undocking_caller,
                   tool_caller=tool_caller,
                   clock=clock)

    def print_config(self) -> None:
        """Log the effective configuration."""
        robot = self.config.robot
        client = self.config.client
        navigation = self.config.navigation
        self.logger.info("FLEET CLIENT CONFIGURATION")
        self.logger.info(f"  fleet name: {robot.fleet_name}")
        self.logger.info(f"  robot name: {robot.robot_name}")
        self.logger.info(f"  robot model: {robot.robot_model}")
        self.logger.info(f"  level name: {robot.level_name}")
        self.logger.info(f"  map frame: {robot.map_frame}")
        self.logger.info(f"  robot frame: {robot.robot_frame}")
        self.logger.info(f"  update frequency: {client.update_frequency}")
        self.logger.info(f"  publish frequency: {client.publish_frequency}")
        self.logger.info(f"  wait timeout: {client.wait_timeout}")
        self.logger.info(f"  max dist to first waypoint: {navigation.max_dist_to_first_waypoint}")
        self.logger.info(f"  max goal retries: {navigation.max_goal_retries}")
        self.logger.info(f"  docking service: {'yes' if self._docking_caller else 'no'}")
        self.logger.info(f"  undocking service: {'yes' if self._undocking_caller else 'no'}")
        self.logger.info(f"  tool service: {'yes' if self._tool_caller else 'no'}")

    # Periodic entry points

    def update_once(self) -> None:
        """One update cycle: refresh pose, ingest at most one command, drive goals."""
        self.refresh_pose()
        self.request_handler.process_next_request()
        self.driver.execute_cycle()

    def publish_once(self) -> None:
        """Build the current RobotState and hand it to the state sink."""
        robot_state = self.get_robot_state()
        if not self._fleet_client.send_robot_state(robot_state):
            self.logger.warning(
                f"failed to send robot state: msg sec {robot_state.location.sec}")

    def refresh_pose(self) -> bool:
        try:
            pose = self._pose_provider.lookup()
        except PoseLookupError as e:
            self.logger.warning(f"pose lookup failed: {e}")
            return False
        self.state.update_pose(pose)
        return True

    def battery_state_callback(self, battery_state: BatteryState) -> None:
        self.state.set_battery_state(battery_state)

    # State reporting

    def get_robot_mode(self) -> RobotMode:
        current_pose, previous_pose = self.state.get_pose_pair()
        navigation = self.config.navigation
        return resolve_robot_mode(
            self.state.get_flags(),
            self.state.get_battery_state(),
            current_pose,
            previous_pose,
            translation_tolerance=navigation.translation_tolerance,
            yaw_tolerance=navigation.yaw_tolerance,
        )

    def get_robot_state(self) -> RobotState:
        battery_state = self.state.get_battery_state()
        pose = self.state.get_pose()
        level_name = self.config.robot.level_name

        path: List[Location] = [
            Location(
                sec=goal.target_pose.sec,
                nanosec=goal.target_pose.nanosec,
                x=goal.target_pose.x,
                y=goal.target_pose.y,
                yaw=goal.target_pose.yaw,
                level_name=goal.area_label,
            )
            for goal in self.goal_queue.snapshot()
        ]

        return RobotState(
            name=self.config.robot.robot_name,
            model=self.config.robot.robot_model,
            task_id=self.state.get_task_id(),
            mode=self.get_robot_mode(),
            battery_percent=min(max(battery_state.remaining_percent, 0.0), 100.0),
            location=Location(
                sec=pose.sec,
                nanosec=pose.nanosec,
                x=pose.x,
                y=pose.y,
                yaw=pose.yaw,
                level_name=level_name,
            ),
            path=path,
        )

    # Worker lifecycle

    def start(self) -> None:
        """Start the update and publish threads."""
        if self.is_running():
            self.logger.warning("already running")
            return

        self._stop_event.clear()

        self._update_thread = threading.Thread(
            target=self._update_loop,
            name=f"ClientUpdate-{self.robot_id}",
            daemon=True
        )
        self._publish_thread = threading.Thread(
            target=self._publish_loop,
            name=f"ClientPublish-{self.robot_id}",
            daemon=True
        )
        self._update_thread.start()
        self._publish_thread.start()
        self.logger.info("started update and publish threads")

    def stop(self) -> None:
        """Signal both workers to exit and wait for them to finish."""
        if not self.is_running():
            return

        self._stop_event.set()
        for thread in (self._update_thread, self._publish_thread):
            if thread is not None and thread is not threading.current_thread():
                thread.join()
        self._update_thread = None
        self._publish_thread = None
        self.logger.info("stopped update and publish threads")

    def is_running(self) -> bool:
        return any(thread is not None and thread.is_alive()
                   for thread in (self._update_thread, self._publish_thread))

    def __enter__(self) -> "ClientNode":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

    def _update_loop(self) -> None:
        rate = Rate(self.config.client.update_frequency, self._stop_event)
        while rate.sleep():
            try:
                self.update_once()
            except Exception:
                self.logger.exception("update cycle failed")

    def _publish_loop(self) -> None:
        rate = Rate(self.config.client.publish_frequency, self._stop_event)
        while rate.sleep():
            try:
                self.publish_once()
            except Exception:
                self.logger.exception("publish cycle failed")
