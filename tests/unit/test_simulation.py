"""
Tests for the in-process collaborators used by the demo and integration tests.
"""
import pytest

from interfaces.fleet_messages import (
    RobotMode, Location, ModeRequest, DestinationRequest, RobotState
)
from interfaces.navigation_actuator_interface import NavigationGoal, GoalState, NavigationActuatorError
from interfaces.service_call_interface import ServiceResponse
from interfaces.telemetry_interface import PoseLookupError
from simulation.callable_service_caller import CallableServiceCaller
from simulation.in_memory_fleet_client import InMemoryFleetClient
from simulation.simulated_robot import SimulatedRobot


def make_state(task_id: str) -> RobotState:
    return RobotState(name="robot_1", model="sim", task_id=task_id, mode=RobotMode.IDLE,
                      battery_percent=50.0, location=Location(0, 0, 0.0, 0.0, 0.0))


class TestSimulatedRobot:
    """Test cases for the kinematic robot."""

    @pytest.fixture
    def robot(self):
        return SimulatedRobot(robot_id="robot_1", speed=1.0, clock=lambda: 12.5)

    def test_drives_to_goal(self, robot):
        robot.send(NavigationGoal("map", 0, 0, 1.0, 0.0, 0.5))
        assert robot.poll_state() == GoalState.PENDING

        robot.step(0.5)
        assert robot.poll_state() == GoalState.ACTIVE
        assert robot.lookup().x == pytest.approx(0.5)

        for _ in range(3):
            robot.step(0.5)

        pose = robot.lookup()
        assert robot.poll_state() == GoalState.SUCCEEDED
        assert pose.x == pytest.approx(1.0)
        assert pose.yaw == pytest.approx(0.5)
        assert pose.sec == 12
        assert pose.nanosec == 500000000

    def test_cancel_preempts_active_goal(self, robot):
        robot.send(NavigationGoal("map", 0, 0, 5.0, 0.0, 0.0))
        robot.step(0.5)

        robot.cancel_all()
        robot.step(0.5)

        assert robot.poll_state() == GoalState.PREEMPTED
        assert robot.lookup().x == pytest.approx(0.5)
        assert robot.cancel_all_count == 1

    def test_injected_aborts(self, robot):
        robot.abort_next_goals(1)
        robot.send(NavigationGoal("map", 0, 0, 1.0, 0.0, 0.0))
        robot.step(0.1)
        assert robot.poll_state() == GoalState.ABORTED

        robot.send(NavigationGoal("map", 0, 0, 1.0, 0.0, 0.0))
        robot.step(0.1)
        assert robot.poll_state() == GoalState.ACTIVE

    def test_unavailable_server(self, robot):
        robot.server_available = False
        assert robot.wait_for_server(0.1) is False
        with pytest.raises(NavigationActuatorError):
            robot.send(NavigationGoal("map", 0, 0, 1.0, 0.0, 0.0))

    def test_pose_lookup_failure(self, robot):
        robot.fail_pose_lookups = True
        with pytest.raises(PoseLookupError):
            robot.lookup()

    def test_battery_drains_and_charges(self, robot):
        readings = []
        robot.subscribe_battery(readings.append)

        robot.send(NavigationGoal("map", 0, 0, 2.0, 0.0, 0.0))
        robot.step(0.1)
        robot.step(1.0)
        assert readings[-1].remaining_percent < 100.0
        assert readings[-1].charging is False

        robot.set_charging(True)
        assert readings[-1].charging is True


class TestInMemoryFleetClient:
    """Test cases for the in-memory request channel and state sink."""

    def test_requests_are_taken_once(self):
        client = InMemoryFleetClient()
        request = ModeRequest("fleet_a", "robot_1", "task-1", RobotMode.PAUSED)
        client.post_mode_request(request)

        assert client.read_mode_request() is request
        assert client.read_mode_request() is None
        assert client.read_path_request() is None

    def test_latest_request_wins(self):
        client = InMemoryFleetClient()
        destination = Location(0, 0, 1.0, 0.0, 0.0)
        client.post_destination_request(DestinationRequest("fleet_a", "robot_1", "task-1", destination))
        client.post_destination_request(DestinationRequest("fleet_a", "robot_1", "task-2", destination))

        assert client.read_destination_request().task_id == "task-2"

    def test_states_are_recorded_and_bounded(self):
        client = InMemoryFleetClient(max_states=2)
        for i in range(3):
            assert client.send_robot_state(make_state(f"task-{i}"))

        assert [state.task_id for state in client.get_states()] == ["task-1", "task-2"]
        assert client.get_latest_state().task_id == "task-2"

    def test_rejected_states(self):
        client = InMemoryFleetClient()
        client.accept_states = False
        assert client.send_robot_state(make_state("task-1")) is False
        assert client.get_latest_state() is None


class TestCallableServiceCaller:
    """Test cases for the callable-backed service caller."""

    def test_defaults_to_success(self):
        caller = CallableServiceCaller("docking")
        assert caller.invoke("dock_A").success
        assert caller.payloads == ["dock_A"]

    def test_bool_handler(self):
        caller = CallableServiceCaller("tool", handler=lambda payload: payload == "lift")
        assert caller.invoke("lift").success
        assert not caller.invoke("drop").success

    def test_response_handler(self):
        caller = CallableServiceCaller(
            "undocking", handler=lambda payload: ServiceResponse(False, "stuck"))
        response = caller.invoke("dock_A")
        assert response == ServiceResponse(success=False, message="stuck")

    def test_availability(self):
        assert CallableServiceCaller("docking").wait_for_existence(0.1)
        assert not CallableServiceCaller("docking", available=False).wait_for_existence(0.1)
