"""
Unit tests for RequestHandler implementation.

Tests the mode / path / destination command handlers, the polling order
and the proximity guard on path requests.
"""
import unittest
from unittest.mock import Mock

from interfaces.configuration_interface import RobotConfig, NavigationConfig
from interfaces.docking_coordinator_interface import IDockingCoordinator
from interfaces.fleet_client_interface import IFleetClient
from interfaces.fleet_messages import (
    RobotMode, Location, ModeParameter, ModeRequest, PathRequest, DestinationRequest
)
from interfaces.goal_queue_interface import Goal
from interfaces.navigation_actuator_interface import INavigationActuator, NavigationGoal
from interfaces.telemetry_interface import PoseStamped
from robot.impl.controller_state_impl import ControllerStateImpl
from robot.impl.goal_queue_impl import GoalQueueImpl
from robot.impl.request_handler_impl import RequestHandlerImpl
from robot.impl.request_validator_impl import RequestValidatorImpl


FLEET = "fleet_a"
ROBOT = "robot_1"


def location(x: float, y: float = 0.0, sec: int = 100, level: str = "L1") -> Location:
    return Location(sec=sec, nanosec=500000000, x=x, y=y, yaw=0.25, level_name=level)


class RequestHandlerTestCase(unittest.TestCase):
    """Shared fixture: real state, queue and validator with mocked collaborators."""

    def setUp(self):
        self.state = ControllerStateImpl()
        self.flags = self.state.flags
        self.goal_queue = GoalQueueImpl()
        self.fleet_client = Mock(spec=IFleetClient)
        self.fleet_client.read_mode_request.return_value = None
        self.fleet_client.read_path_request.return_value = None
        self.fleet_client.read_destination_request.return_value = None
        self.actuator = Mock(spec=INavigationActuator)
        self.docking_coordinator = Mock(spec=IDockingCoordinator)
        self.docking_coordinator.dock.return_value = True
        self.docking_coordinator.use_tool.return_value = True

        self.robot_config = RobotConfig(fleet_name=FLEET, robot_name=ROBOT,
                                        robot_model="model", level_name="L1")
        self.navigation_config = NavigationConfig(
            max_dist_to_first_waypoint=10.0, max_goal_retries=5,
            translation_tolerance=0.01, yaw_tolerance=0.01, rotational_goal_tolerance=3.14)

        self.handler = RequestHandlerImpl(
            self.fleet_client,
            RequestValidatorImpl(FLEET, ROBOT, self.state),
            self.state,
            self.goal_queue,
            self.actuator,
            self.docking_coordinator,
            self.robot_config,
            self.navigation_config,
        )

    def mode_request(self, mode, task_id="task-1", parameters=None):
        return ModeRequest(FLEET, ROBOT, task_id, mode, parameters or [])

    def seed_queue(self, count=2):
        goals = [Goal(area_label="L1",
                      target_pose=NavigationGoal("map", 0, 0, float(i), 0.0, 0.0))
                 for i in range(count)]
        self.goal_queue.replace(goals)
        return goals


class TestModeRequests(RequestHandlerTestCase):
    """Test cases for mode commands."""

    def test_pause(self):
        self.seed_queue()
        self.goal_queue.peek().sent = True
        self.flags.emergency.set()

        self.assertTrue(self.handler.handle_mode_request(self.mode_request(RobotMode.PAUSED)))

        self.actuator.cancel_all.assert_called_once()
        self.assertFalse(self.goal_queue.peek().sent)
        self.assertTrue(self.flags.paused.is_set())
        self.assertFalse(self.flags.emergency.is_set())
        self.assertEqual(self.state.get_task_id(), "task-1")

    def test_resume(self):
        self.flags.paused.set()
        self.flags.emergency.set()

        self.handler.handle_mode_request(self.mode_request(RobotMode.MOVING))

        self.assertFalse(self.flags.paused.is_set())
        self.assertFalse(self.flags.emergency.is_set())

    def test_emergency(self):
        self.flags.paused.set()

        self.handler.handle_mode_request(self.mode_request(RobotMode.EMERGENCY))

        self.assertTrue(self.flags.emergency.is_set())
        self.assertFalse(self.flags.paused.is_set())

    def test_docking_passes_dock_name(self):
        request = self.mode_request(RobotMode.DOCKING, parameters=[
            ModeParameter("speed", "slow"), ModeParameter("docking", "dock_A")])

        self.assertTrue(self.handler.handle_mode_request(request))

        self.docking_coordinator.dock.assert_called_once_with("dock_A")
        self.assertEqual(self.state.get_task_id(), "task-1")

    def test_failed_docking_keeps_task_id(self):
        self.state.set_task_id("previous")
        self.docking_coordinator.dock.return_value = False

        self.assertFalse(self.handler.handle_mode_request(self.mode_request(RobotMode.DOCKING)))

        self.docking_coordinator.dock.assert_called_once_with("")
        self.assertEqual(self.state.get_task_id(), "previous")

    def test_use_tool_passes_tool_cmd(self):
        request = self.mode_request(RobotMode.USE_TOOL, parameters=[ModeParameter("tool_cmd", "lift")])

        self.assertTrue(self.handler.handle_mode_request(request))

        self.docking_coordinator.use_tool.assert_called_once_with("lift")

    def test_failed_tool_keeps_request_error(self):
        self.docking_coordinator.use_tool.return_value = False
        self.flags.request_error.set()

        self.assertFalse(self.handler.handle_mode_request(self.mode_request(RobotMode.USE_TOOL)))
        self.assertTrue(self.flags.request_error.is_set())

    def test_accepted_mode_clears_request_error(self):
        self.flags.request_error.set()

        self.handler.handle_mode_request(self.mode_request(RobotMode.IDLE))

        self.assertFalse(self.flags.request_error.is_set())
        self.assertEqual(self.state.get_task_id(), "task-1")


class TestPathRequests(RequestHandlerTestCase):
    """Test cases for path commands."""

    def test_empty_path_is_rejected_without_mutation(self):
        goals = self.seed_queue()

        self.assertFalse(self.handler.handle_path_request(PathRequest(FLEET, ROBOT, "task-1", [])))

        self.assertEqual(self.goal_queue.size(), len(goals))
        self.assertEqual(self.state.get_task_id(), "")
        self.actuator.cancel_all.assert_not_called()

    def test_path_replaces_queue(self):
        self.seed_queue(count=3)
        self.flags.paused.set()
        self.flags.request_error.set()

        request = PathRequest(FLEET, ROBOT, "task-2", [location(1.0, sec=100), location(2.0, sec=110)])
        self.assertTrue(self.handler.handle_path_request(request))

        goals = self.goal_queue.snapshot()
        self.assertEqual([goal.target_pose.x for goal in goals], [1.0, 2.0])
        self.assertEqual([goal.scheduled_arrival for goal in goals], [100.5, 110.5])
        self.assertTrue(all(not goal.sent and goal.abort_count == 0 for goal in goals))
        self.assertEqual(self.state.get_task_id(), "task-2")
        self.assertFalse(self.flags.paused.is_set())
        self.assertFalse(self.flags.request_error.is_set())

    def test_waypoint_conversion(self):
        request = PathRequest(FLEET, ROBOT, "task-2", [location(1.0, 2.0, sec=100, level="L3")])
        self.handler.handle_path_request(request)

        goal = self.goal_queue.peek()
        self.assertEqual(goal.area_label, "L3")
        self.assertEqual(goal.target_pose, NavigationGoal(
            frame_id="map", sec=100, nanosec=500000000, x=1.0, y=2.0, yaw=0.25,
            parameters="{rotational_goal_tolerance: 3.14}"))

    def test_far_first_waypoint_is_rejected(self):
        self.seed_queue()
        self.state.update_pose(PoseStamped(x=0.0, y=0.0))
        self.flags.emergency.set()
        self.flags.paused.set()

        request = PathRequest(FLEET, ROBOT, "task-3", [location(20.0), location(21.0)])
        self.assertFalse(self.handler.handle_path_request(request))

        self.actuator.cancel_all.assert_called_once()
        self.assertTrue(self.goal_queue.is_empty())
        self.assertTrue(self.flags.request_error.is_set())
        self.assertFalse(self.flags.emergency.is_set())
        self.assertFalse(self.flags.paused.is_set())
        self.assertEqual(self.state.get_task_id(), "")

    def test_threshold_is_inclusive(self):
        request = PathRequest(FLEET, ROBOT, "task-3", [location(6.0, 8.0)])
        self.assertTrue(self.handler.handle_path_request(request))

    def test_only_first_waypoint_is_guarded(self):
        request = PathRequest(FLEET, ROBOT, "task-3", [location(1.0), location(50.0)])
        self.assertTrue(self.handler.handle_path_request(request))
        self.assertEqual(self.goal_queue.size(), 2)


class TestDestinationRequests(RequestHandlerTestCase):
    """Test cases for destination commands."""

    def test_destination_replaces_queue_without_proximity_guard(self):
        self.seed_queue(count=3)
        self.flags.paused.set()

        request = DestinationRequest(FLEET, ROBOT, "task-4", location(50.0, sec=200))
        self.assertTrue(self.handler.handle_destination_request(request))

        goals = self.goal_queue.snapshot()
        self.assertEqual(len(goals), 1)
        self.assertEqual(goals[0].target_pose.x, 50.0)
        self.assertEqual(goals[0].scheduled_arrival, 200.5)
        self.assertEqual(self.state.get_task_id(), "task-4")
        self.assertFalse(self.flags.paused.is_set())
        self.actuator.cancel_all.assert_not_called()


class TestProcessNextRequest(RequestHandlerTestCase):
    """Test cases for polling order and validation."""

    def test_nothing_pending(self):
        self.assertFalse(self.handler.process_next_request())

    def test_mode_request_wins(self):
        self.fleet_client.read_mode_request.return_value = self.mode_request(RobotMode.EMERGENCY)
        self.fleet_client.read_path_request.return_value = PathRequest(FLEET, ROBOT, "task-2", [location(1.0)])

        self.assertTrue(self.handler.process_next_request())

        self.fleet_client.read_path_request.assert_not_called()
        self.fleet_client.read_destination_request.assert_not_called()
        self.assertTrue(self.flags.emergency.is_set())

    def test_invalid_mode_request_falls_through_to_path(self):
        self.fleet_client.read_mode_request.return_value = ModeRequest(
            "other_fleet", ROBOT, "task-1", RobotMode.EMERGENCY)
        self.fleet_client.read_path_request.return_value = PathRequest(FLEET, ROBOT, "task-2", [location(1.0)])

        self.assertTrue(self.handler.process_next_request())

        self.assertFalse(self.flags.emergency.is_set())
        self.assertEqual(self.goal_queue.size(), 1)
        self.fleet_client.read_destination_request.assert_not_called()

    def test_failed_handler_still_stops_the_chain(self):
        self.docking_coordinator.dock.return_value = False
        self.fleet_client.read_mode_request.return_value = self.mode_request(RobotMode.DOCKING)

        self.assertTrue(self.handler.process_next_request())

        self.fleet_client.read_path_request.assert_not_called()

    def test_replayed_task_id_is_ignored(self):
        request = DestinationRequest(FLEET, ROBOT, "task-1", location(1.0))
        self.fleet_client.read_destination_request.return_value = request
        self.assertTrue(self.handler.process_next_request())
        self.goal_queue.clear()

        self.assertFalse(self.handler.process_next_request())

        self.assertTrue(self.goal_queue.is_empty())

    def test_destination_is_last(self):
        self.fleet_client.read_destination_request.return_value = DestinationRequest(
            FLEET, ROBOT, "task-5", location(3.0))

        self.assertTrue(self.handler.process_next_request())

        self.fleet_client.read_mode_request.assert_called_once()
        self.fleet_client.read_path_request.assert_called_once()
        self.assertEqual(self.goal_queue.peek().target_pose.x, 3.0)


if __name__ == '__main__':
    unittest.main()
