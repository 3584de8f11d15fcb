"""
GoalExecutionDriver Implementation - send/monitor/retry/abort state machine.

Each call to execute_cycle() advances the head of the goal queue by at most
one transition:

    docked   -> undock, drop head
    UNSENT   -> send head, mark sent
    SENT     -> poll actuator:
                SUCCEEDED        pop once scheduled arrival has passed
                PENDING/ACTIVE   wait
                ABORTED          cancel and resend, or give up at the retry ceiling
                anything else    cancel and give up

Giving up clears the whole queue and leaves the robot idle, awaiting a new
command. Only a failed undocking call raises the sticky request error.
"""
import logging
import time
from typing import Callable

from interfaces.configuration_interface import NavigationConfig
from interfaces.docking_coordinator_interface import IDockingCoordinator
from interfaces.goal_execution_driver_interface import IGoalExecutionDriver
from interfaces.goal_queue_interface import IGoalQueue
from interfaces.navigation_actuator_interface import INavigationActuator, GoalState
from robot.impl.controller_state_impl import ControllerFlags


class GoalExecutionDriverImpl(IGoalExecutionDriver):
    """
    Advances the goal queue against the navigation actuator.

    **Threading Model**: UPDATE THREAD ONLY. The queue write lock is held for
    the whole transition except during the undocking call, which blocks for
    as long as the collaborator takes.
    """

    def __init__(self,
                 flags: ControllerFlags,
                 goal_queue: IGoalQueue,
                 actuator: INavigationActuator,
                 docking_coordinator: IDockingCoordinator,
                 navigation_config: NavigationConfig,
                 clock: Callable[[], float] = time.time,
                 robot_id: str = "robot"):
        self._flags = flags
        self._goal_queue = goal_queue
        self._actuator = actuator
        self._docking_coordinator = docking_coordinator
        self._max_goal_retries = navigation_config.max_goal_retries
        self._clock = clock
        self.logger = logging.getLogger(f"GoalExecutionDriver.{robot_id}")

    def execute_cycle(self) -> None:
        if (self._flags.emergency.is_set()
                or self._flags.request_error.is_set()
                or self._flags.paused.is_set()):
            return

        if self._goal_queue.is_empty():
            return

        if self._flags.is_docked():
            self._leave_dock()
            return

        with self._goal_queue.transaction() as queue:
            head = queue.peek()
            if head is None:
                return

            if not head.sent:
                self.logger.info("sending next goal.")
                self._actuator.send(head.target_pose)
                head.sent = True
                return

            goal_state = self._actuator.poll_state()

            if goal_state == GoalState.SUCCEEDED:
                now = self._clock()
                if now >= head.scheduled_arrival:
                    queue.pop_front()
                else:
                    self.logger.info(
                        f"we reached our goal early! Waiting "
                        f"{head.scheduled_arrival - now:.1f} more seconds")
                return

            if goal_state in (GoalState.PENDING, GoalState.ACTIVE):
                return

            if goal_state == GoalState.ABORTED:
                head.abort_count += 1
                self._actuator.cancel()
                if head.abort_count < self._max_goal_retries:
                    self.logger.info(
                        f"navigation stack has aborted the current goal {head.abort_count} "
                        f"times, client will try again...")
                    queue.mark_head_unsent()
                else:
                    self.logger.info(
                        f"navigation stack has aborted the current goal {head.abort_count} "
                        f"times, abandoning the current path and awaiting further requests.")
                    queue.clear()
                return

            self.logger.info(
                f"undesirable goal state: {goal_state.name}, abandoning the current "
                f"path and awaiting further requests.")
            self._actuator.cancel()
            queue.clear()

    def _leave_dock(self) -> None:
        """Undock, then drop the head goal since undocking moved the robot there."""
        if not self._docking_coordinator.undock():
            return
        self._goal_queue.pop_front()
