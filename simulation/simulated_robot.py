"""
Simulated robot - kinematic stand-in for the navigation stack and telemetry.

SimulatedRobot moves a point robot towards the goal it was sent at a fixed
speed, drains or charges a battery, and exposes itself to the client node as
the navigation actuator, pose provider and battery provider.
"""
import logging
import math
import threading
import time
from typing import Callable, List, Optional

import numpy as np

from interfaces.navigation_actuator_interface import (
    INavigationActuator, NavigationGoal, GoalState, NavigationActuatorError
)
from interfaces.telemetry_interface import (
    IPoseProvider, PoseStamped, BatteryState, PoseLookupError
)
from utils.geometry import normalize_angle
from utils.rate import Rate


class SimulatedRobot(INavigationActuator, IPoseProvider):
    """
    Point robot with straight-line motion.

    step() advances the simulation by dt seconds. start() runs step() on a
    background thread at a fixed frequency, the way a physics loop would.

    Failure injection:
    - abort_next_goals(n): the next n goals end ABORTED instead of SUCCEEDED
    - fail_pose_lookups: lookup() raises PoseLookupError while set
    """

    def __init__(self,
                 robot_id: str = "robot",
                 x: float = 0.0,
                 y: float = 0.0,
                 yaw: float = 0.0,
                 speed: float = 1.0,
                 goal_tolerance: float = 0.05,
                 battery_percent: float = 100.0,
                 drain_per_meter: float = 0.5,
                 charge_per_second: float = 1.0,
                 clock: Callable[[], float] = time.time):
        self.robot_id = robot_id
        self.speed = speed
        self.goal_tolerance = goal_tolerance
        self.drain_per_meter = drain_per_meter
        self.charge_per_second = charge_per_second
        self._clock = clock
        self.logger = logging.getLogger(f"SimulatedRobot.{robot_id}")

        self._lock = threading.RLock()
        self._position = np.array([x, y], dtype=float)
        self._yaw = yaw
        self._goal: Optional[NavigationGoal] = None
        self._goal_state = GoalState.LOST
        self._aborts_pending = 0
        self._battery_percent = battery_percent
        self._charging = False
        self._battery_callbacks: List[Callable[[BatteryState], None]] = []

        self.sent_goals: List[NavigationGoal] = []
        self.cancel_count = 0
        self.cancel_all_count = 0
        self.fail_pose_lookups = False
        self.server_available = True

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    # INavigationActuator

    def wait_for_server(self, timeout: float) -> bool:
        return self.server_available

    def send(self, goal: NavigationGoal) -> None:
        if not self.server_available:
            raise NavigationActuatorError(f"navigation server for {self.robot_id} is down")
        with self._lock:
            self._goal = goal
            self._goal_state = GoalState.PENDING
            self.sent_goals.append(goal)

    def cancel(self) -> None:
        with self._lock:
            self.cancel_count += 1
            self._preempt()

    def cancel_all(self) -> None:
        with self._lock:
            self.cancel_all_count += 1
            self._preempt()

    def poll_state(self) -> GoalState:
        with self._lock:
            return self._goal_state

    # IPoseProvider

    def lookup(self) -> PoseStamped:
        if self.fail_pose_lookups:
            raise PoseLookupError(f"no transform available for {self.robot_id}")
        now = self._clock()
        sec = int(now)
        with self._lock:
            return PoseStamped(
                sec=sec,
                nanosec=int((now - sec) * 1e9),
                x=float(self._position[0]),
                y=float(self._position[1]),
                yaw=self._yaw,
            )

    # Battery provider

    def subscribe_battery(self, callback: Callable[[BatteryState], None]) -> None:
        with self._lock:
            self._battery_callbacks.append(callback)

    def set_charging(self, charging: bool) -> None:
        with self._lock:
            self._charging = charging
        self._publish_battery()

    # Failure injection

    def abort_next_goals(self, count: int) -> None:
        with self._lock:
            self._aborts_pending = count

    # Simulation

    def step(self, dt: float) -> None:
        """Advance the simulation by dt seconds."""
        with self._lock:
            if self._charging:
                self._battery_percent = min(
                    100.0, self._battery_percent + self.charge_per_second * dt)

            if self._goal is not None and self._goal_state in (GoalState.PENDING, GoalState.ACTIVE):
                self._advance_towards_goal(dt)

        self._publish_battery()

    def start(self, frequency_hz: float = 50.0) -> None:
        if self._thread is not None:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._simulation_loop,
            args=(frequency_hz,),
            name=f"SimulatedRobot-{self.robot_id}",
            daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread.join()
        self._thread = None

    def _simulation_loop(self, frequency_hz: float) -> None:
        rate = Rate(frequency_hz, self._stop_event)
        while rate.sleep():
            self.step(rate.period)

    def _advance_towards_goal(self, dt: float) -> None:
        goal = self._goal
        if self._goal_state == GoalState.PENDING:
            if self._aborts_pending > 0:
                self._aborts_pending -= 1
                self._goal_state = GoalState.ABORTED
                self.logger.debug("injected abort")
                return
            self._goal_state = GoalState.ACTIVE

        target = np.array([goal.x, goal.y], dtype=float)
        offset = target - self._position
        distance = float(np.linalg.norm(offset))
        travel = min(distance, self.speed * dt)

        if distance > self.goal_tolerance:
            self._position = self._position + offset / distance * travel
            self._yaw = math.atan2(offset[1], offset[0])
            self._battery_percent = max(0.0, self._battery_percent - travel * self.drain_per_meter)
            return

        self._position = target
        self._yaw = normalize_angle(goal.yaw)
        self._goal_state = GoalState.SUCCEEDED

    def _preempt(self) -> None:
        if self._goal_state in (GoalState.PENDING, GoalState.ACTIVE):
            self._goal_state = GoalState.PREEMPTED

    def _publish_battery(self) -> None:
        with self._lock:
            battery_state = BatteryState(
                charging=self._charging, remaining_percent=self._battery_percent)
            callbacks = list(self._battery_callbacks)
        for callback in callbacks:
            callback(battery_state)
