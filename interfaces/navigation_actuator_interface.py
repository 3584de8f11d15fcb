"""
Interface for the navigation actuator - accepts goal poses and reports progress.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class GoalState(Enum):
    """State of the goal most recently sent to the navigation actuator."""
    PENDING = "pending"
    ACTIVE = "active"
    PREEMPTED = "preempted"
    SUCCEEDED = "succeeded"
    ABORTED = "aborted"
    REJECTED = "rejected"
    RECALLED = "recalled"
    LOST = "lost"


@dataclass(frozen=True)
class NavigationGoal:
    """Goal pose handed to the navigation actuator."""
    frame_id: str
    sec: int
    nanosec: int
    x: float
    y: float
    yaw: float
    parameters: str = ""

    @property
    def timestamp(self) -> float:
        """Stamp as floating point seconds."""
        return self.sec + self.nanosec * 1e-9


class NavigationActuatorError(Exception):
    """Raised when the navigation actuator cannot be reached."""
    pass


class INavigationActuator(ABC):
    """
    Navigation stack as seen by the goal execution driver.

    Only one goal is tracked at a time: poll_state() reports on the goal
    passed to the most recent send().
    """

    @abstractmethod
    def wait_for_server(self, timeout: float) -> bool:
        """
        Block until the actuator is reachable.

        Args:
            timeout: Maximum time to wait in seconds

        Returns:
            bool: True if the actuator became available in time
        """
        pass

    @abstractmethod
    def send(self, goal: NavigationGoal) -> None:
        """Send a new goal, replacing any goal in flight."""
        pass

    @abstractmethod
    def cancel(self) -> None:
        """Cancel the goal in flight."""
        pass

    @abstractmethod
    def cancel_all(self) -> None:
        """Cancel every goal known to the actuator."""
        pass

    @abstractmethod
    def poll_state(self) -> GoalState:
        """
        Get the state of the current goal.

        Returns:
            GoalState: Progress or terminal state of the last sent goal
        """
        pass
