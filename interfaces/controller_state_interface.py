"""
Interface for ControllerState - shared mutable state of the task execution controller.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple

from interfaces.telemetry_interface import BatteryState, PoseStamped


@dataclass(frozen=True)
class FlagSnapshot:
    """
    Point-in-time copy of the controller flags.

    Flags are independent hints, several may be set at once; the mode
    resolver decides which one is reported.
    """
    request_error: bool = False
    emergency: bool = False
    paused: bool = False
    docking: bool = False
    using_tool: bool = False


class IControllerState(ABC):
    """
    Shared state of the controller, partitioned into independently locked groups.

    **Thread Safety**: All methods are thread-safe.
    **Lock groups**:
    - battery telemetry: reader/writer lock
    - pose telemetry: reader/writer lock
    - task id: reader/writer lock
    - flags: one atomic cell per flag, docked frame guarded with docked
    """

    # Battery telemetry
    @abstractmethod
    def get_battery_state(self) -> BatteryState:
        """Get the latest battery reading."""
        pass

    @abstractmethod
    def set_battery_state(self, battery_state: BatteryState) -> None:
        """Overwrite the battery reading (battery provider callback)."""
        pass

    # Pose telemetry
    @abstractmethod
    def get_pose(self) -> PoseStamped:
        """Get the latest pose sample."""
        pass

    @abstractmethod
    def get_pose_pair(self) -> Tuple[PoseStamped, PoseStamped]:
        """
        Get the latest and the previous pose sample, read atomically.

        Returns:
            Tuple[PoseStamped, PoseStamped]: (current, previous)
        """
        pass

    @abstractmethod
    def update_pose(self, pose: PoseStamped) -> None:
        """Store a new pose sample, retaining the old one as previous."""
        pass

    # Task identity
    @abstractmethod
    def get_task_id(self) -> str:
        """Get the id of the currently owned task."""
        pass

    @abstractmethod
    def set_task_id(self, task_id: str) -> None:
        """Overwrite the id of the currently owned task."""
        pass

    # Flags
    @abstractmethod
    def get_flags(self) -> FlagSnapshot:
        """Get a snapshot of all controller flags."""
        pass
