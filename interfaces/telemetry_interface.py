"""
Interfaces and data types for robot telemetry: pose samples and battery readings.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class PoseStamped:
    """Robot pose in the map frame at a point in time."""
    sec: int = 0
    nanosec: int = 0
    x: float = 0.0
    y: float = 0.0
    yaw: float = 0.0

    @property
    def timestamp(self) -> float:
        """Stamp as floating point seconds."""
        return self.sec + self.nanosec * 1e-9


@dataclass(frozen=True)
class BatteryState:
    """Latest battery reading pushed by the battery provider."""
    charging: bool = False
    remaining_percent: float = 0.0  # 0.0 to 100.0


class PoseLookupError(Exception):
    """Raised when no pose sample is currently available."""
    pass


class IPoseProvider(ABC):
    """
    Best-effort source of robot pose samples.

    **Threading Model**: lookup() is called from the UPDATE THREAD once per cycle.
    """

    @abstractmethod
    def lookup(self) -> PoseStamped:
        """
        Look up the current robot pose.

        Returns:
            PoseStamped: Latest pose sample

        Raises:
            PoseLookupError: If the pose is currently unavailable
        """
        pass
