"""
Fleet message types exchanged between the robot client and the fleet coordinator.

These dataclasses are transport-agnostic: the fleet client implementation is
responsible for decoding inbound requests into them and encoding RobotState
for the state sink.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List


class RobotMode(Enum):
    """Single reported operating mode of the robot."""
    IDLE = "idle"
    CHARGING = "charging"
    MOVING = "moving"
    PAUSED = "paused"
    WAITING = "waiting"
    EMERGENCY = "emergency"
    GOING_HOME = "going_home"
    DOCKING = "docking"
    REQUEST_ERROR = "request_error"
    USE_TOOL = "use_tool"


@dataclass
class Location:
    """
    A timestamped planar pose on a named level.

    The stamp (sec, nanosec) doubles as the scheduled arrival time when the
    location is a waypoint of a path request.
    """
    sec: int
    nanosec: int
    x: float
    y: float
    yaw: float
    level_name: str = ""

    @property
    def timestamp(self) -> float:
        """Stamp as floating point seconds."""
        return self.sec + self.nanosec * 1e-9


@dataclass
class ModeParameter:
    """Named string parameter attached to a mode request."""
    name: str
    value: str


@dataclass
class ModeRequest:
    """Request to switch the robot into a specific mode."""
    fleet_name: str
    robot_name: str
    task_id: str
    mode: RobotMode
    parameters: List[ModeParameter] = field(default_factory=list)

    def get_parameter(self, name: str, default: str = "") -> str:
        """Return the value of the first parameter called `name`."""
        for parameter in self.parameters:
            if parameter.name == name:
                return parameter.value
        return default


@dataclass
class PathRequest:
    """Request to follow an ordered list of waypoints."""
    fleet_name: str
    robot_name: str
    task_id: str
    path: List[Location] = field(default_factory=list)


@dataclass
class DestinationRequest:
    """Request to navigate to a single destination."""
    fleet_name: str
    robot_name: str
    task_id: str
    destination: Location


@dataclass
class RobotState:
    """Outbound robot state report."""
    name: str
    model: str
    task_id: str
    mode: RobotMode
    battery_percent: float
    location: Location
    path: List[Location] = field(default_factory=list)
