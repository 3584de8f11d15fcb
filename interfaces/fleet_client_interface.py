"""
Interface for the fleet client - the request channel and state sink of the robot.
"""
from abc import ABC, abstractmethod
from typing import Optional

from interfaces.fleet_messages import (
    ModeRequest, PathRequest, DestinationRequest, RobotState
)


class IFleetClient(ABC):
    """
    Transport between this robot and the fleet coordinator.

    **Threading Model**:
    - read_*_request(): UPDATE THREAD ONLY, polled once per update cycle
    - send_robot_state(): PUBLISH THREAD (and the update thread for
      out-of-band reports), implementations must tolerate both
    """

    @abstractmethod
    def read_mode_request(self) -> Optional[ModeRequest]:
        """
        Take the latest decoded mode request, if any.

        Returns:
            Optional[ModeRequest]: Pending request, or None when nothing arrived
        """
        pass

    @abstractmethod
    def read_path_request(self) -> Optional[PathRequest]:
        """
        Take the latest decoded path request, if any.

        Returns:
            Optional[PathRequest]: Pending request, or None when nothing arrived
        """
        pass

    @abstractmethod
    def read_destination_request(self) -> Optional[DestinationRequest]:
        """
        Take the latest decoded destination request, if any.

        Returns:
            Optional[DestinationRequest]: Pending request, or None when nothing arrived
        """
        pass

    @abstractmethod
    def send_robot_state(self, state: RobotState) -> bool:
        """
        Send a robot state report to the fleet coordinator.

        Args:
            state: State snapshot to report

        Returns:
            bool: True if the report was handed to the transport
        """
        pass
