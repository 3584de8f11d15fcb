"""
Interface for RequestValidator - ownership checks for inbound fleet commands.
"""
from abc import ABC, abstractmethod


class IRequestValidator(ABC):
    """Decides whether an inbound command is addressed to us and not yet processed."""

    @abstractmethod
    def is_valid(self, fleet_name: str, robot_name: str, task_id: str) -> bool:
        """
        Check a command's addressing and task id.

        Args:
            fleet_name: Fleet the command is addressed to
            robot_name: Robot the command is addressed to
            task_id: Task id carried by the command

        Returns:
            bool: False for foreign commands or replays of the current task id
        """
        pass
