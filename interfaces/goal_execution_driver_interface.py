"""
Interface for GoalExecutionDriver - advances the goal queue against the navigation actuator.
"""
from abc import ABC, abstractmethod


class IGoalExecutionDriver(ABC):
    """
    Send / monitor / retry / abort state machine for the queue head.

    **Threading Model**: execute_cycle() is called from the UPDATE THREAD only,
    once per update cycle after command ingestion.
    """

    @abstractmethod
    def execute_cycle(self) -> None:
        """Perform at most one transition for the head of the goal queue."""
        pass
