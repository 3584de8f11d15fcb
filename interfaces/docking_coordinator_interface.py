"""
Interface for DockingCoordinator - synchronous docking, undocking and tool calls.
"""
from abc import ABC, abstractmethod


class IDockingCoordinator(ABC):
    """
    Sequences the blocking call-and-response collaborators around navigation.

    All methods block the calling (update) thread for the duration of the
    collaborator call. A missing collaborator counts as an immediate success.
    Failures set the sticky request_error flag.
    """

    @abstractmethod
    def dock(self, dock_name: str) -> bool:
        """
        Run the docking sequence at a named anchor.

        Args:
            dock_name: Payload for the docking collaborator

        Returns:
            bool: True if docked, False if the call failed
        """
        pass

    @abstractmethod
    def undock(self) -> bool:
        """
        Leave the anchor recorded by the last successful dock().

        Returns:
            bool: True if undocked (docked state cleared), False if the call failed
        """
        pass

    @abstractmethod
    def use_tool(self, tool_cmd: str) -> bool:
        """
        Run a tool command.

        Args:
            tool_cmd: Payload for the tool collaborator

        Returns:
            bool: True if the tool command succeeded
        """
        pass
