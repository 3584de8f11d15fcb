"""
Interface for RequestHandler - applies mode, path and destination commands.
"""
from abc import ABC, abstractmethod

from interfaces.fleet_messages import ModeRequest, PathRequest, DestinationRequest


class IRequestHandler(ABC):
    """
    Reads and applies inbound fleet commands.

    **Threading Model**: UPDATE THREAD ONLY.
    """

    @abstractmethod
    def process_next_request(self) -> bool:
        """
        Poll the request channel and apply at most one valid command.

        Commands are tried in order mode, path, destination; polling stops
        at the first one that is present and valid.

        Returns:
            bool: True if a valid command was found this cycle
        """
        pass

    @abstractmethod
    def handle_mode_request(self, request: ModeRequest) -> bool:
        """
        Apply a validated mode request.

        Returns:
            bool: True if accepted, False if a collaborator call failed
        """
        pass

    @abstractmethod
    def handle_path_request(self, request: PathRequest) -> bool:
        """
        Apply a validated path request.

        Returns:
            bool: True if the path replaced the goal queue
        """
        pass

    @abstractmethod
    def handle_destination_request(self, request: DestinationRequest) -> bool:
        """
        Apply a validated destination request.

        Returns:
            bool: True if the destination replaced the goal queue
        """
        pass
