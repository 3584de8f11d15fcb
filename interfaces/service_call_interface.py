"""
Interface for synchronous call-and-response collaborators (docking, undocking, tool).
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ServiceResponse:
    """Outcome of a call-and-response invocation."""
    success: bool
    message: str = ""


class ServiceCallError(Exception):
    """Raised when a service invocation could not be completed."""
    pass


class IServiceCaller(ABC):
    """
    Synchronous string-payload service.

    invoke() blocks the calling thread until the collaborator answers; no
    timeout is enforced beyond what the collaborator itself provides.
    """

    @abstractmethod
    def wait_for_existence(self, timeout: float) -> bool:
        """
        Block until the service is reachable.

        Args:
            timeout: Maximum time to wait in seconds

        Returns:
            bool: True if the service became available in time
        """
        pass

    @abstractmethod
    def invoke(self, payload: str) -> ServiceResponse:
        """
        Call the service.

        Args:
            payload: String argument, e.g. a dock frame or a tool command

        Returns:
            ServiceResponse: Success flag and message

        Raises:
            ServiceCallError: If the call could not be delivered
        """
        pass
