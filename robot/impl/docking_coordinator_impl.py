"""
DockingCoordinator Implementation - blocking docking, undocking and tool calls.

Each collaborator is optional. When one is not configured the matching
operation succeeds immediately, so a robot without a docking service still
tracks its docked state and goes through the undocking prologue.
"""
import logging
from typing import Callable, Optional

from interfaces.docking_coordinator_interface import IDockingCoordinator
from interfaces.service_call_interface import IServiceCaller, ServiceResponse, ServiceCallError
from robot.impl.controller_state_impl import ControllerFlags


class DockingCoordinatorImpl(IDockingCoordinator):
    """
    Runs the synchronous collaborator calls and keeps the docking flags in step.

    Threading Model:
    - dock(), undock(), use_tool(): UPDATE THREAD ONLY (they block it)
    - Flag changes are visible to the publish thread while a call is in flight
    """

    def __init__(self,
                 flags: ControllerFlags,
                 docking_caller: Optional[IServiceCaller] = None,
                 undocking_caller: Optional[IServiceCaller] = None,
                 tool_caller: Optional[IServiceCaller] = None,
                 publish_state: Optional[Callable[[], None]] = None,
                 robot_id: str = "robot"):
        """
        Args:
            flags: Shared controller flags
            docking_caller: Docking service, or None
            undocking_caller: Undocking service, or None
            tool_caller: Tool service, or None
            publish_state: Out-of-band state report used before a tool call
            robot_id: Robot name used in the logger name
        """
        self._flags = flags
        self._docking_caller = docking_caller
        self._undocking_caller = undocking_caller
        self._tool_caller = tool_caller
        self._publish_state = publish_state
        self.logger = logging.getLogger(f"DockingCoordinator.{robot_id}")

    def dock(self, dock_name: str) -> bool:
        self._flags.docking.set()
        try:
            response = self._invoke(self._docking_caller, dock_name)
        finally:
            # Cleared before the outcome is inspected so a failed call
            # reports REQUEST_ERROR rather than staying in DOCKING.
            self._flags.docking.clear()

        if not response.success:
            self.logger.error(f"Failed to trigger docking sequence, message: {response.message}")
            self._flags.request_error.set()
            return False

        self._flags.set_docked(dock_name)
        self.logger.info(f"Docked at '{dock_name}'")
        return True

    def undock(self) -> bool:
        docked_frame = self._flags.get_docked_frame()
        self._flags.undocking.set()
        try:
            self.logger.info(f"Undocking from '{docked_frame}'")
            response = self._invoke(self._undocking_caller, docked_frame)
        finally:
            self._flags.undocking.clear()

        if not response.success:
            self.logger.error(f"Failed to trigger undocking sequence, message: {response.message}")
            self._flags.request_error.set()
            return False

        self._flags.clear_docked()
        return True

    def use_tool(self, tool_cmd: str) -> bool:
        self._flags.using_tool.set()
        try:
            if self._publish_state is not None:
                self._publish_state()
            response = self._invoke(self._tool_caller, tool_cmd)
        finally:
            self._flags.using_tool.clear()

        if not response.success:
            self.logger.error(f"Failed to trigger tool cmd, message: {response.message}")
            self._flags.request_error.set()
            return False
        return True

    def _invoke(self, caller: Optional[IServiceCaller], payload: str) -> ServiceResponse:
        """Call a collaborator; an absent caller succeeds and a delivery error fails."""
        if caller is None:
            return ServiceResponse(success=True)
        self.logger.debug(f"Calling service with payload '{payload}'")
        try:
            return caller.invoke(payload)
        except ServiceCallError as e:
            return ServiceResponse(success=False, message=str(e))
