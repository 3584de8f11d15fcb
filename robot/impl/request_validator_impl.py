"""
RequestValidator Implementation - rejects foreign commands and task-id replays.
"""
from interfaces.controller_state_interface import IControllerState
from interfaces.request_validator_interface import IRequestValidator


class RequestValidatorImpl(IRequestValidator):
    """Validates command addressing against this robot's identity and current task id."""

    def __init__(self, fleet_name: str, robot_name: str, state: IControllerState):
        self.fleet_name = fleet_name
        self.robot_name = robot_name
        self._state = state

    def is_valid(self, fleet_name: str, robot_name: str, task_id: str) -> bool:
        if task_id == self._state.get_task_id():
            return False
        return fleet_name == self.fleet_name and robot_name == self.robot_name
