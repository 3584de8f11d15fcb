"""
In-memory fleet client - request channel and state sink without a transport.

Requests are posted by the test or demo and taken by the client node once per
update cycle. Every published RobotState is recorded.
"""
import threading
from typing import List, Optional

from interfaces.fleet_client_interface import IFleetClient
from interfaces.fleet_messages import (
    ModeRequest, PathRequest, DestinationRequest, RobotState
)


class InMemoryFleetClient(IFleetClient):
    """
    Thread-safe in-process IFleetClient.

    Like a latest-message subscription, each request slot keeps only the most
    recent request of its kind; reading a slot empties it.
    """

    def __init__(self, max_states: int = 1000):
        self._lock = threading.Lock()
        self._mode_request: Optional[ModeRequest] = None
        self._path_request: Optional[PathRequest] = None
        self._destination_request: Optional[DestinationRequest] = None
        self._states: List[RobotState] = []
        self._max_states = max_states
        self.accept_states = True

    # Coordinator side

    def post_mode_request(self, request: ModeRequest) -> None:
        with self._lock:
            self._mode_request = request

    def post_path_request(self, request: PathRequest) -> None:
        with self._lock:
            self._path_request = request

    def post_destination_request(self, request: DestinationRequest) -> None:
        with self._lock:
            self._destination_request = request

    def get_states(self) -> List[RobotState]:
        with self._lock:
            return list(self._states)

    def get_latest_state(self) -> Optional[RobotState]:
        with self._lock:
            return self._states[-1] if self._states else None

    # Robot side

    def read_mode_request(self) -> Optional[ModeRequest]:
        with self._lock:
            request, self._mode_request = self._mode_request, None
            return request

    def read_path_request(self) -> Optional[PathRequest]:
        with self._lock:
            request, self._path_request = self._path_request, None
            return request

    def read_destination_request(self) -> Optional[DestinationRequest]:
        with self._lock:
            request, self._destination_request = self._destination_request, None
            return request

    def send_robot_state(self, state: RobotState) -> bool:
        with self._lock:
            if not self.accept_states:
                return False
            self._states.append(state)
            if len(self._states) > self._max_states:
                del self._states[0]
            return True
