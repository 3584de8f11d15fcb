"""
ControllerState Implementation - shared controller state with per-group locking.

Telemetry (battery, pose) and the task id each sit behind their own
reader/writer lock so that state reporting never waits on an unrelated
writer. Flags are independent atomic cells.
"""
import threading
from typing import Tuple

from interfaces.controller_state_interface import IControllerState, FlagSnapshot
from interfaces.telemetry_interface import BatteryState, PoseStamped
from utils.read_write_lock import ReadWriteLock, ReadLock, WriteLock


class ControllerFlags:
    """
    Independent boolean cells for the controller flags.

    Each flag is a threading.Event, so set/clear/is_set are atomic on their
    own. docked and docked_frame change together under one lock.
    """

    def __init__(self):
        self.request_error = threading.Event()
        self.emergency = threading.Event()
        self.paused = threading.Event()
        self.docking = threading.Event()
        self.undocking = threading.Event()
        self.using_tool = threading.Event()
        self._docked = False
        self._docked_frame = ""
        self._docked_lock = threading.Lock()

    def set_docked(self, docked_frame: str) -> None:
        with self._docked_lock:
            self._docked = True
            self._docked_frame = docked_frame

    def clear_docked(self) -> None:
        with self._docked_lock:
            self._docked = False
            self._docked_frame = ""

    def is_docked(self) -> bool:
        with self._docked_lock:
            return self._docked

    def get_docked_frame(self) -> str:
        with self._docked_lock:
            return self._docked_frame

    def snapshot(self) -> FlagSnapshot:
        return FlagSnapshot(
            request_error=self.request_error.is_set(),
            emergency=self.emergency.is_set(),
            paused=self.paused.is_set(),
            docking=self.docking.is_set(),
            using_tool=self.using_tool.is_set(),
        )


class ControllerStateImpl(IControllerState):
    """
    Thread-safe controller state.

    Threading Model:
    - update_pose(), set_task_id(): UPDATE THREAD
    - set_battery_state(): battery provider callback thread
    - get_*() methods: ANY THREAD
    """

    def __init__(self):
        self.flags = ControllerFlags()

        self._battery_lock = ReadWriteLock()
        self._battery_state = BatteryState()

        self._pose_lock = ReadWriteLock()
        self._current_pose = PoseStamped()
        self._previous_pose = PoseStamped()

        self._task_id_lock = ReadWriteLock()
        self._task_id = ""

    def get_battery_state(self) -> BatteryState:
        with ReadLock(self._battery_lock):
            return self._battery_state

    def set_battery_state(self, battery_state: BatteryState) -> None:
        with WriteLock(self._battery_lock):
            self._battery_state = battery_state

    def get_pose(self) -> PoseStamped:
        with ReadLock(self._pose_lock):
            return self._current_pose

    def get_pose_pair(self) -> Tuple[PoseStamped, PoseStamped]:
        with ReadLock(self._pose_lock):
            return self._current_pose, self._previous_pose

    def update_pose(self, pose: PoseStamped) -> None:
        with WriteLock(self._pose_lock):
            self._previous_pose = self._current_pose
            self._current_pose = pose

    def get_task_id(self) -> str:
        with ReadLock(self._task_id_lock):
            return self._task_id

    def set_task_id(self, task_id: str) -> None:
        with WriteLock(self._task_id_lock):
            self._task_id = task_id

    def get_flags(self) -> FlagSnapshot:
        return self.flags.snapshot()
