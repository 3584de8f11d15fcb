"""
GoalQueue Implementation - ordered pending waypoints guarded by a reader/writer lock.
"""
from collections import deque
from contextlib import contextmanager
from dataclasses import replace
from typing import Deque, List, Optional

from interfaces.goal_queue_interface import IGoalQueue, Goal
from utils.read_write_lock import ReadWriteLock, ReadLock, WriteLock


class GoalQueueImpl(IGoalQueue):
    """
    Thread-safe goal queue.

    Threading Model:
    - replace()/clear(): UPDATE THREAD (command handlers)
    - peek()/pop_front()/mark_head_unsent() inside transaction(): UPDATE THREAD (driver)
    - snapshot(): ANY THREAD (state reporting)
    """

    def __init__(self):
        self._lock = ReadWriteLock()
        self._goals: Deque[Goal] = deque()

    @contextmanager
    def transaction(self):
        with WriteLock(self._lock):
            yield self

    @contextmanager
    def read_transaction(self):
        with ReadLock(self._lock):
            yield self

    def replace(self, goals: List[Goal]) -> None:
        with WriteLock(self._lock):
            self._goals = deque(goals)

    def clear(self) -> None:
        with WriteLock(self._lock):
            self._goals.clear()

    def peek(self) -> Optional[Goal]:
        with ReadLock(self._lock):
            return self._goals[0] if self._goals else None

    def pop_front(self) -> Optional[Goal]:
        with WriteLock(self._lock):
            return self._goals.popleft() if self._goals else None

    def mark_head_unsent(self) -> None:
        with WriteLock(self._lock):
            if self._goals:
                self._goals[0].sent = False

    def is_empty(self) -> bool:
        with ReadLock(self._lock):
            return not self._goals

    def size(self) -> int:
        with ReadLock(self._lock):
            return len(self._goals)

    def snapshot(self) -> List[Goal]:
        with ReadLock(self._lock):
            return [replace(goal) for goal in self._goals]
