"""
Interface for the GoalQueue - ordered navigation waypoints with execution bookkeeping.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from interfaces.navigation_actuator_interface import NavigationGoal


@dataclass
class Goal:
    """
    One waypoint of the active path plus its send/retry bookkeeping.

    Only the queue head is ever sent; abort_count only grows until the
    whole queue is replaced.
    """
    area_label: str
    target_pose: NavigationGoal
    sent: bool = False
    abort_count: int = 0
    scheduled_arrival: float = 0.0  # seconds since epoch


class IGoalQueue(ABC):
    """
    Interface for the pending goal queue.

    **Thread Safety**: Every method acquires the queue's reader/writer lock.
    Multi-step transitions use transaction() to hold the write lock across
    several calls; read_transaction() does the same for consistent reads.
    Never open a write transaction while holding a read transaction on the
    same thread.
    """

    @abstractmethod
    def replace(self, goals: List[Goal]) -> None:
        """Replace the whole queue with new goals."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Drop every pending goal."""
        pass

    @abstractmethod
    def peek(self) -> Optional[Goal]:
        """
        Get the head of the queue without removing it.

        Returns:
            Optional[Goal]: Head goal, or None if the queue is empty
        """
        pass

    @abstractmethod
    def pop_front(self) -> Optional[Goal]:
        """
        Remove and return the head of the queue.

        Returns:
            Optional[Goal]: Removed goal, or None if the queue was empty
        """
        pass

    @abstractmethod
    def mark_head_unsent(self) -> None:
        """Flag the head goal for re-sending; no-op on an empty queue."""
        pass

    @abstractmethod
    def is_empty(self) -> bool:
        """Check whether the queue holds no goals."""
        pass

    @abstractmethod
    def size(self) -> int:
        """Number of pending goals."""
        pass

    @abstractmethod
    def snapshot(self) -> List[Goal]:
        """
        Get copies of all pending goals in order.

        Returns:
            List[Goal]: Independent copies, safe to read without the lock
        """
        pass

    @abstractmethod
    def transaction(self):
        """Context manager holding the write lock for a multi-step update."""
        pass

    @abstractmethod
    def read_transaction(self):
        """Context manager holding the read lock for multi-step reads."""
        pass
