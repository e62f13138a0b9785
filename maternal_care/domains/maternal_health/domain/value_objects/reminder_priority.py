"""Reminder Priority Value Object."""

from enum import Enum


class ReminderPriority(str, Enum):
    """Delivery priority. High reminders are dispatched before medium and low."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort key for dispatch order, lower goes first."""
        ranks = {"high": 0, "medium": 1, "low": 2}
        return ranks[self.value]

    @classmethod
    def from_rank(cls, rank: int) -> "ReminderPriority":
        for priority in cls:
            if priority.rank == rank:
                return priority
        raise ValueError(f"Unknown priority rank: {rank}")
