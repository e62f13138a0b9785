"""Reminder Status Value Object.

Defines the possible states of a queued reminder and their valid transitions.
"""

from enum import Enum


class ReminderStatus(str, Enum):
    """Reminder delivery status with state machine."""

    PENDING = "pending"  # Waiting for (re)delivery
    SENT = "sent"  # Delivered through at least one channel
    FAILED = "failed"  # Retries exhausted or no contact
    DISMISSED = "dismissed"  # Withdrawn before delivery

    @property
    def display_name(self) -> str:
        names = {
            "pending": "Pending",
            "sent": "Sent",
            "failed": "Failed",
            "dismissed": "Dismissed",
        }
        return names.get(self.value, self.value)

    def can_transition_to(self, new_status: "ReminderStatus") -> bool:
        """Validate a state transition.

        State machine:
        - pending -> sent, failed, dismissed, pending (scheduled retry)
        - sent -> (final state)
        - failed -> (final state)
        - dismissed -> (final state)
        """
        transitions: dict[str, list[str]] = {
            "pending": ["sent", "failed", "dismissed", "pending"],
            "sent": [],
            "failed": [],
            "dismissed": [],
        }
        return new_status.value in transitions.get(self.value, [])

    @classmethod
    def blocking_statuses(cls) -> tuple["ReminderStatus", ...]:
        """Statuses that stop the same (subject, type, week) from being queued again."""
        return (cls.PENDING, cls.SENT, cls.DISMISSED)
