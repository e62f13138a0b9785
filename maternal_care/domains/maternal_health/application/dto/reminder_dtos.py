# ============================================================================
# SCOPE: APPLICATION LAYER (Maternal Health)
# Description: Data Transfer Objects for reminder sweeps and delivery.
# ============================================================================
"""Reminder DTOs.

Results of sweeps, dispatch runs and channel attempts, plus the audit
entries written for every notification attempt.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from ...domain.value_objects.reminder_status import ReminderStatus
from ...domain.value_objects.schedule_track import ScheduleTrack

# Notification log kinds that are not reminder types
KIND_DAILY_TIP = "daily_tip"
KIND_TEST = "test"

LOG_STATUS_SENT = "sent"
LOG_STATUS_FAILED = "failed"


# =============================================================================
# Delivery DTOs
# =============================================================================


@dataclass(frozen=True)
class ChannelAttempt:
    """Outcome of one channel within a delivery attempt."""

    channel: str
    success: bool
    error: str | None = None
    duration_ms: float = 0.0


@dataclass(frozen=True)
class DeliveryReport:
    """Outcome of a delivery attempt across the channel chain."""

    attempts: tuple[ChannelAttempt, ...] = ()

    @property
    def delivered(self) -> bool:
        return any(attempt.success for attempt in self.attempts)

    @property
    def channel(self) -> str | None:
        """Channel that delivered the message, if any."""
        for attempt in self.attempts:
            if attempt.success:
                return attempt.channel
        return None

    @property
    def error_summary(self) -> str:
        errors = [f"{a.channel}: {a.error or 'delivery failed'}" for a in self.attempts if not a.success]
        return "; ".join(errors) if errors else "no channel configured"


@dataclass(frozen=True)
class NotificationLogEntry:
    """Audit row describing one notification attempt."""

    subject_id: int
    kind: str
    status: str
    content: str
    channel: str | None = None
    reminder_id: int | None = None
    gestational_week: int | None = None
    error_message: str | None = None
    sent_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


# =============================================================================
# Result DTOs
# =============================================================================


@dataclass
class SweepResult:
    """Counters of one scheduler sweep over a track."""

    track: ScheduleTrack
    subjects_evaluated: int = 0
    rules_matched: int = 0
    enqueued: int = 0
    duplicates_skipped: int = 0
    skipped_no_contact: int = 0
    errors: int = 0

    def to_dict(self) -> dict:
        return {
            "track": self.track.value,
            "subjects_evaluated": self.subjects_evaluated,
            "rules_matched": self.rules_matched,
            "enqueued": self.enqueued,
            "duplicates_skipped": self.duplicates_skipped,
            "skipped_no_contact": self.skipped_no_contact,
            "errors": self.errors,
        }


@dataclass
class DispatchResult:
    """Counters of one delivery dispatcher run."""

    processed: int = 0
    sent: int = 0
    retried: int = 0
    failed: int = 0
    skipped: int = 0
    errors: int = 0

    def to_dict(self) -> dict:
        return {
            "processed": self.processed,
            "sent": self.sent,
            "retried": self.retried,
            "failed": self.failed,
            "skipped": self.skipped,
            "errors": self.errors,
        }


@dataclass
class DailyTipResult:
    """Counters of one daily tips run."""

    sent: int = 0
    failed: int = 0
    fallback_used: int = 0
    skipped: int = 0

    def to_dict(self) -> dict:
        return {
            "sent": self.sent,
            "failed": self.failed,
            "fallback_used": self.fallback_used,
            "skipped": self.skipped,
        }


@dataclass(frozen=True)
class ReminderStats:
    """Reminder counts per status for a subject."""

    subject_id: int
    counts: dict[ReminderStatus, int]

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def count(self, status: ReminderStatus) -> int:
        return self.counts.get(status, 0)
