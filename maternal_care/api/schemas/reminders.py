"""
Pydantic schemas for the pregnancy and reminder endpoints.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field

from maternal_care.domains.maternal_health.application.dto import ReminderStats
from maternal_care.domains.maternal_health.domain.entities import UserReminder
from maternal_care.domains.maternal_health.domain.value_objects import PregnancyState, ReminderType


class PregnancyCalculationResponse(BaseModel):
    """Derived pregnancy state for an LMP."""

    last_menstrual_period: date
    as_of: date
    current_week: int
    current_day: int
    total_days: int
    trimester: int
    expected_delivery_date: date
    days_until_delivery: int
    is_overdue: bool

    @classmethod
    def from_state(cls, state: PregnancyState) -> "PregnancyCalculationResponse":
        return cls(
            last_menstrual_period=state.last_menstrual_period,
            as_of=state.as_of,
            current_week=state.gestational_weeks,
            current_day=state.gestational_days,
            total_days=state.total_days,
            trimester=state.trimester,
            expected_delivery_date=state.expected_delivery_date,
            days_until_delivery=state.days_until_delivery,
            is_overdue=state.is_overdue,
        )


class ReminderResponse(BaseModel):
    """A queued or delivered reminder."""

    id: int
    subject_id: int
    type: str
    priority: str
    rule_key: str | None = None
    status: str
    scheduled_for: datetime
    current_week: int
    current_day: int
    message: str
    sent_at: datetime | None = None
    retry_count: int = 0
    error_message: str | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, reminder: UserReminder) -> "ReminderResponse":
        return cls(
            id=reminder.id,
            subject_id=reminder.subject_id,
            type=reminder.type.value,
            priority=reminder.priority.value,
            rule_key=reminder.rule_key,
            status=reminder.status.value,
            scheduled_for=reminder.scheduled_for,
            current_week=reminder.current_week,
            current_day=reminder.current_day,
            message=reminder.message,
            sent_at=reminder.sent_at,
            retry_count=reminder.retry_count,
            error_message=reminder.error_message,
            created_at=reminder.created_at,
        )


class ReminderListResponse(BaseModel):
    reminders: list[ReminderResponse]
    total: int


class ReminderStatsResponse(BaseModel):
    subject_id: int
    total: int
    counts: dict[str, int]

    @classmethod
    def from_stats(cls, stats: ReminderStats) -> "ReminderStatsResponse":
        return cls(
            subject_id=stats.subject_id,
            total=stats.total,
            counts={status.value: count for status, count in stats.counts.items()},
        )


class SendTestReminderRequest(BaseModel):
    type: ReminderType = Field(ReminderType.ANC, description="Reminder type shown in the test message")


class SendTestReminderResponse(BaseModel):
    subject_id: int
    sent: bool


class DismissReminderResponse(BaseModel):
    id: int
    status: str


class CadenceRunResponse(BaseModel):
    cadence: str
    result: dict[str, Any]


class SchedulerJobResponse(BaseModel):
    id: str
    name: str
    next_run: str | None = None


class SchedulerJobsResponse(BaseModel):
    running: bool
    jobs: list[SchedulerJobResponse]
