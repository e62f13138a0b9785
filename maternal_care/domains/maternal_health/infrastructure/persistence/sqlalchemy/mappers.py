"""
Maternal Health Mappers

Convert between SQLAlchemy models and domain entities.
"""

from datetime import UTC, datetime

from maternal_care.domains.maternal_health.application.dto.reminder_dtos import NotificationLogEntry
from maternal_care.domains.maternal_health.domain.entities import Subject, UserReminder
from maternal_care.domains.maternal_health.domain.value_objects import Language

from .models import NotificationLogModel, SubjectModel, UserReminderModel


def _as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes (SQLite drops the offset)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class SubjectMapper:
    """Maps between SubjectModel and Subject."""

    @staticmethod
    def to_entity(model: SubjectModel) -> Subject:
        return Subject(
            id=model.id,
            first_name=model.first_name or "",
            phone_number=model.phone_number,
            language=Language.parse(model.language),
            pregnancy_status=model.pregnancy_status,
            last_menstrual_period=model.last_menstrual_period,
            delivery_date=model.delivery_date,
            expected_delivery_date=model.expected_delivery_date,
            created_at=_as_utc(model.created_at) or datetime.now(UTC),
            updated_at=_as_utc(model.updated_at) or datetime.now(UTC),
        )

    @staticmethod
    def to_model(subject: Subject) -> SubjectModel:
        return SubjectModel(
            id=subject.id,
            first_name=subject.first_name,
            phone_number=subject.phone_number,
            language=subject.language.value,
            pregnancy_status=subject.pregnancy_status,
            last_menstrual_period=subject.last_menstrual_period,
            delivery_date=subject.delivery_date,
            expected_delivery_date=subject.expected_delivery_date,
            created_at=subject.created_at,
            updated_at=subject.updated_at,
        )


class UserReminderMapper:
    """Maps between UserReminderModel and UserReminder."""

    @staticmethod
    def to_entity(model: UserReminderModel) -> UserReminder:
        return UserReminder(
            id=model.id,
            subject_id=model.subject_id,
            type=model.type,
            priority=model.priority,
            rule_key=model.rule_key,
            scheduled_for=_as_utc(model.scheduled_for),
            status=model.status,
            current_week=model.current_week,
            current_day=model.current_day,
            message=model.message,
            sent_at=_as_utc(model.sent_at),
            retry_count=model.retry_count,
            error_message=model.error_message,
            version=model.version,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    @staticmethod
    def to_model(reminder: UserReminder) -> UserReminderModel:
        return UserReminderModel(
            id=reminder.id,
            subject_id=reminder.subject_id,
            type=reminder.type,
            priority=reminder.priority,
            priority_rank=reminder.priority.rank,
            rule_key=reminder.rule_key,
            scheduled_for=reminder.scheduled_for,
            status=reminder.status,
            current_week=reminder.current_week,
            current_day=reminder.current_day,
            message=reminder.message,
            sent_at=reminder.sent_at,
            retry_count=reminder.retry_count,
            error_message=reminder.error_message,
            version=reminder.version,
            created_at=reminder.created_at,
            updated_at=reminder.updated_at,
        )

    @staticmethod
    def mutable_values(reminder: UserReminder) -> dict:
        """Columns an update may change."""
        return {
            "status": reminder.status,
            "scheduled_for": reminder.scheduled_for,
            "sent_at": reminder.sent_at,
            "retry_count": reminder.retry_count,
            "error_message": reminder.error_message,
            "message": reminder.message,
            "updated_at": reminder.updated_at,
        }


class NotificationLogMapper:
    """Maps between NotificationLogModel and NotificationLogEntry."""

    @staticmethod
    def to_entry(model: NotificationLogModel) -> NotificationLogEntry:
        return NotificationLogEntry(
            subject_id=model.subject_id,
            reminder_id=model.reminder_id,
            kind=model.kind,
            channel=model.channel,
            status=model.status,
            content=model.content,
            gestational_week=model.gestational_week,
            error_message=model.error_message,
            sent_at=_as_utc(model.sent_at),
            created_at=_as_utc(model.created_at),
        )

    @staticmethod
    def to_model(entry: NotificationLogEntry) -> NotificationLogModel:
        return NotificationLogModel(
            subject_id=entry.subject_id,
            reminder_id=entry.reminder_id,
            kind=entry.kind,
            channel=entry.channel,
            status=entry.status,
            content=entry.content,
            gestational_week=entry.gestational_week,
            error_message=entry.error_message,
            sent_at=entry.sent_at,
            created_at=entry.created_at,
        )
