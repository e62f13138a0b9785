"""
Maternal Health SQLAlchemy Models

Database models for subjects, queued reminders and the notification log.
"""

from datetime import UTC, datetime

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
    Text,
    text,
)

from maternal_care.database.base import Base, TimestampMixin
from maternal_care.domains.maternal_health.domain.value_objects import (
    PregnancyStatus,
    ReminderPriority,
    ReminderStatus,
    ReminderType,
)

# Rows in these statuses hold the (subject, type, week) key
ACTIVE_REMINDER_CONDITION = "status IN ('pending', 'sent', 'dismissed')"


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


class SubjectModel(Base, TimestampMixin):
    """SQLAlchemy model for Subject entity."""

    __tablename__ = "subjects"

    id = Column(Integer, primary_key=True, index=True)

    first_name = Column(String(100), nullable=False, default="")
    phone_number = Column(String(20), nullable=True)
    language = Column(String(5), nullable=False, default="en")

    # Pregnancy form
    pregnancy_status = Column(
        SQLEnum(
            PregnancyStatus,
            name="pregnancy_status",
            values_callable=_enum_values,
            native_enum=False,
            length=20,
        ),
        default=PregnancyStatus.PREGNANT,
        nullable=False,
        index=True,
    )
    last_menstrual_period = Column(Date, nullable=True)
    delivery_date = Column(Date, nullable=True)
    expected_delivery_date = Column(Date, nullable=True)


class UserReminderModel(Base, TimestampMixin):
    """SQLAlchemy model for UserReminder aggregate.

    The partial unique index on (subject_id, type, current_week) is what
    keeps two concurrent sweeps from queueing the same reminder.
    """

    __tablename__ = "user_reminders"

    id = Column(Integer, primary_key=True, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False, index=True)

    type = Column(
        SQLEnum(ReminderType, name="reminder_type", values_callable=_enum_values, native_enum=False, length=20),
        nullable=False,
    )
    priority = Column(
        SQLEnum(
            ReminderPriority,
            name="reminder_priority",
            values_callable=_enum_values,
            native_enum=False,
            length=10,
        ),
        nullable=False,
        default=ReminderPriority.MEDIUM,
    )
    # Dispatch order, derived from priority (0 = high)
    priority_rank = Column(SmallInteger, nullable=False, default=1)
    rule_key = Column(String(64), nullable=True)

    scheduled_for = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC))
    status = Column(
        SQLEnum(ReminderStatus, name="reminder_status", values_callable=_enum_values, native_enum=False, length=20),
        nullable=False,
        default=ReminderStatus.PENDING,
    )

    current_week = Column(Integer, nullable=False, default=0)
    current_day = Column(Integer, nullable=False, default=0)

    message = Column(Text, nullable=False, default="")
    sent_at = Column(DateTime(timezone=True), nullable=True)
    retry_count = Column(Integer, nullable=False, default=0)
    error_message = Column(Text, nullable=True)

    # Optimistic concurrency
    version = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index(
            "uq_user_reminders_active_key",
            "subject_id",
            "type",
            "current_week",
            unique=True,
            postgresql_where=text(ACTIVE_REMINDER_CONDITION),
            sqlite_where=text(ACTIVE_REMINDER_CONDITION),
        ),
        Index("ix_user_reminders_dispatch", "status", "priority_rank", "scheduled_for"),
        Index("ix_user_reminders_subject_created", "subject_id", "created_at"),
    )


class NotificationLogModel(Base):
    """SQLAlchemy model for notification audit rows."""

    __tablename__ = "notification_logs"

    id = Column(Integer, primary_key=True, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False, index=True)
    reminder_id = Column(Integer, ForeignKey("user_reminders.id", ondelete="SET NULL"), nullable=True)

    kind = Column(String(32), nullable=False)
    channel = Column(String(20), nullable=True)
    status = Column(String(20), nullable=False)
    content = Column(Text, nullable=False, default="")
    gestational_week = Column(Integer, nullable=True)
    error_message = Column(Text, nullable=True)

    sent_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC))
