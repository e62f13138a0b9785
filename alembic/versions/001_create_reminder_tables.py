"""create_reminder_tables

Revision ID: 001_reminders
Revises:
Create Date: 2026-10-19

Creates the reminder engine tables:
- subjects: reminder-facing view of a user and her pregnancy form
- user_reminders: queued reminders and their delivery history
- notification_logs: one row per channel attempt
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_reminders"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ACTIVE_REMINDER_CONDITION = "status IN ('pending', 'sent', 'dismissed')"


def upgrade() -> None:
    """Create subjects, user_reminders and notification_logs."""

    op.create_table(
        "subjects",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False, server_default=""),
        sa.Column("phone_number", sa.String(20), nullable=True),
        sa.Column("language", sa.String(5), nullable=False, server_default="en"),
        sa.Column("pregnancy_status", sa.String(20), nullable=False, server_default="Pregnant"),
        sa.Column("last_menstrual_period", sa.Date(), nullable=True),
        sa.Column("delivery_date", sa.Date(), nullable=True),
        sa.Column("expected_delivery_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_subjects_id", "subjects", ["id"])
    op.create_index("ix_subjects_pregnancy_status", "subjects", ["pregnancy_status"])

    op.create_table(
        "user_reminders",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("subject_id", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("priority", sa.String(10), nullable=False, server_default="medium"),
        sa.Column("priority_rank", sa.SmallInteger(), nullable=False, server_default="1"),
        sa.Column("rule_key", sa.String(64), nullable=True),
        sa.Column("scheduled_for", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("current_week", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("current_day", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("message", sa.Text(), nullable=False, server_default=""),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("retry_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(["subject_id"], ["subjects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_user_reminders_id", "user_reminders", ["id"])
    op.create_index("ix_user_reminders_subject_id", "user_reminders", ["subject_id"])
    op.create_index("ix_user_reminders_dispatch", "user_reminders", ["status", "priority_rank", "scheduled_for"])
    op.create_index("ix_user_reminders_subject_created", "user_reminders", ["subject_id", "created_at"])

    # At most one active reminder per (subject, type, week)
    op.create_index(
        "uq_user_reminders_active_key",
        "user_reminders",
        ["subject_id", "type", "current_week"],
        unique=True,
        postgresql_where=sa.text(ACTIVE_REMINDER_CONDITION),
    )

    op.create_table(
        "notification_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("subject_id", sa.Integer(), nullable=False),
        sa.Column("reminder_id", sa.Integer(), nullable=True),
        sa.Column("kind", sa.String(32), nullable=False),
        sa.Column("channel", sa.String(20), nullable=True),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        sa.Column("gestational_week", sa.Integer(), nullable=True),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(["subject_id"], ["subjects.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["reminder_id"], ["user_reminders.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_notification_logs_id", "notification_logs", ["id"])
    op.create_index("ix_notification_logs_subject_id", "notification_logs", ["subject_id"])


def downgrade() -> None:
    """Drop the reminder engine tables."""
    op.drop_index("ix_notification_logs_subject_id", table_name="notification_logs")
    op.drop_index("ix_notification_logs_id", table_name="notification_logs")
    op.drop_table("notification_logs")

    op.drop_index("uq_user_reminders_active_key", table_name="user_reminders")
    op.drop_index("ix_user_reminders_subject_created", table_name="user_reminders")
    op.drop_index("ix_user_reminders_dispatch", table_name="user_reminders")
    op.drop_index("ix_user_reminders_subject_id", table_name="user_reminders")
    op.drop_index("ix_user_reminders_id", table_name="user_reminders")
    op.drop_table("user_reminders")

    op.drop_index("ix_subjects_pregnancy_status", table_name="subjects")
    op.drop_index("ix_subjects_id", table_name="subjects")
    op.drop_table("subjects")
