"""Tests for Subject and UserReminder entities."""

from datetime import UTC, date, datetime, timedelta

import pytest

from maternal_care.core.domain.exceptions import InvalidOperationException
from maternal_care.domains.maternal_health.domain.entities import NO_CONTACT_ERROR, UserReminder
from maternal_care.domains.maternal_health.domain.schedule.medical_schedule import MEDICAL_SCHEDULE
from maternal_care.domains.maternal_health.domain.value_objects import (
    ReminderPriority,
    ReminderStatus,
    ReminderType,
)
from tests.utils.factories import DEFAULT_NOW, make_reminder, make_subject

BACKOFF = timedelta(minutes=30)


# ============================================================================
# Subject
# ============================================================================


@pytest.mark.unit
class TestSubject:
    @pytest.mark.parametrize("phone", [None, "", "   "])
    def test_without_contact(self, phone):
        assert make_subject(phone_number=phone).has_contact() is False

    def test_with_contact(self):
        assert make_subject().has_contact() is True

    def test_greeting_name_falls_back(self):
        assert make_subject(first_name=" ").greeting_name == "there"
        assert make_subject(first_name="Aline").greeting_name == "Aline"

    def test_postnatal_reference_prefers_delivery_date(self):
        subject = make_subject(delivery_date=date(2024, 2, 1), expected_delivery_date=date(2024, 2, 10))
        assert subject.postnatal_reference_date == date(2024, 2, 1)

    def test_postnatal_reference_falls_back_to_expected_date(self):
        subject = make_subject(expected_delivery_date=date(2024, 2, 10))
        assert subject.postnatal_reference_date == date(2024, 2, 10)


# ============================================================================
# UserReminder
# ============================================================================


@pytest.mark.unit
class TestUserReminderCreation:
    def test_from_rule_snapshots_rule(self):
        rule = MEDICAL_SCHEDULE.get("anc_1")

        reminder = UserReminder.from_rule(7, rule, "Hello", current_week=8, current_day=2, now=DEFAULT_NOW)

        assert reminder.subject_id == 7
        assert reminder.type is ReminderType.ANC
        assert reminder.priority is ReminderPriority.HIGH
        assert reminder.rule_key == "anc_1"
        assert reminder.status is ReminderStatus.PENDING
        assert reminder.scheduled_for == DEFAULT_NOW
        assert (reminder.current_week, reminder.current_day) == (8, 2)
        assert reminder.retry_count == 0
        assert reminder.is_new()

    def test_is_due(self):
        reminder = make_reminder()

        assert reminder.is_due(DEFAULT_NOW)
        assert not reminder.is_due(DEFAULT_NOW - timedelta(seconds=1))


@pytest.mark.unit
class TestUserReminderLifecycle:
    """State transitions of a queued reminder."""

    def test_mark_sent(self):
        reminder = make_reminder(error_message="earlier failure")
        sent_at = DEFAULT_NOW + timedelta(minutes=1)

        reminder.mark_sent(sent_at)

        assert reminder.status is ReminderStatus.SENT
        assert reminder.sent_at == sent_at
        assert reminder.error_message is None
        assert reminder.updated_at == sent_at

    def test_failure_below_cap_schedules_retry(self):
        reminder = make_reminder()

        terminal = reminder.record_delivery_failure("sms: delivery failed", 3, BACKOFF, DEFAULT_NOW)

        assert terminal is False
        assert reminder.status is ReminderStatus.PENDING
        assert reminder.retry_count == 1
        assert reminder.scheduled_for == DEFAULT_NOW + BACKOFF
        assert reminder.error_message == "sms: delivery failed"

    def test_failure_at_cap_is_terminal(self):
        reminder = make_reminder()

        results = [reminder.record_delivery_failure("down", 3, BACKOFF, DEFAULT_NOW) for _ in range(3)]

        assert results == [False, False, True]
        assert reminder.status is ReminderStatus.FAILED
        assert reminder.retry_count == 3

    def test_failure_after_terminal_is_rejected(self):
        reminder = make_reminder()
        reminder.record_delivery_failure("down", 1, BACKOFF, DEFAULT_NOW)

        with pytest.raises(InvalidOperationException):
            reminder.record_delivery_failure("down", 1, BACKOFF, DEFAULT_NOW)

    def test_mark_undeliverable(self):
        reminder = make_reminder()

        reminder.mark_undeliverable(now=DEFAULT_NOW)

        assert reminder.status is ReminderStatus.FAILED
        assert reminder.error_message == NO_CONTACT_ERROR
        assert reminder.retry_count == 0

    def test_dismiss_records_event(self):
        reminder = make_reminder(reminder_id=5)

        reminder.dismiss()

        assert reminder.status is ReminderStatus.DISMISSED
        assert reminder.get_domain_events() == [{"event": "reminder_dismissed", "reminder_id": 5}]

    @pytest.mark.parametrize("status", [ReminderStatus.SENT, ReminderStatus.FAILED, ReminderStatus.DISMISSED])
    def test_final_reminders_cannot_be_dismissed(self, status: ReminderStatus):
        reminder = make_reminder(status=status)

        with pytest.raises(InvalidOperationException) as exc_info:
            reminder.dismiss()

        assert exc_info.value.details["current_state"] == status.value

    def test_sent_reminder_cannot_be_sent_again(self):
        reminder = make_reminder(status=ReminderStatus.SENT, sent_at=datetime(2024, 3, 1, tzinfo=UTC))

        with pytest.raises(InvalidOperationException):
            reminder.mark_sent()

    def test_claim_defers_reminder(self):
        reminder = make_reminder()

        reminder.claim(DEFAULT_NOW + BACKOFF, now=DEFAULT_NOW)

        assert reminder.status is ReminderStatus.PENDING
        assert reminder.scheduled_for == DEFAULT_NOW + BACKOFF
        assert not reminder.is_due(DEFAULT_NOW)

    def test_only_pending_reminders_can_be_claimed(self):
        reminder = make_reminder(status=ReminderStatus.DISMISSED)

        with pytest.raises(InvalidOperationException):
            reminder.claim(DEFAULT_NOW + BACKOFF)
