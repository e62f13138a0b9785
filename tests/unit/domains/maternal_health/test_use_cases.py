"""Tests for the subject facing use cases."""

from datetime import UTC, date, datetime, timedelta

import pytest

from maternal_care.core.domain.exceptions import (
    EntityNotFoundException,
    InvalidOperationException,
    ValidationException,
)
from maternal_care.domains.maternal_health.application.dto import KIND_DAILY_TIP, KIND_TEST
from maternal_care.domains.maternal_health.application.services import ContentService, FallbackNotifier
from maternal_care.domains.maternal_health.application.use_cases import (
    CalculatePregnancyUseCase,
    DismissReminderUseCase,
    GetReminderHistoryUseCase,
    GetReminderStatsUseCase,
    GetUpcomingRemindersUseCase,
    SendDailyTipsUseCase,
    SendTestReminderUseCase,
)
from maternal_care.domains.maternal_health.domain.value_objects import (
    Language,
    PregnancyStatus,
    ReminderStatus,
    ReminderType,
)
from tests.utils.factories import make_reminder, make_subject
from tests.utils.fakes import FakeClock, FakeNotifier, FakeTextGenerator

# ============================================================================
# Calculate Pregnancy
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
class TestCalculatePregnancyUseCase:
    def test_returns_state(self):
        state = CalculatePregnancyUseCase().execute("2024-01-01", date(2024, 3, 11))

        assert state.gestational_weeks == 10
        assert state.expected_delivery_date == date(2024, 10, 7)

    def test_rejects_future_lmp(self):
        with pytest.raises(ValidationException):
            CalculatePregnancyUseCase().execute("2024-03-12", date(2024, 3, 11))

    def test_rejects_malformed_lmp(self):
        with pytest.raises(ValidationException):
            CalculatePregnancyUseCase().execute("not-a-date", date(2024, 3, 11))


# ============================================================================
# Dismiss Reminder
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
class TestDismissReminderUseCase:
    async def test_dismisses_pending_reminder(self, memory_store):
        stored = await memory_store.insert_if_absent(make_reminder())

        reminder = await DismissReminderUseCase(memory_store).execute(stored.id)

        assert reminder.status is ReminderStatus.DISMISSED
        assert (await memory_store.get(stored.id)).status is ReminderStatus.DISMISSED

    async def test_unknown_reminder(self, memory_store):
        with pytest.raises(EntityNotFoundException):
            await DismissReminderUseCase(memory_store).execute(404)

    async def test_sent_reminder_cannot_be_dismissed(self, memory_store):
        stored = await memory_store.insert_if_absent(make_reminder(status=ReminderStatus.SENT))

        with pytest.raises(InvalidOperationException):
            await DismissReminderUseCase(memory_store).execute(stored.id)


# ============================================================================
# Subject Queries
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
class TestSubjectReminderQueries:
    @pytest.fixture
    async def populated(self, memory_store, memory_subjects, clock):
        memory_subjects.add(make_subject(subject_id=1))
        memory_subjects.add(make_subject(subject_id=2))
        await memory_store.insert_if_absent(make_reminder(current_week=6, scheduled_for=clock.now))
        await memory_store.insert_if_absent(
            make_reminder(current_week=7, scheduled_for=clock.now - timedelta(days=1))
        )
        await memory_store.insert_if_absent(make_reminder(current_week=8, status=ReminderStatus.SENT))
        await memory_store.insert_if_absent(make_reminder(subject_id=2, current_week=8))
        return memory_store

    async def test_upcoming_only_pending_soonest_first(self, populated, memory_subjects):
        reminders = await GetUpcomingRemindersUseCase(populated, memory_subjects).execute(1)

        assert [r.current_week for r in reminders] == [7, 6]

    async def test_history_includes_every_status(self, populated, memory_subjects):
        reminders = await GetReminderHistoryUseCase(populated, memory_subjects).execute(1)

        assert len(reminders) == 3
        assert {r.subject_id for r in reminders} == {1}

    async def test_history_limit(self, populated, memory_subjects):
        reminders = await GetReminderHistoryUseCase(populated, memory_subjects).execute(1, limit=2)
        assert len(reminders) == 2

    async def test_stats_include_zero_counts(self, populated, memory_subjects):
        stats = await GetReminderStatsUseCase(populated, memory_subjects).execute(1)

        assert stats.count(ReminderStatus.PENDING) == 2
        assert stats.count(ReminderStatus.SENT) == 1
        assert stats.counts[ReminderStatus.FAILED] == 0
        assert stats.total == 3

    @pytest.mark.parametrize(
        "use_case_cls",
        [GetUpcomingRemindersUseCase, GetReminderHistoryUseCase, GetReminderStatsUseCase],
    )
    async def test_unknown_subject(self, populated, memory_subjects, use_case_cls):
        with pytest.raises(EntityNotFoundException):
            await use_case_cls(populated, memory_subjects).execute(99)


# ============================================================================
# Send Test Reminder
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
class TestSendTestReminderUseCase:
    async def test_sends_localized_message(self, memory_subjects, memory_log, whatsapp, clock):
        memory_subjects.add(make_subject(language=Language.FR))
        use_case = SendTestReminderUseCase(memory_subjects, FallbackNotifier([whatsapp]), memory_log, clock)

        sent = await use_case.execute(1, ReminderType.VACCINATION)

        assert sent is True
        body = whatsapp.sent[0][1]
        assert body.startswith("🧪 Rappel de test")
        assert "vaccination" in body
        assert memory_log.entries[0].kind == KIND_TEST
        assert memory_log.entries[0].sent_at == clock.now

    async def test_all_channels_failed(self, memory_subjects, memory_log, clock):
        memory_subjects.add(make_subject())
        chain = FallbackNotifier([FakeNotifier("whatsapp", default=False)])

        sent = await SendTestReminderUseCase(memory_subjects, chain, memory_log, clock).execute(1, ReminderType.ANC)

        assert sent is False
        assert memory_log.entries[0].status == "failed"

    async def test_subject_without_contact(self, memory_subjects, whatsapp):
        memory_subjects.add(make_subject(phone_number=None))

        sent = await SendTestReminderUseCase(memory_subjects, FallbackNotifier([whatsapp])).execute(1, ReminderType.ANC)

        assert sent is False
        assert whatsapp.sent == []

    async def test_unknown_subject(self, memory_subjects, whatsapp):
        with pytest.raises(EntityNotFoundException):
            await SendTestReminderUseCase(memory_subjects, FallbackNotifier([whatsapp])).execute(1, ReminderType.ANC)


# ============================================================================
# Send Daily Tips
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
class TestSendDailyTipsUseCase:
    def _use_case(self, subjects, generator, notifiers, log, clock) -> SendDailyTipsUseCase:
        return SendDailyTipsUseCase(
            subject_repository=subjects,
            content_service=ContentService(generator),
            channels=FallbackNotifier(notifiers),
            notification_log=log,
            clock=clock,
        )

    async def test_sends_generated_tip(self, memory_subjects, memory_log, whatsapp, clock):
        memory_subjects.add(make_subject())
        use_case = self._use_case(memory_subjects, FakeTextGenerator("Rest today."), [whatsapp], memory_log, clock)

        result = await use_case.execute()

        assert result.to_dict() == {"sent": 1, "failed": 0, "fallback_used": 0, "skipped": 0}
        assert whatsapp.sent == [("+250788000001", "Rest today.")]
        entry = memory_log.entries[0]
        assert entry.kind == KIND_DAILY_TIP
        assert entry.gestational_week == 10
        assert entry.reminder_id is None

    async def test_generation_failure_uses_fallback(self, memory_subjects, memory_log, whatsapp, clock):
        memory_subjects.add(make_subject())
        generator = FakeTextGenerator(error=RuntimeError("ollama down"))
        use_case = self._use_case(memory_subjects, generator, [whatsapp], memory_log, clock)

        result = await use_case.execute()

        assert result.sent == 1
        assert result.fallback_used == 1
        assert whatsapp.sent[0][1].startswith("Week 10:")

    async def test_skips_ineligible_subjects(self, memory_subjects, memory_log, whatsapp, clock):
        memory_subjects.add(make_subject(subject_id=1, phone_number=None))
        memory_subjects.add(make_subject(subject_id=2, last_menstrual_period=None))
        memory_subjects.add(make_subject(subject_id=3, last_menstrual_period=date(2024, 6, 1)))
        memory_subjects.add(make_subject(subject_id=4, pregnancy_status=PregnancyStatus.DELIVERED))
        use_case = self._use_case(memory_subjects, FakeTextGenerator(), [whatsapp], memory_log, clock)

        result = await use_case.execute()

        assert result.skipped == 3
        assert result.sent == 0
        assert whatsapp.sent == []

    async def test_delivery_failure_is_counted(self, memory_subjects, memory_log, clock):
        memory_subjects.add(make_subject())
        notifier = FakeNotifier("sms", default=False)
        use_case = self._use_case(memory_subjects, FakeTextGenerator(), [notifier], memory_log, clock)

        result = await use_case.execute()

        assert result.failed == 1
        assert memory_log.entries[0].status == "failed"

    async def test_week_follows_local_date(self, memory_subjects, memory_log, whatsapp):
        memory_subjects.add(make_subject())
        # 01:30 on March 11 in Kigali, still March 10 in UTC
        clock = FakeClock(datetime(2024, 3, 10, 23, 30, tzinfo=UTC))
        use_case = SendDailyTipsUseCase(
            subject_repository=memory_subjects,
            content_service=ContentService(FakeTextGenerator()),
            channels=FallbackNotifier([whatsapp]),
            notification_log=memory_log,
            clock=clock,
            timezone_name="Africa/Kigali",
        )

        await use_case.execute()

        assert memory_log.entries[0].gestational_week == 10
