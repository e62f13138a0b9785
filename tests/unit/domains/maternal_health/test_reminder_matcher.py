"""Tests for ReminderMatcher."""

from datetime import date

import pytest

from maternal_care.domains.maternal_health.domain.services import ReminderMatcher
from maternal_care.domains.maternal_health.domain.services.gestational_calculator import calculate
from maternal_care.domains.maternal_health.domain.value_objects import AgeInWeeks, ScheduleTrack


@pytest.fixture
def matcher() -> ReminderMatcher:
    return ReminderMatcher()


def _keys(rules) -> list[str]:
    return [rule.key for rule in rules]


@pytest.mark.unit
class TestAntenatalWindows:
    """Window match: any week inside a rule's range fires it."""

    @pytest.mark.parametrize("week", [6, 7, 8])
    def test_first_visit_window(self, matcher: ReminderMatcher, week: int):
        assert _keys(matcher.find_due_rules(week, ScheduleTrack.ANTENATAL)) == ["anc_1"]

    @pytest.mark.parametrize("week", [5, 9, 10, 12, 17, 43])
    def test_weeks_between_windows(self, matcher: ReminderMatcher, week: int):
        assert matcher.find_due_rules(week, ScheduleTrack.ANTENATAL) == []

    @pytest.mark.parametrize(("week", "key"), [(37, "anc_weekly"), (40, "anc_weekly"), (41, "anc_post_term")])
    def test_late_pregnancy(self, matcher: ReminderMatcher, week: int, key: str):
        assert _keys(matcher.find_due_rules(week, ScheduleTrack.ANTENATAL)) == [key]

    def test_at_most_one_rule_per_week(self, matcher: ReminderMatcher):
        for week in range(0, 45):
            assert len(matcher.find_due_rules(week, ScheduleTrack.ANTENATAL)) <= 1

    def test_day_seventy_matches_nothing(self, matcher: ReminderMatcher):
        state = calculate(date(2024, 1, 1), date(2024, 3, 11))

        assert state.gestational_weeks == 10
        assert matcher.find_due_rules(state, ScheduleTrack.ANTENATAL) == []


@pytest.mark.unit
class TestPointTracks:
    """Exact match for vaccinations and milestones."""

    def test_milestone_on_exact_week(self, matcher: ReminderMatcher):
        assert _keys(matcher.find_due_rules(8, ScheduleTrack.MILESTONE)) == ["milestone_brain_development"]

    def test_no_milestone_between_points(self, matcher: ReminderMatcher):
        assert matcher.find_due_rules(9, ScheduleTrack.MILESTONE) == []

    def test_vaccination_from_age(self, matcher: ReminderMatcher):
        age = AgeInWeeks.from_total_days(42)
        assert _keys(matcher.find_due_rules(age, ScheduleTrack.VACCINATION)) == ["vaccine_6_weeks"]

    def test_vaccination_at_birth(self, matcher: ReminderMatcher):
        assert _keys(matcher.find_due_rules(0, ScheduleTrack.VACCINATION)) == ["vaccine_birth"]

    def test_invalid_state_matches_nothing(self, matcher: ReminderMatcher):
        state = calculate(date(2024, 5, 1), date(2024, 3, 11))
        assert matcher.find_due_rules(state, ScheduleTrack.MILESTONE) == []
