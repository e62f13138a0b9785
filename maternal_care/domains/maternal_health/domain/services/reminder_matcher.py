"""Reminder Matcher.

Finds the schedule rules due for a subject's current age.
"""

from ..schedule.medical_schedule import MEDICAL_SCHEDULE, MedicalScheduleTable, ReminderRule
from ..value_objects.age import AgeInWeeks
from ..value_objects.pregnancy_state import PregnancyState
from ..value_objects.schedule_track import ScheduleTrack


class ReminderMatcher:
    """Pure lookup of due rules over a schedule table.

    Window tracks (antenatal care) match any week inside a rule's range;
    point tracks (vaccination, milestones) match the exact week only.
    """

    def __init__(self, schedule: MedicalScheduleTable = MEDICAL_SCHEDULE):
        self._schedule = schedule

    def find_due_rules(self, age: PregnancyState | AgeInWeeks | int, track: ScheduleTrack) -> list[ReminderRule]:
        """Rules of `track` due at the given age.

        Args:
            age: Pregnancy state (gestational tracks), age since delivery or
                a number of completed weeks.
            track: Track to search.

        Returns:
            Due rules in table order. Empty for an invalid pregnancy state.
        """
        weeks = self._weeks_of(age)
        if weeks is None:
            return []

        rules = self._schedule.rules_for(track)
        if track.uses_week_window:
            return [rule for rule in rules if rule.covers(weeks)]
        return [rule for rule in rules if weeks == rule.week_start]

    @staticmethod
    def _weeks_of(age: PregnancyState | AgeInWeeks | int) -> int | None:
        if isinstance(age, PregnancyState):
            return age.gestational_weeks if age.is_valid else None
        if isinstance(age, AgeInWeeks):
            return age.weeks
        return age
