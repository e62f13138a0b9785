"""Schedule Track Value Object.

Groups of schedule rules that share the age they are keyed on.
"""

from enum import Enum


class ScheduleTrack(str, Enum):
    """Reminder tracks of the medical schedule."""

    ANTENATAL = "antenatal"  # gestational week, window match
    VACCINATION = "vaccination"  # weeks since delivery, exact match
    MILESTONE = "milestone"  # gestational week, exact match

    @property
    def display_name(self) -> str:
        names = {
            "antenatal": "Antenatal care visits",
            "vaccination": "Child vaccinations",
            "milestone": "Pregnancy milestones",
        }
        return names.get(self.value, self.value)

    @property
    def uses_week_window(self) -> bool:
        """Whether rules match a week range instead of an exact week."""
        return self is ScheduleTrack.ANTENATAL

    @property
    def is_postnatal(self) -> bool:
        """Whether the track is keyed on age since delivery."""
        return self is ScheduleTrack.VACCINATION
