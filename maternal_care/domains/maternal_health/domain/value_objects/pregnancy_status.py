"""Pregnancy Status Value Object.

Closed set of pregnancy form statuses and the reminder tracks each one drives.
"""

from enum import Enum

from .schedule_track import ScheduleTrack


class PregnancyStatus(str, Enum):
    """Status recorded on a subject's pregnancy form."""

    PREGNANT = "Pregnant"
    DELIVERED = "Delivered"
    ABORTED = "Aborted"
    STILLBIRTH = "Stillbirth"
    INFERTILE = "Infertile"
    PRECONCEPTION = "Preconception"
    MENOPAUSAL = "Menopausal"
    NULLIGRAVID = "Nulligravid"

    @property
    def reminder_tracks(self) -> tuple[ScheduleTrack, ...]:
        """Tracks whose reminders apply to subjects in this status."""
        return _TRACKS_BY_STATUS[self]

    def is_pregnant(self) -> bool:
        return self is PregnancyStatus.PREGNANT

    def is_postnatal(self) -> bool:
        return self is PregnancyStatus.DELIVERED

    @classmethod
    def statuses_for_track(cls, track: ScheduleTrack) -> list["PregnancyStatus"]:
        """All statuses whose subjects take part in the given track."""
        return [status for status in cls if track in status.reminder_tracks]


_TRACKS_BY_STATUS: dict[PregnancyStatus, tuple[ScheduleTrack, ...]] = {
    PregnancyStatus.PREGNANT: (ScheduleTrack.ANTENATAL, ScheduleTrack.MILESTONE),
    PregnancyStatus.DELIVERED: (ScheduleTrack.VACCINATION,),
    PregnancyStatus.ABORTED: (),
    PregnancyStatus.STILLBIRTH: (),
    PregnancyStatus.INFERTILE: (),
    PregnancyStatus.PRECONCEPTION: (),
    PregnancyStatus.MENOPAUSAL: (),
    PregnancyStatus.NULLIGRAVID: (),
}

# Every status must declare its tracks explicitly
_unmapped = set(PregnancyStatus) - set(_TRACKS_BY_STATUS)
if _unmapped:
    raise RuntimeError(f"Pregnancy statuses without reminder tracks: {sorted(s.value for s in _unmapped)}")
