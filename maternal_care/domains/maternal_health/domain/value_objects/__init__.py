# Domain Value Objects
from .age import AgeInWeeks
from .language import Language
from .pregnancy_state import PregnancyState
from .pregnancy_status import PregnancyStatus
from .reminder_priority import ReminderPriority
from .reminder_status import ReminderStatus
from .reminder_type import ReminderType
from .schedule_track import ScheduleTrack

__all__ = [
    "AgeInWeeks",
    "Language",
    "PregnancyState",
    "PregnancyStatus",
    "ReminderPriority",
    "ReminderStatus",
    "ReminderType",
    "ScheduleTrack",
]
