# Use Cases
from .calculate_pregnancy import CalculatePregnancyUseCase
from .dismiss_reminder import DismissReminderUseCase
from .get_subject_reminders import GetReminderHistoryUseCase, GetReminderStatsUseCase, GetUpcomingRemindersUseCase
from .run_reminder_sweep import RunReminderSweepUseCase
from .send_daily_tips import SendDailyTipsUseCase
from .send_test_reminder import SendTestReminderUseCase

__all__ = [
    "CalculatePregnancyUseCase",
    "DismissReminderUseCase",
    "GetReminderHistoryUseCase",
    "GetReminderStatsUseCase",
    "GetUpcomingRemindersUseCase",
    "RunReminderSweepUseCase",
    "SendDailyTipsUseCase",
    "SendTestReminderUseCase",
]
