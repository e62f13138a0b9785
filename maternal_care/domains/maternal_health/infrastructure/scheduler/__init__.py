"""Maternal health reminder scheduler."""

from .reminder_jobs import Cadence, ReminderJobs
from .reminder_scheduler import ReminderScheduler, get_reminder_scheduler, shutdown_scheduler

__all__ = [
    "Cadence",
    "ReminderJobs",
    "ReminderScheduler",
    "get_reminder_scheduler",
    "shutdown_scheduler",
]
