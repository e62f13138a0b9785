from .reminders import (
    CadenceRunResponse,
    DismissReminderResponse,
    PregnancyCalculationResponse,
    ReminderListResponse,
    ReminderResponse,
    ReminderStatsResponse,
    SchedulerJobResponse,
    SchedulerJobsResponse,
    SendTestReminderRequest,
    SendTestReminderResponse,
)

__all__ = [
    "CadenceRunResponse",
    "DismissReminderResponse",
    "PregnancyCalculationResponse",
    "ReminderListResponse",
    "ReminderResponse",
    "ReminderStatsResponse",
    "SchedulerJobResponse",
    "SchedulerJobsResponse",
    "SendTestReminderRequest",
    "SendTestReminderResponse",
]
