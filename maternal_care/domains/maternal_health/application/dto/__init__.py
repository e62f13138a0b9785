from .reminder_dtos import (
    KIND_DAILY_TIP,
    KIND_TEST,
    LOG_STATUS_FAILED,
    LOG_STATUS_SENT,
    ChannelAttempt,
    DailyTipResult,
    DeliveryReport,
    DispatchResult,
    NotificationLogEntry,
    ReminderStats,
    SweepResult,
)

__all__ = [
    "KIND_DAILY_TIP",
    "KIND_TEST",
    "LOG_STATUS_FAILED",
    "LOG_STATUS_SENT",
    "ChannelAttempt",
    "DailyTipResult",
    "DeliveryReport",
    "DispatchResult",
    "NotificationLogEntry",
    "ReminderStats",
    "SweepResult",
]
