# ============================================================================
# SCOPE: APPLICATION LAYER (Maternal Health)
# Description: Ports (interfaces) for persistence and external services.
# ============================================================================
"""Maternal Health Application Ports.

- IReminderHistoryStore: Reminder queue and history
- ISubjectRepository: Followed subjects
- INotifier: Outbound message transports
- ITextGenerator: AI generated content
- INotificationLog: Notification audit trail
"""

from .notification_log_port import INotificationLog
from .notifier_port import INotifier
from .reminder_history_port import IReminderHistoryStore
from .subject_port import ISubjectRepository
from .text_generator_port import ITextGenerator

__all__ = [
    "INotificationLog",
    "INotifier",
    "IReminderHistoryStore",
    "ISubjectRepository",
    "ITextGenerator",
]
