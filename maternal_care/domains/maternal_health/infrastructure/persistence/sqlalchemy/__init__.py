"""
Maternal Health SQLAlchemy Persistence
"""

from .models import NotificationLogModel, SubjectModel, UserReminderModel
from .notification_log import SqlAlchemyNotificationLog
from .reminder_history_store import SqlAlchemyReminderHistoryStore
from .subject_repository import SqlAlchemySubjectRepository

__all__ = [
    "NotificationLogModel",
    "SqlAlchemyNotificationLog",
    "SqlAlchemyReminderHistoryStore",
    "SqlAlchemySubjectRepository",
    "SubjectModel",
    "UserReminderModel",
]
