# Application Services
from .content_service import ContentService, GeneratedContent, fallback_tip
from .delivery_dispatcher import DeliveryDispatcher
from .fallback_notifier import FallbackNotifier
from .reminder_deduplicator import ReminderDeduplicator
from .reminder_queue import ReminderQueue

__all__ = [
    "ContentService",
    "DeliveryDispatcher",
    "FallbackNotifier",
    "GeneratedContent",
    "ReminderDeduplicator",
    "ReminderQueue",
    "fallback_tip",
]
