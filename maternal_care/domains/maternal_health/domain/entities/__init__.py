# Domain Entities
from .subject import Subject
from .user_reminder import NO_CONTACT_ERROR, UserReminder

__all__ = ["NO_CONTACT_ERROR", "Subject", "UserReminder"]
