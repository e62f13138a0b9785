# Medical schedule data
from .medical_schedule import MEDICAL_SCHEDULE, MedicalScheduleTable, MessageTemplate, ReminderRule

__all__ = ["MEDICAL_SCHEDULE", "MedicalScheduleTable", "MessageTemplate", "ReminderRule"]
