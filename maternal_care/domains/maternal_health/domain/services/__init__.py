# Domain Services
from .gestational_calculator import age_since, calculate, determine_trimester, expected_delivery_date, validate_lmp
from .reminder_matcher import ReminderMatcher

__all__ = [
    "ReminderMatcher",
    "age_since",
    "calculate",
    "determine_trimester",
    "expected_delivery_date",
    "validate_lmp",
]
