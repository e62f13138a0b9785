"""Reminder Type Value Object."""

from enum import Enum


class ReminderType(str, Enum):
    """Kind of medical event a reminder announces."""

    ANC = "anc"  # Antenatal care visit
    VACCINATION = "vaccination"
    MILESTONE = "milestone"
    EMERGENCY = "emergency"

    @property
    def display_name(self) -> str:
        names = {
            "anc": "Antenatal care visit",
            "vaccination": "Vaccination",
            "milestone": "Pregnancy milestone",
            "emergency": "Emergency alert",
        }
        return names.get(self.value, self.value)
