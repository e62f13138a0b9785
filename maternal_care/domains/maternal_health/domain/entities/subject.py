"""Subject Entity.

The reminder-facing view of a user and their pregnancy record.
"""

from dataclasses import dataclass
from datetime import date

from maternal_care.core.domain.entities import Entity

from ..value_objects.language import Language
from ..value_objects.pregnancy_status import PregnancyStatus

DEFAULT_GREETING_NAME = "there"


@dataclass
class Subject(Entity[int]):
    """A person followed by the reminder engine."""

    first_name: str = ""
    phone_number: str | None = None
    language: Language = Language.EN
    pregnancy_status: PregnancyStatus = PregnancyStatus.PREGNANT
    last_menstrual_period: date | None = None
    delivery_date: date | None = None
    expected_delivery_date: date | None = None

    def has_contact(self) -> bool:
        """Whether the subject has an address a notifier can deliver to."""
        return bool(self.phone_number and self.phone_number.strip())

    @property
    def greeting_name(self) -> str:
        """Name used in rendered templates."""
        return self.first_name.strip() or DEFAULT_GREETING_NAME

    @property
    def postnatal_reference_date(self) -> date | None:
        """Date the child's age is counted from.

        The recorded delivery date wins; the expected delivery date is used
        when the delivery itself was never recorded.
        """
        return self.delivery_date or self.expected_delivery_date
