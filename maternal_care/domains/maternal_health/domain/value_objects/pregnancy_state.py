"""Pregnancy State Value Object.

Clinical state derived from a last menstrual period date. It is never stored,
only recomputed for a given reference date.
"""

from dataclasses import dataclass
from datetime import date

from .age import AgeInWeeks
from .pregnancy_status import PregnancyStatus


@dataclass(frozen=True)
class PregnancyState:
    """Gestational age, trimester and expected delivery date as of a date.

    An invalid state (for example an LMP after the reference date) keeps
    every derived field as None and explains why in `invalid_reason`.
    """

    as_of: date
    last_menstrual_period: date | None
    status: PregnancyStatus = PregnancyStatus.PREGNANT
    gestational_age: AgeInWeeks | None = None
    trimester: int | None = None
    expected_delivery_date: date | None = None
    invalid_reason: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.invalid_reason is None

    @property
    def gestational_weeks(self) -> int | None:
        return self.gestational_age.weeks if self.gestational_age else None

    @property
    def gestational_days(self) -> int | None:
        return self.gestational_age.days if self.gestational_age else None

    @property
    def total_days(self) -> int | None:
        return self.gestational_age.total_days if self.gestational_age else None

    @property
    def days_until_delivery(self) -> int | None:
        """Days left until the EDD, negative once it has passed."""
        if self.expected_delivery_date is None:
            return None
        return (self.expected_delivery_date - self.as_of).days

    @property
    def is_overdue(self) -> bool:
        remaining = self.days_until_delivery
        return remaining is not None and remaining < 0

    @classmethod
    def invalid(
        cls,
        as_of: date,
        last_menstrual_period: date | None,
        reason: str,
        status: PregnancyStatus = PregnancyStatus.PREGNANT,
    ) -> "PregnancyState":
        return cls(
            as_of=as_of,
            last_menstrual_period=last_menstrual_period,
            status=status,
            invalid_reason=reason,
        )
