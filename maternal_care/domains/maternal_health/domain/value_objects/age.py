"""Age In Weeks Value Object."""

from dataclasses import dataclass

from maternal_care.core.domain.value_objects import ValueObject


@dataclass(frozen=True)
class AgeInWeeks(ValueObject):
    """Elapsed time expressed as completed weeks plus remainder days.

    Used both for gestational age (since LMP) and postnatal age (since delivery).
    """

    weeks: int
    days: int
    total_days: int

    def _validate(self) -> None:
        if self.total_days < 0:
            raise ValueError("total_days cannot be negative")
        if not 0 <= self.days <= 6:
            raise ValueError("days must be within 0..6")
        if self.weeks * 7 + self.days != self.total_days:
            raise ValueError("weeks * 7 + days must equal total_days")

    @classmethod
    def from_total_days(cls, total_days: int) -> "AgeInWeeks":
        return cls(weeks=total_days // 7, days=total_days % 7, total_days=total_days)

    def __str__(self) -> str:
        return f"{self.weeks}w{self.days}d"
