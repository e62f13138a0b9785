# ============================================================================
# SCOPE: APPLICATION LAYER (Maternal Health)
# Description: Use case computing the pregnancy state for a raw LMP input.
# ============================================================================
"""Calculate Pregnancy Use Case."""

from collections.abc import Callable
from datetime import date

from ...domain.services.gestational_calculator import calculate, validate_lmp
from ...domain.value_objects.pregnancy_state import PregnancyState


class CalculatePregnancyUseCase:
    """Validate user supplied dates and derive the pregnancy state."""

    def __init__(self, today: Callable[[], date] | None = None):
        self._today = today or date.today

    def execute(self, lmp: date | str | None, as_of: date | None = None) -> PregnancyState:
        """Calculate the state.

        Raises:
            ValidationException: If the LMP is missing, malformed or in the future.
        """
        as_of = as_of or self._today()
        return calculate(validate_lmp(lmp, as_of), as_of)
