"""Gestational Calculator.

Pure date arithmetic turning a last menstrual period into a pregnancy state.
"""

from datetime import date, timedelta

from maternal_care.core.domain.exceptions import ValidationException

from ..value_objects.age import AgeInWeeks
from ..value_objects.pregnancy_state import PregnancyState
from ..value_objects.pregnancy_status import PregnancyStatus

# Naegele's rule expressed as plain day arithmetic
PREGNANCY_DURATION = timedelta(days=280)

FIRST_TRIMESTER_LAST_WEEK = 12
SECOND_TRIMESTER_LAST_WEEK = 28

FUTURE_LMP_REASON = "last menstrual period is after the reference date"


def determine_trimester(weeks: int) -> int:
    """Trimester for a number of completed gestational weeks."""
    if weeks <= FIRST_TRIMESTER_LAST_WEEK:
        return 1
    if weeks <= SECOND_TRIMESTER_LAST_WEEK:
        return 2
    return 3


def expected_delivery_date(lmp: date) -> date:
    return lmp + PREGNANCY_DURATION


def age_since(start: date, as_of: date) -> AgeInWeeks:
    """Completed weeks and remainder days between two dates.

    Raises:
        ValueError: If `start` is after `as_of`.
    """
    total_days = (as_of - start).days
    if total_days < 0:
        raise ValueError(f"{start.isoformat()} is after {as_of.isoformat()}")
    return AgeInWeeks.from_total_days(total_days)


def calculate(
    lmp: date,
    as_of: date | None = None,
    status: PregnancyStatus = PregnancyStatus.PREGNANT,
) -> PregnancyState:
    """Compute the pregnancy state for an LMP as of a reference date.

    Args:
        lmp: First day of the last menstrual period.
        as_of: Reference date, today when omitted.
        status: Pregnancy form status carried into the result.

    Returns:
        The derived state. A future LMP yields a state with `is_valid` False
        and no derived numbers.
    """
    as_of = as_of or date.today()
    if lmp > as_of:
        return PregnancyState.invalid(as_of=as_of, last_menstrual_period=lmp, reason=FUTURE_LMP_REASON, status=status)

    gestational_age = age_since(lmp, as_of)
    return PregnancyState(
        as_of=as_of,
        last_menstrual_period=lmp,
        status=status,
        gestational_age=gestational_age,
        trimester=determine_trimester(gestational_age.weeks),
        expected_delivery_date=expected_delivery_date(lmp),
    )


def validate_lmp(lmp: date | str | None, as_of: date | None = None) -> date:
    """Boundary validation for user supplied LMP values.

    Args:
        lmp: Date or ISO formatted string.
        as_of: Reference date, today when omitted.

    Returns:
        The parsed date.

    Raises:
        ValidationException: If the value is missing, malformed or in the future.
    """
    as_of = as_of or date.today()
    if lmp is None or lmp == "":
        raise ValidationException("Last menstrual period is required", field="lmp")
    if isinstance(lmp, str):
        try:
            lmp = date.fromisoformat(lmp)
        except ValueError as e:
            raise ValidationException(f"Invalid date format: {lmp}", field="lmp") from e
    if lmp > as_of:
        raise ValidationException(
            "Last menstrual period cannot be in the future",
            field="lmp",
            details={"lmp": lmp.isoformat(), "as_of": as_of.isoformat()},
        )
    return lmp
