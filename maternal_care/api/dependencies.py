"""
FastAPI dependencies.

Thin accessors over the dependency container so routes never build their
own collaborators and tests can swap the container.
"""

import logging

from fastapi import Depends

from maternal_care.core.container import DependencyContainer, get_container
from maternal_care.domains.maternal_health.application.use_cases import (
    CalculatePregnancyUseCase,
    DismissReminderUseCase,
    GetReminderHistoryUseCase,
    GetReminderStatsUseCase,
    GetUpcomingRemindersUseCase,
    SendTestReminderUseCase,
)
from maternal_care.domains.maternal_health.infrastructure.scheduler import (
    ReminderJobs,
    ReminderScheduler,
    get_reminder_scheduler,
)

logger = logging.getLogger(__name__)


def get_di_container() -> DependencyContainer:
    """Get Dependency Injection Container singleton."""
    return get_container()


def get_calculate_pregnancy_use_case(
    container: DependencyContainer = Depends(get_di_container),  # noqa: B008
) -> CalculatePregnancyUseCase:
    return container.create_calculate_pregnancy_use_case()


def get_upcoming_reminders_use_case(
    container: DependencyContainer = Depends(get_di_container),  # noqa: B008
) -> GetUpcomingRemindersUseCase:
    return container.create_get_upcoming_reminders_use_case()


def get_reminder_history_use_case(
    container: DependencyContainer = Depends(get_di_container),  # noqa: B008
) -> GetReminderHistoryUseCase:
    return container.create_get_reminder_history_use_case()


def get_reminder_stats_use_case(
    container: DependencyContainer = Depends(get_di_container),  # noqa: B008
) -> GetReminderStatsUseCase:
    return container.create_get_reminder_stats_use_case()


def get_send_test_reminder_use_case(
    container: DependencyContainer = Depends(get_di_container),  # noqa: B008
) -> SendTestReminderUseCase:
    return container.create_send_test_reminder_use_case()


def get_dismiss_reminder_use_case(
    container: DependencyContainer = Depends(get_di_container),  # noqa: B008
) -> DismissReminderUseCase:
    return container.create_dismiss_reminder_use_case()


def get_reminder_jobs(
    container: DependencyContainer = Depends(get_di_container),  # noqa: B008
) -> ReminderJobs:
    return container.create_reminder_jobs()


def get_scheduler() -> ReminderScheduler | None:
    """Running scheduler, or None when it was never started."""
    try:
        return get_reminder_scheduler()
    except RuntimeError:
        return None
