"""
Subject reminders API.

Provides endpoints for:
- Upcoming reminders and reminder history
- Per-status statistics
- Test reminders and dismissal

API Prefix: /api/v1/reminders
"""

import logging

from fastapi import APIRouter, Depends, Query

from maternal_care.api.dependencies import (
    get_dismiss_reminder_use_case,
    get_reminder_history_use_case,
    get_reminder_stats_use_case,
    get_send_test_reminder_use_case,
    get_upcoming_reminders_use_case,
)
from maternal_care.api.schemas import (
    DismissReminderResponse,
    ReminderListResponse,
    ReminderResponse,
    ReminderStatsResponse,
    SendTestReminderRequest,
    SendTestReminderResponse,
)
from maternal_care.domains.maternal_health.application.use_cases import (
    DismissReminderUseCase,
    GetReminderHistoryUseCase,
    GetReminderStatsUseCase,
    GetUpcomingRemindersUseCase,
    SendTestReminderUseCase,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reminders", tags=["Reminders"])


# ============================================================================
# SUBJECT QUERIES
# ============================================================================


@router.get("/subjects/{subject_id}/upcoming", response_model=ReminderListResponse)
async def get_upcoming_reminders(
    subject_id: int,
    limit: int = Query(10, ge=1, le=100),
    use_case: GetUpcomingRemindersUseCase = Depends(get_upcoming_reminders_use_case),
):
    """Pending reminders of a subject, soonest first."""
    reminders = await use_case.execute(subject_id, limit=limit)
    return ReminderListResponse(
        reminders=[ReminderResponse.from_entity(r) for r in reminders],
        total=len(reminders),
    )


@router.get("/subjects/{subject_id}/history", response_model=ReminderListResponse)
async def get_reminder_history(
    subject_id: int,
    limit: int = Query(20, ge=1, le=200),
    use_case: GetReminderHistoryUseCase = Depends(get_reminder_history_use_case),
):
    """All reminders of a subject, newest first."""
    reminders = await use_case.execute(subject_id, limit=limit)
    return ReminderListResponse(
        reminders=[ReminderResponse.from_entity(r) for r in reminders],
        total=len(reminders),
    )


@router.get("/subjects/{subject_id}/stats", response_model=ReminderStatsResponse)
async def get_reminder_stats(
    subject_id: int,
    use_case: GetReminderStatsUseCase = Depends(get_reminder_stats_use_case),
):
    stats = await use_case.execute(subject_id)
    return ReminderStatsResponse.from_stats(stats)


# ============================================================================
# ACTIONS
# ============================================================================


@router.post("/subjects/{subject_id}/test", response_model=SendTestReminderResponse)
async def send_test_reminder(
    subject_id: int,
    request: SendTestReminderRequest,
    use_case: SendTestReminderUseCase = Depends(get_send_test_reminder_use_case),
):
    """Send a sample reminder through the configured channels."""
    sent = await use_case.execute(subject_id, request.type)
    return SendTestReminderResponse(subject_id=subject_id, sent=sent)


@router.post("/{reminder_id}/dismiss", response_model=DismissReminderResponse)
async def dismiss_reminder(
    reminder_id: int,
    use_case: DismissReminderUseCase = Depends(get_dismiss_reminder_use_case),
):
    """Withdraw a pending reminder."""
    reminder = await use_case.execute(reminder_id)
    return DismissReminderResponse(id=reminder.id, status=reminder.status.value)
