"""
Reminder scheduler admin API.

API Prefix: /api/v1/admin/reminders
"""

import logging

from fastapi import APIRouter, Depends

from maternal_care.api.dependencies import get_reminder_jobs, get_scheduler
from maternal_care.api.schemas import CadenceRunResponse, SchedulerJobResponse, SchedulerJobsResponse
from maternal_care.domains.maternal_health.infrastructure.scheduler import (
    Cadence,
    ReminderJobs,
    ReminderScheduler,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/reminders", tags=["Reminder Admin"])


@router.post("/run/{cadence}", response_model=CadenceRunResponse)
async def run_cadence(
    cadence: Cadence,
    jobs: ReminderJobs = Depends(get_reminder_jobs),
):
    """Run one tick of a cadence immediately."""
    logger.info(f"Manual run of {cadence.value} requested")
    result = await jobs.run(cadence)
    return CadenceRunResponse(cadence=cadence.value, result=result)


@router.get("/jobs", response_model=SchedulerJobsResponse)
async def list_jobs(scheduler: ReminderScheduler | None = Depends(get_scheduler)):
    """Scheduled jobs and their next run time."""
    if scheduler is None:
        return SchedulerJobsResponse(running=False, jobs=[])
    return SchedulerJobsResponse(
        running=scheduler.is_running,
        jobs=[SchedulerJobResponse(**job) for job in scheduler.get_jobs_info()],
    )
