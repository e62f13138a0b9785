"""
Pregnancy calculation API.

API Prefix: /api/v1/pregnancy
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, Query

from maternal_care.api.dependencies import get_calculate_pregnancy_use_case
from maternal_care.api.schemas import PregnancyCalculationResponse
from maternal_care.domains.maternal_health.application.use_cases import CalculatePregnancyUseCase

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pregnancy", tags=["Pregnancy"])


@router.get("/calculate", response_model=PregnancyCalculationResponse)
async def calculate_pregnancy(
    lmp: str = Query(..., description="Last menstrual period, YYYY-MM-DD"),
    as_of: date | None = Query(None, description="Reference date, defaults to today"),
    use_case: CalculatePregnancyUseCase = Depends(get_calculate_pregnancy_use_case),
):
    """Gestational age, trimester and expected delivery date for an LMP."""
    state = use_case.execute(lmp, as_of)
    return PregnancyCalculationResponse.from_state(state)
