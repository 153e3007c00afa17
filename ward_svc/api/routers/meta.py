"""
Meta router - clinical rule configuration.

Lets a client show the same limits the service enforces (accepted
temperature range, fever threshold, window length, bed capacity) without
hardcoding them.

No data access; values come straight from settings.
"""
from fastapi import APIRouter
from pydantic import BaseModel

from core.config import settings

router = APIRouter(
    prefix="/api/v1/meta",
    tags=["Metadata"],
)


class ClinicalRulesResponse(BaseModel):
    total_beds: int
    fever_threshold: float
    fever_free_days: int
    min_temperature: float
    max_temperature: float


@router.get(
    "/clinical-rules",
    response_model=ClinicalRulesResponse,
    summary="Clinical rule configuration",
)
async def clinical_rules() -> ClinicalRulesResponse:
    return ClinicalRulesResponse(
        total_beds=settings.ward_svc_total_beds,
        fever_threshold=settings.ward_svc_fever_threshold,
        fever_free_days=settings.ward_svc_fever_free_days,
        min_temperature=settings.ward_svc_min_temperature,
        max_temperature=settings.ward_svc_max_temperature,
    )
