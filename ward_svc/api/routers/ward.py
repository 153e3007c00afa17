"""
Ward router - bed occupancy and outcome statistics.
"""
from fastapi import APIRouter, Depends

from core.dependencies import get_ward_service
from schemas import BedStatisticsResponse, OutcomeStatisticsResponse
from services import WardService

router = APIRouter(
    prefix="/api/v1/ward",
    tags=["Ward"],
)


@router.get(
    "/beds",
    response_model=BedStatisticsResponse,
    summary="Bed statistics",
)
async def bed_statistics(ward_service: WardService = Depends(get_ward_service)):
    return ward_service.bed_statistics()


@router.get(
    "/outcomes",
    response_model=OutcomeStatisticsResponse,
    summary="Outcome statistics",
    description="Open cases, recoveries, deaths and the success rate over closed cases."
)
async def outcome_statistics(ward_service: WardService = Depends(get_ward_service)):
    return ward_service.outcome_statistics()
