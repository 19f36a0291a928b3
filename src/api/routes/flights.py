"""
Flight lookup endpoint
======================

GET /api/v1/flights/{flight_iata}/{flight_date}/eligibility
    -- fetch the flight from AviationStack, derive the claim facts and
       run the eligibility check in one go
"""

import logging
from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Path, Request

from src.api.dependencies import get_aviation_client
from src.api.middleware import limiter
from src.api.schemas import ErrorResponse, FlightEligibilityResponse
from src.config import settings
from src.domain.eligibility import check_eligibility
from src.domain.entities import Delay
from src.domain.enums import DisruptionType
from src.domain.errors import EligibilityError
from src.domain.flight_facts import resolve_claim_facts
from src.infrastructure.aviation import AviationStackClient, FlightLookupError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/flights", tags=["flights"])

FLIGHT_IATA_PATTERN = r"^[A-Z0-9]{2}\d{1,4}$"
CLAIM_WINDOW_YEARS = 6


def _within_claim_window(flight_date: date, today: date) -> bool:
    try:
        earliest = today.replace(year=today.year - CLAIM_WINDOW_YEARS)
    except ValueError:  # 29 February
        earliest = today.replace(year=today.year - CLAIM_WINDOW_YEARS, day=28)
    return earliest <= flight_date <= today


@router.get(
    "/{flight_iata}/{flight_date}/eligibility",
    response_model=FlightEligibilityResponse,
    summary="Look up a flight and check its eligibility",
    responses={
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
@limiter.limit(settings.rate_limit)
async def flight_eligibility(
    request: Request,
    flight_date: date,
    flight_iata: str = Path(..., pattern=FLIGHT_IATA_PATTERN),
    client: AviationStackClient = Depends(get_aviation_client),
):
    if not _within_claim_window(flight_date, date.today()):
        raise HTTPException(
            status_code=422,
            detail="Flight date must be within the last 6 years and not in the future",
        )

    try:
        record = await client.fetch_flight(flight_iata, flight_date.isoformat())
    except FlightLookupError as exc:
        raise HTTPException(status_code=502, detail=str(exc))
    if record is None:
        raise HTTPException(status_code=404, detail="Flight not found")

    try:
        facts = resolve_claim_facts(record.to_snapshot())
        result = check_eligibility(facts.route, facts.disruption, facts.distance_km)
    except EligibilityError as exc:
        logger.info("Cannot evaluate %s on %s: %s", flight_iata, flight_date, exc)
        raise HTTPException(status_code=422, detail=str(exc))

    disruption_type = (
        DisruptionType.DELAY
        if isinstance(facts.disruption, Delay)
        else DisruptionType.CANCELLATION
    )
    return FlightEligibilityResponse(
        **asdict(result),
        distance_km=round(facts.distance_km, 1),
        flight_iata=flight_iata,
        flight_date=flight_date.isoformat(),
        departure_iata=record.departure.iata or "",
        arrival_iata=record.arrival.iata or "",
        disruption_type=disruption_type.value,
    )
