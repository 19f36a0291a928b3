"""
Eligibility endpoints
=====================

POST /api/v1/eligibility/check    -- decide compensation for known claim facts
POST /api/v1/eligibility/validate -- list structural problems with a claim
"""

from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Request

from src.api.middleware import limiter
from src.api.schemas import (
    ClaimRequest,
    ClaimValidationResponse,
    CompensationResponse,
    ErrorResponse,
)
from src.config import settings
from src.domain.eligibility import check_eligibility, validate_claim
from src.domain.errors import InvalidInput

router = APIRouter(prefix="/eligibility", tags=["eligibility"])


@router.post(
    "/check",
    response_model=CompensationResponse,
    summary="Check compensation eligibility",
    responses={422: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def check(request: Request, body: ClaimRequest):
    distance = body.resolved_distance()
    if distance is None:
        raise HTTPException(
            status_code=422,
            detail="Provide distance_km or both departure and arrival coordinates",
        )
    if not distance > 0:
        raise HTTPException(status_code=422, detail="distance_km must be positive")

    try:
        result = check_eligibility(
            body.route.to_domain(), body.disruption.to_domain(), distance
        )
    except InvalidInput as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    return CompensationResponse(**asdict(result), distance_km=distance)


@router.post(
    "/validate",
    response_model=ClaimValidationResponse,
    summary="Validate claim facts",
    description=(
        "Reports every missing or malformed field without evaluating "
        "eligibility.  Always answers 200; inspect ``is_valid``."
    ),
)
@limiter.limit(settings.rate_limit)
async def validate(request: Request, body: ClaimRequest):
    validation = validate_claim(
        body.route.to_domain(), body.disruption.to_domain(), body.resolved_distance()
    )
    return ClaimValidationResponse.model_validate(validation)
