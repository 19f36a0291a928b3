"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from src.domain.distance import Coordinates
from src.domain.entities import DisruptionDetails, Route
from src.domain.enums import DisruptionReason, Regulation


# ── Requests ──────────────────────────────────────────────────────────


class RouteIn(BaseModel):
    departure_country: Optional[str] = Field(None, max_length=3)
    arrival_country: Optional[str] = Field(None, max_length=3)
    airline_country: Optional[str] = Field(None, max_length=3)

    model_config = {"str_strip_whitespace": True}

    def to_domain(self) -> Route:
        return Route(
            departure_country=self.departure_country,
            arrival_country=self.arrival_country,
            airline_country=self.airline_country,
        )


class DisruptionIn(BaseModel):
    type: Optional[str] = Field(
        None, description="delay | cancellation | denied_boarding"
    )
    delay_duration: Optional[float] = Field(None, description="Hours late.")
    notice_given: Optional[float] = Field(
        None, description="Hours between notification and scheduled departure."
    )
    reason: Optional[DisruptionReason] = None

    def to_domain(self) -> DisruptionDetails:
        return DisruptionDetails(
            type=self.type,
            delay_duration=self.delay_duration,
            notice_given=self.notice_given,
            reason=self.reason,
        )


class CoordinatesIn(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)

    def to_domain(self) -> Coordinates:
        return Coordinates(self.lat, self.lon)


class ClaimRequest(BaseModel):
    route: RouteIn = RouteIn()
    disruption: DisruptionIn = DisruptionIn()
    distance_km: Optional[float] = Field(
        None,
        description="Great-circle distance; computed from the airport "
        "coordinates when omitted.",
    )
    departure: Optional[CoordinatesIn] = None
    arrival: Optional[CoordinatesIn] = None

    def resolved_distance(self) -> Optional[float]:
        if self.distance_km is not None:
            return self.distance_km
        if self.departure is not None and self.arrival is not None:
            return self.departure.to_domain().distance_to(self.arrival.to_domain())
        return None


# ── Responses ─────────────────────────────────────────────────────────


class DutyOfCareResponse(BaseModel):
    meals: bool
    refreshments: bool
    hotel: bool
    transport: bool
    communication: bool


class CompensationResponse(BaseModel):
    is_eligible: bool
    amount: int
    currency: str
    reason: str
    regulation: Regulation
    requires_manual_review: bool
    duty_of_care: DutyOfCareResponse
    distance_km: float


class FlightEligibilityResponse(CompensationResponse):
    flight_iata: str
    flight_date: str
    departure_iata: str
    arrival_iata: str
    disruption_type: str


class ClaimValidationResponse(BaseModel):
    is_valid: bool
    errors: list[str] = []

    model_config = {"from_attributes": True}


class DistanceResponse(BaseModel):
    distance_km: float


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str
