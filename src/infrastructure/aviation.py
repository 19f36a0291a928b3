"""
AviationStack flight lookup.

One GET per lookup against ``/v1/flights``; no caching and no retries,
callers decide what to do with a ``FlightLookupError``.  The shared
``httpx.AsyncClient`` is owned by the application lifespan.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

import httpx
from pydantic import BaseModel, ValidationError

from src.domain.flight_facts import AirportSnapshot, FlightSnapshot

logger = logging.getLogger(__name__)


class FlightLookupError(Exception):
    """The flight data provider failed or returned an unusable payload."""


# ── Payload models ────────────────────────────────────────────────────


class AviationStackAirport(BaseModel):
    airport: Optional[str] = None
    timezone: Optional[str] = None
    iata: Optional[str] = None
    icao: Optional[str] = None
    terminal: Optional[str] = None
    gate: Optional[str] = None
    delay: Optional[int] = None
    scheduled: Optional[datetime] = None
    estimated: Optional[datetime] = None
    actual: Optional[datetime] = None

    model_config = {"extra": "ignore"}

    def to_snapshot(self) -> AirportSnapshot:
        return AirportSnapshot(
            iata=self.iata or "",
            scheduled=self.scheduled,
            actual=self.actual,
            delay_minutes=self.delay,
        )


class AviationStackAirline(BaseModel):
    name: Optional[str] = None
    iata: Optional[str] = None
    icao: Optional[str] = None

    model_config = {"extra": "ignore"}


class AviationStackFlight(BaseModel):
    number: Optional[str] = None
    iata: Optional[str] = None
    icao: Optional[str] = None

    model_config = {"extra": "ignore"}


class FlightRecord(BaseModel):
    flight_date: str
    flight_status: str
    departure: AviationStackAirport
    arrival: AviationStackAirport
    airline: AviationStackAirline = AviationStackAirline()
    flight: AviationStackFlight = AviationStackFlight()

    model_config = {"extra": "ignore"}

    def to_snapshot(self) -> FlightSnapshot:
        return FlightSnapshot(
            flight_iata=self.flight.iata or "",
            flight_date=self.flight_date,
            status=self.flight_status,
            departure=self.departure.to_snapshot(),
            arrival=self.arrival.to_snapshot(),
            airline_iata=self.airline.iata,
        )


# ── Client ────────────────────────────────────────────────────────────


class AviationStackClient:
    def __init__(
        self,
        http: httpx.AsyncClient,
        base_url: str,
        access_key: str,
        status_filter: str = "landed,cancelled,incident",
    ):
        self.http = http
        self.base_url = base_url
        self.access_key = access_key
        self.status_filter = status_filter

    async def fetch_flight(
        self, flight_iata: str, flight_date: str
    ) -> Optional[FlightRecord]:
        """Return the first matching flight, or None if the provider has none."""
        params = {
            "access_key": self.access_key,
            "flight_iata": flight_iata,
            "flight_date": flight_date,
            "flight_status": self.status_filter,
        }
        try:
            resp = await self.http.get(self.base_url, params=params)
        except httpx.HTTPError as exc:
            logger.error("AviationStack request failed for %s: %s", flight_iata, exc)
            raise FlightLookupError(f"AviationStack request failed: {exc}") from exc

        if not resp.is_success:
            raise FlightLookupError(f"AviationStack API error: {resp.status_code}")

        try:
            payload = resp.json()
        except ValueError as exc:
            raise FlightLookupError("AviationStack returned invalid JSON") from exc
        if not isinstance(payload, dict):
            raise FlightLookupError(
                f"Unexpected AviationStack payload: {type(payload).__name__}"
            )

        error = payload.get("error")
        if error:
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise FlightLookupError(message or "AviationStack API error")

        data = payload.get("data") or []
        if not isinstance(data, list):
            raise FlightLookupError("AviationStack 'data' is not a list")
        if not data:
            logger.info("No flight found for %s on %s", flight_iata, flight_date)
            return None

        try:
            return FlightRecord.model_validate(data[0])
        except ValidationError as exc:
            raise FlightLookupError(
                f"Malformed flight record for {flight_iata}"
            ) from exc
