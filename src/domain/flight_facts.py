"""
Turn a looked-up flight into the facts the eligibility engine needs.

Airports
--------
Flight feeds identify airports by IATA code only.  Country and position
come from the ``airportsdata`` dataset (ISO 3166 alpha-2 country, decimal
degree coordinates); ``pycountry`` maps the country to the alpha-3 codes
the jurisdiction sets use.

Airline
-------
The operating carrier's home country is keyed on its IATA designator.  An
unknown carrier only matters for inbound flights: when the departure is
already EU or UK the carrier cannot change the outcome.

Disruption
----------
* ``cancelled``                       -> cancellation, notice unknown
* ``landed`` / ``active`` / ``incident`` arriving late -> delay measured at
  the arrival gate (actual minus scheduled arrival, else the feed's delay)
* anything else, or on time           -> no disruption
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Optional

import airportsdata
import pycountry

from .distance import Coordinates
from .entities import Cancellation, ClaimFacts, Delay, Disruption, Route
from .errors import FlightDataIncomplete
from .jurisdiction import EU_COUNTRIES, UK_COUNTRIES

# ISO 3166 user-assigned code for "unknown"
UNKNOWN_COUNTRY = "ZZZ"

# IATA airline designator -> ISO 3166 alpha-2 home country
CARRIER_COUNTRIES: dict[str, str] = {
    # United Kingdom
    "BA": "GB", "VS": "GB", "BY": "GB", "ZB": "GB", "LS": "GB", "U2": "GB",
    "BE": "GB", "LM": "GB",
    # EU
    "AF": "FR", "UU": "FR", "TO": "FR", "SS": "FR",
    "LH": "DE", "EW": "DE", "DE": "DE", "X3": "DE",
    "KL": "NL", "HV": "NL",
    "SN": "BE",
    "OS": "AT",
    "IB": "ES", "VY": "ES", "UX": "ES", "I2": "ES", "V7": "ES",
    "TP": "PT",
    "AZ": "IT",
    "EI": "IE", "FR": "IE",
    "SK": "SE",
    "AY": "FI",
    "LO": "PL",
    "OK": "CZ",
    "A3": "GR",
    "RO": "RO", "W6": "HU",
    "BT": "LV", "CY": "CY", "KM": "MT", "OU": "HR", "JU": "RS",
    "LG": "LU",
    # Rest of Europe
    "LX": "CH", "DY": "NO", "D8": "NO", "FI": "IS", "TK": "TR", "PC": "TR",
    # Long haul
    "AA": "US", "DL": "US", "UA": "US", "B6": "US", "AS": "US",
    "AC": "CA", "WS": "CA",
    "EK": "AE", "EY": "AE", "QR": "QA", "SV": "SA",
    "SQ": "SG", "CX": "HK", "NH": "JP", "JL": "JP", "CA": "CN",
    "AI": "IN", "QF": "AU", "ET": "ET", "MS": "EG", "SA": "ZA",
    "LA": "CL", "AV": "CO",
}

DISRUPTED_ARRIVAL_STATUSES = frozenset({"landed", "active", "incident"})


# ── Snapshot of a looked-up flight ────────────────────────────────────


@dataclass(frozen=True)
class AirportSnapshot:
    iata: str
    scheduled: Optional[datetime] = None
    actual: Optional[datetime] = None
    delay_minutes: Optional[int] = None


@dataclass(frozen=True)
class FlightSnapshot:
    flight_iata: str
    flight_date: str
    status: str
    departure: AirportSnapshot
    arrival: AirportSnapshot
    airline_iata: Optional[str] = None


@dataclass(frozen=True)
class Airport:
    iata: str
    name: str
    country: str  # alpha-3
    location: Coordinates


# ── Reference data ────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def _airports() -> dict:
    return airportsdata.load("IATA")


def country_alpha3(alpha2: Optional[str]) -> Optional[str]:
    if not alpha2:
        return None
    country = pycountry.countries.get(alpha_2=alpha2.strip().upper())
    return country.alpha_3 if country is not None else None


def airport_info(iata: Optional[str]) -> Optional[Airport]:
    if not iata:
        return None
    code = iata.strip().upper()
    info = _airports().get(code)
    if info is None:
        return None
    country = country_alpha3(info.get("country"))
    if country is None:
        return None
    return Airport(
        iata=code,
        name=info.get("name", ""),
        country=country,
        location=Coordinates(float(info["lat"]), float(info["lon"])),
    )


def carrier_country(carrier_iata: Optional[str]) -> Optional[str]:
    if not carrier_iata:
        return None
    return country_alpha3(CARRIER_COUNTRIES.get(carrier_iata.strip().upper()))


# ── Resolution ────────────────────────────────────────────────────────


def arrival_delay_hours(arrival: AirportSnapshot) -> Optional[float]:
    """Hours late at the arrival gate, or None if the feed does not say."""
    if arrival.scheduled is not None and arrival.actual is not None:
        seconds = (arrival.actual - arrival.scheduled).total_seconds()
        return round(max(0.0, seconds / 3600), 2)
    if arrival.delay_minutes is not None:
        return round(max(0, arrival.delay_minutes) / 60, 2)
    return None


def classify_disruption(snapshot: FlightSnapshot) -> Optional[Disruption]:
    status = (snapshot.status or "").lower()
    if status == "cancelled":
        return Cancellation()
    if status in DISRUPTED_ARRIVAL_STATUSES:
        hours = arrival_delay_hours(snapshot.arrival)
        if hours:
            return Delay(hours=hours)
    return None


def resolve_claim_facts(snapshot: FlightSnapshot) -> ClaimFacts:
    """Derive route, disruption and distance; raise if any cannot be derived."""
    dep = airport_info(snapshot.departure.iata)
    arr = airport_info(snapshot.arrival.iata)
    for label, airport, code in (
        ("departure", dep, snapshot.departure.iata),
        ("arrival", arr, snapshot.arrival.iata),
    ):
        if airport is None:
            raise FlightDataIncomplete(
                f"{snapshot.flight_iata}: unknown {label} airport {code!r}"
            )

    carrier = snapshot.airline_iata or snapshot.flight_iata[:2]
    airline = carrier_country(carrier)
    if airline is None:
        if dep.country not in EU_COUNTRIES | UK_COUNTRIES:
            raise FlightDataIncomplete(
                f"{snapshot.flight_iata}: cannot determine airline_country "
                f"for carrier {carrier!r}"
            )
        airline = UNKNOWN_COUNTRY

    disruption = classify_disruption(snapshot)
    if disruption is None:
        raise FlightDataIncomplete(
            f"{snapshot.flight_iata}: no disruption recorded "
            f"(status={snapshot.status})"
        )

    route = Route(
        departure_country=dep.country,
        arrival_country=arr.country,
        airline_country=airline,
    )
    return ClaimFacts(
        route=route,
        disruption=disruption,
        distance_km=dep.location.distance_to(arr.location),
    )
