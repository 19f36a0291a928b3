"""
Compensation Eligibility Engine
===============================

Decision
--------
1. The route picks the regulation (UK261 over EU261); an uncovered route is
   a normal negative result.
2. An extraordinary-circumstance cause defeats the claim for every
   disruption type.
3. Per type:

   * **delay**            -- eligible from 3 hours late
   * **cancellation**     -- eligible unless notice >= 14 days, or notice
     >= 7 days on a flight of <= 1 500 km
   * **denied boarding**  -- always eligible (involuntary is assumed)
   * anything else        -- not eligible

4. Amount is a flat sum per distance tier::

       distance <= 1 500 km   SHORT    250 EUR / 220 GBP
       distance <= 3 500 km   MEDIUM   400 EUR / 350 GBP
       otherwise              LONG     600 EUR / 520 GBP

Every function here is pure: no I/O and no module state is written, so the
engine can be called concurrently without coordination.

Complexity: O(1) per evaluation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Union

from .distance import calculate_distance
from .entities import (
    Cancellation,
    ClaimValidation,
    CompensationResult,
    Delay,
    DeniedBoarding,
    Disruption,
    DisruptionDetails,
    DutyOfCare,
    Route,
    as_disruption,
)
from .enums import (
    EXTRAORDINARY_CIRCUMSTANCES,
    DisruptionReason,
    DisruptionType,
    DistanceTier,
    Regulation,
)
from .errors import InvalidInput, InvalidRouteData
from .jurisdiction import is_eu_flight, is_uk_flight

logger = logging.getLogger(__name__)

SHORT_HAUL_MAX_KM = 1_500
MEDIUM_HAUL_MAX_KM = 3_500

MIN_DELAY_HOURS = 3
FULL_NOTICE_HOURS = 14 * 24
PARTIAL_NOTICE_HOURS = 7 * 24

HOTEL_DELAY_HOURS = 12

NOT_COVERED_REASON = "Flight not covered by EU or UK regulations"
EXTRAORDINARY_REASON = "Disruption caused by extraordinary circumstances"
NOT_QUALIFYING_REASON = "Disruption does not qualify for compensation"


# ── Compensation schedules ────────────────────────────────────────────


@dataclass(frozen=True)
class CompensationSchedule:
    currency: str
    amounts: Mapping[DistanceTier, int]

    def amount_for(self, distance_km: float) -> int:
        return self.amounts[distance_tier(distance_km)]


SCHEDULES: Mapping[Regulation, CompensationSchedule] = MappingProxyType(
    {
        Regulation.EU261: CompensationSchedule(
            currency="EUR",
            amounts=MappingProxyType(
                {
                    DistanceTier.SHORT: 250,
                    DistanceTier.MEDIUM: 400,
                    DistanceTier.LONG: 600,
                }
            ),
        ),
        Regulation.UK261: CompensationSchedule(
            currency="GBP",
            amounts=MappingProxyType(
                {
                    DistanceTier.SHORT: 220,
                    DistanceTier.MEDIUM: 350,
                    DistanceTier.LONG: 520,
                }
            ),
        ),
    }
)

# Minimum delay (hours) before care is owed, per tier
DUTY_OF_CARE_DELAY_HOURS: Mapping[DistanceTier, int] = MappingProxyType(
    {
        DistanceTier.SHORT: 2,
        DistanceTier.MEDIUM: 3,
        DistanceTier.LONG: 4,
    }
)


def distance_tier(distance_km: float) -> DistanceTier:
    if distance_km <= SHORT_HAUL_MAX_KM:
        return DistanceTier.SHORT
    if distance_km <= MEDIUM_HAUL_MAX_KM:
        return DistanceTier.MEDIUM
    return DistanceTier.LONG


def compensation_amount(distance_km: float, regulation: Regulation) -> int:
    return SCHEDULES[regulation].amount_for(distance_km)


# ── Rules ─────────────────────────────────────────────────────────────


def is_extraordinary_circumstance(reason: Optional[DisruptionReason]) -> bool:
    return reason is not None and reason in EXTRAORDINARY_CIRCUMSTANCES


def _hours(value: float) -> str:
    # Plain notation and never rounded: 2.9999 must not print as "3"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _refusal(
    disruption: Disruption, distance_km: float
) -> Optional[tuple[str, bool]]:
    """Return ``(reason, requires_manual_review)`` if not eligible, else None."""
    if is_extraordinary_circumstance(disruption.reason):
        return EXTRAORDINARY_REASON, True

    if isinstance(disruption, Delay):
        if disruption.hours >= MIN_DELAY_HOURS:
            return None
        return (
            f"Delay of {_hours(disruption.hours)} hours is less than "
            f"the required {MIN_DELAY_HOURS} hours",
            True,
        )

    if isinstance(disruption, Cancellation):
        notice = disruption.notice_hours
        if notice is None:
            return None
        if notice >= FULL_NOTICE_HOURS:
            return "Flight cancelled with at least 14 days notice", True
        if notice >= PARTIAL_NOTICE_HOURS and distance_km <= SHORT_HAUL_MAX_KM:
            return (
                "Short-haul flight cancelled with between 7 and 14 days notice",
                True,
            )
        return None

    if isinstance(disruption, DeniedBoarding):
        return None

    return NOT_QUALIFYING_REASON, False


def is_eligible_for_compensation(
    disruption: Union[DisruptionDetails, Disruption], distance_km: float
) -> bool:
    return _refusal(as_disruption(disruption), distance_km) is None


def duty_of_care(disruption: Disruption, distance_km: float) -> DutyOfCare:
    """Care owed while waiting; only delays trigger it."""
    if not isinstance(disruption, Delay):
        return DutyOfCare()
    if disruption.hours < DUTY_OF_CARE_DELAY_HOURS[distance_tier(distance_km)]:
        return DutyOfCare()
    overnight = disruption.hours >= HOTEL_DELAY_HOURS
    return DutyOfCare(
        meals=True,
        refreshments=True,
        hotel=overnight,
        transport=overnight,
        communication=True,
    )


def _eligible_reason(disruption: Disruption) -> str:
    if isinstance(disruption, Delay):
        return f"Flight delayed by {_hours(disruption.hours)} hours"
    if isinstance(disruption, Cancellation):
        return "Flight cancelled with insufficient notice"
    return "Involuntarily denied boarding"


# ── Public operations ─────────────────────────────────────────────────


def check_eligibility(
    route: Route,
    disruption: Union[DisruptionDetails, Disruption],
    distance_km: float,
) -> CompensationResult:
    """Decide whether a disruption is compensable and for how much.

    Raises ``InvalidRouteData`` / ``InvalidDisruptionData`` when the facts
    are structurally incomplete; call ``validate_claim`` first to collect
    those problems without raising.
    """
    try:
        missing = route.missing_fields()
        if missing:
            raise InvalidRouteData(f"Route is missing {', '.join(missing)}")
        variant = as_disruption(disruption)
    except InvalidInput as exc:
        logger.warning("Rejected claim facts: %s", exc)
        raise

    is_eu = is_eu_flight(route)
    is_uk = is_uk_flight(route)
    regulation = Regulation.UK261 if is_uk else Regulation.EU261
    currency = SCHEDULES[regulation].currency

    if not is_eu and not is_uk:
        return CompensationResult(
            is_eligible=False,
            amount=0,
            reason=NOT_COVERED_REASON,
            regulation=regulation,
            currency=currency,
            requires_manual_review=True,
        )

    care = duty_of_care(variant, distance_km)
    refusal = _refusal(variant, distance_km)
    if refusal is not None:
        reason, review = refusal
        logger.debug("Claim refused under %s: %s", regulation.value, reason)
        return CompensationResult(
            is_eligible=False,
            amount=0,
            reason=reason,
            regulation=regulation,
            currency=currency,
            requires_manual_review=review,
            duty_of_care=care,
        )

    return CompensationResult(
        is_eligible=True,
        amount=compensation_amount(distance_km, regulation),
        reason=_eligible_reason(variant),
        regulation=regulation,
        currency=currency,
        duty_of_care=care,
    )


def validate_claim(
    route: Optional[Route],
    disruption: Optional[DisruptionDetails],
    distance_km: Optional[float],
) -> ClaimValidation:
    """Collect structural problems with a claim; never raises."""
    errors: list[str] = []

    if route is None or route.missing_fields():
        errors.append("Missing route information")

    if disruption is None or not disruption.type:
        errors.append("Missing disruption type")
    elif disruption.type == DisruptionType.DELAY:
        if disruption.delay_duration is None:
            errors.append("Missing delay duration")
        elif disruption.delay_duration < 0:
            errors.append("Invalid delay duration")
    elif disruption.type == DisruptionType.CANCELLATION:
        if disruption.notice_given is None:
            errors.append("Missing cancellation notice period")
        elif disruption.notice_given < 0:
            errors.append("Invalid cancellation notice period")

    if distance_km is None or not distance_km > 0:
        errors.append("Invalid flight distance")

    return ClaimValidation(is_valid=not errors, errors=errors)


# ── Engine facade ─────────────────────────────────────────────────────


class EligibilityEngine:
    """High-level API used by the flight lookup flow and the API layer."""

    is_eu_flight = staticmethod(is_eu_flight)
    is_uk_flight = staticmethod(is_uk_flight)
    calculate_distance = staticmethod(calculate_distance)
    check_eligibility = staticmethod(check_eligibility)
    validate_claim = staticmethod(validate_claim)
