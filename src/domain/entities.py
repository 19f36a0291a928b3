"""
Domain value objects.

Patterns used
-------------
- ``DisruptionDetails`` is the loose shape callers hand in (every
  type-specific field optional).  ``variant()`` turns it into one member of
  the ``Disruption`` tagged union, so each branch of the engine only ever
  sees the fields its disruption type guarantees.
- Everything here is frozen: a value is built fresh per evaluation and
  never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from .enums import DisruptionReason, DisruptionType, Regulation
from .errors import InvalidDisruptionData


# ── Route ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Route:
    departure_country: Optional[str]
    arrival_country: Optional[str]
    airline_country: Optional[str]

    def __post_init__(self) -> None:
        for name in ("departure_country", "arrival_country", "airline_country"):
            value = getattr(self, name)
            if isinstance(value, str):
                object.__setattr__(self, name, value.strip().upper())

    def missing_fields(self) -> list[str]:
        return [
            name
            for name in ("departure_country", "arrival_country", "airline_country")
            if not getattr(self, name)
        ]


# ── Disruption variants ───────────────────────────────────────────────


@dataclass(frozen=True)
class Delay:
    hours: float
    reason: Optional[DisruptionReason] = None


@dataclass(frozen=True)
class Cancellation:
    # None when the passenger does not know when they were told
    notice_hours: Optional[float] = None
    reason: Optional[DisruptionReason] = None


@dataclass(frozen=True)
class DeniedBoarding:
    reason: Optional[DisruptionReason] = None


@dataclass(frozen=True)
class UnrecognizedDisruption:
    type: str
    reason: Optional[DisruptionReason] = None


Disruption = Union[Delay, Cancellation, DeniedBoarding, UnrecognizedDisruption]


def _coerce_reason(value) -> Optional[DisruptionReason]:
    if value is None or value == "":
        return None
    try:
        return DisruptionReason(value)
    except ValueError:
        raise InvalidDisruptionData(f"Unknown disruption reason: {value!r}") from None


@dataclass(frozen=True)
class DisruptionDetails:
    """Disruption facts as reported, before the type is checked."""

    type: Optional[str]
    delay_duration: Optional[float] = None  # hours
    notice_given: Optional[float] = None  # hours before scheduled departure
    reason: Optional[DisruptionReason] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "reason", _coerce_reason(self.reason))

    def variant(self) -> Disruption:
        """Return the tagged-union form, or raise if a required field is absent."""
        if not self.type:
            raise InvalidDisruptionData("Disruption type is missing")
        if self.type == DisruptionType.DELAY:
            if self.delay_duration is None:
                raise InvalidDisruptionData(
                    "Delay disruption requires delay_duration"
                )
            return Delay(hours=self.delay_duration, reason=self.reason)
        if self.type == DisruptionType.CANCELLATION:
            return Cancellation(notice_hours=self.notice_given, reason=self.reason)
        if self.type == DisruptionType.DENIED_BOARDING:
            return DeniedBoarding(reason=self.reason)
        return UnrecognizedDisruption(type=str(self.type), reason=self.reason)


def as_disruption(value: Union[DisruptionDetails, Disruption]) -> Disruption:
    if isinstance(value, DisruptionDetails):
        return value.variant()
    return value


# ── Results ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class DutyOfCare:
    meals: bool = False
    refreshments: bool = False
    hotel: bool = False
    transport: bool = False
    communication: bool = False


@dataclass(frozen=True)
class CompensationResult:
    is_eligible: bool
    amount: int
    reason: str
    regulation: Regulation
    currency: str
    requires_manual_review: bool = False
    duty_of_care: DutyOfCare = field(default_factory=DutyOfCare)


@dataclass(frozen=True)
class ClaimValidation:
    is_valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ClaimFacts:
    """Everything ``check_eligibility`` needs, resolved from a flight record."""

    route: Route
    disruption: Disruption
    distance_km: float
