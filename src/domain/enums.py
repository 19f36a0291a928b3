"""Domain enumerations and the fixed cause classifications."""

import enum


class DisruptionType(str, enum.Enum):
    DELAY = "delay"
    CANCELLATION = "cancellation"
    DENIED_BOARDING = "denied_boarding"


class Regulation(str, enum.Enum):
    EU261 = "EU261"
    UK261 = "UK261"


class DistanceTier(str, enum.Enum):
    SHORT = "SHORT"
    MEDIUM = "MEDIUM"
    LONG = "LONG"


class DisruptionReason(str, enum.Enum):
    # Outside the airline's control
    WEATHER = "weather"
    SECURITY = "security"
    POLITICAL = "political"
    STRIKE_EXTERNAL = "strike_external"
    AIR_TRAFFIC_CONTROL = "air_traffic_control"
    MEDICAL = "medical"
    BIRD_STRIKE = "bird_strike"
    VOLCANIC_ASH = "volcanic_ash"
    TERRORISM = "terrorism"
    MILITARY_CONFLICT = "military_conflict"
    NATURAL_DISASTER = "natural_disaster"
    AIRPORT_CLOSURE = "airport_closure"
    CUSTOMS_IMMIGRATION = "customs_immigration"
    AIRPORT_STRIKE = "airport_strike"
    AIRPORT_TECHNICAL = "airport_technical"

    # Airline-attributable
    TECHNICAL_ISSUE = "technical_issue"
    MAINTENANCE = "maintenance"
    STAFF_SHORTAGE = "staff_shortage"
    AIRCRAFT_ROTATION = "aircraft_rotation"
    BAGGAGE_HANDLING = "baggage_handling"
    FUEL_ISSUE = "fuel_issue"
    CATERING_ISSUE = "catering_issue"
    CLEANING_ISSUE = "cleaning_issue"
    AIRLINE_STRIKE = "airline_strike"
    OTHER = "other"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            return _REASON_ALIASES.get(value.strip().lower())
        return None


_REASON_ALIASES = {
    "atc": DisruptionReason.AIR_TRAFFIC_CONTROL,
    "external_strike": DisruptionReason.STRIKE_EXTERNAL,
}


# Causes that exempt the carrier from paying compensation
EXTRAORDINARY_CIRCUMSTANCES: frozenset[DisruptionReason] = frozenset(
    {
        DisruptionReason.WEATHER,
        DisruptionReason.SECURITY,
        DisruptionReason.POLITICAL,
        DisruptionReason.STRIKE_EXTERNAL,
        DisruptionReason.AIR_TRAFFIC_CONTROL,
        DisruptionReason.MEDICAL,
        DisruptionReason.BIRD_STRIKE,
        DisruptionReason.VOLCANIC_ASH,
        DisruptionReason.TERRORISM,
        DisruptionReason.MILITARY_CONFLICT,
        DisruptionReason.NATURAL_DISASTER,
        DisruptionReason.AIRPORT_CLOSURE,
        DisruptionReason.CUSTOMS_IMMIGRATION,
        DisruptionReason.AIRPORT_STRIKE,
        DisruptionReason.AIRPORT_TECHNICAL,
    }
)
