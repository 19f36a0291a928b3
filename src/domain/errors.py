"""Exceptions raised by the eligibility core."""


class EligibilityError(Exception):
    """Base class for every error raised by the domain layer."""


class InvalidInput(EligibilityError):
    """Route or disruption facts are malformed."""


class InvalidRouteData(InvalidInput):
    """A route is missing one of its jurisdiction codes."""


class InvalidDisruptionData(InvalidInput):
    """A disruption lacks a field its type requires (e.g. a delay without hours)."""


class FlightDataIncomplete(EligibilityError):
    """A flight record cannot be turned into route / disruption facts."""
