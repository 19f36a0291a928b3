"""
Which regulation, if any, covers a route.

A flight is covered by a jurisdiction when it departs from it, or when it
arrives there on a carrier based there.  UK261 takes precedence over EU261
when both match (e.g. an EU departure on a UK carrier into London).
"""

from __future__ import annotations

from typing import Optional

from .entities import Route
from .enums import Regulation

EU_COUNTRIES: frozenset[str] = frozenset(
    {
        "AUT", "BEL", "BGR", "HRV", "CYP", "CZE", "DNK", "EST", "FIN",
        "FRA", "DEU", "GRC", "HUN", "IRL", "ITA", "LVA", "LTU", "LUX",
        "MLT", "NLD", "POL", "PRT", "ROU", "SVK", "SVN", "ESP", "SWE",
    }
)

UK_COUNTRIES: frozenset[str] = frozenset({"GBR"})


def _covered_by(route: Route, countries: frozenset[str]) -> bool:
    if route.departure_country in countries:
        return True
    return (
        route.arrival_country in countries
        and route.airline_country in countries
    )


def is_eu_flight(route: Route) -> bool:
    return _covered_by(route, EU_COUNTRIES)


def is_uk_flight(route: Route) -> bool:
    return _covered_by(route, UK_COUNTRIES)


def applicable_regulation(route: Route) -> Optional[Regulation]:
    """Return the governing regulation, or ``None`` for an uncovered route."""
    if is_uk_flight(route):
        return Regulation.UK261
    if is_eu_flight(route):
        return Regulation.EU261
    return None
