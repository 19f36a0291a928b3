"""
Great-circle distance using the Haversine formula.

Assumption
----------
Compensation bands are defined on the great-circle distance between the
departure and arrival airports, not the distance actually flown, so a
spherical Earth of radius 6 371 km is sufficient.  Inputs are decimal
degrees and are not range-checked; callers pass coordinates taken from
flight data.

Complexity: O(1) per call.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

EARTH_RADIUS_KM = 6_371.0


def calculate_distance(
    lat1: float, lon1: float, lat2: float, lon2: float
) -> float:
    """Return the great-circle distance in **km** between two points."""
    lat1_r, lat2_r = math.radians(lat1), math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlon / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(a), math.sqrt(1 - a))


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

    def distance_to(self, other: Coordinates) -> float:
        return calculate_distance(
            self.latitude, self.longitude, other.latitude, other.longitude
        )
