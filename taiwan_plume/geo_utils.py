"""
Geographic Utility Functions
============================
Haversine distance, bearings, and the flat-Earth projection used to place
plume outline vertices around a plant.

Angles passed to ``destination`` follow the plume angle convention:
0 rad points due south and pi/2 due east, so that

    north offset = -d * cos(angle)
    east offset  =  d * sin(angle)

A compass bearing (clockwise from north) converts with ``plume_angle``.
"""

import math
from dataclasses import dataclass

from .config import EARTH_RADIUS_KM, METERS_PER_DEGREE
from .errors import InvalidInput


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in degrees."""
    lat: float
    lng: float

    def __post_init__(self):
        for name, value in (('lat', self.lat), ('lng', self.lng)):
            if not isinstance(value, (int, float)) or not math.isfinite(value):
                raise InvalidInput(f"{name} must be a finite number, got {value!r}")
        if not -90 <= self.lat <= 90:
            raise InvalidInput(f"lat must be within [-90, 90], got {self.lat}")
        if not -180 <= self.lng <= 180:
            raise InvalidInput(f"lng must be within [-180, 180], got {self.lng}")

    @classmethod
    def from_pair(cls, pair) -> 'GeoPoint':
        """Build from a ``[lat, lng]`` sequence as sent by map clients."""
        try:
            lat, lng = pair
            return cls(float(lat), float(lng))
        except (TypeError, ValueError) as e:
            if isinstance(e, InvalidInput):
                raise
            raise InvalidInput(f"expected [lat, lng], got {pair!r}") from e

    def to_pair(self) -> list:
        return [self.lat, self.lng]


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate great-circle distance between two points.

    Parameters:
        lat1, lon1: First point (degrees)
        lat2, lon2: Second point (degrees)

    Returns:
        Distance in kilometers
    """
    R = EARTH_RADIUS_KM

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = (math.sin(dphi / 2) ** 2 +
         math.cos(phi1) * math.cos(phi2) *
         math.sin(dlambda / 2) ** 2)

    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return R * c


def great_circle_distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """Haversine distance between two GeoPoints in kilometers."""
    return haversine(a.lat, a.lng, b.lat, b.lng)


def bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate initial bearing from point 1 to point 2.

    Returns:
        Bearing in degrees (0-360, clockwise from North)
        0° = North, 90° = East, 180° = South, 270° = West
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dlambda = math.radians(lon2 - lon1)

    x = math.sin(dlambda) * math.cos(phi2)
    y = (math.cos(phi1) * math.sin(phi2) -
         math.sin(phi1) * math.cos(phi2) * math.cos(dlambda))

    theta = math.atan2(x, y)

    return (math.degrees(theta) + 360) % 360


def angular_diff(angle1: float, angle2: float) -> float:
    """
    Calculate smallest angle between two bearings.
    Handles wrap-around (e.g., 350° to 10° = 20°, not 340°).

    Returns:
        Difference in degrees (0-180)
    """
    diff = abs(angle1 - angle2) % 360
    if diff > 180:
        diff = 360 - diff
    return diff


def plume_angle(bearing_deg: float) -> float:
    """
    Convert a compass bearing (degrees clockwise from north) into the
    plume angle in radians used by ``destination`` and the wind factor.
    """
    return math.pi - math.radians(bearing_deg)


def destination(origin: GeoPoint, distance_m: float, angle_rad: float) -> GeoPoint:
    """
    Project a point ``distance_m`` away from ``origin``.

    Equirectangular approximation, good for tens to low hundreds of km at
    Taiwan's latitude. Not valid near the poles.
    """
    if not math.isfinite(distance_m) or distance_m < 0:
        raise InvalidInput(f"distance must be a non-negative number, got {distance_m}")

    lat = origin.lat - (distance_m * math.cos(angle_rad)) / METERS_PER_DEGREE
    lng = origin.lng + (distance_m * math.sin(angle_rad)) / (
        METERS_PER_DEGREE * math.cos(math.radians(origin.lat)))
    return GeoPoint(lat, lng)
