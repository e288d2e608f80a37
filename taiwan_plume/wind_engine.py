"""
Wind Engine - directional weighting and wind advection
=======================================================

Wind direction follows the meteorological convention: ``direction_deg`` is
the compass bearing the wind blows FROM (0° = north wind, 45° = north-east
wind). Combined with the plume angle convention of ``geo_utils`` the
directional factor peaks downwind:

    north wind (0°)   -> strongest toward the south
    east wind (90°)   -> strongest toward the west
    NE wind (45°)     -> strongest toward the south-west

The factor is dampened to 0.4 of a full cosine swing, so the upwind side
still gets a share of the advection and the outline never collapses to one
side.

Two distance variants exist on purpose:
- ``total_distance``: per sample angle, used to sweep the plume outline
- ``total_distance_to_target``: fixed bearing from plant to one target,
  used by the arrival search
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict

from .errors import InvalidInput
from .geo_utils import GeoPoint, bearing, great_circle_distance_km, plume_angle
from .spread_engine import SpreadParameters, base_radius

WIND_DAMPING = 0.4
KMH_TO_MS = 1000 / 3600


class DiffusionMode(str, Enum):
    NATURAL = 'natural'     # pure diffusion, wind ignored
    COMBINED = 'combined'   # diffusion plus wind advection

    @classmethod
    def parse(cls, value) -> 'DiffusionMode':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as e:
            raise InvalidInput(f"Unknown diffusion mode: {value!r}") from e


@dataclass(frozen=True)
class WindCondition:
    direction_deg: float = 0.0
    speed_kmh: float = 0.0

    def __post_init__(self):
        for name, value in (('direction_deg', self.direction_deg), ('speed_kmh', self.speed_kmh)):
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise InvalidInput(f"{name} must be a finite number, got {value!r}")
        if not 0 <= self.direction_deg <= 360:
            raise InvalidInput(f"direction_deg must be within [0, 360], got {self.direction_deg}")
        if self.speed_kmh < 0:
            raise InvalidInput(f"speed_kmh must be >= 0, got {self.speed_kmh}")

    @property
    def speed_ms(self) -> float:
        return self.speed_kmh * KMH_TO_MS

    @property
    def label(self) -> str:
        return wind_direction_label(self.direction_deg)


# =============================================================================
# DIRECTIONAL WEIGHTING
# =============================================================================

def directional_factor(sample_angle_rad: float, wind_direction_deg: float) -> float:
    """
    Share of the wind advection applied in direction ``sample_angle_rad``.

    Stays within [0.3, 0.7]: 0.7 straight downwind, 0.3 straight upwind.
    """
    wind_rad = math.radians(wind_direction_deg)
    return (math.cos(sample_angle_rad + wind_rad) * WIND_DAMPING + 1) / 2


def wind_advection_distance(elapsed_sec: float, wind_speed_kmh: float, factor: float) -> float:
    """Meters carried by the wind in ``elapsed_sec`` for a given factor."""
    return (wind_speed_kmh * KMH_TO_MS) * elapsed_sec * factor


def total_distance(elapsed_sec: float, sample_angle_rad: float,
                   params: SpreadParameters, wind: WindCondition,
                   mode: DiffusionMode) -> float:
    """
    Distance of the plume front along ``sample_angle_rad`` in meters.

    Natural mode returns the base radius; combined mode adds the wind term
    weighted by the directional factor of that angle.
    """
    radius = base_radius(elapsed_sec, params)
    if DiffusionMode.parse(mode) is DiffusionMode.NATURAL:
        return radius
    factor = directional_factor(sample_angle_rad, wind.direction_deg)
    return radius + wind_advection_distance(elapsed_sec, wind.speed_kmh, factor)


def target_angle(origin: GeoPoint, target: GeoPoint) -> float:
    """Plume angle of the bearing from ``origin`` to ``target``."""
    return plume_angle(bearing(origin.lat, origin.lng, target.lat, target.lng))


def total_distance_to_target(elapsed_sec: float, origin: GeoPoint, target: GeoPoint,
                             params: SpreadParameters, wind: WindCondition,
                             mode: DiffusionMode) -> float:
    """Distance of the plume front toward a fixed target in meters."""
    return total_distance(elapsed_sec, target_angle(origin, target), params, wind, mode)


def target_distance_m(origin: GeoPoint, target: GeoPoint) -> float:
    return great_circle_distance_km(origin, target) * 1000


# =============================================================================
# COMPASS LABELS
# =============================================================================

COMPASS_POINTS = [
    # (name, chinese label, centre bearing)
    ('N', '北風', 0),
    ('NE', '東北風', 45),
    ('E', '東風', 90),
    ('SE', '東南風', 135),
    ('S', '南風', 180),
    ('SW', '西南風', 225),
    ('W', '西風', 270),
    ('NW', '西北風', 315),
]


def _compass_index(angle: float) -> int:
    normalized = angle % 360
    return int(((normalized + 22.5) % 360) // 45)


def wind_direction_label(angle: float) -> str:
    """8-point compass name of a wind direction, e.g. 200° -> 'S'."""
    return COMPASS_POINTS[_compass_index(angle)][0]


def wind_direction_label_zh(angle: float) -> str:
    """Traditional Chinese name of a wind direction, e.g. 45° -> '東北風'."""
    return COMPASS_POINTS[_compass_index(angle)][1]


# =============================================================================
# SEASONAL PRESETS
# =============================================================================

class Season(str, Enum):
    SPRING = 'spring'
    SUMMER = 'summer'
    AUTUMN = 'autumn'
    WINTER = 'winter'


# Typical monsoon-driven wind over Taiwan per season
SEASONAL_WIND_CONDITIONS: Dict[Season, Dict] = {
    Season.SPRING: {
        'direction': 135,   # SE
        'speed': 15,        # km/h
        'speed_range': (10, 20),
        'description': 'Spring (Mar-May): south-east wind, average 15 km/h, range 10-20 km/h',
    },
    Season.SUMMER: {
        'direction': 225,   # SW
        'speed': 17.5,
        'speed_range': (10, 25),
        'description': 'Summer (Jun-Aug): south-west wind, average 17.5 km/h, range 10-25 km/h',
    },
    Season.AUTUMN: {
        'direction': 225,   # SW
        'speed': 20,
        'speed_range': (15, 25),
        'description': 'Autumn (Sep-Nov): south-west wind, average 20 km/h, range 15-25 km/h',
    },
    Season.WINTER: {
        'direction': 45,    # NE
        'speed': 30,
        'speed_range': (20, 40),
        'description': 'Winter (Dec-Feb): north-east wind, average 30 km/h, range 20-40 km/h',
    },
}


def season_for_month(month: int) -> Season:
    if month not in range(1, 13):
        raise InvalidInput(f"month must be 1-12, got {month!r}")
    if month in [3, 4, 5]:
        return Season.SPRING
    elif month in [6, 7, 8]:
        return Season.SUMMER
    elif month in [9, 10, 11]:
        return Season.AUTUMN
    return Season.WINTER


def seasonal_wind(season) -> WindCondition:
    """Average wind for a season, accepts a Season or its name."""
    try:
        season = Season(str(season.value if isinstance(season, Season) else season).lower())
    except ValueError as e:
        raise InvalidInput(f"Unknown season: {season!r}") from e
    conditions = SEASONAL_WIND_CONDITIONS[season]
    return WindCondition(direction_deg=conditions['direction'], speed_kmh=conditions['speed'])
