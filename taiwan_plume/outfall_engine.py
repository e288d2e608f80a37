import math
from typing import List

import numpy as np

from .config import METERS_PER_DEGREE, POLYGON_SAMPLES, TAIWAN_CENTER
from .errors import InvalidInput
from .geo_utils import GeoPoint, destination
from .spread_engine import SpreadParameters, check_elapsed
from .wind_engine import DiffusionMode, WindCondition, total_distance

# --- Plume outline around the plant ---

def sample_angles(samples: int = POLYGON_SAMPLES) -> np.ndarray:
    """Evenly spaced plume angles in radians, starting due south."""
    if isinstance(samples, bool) or not isinstance(samples, (int, np.integer)) or samples < 3:
        raise InvalidInput(f"samples must be an integer >= 3, got {samples!r}")
    return np.arange(samples) * 2 * np.pi / samples


def spread_distances(elapsed_sec, params: SpreadParameters, wind: WindCondition,
                     mode: DiffusionMode, samples: int = POLYGON_SAMPLES) -> np.ndarray:
    """Front distance in meters for every sample angle."""
    return np.array([
        total_distance(elapsed_sec, float(angle), params, wind, mode)
        for angle in sample_angles(samples)
    ])


def spread_polygon(origin: GeoPoint, elapsed_sec, params: SpreadParameters,
                   wind: WindCondition, mode: DiffusionMode,
                   samples: int = POLYGON_SAMPLES) -> List[GeoPoint]:
    """
    Vertices of the plume outline after ``elapsed_sec`` seconds.

    Each vertex sits at the front distance of its own angle, so in combined
    mode the outline stretches downwind.
    """
    distances = spread_distances(elapsed_sec, params, wind, mode, samples)
    return [
        destination(origin, float(d), float(angle))
        for angle, d in zip(sample_angles(samples), distances)
    ]


# --- Gaussian plume concentration ---

# Plume shape constants
A = 0.2     # diffusion width coefficient
B = 0.4     # time exponent
Q = 5.0     # source strength, scaled for visibility

LAT_TO_METERS = METERS_PER_DEGREE
LNG_TO_METERS = METERS_PER_DEGREE * math.cos(math.radians(TAIWAN_CENTER[0]))


def plume_sigma(elapsed_sec) -> float:
    """Diffusion width in meters."""
    return A * math.pow(elapsed_sec, B) * 1000


def gaussian_concentration(point: GeoPoint, center: GeoPoint,
                           wind: WindCondition, elapsed_sec) -> float:
    """
    Relative concentration at ``point`` for a puff released at ``center``.

    The coordinates are rotated onto the wind axis and the puff centre is
    carried downwind at the wind speed. Zero wind is treated as 1 m/s.
    """
    t = check_elapsed(elapsed_sec)
    if t == 0:
        return 0.0

    wind_speed = wind.speed_ms or 1.0
    theta = math.radians(wind.direction_deg)

    x = (point.lng - center.lng) * LNG_TO_METERS
    y = (point.lat - center.lat) * LAT_TO_METERS

    # Downwind axis points away from where the wind blows from
    x_prime = -(x * math.sin(theta) + y * math.cos(theta))
    y_prime = x * math.cos(theta) - y * math.sin(theta)

    sigma = plume_sigma(t)
    concentration = (Q / (2 * math.pi * wind_speed * sigma * sigma)) * \
        math.exp(-y_prime ** 2 / (2 * sigma * sigma)) * \
        math.exp(-(x_prime - wind_speed * t) ** 2 / (2 * sigma * sigma))

    return float(concentration)


def radiation_color(concentration: float) -> str:
    """Red-scale CSS colour for a concentration value."""
    intensity = float(np.clip(concentration * 1000, 0, 1))
    r = math.floor(255 * intensity)
    g = math.floor(255 * (1 - intensity))
    b = math.floor(255 * (1 - intensity))
    return f"rgb({r}, {g}, {b})"
