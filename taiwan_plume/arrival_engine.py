"""
Arrival Engine - time for the plume front to reach a point
===========================================================

Inverts "distance travelled as a function of time" by bisection over
[0, horizon]. The front distance toward the target grows monotonically in
time (the base radius never shrinks and the wind term is non-negative), so
the search converges on the single crossing.

The answer is a decision-support estimate, not an exact root: the search
stops as soon as the front is within ``ARRIVAL_TOLERANCE_M`` of the target
distance, or after ``MAX_BISECTION_ITERATIONS`` halvings.

``None`` means the plume does not reach the target within the horizon. It
is a normal outcome, distinct from an arrival time of 0.
"""

import logging
import math
from typing import Optional

from .config import ARRIVAL_HORIZON_SEC, ARRIVAL_TOLERANCE_M, MAX_BISECTION_ITERATIONS
from .errors import InvalidInput
from .geo_utils import GeoPoint
from .spread_engine import SpreadParameters, check_elapsed
from .wind_engine import (
    DiffusionMode,
    WindCondition,
    target_angle,
    target_distance_m,
    total_distance,
)

logger = logging.getLogger(__name__)


def time_to_arrival(
    origin: GeoPoint,
    target: GeoPoint,
    params: SpreadParameters,
    wind: WindCondition,
    mode: DiffusionMode,
    horizon_sec: float = ARRIVAL_HORIZON_SEC,
) -> Optional[float]:
    """
    Seconds after the event at which the plume front reaches ``target``.

    Returns:
        Arrival time in seconds, 0.0 when the target is inside the initial
        footprint, or None when the target is not reached within
        ``horizon_sec``.

    Raises:
        InvalidInput: for a non-positive horizon or malformed inputs
    """
    if isinstance(horizon_sec, bool) or not isinstance(horizon_sec, (int, float)) \
            or not math.isfinite(horizon_sec) or horizon_sec <= 0:
        raise InvalidInput(f"horizon_sec must be > 0, got {horizon_sec!r}")
    mode = DiffusionMode.parse(mode)

    distance_m = target_distance_m(origin, target)
    if distance_m == 0:
        return 0.0

    # The bearing toward the target is fixed; only time varies
    angle = target_angle(origin, target)

    def front(t: float) -> float:
        return total_distance(t, angle, params, wind, mode)

    if front(0) >= distance_m:
        logger.debug("Target %.0f m away is inside the initial footprint", distance_m)
        return 0.0

    low, high = 0.0, float(horizon_sec)
    mid = high

    for i in range(MAX_BISECTION_ITERATIONS):
        mid = (low + high) / 2
        reached = front(mid)

        logger.debug(
            "Bisection %d: t=%.1fs front=%.1fm target=%.1fm diff=%.1fm",
            i, mid, reached, distance_m, abs(reached - distance_m)
        )

        if abs(reached - distance_m) < ARRIVAL_TOLERANCE_M:
            logger.debug("Arrival at t=%.1fs after %d iterations", mid, i + 1)
            return mid

        if reached < distance_m:
            low = mid
        else:
            high = mid

    if front(horizon_sec) < distance_m:
        logger.debug(
            "Target %.0f m away not reached within %.0f h",
            distance_m, horizon_sec / 3600
        )
        return None

    return mid


def remaining_time_to_impact(arrival_sec: Optional[float], elapsed_sec: float) -> Optional[float]:
    """
    Seconds left before the front reaches a point whose arrival time is
    ``arrival_sec``, given the current simulation clock.

    Already-arrived points report 0.0; unreached points stay None.
    """
    elapsed = check_elapsed(elapsed_sec)
    if arrival_sec is None:
        return None
    if elapsed >= arrival_sec:
        return 0.0
    return max(0.0, arrival_sec - elapsed)


def format_time_remaining(seconds: Optional[float]) -> str:
    """Format seconds as DD:HH:MM:SS, or 'N/A' when there is no arrival."""
    if seconds is None:
        return 'N/A'
    total = int(seconds)
    days = total // 86400
    hours = (total % 86400) // 3600
    minutes = (total % 3600) // 60
    remaining_seconds = total % 60
    return f"{days:02d}:{hours:02d}:{minutes:02d}:{remaining_seconds:02d}"
