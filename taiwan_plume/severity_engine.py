"""
Severity Engine - Danger / Warning / Safe classification

Time to impact is first stretched by the region's evacuation difficulty
(harder to evacuate = less effective time), then compared to fixed
thresholds:

    adjusted <= 6 h        -> danger
    6 h < adjusted <= 24 h -> warning
    adjusted > 24 h        -> safe
"""

import math
from collections import Counter
from enum import Enum
from typing import Dict, Iterable

from .config import DANGER_HOURS, WARNING_HOURS
from .errors import InvalidInput

# Multipliers applied per county evacuation difficulty
EVACUATION_DIFFICULTY = {
    'LOW': 1.0,
    'MEDIUM': 1.5,
    'HIGH': 2.0,
    'EXTREME': 2.5,
}

SEVERITY_COLORS = {
    'safe': '#4CAF50',
    'warning': '#FFA500',
    'danger': '#FF0000',
}


class SeverityBand(str, Enum):
    SAFE = 'safe'
    WARNING = 'warning'
    DANGER = 'danger'

    @property
    def color(self) -> str:
        return SEVERITY_COLORS[self.value]


def evacuation_multiplier(level: str) -> float:
    """Multiplier for a difficulty level name (case-insensitive)."""
    try:
        return EVACUATION_DIFFICULTY[str(level).strip().upper()]
    except KeyError as e:
        raise InvalidInput(f"Unknown evacuation difficulty: {level!r}") from e


def _adjusted_hours(time_to_impact_hours: float, multiplier: float) -> float:
    for name, value in (('time_to_impact_hours', time_to_impact_hours), ('multiplier', multiplier)):
        if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
            raise InvalidInput(f"{name} must be a number, got {value!r}")
    if not math.isfinite(multiplier) or multiplier <= 0:
        raise InvalidInput(f"multiplier must be a positive finite number, got {multiplier}")
    return max(0.0, time_to_impact_hours / multiplier)


def adjusted_impact_hours(time_to_impact_hours: float, evacuation_difficulty_multiplier: float = 1.0) -> int:
    """Effective whole hours left for evacuation, never below zero."""
    adjusted = _adjusted_hours(time_to_impact_hours, evacuation_difficulty_multiplier)
    if math.isinf(adjusted):
        raise InvalidInput("time_to_impact_hours must be finite to report whole hours")
    return math.floor(adjusted)


def severity(time_to_impact_hours: float, evacuation_difficulty_multiplier: float = 1.0) -> SeverityBand:
    """
    Classify a time to impact.

    Thresholds are compared on the unrounded adjusted time, so 6.01 h is
    already a warning and 24.01 h is safe. An infinite time is safe.
    """
    adjusted = _adjusted_hours(time_to_impact_hours, evacuation_difficulty_multiplier)
    if adjusted <= DANGER_HOURS:
        return SeverityBand.DANGER
    elif adjusted <= WARNING_HOURS:
        return SeverityBand.WARNING
    return SeverityBand.SAFE


def summarize_bands(bands: Iterable[SeverityBand]) -> Dict[str, int]:
    """Count of regions per band, every band present."""
    counts = Counter(SeverityBand(b) for b in bands)
    return {band.value: counts.get(band, 0) for band in SeverityBand}
