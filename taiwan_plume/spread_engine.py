"""
Spread Engine - base radius of the radiation footprint
=======================================================

Two-phase growth of the footprint radius around the plant:

1. Blast phase (t <= T): linear mechanical dispersal at the blast speed.
2. Diffusion phase (t > T): the blast radius plus a diffusion term

       sqrt(2 * D * (t - T)) * sqrt(t / T)

   The extra sqrt(t / T) factor speeds up apparent growth so the spread is
   legible on a country-scale map. It is not a Gaussian-plume law and is
   kept exactly as is.

The result is floored at ``min_radius_m`` and never decreases with time.
"""

import math
from dataclasses import dataclass
from enum import Enum

from .config import (
    DEFAULT_BLAST_DURATION_SEC,
    DEFAULT_BLAST_SPEED_MPS,
    DEFAULT_DIFFUSION_COEFF,
    DEFAULT_MIN_RADIUS_M,
)
from .errors import InvalidInput


class Environment(str, Enum):
    URBAN = 'urban'
    RURAL = 'rural'
    MOUNTAIN = 'mountain'


# Terrain-dependent diffusion coefficients
DIFFUSION_COEFFICIENTS = {
    Environment.URBAN: 0.15,     # buildings block the flow
    Environment.RURAL: 0.20,     # reference value
    Environment.MOUNTAIN: 0.25,  # complex terrain mixes faster
}

ENVIRONMENT_DESCRIPTIONS = {
    Environment.URBAN: 'Urban area: buildings obstruct the flow, lower diffusion coefficient',
    Environment.RURAL: 'Rural area: standard diffusion coefficient',
    Environment.MOUNTAIN: 'Mountain area: complex terrain, higher diffusion coefficient',
}


def _check_number(name: str, value, minimum: float = 0.0, strict: bool = True) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise InvalidInput(f"{name} must be a finite number, got {value!r}")
    if strict and value <= minimum:
        raise InvalidInput(f"{name} must be > {minimum}, got {value}")
    if not strict and value < minimum:
        raise InvalidInput(f"{name} must be >= {minimum}, got {value}")
    return float(value)


@dataclass(frozen=True)
class SpreadParameters:
    blast_duration_sec: float = DEFAULT_BLAST_DURATION_SEC
    blast_speed_mps: float = DEFAULT_BLAST_SPEED_MPS
    diffusion_coeff_m2_per_sec: float = DEFAULT_DIFFUSION_COEFF
    min_radius_m: float = DEFAULT_MIN_RADIUS_M

    def __post_init__(self):
        _check_number('blast_duration_sec', self.blast_duration_sec)
        _check_number('blast_speed_mps', self.blast_speed_mps)
        _check_number('diffusion_coeff_m2_per_sec', self.diffusion_coeff_m2_per_sec)
        _check_number('min_radius_m', self.min_radius_m, strict=False)

    @property
    def blast_radius_m(self) -> float:
        """Radius reached at the end of the blast phase (before flooring)."""
        return self.blast_speed_mps * self.blast_duration_sec

    @classmethod
    def for_environment(cls, environment, **overrides) -> 'SpreadParameters':
        """Default parameters with the terrain diffusion coefficient."""
        try:
            environment = Environment(environment)
        except ValueError as e:
            raise InvalidInput(f"Unknown environment: {environment!r}") from e
        overrides.setdefault('diffusion_coeff_m2_per_sec', DIFFUSION_COEFFICIENTS[environment])
        return cls(**overrides)


def check_elapsed(elapsed_sec) -> float:
    """Validate a simulation clock reading."""
    return _check_number('elapsed_sec', elapsed_sec, strict=False)


def base_radius(elapsed_sec: float, params: SpreadParameters) -> float:
    """
    Footprint radius in meters after ``elapsed_sec`` seconds.

    Raises:
        InvalidInput: for negative or non-finite elapsed time
    """
    t = check_elapsed(elapsed_sec)
    duration = params.blast_duration_sec

    if t <= duration:
        return max(params.min_radius_m, params.blast_speed_mps * t)

    blast_radius = params.blast_speed_mps * duration
    time_factor = math.sqrt(t / duration)
    diffusion_radius = math.sqrt(2 * params.diffusion_coeff_m2_per_sec * (t - duration)) * time_factor
    return max(params.min_radius_m, blast_radius + diffusion_radius)
