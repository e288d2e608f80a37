"""
Taiwan Nuclear Plume Simulator
==============================

Modules:
- spread_engine: two-phase footprint radius
- wind_engine: wind weighting, advection, seasonal presets
- arrival_engine: bisection arrival-time estimate
- outfall_engine: plume outline polygon and Gaussian concentration
- severity_engine: danger / warning / safe bands
- data_engine: plant catalog, county table, terrain lookup
- geo_utils: Geographic utilities
"""
from .errors import InvalidInput
from .geo_utils import GeoPoint, haversine, great_circle_distance_km, bearing, destination
from .spread_engine import Environment, SpreadParameters, base_radius
from .wind_engine import (
    DiffusionMode, WindCondition, Season,
    directional_factor, wind_advection_distance, total_distance, total_distance_to_target,
    seasonal_wind, season_for_month,
)
from .arrival_engine import time_to_arrival, remaining_time_to_impact, format_time_remaining
from .outfall_engine import spread_polygon, gaussian_concentration, radiation_color
from .severity_engine import SeverityBand, EVACUATION_DIFFICULTY, severity, summarize_bands
from .data_engine import DataEngine, detect_environment

__version__ = '0.1.0'

__all__ = [
    'InvalidInput',
    'GeoPoint', 'haversine', 'great_circle_distance_km', 'bearing', 'destination',
    'Environment', 'SpreadParameters', 'base_radius',
    'DiffusionMode', 'WindCondition', 'Season',
    'directional_factor', 'wind_advection_distance', 'total_distance', 'total_distance_to_target',
    'seasonal_wind', 'season_for_month',
    'time_to_arrival', 'remaining_time_to_impact', 'format_time_remaining',
    'spread_polygon', 'gaussian_concentration', 'radiation_color',
    'SeverityBand', 'EVACUATION_DIFFICULTY', 'severity', 'summarize_bands',
    'DataEngine', 'detect_environment',
]
