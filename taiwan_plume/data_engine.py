"""
Data Engine - Handles the static tables the simulator reads
============================================================

This module provides the DataEngine class that loads:
- Nuclear plant catalog (id, name, location)
- County table (centroid, population, density, evacuation difficulty)

and the terrain lookup that picks a diffusion coefficient for a location.
The spread and arrival calculations themselves live in the *_engine modules.
"""

import logging
from typing import Optional

import pandas as pd

from .arrival_engine import remaining_time_to_impact, time_to_arrival
from .config import COUNTIES_PATH, PLANTS_PATH
from .geo_utils import GeoPoint, haversine
from .severity_engine import SeverityBand, evacuation_multiplier, severity
from .spread_engine import Environment, SpreadParameters
from .wind_engine import DiffusionMode, WindCondition

logger = logging.getLogger(__name__)

# Bounding boxes (north, south, east, west) of the main mountain ranges
MOUNTAIN_AREAS = {
    'Central Mountain Range': (24.5, 22.0, 121.5, 120.5),
    'Xueshan Range': (25.0, 24.0, 121.5, 120.8),
    'Alishan Range': (23.8, 23.0, 121.0, 120.5),
}

# Bounding boxes of the dense urban cores
URBAN_AREAS = {
    'Taipei City': (25.2, 25.0, 121.6, 121.4),
    'New Taipei City': (25.2, 24.9, 121.5, 121.2),
    'Taichung City': (24.3, 24.1, 120.7, 120.5),
    'Kaohsiung City': (22.7, 22.5, 120.4, 120.2),
}


def _find_area(point: GeoPoint, areas: dict) -> Optional[str]:
    for name, (north, south, east, west) in areas.items():
        if south <= point.lat <= north and west <= point.lng <= east:
            return name
    return None


def detect_environment(point: GeoPoint, county=None) -> Environment:
    """
    Terrain class of a location.

    Parameters:
        point: location to classify
        county: mapping with 'density' and 'evacuation_difficulty' of the
            county containing the point, or None when outside every county

    Mountain wins for extreme-difficulty counties inside a mountain range,
    urban needs a dense, hard-to-evacuate county inside an urban core,
    everything else is rural.
    """
    if county is None:
        area = _find_area(point, MOUNTAIN_AREAS)
        if area:
            logger.debug("Outside known counties but inside %s", area)
            return Environment.MOUNTAIN
        return Environment.RURAL

    difficulty = str(county['evacuation_difficulty']).upper()
    density = str(county['density']).lower()

    if difficulty == 'EXTREME':
        area = _find_area(point, MOUNTAIN_AREAS)
        if area:
            logger.debug("Inside %s", area)
            return Environment.MOUNTAIN

    if density == 'high' and difficulty in ('HIGH', 'EXTREME'):
        area = _find_area(point, URBAN_AREAS)
        if area:
            logger.debug("Inside urban core of %s", area)
            return Environment.URBAN

    return Environment.RURAL


class DataEngine:
    """
    Static data engine for the simulator.

    Loads:
    - plants: nuclear plant catalog
    - counties: county centroids with evacuation difficulty
    """

    def __init__(self, plants_path: str = PLANTS_PATH, counties_path: str = COUNTIES_PATH):
        """Initialize data engine with paths to data files."""
        logger.info("Loading data for Data Engine...")
        self.plants = pd.read_csv(plants_path)
        self.counties = pd.read_csv(counties_path)
        self.counties['evacuation_difficulty'] = self.counties['evacuation_difficulty'].str.upper()
        self.counties['multiplier'] = self.counties['evacuation_difficulty'].map(evacuation_multiplier)
        logger.info(f"Loaded: {len(self.plants)} plants, {len(self.counties)} counties")

    def get_plant(self, key: str):
        """Get plant by id or by name (partial match)."""
        by_id = self.plants[self.plants['plant_id'] == str(key).lower()]
        if len(by_id) > 0:
            return by_id.iloc[0]
        matches = self.plants[self.plants['name'].str.contains(str(key), case=False, na=False, regex=False)]
        return matches.iloc[0] if len(matches) > 0 else None

    def plant_location(self, key: str) -> Optional[GeoPoint]:
        plant = self.get_plant(key)
        if plant is None:
            return None
        return GeoPoint(float(plant['lat']), float(plant['lng']))

    def get_county(self, name: str):
        matches = self.counties[self.counties['name'].str.lower() == str(name).lower()]
        return matches.iloc[0] if len(matches) > 0 else None

    def county_distances(self, point: GeoPoint) -> pd.Series:
        """Great-circle distance in km from ``point`` to every county centroid."""
        return self.counties.apply(
            lambda c: haversine(point.lat, point.lng, c['lat'], c['lng']), axis=1
        )

    def nearest_county(self, point: GeoPoint):
        distances = self.county_distances(point)
        return self.counties.loc[distances.idxmin()]

    def environment_at(self, point: GeoPoint) -> Environment:
        return detect_environment(point, self.nearest_county(point))

    def spread_parameters_at(self, point: GeoPoint, **overrides) -> SpreadParameters:
        """Spread parameters with the terrain coefficient of ``point``."""
        return SpreadParameters.for_environment(self.environment_at(point), **overrides)

    def county_impacts(self, origin: GeoPoint, wind: WindCondition, elapsed_sec: float,
                       mode: DiffusionMode = DiffusionMode.COMBINED,
                       params: Optional[SpreadParameters] = None) -> pd.DataFrame:
        """
        Arrival time and severity for every county centroid.

        Counties the plume does not reach within the horizon are safe and
        carry None arrival and remaining times.
        """
        if params is None:
            params = SpreadParameters()

        rows = []
        for _, county in self.counties.iterrows():
            target = GeoPoint(float(county['lat']), float(county['lng']))
            arrival = time_to_arrival(origin, target, params, wind, mode)
            remaining = remaining_time_to_impact(arrival, elapsed_sec)

            if remaining is None:
                impact_hours = None
                band = SeverityBand.SAFE
            else:
                impact_hours = remaining / 3600
                band = severity(impact_hours, county['multiplier'])

            rows.append({
                'name': county['name'],
                'lat': float(county['lat']),
                'lng': float(county['lng']),
                'evacuation_difficulty': county['evacuation_difficulty'],
                'distance_km': round(haversine(origin.lat, origin.lng, target.lat, target.lng), 2),
                'arrival_sec': arrival,
                'remaining_sec': remaining,
                'impact_hours': impact_hours,
                'severity': band.value,
                'color': band.color,
            })

        logger.info(f"Computed impacts for {len(rows)} counties at t={elapsed_sec:.0f}s")
        return pd.DataFrame(rows)
