import sys
import os
import logging

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from flask import Flask, jsonify, request
from flask_cors import CORS
import pandas as pd
from datetime import datetime

from taiwan_plume.config import API_HOST, API_PORT, ARRIVAL_HORIZON_SEC, POLYGON_SAMPLES
from taiwan_plume.data_engine import DataEngine
from taiwan_plume.errors import InvalidInput
from taiwan_plume.geo_utils import GeoPoint
from taiwan_plume.logging_config import setup_logging
from taiwan_plume.spread_engine import (
    DIFFUSION_COEFFICIENTS,
    ENVIRONMENT_DESCRIPTIONS,
    Environment,
    SpreadParameters,
    base_radius,
)
from taiwan_plume.wind_engine import (
    SEASONAL_WIND_CONDITIONS,
    DiffusionMode,
    WindCondition,
    season_for_month,
    seasonal_wind,
    wind_direction_label,
    wind_direction_label_zh,
)
from taiwan_plume.arrival_engine import format_time_remaining, remaining_time_to_impact, time_to_arrival
from taiwan_plume.outfall_engine import spread_polygon
from taiwan_plume.severity_engine import (
    EVACUATION_DIFFICULTY,
    SeverityBand,
    adjusted_impact_hours,
    evacuation_multiplier,
    severity,
    summarize_bands,
)


logger = logging.getLogger('taiwan_plume.app')

app = Flask(__name__)
CORS(app)

engine = None

def get_engine():
    global engine
    if engine is None:
        engine = DataEngine()
    return engine


class PlantNotFound(LookupError):
    pass


def to_records(df: pd.DataFrame) -> list:
    """DataFrame rows as JSON-safe dicts."""
    records = df.to_dict('records')
    for r in records:
        for k, v in r.items():
            if pd.isna(v):
                r[k] = None
            elif hasattr(v, 'item'):
                r[k] = v.item()
    return records


# ============================
# REQUEST PARSING
# ============================

def parse_point(data, key):
    value = data.get(key)
    if value is None:
        raise InvalidInput(f'{key} is required')
    if isinstance(value, dict):
        value = [value.get('lat'), value.get('lng')]
    return GeoPoint.from_pair(value)


def parse_origin(data):
    """Origin from a catalogued 'plant' id/name or an explicit 'origin' [lat, lng]."""
    plant = data.get('plant')
    if plant is not None:
        location = get_engine().plant_location(plant)
        if location is None:
            raise PlantNotFound(f'Plant not found: {plant}')
        return location
    return parse_point(data, 'origin')


def parse_wind(data):
    """Explicit wind {direction, speed} in degrees and km/h, else a seasonal preset."""
    wind = data.get('wind')
    if wind is not None:
        try:
            return WindCondition(
                direction_deg=float(wind.get('direction', 0)),
                speed_kmh=float(wind.get('speed', 0)),
            )
        except (TypeError, ValueError, AttributeError) as e:
            if isinstance(e, InvalidInput):
                raise
            raise InvalidInput(f'Invalid wind: {wind!r}') from e
    season = data.get('season')
    if season is None:
        season = season_for_month(datetime.now().month)
    return seasonal_wind(season)


def parse_elapsed(data):
    """Elapsed seconds from 'elapsed_sec' or 'simulation_minutes'."""
    try:
        if 'elapsed_sec' in data:
            return float(data['elapsed_sec'])
        return float(data.get('simulation_minutes', 0)) * 60
    except (TypeError, ValueError) as e:
        raise InvalidInput('elapsed time must be a number') from e


def parse_params(data, origin):
    """
    Spread parameters. An explicit 'environment' picks the terrain coefficient,
    otherwise it is looked up at the origin. 'params' overrides any field.
    """
    overrides = data.get('params') or {}
    if not isinstance(overrides, dict):
        raise InvalidInput("params must be an object")
    try:
        overrides = {k: float(v) for k, v in overrides.items()}
    except (TypeError, ValueError) as e:
        raise InvalidInput(f'Invalid params: {overrides!r}') from e
    unknown = set(overrides) - set(SpreadParameters.__dataclass_fields__)
    if unknown:
        raise InvalidInput(f"Unknown params: {sorted(unknown)}")

    environment = data.get('environment')
    if environment is None:
        environment = get_engine().environment_at(origin)
    return SpreadParameters.for_environment(environment, **overrides), Environment(environment)


def parse_simulation(data):
    origin = parse_origin(data)
    wind = parse_wind(data)
    elapsed = parse_elapsed(data)
    mode = DiffusionMode.parse(data.get('mode', DiffusionMode.COMBINED))
    params, environment = parse_params(data, origin)
    return origin, wind, elapsed, mode, params, environment


@app.errorhandler(InvalidInput)
def handle_invalid_input(e):
    return jsonify({'error': str(e)}), 400


@app.errorhandler(PlantNotFound)
def handle_plant_not_found(e):
    return jsonify({'error': str(e)}), 404


def get_json_body():
    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        raise InvalidInput('No JSON data provided')
    return data


# ============================
# CATALOG ENDPOINTS
# ============================

@app.route('/plants', methods=['GET'])
def get_plants():
    """
    Get all nuclear plants.
    Returns: List of plants with id, name, lat, lng and description.
    """
    plants = to_records(get_engine().plants)
    return jsonify({
        'count': len(plants),
        'plants': plants
    })


@app.route('/counties', methods=['GET'])
def get_counties():
    """Get county centroids with evacuation difficulty."""
    counties = to_records(get_engine().counties)
    return jsonify({
        'count': len(counties),
        'counties': counties,
        'evacuation_difficulty': EVACUATION_DIFFICULTY
    })


@app.route('/seasons', methods=['GET'])
def get_seasons():
    """
    Seasonal wind presets.
    Query params: month (optional, defaults to the current month)
    """
    month = request.args.get('month', datetime.now().month, type=int)
    current = season_for_month(month)
    seasons = {}
    for season, conditions in SEASONAL_WIND_CONDITIONS.items():
        seasons[season.value] = {
            'direction': conditions['direction'],
            'direction_label': wind_direction_label(conditions['direction']),
            'direction_label_zh': wind_direction_label_zh(conditions['direction']),
            'speed': conditions['speed'],
            'speed_range': list(conditions['speed_range']),
            'description': conditions['description'],
        }
    return jsonify({
        'current': current.value,
        'seasons': seasons
    })


# ============================
# MODEL ENDPOINTS
# ============================

@app.route('/spread', methods=['POST'])
def predict_spread():
    """
    Footprint radius and plume outline after the elapsed time.

    Request body:
    {
        "plant": "chinshan",            (or "origin": [25.286, 121.595])
        "wind": {"direction": 45, "speed": 30},   (or "season": "winter")
        "simulation_minutes": 180,      (or "elapsed_sec": 10800)
        "mode": "combined",
        "samples": 36
    }
    """
    data = get_json_body()
    origin, wind, elapsed, mode, params, environment = parse_simulation(data)
    samples = data.get('samples', POLYGON_SAMPLES)

    polygon = spread_polygon(origin, elapsed, params, wind, mode, samples=samples)

    return jsonify({
        'source': origin.to_pair(),
        'elapsed_sec': elapsed,
        'mode': mode.value,
        'wind': {
            'direction': wind.direction_deg,
            'speed': wind.speed_kmh,
            'speed_ms': round(wind.speed_ms, 2),
            'label': wind.label,
        },
        'environment': environment.value,
        'environment_description': ENVIRONMENT_DESCRIPTIONS[environment],
        'diffusion_coefficient': DIFFUSION_COEFFICIENTS[environment],
        'base_radius_m': base_radius(elapsed, params),
        'wind_influence_m': wind.speed_ms * elapsed if mode is DiffusionMode.COMBINED else 0.0,
        'polygon': [p.to_pair() for p in polygon]
    })


@app.route('/arrival', methods=['POST'])
def predict_arrival():
    """
    Time until the plume reaches a location.

    Request body: as /spread plus
    {
        "target": [25.04, 121.56],
        "evacuation_difficulty": "HIGH"   (optional, default LOW)
    }
    """
    data = get_json_body()
    origin, wind, elapsed, mode, params, environment = parse_simulation(data)
    target = parse_point(data, 'target')
    try:
        horizon = float(data.get('horizon_sec', ARRIVAL_HORIZON_SEC))
    except (TypeError, ValueError) as e:
        raise InvalidInput('horizon_sec must be a number') from e
    multiplier = evacuation_multiplier(data.get('evacuation_difficulty', 'LOW'))

    arrival = time_to_arrival(origin, target, params, wind, mode, horizon_sec=horizon)
    remaining = remaining_time_to_impact(arrival, elapsed)

    if remaining is None:
        band = SeverityBand.SAFE
        hours = None
    else:
        band = severity(remaining / 3600, multiplier)
        hours = adjusted_impact_hours(remaining / 3600, multiplier)

    return jsonify({
        'source': origin.to_pair(),
        'target': target.to_pair(),
        'reached': arrival is not None,
        'arrival_sec': arrival,
        'remaining_sec': remaining,
        'remaining': format_time_remaining(remaining),
        'adjusted_hours': hours,
        'severity': band.value,
        'color': band.color,
    })


@app.route('/severity', methods=['POST'])
def classify_severity():
    """
    Classify a time to impact.

    Request body:
    {"hours": 12.5, "multiplier": 1.5}   (or "evacuation_difficulty": "MEDIUM")
    """
    data = get_json_body()
    if 'hours' not in data:
        raise InvalidInput('hours is required')
    if 'evacuation_difficulty' in data:
        multiplier = evacuation_multiplier(data['evacuation_difficulty'])
    else:
        multiplier = data.get('multiplier', 1.0)
    try:
        hours = float(data['hours'])
        multiplier = float(multiplier)
    except (TypeError, ValueError) as e:
        raise InvalidInput('hours and multiplier must be numbers') from e

    band = severity(hours, multiplier)
    return jsonify({
        'severity': band.value,
        'color': band.color,
        'adjusted_hours': adjusted_impact_hours(hours, multiplier)
    })


@app.route('/counties/impact', methods=['POST'])
def predict_county_impact():
    """
    Arrival time and severity band for every county.

    Request body: as /spread.
    """
    data = get_json_body()
    origin, wind, elapsed, mode, params, environment = parse_simulation(data)

    eng = get_engine()
    try:
        impacts = eng.county_impacts(origin, wind, elapsed, mode=mode, params=params)
    except InvalidInput:
        raise
    except Exception as e:
        logger.exception("County impact calculation failed")
        return jsonify({'error': str(e)}), 500

    records = to_records(impacts)
    for r in records:
        r['remaining'] = format_time_remaining(r['remaining_sec'])

    return jsonify({
        'source': origin.to_pair(),
        'elapsed_sec': elapsed,
        'environment': environment.value,
        'count': len(records),
        'summary': summarize_bands(impacts['severity']),
        'counties': records
    })


if __name__ == '__main__':
    setup_logging()
    logger.info("Starting Taiwan Plume Simulator API...")
    logger.info(f"API available at http://localhost:{API_PORT}")
    app.run(debug=True, host=API_HOST, port=API_PORT)
