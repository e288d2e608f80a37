"""Shared pytest fixtures for the plume simulator test suite.

Provides the reference spread parameters, common locations around the
plants and a Flask test client.
"""

import pytest

from taiwan_plume.data_engine import DataEngine
from taiwan_plume.geo_utils import GeoPoint
from taiwan_plume.spread_engine import SpreadParameters
from taiwan_plume.wind_engine import WindCondition


# ============================================================================
# Model Fixtures
# ============================================================================

@pytest.fixture
def params():
    """Reference parameters: 30 s blast at 50 m/s, D = 2.0 m²/s, 1 km floor."""
    return SpreadParameters(
        blast_duration_sec=30.0,
        blast_speed_mps=50.0,
        diffusion_coeff_m2_per_sec=2.0,
        min_radius_m=1000.0,
    )


@pytest.fixture
def origin():
    return GeoPoint(25.0, 121.0)


@pytest.fixture
def target_north():
    """About 11.1 km due north of ``origin``."""
    return GeoPoint(25.1, 121.0)


@pytest.fixture
def target_south():
    """About 11.1 km due south of ``origin``."""
    return GeoPoint(24.9, 121.0)


@pytest.fixture
def calm():
    return WindCondition(direction_deg=0.0, speed_kmh=0.0)


@pytest.fixture
def north_wind():
    """20 km/h wind blowing from the north."""
    return WindCondition(direction_deg=0.0, speed_kmh=20.0)


# ============================================================================
# Data / API Fixtures
# ============================================================================

@pytest.fixture(scope="session")
def engine():
    return DataEngine()


@pytest.fixture
def client():
    from app.app import app
    app.config['TESTING'] = True
    with app.test_client() as c:
        yield c
