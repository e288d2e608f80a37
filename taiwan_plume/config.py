"""
Simulator Configuration
=======================
Model constants and data file locations shared by the engines.
"""

import os

# =============================================================================
# SPREAD MODEL DEFAULTS
# =============================================================================

DEFAULT_BLAST_DURATION_SEC = 30.0   # initial event phase length (s)
DEFAULT_BLAST_SPEED_MPS = 50.0      # initial event spread speed (m/s)
DEFAULT_DIFFUSION_COEFF = 2.0       # diffusion coefficient (m²/s)
DEFAULT_MIN_RADIUS_M = 1000.0       # smallest footprint ever reported (m)

# =============================================================================
# ARRIVAL SEARCH
# =============================================================================

ARRIVAL_HORIZON_SEC = 72 * 3600     # give up after 72 simulated hours
MAX_BISECTION_ITERATIONS = 100
ARRIVAL_TOLERANCE_M = 1000.0        # 1 km band around the target distance

# =============================================================================
# GEOGRAPHY
# =============================================================================

EARTH_RADIUS_KM = 6371
METERS_PER_DEGREE = 111000          # 1 degree of latitude ≈ 111 km
TAIWAN_CENTER = (23.5, 121.0)

# =============================================================================
# SIMULATION
# =============================================================================

POLYGON_SAMPLES = 36                # one vertex every 10°

# Danger / warning thresholds in hours of (adjusted) time to impact
DANGER_HOURS = 6
WARNING_HOURS = 24

# =============================================================================
# DATA FILES
# =============================================================================

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.environ.get('TAIWAN_PLUME_DATA_DIR', os.path.join(PACKAGE_DIR, 'data'))
PLANTS_PATH = os.path.join(DATA_DIR, 'plants.csv')
COUNTIES_PATH = os.path.join(DATA_DIR, 'counties.csv')

# =============================================================================
# API
# =============================================================================

API_HOST = os.environ.get('TAIWAN_PLUME_HOST', '0.0.0.0')
API_PORT = int(os.environ.get('TAIWAN_PLUME_PORT', 5000))
