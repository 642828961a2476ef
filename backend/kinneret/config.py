"""
Kinneret analytics engine configuration and constants.
"""

from enum import Enum


class GroupId(str, Enum):
    DIATOMS = "diatoms"
    DINOFLAGELLATES = "dinoflagellates"
    SMALL_PHYTO = "small_phyto"          # Picoplankton and small nanoplankton
    N_FIXERS = "n_fixers"                # N2-fixing cyanobacteria
    MICROCYSTIS = "microcystis"


# Column order used for aggregated matrices (PCA input)
GROUP_ORDER: list[GroupId] = [
    GroupId.DIATOMS,
    GroupId.DINOFLAGELLATES,
    GroupId.SMALL_PHYTO,
    GroupId.N_FIXERS,
    GroupId.MICROCYSTIS,
]

# All groups are reported in phosphorus units
BIOMASS_UNITS = "mmol P/m³"

# Typical display range per group (mmol P/m³)
BIOMASS_RANGES: dict[str, tuple[float, float]] = {
    "diatoms": (0.0, 0.08),
    "dinoflagellates": (0.0, 0.05),
    "small_phyto": (0.0, 0.03),
    "n_fixers": (0.0, 0.06),
    "microcystis": (0.0, 0.04),
}

# Mixing index = min(1, wind² / depth / MIXING_SCALE)
MIXING_SCALE = 10.0

# Half-widths of the uniform jitter applied per heatmap cell
HEATMAP_JITTER = {
    "temperature": 1.0,   # °C
    "phosphorus": 0.05,   # mmol P/m³
    "nitrogen": 0.1,      # mmol N/m³
    "silicon": 0.25,      # mmol Si/m³
    "light": 0.1,         # fraction
}

# Grid sizes (width, height)
DEFAULT_HEATMAP_SIZE = (500, 300)
DEFAULT_PREDICTION_GRID = (50, 40)

# Lake Kinneret bounding box (degrees)
LAKE_BOUNDS = {
    "min_lng": 35.55,
    "max_lng": 35.65,
    "min_lat": 32.65,
    "max_lat": 32.95,
}

MODEL_VERSION = "engine-v1.0"

# Forecasting
SMOOTHING_ALPHA = 0.3
SEASONAL_TREND_WEIGHT = 0.7          # remainder goes to the monthly average
CONFIDENCE_DECAY_MONTHS = 12.0
FULL_HISTORY_MONTHS = 24             # history length at which data quality = 1
BACKTEST_MIN_SAMPLES = 12
BACKTEST_TRAIN_FRACTION = 0.75

MONTH_LABELS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]
