"""
Pydantic models for spatial biomass prediction requests and results.
"""

from typing import Optional

from pydantic import BaseModel, Field

from kinneret.config import DEFAULT_PREDICTION_GRID
from kinneret.models.environment import EnvironmentalConditions


class BiomassPredictionRequest(BaseModel):
    """Input for a spatial biomass prediction."""

    group: str = Field(..., description="Phytoplankton group id, e.g. 'diatoms'")
    env: EnvironmentalConditions
    width: int = Field(DEFAULT_PREDICTION_GRID[0], gt=0)
    height: int = Field(DEFAULT_PREDICTION_GRID[1], gt=0)
    seed: Optional[int] = Field(
        None, description="Seed for the spatial jitter. None = non-reproducible."
    )


class GridSize(BaseModel):
    width: int
    height: int


class LakeBounds(BaseModel):
    min_lng: float
    max_lng: float
    min_lat: float
    max_lat: float


class BiomassPredictionMetadata(BaseModel):
    group: str
    month: int
    depth: float
    env: EnvironmentalConditions
    grid_size: GridSize
    bounds: LakeBounds
    timestamp: str   # ISO 8601, UTC
    model_version: str


class BiomassPredictionResponse(BaseModel):
    """Biomass grid with display metadata."""

    grid: list[list[float]]               # [row][column], mmol P/m³
    units: str
    value_range: tuple[float, float]      # typical display range for the group
    metadata: BiomassPredictionMetadata
