"""
Orchestrator for spatial biomass predictions.

Resolves the group → synthesizes the jittered heatmap → packages the grid
with its units, display range and metadata.
"""

import logging
from datetime import datetime, timezone

from kinneret.config import BIOMASS_UNITS, LAKE_BOUNDS, MODEL_VERSION
from kinneret.engine.spatial import build_heatmap
from kinneret.engine.species import get_biomass_range, get_profile
from kinneret.models.biomass import (
    BiomassPredictionMetadata,
    BiomassPredictionRequest,
    BiomassPredictionResponse,
    GridSize,
    LakeBounds,
)

logger = logging.getLogger(__name__)


def predict_biomass(request: BiomassPredictionRequest) -> BiomassPredictionResponse:
    """
    Run a spatial biomass prediction for one group.

    Args:
        request: group key, environmental conditions, grid size and seed.

    Returns:
        BiomassPredictionResponse with the grid and display metadata.

    Raises:
        ConfigurationError: unknown group key.
    """
    # Step 1: Resolve the group (unknown keys fail before any work is done)
    profile = get_profile(request.group)

    # Step 2: Synthesize the grid
    grid = build_heatmap(
        profile,
        request.env,
        width=request.width,
        height=request.height,
        seed=request.seed,
    )

    # Step 3: Package with metadata
    metadata = BiomassPredictionMetadata(
        group=profile.id,
        month=request.env.month,
        depth=request.env.depth,
        env=request.env,
        grid_size=GridSize(width=request.width, height=request.height),
        bounds=LakeBounds(**LAKE_BOUNDS),
        timestamp=datetime.now(timezone.utc).isoformat(),
        model_version=MODEL_VERSION,
    )

    return BiomassPredictionResponse(
        grid=grid,
        units=BIOMASS_UNITS,
        value_range=get_biomass_range(profile.id),
        metadata=metadata,
    )


def predict_biomass_batch(
    requests: list[BiomassPredictionRequest],
) -> list[BiomassPredictionResponse]:
    """Run several predictions; results keep the order of the requests."""
    logger.debug("Batch biomass prediction for %d requests", len(requests))
    return [predict_biomass(request) for request in requests]
