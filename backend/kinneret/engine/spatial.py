"""
Spatial biomass heatmap synthesis.

Each grid cell evaluates the response model on an independently jittered copy
of the base conditions. The result is visual texture, not a simulated spatial
field: there is no spatial autocorrelation beyond the shared base conditions.
"""

import logging
import math
from typing import Optional, Union

import numpy as np

from kinneret.config import DEFAULT_HEATMAP_SIZE, HEATMAP_JITTER
from kinneret.engine.response import compute_response
from kinneret.engine.species import resolve_profile
from kinneret.models.environment import EnvironmentalConditions
from kinneret.models.species import SpeciesProfile

logger = logging.getLogger(__name__)

# Order of the last axis of the jitter array
_JITTER_FIELDS = ("temperature", "phosphorus", "nitrogen", "silicon", "light")


def draw_jitter(
    width: int,
    height: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Draw uniform jitter for every cell, shape (height, width, 5).

    Values along the last axis follow _JITTER_FIELDS, each uniform on
    [-half_width, +half_width). The whole array is drawn up front, so a cell's
    perturbation depends only on the generator state and its (row, col) index.
    """
    half_widths = np.array([HEATMAP_JITTER[f] for f in _JITTER_FIELDS])
    unit = rng.uniform(-1.0, 1.0, size=(height, width, len(_JITTER_FIELDS)))
    return unit * half_widths


def build_heatmap(
    group: Union[SpeciesProfile, str],
    base_env: EnvironmentalConditions,
    width: int = DEFAULT_HEATMAP_SIZE[0],
    height: int = DEFAULT_HEATMAP_SIZE[1],
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> list[list[float]]:
    """
    Build a height × width biomass grid around base_env.

    Args:
        group: SpeciesProfile or group key.
        base_env: Conditions shared by all cells before jitter.
        width: Number of columns.
        height: Number of rows.
        seed: Seed for a fresh generator; ignored when rng is given.
        rng: Explicit random generator.

    Returns:
        list of rows, each a list of non-negative floats.

    Raises:
        ConfigurationError: unknown group key.
        ValueError: non-positive grid dimensions.
    """
    if width <= 0 or height <= 0:
        raise ValueError(
            f"Grid dimensions must be positive, got width={width}, height={height}"
        )

    profile = resolve_profile(group)
    if rng is None:
        rng = np.random.default_rng(seed)

    logger.debug(
        "Building %dx%d heatmap for %s (month=%d, T=%.2f)",
        width, height, profile.id, base_env.month, base_env.temperature,
    )

    jitter = draw_jitter(width, height, rng)

    grid: list[list[float]] = []
    for j in range(height):
        row: list[float] = []
        for i in range(width):
            d_temp, d_p, d_n, d_si, d_light = jitter[j, i]
            cell_env = base_env.model_copy(update={
                "temperature": base_env.temperature + float(d_temp),
                "phosphorus": base_env.phosphorus + float(d_p),
                "nitrogen": base_env.nitrogen + float(d_n),
                "silicon": base_env.silicon + float(d_si),
                "light": base_env.light + float(d_light),
            })

            value = compute_response(profile, cell_env)
            if not math.isfinite(value):
                logger.warning(
                    "Non-finite biomass response %r at cell (%d, %d) for %s",
                    value, j, i, profile.id,
                )
            row.append(value)
        grid.append(row)

    return grid
