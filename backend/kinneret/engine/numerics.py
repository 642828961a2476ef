"""
Shared numeric helpers for the response model and PCA.

These functions are used by more than one engine module (response, spatial,
pca) and are extracted here to avoid duplication.
"""

import numpy as np

from kinneret.config import MIXING_SCALE
from kinneret.errors import DegenerateInputError


def saturating_response(concentration: float, ks: float) -> float:
    """
    Michaelis-Menten saturating response C / (C + Ks).

    Negative concentrations count as absent. When both C and Ks are zero the
    term is 0 rather than 0/0.
    """
    c = max(0.0, concentration)
    denominator = c + ks
    if denominator <= 0.0:
        return 0.0
    return c / denominator


def q10_response(
    temperature: float,
    optimal: float,
    q10: float,
    temp_range: tuple[float, float],
) -> float:
    """
    Q10 temperature response scaled by a triangular window around the optimum.

        f(T) = q10^((T - T_opt)/10) × max(0, 1 - |T - T_opt| / w)
        w    = max(T_opt - T_min, T_max - T_opt)

    Returns 0 outside [T_min, T_max].
    """
    t_min, t_max = temp_range
    if temperature < t_min or temperature > t_max:
        return 0.0

    diff = temperature - optimal
    response = q10 ** (diff / 10.0)

    half_width = max(optimal - t_min, t_max - optimal)
    if half_width <= 0.0:
        # Degenerate window: only T == T_opt is inside the range
        return response

    range_factor = 1.0 - abs(diff) / half_width
    return response * max(0.0, range_factor)


def mixing_index(wind_speed: float, depth: float) -> float:
    """Wind-driven mixing index in [0, 1]: stronger wind and shallower water mix more."""
    potential = wind_speed ** 2 / depth
    return min(1.0, potential / MIXING_SCALE)


def standardize_columns(data: np.ndarray) -> np.ndarray:
    """
    Standardize each column to zero mean and unit sample standard deviation.

    Raises DegenerateInputError for fewer than two rows or a constant column.
    """
    n = data.shape[0]
    if n < 2:
        raise DegenerateInputError(
            f"At least 2 rows are needed to standardize, got {n}."
        )

    means = data.mean(axis=0)
    stds = data.std(axis=0, ddof=1)

    # Constant columns can leave a rounding-level std instead of an exact 0
    tolerance = 1e-12 * np.maximum(1.0, np.abs(means))
    zero_cols = [int(j) for j in np.flatnonzero(stds <= tolerance)]
    if zero_cols:
        raise DegenerateInputError(
            f"Column(s) {zero_cols} have zero variance and cannot be standardized."
        )

    return (data - means) / stds
