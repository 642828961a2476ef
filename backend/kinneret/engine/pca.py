"""
Two-component principal component analysis of a sites × variables matrix.

Steps:
    1. Standardize each column (mean 0, sample std 1)
    2. Covariance matrix of the standardized data (divisor n - 1)
    3. Eigen-decomposition, λ1 ≥ λ2
    4. Scores    = standardized rows projected on the eigenvectors
    5. Loadings  = eigenvector × sqrt(eigenvalue)  (correlation-style)

For two variables the eigenpairs are solved in closed form. With more
variables a general symmetric eigensolver is used and the two leading
components are retained.
"""

import logging
import math
from typing import Sequence

import numpy as np
from scipy.linalg import eigh

from kinneret.engine.numerics import standardize_columns
from kinneret.errors import DegenerateInputError
from kinneret.models.pca import PCAResult

logger = logging.getLogger(__name__)

N_COMPONENTS = 2

# Off-diagonal magnitude below which a 2×2 row is treated as degenerate
_EPS = 1e-10


def covariance_matrix(standardized: np.ndarray) -> np.ndarray:
    """Sample covariance (divisor n - 1) of already-centred columns."""
    n = standardized.shape[0]
    return standardized.T @ standardized / (n - 1)


def eigen_2x2(matrix: np.ndarray) -> tuple[list[float], list[list[float]]]:
    """
    Closed-form eigenpairs of a 2×2 matrix.

    Eigenvalues from (trace ± sqrt(trace² - 4·det)) / 2, ordered λ1 ≥ λ2.
    Each eigenvector comes from substituting λ into (A - λI)v = 0 and using
    the first row with a usable off-diagonal, then L2-normalizing.
    """
    a, b = float(matrix[0, 0]), float(matrix[0, 1])
    c, d = float(matrix[1, 0]), float(matrix[1, 1])

    trace = a + d
    det = a * d - b * c
    # Rounding can push the discriminant of a symmetric matrix slightly negative
    sqrt_disc = math.sqrt(max(0.0, trace * trace - 4.0 * det))

    lambda1 = (trace + sqrt_disc) / 2.0
    lambda2 = (trace - sqrt_disc) / 2.0
    eigenvalues = [max(lambda1, lambda2), min(lambda1, lambda2)]

    eigenvectors: list[list[float]] = []
    for lam in eigenvalues:
        a_shift = a - lam
        d_shift = d - lam

        if abs(b) > _EPS:
            v1, v2 = 1.0, -a_shift / b
        elif abs(c) > _EPS:
            v1, v2 = -d_shift / c, 1.0
        elif abs(a_shift) <= abs(d_shift):
            # Diagonal matrix: the eigenvector is a coordinate axis
            v1, v2 = 1.0, 0.0
        else:
            v1, v2 = 0.0, 1.0

        norm = math.hypot(v1, v2)
        eigenvectors.append([v1 / norm, v2 / norm])

    # Repeated eigenvalue: any orthonormal pair works, keep the first vector
    first, second = eigenvectors
    if abs(first[0] * second[0] + first[1] * second[1]) > 1e-8:
        eigenvectors[1] = [-first[1], first[0]]

    return eigenvalues, eigenvectors


def eigen_general(
    matrix: np.ndarray,
    n_components: int = N_COMPONENTS,
) -> tuple[list[float], list[list[float]]]:
    """
    Leading eigenpairs of a symmetric matrix, largest eigenvalue first.

    Each eigenvector's sign is fixed so its first non-zero entry is positive.
    """
    values, vectors = eigh(matrix)
    order = np.argsort(values)[::-1][:n_components]

    eigenvalues: list[float] = []
    eigenvectors: list[list[float]] = []
    for k in order:
        vec = vectors[:, k]
        nonzero = np.flatnonzero(np.abs(vec) > _EPS)
        if nonzero.size and vec[nonzero[0]] < 0:
            vec = -vec
        eigenvalues.append(float(values[k]))
        eigenvectors.append([float(v) for v in vec])

    return eigenvalues, eigenvectors


def _as_matrix(matrix: Sequence[Sequence[float]]) -> np.ndarray:
    rows = [list(r) for r in matrix]
    if len(rows) < 2:
        raise DegenerateInputError(
            f"PCA needs at least 2 sites (rows), got {len(rows)}."
        )

    widths = {len(r) for r in rows}
    if len(widths) != 1:
        raise DegenerateInputError(
            f"All rows must have the same number of variables, got lengths {sorted(widths)}."
        )
    p = widths.pop()
    if p < 2:
        raise DegenerateInputError(
            f"PCA needs at least 2 variables (columns), got {p}."
        )

    data = np.asarray(rows, dtype=float)
    if not np.all(np.isfinite(data)):
        raise DegenerateInputError("PCA input contains NaN or infinite values.")
    return data


def run_pca(matrix: Sequence[Sequence[float]]) -> PCAResult:
    """
    Run a two-component PCA.

    Args:
        matrix: sites × variables values, at least 2 × 2.

    Returns:
        PCAResult with eigenvalues, eigenvectors, explained variance, scores
        and loadings for the two retained components.

    Raises:
        DegenerateInputError: too few sites or variables, ragged or
            non-finite input, or a zero-variance column.
    """
    data = _as_matrix(matrix)
    n_sites, n_vars = data.shape

    standardized = standardize_columns(data)
    cov = covariance_matrix(standardized)

    if n_vars == 2:
        logger.debug("PCA on %d sites: closed-form 2x2 eigen-solver", n_sites)
        eigenvalues, eigenvectors = eigen_2x2(cov)
    else:
        logger.debug(
            "PCA on %d sites x %d variables: general eigen-solver", n_sites, n_vars
        )
        eigenvalues, eigenvectors = eigen_general(cov)

    retained = sum(eigenvalues)
    explained = [lam / retained for lam in eigenvalues]
    total = float(np.trace(cov))
    total_fraction = [lam / total for lam in eigenvalues]

    components = np.asarray(eigenvectors)            # (2, p)
    scores = standardized @ components.T             # (n, 2)

    # Tiny negative eigenvalues come from rounding, not from the data
    scale = np.sqrt(np.maximum(np.asarray(eigenvalues), 0.0))
    loadings = components.T * scale                  # (p, 2)

    return PCAResult(
        eigenvalues=eigenvalues,
        eigenvectors=eigenvectors,
        explained_variance=explained,
        total_variance_fraction=total_fraction,
        scores=scores.tolist(),
        loadings=loadings.tolist(),
        standardized=standardized.tolist(),
    )
