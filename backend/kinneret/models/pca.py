"""
Pydantic model for principal component analysis output.
"""

from pydantic import BaseModel


class PCAResult(BaseModel):
    """Two retained principal components of a standardized sites × variables matrix."""

    eigenvalues: list[float]                  # [λ1, λ2], λ1 ≥ λ2
    eigenvectors: list[list[float]]           # [component][variable], unit length
    explained_variance: list[float]           # fraction of the retained variance
    total_variance_fraction: list[float]      # fraction of the full covariance trace
    scores: list[list[float]]                 # [site][component]
    loadings: list[list[float]]               # [variable][component]
    standardized: list[list[float]]           # [site][variable]
