"""
Pydantic models for aggregated observations and descriptive statistics.
"""

from pydantic import BaseModel

from kinneret.config import GroupId


class MonthlyMatrix(BaseModel):
    """Monthly mean biomass per group, one row ("site") per calendar month."""
    sites: list[str]            # month labels, calendar order
    variables: list[GroupId]
    matrix: list[list[float]]   # [site][variable]
    sample_counts: list[int]    # observations averaged into each row


class GroupStatistics(BaseModel):
    """Mean ± standard deviation and box-plot summary for one group."""
    group: GroupId
    count: int
    mean: float
    std_dev: float   # population (divisor n)
    minimum: float
    q1: float
    median: float
    q3: float
    maximum: float
