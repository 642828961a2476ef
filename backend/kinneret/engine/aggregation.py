"""
Aggregation of biomass observations into PCA input and summary statistics.
"""

import math
from typing import Sequence

import numpy as np

from kinneret.config import GROUP_ORDER, MONTH_LABELS, GroupId
from kinneret.errors import InsufficientDataError
from kinneret.models.forecast import TimeSeriesSample
from kinneret.models.statistics import GroupStatistics, MonthlyMatrix


def monthly_matrix(series: Sequence[TimeSeriesSample]) -> MonthlyMatrix:
    """
    Average every group per calendar month across all years.

    Each calendar month that has at least one sample becomes one row ("site"),
    in calendar order. Columns follow GROUP_ORDER.
    """
    if len(series) == 0:
        raise InsufficientDataError("Cannot aggregate an empty series.")

    by_month: dict[int, list[TimeSeriesSample]] = {}
    for sample in series:
        by_month.setdefault(sample.date.month, []).append(sample)

    sites: list[str] = []
    rows: list[list[float]] = []
    counts: list[int] = []
    for month in sorted(by_month):
        samples = by_month[month]
        sites.append(MONTH_LABELS[month - 1])
        rows.append([
            float(np.mean([s.value(group) for s in samples])) for group in GROUP_ORDER
        ])
        counts.append(len(samples))

    return MonthlyMatrix(
        sites=sites,
        variables=list(GROUP_ORDER),
        matrix=rows,
        sample_counts=counts,
    )


def group_statistics(
    series: Sequence[TimeSeriesSample],
    group: GroupId,
) -> GroupStatistics:
    """
    Mean, population standard deviation and box-plot summary of one group.

    Quartiles are read off the sorted values at indices floor(n × 0.25),
    floor(n × 0.5) and floor(n × 0.75), without interpolation.
    """
    group = GroupId(group)
    values = sorted(s.value(group) for s in series)
    n = len(values)
    if n == 0:
        raise InsufficientDataError(
            f"No observations for {group.value}; statistics are undefined."
        )

    arr = np.asarray(values)
    return GroupStatistics(
        group=group,
        count=n,
        mean=float(arr.mean()),
        std_dev=float(arr.std()),
        minimum=values[0],
        q1=values[math.floor(n * 0.25)],
        median=values[math.floor(n * 0.5)],
        q3=values[math.floor(n * 0.75)],
        maximum=values[-1],
    )


def all_group_statistics(series: Sequence[TimeSeriesSample]) -> list[GroupStatistics]:
    """group_statistics for every group, in GROUP_ORDER."""
    return [group_statistics(series, group) for group in GROUP_ORDER]
