"""
Phytoplankton biomass forecasting.

Projects a monthly biomass series forward with one of five algorithms and
backtests all of them on a held-out tail of the history.

Every algorithm works on (x, y) points, x = year × 12 + month, and shares
the signature (points, steps_ahead) -> predicted y. Dispatch goes through
_ALGORITHMS, keyed by ForecastAlgorithm.
"""

import calendar
import datetime
import logging
import math
from typing import Callable, Sequence, Union

import numpy as np

from kinneret.config import (
    BACKTEST_MIN_SAMPLES,
    BACKTEST_TRAIN_FRACTION,
    CONFIDENCE_DECAY_MONTHS,
    FULL_HISTORY_MONTHS,
    SEASONAL_TREND_WEIGHT,
    SMOOTHING_ALPHA,
    GroupId,
)
from kinneret.errors import InsufficientDataError
from kinneret.models.forecast import (
    ForecastAlgorithm,
    PredictionModel,
    PredictionResult,
    TimeSeriesSample,
)

logger = logging.getLogger(__name__)

# (x, y) rows: a sequence of pairs or an (n, 2) array
Points = Union[Sequence[tuple[float, float]], np.ndarray]

PREDICTION_MODELS: dict[ForecastAlgorithm, PredictionModel] = {
    ForecastAlgorithm.LINEAR: PredictionModel(
        algorithm=ForecastAlgorithm.LINEAR,
        name="Linear Trend",
        description="Simple linear regression based on historical trends",
        base_confidence=0.8,
    ),
    ForecastAlgorithm.POLYNOMIAL: PredictionModel(
        algorithm=ForecastAlgorithm.POLYNOMIAL,
        name="Polynomial Fit",
        description="Quadratic polynomial through the most recent observations",
        base_confidence=0.75,
    ),
    ForecastAlgorithm.SEASONAL: PredictionModel(
        algorithm=ForecastAlgorithm.SEASONAL,
        name="Seasonal Decomposition",
        description="Linear trend blended with the 12-month seasonal cycle",
        base_confidence=0.85,
    ),
    ForecastAlgorithm.EXPONENTIAL: PredictionModel(
        algorithm=ForecastAlgorithm.EXPONENTIAL,
        name="Exponential Smoothing",
        description="Weighted moving average with exponential decay",
        base_confidence=0.7,
    ),
    ForecastAlgorithm.ARIMA: PredictionModel(
        algorithm=ForecastAlgorithm.ARIMA,
        name="ARIMA Model",
        description="AR(1) on first differences, an ARIMA(1,1,0) approximation",
        base_confidence=0.9,
    ),
}


def get_prediction_model(algorithm: ForecastAlgorithm) -> PredictionModel:
    return PREDICTION_MODELS[ForecastAlgorithm(algorithm)]


# ---------------------------------------------------------------------------
# Algorithms
# ---------------------------------------------------------------------------

def _as_points(points: Points) -> np.ndarray:
    """(n, 2) float array of (x, y) rows."""
    return np.asarray(points, dtype=float).reshape(-1, 2)


def linear_prediction(points: Points, steps_ahead: int) -> float:
    """Ordinary least squares over all points, extrapolated from the last x."""
    data = _as_points(points)
    x, y = data[:, 0], data[:, 1]
    n = len(x)

    sum_x = np.sum(x)
    sum_y = np.sum(y)
    sum_xy = np.sum(x * y)
    sum_xx = np.sum(x * x)

    denominator = n * sum_xx - sum_x * sum_x
    # A single point (or identical x values) carries no trend
    slope = (n * sum_xy - sum_x * sum_y) / denominator if denominator != 0 else 0.0
    intercept = (sum_y - slope * sum_x) / n

    return float(slope * (x[-1] + steps_ahead) + intercept)


def polynomial_prediction(points: Points, steps_ahead: int) -> float:
    """Quadratic through the last three points. Linear with fewer than three."""
    data = _as_points(points)
    if len(data) < 3:
        logger.info(
            "Polynomial forecast needs 3 points, got %d; falling back to linear",
            len(data),
        )
        return linear_prediction(data, steps_ahead)

    (x1, y1), (x2, y2), (x3, y3) = data[-3:]
    if x1 == x2 or x2 == x3 or x1 == x3:
        logger.info("Repeated month index in last 3 points; falling back to linear")
        return linear_prediction(data, steps_ahead)

    a = (y3 - y1) / ((x3 - x1) * (x3 - x2)) - (y2 - y1) / ((x2 - x1) * (x3 - x2))
    b = (y2 - y1) / (x2 - x1) - a * (x1 + x2)
    c = y1 - a * x1 * x1 - b * x1

    future_x = x3 + steps_ahead
    return float(a * future_x * future_x + b * future_x + c)


def seasonal_prediction(points: Points, steps_ahead: int) -> float:
    """Linear trend blended with the historical average for the target month."""
    data = _as_points(points)
    x, y = data[:, 0], data[:, 1]

    buckets = (x.astype(int) - 1) % 12
    totals = np.bincount(buckets, weights=y, minlength=12)
    counts = np.bincount(buckets, minlength=12)
    # Months with no history contribute 0
    averages = np.divide(totals, counts, out=np.zeros(12), where=counts > 0)

    trend = linear_prediction(data, steps_ahead)
    future_bucket = (int(x[-1]) + steps_ahead - 1) % 12
    seasonal = averages[future_bucket]

    return float(trend * SEASONAL_TREND_WEIGHT + seasonal * (1.0 - SEASONAL_TREND_WEIGHT))


def exponential_smoothing(points: Points, steps_ahead: int) -> float:
    """Smoothed level plus the most recent first difference per step."""
    y = _as_points(points)[:, 1]
    if len(y) < 2:
        return float(y[-1])

    smoothed = y[0]
    for value in y[1:]:
        smoothed = SMOOTHING_ALPHA * value + (1.0 - SMOOTHING_ALPHA) * smoothed

    recent_trend = y[-1] - y[-2]
    return float(smoothed + recent_trend * steps_ahead)


def arima_prediction(points: Points, steps_ahead: int) -> float:
    """
    ARIMA(1,1,0)-like forecast.

    Fits phi = Σ d[i]·d[i-1] / Σ d[i-1]² on first differences d and projects
    last_y + phi × last_d × steps.
    """
    data = _as_points(points)
    if len(data) < 3:
        logger.info(
            "AR forecast needs 3 points, got %d; falling back to linear",
            len(data),
        )
        return linear_prediction(data, steps_ahead)

    diffs = np.diff(data[:, 1])

    numerator = np.sum(diffs[1:] * diffs[:-1])
    sum_squares = np.sum(diffs[:-1] ** 2)
    ar_coeff = numerator / sum_squares if sum_squares > 0 else 0.0

    predicted_diff = ar_coeff * diffs[-1]
    return float(data[-1, 1] + predicted_diff * steps_ahead)


_ALGORITHMS: dict[ForecastAlgorithm, Callable[[Points, int], float]] = {
    ForecastAlgorithm.LINEAR: linear_prediction,
    ForecastAlgorithm.POLYNOMIAL: polynomial_prediction,
    ForecastAlgorithm.SEASONAL: seasonal_prediction,
    ForecastAlgorithm.EXPONENTIAL: exponential_smoothing,
    ForecastAlgorithm.ARIMA: arima_prediction,
}


def calculate_prediction(
    points: Points,
    algorithm: ForecastAlgorithm,
    steps_ahead: int,
) -> float:
    """Raw (unclamped) prediction of the given algorithm."""
    return _ALGORITHMS[ForecastAlgorithm(algorithm)](points, steps_ahead)


def calculate_confidence(
    history_length: int,
    algorithm: ForecastAlgorithm,
    steps_ahead: int,
) -> float:
    """
    Confidence in [0, 1]: decays with the horizon, grows with history length.

        base(algorithm) × exp(-steps / 12) × min(1, n / 24)
    """
    base = get_prediction_model(algorithm).base_confidence
    time_decay = math.exp(-steps_ahead / CONFIDENCE_DECAY_MONTHS)
    data_quality = min(1.0, history_length / FULL_HISTORY_MONTHS)
    return max(0.0, min(1.0, base * time_decay * data_quality))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def month_index(d: datetime.date) -> int:
    """Monotonic month index year × 12 + month."""
    return d.year * 12 + d.month


def add_months(d: datetime.date, months: int) -> datetime.date:
    """Shift a date by whole calendar months, clamping the day to the month length."""
    total = d.month - 1 + months
    year = d.year + total // 12
    month = total % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return datetime.date(year, month, day)


def _sorted_samples(series: Sequence[TimeSeriesSample]) -> list[TimeSeriesSample]:
    return sorted(series, key=lambda s: s.date)


def _to_points(samples: Sequence[TimeSeriesSample], group: GroupId) -> np.ndarray:
    return np.array(
        [(month_index(s.date), s.value(group)) for s in samples], dtype=float
    )


def predict(
    series: Sequence[TimeSeriesSample],
    group: GroupId,
    algorithm: ForecastAlgorithm,
    months_ahead: int = 12,
) -> list[PredictionResult]:
    """
    Forecast one group's biomass for the months following the series.

    Args:
        series: Historical samples (any order; a sorted copy is used).
        group: Group whose values are forecast.
        algorithm: Forecasting algorithm.
        months_ahead: Number of future months to predict.

    Returns:
        One PredictionResult per future month, in order. Predictions are ≥ 0.

    Raises:
        InsufficientDataError: empty series.
        ValueError: months_ahead < 1.
    """
    if months_ahead < 1:
        raise ValueError(f"months_ahead must be at least 1, got {months_ahead}")
    if len(series) == 0:
        raise InsufficientDataError("Cannot forecast from an empty series.")

    group = GroupId(group)
    algorithm = ForecastAlgorithm(algorithm)
    samples = _sorted_samples(series)
    points = _to_points(samples, group)
    last_date = samples[-1].date

    predictions: list[PredictionResult] = []
    for step in range(1, months_ahead + 1):
        value = calculate_prediction(points, algorithm, step)
        predictions.append(PredictionResult(
            date=add_months(last_date, step),
            predicted=max(0.0, value),
            confidence=calculate_confidence(len(points), algorithm, step),
        ))

    return predictions


def backtest_accuracy(
    series: Sequence[TimeSeriesSample],
    group: GroupId,
) -> dict[str, float]:
    """
    Score every algorithm on the last 25% of the series.

    Each algorithm is fit on the first 75% and predicts 1..len(test) months
    ahead; the score is max(0, 100 - RMSE × 100).

    Returns:
        {algorithm tag: accuracy %}, or {} with fewer than 12 samples. Keys
        are ForecastAlgorithm values; get_prediction_model(tag).name gives the
        display name (e.g. "linear" -> "Linear Trend").
    """
    if len(series) < BACKTEST_MIN_SAMPLES:
        logger.info(
            "Backtest skipped for %s: %d samples, need at least %d",
            GroupId(group).value, len(series), BACKTEST_MIN_SAMPLES,
        )
        return {}

    samples = _sorted_samples(series)
    points = _to_points(samples, GroupId(group))

    split = int(math.floor(len(points) * BACKTEST_TRAIN_FRACTION))
    training = points[:split]
    actuals = points[split:, 1]

    accuracies: dict[str, float] = {}
    for algorithm in ForecastAlgorithm:
        predictions = np.array([
            calculate_prediction(training, algorithm, step)
            for step in range(1, len(actuals) + 1)
        ])
        rmse = float(np.sqrt(np.mean((predictions - actuals) ** 2)))
        accuracies[algorithm.value] = max(0.0, 100.0 - rmse * 100.0)

    return accuracies
