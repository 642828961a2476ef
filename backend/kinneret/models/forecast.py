"""
Pydantic models for biomass time series and forecasts.
"""

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from kinneret.config import GroupId


class ForecastAlgorithm(str, Enum):
    LINEAR = "linear"            # OLS trend
    POLYNOMIAL = "polynomial"    # Quadratic through the last 3 points
    SEASONAL = "seasonal"        # Trend blended with monthly averages
    EXPONENTIAL = "exponential"  # Single exponential smoothing + recent delta
    ARIMA = "arima"              # AR(1) on first differences


class TimeSeriesSample(BaseModel):
    """One dated observation of biomass for all five groups (mmol P/m³)."""

    date: datetime.date
    diatoms: float = Field(..., ge=0)
    dinoflagellates: float = Field(..., ge=0)
    small_phyto: float = Field(..., ge=0)
    n_fixers: float = Field(..., ge=0)
    microcystis: float = Field(..., ge=0)

    def value(self, group: GroupId) -> float:
        return getattr(self, GroupId(group).value)


class PredictionModel(BaseModel):
    """Descriptor for one forecasting algorithm."""

    model_config = ConfigDict(frozen=True)

    algorithm: ForecastAlgorithm
    name: str
    description: str
    base_confidence: float = Field(..., ge=0.0, le=1.0)


class PredictionResult(BaseModel):
    """Forecast for a single future month."""

    date: datetime.date
    predicted: float               # ≥ 0
    confidence: float              # 0-1
    actual: Optional[float] = None
