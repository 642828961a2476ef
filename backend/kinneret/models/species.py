"""
Pydantic model for phytoplankton functional group parameters.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SpeciesProfile(BaseModel):
    """Static growth parameters for one phytoplankton functional group."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""

    optimal_temp: float                  # °C
    temp_range: tuple[float, float]      # (min, max) °C

    # Half-saturation constants (mmol/m³). ks_si = 0 disables Si limitation.
    ks_p: float = Field(..., ge=0)
    ks_n: float = Field(..., ge=0)
    ks_si: float = Field(0.0, ge=0)
    fixes_nitrogen: bool = False         # N2 fixers are never N-limited

    q10: float = Field(..., gt=0)
    # Positive = mixing helps growth, negative = mixing harms it
    mixing_sensitivity: float = Field(..., ge=-1.0, le=1.0)
    light_sensitivity: float = Field(..., ge=0.0, le=1.0)

    # Multiplicative growth factor for each calendar month (Jan..Dec)
    seasonal_pattern: tuple[float, ...] = Field(..., min_length=12, max_length=12)

    @model_validator(mode="after")
    def _check_temperature_window(self):
        t_min, t_max = self.temp_range
        if not t_min <= self.optimal_temp <= t_max:
            raise ValueError(
                f"optimal_temp {self.optimal_temp} must lie within "
                f"temp_range [{t_min}, {t_max}]"
            )
        return self
