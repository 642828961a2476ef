"""
Pydantic model for the environmental forcing at a single point.
"""

from pydantic import BaseModel, ConfigDict, Field


class EnvironmentalConditions(BaseModel):
    """Environmental conditions driving the biomass response model."""

    model_config = ConfigDict(frozen=True)

    temperature: float = Field(..., description="Water temperature (°C)")
    wind_speed: float = Field(0.0, ge=0, description="Wind speed (m/s)")
    wind_direction: float = Field(
        0.0, description="Wind direction (degrees). Not used by the model."
    )
    light: float = Field(
        1.0, description="Light availability, 0 = overcast, 1 = clear"
    )
    phosphorus: float = Field(..., description="Phosphorus (mmol P/m³)")
    nitrogen: float = Field(..., description="Nitrogen (mmol N/m³)")
    silicon: float = Field(0.0, description="Silicon (mmol Si/m³)")
    depth: float = Field(..., gt=0, description="Depth (m)")
    # Not bounded: months outside 1-12 fall back to a neutral seasonal factor
    month: int = Field(..., description="Calendar month, 1-12")
