"""Location — a geographic fix attached to a sample."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class Location(BaseModel):
    """A single coordinate with its horizontal uncertainty.

    A negative ``horizontal_accuracy`` means the fix is unusable.
    """

    latitude: float = Field(..., ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180.0, le=180.0, allow_inf_nan=False)
    horizontal_accuracy: float = Field(
        default=0.0,
        allow_inf_nan=False,
        description="Radius of uncertainty in metres (negative = invalid)",
    )
    altitude: Optional[float] = Field(default=None, allow_inf_nan=False, description="Metres above sea level")

    model_config = {"frozen": True}

    @property
    def has_usable_coordinate(self) -> bool:
        """False for invalid fixes and the (0, 0) placeholder coordinate."""
        if self.horizontal_accuracy < 0:
            return False
        return not (self.latitude == 0.0 and self.longitude == 0.0)
