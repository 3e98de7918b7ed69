"""Routing settings shared by the CLI and library callers."""

from pydantic import BaseModel, Field, model_validator

from .routing.distance import (
    DEFAULT_LONG_ABOVE,
    DEFAULT_PIXELS_PER_METER,
    DEFAULT_SHORT_BELOW,
    DistanceCalculator,
)
from .routing.models import CostMode
from .routing.navigation import DEFAULT_ADVANCE_DELAY


class RoutingSettings(BaseModel):
    """Tunable routing parameters.

    Precedence, lowest first: these defaults, the map file's
    ``pixelsPerMeter``, explicit overrides (CLI options or their
    ``INDOORNAV_*`` environment variables).
    """

    pixels_per_meter: float = Field(default=DEFAULT_PIXELS_PER_METER, gt=0)
    short_below: int = Field(default=DEFAULT_SHORT_BELOW, ge=0)
    long_above: int = Field(default=DEFAULT_LONG_ABOVE, ge=0)
    cost_mode: CostMode = CostMode.HOPS
    advance_delay: float = Field(default=DEFAULT_ADVANCE_DELAY, ge=0)

    @model_validator(mode="after")
    def check_bins(self) -> "RoutingSettings":
        if self.short_below > self.long_above:
            raise ValueError("short_below must not exceed long_above")
        return self

    @classmethod
    def resolve(cls, map_pixels_per_meter: float | None = None, **overrides) -> "RoutingSettings":
        """Merge map-level values and non-None overrides over the defaults."""
        data = {}
        if map_pixels_per_meter is not None:
            data["pixels_per_meter"] = map_pixels_per_meter
        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(data)

    def calculator(self) -> DistanceCalculator:
        return DistanceCalculator(
            pixels_per_meter=self.pixels_per_meter,
            short_below=self.short_below,
            long_above=self.long_above,
        )
