"""Measurement value objects."""

import math
from dataclasses import dataclass

from pantry_api.domain.errors import InvalidMeasurementError
from pantry_api.domain.units import FoodUnit, conversion_factor


@dataclass(frozen=True)
class Measurement:
    """A numeric value expressed in a food unit."""

    value: float
    unit: FoodUnit = FoodUnit.UNIT

    def __post_init__(self) -> None:
        if not math.isfinite(self.value):
            raise InvalidMeasurementError(
                f"Measurement value must be finite, got {self.value}"
            )

    def convert(self, target: FoodUnit) -> "Measurement":
        """Return an equivalent measurement in the target unit."""
        if target is self.unit:
            return self
        return Measurement(
            value=self.value * conversion_factor(self.unit, target), unit=target
        )

    def __str__(self) -> str:
        return f"{self.value:g} {self.unit.friendly_name}"


def convert(measurement: Measurement, target: FoodUnit) -> Measurement:
    """Convert a measurement into another unit of the same dimension."""
    return measurement.convert(target)
