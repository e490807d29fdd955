"""Nutrition values and aggregation.

Every nutrient is optional. ``None`` means the value is unknown, which is
different from a confirmed zero, so the aggregation helpers keep nulls
wherever no input supplied a value.
"""

from collections.abc import Iterable
from dataclasses import dataclass, fields, replace

from pantry_api.domain.errors import InvalidMeasurementError
from pantry_api.domain.measurement import Measurement


@dataclass(frozen=True)
class Nutrition:
    """Nutritional content of a food per its base measurement."""

    calories: float | None = None
    total_fat: float | None = None
    saturated_fat: float | None = None
    trans_fat: float | None = None
    cholesterol: float | None = None
    sodium: float | None = None
    carbohydrates: float | None = None
    fiber: float | None = None
    sugar: float | None = None
    protein: float | None = None

    @classmethod
    def empty(cls) -> "Nutrition":
        """Return nutrition with every nutrient unknown."""
        return cls()

    @property
    def is_empty(self) -> bool:
        """Return true when no nutrient is known."""
        return all(value is None for value in self.as_dict().values())

    def as_dict(self) -> dict[str, float | None]:
        """Return nutrients keyed by field name."""
        return {name: getattr(self, name) for name in NUTRIENT_FIELDS}

    def multiply(self, ratio: float) -> "Nutrition":
        """Multiply every known nutrient by ``ratio``."""
        return replace(
            self,
            **{
                name: value * ratio
                for name, value in self.as_dict().items()
                if value is not None
            },
        )


NUTRIENT_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(Nutrition))


def scale(
    food_nutrition: Nutrition, base: Measurement, requested: Measurement
) -> Nutrition:
    """Scale a food's base nutrition to a requested quantity.

    The requested quantity is converted into the base measurement's unit
    first, so it must share its dimension.
    """
    if base.value <= 0:
        raise InvalidMeasurementError(
            f"Base measurement must be strictly positive, got {base}"
        )
    converted = requested.convert(base.unit)
    return food_nutrition.multiply(converted.value / base.value)


def sum_nutrition(items: Iterable[Nutrition]) -> Nutrition:
    """Add nutrition field by field.

    A field is the sum of the known values, or ``None`` when no item knows it.
    """
    totals: dict[str, float | None] = dict.fromkeys(NUTRIENT_FIELDS)
    for item in items:
        for name, value in item.as_dict().items():
            if value is None:
                continue
            current = totals[name]
            totals[name] = value if current is None else current + value
    return Nutrition(**totals)


def per_serving(total: Nutrition, servings: int) -> Nutrition:
    """Divide known nutrients by the number of servings."""
    if servings < 1:
        raise InvalidMeasurementError(f"Servings must be at least 1, got {servings}")
    return replace(
        total,
        **{
            name: value / servings
            for name, value in total.as_dict().items()
            if value is not None
        },
    )
