"""Pydantic payload models exchanged with API clients.

Payloads are checked in two steps. Pydantic enforces the wire types, then
``validation_errors`` checks that the payload can be converted into a domain
object, reporting every defect found rather than stopping at the first one.
"""

import math
from collections import Counter
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pantry_api.domain.units import FoodUnit, is_known_unit, unit_names

INVALID_ID_MESSAGE = "The ID provided is not a valid UUID."


class _Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def validation_errors(self) -> list[str]:
        """Return every reason the payload is invalid; empty when valid."""
        return []

    @property
    def is_valid(self) -> bool:
        """Return true when the payload has no validation errors."""
        return not self.validation_errors()


class MeasurementPayload(_Payload):
    """Wire shape of a measurement."""

    unit: str = FoodUnit.UNIT.friendly_name
    value: float = 1

    def validation_errors(self) -> list[str]:
        """Check the unit name and that the value is a finite positive number."""
        errors: list[str] = []
        if not is_known_unit(self.unit):
            errors.append(
                f"The provided unit was not one of: {', '.join(unit_names())}"
            )
        if not math.isfinite(self.value):
            errors.append("The measurement's value must be a finite number.")
        elif self.value <= 0:
            errors.append("The measurement's value must be strictly greater than 0.")
        return errors

    def __hash__(self) -> int:
        return hash((self.unit, self.value))


class NutritionPayload(_Payload):
    """Wire shape of nutrition values; every nutrient is optional."""

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

    def __hash__(self) -> int:
        return hash(tuple(self.model_dump().values()))


class FoodPayload(_Payload):
    """Wire shape of a food."""

    id: str | None = None
    name: str | None = None
    nutrition: NutritionPayload | None = None
    measurement: MeasurementPayload | None = None

    def validation_errors(self) -> list[str]:
        """Check the id and the base measurement."""
        errors: list[str] = []
        if not _is_valid_id(self.id):
            errors.append(INVALID_ID_MESSAGE)
        if self.measurement is not None:
            errors.extend(self.measurement.validation_errors())
        return errors

    def __hash__(self) -> int:
        return hash((self.id, self.name, self.nutrition, self.measurement))


class IngredientPayload(_Payload):
    """Wire shape of an ingredient."""

    id: str | None = None
    food: FoodPayload
    quantity: MeasurementPayload
    nutrition: NutritionPayload | None = None

    def validation_errors(self) -> list[str]:
        """Check the id, the referenced food and the quantity."""
        errors: list[str] = []
        if not _is_valid_id(self.id):
            errors.append(INVALID_ID_MESSAGE)
        errors.extend(self.food.validation_errors())
        errors.extend(self.quantity.validation_errors())
        return errors

    def __hash__(self) -> int:
        return hash((self.id, self.food, self.quantity, self.nutrition))


class RecipePayload(_Payload):
    """Wire shape of a recipe.

    Times are whole minutes. Ingredients form an unordered collection, so
    equality and hashing ignore their order; instructions keep theirs.
    """

    id: str | None = None
    name: str | None = None
    description: str | None = None
    instructions: list[str] = Field(default_factory=list)
    ingredients: list[IngredientPayload] = Field(default_factory=list)
    servings: int | None = Field(default=None, ge=0)
    preparation_time: int | None = Field(default=None, ge=0)
    cooking_time: int | None = Field(default=None, ge=0)
    total_time: int | None = Field(default=None, ge=0)
    total_nutrition: NutritionPayload | None = None
    nutrition_per_serving: NutritionPayload | None = None

    def validation_errors(self) -> list[str]:
        """Check the id, instructions, ingredients and servings."""
        errors: list[str] = []
        if not _is_valid_id(self.id):
            errors.append(INVALID_ID_MESSAGE)
        if not self.instructions:
            errors.append(
                "There must be at least one instruction for creating the recipe."
            )
        if not self.ingredients:
            errors.append("There must be at least one ingredient for the recipe.")
        for ingredient in self.ingredients:
            errors.extend(
                f"({ingredient.food.name or ingredient.food.id or ''}): {message}"
                for message in ingredient.validation_errors()
            )
        if self.servings == 0:
            errors.append("The recipe must make at least 1 serving.")
        return errors

    def _scalars(self) -> tuple[object, ...]:
        return (
            self.id,
            self.name,
            self.description,
            self.servings,
            self.preparation_time,
            self.cooking_time,
            self.total_time,
            self.total_nutrition,
            self.nutrition_per_serving,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecipePayload):
            return NotImplemented
        return (
            self._scalars() == other._scalars()
            and self.instructions == other.instructions
            and Counter(self.ingredients) == Counter(other.ingredients)
        )

    def __hash__(self) -> int:
        return hash(
            (
                self._scalars(),
                tuple(self.instructions),
                tuple(sorted(hash(ingredient) for ingredient in self.ingredients)),
            )
        )


def _is_valid_id(raw: str | None) -> bool:
    if raw is None:
        return True
    try:
        UUID(raw)
    except ValueError:
        return False
    return True
