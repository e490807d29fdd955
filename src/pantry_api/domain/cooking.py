"""Domain models for foods, ingredients and recipes."""

from collections import Counter
from dataclasses import dataclass, field
from datetime import timedelta
from uuid import UUID, uuid4

from pantry_api.domain.measurement import Measurement
from pantry_api.domain.nutrition import Nutrition, per_serving, scale, sum_nutrition


@dataclass(frozen=True)
class Food:
    """A food with its nutrition per base serving."""

    name: str
    nutrition: Nutrition | None = None
    measurement: Measurement | None = None
    id: UUID = field(default_factory=uuid4)


@dataclass(frozen=True)
class Ingredient:
    """A quantity of a food used by a recipe."""

    food: Food
    quantity: Measurement
    id: UUID = field(default_factory=uuid4)

    @property
    def nutrition(self) -> Nutrition | None:
        """Return the food's nutrition scaled to this ingredient's quantity."""
        if self.food.nutrition is None or self.food.measurement is None:
            return None
        return scale(self.food.nutrition, self.food.measurement, self.quantity)


@dataclass(frozen=True)
class RecipeImage:
    """Binary image attached to a recipe."""

    data: bytes
    content_type: str


@dataclass(frozen=True, eq=False)
class Recipe:
    """A recipe owning an unordered collection of ingredients."""

    name: str = "New Recipe"
    description: str | None = None
    instructions: tuple[str, ...] = ()
    ingredients: tuple[Ingredient, ...] = ()
    servings: int = 1
    preparation_time: timedelta | None = None
    cooking_time: timedelta | None = None
    id: UUID = field(default_factory=uuid4)

    @property
    def total_time(self) -> timedelta | None:
        """Return preparation plus cooking time, skipping unknown parts."""
        if self.preparation_time is None:
            return self.cooking_time
        if self.cooking_time is None:
            return self.preparation_time
        return self.preparation_time + self.cooking_time

    @property
    def total_nutrition(self) -> Nutrition:
        """Return the summed nutrition of every ingredient."""
        return sum_nutrition(
            nutrition
            for nutrition in (ingredient.nutrition for ingredient in self.ingredients)
            if nutrition is not None
        )

    @property
    def nutrition_per_serving(self) -> Nutrition:
        """Return total nutrition divided across the servings."""
        return per_serving(self.total_nutrition, self.servings)

    def uses_food(self, food_id: UUID) -> bool:
        """Return true when any ingredient references the food."""
        return any(ingredient.food.id == food_id for ingredient in self.ingredients)

    def _key(self) -> tuple[object, ...]:
        return (
            self.id,
            self.name,
            self.description,
            self.instructions,
            self.servings,
            self.preparation_time,
            self.cooking_time,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Recipe):
            return NotImplemented
        return self._key() == other._key() and Counter(self.ingredients) == Counter(
            other.ingredients
        )

    def __hash__(self) -> int:
        return hash((self._key(), frozenset(Counter(self.ingredients).items())))
