"""Conversions between API payloads and domain models.

Payloads must be validated before being mapped into the domain. Derived
payload fields (ingredient nutrition, recipe totals) are computed from the
domain on the way out and ignored on the way in.
"""

import logging
from datetime import timedelta
from uuid import UUID, uuid4

from pantry_api.domain.cooking import Food, Ingredient, Recipe
from pantry_api.domain.errors import IncompatibleDimensionError, InvalidMeasurementError
from pantry_api.domain.measurement import Measurement
from pantry_api.domain.nutrition import Nutrition, per_serving, sum_nutrition
from pantry_api.domain.units import parse_unit
from pantry_api.payloads import (
    FoodPayload,
    IngredientPayload,
    MeasurementPayload,
    NutritionPayload,
    RecipePayload,
)

_logger = logging.getLogger(__name__)


def measurement_to_payload(measurement: Measurement) -> MeasurementPayload:
    return MeasurementPayload(
        unit=measurement.unit.friendly_name, value=measurement.value
    )


def measurement_from_payload(payload: MeasurementPayload) -> Measurement:
    return Measurement(value=payload.value, unit=parse_unit(payload.unit))


def nutrition_to_payload(nutrition: Nutrition) -> NutritionPayload:
    return NutritionPayload(**nutrition.as_dict())


def nutrition_from_payload(payload: NutritionPayload) -> Nutrition:
    return Nutrition(**payload.model_dump())


def food_to_payload(food: Food) -> FoodPayload:
    return FoodPayload(
        id=str(food.id),
        name=food.name,
        nutrition=(
            nutrition_to_payload(food.nutrition) if food.nutrition is not None else None
        ),
        measurement=(
            measurement_to_payload(food.measurement)
            if food.measurement is not None
            else None
        ),
    )


def food_from_payload(payload: FoodPayload) -> Food:
    return Food(
        id=_id_from_payload(payload.id),
        name=payload.name or "",
        nutrition=(
            nutrition_from_payload(payload.nutrition)
            if payload.nutrition is not None
            else None
        ),
        measurement=(
            measurement_from_payload(payload.measurement)
            if payload.measurement is not None
            else None
        ),
    )


def ingredient_to_payload(ingredient: Ingredient) -> IngredientPayload:
    nutrition = _rendered_nutrition(ingredient)
    return IngredientPayload(
        id=str(ingredient.id),
        food=food_to_payload(ingredient.food),
        quantity=measurement_to_payload(ingredient.quantity),
        nutrition=nutrition_to_payload(nutrition) if nutrition is not None else None,
    )


def ingredient_from_payload(payload: IngredientPayload) -> Ingredient:
    return Ingredient(
        id=_id_from_payload(payload.id),
        food=food_from_payload(payload.food),
        quantity=measurement_from_payload(payload.quantity),
    )


def recipe_to_payload(recipe: Recipe) -> RecipePayload:
    """Render a recipe, including its derived times and nutrition."""
    nutritions = [_rendered_nutrition(ingredient) for ingredient in recipe.ingredients]
    total = sum_nutrition(
        nutrition for nutrition in nutritions if nutrition is not None
    )
    return RecipePayload(
        id=str(recipe.id),
        name=recipe.name,
        description=recipe.description,
        instructions=list(recipe.instructions),
        ingredients=[
            ingredient_to_payload(ingredient) for ingredient in recipe.ingredients
        ],
        servings=recipe.servings,
        preparation_time=timedelta_to_minutes(recipe.preparation_time),
        cooking_time=timedelta_to_minutes(recipe.cooking_time),
        total_time=timedelta_to_minutes(recipe.total_time),
        total_nutrition=None if total.is_empty else nutrition_to_payload(total),
        nutrition_per_serving=(
            None
            if total.is_empty
            else nutrition_to_payload(per_serving(total, recipe.servings))
        ),
    )


def recipe_from_payload(payload: RecipePayload) -> Recipe:
    return Recipe(
        id=_id_from_payload(payload.id),
        name=payload.name if payload.name is not None else "New Recipe",
        description=payload.description,
        instructions=tuple(payload.instructions),
        ingredients=tuple(
            ingredient_from_payload(ingredient) for ingredient in payload.ingredients
        ),
        servings=payload.servings if payload.servings is not None else 1,
        preparation_time=minutes_to_timedelta(payload.preparation_time),
        cooking_time=minutes_to_timedelta(payload.cooking_time),
    )


def minutes_to_timedelta(minutes: int | None) -> timedelta | None:
    """Convert whole minutes from the wire into a duration."""
    if minutes is None:
        return None
    return timedelta(minutes=minutes)


def timedelta_to_minutes(duration: timedelta | None) -> int | None:
    """Convert a duration into whole minutes, truncating any remainder."""
    if duration is None:
        return None
    return int(duration.total_seconds() // 60)


def _id_from_payload(raw: str | None) -> UUID:
    return UUID(raw) if raw is not None else uuid4()


def _rendered_nutrition(ingredient: Ingredient) -> Nutrition | None:
    try:
        return ingredient.nutrition
    except (IncompatibleDimensionError, InvalidMeasurementError):
        _logger.warning(
            "Cannot compute nutrition for ingredient %s using food %s",
            ingredient.id,
            ingredient.food.id,
        )
        return None
