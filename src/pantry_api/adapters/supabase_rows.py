"""Row serialization shared by the Supabase repositories."""

import base64
from datetime import timedelta
from uuid import UUID

from pantry_api.domain.cooking import Food, Ingredient, Recipe, RecipeImage
from pantry_api.domain.measurement import Measurement
from pantry_api.domain.nutrition import NUTRIENT_FIELDS, Nutrition
from pantry_api.domain.units import parse_unit

# Recipes are read together with their ingredients and each ingredient's food.
RECIPE_COLUMNS = (
    "id, name, description, instructions, servings, preparation_seconds, "
    "cooking_seconds, ingredients(*, food:foods(*))"
)


def food_row(food: Food) -> dict[str, object]:
    """Serialize a food into a ``foods`` row."""
    nutrition = food.nutrition.as_dict() if food.nutrition else {}
    row: dict[str, object] = {
        "id": str(food.id),
        "name": food.name,
        "measurement_value": food.measurement.value if food.measurement else None,
        "measurement_unit": (
            food.measurement.unit.friendly_name if food.measurement else None
        ),
        "has_nutrition": food.nutrition is not None,
    }
    for name in NUTRIENT_FIELDS:
        row[name] = nutrition.get(name)
    return row


def parse_food_row(row: dict[str, object]) -> Food:
    """Parse a ``foods`` row into a domain model."""
    measurement = None
    unit = row.get("measurement_unit")
    value = row.get("measurement_value")
    if isinstance(unit, str) and value is not None:
        measurement = Measurement(float(value), parse_unit(unit))

    nutrition = None
    if row.get("has_nutrition"):
        nutrition = Nutrition(
            **{
                name: float(row[name]) if row.get(name) is not None else None
                for name in NUTRIENT_FIELDS
            }
        )
    return Food(
        id=UUID(str(row["id"])),
        name=str(row.get("name") or ""),
        nutrition=nutrition,
        measurement=measurement,
    )


def recipe_row(recipe: Recipe) -> dict[str, object]:
    """Serialize a recipe's own columns into a ``recipes`` row."""
    return {
        "id": str(recipe.id),
        "name": recipe.name,
        "description": recipe.description,
        "instructions": list(recipe.instructions),
        "servings": recipe.servings,
        "preparation_seconds": _to_seconds(recipe.preparation_time),
        "cooking_seconds": _to_seconds(recipe.cooking_time),
    }


def ingredient_rows(recipe: Recipe) -> list[dict[str, object]]:
    """Serialize a recipe's ingredients into ``ingredients`` rows."""
    return [
        {
            "id": str(ingredient.id),
            "recipe_id": str(recipe.id),
            "food_id": str(ingredient.food.id),
            "quantity_value": ingredient.quantity.value,
            "quantity_unit": ingredient.quantity.unit.friendly_name,
        }
        for ingredient in recipe.ingredients
    ]


def parse_recipe_row(row: dict[str, object]) -> Recipe:
    """Parse a ``recipes`` row with embedded ingredients into a domain model."""
    ingredients = tuple(
        Ingredient(
            id=UUID(str(ingredient["id"])),
            food=parse_food_row(ingredient["food"]),
            quantity=Measurement(
                float(ingredient["quantity_value"]),
                parse_unit(str(ingredient["quantity_unit"])),
            ),
        )
        for ingredient in row.get("ingredients") or []
    )
    return Recipe(
        id=UUID(str(row["id"])),
        name=str(row.get("name") or ""),
        description=row.get("description"),
        instructions=tuple(row.get("instructions") or ()),
        ingredients=ingredients,
        servings=int(row.get("servings") or 1),
        preparation_time=_from_seconds(row.get("preparation_seconds")),
        cooking_time=_from_seconds(row.get("cooking_seconds")),
    )


def image_row(image: RecipeImage | None) -> dict[str, object]:
    """Serialize an image into the ``recipes`` image columns."""
    if image is None:
        return {"image_data": None, "image_content_type": None}
    return {
        "image_data": base64.b64encode(image.data).decode("ascii"),
        "image_content_type": image.content_type,
    }


def parse_image_row(row: dict[str, object]) -> RecipeImage | None:
    """Parse the image columns of a ``recipes`` row."""
    data = row.get("image_data")
    if not isinstance(data, str) or not data:
        return None
    return RecipeImage(
        data=base64.b64decode(data),
        content_type=str(row.get("image_content_type") or "application/octet-stream"),
    )


def _to_seconds(value: timedelta | None) -> int | None:
    return None if value is None else int(value.total_seconds())


def _from_seconds(value: object) -> timedelta | None:
    return None if value is None else timedelta(seconds=int(value))
