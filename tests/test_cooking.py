"""Tests for foods, ingredients and recipes."""

from datetime import timedelta
from uuid import uuid4

import pytest

from pantry_api.domain.cooking import Food, Ingredient, Recipe
from pantry_api.domain.measurement import Measurement
from pantry_api.domain.nutrition import Nutrition
from pantry_api.domain.units import FoodUnit
from tests.conftest import make_food


def test_ingredient_nutrition_scales_food() -> None:
    ingredient = Ingredient(food=make_food(), quantity=Measurement(250, FoodUnit.GRAM))

    assert ingredient.nutrition is not None
    assert ingredient.nutrition.calories == pytest.approx(910)
    assert ingredient.nutrition.protein == pytest.approx(25)


def test_ingredient_without_food_data_has_no_nutrition() -> None:
    food = Food(name="Mystery", measurement=Measurement(1, FoodUnit.UNIT))

    assert Ingredient(food=food, quantity=Measurement(2)).nutrition is None


def test_total_time_combines_known_parts() -> None:
    assert Recipe().total_time is None
    assert Recipe(cooking_time=timedelta(minutes=5)).total_time == timedelta(minutes=5)
    assert Recipe(
        preparation_time=timedelta(minutes=10), cooking_time=timedelta(minutes=5)
    ).total_time == timedelta(minutes=15)


def test_recipe_totals_and_per_serving() -> None:
    flour = make_food()
    sugar = make_food("Sugar", calories=400)
    recipe = Recipe(
        ingredients=(
            Ingredient(food=flour, quantity=Measurement(200, FoodUnit.GRAM)),
            Ingredient(food=sugar, quantity=Measurement(50, FoodUnit.GRAM)),
        ),
        servings=4,
    )

    assert recipe.total_nutrition.calories == pytest.approx(928)
    assert recipe.nutrition_per_serving.calories == pytest.approx(232)
    assert recipe.total_nutrition.fiber is None


def test_recipe_defaults() -> None:
    recipe = Recipe()

    assert recipe.name == "New Recipe"
    assert recipe.servings == 1
    assert recipe.total_nutrition == Nutrition.empty()


def test_recipe_equality_ignores_ingredient_order() -> None:
    recipe_id = uuid4()
    first = Ingredient(food=make_food(), quantity=Measurement(1, FoodUnit.CUP))
    second = Ingredient(food=make_food("Salt"), quantity=Measurement(2, FoodUnit.GRAM))

    left = Recipe(id=recipe_id, instructions=("Mix",), ingredients=(first, second))
    right = Recipe(id=recipe_id, instructions=("Mix",), ingredients=(second, first))

    assert left == right
    assert hash(left) == hash(right)
    assert len({left, right}) == 1


def test_recipe_equality_respects_instruction_order() -> None:
    recipe_id = uuid4()

    assert Recipe(id=recipe_id, instructions=("a", "b")) != Recipe(
        id=recipe_id, instructions=("b", "a")
    )


def test_uses_food() -> None:
    food = make_food()
    recipe = Recipe(ingredients=(Ingredient(food=food, quantity=Measurement(1)),))

    assert recipe.uses_food(food.id)
    assert not recipe.uses_food(uuid4())
