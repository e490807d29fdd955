"""Tests for the food service."""

from uuid import uuid4

import pytest

from pantry_api.domain.errors import FoodInUseError, NotFoundError, ValidationError
from pantry_api.payloads import FoodPayload, MeasurementPayload, RecipePayload
from pantry_api.services.foods import FoodService
from pantry_api.services.recipes import RecipeService
from tests.conftest import recipe_body


def test_add_creates_then_overwrites(food_service: FoodService) -> None:
    food_id = str(uuid4())

    created, was_created = food_service.add(FoodPayload(id=food_id, name="Flour"))
    updated, was_created_again = food_service.add(FoodPayload(id=food_id, name="Rye"))

    assert was_created
    assert not was_created_again
    assert created.id == updated.id
    assert food_service.get(updated.id).name == "Rye"
    assert len(food_service.list_all()) == 1


def test_add_rejects_invalid_payload(food_service: FoodService) -> None:
    payload = FoodPayload(
        name="Flour", measurement=MeasurementPayload(unit="sack", value=0)
    )

    with pytest.raises(ValidationError) as excinfo:
        food_service.add(payload)

    assert len(excinfo.value.messages) == 2
    assert food_service.list_all() == []


def test_get_missing_food(food_service: FoodService) -> None:
    with pytest.raises(NotFoundError):
        food_service.get(uuid4())


def test_edit_uses_path_id(food_service: FoodService) -> None:
    food, _ = food_service.add(FoodPayload(name="Flour"))

    edited = food_service.edit(food.id, FoodPayload(id=str(uuid4()), name="Spelt"))

    assert edited.id == food.id
    assert food_service.get(food.id).name == "Spelt"


def test_edit_missing_food(food_service: FoodService) -> None:
    with pytest.raises(NotFoundError):
        food_service.edit(uuid4(), FoodPayload(name="Ghost"))


def test_edit_validates_before_lookup(food_service: FoodService) -> None:
    payload = FoodPayload(name="Ghost", measurement=MeasurementPayload(value=-1))

    with pytest.raises(ValidationError):
        food_service.edit(uuid4(), payload)


def test_delete_unused_food(food_service: FoodService) -> None:
    food, _ = food_service.add(FoodPayload(name="Flour"))

    food_service.delete(food.id)

    assert food_service.list_all() == []
    with pytest.raises(NotFoundError):
        food_service.delete(food.id)


def test_delete_food_used_by_recipe(
    food_service: FoodService, recipe_service: RecipeService
) -> None:
    recipe, _ = recipe_service.add(RecipePayload.model_validate(recipe_body()))
    food_id = recipe.ingredients[0].food.id

    with pytest.raises(FoodInUseError):
        food_service.delete(food_id)

    assert food_service.get(food_id) is not None


def test_recipes_using_food(
    food_service: FoodService, recipe_service: RecipeService
) -> None:
    recipe, _ = recipe_service.add(RecipePayload.model_validate(recipe_body()))
    other, _ = food_service.add(FoodPayload(name="Unused"))
    food_id = recipe.ingredients[0].food.id

    assert [found.id for found in food_service.recipes_using(food_id)] == [recipe.id]
    assert food_service.recipes_using(other.id) == []
    with pytest.raises(NotFoundError):
        food_service.recipes_using(uuid4())
