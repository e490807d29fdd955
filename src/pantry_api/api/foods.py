"""Food collection endpoints."""

from fastapi import APIRouter, Depends, Response, status

from pantry_api.api.dependencies import get_container, parse_entity_id
from pantry_api.containers import AppContainer
from pantry_api.mapping import food_to_payload, recipe_to_payload
from pantry_api.payloads import FoodPayload, RecipePayload

router = APIRouter(prefix="/foods", tags=["foods"])


@router.get("")
async def list_foods(
    container: AppContainer = Depends(get_container),
) -> list[FoodPayload]:
    """Return every food."""
    return [food_to_payload(food) for food in container.food_service.list_all()]


@router.get("/{food_id}")
async def get_food(
    food_id: str, container: AppContainer = Depends(get_container)
) -> FoodPayload:
    """Return a single food."""
    return food_to_payload(container.food_service.get(parse_entity_id(food_id)))


@router.post("")
async def add_food(
    payload: FoodPayload,
    response: Response,
    container: AppContainer = Depends(get_container),
) -> FoodPayload:
    """Create a food, or overwrite the food that already has the payload's id."""
    food, created = container.food_service.add(payload)
    if created:
        response.status_code = status.HTTP_201_CREATED
        response.headers["Location"] = str(food.id)
    return food_to_payload(food)


@router.put("/{food_id}", status_code=status.HTTP_204_NO_CONTENT)
async def edit_food(
    food_id: str,
    payload: FoodPayload,
    container: AppContainer = Depends(get_container),
) -> None:
    """Overwrite an existing food."""
    container.food_service.edit(parse_entity_id(food_id), payload)


@router.delete("/{food_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_food(
    food_id: str, container: AppContainer = Depends(get_container)
) -> None:
    """Delete a food that no recipe uses."""
    container.food_service.delete(parse_entity_id(food_id))


@router.get("/{food_id}/recipes")
async def recipes_using_food(
    food_id: str, container: AppContainer = Depends(get_container)
) -> list[RecipePayload]:
    """Return the recipes that use a food."""
    recipes = container.food_service.recipes_using(parse_entity_id(food_id))
    return [recipe_to_payload(recipe) for recipe in recipes]
