"""Recipe collection and recipe image endpoints."""

from fastapi import APIRouter, Depends, File, Response, UploadFile, status

from pantry_api.api.dependencies import get_container, parse_entity_id
from pantry_api.containers import AppContainer
from pantry_api.mapping import recipe_to_payload
from pantry_api.payloads import RecipePayload

router = APIRouter(prefix="/recipes", tags=["recipes"])


@router.get("")
async def list_recipes(
    container: AppContainer = Depends(get_container),
) -> list[RecipePayload]:
    """Return every recipe with its ingredients."""
    return [recipe_to_payload(recipe) for recipe in container.recipe_service.list_all()]


@router.get("/{recipe_id}")
async def get_recipe(
    recipe_id: str, container: AppContainer = Depends(get_container)
) -> RecipePayload:
    """Return a single recipe."""
    return recipe_to_payload(container.recipe_service.get(parse_entity_id(recipe_id)))


@router.post("")
async def add_recipe(
    payload: RecipePayload,
    response: Response,
    container: AppContainer = Depends(get_container),
) -> RecipePayload:
    """Create a recipe, or overwrite the recipe that already has the payload's id."""
    recipe, created = container.recipe_service.add(payload)
    if created:
        response.status_code = status.HTTP_201_CREATED
        response.headers["Location"] = str(recipe.id)
    return recipe_to_payload(recipe)


@router.put("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def edit_recipe(
    recipe_id: str,
    payload: RecipePayload,
    container: AppContainer = Depends(get_container),
) -> None:
    """Overwrite an existing recipe."""
    container.recipe_service.edit(parse_entity_id(recipe_id), payload)


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(
    recipe_id: str, container: AppContainer = Depends(get_container)
) -> None:
    """Delete a recipe and its ingredients."""
    container.recipe_service.delete(parse_entity_id(recipe_id))


@router.get("/{recipe_id}/image")
async def get_recipe_image(
    recipe_id: str, container: AppContainer = Depends(get_container)
) -> Response:
    """Return the recipe's image bytes, or 204 when it has none."""
    image = container.recipe_service.get_image(parse_entity_id(recipe_id))
    if image is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return Response(content=image.data, media_type=image.content_type)


@router.post("/{recipe_id}/image", status_code=status.HTTP_204_NO_CONTENT)
async def set_recipe_image(
    recipe_id: str,
    image: UploadFile = File(...),
    container: AppContainer = Depends(get_container),
) -> None:
    """Attach an uploaded image to a recipe."""
    entity_id = parse_entity_id(recipe_id)
    data = await image.read()
    container.recipe_service.set_image(
        entity_id, data, image.content_type or "application/octet-stream"
    )


@router.delete("/{recipe_id}/image", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe_image(
    recipe_id: str, container: AppContainer = Depends(get_container)
) -> None:
    """Remove a recipe's image."""
    container.recipe_service.delete_image(parse_entity_id(recipe_id))
