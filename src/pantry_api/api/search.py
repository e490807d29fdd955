"""External search endpoints."""

from fastapi import APIRouter, Depends

from pantry_api.api.dependencies import get_container
from pantry_api.containers import AppContainer
from pantry_api.domain.errors import SearchUnavailableError
from pantry_api.mapping import food_to_payload
from pantry_api.payloads import FoodPayload
from pantry_api.services.search import SEARCH_RESULT_LIMIT

router = APIRouter(prefix="/search", tags=["search"])


@router.get("/foods/{query}")
async def search_foods(
    query: str, container: AppContainer = Depends(get_container)
) -> list[FoodPayload]:
    """Search FoodData Central for foods matching every word of the query."""
    if container.food_search_service is None:
        raise SearchUnavailableError("Food search is not configured.")
    foods = await container.food_search_service.search(query, limit=SEARCH_RESULT_LIMIT)
    return [food_to_payload(food) for food in foods]
