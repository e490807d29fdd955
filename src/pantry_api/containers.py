"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from pantry_api.adapters.fdc_client import HttpxFdcClient
from pantry_api.adapters.memory_repositories import (
    InMemoryFoodRepository,
    InMemoryRecipeRepository,
    InMemoryStore,
)
from pantry_api.adapters.supabase_food_repository import SupabaseFoodRepository
from pantry_api.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from pantry_api.config import Settings
from pantry_api.services.cache import InMemoryCache
from pantry_api.services.foods import FoodRepository, FoodService
from pantry_api.services.recipes import RecipeRepository, RecipeService
from pantry_api.services.search import FoodSearchService

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_service: FoodService
    recipe_service: RecipeService
    food_search_service: FoodSearchService | None
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None, *, warn_on_ephemeral_storage: bool = True
) -> AppContainer:
    """Create the default dependency container.

    Without Supabase credentials the services are backed by in-memory
    storage that is lost when the process exits. Without an FDC API key the
    food search service is left unset.
    """
    resolved_settings = settings or Settings()
    food_repository, recipe_repository = _build_repositories(
        resolved_settings, warn_on_ephemeral_storage=warn_on_ephemeral_storage
    )

    fdc_client = None
    food_search_service = None
    if resolved_settings.fdc_api_key:
        fdc_client = HttpxFdcClient.create(
            api_key=resolved_settings.fdc_api_key,
            base_url=resolved_settings.fdc_base_url,
        )
        food_search_service = FoodSearchService(
            fdc_client=fdc_client,
            cache=InMemoryCache(),
            search_ttl_seconds=resolved_settings.search_cache_ttl_seconds,
        )
    else:
        _logger.info("FDC_API_KEY is not set; food search is disabled")

    async def close_resources() -> None:
        if fdc_client is not None:
            await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        food_service=FoodService(food_repository),
        recipe_service=RecipeService(recipe_repository),
        food_search_service=food_search_service,
        close_resources=close_resources,
    )


def _build_repositories(
    settings: Settings, *, warn_on_ephemeral_storage: bool
) -> tuple[FoodRepository, RecipeRepository]:
    if settings.uses_supabase:
        supabase_client = create_client(
            settings.supabase_url, settings.supabase_service_key
        )
        return (
            SupabaseFoodRepository(supabase_client),
            SupabaseRecipeRepository(supabase_client),
        )
    if warn_on_ephemeral_storage:
        _logger.warning(
            "SUPABASE_URL or SUPABASE_SERVICE_KEY is not set; "
            "using in-memory storage, data will not persist"
        )
    store = InMemoryStore()
    return InMemoryFoodRepository(store), InMemoryRecipeRepository(store)
