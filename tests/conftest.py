"""Shared test fixtures."""

from dataclasses import dataclass, field
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from pantry_api.adapters.fdc_client import FdcClient
from pantry_api.adapters.memory_repositories import (
    InMemoryFoodRepository,
    InMemoryRecipeRepository,
    InMemoryStore,
)
from pantry_api.api.app import create_app
from pantry_api.config import Settings
from pantry_api.containers import AppContainer
from pantry_api.domain.cooking import Food
from pantry_api.domain.measurement import Measurement
from pantry_api.domain.nutrition import Nutrition
from pantry_api.domain.units import FoodUnit
from pantry_api.services.cache import InMemoryCache
from pantry_api.services.foods import FoodService
from pantry_api.services.recipes import RecipeService
from pantry_api.services.search import FoodSearchService

FDC_SEARCH_RESULT: dict[str, object] = {
    "totalHits": 3,
    "foods": [
        {
            "fdcId": 1,
            "description": "Rolled oats",
            "brandName": "Quaker",
            "servingSize": 40,
            "servingSizeUnit": "g",
            "foodNutrients": [
                {"nutrientName": "Energy", "value": 375},
                {"nutrientName": "Protein", "value": 12.5},
                {"nutrientName": "Sodium, Na", "value": 5},
                {"nutrientName": "Iron, Fe", "value": 4.3},
            ],
        },
        {
            "fdcId": 2,
            "description": "Banana, raw",
            "foodNutrients": [{"nutrientName": "Energy", "value": 89}],
        },
        {
            "fdcId": 3,
            "description": "Granola bar",
            "servingSize": 1,
            "servingSizeUnit": "BAR",
            "foodNutrients": [{"nutrientName": "Energy", "value": 190}],
        },
    ],
}


@dataclass
class FakeFdcClient(FdcClient):
    """FDC client returning a canned search result."""

    result: dict[str, object] = field(default_factory=lambda: FDC_SEARCH_RESULT)
    failures_before_success: int = 0
    calls: list[tuple[str, int]] = field(default_factory=list)
    closed: bool = False

    async def search_foods(
        self,
        query: str,
        page_size: int = 25,
        page_number: int = 1,
        require_all_words: bool = True,
    ) -> dict[str, object]:
        self.calls.append((query, page_size))
        if self.failures_before_success > 0:
            self.failures_before_success -= 1
            raise RuntimeError("FDC is unavailable")
        return self.result

    async def close(self) -> None:
        self.closed = True


def make_food(
    name: str = "Flour",
    calories: float | None = 364,
    value: float = 100,
    unit: FoodUnit = FoodUnit.GRAM,
) -> Food:
    """Build a food with nutrition per ``value`` ``unit``."""
    return Food(
        name=name,
        nutrition=Nutrition(calories=calories, protein=10),
        measurement=Measurement(value, unit),
    )


def food_body(name: str = "Flour", **overrides: object) -> dict[str, object]:
    """Return a JSON food body as an API client would send it."""
    body: dict[str, object] = {
        "id": str(uuid4()),
        "name": name,
        "nutrition": {"calories": 364, "protein": 10},
        "measurement": {"unit": "gram", "value": 100},
    }
    body.update(overrides)
    return body


def recipe_body(**overrides: object) -> dict[str, object]:
    """Return a JSON recipe body with one ingredient."""
    body: dict[str, object] = {
        "id": str(uuid4()),
        "name": "Bread",
        "description": "A simple loaf",
        "instructions": ["Mix", "Bake"],
        "ingredients": [
            {
                "id": str(uuid4()),
                "food": food_body(),
                "quantity": {"unit": "gram", "value": 500},
            }
        ],
        "servings": 4,
        "preparationTime": 20,
        "cookingTime": 40,
    }
    body.update(overrides)
    return body


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        supabase_url=None,
        supabase_service_key=None,
        fdc_api_key="fdc-key",
        allowed_cors_origins=None,
    )


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def food_service(store: InMemoryStore) -> FoodService:
    return FoodService(InMemoryFoodRepository(store))


@pytest.fixture
def recipe_service(store: InMemoryStore) -> RecipeService:
    return RecipeService(InMemoryRecipeRepository(store))


@pytest.fixture
def fdc_client() -> FakeFdcClient:
    return FakeFdcClient()


@pytest.fixture
def container(
    settings: Settings,
    food_service: FoodService,
    recipe_service: RecipeService,
    fdc_client: FakeFdcClient,
) -> AppContainer:
    food_search_service = FoodSearchService(
        fdc_client=fdc_client,
        cache=InMemoryCache(),
        retry_delay_seconds=0,
    )

    async def close_resources() -> None:
        await fdc_client.close()

    return AppContainer(
        settings=settings,
        food_service=food_service,
        recipe_service=recipe_service,
        food_search_service=food_search_service,
        close_resources=close_resources,
    )


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))
