"""Tests for food search and the search cache."""

import asyncio
from datetime import UTC, datetime, timedelta

import pytest

from pantry_api.domain.units import FoodUnit
from pantry_api.services.cache import InMemoryCache
from pantry_api.services.search import FoodSearchService
from tests.conftest import FakeFdcClient


def _service(client: FakeFdcClient) -> FoodSearchService:
    return FoodSearchService(client, InMemoryCache(), retry_delay_seconds=0)


def test_search_converts_fdc_foods() -> None:
    client = FakeFdcClient()

    foods = asyncio.run(_service(client).search("oats"))

    assert [food.name for food in foods] == ["Rolled oats (Quaker)", "Granola bar"]
    oats, bar = foods
    assert oats.measurement.value == 40
    assert oats.measurement.unit is FoodUnit.GRAM
    assert oats.nutrition.calories == 150
    assert oats.nutrition.protein == 5
    assert oats.nutrition.sodium == 2
    assert oats.nutrition.fiber is None
    assert bar.measurement.unit is FoodUnit.UNIT
    assert bar.nutrition.calories == 190
    assert client.calls == [("oats", 25)]


def test_search_uses_cache() -> None:
    client = FakeFdcClient()
    service = _service(client)

    first = asyncio.run(service.search("Oats"))
    second = asyncio.run(service.search("oats"))

    assert first == second
    assert len(client.calls) == 1


def test_search_retries_once() -> None:
    client = FakeFdcClient(failures_before_success=1)

    foods = asyncio.run(_service(client).search("oats"))

    assert len(foods) == 2
    assert len(client.calls) == 2


def test_search_gives_up_after_retry() -> None:
    client = FakeFdcClient(failures_before_success=2)

    with pytest.raises(RuntimeError):
        asyncio.run(_service(client).search("oats"))

    assert len(client.calls) == 2


def test_search_without_results() -> None:
    client = FakeFdcClient(result={"foods": []})

    assert asyncio.run(_service(client).search("nothing")) == []


def test_cache_entries_expire() -> None:
    now = datetime(2024, 1, 1, tzinfo=UTC)
    cache = InMemoryCache(clock=lambda: now)
    cache.set("key", "value", ttl_seconds=60)

    assert cache.get("key") == "value"

    now += timedelta(seconds=61)

    assert cache.get("key") is None
    assert len(cache) == 0


def test_cache_evicts_soonest_expiring_entry() -> None:
    cache = InMemoryCache(max_entries=2)
    cache.set("short", 1, ttl_seconds=10)
    cache.set("long", 2, ttl_seconds=100)

    cache.set("new", 3, ttl_seconds=50)

    assert cache.get("short") is None
    assert cache.get("long") == 2
    assert cache.get("new") == 3
