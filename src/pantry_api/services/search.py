"""Food search backed by USDA FoodData Central."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pantry_api.adapters.fdc_client import FdcClient
from pantry_api.domain.cooking import Food
from pantry_api.domain.measurement import Measurement
from pantry_api.domain.nutrition import Nutrition
from pantry_api.domain.units import FoodUnit
from pantry_api.services.cache import Cache

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

SEARCH_RESULT_LIMIT = 25

# FDC reports nutrient amounts per 100 g of food.
_FDC_REFERENCE_GRAMS = 100.0

_GRAM_UNITS = {"G", "GRM"}

_NUTRIENT_FIELDS = {
    "ENERGY": "calories",
    "TOTAL LIPID (FAT)": "total_fat",
    "FATTY ACIDS, TOTAL SATURATED": "saturated_fat",
    "FATTY ACIDS, TOTAL TRANS": "trans_fat",
    "CHOLESTEROL": "cholesterol",
    "SODIUM, NA": "sodium",
    "CARBOHYDRATE, BY DIFFERENCE": "carbohydrates",
    "FIBER, TOTAL DIETARY": "fiber",
    "SUGARS, TOTAL INCLUDING NLEA": "sugar",
    "PROTEIN": "protein",
}

_logger = logging.getLogger(__name__)


@dataclass
class FoodSearchService:
    """Search external food data and convert it to foods."""

    fdc_client: FdcClient
    cache: Cache
    search_ttl_seconds: int = 3600
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, query: str, limit: int = SEARCH_RESULT_LIMIT) -> list[Food]:
        """Return foods matching every word of the query."""
        cache_key = f"fdc:search:{query.lower()}:{limit}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call_with_retry(
            lambda: self.fdc_client.search_foods(query, page_size=limit),
            action="search",
        )
        foods = [
            food
            for food in (_food_from_fdc(raw) for raw in payload.get("foods") or [])
            if food is not None
        ]
        self.cache.set(cache_key, foods, ttl_seconds=self.search_ttl_seconds)
        _logger.info("Food search: query=%s results=%s", query, len(foods))
        return foods

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call an async function with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "Food %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _food_from_fdc(raw: dict[str, object]) -> Food | None:
    """Convert one FDC search hit; hits without a serving size are skipped."""
    serving_size = raw.get("servingSize")
    if serving_size is None:
        return None

    description = str(raw.get("description") or "")
    brand_name = raw.get("brandName")
    name = f"{description} ({brand_name})" if brand_name else description

    serving_unit = str(raw.get("servingSizeUnit") or "").upper()
    unit = FoodUnit.GRAM if serving_unit in _GRAM_UNITS else FoodUnit.UNIT
    measurement = Measurement(float(serving_size), unit)

    return Food(
        name=name,
        nutrition=_extract_nutrition(raw.get("foodNutrients") or [], measurement),
        measurement=measurement,
    )


def _extract_nutrition(
    food_nutrients: list[dict[str, object]], measurement: Measurement
) -> Nutrition:
    """Map FDC nutrients onto a base serving, rounded to whole numbers.

    Servings that are not measured in grams keep FDC's values unscaled.
    """
    if measurement.unit is FoodUnit.GRAM and measurement.value > 0:
        ratio = measurement.value / _FDC_REFERENCE_GRAMS
    else:
        ratio = 1.0

    values: dict[str, float | None] = {}
    for nutrient in food_nutrients:
        key = str(nutrient.get("nutrientName") or "").upper()
        field_name = _NUTRIENT_FIELDS.get(key)
        if field_name is None:
            _logger.debug("Ignored nutrient information: %s", key)
            continue
        amount = nutrient.get("value")
        values[field_name] = None if amount is None else float(round(float(amount) * ratio))
    return Nutrition(**values)
