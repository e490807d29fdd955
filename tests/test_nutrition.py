"""Tests for nutrition scaling and aggregation."""

import pytest

from pantry_api.domain.errors import IncompatibleDimensionError, InvalidMeasurementError
from pantry_api.domain.measurement import Measurement
from pantry_api.domain.nutrition import Nutrition, per_serving, scale, sum_nutrition
from pantry_api.domain.units import FoodUnit


def test_scale_converts_requested_quantity_to_base_unit() -> None:
    nutrition = Nutrition(calories=100, protein=4)

    scaled = scale(
        nutrition, Measurement(10, FoodUnit.MILLIGRAM), Measurement(1, FoodUnit.GRAM)
    )

    assert scaled.calories == pytest.approx(10000)
    assert scaled.protein == pytest.approx(400)
    assert scaled.sugar is None


def test_scale_rejects_zero_base() -> None:
    with pytest.raises(InvalidMeasurementError):
        scale(
            Nutrition(calories=1),
            Measurement(0, FoodUnit.GRAM),
            Measurement(1, FoodUnit.GRAM),
        )


def test_scale_rejects_incompatible_units() -> None:
    with pytest.raises(IncompatibleDimensionError):
        scale(
            Nutrition(calories=1),
            Measurement(1, FoodUnit.CUP),
            Measurement(1, FoodUnit.GRAM),
        )


def test_sum_keeps_unknown_fields_null() -> None:
    total = sum_nutrition(
        [Nutrition(calories=100, fiber=None), Nutrition(calories=50, sodium=3)]
    )

    assert total.calories == 150
    assert total.sodium == 3
    assert total.fiber is None


def test_sum_of_nothing_is_empty() -> None:
    total = sum_nutrition([])

    assert total == Nutrition.empty()
    assert total.is_empty


def test_per_serving_divides_known_fields() -> None:
    result = per_serving(Nutrition(calories=300, protein=None), 3)

    assert result.calories == 100
    assert result.protein is None


def test_per_serving_requires_a_serving() -> None:
    with pytest.raises(InvalidMeasurementError):
        per_serving(Nutrition(calories=300), 0)
