"""Food measurement units and conversion factors."""

from enum import Enum

from pantry_api.domain.errors import IncompatibleDimensionError, UnknownUnitError


class Dimension(Enum):
    """Physical quantity a unit measures."""

    MASS = "mass"
    VOLUME = "volume"
    COUNT = "count"


class FoodUnit(Enum):
    """Units a food quantity may be expressed in.

    The value of each member is its wire name.
    """

    GRAM = "gram"
    MILLIGRAM = "milligram"
    LITER = "liter"
    MILLILITER = "milliliter"
    OUNCE = "ounce"
    FLUID_OUNCE = "fluid ounce"
    POUND = "pound"
    CUP = "cup"
    TABLESPOON = "tablespoon"
    TEASPOON = "teaspoon"
    UNIT = "unit"

    @property
    def friendly_name(self) -> str:
        """Return the lowercase display name used at the API boundary."""
        return self.value

    @property
    def dimension(self) -> Dimension:
        """Return the dimension this unit belongs to."""
        return _TABLE[self][0]

    @property
    def factor(self) -> float:
        """Return the factor converting this unit to its dimension's base unit."""
        return _TABLE[self][1]


# Base units: gram, milliliter and unit. Volumes use US customary measures.
_TABLE: dict[FoodUnit, tuple[Dimension, float]] = {
    FoodUnit.GRAM: (Dimension.MASS, 1.0),
    FoodUnit.MILLIGRAM: (Dimension.MASS, 0.001),
    FoodUnit.OUNCE: (Dimension.MASS, 28.349523125),
    FoodUnit.POUND: (Dimension.MASS, 453.59237),
    FoodUnit.MILLILITER: (Dimension.VOLUME, 1.0),
    FoodUnit.LITER: (Dimension.VOLUME, 1000.0),
    FoodUnit.FLUID_OUNCE: (Dimension.VOLUME, 29.5735295625),
    FoodUnit.CUP: (Dimension.VOLUME, 236.5882365),
    FoodUnit.TABLESPOON: (Dimension.VOLUME, 14.78676478125),
    FoodUnit.TEASPOON: (Dimension.VOLUME, 4.92892159375),
    FoodUnit.UNIT: (Dimension.COUNT, 1.0),
}

_BY_NAME = {unit.friendly_name: unit for unit in FoodUnit}


def unit_names() -> list[str]:
    """Return every wire name in declaration order."""
    return [unit.friendly_name for unit in FoodUnit]


def parse_unit(name: str) -> FoodUnit:
    """Parse a wire name, ignoring case."""
    unit = _BY_NAME.get(name.lower())
    if unit is None:
        raise UnknownUnitError(name)
    return unit


def is_known_unit(name: str) -> bool:
    """Return true when the name parses as a unit."""
    return name.lower() in _BY_NAME


def conversion_factor(source: FoodUnit, target: FoodUnit) -> float:
    """Return the multiplier converting a value in ``source`` to ``target``."""
    if source.dimension is not target.dimension:
        raise IncompatibleDimensionError(source.friendly_name, target.friendly_name)
    return source.factor / target.factor


def commensurate(first: FoodUnit, second: FoodUnit) -> bool:
    """Return true when values in the two units can be converted."""
    return first.dimension is second.dimension
