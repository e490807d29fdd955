"""Domain error types."""

from uuid import UUID


class PantryError(Exception):
    """Base class for errors raised by the application."""


class ValidationError(PantryError):
    """A payload could not be converted into a domain object."""

    def __init__(self, messages: list[str]) -> None:
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))


class UnknownUnitError(ValidationError):
    """A unit name is not present in the conversion table."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__([f"Unknown unit: {name!r}"])


class IncompatibleDimensionError(PantryError):
    """A conversion was attempted between units of different dimensions."""

    def __init__(self, source: object, target: object) -> None:
        self.source = source
        self.target = target
        super().__init__(f"Cannot convert {source} to {target}")


class InvalidMeasurementError(PantryError):
    """A measurement cannot be used, e.g. a zero base serving."""


class NotFoundError(PantryError):
    """An entity with the requested identifier does not exist."""

    def __init__(self, entity_id: UUID) -> None:
        self.entity_id = entity_id
        super().__init__(f"An entity with the ID {entity_id} does not exist.")


class FoodInUseError(PantryError):
    """A food cannot be deleted while recipes still reference it."""

    def __init__(self, food_id: UUID) -> None:
        self.food_id = food_id
        super().__init__(f"Food {food_id} is used by at least one recipe.")


class SearchUnavailableError(PantryError):
    """The external food search provider is not configured."""


class IngredientConflictError(ValidationError):
    """An ingredient id already belongs to a different recipe."""

    def __init__(self, ingredient_id: UUID) -> None:
        self.ingredient_id = ingredient_id
        super().__init__(
            [f"The ingredient ID {ingredient_id} is already used by another recipe."]
        )
