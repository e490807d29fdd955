"""Services for managing foods."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from pantry_api.domain.cooking import Food, Recipe
from pantry_api.domain.errors import FoodInUseError, NotFoundError, ValidationError
from pantry_api.mapping import food_from_payload
from pantry_api.payloads import FoodPayload

_logger = logging.getLogger(__name__)


class FoodRepository(Protocol):
    """Persistence interface for foods."""

    def list_foods(self) -> list[Food]:
        """Return every stored food."""

    def get_food(self, food_id: UUID) -> Food | None:
        """Return a food by id, if present."""

    def save_food(self, food: Food) -> Food:
        """Insert or overwrite a food and return it."""

    def delete_food(self, food_id: UUID) -> None:
        """Delete a food; raises FoodInUseError when it is referenced."""

    def is_food_referenced(self, food_id: UUID) -> bool:
        """Return true when any ingredient references the food."""

    def list_recipes_using_food(self, food_id: UUID) -> list[Recipe]:
        """Return recipes with an ingredient referencing the food."""


@dataclass
class FoodService:
    """Application service for food CRUD operations."""

    repository: FoodRepository

    def list_all(self) -> list[Food]:
        """Return every food."""
        return self.repository.list_foods()

    def get(self, food_id: UUID) -> Food:
        """Return a food, raising NotFoundError when it does not exist."""
        food = self.repository.get_food(food_id)
        if food is None:
            raise NotFoundError(food_id)
        return food

    def add(self, payload: FoodPayload) -> tuple[Food, bool]:
        """Add a food, or overwrite it when its id already exists.

        Returns the stored food and whether it was newly created.
        """
        _raise_if_invalid(payload)
        food = food_from_payload(payload)
        created = self.repository.get_food(food.id) is None
        saved = self.repository.save_food(food)
        _logger.info("%s food %s", "Created" if created else "Updated", saved.id)
        return saved, created

    def edit(self, food_id: UUID, payload: FoodPayload) -> Food:
        """Overwrite an existing food with the payload."""
        payload.id = str(food_id)
        _raise_if_invalid(payload)
        if self.repository.get_food(food_id) is None:
            raise NotFoundError(food_id)
        saved = self.repository.save_food(food_from_payload(payload))
        _logger.info("Updated food %s", food_id)
        return saved

    def delete(self, food_id: UUID) -> None:
        """Delete a food that no recipe uses."""
        if self.repository.get_food(food_id) is None:
            raise NotFoundError(food_id)
        if self.repository.is_food_referenced(food_id):
            raise FoodInUseError(food_id)
        self.repository.delete_food(food_id)
        _logger.info("Deleted food %s", food_id)

    def recipes_using(self, food_id: UUID) -> list[Recipe]:
        """Return the recipes that use a food as an ingredient."""
        if self.repository.get_food(food_id) is None:
            raise NotFoundError(food_id)
        return self.repository.list_recipes_using_food(food_id)


def _raise_if_invalid(payload: FoodPayload) -> None:
    errors = payload.validation_errors()
    if errors:
        raise ValidationError(errors)
