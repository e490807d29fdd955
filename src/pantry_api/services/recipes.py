"""Services for managing recipes and their images."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from pantry_api.domain.cooking import Recipe, RecipeImage
from pantry_api.domain.errors import NotFoundError, ValidationError
from pantry_api.domain.units import commensurate
from pantry_api.mapping import recipe_from_payload
from pantry_api.payloads import RecipePayload

_logger = logging.getLogger(__name__)


class RecipeRepository(Protocol):
    """Persistence interface for recipes.

    Saving a recipe replaces its ingredients and upserts the foods they
    reference. Deleting a recipe deletes its ingredients but never a food.
    """

    def list_recipes(self) -> list[Recipe]:
        """Return every stored recipe."""

    def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        """Return a recipe by id, if present."""

    def save_recipe(self, recipe: Recipe) -> Recipe:
        """Insert or overwrite a recipe and return it."""

    def delete_recipe(self, recipe_id: UUID) -> None:
        """Delete a recipe along with its ingredients."""

    def get_image(self, recipe_id: UUID) -> RecipeImage | None:
        """Return the image stored for a recipe, if any."""

    def set_image(self, recipe_id: UUID, image: RecipeImage | None) -> None:
        """Store or clear the image of a recipe."""


@dataclass
class RecipeService:
    """Application service for recipe CRUD operations."""

    repository: RecipeRepository

    def list_all(self) -> list[Recipe]:
        """Return every recipe."""
        return self.repository.list_recipes()

    def get(self, recipe_id: UUID) -> Recipe:
        """Return a recipe, raising NotFoundError when it does not exist."""
        recipe = self.repository.get_recipe(recipe_id)
        if recipe is None:
            raise NotFoundError(recipe_id)
        return recipe

    def add(self, payload: RecipePayload) -> tuple[Recipe, bool]:
        """Add a recipe, or overwrite it when its id already exists.

        Returns the stored recipe and whether it was newly created.
        """
        recipe = _to_recipe(payload)
        created = self.repository.get_recipe(recipe.id) is None
        saved = self.repository.save_recipe(recipe)
        _logger.info("%s recipe %s", "Created" if created else "Updated", saved.id)
        return saved, created

    def edit(self, recipe_id: UUID, payload: RecipePayload) -> Recipe:
        """Overwrite an existing recipe with the payload."""
        payload.id = str(recipe_id)
        recipe = _to_recipe(payload)
        if self.repository.get_recipe(recipe_id) is None:
            raise NotFoundError(recipe_id)
        saved = self.repository.save_recipe(recipe)
        _logger.info("Updated recipe %s", recipe_id)
        return saved

    def delete(self, recipe_id: UUID) -> None:
        """Delete a recipe and its ingredients."""
        self.get(recipe_id)
        self.repository.delete_recipe(recipe_id)
        _logger.info("Deleted recipe %s", recipe_id)

    def get_image(self, recipe_id: UUID) -> RecipeImage | None:
        """Return the recipe's image, or None when it has none."""
        self.get(recipe_id)
        return self.repository.get_image(recipe_id)

    def set_image(self, recipe_id: UUID, data: bytes, content_type: str) -> None:
        """Attach an image to a recipe, replacing any existing one."""
        self.get(recipe_id)
        self.repository.set_image(
            recipe_id, RecipeImage(data=data, content_type=content_type)
        )

    def delete_image(self, recipe_id: UUID) -> None:
        """Remove the recipe's image."""
        self.get(recipe_id)
        if self.repository.get_image(recipe_id) is None:
            raise ValidationError(["The recipe does not have an image to delete."])
        self.repository.set_image(recipe_id, None)


def _to_recipe(payload: RecipePayload) -> Recipe:
    """Validate a payload and convert it, rejecting unconvertible quantities."""
    errors = payload.validation_errors()
    if errors:
        raise ValidationError(errors)
    recipe = recipe_from_payload(payload)
    for ingredient in recipe.ingredients:
        base = ingredient.food.measurement
        if base is not None and not commensurate(base.unit, ingredient.quantity.unit):
            errors.append(
                f"({ingredient.food.name}): A quantity in "
                f"{ingredient.quantity.unit.friendly_name} cannot be converted to "
                f"the food's base unit, {base.unit.friendly_name}."
            )
    if errors:
        raise ValidationError(errors)
    return recipe
