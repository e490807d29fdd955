"""Supabase implementation for recipes and recipe images."""

from dataclasses import dataclass
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from pantry_api.adapters.supabase_rows import (
    RECIPE_COLUMNS,
    food_row,
    image_row,
    ingredient_rows,
    parse_image_row,
    parse_recipe_row,
    recipe_row,
)
from pantry_api.domain.cooking import Recipe, RecipeImage
from pantry_api.domain.errors import IngredientConflictError, ValidationError
from pantry_api.services.recipes import RecipeRepository

UNIQUE_VIOLATION = "23505"


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase-backed recipe repository."""

    client: Client

    def list_recipes(self) -> list[Recipe]:
        """Return all recipes with their ingredients."""
        response = (
            self.client.table("recipes").select(RECIPE_COLUMNS).order("name").execute()
        )
        return [parse_recipe_row(row) for row in response.data or []]

    def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        """Return a recipe by id, if present."""
        response = (
            self.client.table("recipes")
            .select(RECIPE_COLUMNS)
            .eq("id", str(recipe_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_recipe_row(response.data[0])

    def save_recipe(self, recipe: Recipe) -> Recipe:
        """Upsert the recipe with its foods and ingredients, then drop stale ones."""
        rows = ingredient_rows(recipe)
        ingredient_ids = [row["id"] for row in rows]
        self._check_ingredient_owners(recipe, ingredient_ids)

        foods = {ingredient.food.id: ingredient.food for ingredient in recipe.ingredients}
        if foods:
            self.client.table("foods").upsert(
                [food_row(food) for food in foods.values()]
            ).execute()

        response = self.client.table("recipes").upsert(recipe_row(recipe)).execute()
        if not response.data:
            raise RuntimeError("Failed to save recipe")

        if rows:
            try:
                self.client.table("ingredients").upsert(rows).execute()
            except APIError as exc:
                if exc.code == UNIQUE_VIOLATION:
                    raise ValidationError(
                        ["An ingredient ID is already used by another recipe."]
                    ) from exc
                raise

        current = (
            self.client.table("ingredients")
            .select("id")
            .eq("recipe_id", str(recipe.id))
            .execute()
        )
        stale = [
            row["id"] for row in current.data or [] if row["id"] not in ingredient_ids
        ]
        if stale:
            self.client.table("ingredients").delete().in_("id", stale).execute()
        return recipe

    def _check_ingredient_owners(
        self, recipe: Recipe, ingredient_ids: list[object]
    ) -> None:
        if not ingredient_ids:
            return
        response = (
            self.client.table("ingredients")
            .select("id, recipe_id")
            .in_("id", ingredient_ids)
            .execute()
        )
        for row in response.data or []:
            if row["recipe_id"] != str(recipe.id):
                raise IngredientConflictError(UUID(str(row["id"])))

    def delete_recipe(self, recipe_id: UUID) -> None:
        """Delete a recipe; its ingredients cascade."""
        self.client.table("recipes").delete().eq("id", str(recipe_id)).execute()

    def get_image(self, recipe_id: UUID) -> RecipeImage | None:
        """Return the stored image of a recipe, if any."""
        response = (
            self.client.table("recipes")
            .select("image_data, image_content_type")
            .eq("id", str(recipe_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_image_row(response.data[0])

    def set_image(self, recipe_id: UUID, image: RecipeImage | None) -> None:
        """Store or clear the image columns of a recipe."""
        self.client.table("recipes").update(image_row(image)).eq(
            "id", str(recipe_id)
        ).execute()
