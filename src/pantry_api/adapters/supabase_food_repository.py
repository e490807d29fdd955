"""Supabase implementation for foods."""

from dataclasses import dataclass
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from pantry_api.adapters.supabase_rows import (
    RECIPE_COLUMNS,
    food_row,
    parse_food_row,
    parse_recipe_row,
)
from pantry_api.domain.cooking import Food, Recipe
from pantry_api.domain.errors import FoodInUseError
from pantry_api.services.foods import FoodRepository

FOREIGN_KEY_VIOLATION = "23503"


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed food repository."""

    client: Client

    def list_foods(self) -> list[Food]:
        """Return all foods ordered by name."""
        response = self.client.table("foods").select("*").order("name").execute()
        return [parse_food_row(row) for row in response.data or []]

    def get_food(self, food_id: UUID) -> Food | None:
        """Return a food by id, if present."""
        response = (
            self.client.table("foods")
            .select("*")
            .eq("id", str(food_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_food_row(response.data[0])

    def save_food(self, food: Food) -> Food:
        """Upsert a food row."""
        response = self.client.table("foods").upsert(food_row(food)).execute()
        if not response.data:
            raise RuntimeError("Failed to save food")
        return parse_food_row(response.data[0])

    def delete_food(self, food_id: UUID) -> None:
        """Delete a food; the ingredients foreign key keeps used foods."""
        try:
            self.client.table("foods").delete().eq("id", str(food_id)).execute()
        except APIError as exc:
            if exc.code == FOREIGN_KEY_VIOLATION:
                raise FoodInUseError(food_id) from exc
            raise

    def is_food_referenced(self, food_id: UUID) -> bool:
        """Return true when an ingredient row points at the food."""
        response = (
            self.client.table("ingredients")
            .select("id")
            .eq("food_id", str(food_id))
            .limit(1)
            .execute()
        )
        return bool(response.data)

    def list_recipes_using_food(self, food_id: UUID) -> list[Recipe]:
        """Return recipes that have an ingredient made of the food."""
        ingredients = (
            self.client.table("ingredients")
            .select("recipe_id")
            .eq("food_id", str(food_id))
            .execute()
        )
        recipe_ids = sorted({str(row["recipe_id"]) for row in ingredients.data or []})
        if not recipe_ids:
            return []
        response = (
            self.client.table("recipes")
            .select(RECIPE_COLUMNS)
            .in_("id", recipe_ids)
            .order("name")
            .execute()
        )
        return [parse_recipe_row(row) for row in response.data or []]
