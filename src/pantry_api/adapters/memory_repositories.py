"""Process-local repositories used when no database is configured."""

import threading
from dataclasses import dataclass, field, replace
from uuid import UUID

from pantry_api.domain.cooking import Food, Recipe, RecipeImage
from pantry_api.domain.errors import FoodInUseError, IngredientConflictError
from pantry_api.services.foods import FoodRepository
from pantry_api.services.recipes import RecipeRepository


@dataclass
class InMemoryStore:
    """Shared tables for the in-memory repositories.

    Ingredients keep a reference to their food by id, so reading a recipe
    always reflects the latest stored version of each food.
    """

    foods: dict[UUID, Food] = field(default_factory=dict)
    recipes: dict[UUID, Recipe] = field(default_factory=dict)
    images: dict[UUID, RecipeImage] = field(default_factory=dict)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def resolve(self, recipe: Recipe) -> Recipe:
        """Return the recipe with each ingredient's food refreshed."""
        ingredients = tuple(
            replace(ingredient, food=self.foods.get(ingredient.food.id, ingredient.food))
            for ingredient in recipe.ingredients
        )
        return replace(recipe, ingredients=ingredients)

    def food_referenced(self, food_id: UUID) -> bool:
        return any(recipe.uses_food(food_id) for recipe in self.recipes.values())


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """Food repository over an ``InMemoryStore``."""

    store: InMemoryStore = field(default_factory=InMemoryStore)

    def list_foods(self) -> list[Food]:
        with self.store.lock:
            return list(self.store.foods.values())

    def get_food(self, food_id: UUID) -> Food | None:
        with self.store.lock:
            return self.store.foods.get(food_id)

    def save_food(self, food: Food) -> Food:
        with self.store.lock:
            self.store.foods[food.id] = food
        return food

    def delete_food(self, food_id: UUID) -> None:
        with self.store.lock:
            if self.store.food_referenced(food_id):
                raise FoodInUseError(food_id)
            self.store.foods.pop(food_id, None)

    def is_food_referenced(self, food_id: UUID) -> bool:
        with self.store.lock:
            return self.store.food_referenced(food_id)

    def list_recipes_using_food(self, food_id: UUID) -> list[Recipe]:
        with self.store.lock:
            return [
                self.store.resolve(recipe)
                for recipe in self.store.recipes.values()
                if recipe.uses_food(food_id)
            ]


@dataclass
class InMemoryRecipeRepository(RecipeRepository):
    """Recipe repository over an ``InMemoryStore``."""

    store: InMemoryStore = field(default_factory=InMemoryStore)

    def list_recipes(self) -> list[Recipe]:
        with self.store.lock:
            return [self.store.resolve(recipe) for recipe in self.store.recipes.values()]

    def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        with self.store.lock:
            recipe = self.store.recipes.get(recipe_id)
            return None if recipe is None else self.store.resolve(recipe)

    def save_recipe(self, recipe: Recipe) -> Recipe:
        with self.store.lock:
            ingredient_ids = {ingredient.id for ingredient in recipe.ingredients}
            for other in self.store.recipes.values():
                if other.id == recipe.id:
                    continue
                for ingredient in other.ingredients:
                    if ingredient.id in ingredient_ids:
                        raise IngredientConflictError(ingredient.id)
            for ingredient in recipe.ingredients:
                self.store.foods[ingredient.food.id] = ingredient.food
            self.store.recipes[recipe.id] = recipe
            return self.store.resolve(recipe)

    def delete_recipe(self, recipe_id: UUID) -> None:
        with self.store.lock:
            self.store.recipes.pop(recipe_id, None)
            self.store.images.pop(recipe_id, None)

    def get_image(self, recipe_id: UUID) -> RecipeImage | None:
        with self.store.lock:
            return self.store.images.get(recipe_id)

    def set_image(self, recipe_id: UUID, image: RecipeImage | None) -> None:
        with self.store.lock:
            if image is None:
                self.store.images.pop(recipe_id, None)
            else:
                self.store.images[recipe_id] = image
