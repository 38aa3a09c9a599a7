"""Recipe parsing and nutrient resolution."""

from .calculator import (
    NutrientResolver,
    NutrientResult,
    RecipeCycleError,
    ResolveKind,
)
from .document import extract_recipe, parse_ingredient
from .recipe import NUTRIENT_KEYS, IngredientAmount, ParsedIngredient, Recipe
from .store import RecipeStore, build_recipes
from .table import extract_table
from .units import DEFAULT_UNIT_ALIASES, normalize_unit, parse_amount, to_grams

__all__ = [
    "NUTRIENT_KEYS",
    "DEFAULT_UNIT_ALIASES",
    "Recipe",
    "IngredientAmount",
    "ParsedIngredient",
    "RecipeStore",
    "NutrientResolver",
    "NutrientResult",
    "ResolveKind",
    "RecipeCycleError",
    "build_recipes",
    "extract_recipe",
    "extract_table",
    "parse_ingredient",
    "normalize_unit",
    "parse_amount",
    "to_grams",
]
