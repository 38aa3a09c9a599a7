"""Nutrient values for recipes kept as Markdown notes."""

from .config import (
    AppConfig,
    LoggingConfig,
    UnitsConfig,
    VaultConfig,
    WatchConfig,
    load_config,
)
from .nutrition import (
    NUTRIENT_KEYS,
    NutrientResult,
    ParsedIngredient,
    Recipe,
    RecipeStore,
    ResolveKind,
)
from .preview import LineAnnotation, annotate, render
from .service import NutritionService
from .vault import Document, Vault

__all__ = [
    "NutritionService",
    "NutrientResult",
    "ResolveKind",
    "Recipe",
    "RecipeStore",
    "ParsedIngredient",
    "NUTRIENT_KEYS",
    "Vault",
    "Document",
    "annotate",
    "render",
    "LineAnnotation",
    "AppConfig",
    "VaultConfig",
    "UnitsConfig",
    "WatchConfig",
    "LoggingConfig",
    "load_config",
]
