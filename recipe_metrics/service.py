"""Query and rebuild entry points used by the preview, watcher and CLI."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from .nutrition.calculator import NutrientResolver, NutrientResult
from .nutrition.document import parse_ingredient
from .nutrition.recipe import ParsedIngredient
from .nutrition.store import RecipeStore, build_recipes
from .nutrition.units import DEFAULT_UNIT_ALIASES
from .vault import Vault

if TYPE_CHECKING:
    from .config import AppConfig

logger = logging.getLogger(__name__)


class NutritionService:
    """Owns the recipe store of one vault and answers nutrient queries.

    Usage:
        service = NutritionService(Vault("~/Notes"))
        service.update_recipes()
        service.calculate_nutrients("Kartoffelsuppe", 1, "Portion")
    """

    def __init__(
        self, vault: Vault, aliases: dict[str, str] | None = None
    ) -> None:
        self.vault = vault
        self.aliases = dict(DEFAULT_UNIT_ALIASES if aliases is None else aliases)
        self.store = RecipeStore()
        self._resolver = NutrientResolver(self.store)
        self._rebuild_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: AppConfig) -> NutritionService:
        vault = Vault(
            config.vault.path,
            table_path=config.vault.nutrient_table,
            extensions=tuple(config.vault.extensions),
        )
        return cls(vault, aliases=config.units.aliases)

    def update_recipes(self) -> int:
        """Rebuild the store from the vault. Returns the number of recipes."""
        with self._rebuild_lock:
            recipes = build_recipes(self.vault, self.aliases)
            self.store.replace(recipes)
        return len(recipes)

    def resolve(self, name: str, amount: float, unit: str) -> NutrientResult:
        return self._resolver.resolve(name, amount, unit)

    def calculate_nutrients(
        self, name: str, amount: float, unit: str
    ) -> dict[str, float]:
        return self._resolver.calculate_nutrients(name, amount, unit)

    def parse_ingredient(self, text: str) -> ParsedIngredient | None:
        return parse_ingredient(text, self.aliases)

    def resolve_ingredient(self, text: str) -> NutrientResult | None:
        """Parse an inline ingredient reference and resolve it."""
        ing = self.parse_ingredient(text)
        if ing is None:
            return None
        return self.resolve(ing.name, ing.amount, ing.unit)
