"""In-memory recipe store, rebuilt wholesale from the vault."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from .document import extract_recipe
from .recipe import Recipe
from .table import extract_table

if TYPE_CHECKING:
    from ..vault import Vault

logger = logging.getLogger(__name__)


class RecipeStore:
    """Mapping of recipe name → Recipe.

    ``lock`` is the single exclusion between rebuilds and queries. It is
    re-entrant so the resolver can hold it across recursive lookups.
    """

    def __init__(self, recipes: dict[str, Recipe] | None = None) -> None:
        self._recipes: dict[str, Recipe] = dict(recipes or {})
        self.lock = threading.RLock()

    def get(self, name: str) -> Recipe | None:
        return self._recipes.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._recipes

    def __len__(self) -> int:
        return len(self._recipes)

    def names(self) -> list[str]:
        return sorted(self._recipes)

    def recipes(self) -> list[Recipe]:
        return [self._recipes[n] for n in self.names()]

    def replace(self, recipes: dict[str, Recipe]) -> None:
        """Swap in a freshly built mapping."""
        with self.lock:
            self._recipes = dict(recipes)


def build_recipes(
    vault: Vault, aliases: dict[str, str] | None = None
) -> dict[str, Recipe]:
    """Read the nutrient table, then every recipe document in the vault.

    Documents are read in path order; a document shadows a table row or an
    earlier document with the same name.
    """
    recipes: dict[str, Recipe] = {}

    table = vault.read_table()
    if table is None:
        logger.warning("nutrient table %s not found", vault.table_path)
    else:
        for recipe in extract_table(table.text, aliases, source=str(table.path)):
            recipes[recipe.name] = recipe

    for doc in vault.documents():
        recipe = extract_recipe(doc.name, doc.text, aliases, source=str(doc.path))
        if recipe is None:
            continue
        if recipe.name in recipes:
            logger.debug(
                "%s shadows recipe from %s", doc.path, recipes[recipe.name].source
            )
        recipes[recipe.name] = recipe

    logger.info("%d recipes loaded from %s", len(recipes), vault.root)
    return recipes
