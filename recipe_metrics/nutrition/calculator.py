"""Nutrient resolution for recipes and recipe-backed ingredients."""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field

from .recipe import NUTRIENT_KEYS, Recipe, empty_nutrients, nan_nutrients, safe_div
from .store import RecipeStore
from .units import to_grams

logger = logging.getLogger(__name__)


class ResolveKind(enum.Enum):
    FOUND = "found"
    UNKNOWN_RECIPE = "unknown_recipe"
    UNKNOWN_UNIT = "unknown_unit"
    NO_WEIGHT = "no_weight"  # total weight is zero or unknown
    CYCLE = "cycle"


class RecipeCycleError(Exception):
    """A recipe (indirectly) lists itself as an ingredient."""

    def __init__(self, chain: list[str]) -> None:
        self.chain = chain
        super().__init__(" → ".join(chain))


@dataclass
class NutrientResult:
    """Nutrients for one query plus how the lookup went.

    ``nutrients`` always holds all four keys; values are NaN whenever the
    query could not be resolved.
    """

    nutrients: dict[str, float] = field(default_factory=nan_nutrients)
    kind: ResolveKind = ResolveKind.FOUND

    @property
    def found(self) -> bool:
        return self.kind is ResolveKind.FOUND

    @property
    def kcal(self) -> float:
        return self.nutrients["kcal"]

    @property
    def fat(self) -> float:
        return self.nutrients["fat"]

    @property
    def kh(self) -> float:
        return self.nutrients["kh"]

    @property
    def prot(self) -> float:
        return self.nutrients["prot"]

    def as_dict(self) -> dict[str, float]:
        return dict(self.nutrients)


def scale_nutrients(
    nutrients: dict[str, float], base_grams: float, target_grams: float
) -> dict[str, float]:
    """Scale nutrients stated for ``base_grams`` to ``target_grams``."""
    return {
        key: safe_div(nutrients.get(key, 0.0) * target_grams, base_grams)
        for key in NUTRIENT_KEYS
    }


class NutrientResolver:
    """Resolves (name, amount, unit) queries against a RecipeStore.

    Document recipes get their nutrients derived from their ingredients on
    first use; the result, the total weight and any conversions completed
    along the way are cached on the Recipe until the next rebuild.
    """

    def __init__(self, store: RecipeStore) -> None:
        self._store = store

    def resolve(self, name: str, amount: float, unit: str) -> NutrientResult:
        with self._store.lock:
            try:
                return self._resolve(name, amount, unit, ())
            except RecipeCycleError as e:
                logger.warning("ingredient cycle: %s", e)
                return NutrientResult(kind=ResolveKind.CYCLE)

    def calculate_nutrients(
        self, name: str, amount: float, unit: str
    ) -> dict[str, float]:
        return self.resolve(name, amount, unit).as_dict()

    def _resolve(
        self, name: str, amount: float, unit: str, chain: tuple[str, ...]
    ) -> NutrientResult:
        recipe = self._store.get(name)
        if recipe is None:
            logger.debug("unknown recipe %r", name)
            return NutrientResult(kind=ResolveKind.UNKNOWN_RECIPE)

        if recipe.needs_derivation:
            self._derive(recipe, chain + (name,))

        grams = to_grams(amount, unit, recipe.conversions)
        base = recipe.total_grams if recipe.total_grams is not None else math.nan
        if not recipe.knows_unit(unit):
            kind = ResolveKind.UNKNOWN_UNIT
        elif base == 0 or math.isnan(base):
            logger.debug("%r has no usable total weight", name)
            kind = ResolveKind.NO_WEIGHT
        else:
            kind = ResolveKind.FOUND
        return NutrientResult(
            nutrients=scale_nutrients(recipe.nutrients or {}, base, grams),
            kind=kind,
        )

    def _derive(self, recipe: Recipe, chain: tuple[str, ...]) -> None:
        totals = empty_nutrients()
        weight = 0.0

        for ing_name, ing in (recipe.ingredients or {}).items():
            ing_recipe = self._store.get(ing_name)
            if ing_recipe is None:
                # Unknown ingredients do not count towards the sum
                continue
            if ing_name in chain:
                raise RecipeCycleError(list(chain) + [ing_name])

            result = self._resolve(ing_name, ing.amount, ing.unit, chain)
            for key in NUTRIENT_KEYS:
                totals[key] += result.nutrients.get(key, 0.0)
            weight += to_grams(ing.amount, ing.unit, ing_recipe.conversions)

        recipe.apply_derived(totals, weight)
