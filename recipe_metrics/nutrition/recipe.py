"""Recipe records shared by the extractors, the store and the resolver."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .units import GRAM

NUTRIENT_KEYS: tuple[str, ...] = ("kcal", "fat", "kh", "prot")

PORTION = "Portion"


def empty_nutrients() -> dict[str, float]:
    return {key: 0.0 for key in NUTRIENT_KEYS}


def nan_nutrients() -> dict[str, float]:
    return {key: math.nan for key in NUTRIENT_KEYS}


def safe_div(numerator: float, denominator: float) -> float:
    """Divide, yielding NaN instead of raising on a zero denominator."""
    if denominator == 0:
        return math.nan
    return numerator / denominator


@dataclass
class IngredientAmount:
    amount: float
    unit: str  # canonical unit name


@dataclass(frozen=True)
class ParsedIngredient:
    """A single inline ingredient reference such as ``Apfel - 2 Stück``."""

    name: str
    amount: float
    unit: str


@dataclass
class Recipe:
    """A named food item: a table row or a recipe document.

    ``nutrients`` hold the values for ``total_grams`` grams. Table rows state
    them per 100 g; document recipes get them derived from ``ingredients``
    by the resolver, which then caches them here.
    """

    name: str
    total_grams: float | None = None
    conversions: dict[str, float] = field(default_factory=dict)
    pending_conversions: dict[str, float] = field(default_factory=dict)
    ingredients: dict[str, IngredientAmount] | None = None
    nutrients: dict[str, float] | None = None
    source: str = ""

    @property
    def is_derived(self) -> bool:
        """True for document recipes whose nutrients come from ingredients."""
        return self.ingredients is not None

    @property
    def needs_derivation(self) -> bool:
        return self.nutrients is None and self.ingredients is not None

    def knows_unit(self, unit: str) -> bool:
        return unit == GRAM or unit in self.conversions

    def add_conversion(self, unit: str, grams: float) -> bool:
        """Record a conversion unless one already exists for ``unit``."""
        if unit in self.conversions:
            return False
        self.conversions[unit] = grams
        return True

    def complete_pending_conversions(self) -> None:
        """Turn yield counts into grams per unit once the weight is known."""
        total = self.total_grams if self.total_grams is not None else math.nan
        for unit, count in self.pending_conversions.items():
            self.add_conversion(unit, safe_div(total, count))

    def ensure_portion(self) -> None:
        """One portion defaults to the whole batch."""
        total = self.total_grams if self.total_grams is not None else math.nan
        self.add_conversion(PORTION, total)

    def apply_derived(self, nutrients: dict[str, float], weight: float) -> None:
        """Cache nutrients summed from the ingredients and finish conversions."""
        self.nutrients = nutrients
        if self.total_grams is None:
            self.total_grams = weight
        self.complete_pending_conversions()
        self.ensure_portion()
