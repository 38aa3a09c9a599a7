"""Extract recipes from free-text Markdown recipe documents.

A recipe document is recognised by three independent line patterns::

    - Ergibt 4 Portionen          (yield, first match wins)
    - Tasse: 240 g                (unit conversion, any number)
    - Mehl - 200g                 (ingredient, any number)

Each pattern is matched over the whole text on its own, so they can appear in
any order and mixed with arbitrary prose.
"""

from __future__ import annotations

import logging
import re

from .recipe import IngredientAmount, ParsedIngredient, Recipe
from .units import GRAM, normalize_unit, parse_amount

logger = logging.getLogger(__name__)

_WORD = r"[\w öäüß]"
_NAME = r"[\w öäüß,]"

YIELD_PATTERN = re.compile(
    rf"- Ergibt (?P<amount>[0-9][0-9,./]*) (?P<unit>{_WORD}+)",
    re.IGNORECASE,
)
CONVERSION_PATTERN = re.compile(
    rf"-\s*(?P<unit>{_WORD}+): (?P<amount>[0-9][0-9,.]*)\s*g",
    re.IGNORECASE,
)
_INGREDIENT_BODY = (
    rf"(?P<ingredient>{_NAME}+) - (?P<amount>[0-9][0-9,./]*)\s*(?P<unit>{_WORD}+)"
)
INGREDIENT_PATTERN = re.compile(rf"-\s+{_INGREDIENT_BODY}", re.IGNORECASE)
INLINE_INGREDIENT_PATTERN = re.compile(_INGREDIENT_BODY, re.IGNORECASE)


def find_yield(
    text: str, aliases: dict[str, str] | None = None
) -> tuple[float, str] | None:
    """Return the declared (amount, unit) yield, or None."""
    m = YIELD_PATTERN.search(text)
    if m is None:
        return None
    return parse_amount(m.group("amount")), normalize_unit(m.group("unit"), aliases)


def find_conversions(
    text: str, aliases: dict[str, str] | None = None
) -> dict[str, float]:
    """Return all declared ``unit: grams`` conversions (last one wins)."""
    conversions: dict[str, float] = {}
    for m in CONVERSION_PATTERN.finditer(text):
        unit = normalize_unit(m.group("unit"), aliases)
        conversions[unit] = parse_amount(m.group("amount"))
    return conversions


def find_ingredients(
    text: str, aliases: dict[str, str] | None = None
) -> dict[str, IngredientAmount]:
    """Return all ingredient lines keyed by ingredient name (last one wins)."""
    ingredients: dict[str, IngredientAmount] = {}
    for m in INGREDIENT_PATTERN.finditer(text):
        ingredients[m.group("ingredient").strip()] = IngredientAmount(
            amount=parse_amount(m.group("amount")),
            unit=normalize_unit(m.group("unit"), aliases),
        )
    return ingredients


def extract_recipe(
    name: str,
    text: str,
    aliases: dict[str, str] | None = None,
    source: str = "",
) -> Recipe | None:
    """Build a Recipe from a document's text.

    Args:
        name: Document base name, used as the recipe name
        text: Full document text
        aliases: Unit alias table (defaults to DEFAULT_UNIT_ALIASES)
        source: Document path, kept for diagnostics

    Returns:
        The recipe, or None if the document lists no ingredients.
    """
    recipe = Recipe(name=name, source=source)
    recipe.conversions = find_conversions(text, aliases)

    declared = find_yield(text, aliases)
    if declared is not None:
        amount, unit = declared
        if unit == GRAM:
            recipe.total_grams = amount
        elif unit in recipe.conversions:
            recipe.total_grams = amount * recipe.conversions[unit]
        else:
            # Grams per unit follow once the total weight is known
            recipe.pending_conversions[unit] = amount

    recipe.ingredients = find_ingredients(text, aliases)
    if not recipe.ingredients:
        logger.debug("no ingredients in %s, skipped", name)
        return None
    return recipe


def parse_ingredient(
    text: str, aliases: dict[str, str] | None = None
) -> ParsedIngredient | None:
    """Parse one inline ingredient reference like ``Reis - 1/2 Tasse``."""
    m = INLINE_INGREDIENT_PATTERN.search(text)
    if m is None:
        return None
    return ParsedIngredient(
        name=m.group("ingredient").strip(),
        amount=parse_amount(m.group("amount")),
        unit=normalize_unit(m.group("unit"), aliases),
    )
