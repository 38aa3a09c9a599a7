"""Unit spelling normalization, amount parsing and gram conversion."""

from __future__ import annotations

import logging
import math

logger = logging.getLogger(__name__)

# Plural spellings → canonical unit
DEFAULT_UNIT_ALIASES: dict[str, str] = {
    "Portionen": "Portion",
    "Zehen": "Zehe",
    "Dosen": "Dose",
    "Tassen": "Tasse",
}

# Fraction literals recognised verbatim
_FRACTION_MAP: dict[str, float] = {
    "1/8": 0.125,
    "1/4": 0.25,
    "1/2": 0.5,
}

GRAM = "g"


def normalize_unit(raw: str, aliases: dict[str, str] | None = None) -> str:
    """Map a raw unit spelling to its canonical name.

    Matching is case-sensitive. Unknown spellings are returned trimmed.
    """
    unit = raw.strip()
    table = DEFAULT_UNIT_ALIASES if aliases is None else aliases
    return table.get(unit, unit)


def parse_amount(raw: str) -> float:
    """Parse a quantity token into a float.

    Args:
        raw: e.g. "200", "2,5", "1/2"

    Returns:
        The amount, or NaN if the token is not a number.
    """
    s = raw.strip()
    if s in _FRACTION_MAP:
        return _FRACTION_MAP[s]

    s = s.replace(",", ".", 1)
    if not s or "_" in s or not s.isascii():
        return math.nan
    try:
        return float(s)
    except ValueError:
        return math.nan


def to_grams(amount: float, unit: str, conversions: dict[str, float]) -> float:
    """Convert an amount with unit to grams.

    Args:
        amount: Numeric amount (e.g. 2.0)
        unit: Canonical unit name (e.g. "Tasse", "g")
        conversions: Grams per unit known for the recipe

    Returns:
        Weight in grams. NaN if the unit is unknown for this recipe.
    """
    if unit == GRAM:
        return amount

    if unit in conversions:
        return conversions[unit] * amount

    logger.warning(
        "unknown unit %r (known: %s)", unit, ", ".join(sorted(conversions)) or "-"
    )
    return math.nan
