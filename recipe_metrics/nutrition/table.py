"""Nutrient table loader.

The table document is a Markdown table with one food per row, values per
100 g and a free-text list of unit weights in the last column::

    | Name  | kcal | Fett | KH | Protein | Einheiten            |
    |-------|------|------|----|---------|----------------------|
    | Apfel | 52   | 0,2  | 14 | 0,3     | Stück: 180, Scheibe: 20 |
"""

from __future__ import annotations

import logging
import re

from .recipe import NUTRIENT_KEYS, Recipe
from .units import normalize_unit, parse_amount

logger = logging.getLogger(__name__)

TABLE_BASE_GRAMS = 100.0

_NUM = r"[0-9][0-9,.]*"

TABLE_ROW_PATTERN = re.compile(
    r"\|\s*(?P<name>[\w öäüß,]+)\s*"
    rf"\|\s*(?P<kcal>{_NUM})\s*"
    rf"\|\s*(?P<fat>{_NUM})\s*"
    rf"\|\s*(?P<kh>{_NUM})\s*"
    rf"\|\s*(?P<prot>{_NUM})\s*"
    r"\|\s*(?P<units>.*?)\s*\|",
    re.IGNORECASE,
)
TABLE_UNIT_PATTERN = re.compile(
    rf"(?P<unit>[\w öäüß]+?):\s?(?P<gram>{_NUM})",
    re.IGNORECASE,
)


def parse_unit_list(
    text: str, aliases: dict[str, str] | None = None
) -> dict[str, float]:
    """Parse ``Stück: 180, Scheibe: 20`` into grams per unit."""
    conversions: dict[str, float] = {}
    for m in TABLE_UNIT_PATTERN.finditer(text.strip()):
        conversions[normalize_unit(m.group("unit"), aliases)] = parse_amount(
            m.group("gram")
        )
    return conversions


def extract_table(
    text: str,
    aliases: dict[str, str] | None = None,
    source: str = "",
) -> list[Recipe]:
    """Build one base recipe per table row."""
    recipes: list[Recipe] = []
    for m in TABLE_ROW_PATTERN.finditer(text):
        nutrients = {key: parse_amount(m.group(key)) for key in NUTRIENT_KEYS}
        # NaN values still count as present
        if len(nutrients) != len(NUTRIENT_KEYS):
            continue
        recipes.append(
            Recipe(
                name=m.group("name").strip(),
                total_grams=TABLE_BASE_GRAMS,
                conversions=parse_unit_list(m.group("units"), aliases),
                nutrients=nutrients,
                source=source,
            )
        )
    logger.debug("%d rows read from nutrient table %s", len(recipes), source or "-")
    return recipes
