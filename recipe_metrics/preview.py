"""Calorie badges for ingredient list lines in a document."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .service import NutritionService

_LIST_LINE = re.compile(r"^\s*(?:[-*+]|\d+[.)])\s")


@dataclass
class LineAnnotation:
    line_no: int  # 1-based
    text: str
    badge: str  # e.g. "94 kCal"


def format_kcal(kcal: float) -> str:
    """Round half up, like the editor badge."""
    return f"{math.floor(kcal + 0.5)} kCal"


def annotate(text: str, service: NutritionService) -> list[LineAnnotation]:
    """Return a badge for every list line that resolves to calories.

    Lines whose kcal value is zero or NaN get no badge.
    """
    annotations: list[LineAnnotation] = []
    for i, line in enumerate(text.splitlines(), start=1):
        if not _LIST_LINE.match(line):
            continue
        result = service.resolve_ingredient(line)
        if result is None:
            continue
        kcal = result.kcal
        if kcal == 0 or math.isnan(kcal) or math.isinf(kcal):
            continue
        annotations.append(LineAnnotation(line_no=i, text=line, badge=format_kcal(kcal)))
    return annotations


def render(text: str, service: NutritionService) -> str:
    """Return ``text`` with badges appended to annotated lines."""
    badges = {a.line_no: a.badge for a in annotate(text, service)}
    lines: list[str] = []
    for i, line in enumerate(text.splitlines(), start=1):
        if i in badges:
            lines.append(f"{line}  [{badges[i]}]")
        else:
            lines.append(line)
    return "\n".join(lines)
