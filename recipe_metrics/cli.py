"""CLI entry point."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import math
import sys
from pathlib import Path

from dotenv import load_dotenv

from .config import load_config
from .nutrition.recipe import NUTRIENT_KEYS
from .nutrition.units import normalize_unit, parse_amount
from .preview import render
from .service import NutritionService

_LABELS = {
    "kcal": "kcal",
    "fat": "Fett",
    "kh": "KH",
    "prot": "Protein",
}


def main(argv: list[str] | None = None) -> None:
    load_dotenv()

    parser = argparse.ArgumentParser(
        prog="recipe-metrics",
        description="Nutrient values for recipes kept as Markdown notes",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="path to the configuration file (TOML)",
    )
    parser.add_argument(
        "--vault", type=str, default=None, help="notes folder (overrides config)"
    )

    sub = parser.add_subparsers(dest="command")

    # calc
    calc_parser = sub.add_parser("calc", help="nutrients for an amount of a recipe")
    calc_parser.add_argument("name", help="recipe name")
    calc_parser.add_argument("amount", help="amount, e.g. 200, 1/2 or 2,5")
    calc_parser.add_argument("unit", help="unit, e.g. g or Portion")
    calc_parser.add_argument("--json", action="store_true", help="output as JSON")

    # ingredient
    ing_parser = sub.add_parser(
        "ingredient", help="parse an ingredient line like 'Reis - 1/2 Tasse'"
    )
    ing_parser.add_argument("text", help="ingredient text")
    ing_parser.add_argument("--json", action="store_true", help="output as JSON")

    # list
    list_parser = sub.add_parser("list", help="list known recipes")
    list_parser.add_argument("--json", action="store_true", help="output as JSON")

    # preview
    preview_parser = sub.add_parser(
        "preview", help="print a document with calorie badges"
    )
    preview_parser.add_argument("file", help="Markdown document")

    # watch
    sub.add_parser("watch", help="rebuild on every change in the vault")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    config = load_config(args.config)
    if args.vault:
        config.vault.path = args.vault

    logging.basicConfig(
        level=getattr(logging, config.logging.level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    service = NutritionService.from_config(config)

    match args.command:
        case "calc":
            service.update_recipes()
            _cmd_calc(service, args)
        case "ingredient":
            service.update_recipes()
            _cmd_ingredient(service, args)
        case "list":
            service.update_recipes()
            _cmd_list(service, args)
        case "preview":
            service.update_recipes()
            _cmd_preview(service, args)
        case "watch":
            try:
                asyncio.run(_cmd_watch(service, config.watch.interval_seconds))
            except KeyboardInterrupt:
                pass


def _format_nutrients(nutrients: dict[str, float]) -> str:
    parts = []
    for key in NUTRIENT_KEYS:
        value = nutrients[key]
        shown = "?" if math.isnan(value) else f"{value:.1f}"
        parts.append(f"{_LABELS[key]}: {shown}")
    return "  ".join(parts)


def _json_nutrients(nutrients: dict[str, float]) -> dict[str, float | None]:
    # JSON has no NaN
    return {k: (None if math.isnan(v) else round(v, 2)) for k, v in nutrients.items()}


def _cmd_calc(service: NutritionService, args) -> None:
    amount = parse_amount(args.amount)
    unit = normalize_unit(args.unit, service.aliases)
    result = service.resolve(args.name, amount, unit)

    if args.json:
        data = {
            "name": args.name,
            "amount": None if math.isnan(amount) else amount,
            "unit": unit,
            "status": result.kind.value,
            "nutrients": _json_nutrients(result.nutrients),
        }
        print(json.dumps(data, ensure_ascii=False, indent=2))
        return

    if not result.found:
        print(f"{args.name}: {result.kind.value.replace('_', ' ')}", file=sys.stderr)
        sys.exit(1)
    print(f"{args.name} ({args.amount} {unit})")
    print(f"  {_format_nutrients(result.nutrients)}")


def _cmd_ingredient(service: NutritionService, args) -> None:
    ing = service.parse_ingredient(args.text)
    if ing is None:
        print(f"not an ingredient reference: {args.text!r}", file=sys.stderr)
        sys.exit(1)

    result = service.resolve(ing.name, ing.amount, ing.unit)
    if args.json:
        data = {
            "name": ing.name,
            "amount": None if math.isnan(ing.amount) else ing.amount,
            "unit": ing.unit,
            "status": result.kind.value,
            "nutrients": _json_nutrients(result.nutrients),
        }
        print(json.dumps(data, ensure_ascii=False, indent=2))
        return

    print(f"{ing.name} ({ing.amount:g} {ing.unit})")
    print(f"  {_format_nutrients(result.nutrients)}")


def _cmd_list(service: NutritionService, args) -> None:
    recipes = service.store.recipes()

    if args.json:
        data = [
            {
                "name": r.name,
                "kind": "recipe" if r.is_derived else "table",
                "units": sorted(r.conversions),
                "source": r.source,
            }
            for r in recipes
        ]
        print(json.dumps(data, ensure_ascii=False, indent=2))
        return

    if not recipes:
        print("no recipes found.")
        return
    print(f"{len(recipes)} recipes:")
    for r in recipes:
        kind = "recipe" if r.is_derived else "table"
        units = ", ".join(["g", *sorted(r.conversions)])
        print(f"  {r.name:<30} [{kind}]  {units}")


def _cmd_preview(service: NutritionService, args) -> None:
    path = Path(args.file)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"could not read {path}: {e}", file=sys.stderr)
        sys.exit(1)
    print(render(text, service))


async def _cmd_watch(service: NutritionService, interval: float) -> None:
    from .scheduler import VaultWatcher

    watcher = VaultWatcher(service, interval_seconds=interval)
    watcher.start()
    print(f"watching {service.vault.root} ({len(service.store)} recipes), Ctrl+C to stop")
    try:
        await asyncio.Event().wait()
    finally:
        watcher.stop()
