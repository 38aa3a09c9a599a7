"""TOML configuration loader."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .nutrition.units import DEFAULT_UNIT_ALIASES
from .vault import DEFAULT_TABLE_PATH

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]


@dataclass
class VaultConfig:
    path: str = "."
    nutrient_table: str = DEFAULT_TABLE_PATH
    extensions: list[str] = field(default_factory=lambda: [".md"])


@dataclass
class UnitsConfig:
    aliases: dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_UNIT_ALIASES)
    )


@dataclass
class WatchConfig:
    interval_seconds: float = 2.0


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class AppConfig:
    vault: VaultConfig = field(default_factory=VaultConfig)
    units: UnitsConfig = field(default_factory=UnitsConfig)
    watch: WatchConfig = field(default_factory=WatchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    The vault path and log level can be overridden via environment variables.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    vlt = raw.get("vault", {})
    unt = raw.get("units", {})
    wch = raw.get("watch", {})
    lgg = raw.get("logging", {})

    # Resolve overrides: environment variable → config file
    vault_path = os.environ.get("RECIPE_METRICS_VAULT", "") or vlt.get("path", ".")
    log_level = os.environ.get("RECIPE_METRICS_LOG_LEVEL", "") or lgg.get(
        "level", "WARNING"
    )

    # Merge custom aliases with defaults
    aliases = {**DEFAULT_UNIT_ALIASES, **unt.get("aliases", {})}

    interval = float(wch.get("interval_seconds", 2.0))
    if interval <= 0:
        raise ValueError(f"watch.interval_seconds must be positive: {interval}")

    return AppConfig(
        vault=VaultConfig(
            path=vault_path,
            nutrient_table=vlt.get("nutrient_table", DEFAULT_TABLE_PATH),
            extensions=list(vlt.get("extensions", [".md"])),
        ),
        units=UnitsConfig(aliases=aliases),
        watch=WatchConfig(interval_seconds=interval),
        logging=LoggingConfig(level=str(log_level).upper()),
    )
