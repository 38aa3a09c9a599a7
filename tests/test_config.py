"""Tests for config loading."""

import tempfile

import pytest

from recipe_metrics.config import AppConfig, load_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("RECIPE_METRICS_VAULT", raising=False)
    monkeypatch.delenv("RECIPE_METRICS_LOG_LEVEL", raising=False)


def test_load_config_defaults():
    """Loading with no path returns all defaults."""
    config = load_config()
    assert isinstance(config, AppConfig)
    assert config.vault.path == "."
    assert config.vault.nutrient_table == "Rezepte/Ingredients.md"
    assert config.vault.extensions == [".md"]
    assert config.units.aliases["Portionen"] == "Portion"
    assert config.watch.interval_seconds == 2.0
    assert config.logging.level == "WARNING"


def test_load_config_nonexistent_file():
    """Loading a nonexistent file returns defaults."""
    config = load_config("/nonexistent/path.toml")
    assert config.vault.path == "."


def test_load_config_from_toml():
    """Loading a valid TOML file populates config."""
    toml_content = """\
[vault]
path = "/srv/notes"
nutrient_table = "Küche/Nährwerte.md"

[units.aliases]
Stk = "Stück"
Portionen = "Teller"

[watch]
interval_seconds = 5

[logging]
level = "debug"
""".encode("utf-8")
    with tempfile.NamedTemporaryFile(suffix=".toml", delete=False) as f:
        f.write(toml_content)
        f.flush()
        config = load_config(f.name)

    assert config.vault.path == "/srv/notes"
    assert config.vault.nutrient_table == "Küche/Nährwerte.md"
    # Custom aliases merged over defaults
    assert config.units.aliases["Stk"] == "Stück"
    assert config.units.aliases["Portionen"] == "Teller"
    assert config.units.aliases["Dosen"] == "Dose"
    assert config.watch.interval_seconds == 5.0
    assert config.logging.level == "DEBUG"


def test_env_overrides(monkeypatch, tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[vault]\npath = "/srv/notes"\n', encoding="utf-8")
    monkeypatch.setenv("RECIPE_METRICS_VAULT", "/home/me/Notizen")
    monkeypatch.setenv("RECIPE_METRICS_LOG_LEVEL", "info")

    config = load_config(path)
    assert config.vault.path == "/home/me/Notizen"
    assert config.logging.level == "INFO"


def test_invalid_interval(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[watch]\ninterval_seconds = 0\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)
