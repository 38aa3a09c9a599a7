"""Tests for the nutrient table loader."""

import math

from recipe_metrics.nutrition.table import extract_table, parse_unit_list

TABLE = """\
# Zutaten

| Name | kcal | Fett | KH | Protein | Einheiten |
|------|------|------|----|---------|-----------|
| Apple | 52 | 0.2 | 14 | 0.3 | Stück: 180 |
| Brot | 250 | 1,2 | 48 | 9 | Scheibe: 45, Laib: 1000 |
| Butter | 741 | 83 | 0,6 | 0,7 | |
| Gemüsebrühe | 5 | 0,1 | 0,5 | 0,3 | Tassen: 240 |
"""


def _by_name(recipes):
    return {r.name: r for r in recipes}


def test_rows_become_base_recipes():
    recipes = _by_name(extract_table(TABLE))
    assert set(recipes) == {"Apple", "Brot", "Butter", "Gemüsebrühe"}

    apple = recipes["Apple"]
    assert apple.total_grams == 100.0
    assert apple.nutrients == {"kcal": 52.0, "fat": 0.2, "kh": 14.0, "prot": 0.3}
    assert apple.conversions == {"Stück": 180.0}
    assert apple.ingredients is None


def test_comma_decimals():
    brot = _by_name(extract_table(TABLE))["Brot"]
    assert brot.nutrients["fat"] == 1.2


def test_multiple_units():
    brot = _by_name(extract_table(TABLE))["Brot"]
    assert brot.conversions == {"Scheibe": 45.0, "Laib": 1000.0}


def test_empty_unit_cell():
    butter = _by_name(extract_table(TABLE))["Butter"]
    assert butter.conversions == {}
    assert butter.nutrients["kh"] == 0.6


def test_unit_aliases_applied():
    broth = _by_name(extract_table(TABLE))["Gemüsebrühe"]
    assert broth.conversions == {"Tasse": 240.0}


def test_header_and_separator_ignored():
    assert len(extract_table("| Name | kcal |\n|---|---|\n")) == 0


def test_malformed_number_kept_as_nan():
    recipes = extract_table("| Quark | 67 | 0,2, | 4 | 12 | |\n")
    assert len(recipes) == 1
    assert math.isnan(recipes[0].nutrients["fat"])
    assert recipes[0].nutrients["kcal"] == 67.0


def test_non_ascii_digits_not_a_row():
    assert extract_table("| Quark | ٦٧ | 0,2 | 4 | 12 | |\n") == []


def test_source_recorded():
    recipes = extract_table(TABLE, source="Rezepte/Ingredients.md")
    assert all(r.source == "Rezepte/Ingredients.md" for r in recipes)


class TestParseUnitList:
    def test_comma_separated(self):
        assert parse_unit_list("Stück: 180, Scheibe: 20") == {
            "Stück": 180.0,
            "Scheibe": 20.0,
        }

    def test_without_space(self):
        assert parse_unit_list("Becher:150") == {"Becher": 150.0}

    def test_empty(self):
        assert parse_unit_list("") == {}
