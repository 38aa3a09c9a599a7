"""Shared fixtures: a small vault with a nutrient table and recipe notes."""

import pytest

from recipe_metrics.service import NutritionService
from recipe_metrics.vault import Vault

TABLE = """\
| Name | kcal | Fett | KH | Protein | Einheiten |
|------|------|------|----|---------|-----------|
| Apple | 52 | 0.2 | 14 | 0.3 | Stück: 180 |
| Brot | 250 | 1,2 | 48 | 9 | Scheibe: 45 |
"""

SOUP = """\
# Soup

- Ergibt 1000 g

- Apple - 200g
"""


def write_note(root, relpath, text):
    path = root / relpath
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def note():
    """Write a note below a vault root: note(root, "Rezepte/X.md", text)."""
    return write_note


@pytest.fixture
def vault_dir(tmp_path):
    write_note(tmp_path, "Rezepte/Ingredients.md", TABLE)
    write_note(tmp_path, "Rezepte/Soup.md", SOUP)
    return tmp_path


@pytest.fixture
def service(vault_dir):
    svc = NutritionService(Vault(vault_dir))
    svc.update_recipes()
    return svc
