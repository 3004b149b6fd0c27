import pytest

from recipe_scaler.settings import settings


@pytest.fixture
def strict_log_policy(monkeypatch):
    """Make logarithmic underflow raise instead of clamping."""
    monkeypatch.setattr(settings, "negative_amount_policy", "error")
    yield settings


@pytest.fixture
def challah():
    # Stored recipe as the CRUD layer hands it over (camelCase keys)
    return {
        "title": "Challah",
        "servings": 12,
        "prepTime": 20,
        "cookTime": 35,
        "ingredients": [
            {"name": "Bread flour", "amount": 500, "unit": "g", "scalingRule": "linear"},
            {"name": "Instant yeast", "amount": 7, "unit": "g"},
            {"name": "Salt", "amount": 2, "unit": "tsp", "scalingRule": "squareRoot"},
            {"name": "Sesame seeds", "amount": None, "unit": "tbsp"},
        ],
    }
