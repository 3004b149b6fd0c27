import pytest
from recipe_scaler.errors import (
    InvalidRuleShapeError,
    InvalidServingsError,
    ScalingError,
    UnknownScalingRuleError,
)
from recipe_scaler.schemas import IngredientIn, RecipeCard
from recipe_scaler.services.scaling import scale_recipe, scale_recipe_card


def test_scale_recipe_batch():
    ingredients = [
        {"name": "Flour", "amount": 250, "unit": "g", "baseServings": 4, "scalingRule": "linear"},
        {"name": "Salt", "amount": 2, "unit": "tsp", "baseServings": 4, "scalingRule": "sqrt"},
        {"name": "Vanilla", "amount": 1, "unit": "tsp", "baseServings": 4, "scalingRule": "fixed"},
    ]
    scaled = scale_recipe(ingredients, 16)

    assert [s.name for s in scaled] == ["Flour", "Salt", "Vanilla"]
    # 250 * 4 = 1000, 2 * sqrt(4) = 4, vanilla unchanged
    assert scaled[0].scaled_amount == 1000
    assert scaled[1].scaled_amount == pytest.approx(4)
    assert scaled[2].scaled_amount == 1
    assert scaled[0].amount == 250
    assert scaled[1].unit == "tsp"


def test_scale_recipe_override_base_servings():
    # Each ingredient claims 2 servings, the recipe-level count (4) wins
    ingredients = [
        {"amount": 100, "baseServings": 2, "scalingRule": "linear"},
        {"amount": 300, "baseServings": 2, "scalingRule": "linear"},
    ]
    scaled = scale_recipe(ingredients, 8, base_servings_override=4)
    assert [s.scaled_amount for s in scaled] == [200, 600]
    assert all(s.base_servings == 4 for s in scaled)


def test_scale_recipe_accepts_models():
    ing = IngredientIn(name="Sugar", amount=0.3, base_servings=4, scaling_rule="linear")
    [scaled] = scale_recipe([ing], 8)
    assert scaled.scaled_amount == pytest.approx(0.6)
    assert scaled.rounded_amount == 0.625


def test_scale_recipe_infers_missing_rule():
    [scaled] = scale_recipe([{"name": "Active dry yeast", "amount": 7, "baseServings": 12}], 48)
    assert scaled.scaling_rule == "logarithmic"
    assert scaled.scaled_amount == pytest.approx(14)


def test_scale_recipe_empty():
    assert scale_recipe([], 4) == []


def test_scale_recipe_output_uses_camel_case_aliases():
    [scaled] = scale_recipe([{"amount": 1, "baseServings": 1, "scalingRule": "linear"}], 3)
    data = scaled.model_dump(by_alias=True)
    assert data["scaledAmount"] == 3
    assert data["roundedAmount"] == 3
    assert data["scalingRule"] == "linear"


def test_scale_recipe_fails_fast_on_unknown_rule():
    ingredients = [
        {"amount": 100, "baseServings": 2, "scalingRule": "linear"},
        {"amount": 5, "baseServings": 2, "scalingRule": "cubic"},
        {"amount": 300, "baseServings": 2, "scalingRule": "linear"},
    ]
    with pytest.raises(UnknownScalingRuleError):
        scale_recipe(ingredients, 4)


def test_scale_recipe_rejects_zero_amount():
    with pytest.raises(InvalidRuleShapeError):
        scale_recipe([{"amount": 0, "baseServings": 2, "scalingRule": "linear"}], 4)


def test_scale_recipe_requires_base_servings():
    with pytest.raises(InvalidRuleShapeError):
        scale_recipe([{"amount": 10, "scalingRule": "linear"}], 4)


def test_scale_recipe_rejects_malformed_record():
    with pytest.raises(InvalidRuleShapeError):
        scale_recipe([{"baseServings": 2, "scalingRule": "linear"}], 4)


@pytest.mark.parametrize("target,override", [
    (0, None), (-1, None), (float("nan"), None), (float("inf"), None), (4, 0), (4, -2),
])
def test_scale_recipe_invalid_servings(target, override):
    ingredients = [{"amount": 10, "baseServings": 2, "scalingRule": "linear"}]
    with pytest.raises(InvalidServingsError):
        scale_recipe(ingredients, target, base_servings_override=override)


# --- Whole recipe ---

def test_scale_recipe_card(challah):
    scaled = scale_recipe_card(challah, 48)

    assert scaled.title == "Challah"
    assert scaled.base_servings == 12
    assert scaled.servings == 48
    assert scaled.scale_ratio == 4
    # sqrt(4) = 2 for times
    assert scaled.prep_time == 40
    assert scaled.cook_time == 70

    flour, yeast, salt, sesame = scaled.ingredients
    assert flour.scaled_amount == 2000
    assert flour.rounded_amount == 2000
    # inferred logarithmic: 7 * 2
    assert yeast.scaling_rule == "logarithmic"
    assert yeast.scaled_amount == pytest.approx(14)
    # legacy "squareRoot" tag
    assert salt.scaling_rule == "sqrt"
    assert salt.scaled_amount == pytest.approx(4)
    # not filled in yet: passes through
    assert sesame.amount is None
    assert sesame.scaled_amount is None
    assert sesame.rounded_amount is None


def test_scale_recipe_card_times(challah):
    # 20 * sqrt(2) = 28.28 -> 28, 35 * sqrt(2) = 49.497 -> 49
    scaled = scale_recipe_card(challah, 24)
    assert scaled.prep_time == 28
    assert scaled.cook_time == 49


def test_scale_recipe_card_without_times(challah):
    del challah["prepTime"]
    challah["cookTime"] = None
    scaled = scale_recipe_card(RecipeCard.model_validate(challah), 6)
    assert scaled.prep_time is None
    assert scaled.cook_time is None


def test_scale_recipe_card_dump(challah):
    data = scale_recipe_card(challah, 12).model_dump(by_alias=True)
    assert data["baseServings"] == 12
    assert data["ingredients"][0]["roundedAmount"] == 500


def test_scale_recipe_card_rejects_bad_recipe(challah):
    challah["servings"] = 0
    with pytest.raises(InvalidRuleShapeError):
        scale_recipe_card(challah, 4)


def test_scale_recipe_card_rejects_bad_target(challah):
    with pytest.raises(InvalidServingsError):
        scale_recipe_card(challah, 0)


@pytest.mark.parametrize("target", [2.5, 24.0, True, "24"])
def test_scale_recipe_card_rejects_non_integer_target(challah, target):
    with pytest.raises(InvalidServingsError) as exc:
        scale_recipe_card(challah, target)
    assert isinstance(exc.value, ScalingError)


def test_scale_recipe_card_unknown_stored_rule(challah):
    challah["ingredients"][0]["scalingRule"] = "cubic"
    with pytest.raises(UnknownScalingRuleError):
        scale_recipe_card(challah, 24)
