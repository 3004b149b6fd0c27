from .unit_conversion import (
    convert, is_valid_unit, describe_unit, normalize_unit, list_units,
    resolve_unit, get_rate, auto_select_unit,
    estimate_grams_per_cup, grams_to_cups, cups_to_grams,
)
from .scaling import (
    scale_amount, scale_ingredient, scale_ingredient_rounded, scale_recipe,
    scale_recipe_card, scale_cooking_time, round_for_cooking, get_scaling_ratio,
    infer_scaling_rule, coerce_rule_type, make_rule,
    validate_scaling_rule, is_valid_scaling_rule, RuleValidation,
)

__all__ = [
    "convert", "is_valid_unit", "describe_unit", "normalize_unit", "list_units",
    "resolve_unit", "get_rate", "auto_select_unit",
    "estimate_grams_per_cup", "grams_to_cups", "cups_to_grams",
    "scale_amount", "scale_ingredient", "scale_ingredient_rounded", "scale_recipe",
    "scale_recipe_card", "scale_cooking_time", "round_for_cooking", "get_scaling_ratio",
    "infer_scaling_rule", "coerce_rule_type", "make_rule",
    "validate_scaling_rule", "is_valid_scaling_rule", "RuleValidation",
]
