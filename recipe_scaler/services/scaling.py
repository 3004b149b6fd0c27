"""
Recipe Scaling Service.

Scales ingredient amounts from a base serving count to a target serving count
with a per-ingredient growth curve, and rounds results to amounts a cook can
actually measure.
"""

import logging
import math
from collections.abc import Mapping
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from ..errors import (
    InvalidRuleShapeError,
    InvalidServingsError,
    ScalingError,
    UnknownScalingRuleError,
)
from ..schemas import (
    RULE_TYPES,
    IngredientIn,
    RecipeCard,
    RuleType,
    ScaledIngredient,
    ScaledRecipe,
    ScaledRecipeIngredient,
    ScaledResult,
    ScalingRule,
)
from ..settings import settings
from .ingredient_normalize import first_keyword_match

logger = logging.getLogger("recipe_scaler.scaling")

# Quadrupling the batch adds one full base amount
LOG_BASE = 4

# Legacy and parser spellings accepted by coerce_rule_type
RULE_ALIASES = {
    "squareroot": "sqrt",
    "square_root": "sqrt",
    "square root": "sqrt",
    "log": "logarithmic",
    "logarithm": "logarithmic",
    "constant": "fixed",
    "proportional": "linear",
}

# Ordered: first keyword found in the ingredient name wins
RULE_KEYWORDS = (
    # Leavening and chocolate: sub-linear dose
    ("yeast", "logarithmic"),
    ("leaven", "logarithmic"),
    ("baking powder", "logarithmic"),
    ("baking soda", "logarithmic"),
    ("chocolate", "logarithmic"),
    ("cocoa", "logarithmic"),
    # Seasoning: perceived intensity
    ("salt", "sqrt"),
    ("spice", "sqrt"),
    ("pepper", "sqrt"),
    ("cinnamon", "sqrt"),
    ("nutmeg", "sqrt"),
    ("ginger", "sqrt"),
    # Flavorings that do not scale
    ("vanilla", "fixed"),
    ("extract", "fixed"),
    ("coloring", "fixed"),
    ("color", "fixed"),
)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_servings(value: Any) -> bool:
    return _is_number(value) and math.isfinite(value) and value > 0


def _round_half_up(value: float) -> float:
    return math.floor(value + 0.5)


def round_for_cooking(amount: float) -> float:
    """
    Round to a kitchen-practical precision:
    < 1 -> 1/8, 1..10 -> 1/4, 10..100 -> 1/2, > 100 -> whole units.
    """
    if amount < 1:
        return _round_half_up(amount * 8) / 8
    if amount <= 10:
        return _round_half_up(amount * 4) / 4
    if amount <= 100:
        return _round_half_up(amount * 2) / 2
    return float(_round_half_up(amount))


def get_scaling_ratio(base_servings: float, target_servings: float) -> float:
    if not (_is_servings(base_servings) and _is_servings(target_servings)):
        raise InvalidServingsError(
            f"Servings must be positive and finite (base={base_servings}, target={target_servings})"
        )
    return target_servings / base_servings


# --- Rule validation ---

def _field(candidate: Any, *names: str) -> Any:
    for name in names:
        if isinstance(candidate, Mapping):
            if name in candidate:
                return candidate[name]
        elif hasattr(candidate, name):
            return getattr(candidate, name)
    return None


class RuleValidation:
    """Outcome of validate_scaling_rule: either a rule or a typed error."""

    def __init__(
        self,
        rule: Optional[ScalingRule] = None,
        error: Optional[ScalingError] = None
    ):
        self.rule = rule
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok

    def to_dict(self):
        return {
            "ok": self.ok,
            "rule": self.rule.model_dump() if self.rule else None,
            "error": str(self.error) if self.error else None,
        }


def validate_scaling_rule(candidate: Any) -> RuleValidation:
    """
    Check an untrusted rule object (parsed JSON, form input, ORM row).

    Accepts a ScalingRule, a mapping with camelCase or snake_case keys, or any
    object exposing the fields as attributes. Never raises.
    """
    if isinstance(candidate, ScalingRule):
        return RuleValidation(rule=candidate)

    if candidate is None or isinstance(candidate, (str, bytes, int, float)):
        return RuleValidation(error=InvalidRuleShapeError(
            f"Scaling rule must be an object, got {type(candidate).__name__}"
        ))

    rule_type = _field(candidate, "type")
    if isinstance(rule_type, str) and rule_type not in RULE_TYPES:
        return RuleValidation(error=UnknownScalingRuleError(rule_type))

    base_servings = _field(candidate, "base_servings", "baseServings")
    if _is_number(base_servings) and base_servings <= 0:
        return RuleValidation(error=InvalidServingsError(
            f"Base servings must be positive, got {base_servings}"
        ))

    try:
        rule = ScalingRule.model_validate(candidate)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) or "rule" for err in e.errors())
        return RuleValidation(error=InvalidRuleShapeError(f"Invalid scaling rule ({fields})"))

    return RuleValidation(rule=rule)


def is_valid_scaling_rule(candidate: Any) -> bool:
    return validate_scaling_rule(candidate).ok


def coerce_rule_type(rule_type: Any) -> RuleType:
    """
    Map a stored or parsed rule tag to a RuleType.
    Folds case, whitespace and legacy spellings ("squareRoot").
    """
    if isinstance(rule_type, str):
        tag = rule_type.strip().lower()
        tag = RULE_ALIASES.get(tag, tag)
        if tag in RULE_TYPES:
            return tag  # type: ignore[return-value]
    raise UnknownScalingRuleError(rule_type)


def make_rule(rule_type: Any, base_amount: Any, base_servings: Any) -> ScalingRule:
    """Build a ScalingRule, raising the engine's error types for bad input."""
    if rule_type not in RULE_TYPES:
        raise UnknownScalingRuleError(rule_type)

    result = validate_scaling_rule({
        "type": rule_type,
        "base_amount": base_amount,
        "base_servings": base_servings,
    })
    if not result.ok:
        raise result.error
    return result.rule


def _as_rule(rule: Any) -> ScalingRule:
    if isinstance(rule, ScalingRule):
        return rule
    result = validate_scaling_rule(rule)
    if not result.ok:
        raise result.error
    return result.rule


# --- Scaling ---

def scale_amount(
    rule: Any,
    target_servings: float,
    negative_policy: Optional[str] = None
) -> ScaledResult:
    """
    Scale one ingredient to the target serving count.

    The logarithmic curve goes negative below a quarter of the base servings;
    negative_policy ("clamp" or "error", default from settings) decides
    whether that clamps to zero or raises InvalidServingsError.
    """
    if not _is_servings(target_servings):
        raise InvalidServingsError(f"Target servings must be positive and finite, got {target_servings}")

    rule = _as_rule(rule)
    ratio = target_servings / rule.base_servings

    if rule.type == "linear":
        amount = rule.base_amount * ratio
    elif rule.type == "logarithmic":
        amount = rule.base_amount * (1 + math.log(ratio) / math.log(LOG_BASE))
    elif rule.type == "sqrt":
        amount = rule.base_amount * math.sqrt(ratio)
    elif rule.type == "fixed":
        amount = rule.base_amount
    else:
        raise UnknownScalingRuleError(rule.type)

    if not math.isfinite(amount):
        raise ScalingError(
            f"Scaled amount overflowed for {target_servings} servings "
            f"(base {rule.base_amount} for {rule.base_servings})"
        )

    if amount < 0:
        policy = negative_policy or settings.negative_amount_policy
        if policy == "error":
            raise InvalidServingsError(
                f"{target_servings} servings is too small for a logarithmic rule "
                f"written for {rule.base_servings}"
            )
        logger.warning(
            "Clamped logarithmic amount %.4f to 0 (base %s for %s servings, target %s)",
            amount, rule.base_amount, rule.base_servings, target_servings
        )
        amount = 0.0

    return ScaledResult(amount=amount, rounded=round_for_cooking(amount))


def scale_ingredient(rule: Any, target_servings: float) -> float:
    return scale_amount(rule, target_servings).amount


def scale_ingredient_rounded(rule: Any, target_servings: float) -> float:
    return scale_amount(rule, target_servings).rounded


def _as_ingredient(record: Any, index: int) -> IngredientIn:
    if isinstance(record, IngredientIn):
        return record
    try:
        return IngredientIn.model_validate(record, from_attributes=not isinstance(record, Mapping))
    except ValidationError as e:
        raise InvalidRuleShapeError(f"Ingredient #{index} is malformed: {e.error_count()} error(s)") from e


def scale_recipe(
    ingredients: Iterable[Any],
    target_servings: float,
    base_servings_override: Optional[int] = None
) -> list[ScaledIngredient]:
    """
    Scale every ingredient to target_servings.

    base_servings_override replaces each ingredient's own base servings (the
    common case: one recipe-level serving count). The first invalid ingredient
    aborts the whole batch.
    """
    if not _is_servings(target_servings):
        raise InvalidServingsError(f"Target servings must be positive and finite, got {target_servings}")
    if base_servings_override is not None and base_servings_override <= 0:
        raise InvalidServingsError(
            f"Base servings override must be positive, got {base_servings_override}"
        )

    scaled = []
    for i, record in enumerate(ingredients):
        ing = _as_ingredient(record, i)

        base_servings = base_servings_override if base_servings_override is not None else ing.base_servings
        if base_servings is None:
            raise InvalidRuleShapeError(f"Ingredient #{i} has no base servings")

        rule_type = ing.scaling_rule
        if rule_type is None:
            rule_type = infer_scaling_rule(ing.name or "")

        rule = make_rule(rule_type, ing.amount, base_servings)
        result = scale_amount(rule, target_servings)

        scaled.append(ScaledIngredient(
            name=ing.name,
            amount=ing.amount,
            unit=ing.unit,
            base_servings=base_servings,
            scaling_rule=rule.type,
            scaled_amount=result.amount,
            rounded_amount=result.rounded,
        ))

    logger.debug("Scaled %d ingredients to %s servings", len(scaled), target_servings)
    return scaled


def infer_scaling_rule(ingredient_name: str) -> RuleType:
    """
    Guess a rule from the ingredient name when none was supplied.
    Best-effort keyword heuristic; unusual names fall back to linear.
    """
    return first_keyword_match(ingredient_name, RULE_KEYWORDS) or "linear"


def scale_cooking_time(base_time: float, base_servings: float, target_servings: float) -> int:
    """
    Scale prep/cook minutes with the square-root curve: doubling the batch
    adds about 40% time, not 100%.
    """
    ratio = get_scaling_ratio(base_servings, target_servings)
    if not math.isfinite(base_time) or base_time < 0:
        raise ValueError(f"Base time must be a finite non-negative number, got {base_time}")

    return int(_round_half_up(base_time * math.sqrt(ratio)))


# --- Whole recipe ---

def scale_recipe_card(recipe: Any, target_servings: int) -> ScaledRecipe:
    """
    Scale a stored recipe for display: every ingredient plus prep and cook time.

    Ingredients without an amount pass through unscaled. Missing rules are
    inferred from the ingredient name; stored legacy tags are coerced.
    """
    if not isinstance(target_servings, int) or isinstance(target_servings, bool):
        raise InvalidServingsError(f"Target servings must be a whole number, got {target_servings!r}")

    if not isinstance(recipe, RecipeCard):
        try:
            recipe = RecipeCard.model_validate(recipe)
        except ValidationError as e:
            raise InvalidRuleShapeError(f"Recipe is malformed: {e.error_count()} error(s)") from e

    ratio = get_scaling_ratio(recipe.servings, target_servings)

    ingredients = []
    for ing in recipe.ingredients:
        if ing.scaling_rule:
            rule_type = coerce_rule_type(ing.scaling_rule)
        else:
            rule_type = infer_scaling_rule(ing.name)

        if ing.amount is None or ing.amount <= 0:
            ingredients.append(ScaledRecipeIngredient(
                name=ing.name,
                unit=ing.unit,
                scaling_rule=rule_type,
                amount=ing.amount,
            ))
            continue

        result = scale_amount(make_rule(rule_type, ing.amount, recipe.servings), target_servings)
        ingredients.append(ScaledRecipeIngredient(
            name=ing.name,
            unit=ing.unit,
            scaling_rule=rule_type,
            amount=ing.amount,
            scaled_amount=result.amount,
            rounded_amount=result.rounded,
        ))

    return ScaledRecipe(
        title=recipe.title,
        base_servings=recipe.servings,
        servings=target_servings,
        scale_ratio=ratio,
        prep_time=(
            scale_cooking_time(recipe.prep_time, recipe.servings, target_servings)
            if recipe.prep_time is not None else None
        ),
        cook_time=(
            scale_cooking_time(recipe.cook_time, recipe.servings, target_servings)
            if recipe.cook_time is not None else None
        ),
        ingredients=ingredients,
    )
