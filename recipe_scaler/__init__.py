"""Recipe scaling engine: per-ingredient growth curves and kitchen unit conversion."""

from .errors import (
    ScalingError, InvalidServingsError, UnknownScalingRuleError,
    UnknownUnitError, InvalidRuleShapeError,
)
from .schemas import (
    RuleType, RULE_TYPES, ScalingRule, ScaledResult, ConversionRate,
    IngredientIn, ScaledIngredient, RecipeCard, RecipeIngredient,
    ScaledRecipe, ScaledRecipeIngredient,
)
from .services import *  # noqa: F401,F403
from .services import __all__ as _services_all

__version__ = "0.1.0"

__all__ = [
    "ScalingError", "InvalidServingsError", "UnknownScalingRuleError",
    "UnknownUnitError", "InvalidRuleShapeError",
    "RuleType", "RULE_TYPES", "ScalingRule", "ScaledResult", "ConversionRate",
    "IngredientIn", "ScaledIngredient", "RecipeCard", "RecipeIngredient",
    "ScaledRecipe", "ScaledRecipeIngredient",
    *_services_all,
]
