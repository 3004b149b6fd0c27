"""
Value types passed in and out of the scaling engine.

External records (stored recipes, parsed recipe JSON) use camelCase keys;
every model accepts both camelCase and snake_case field names.
"""

from typing import Optional, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

RuleType = Literal["linear", "logarithmic", "sqrt", "fixed"]
RULE_TYPES: tuple[str, ...] = get_args(RuleType)

UnitSystem = Literal["metric", "imperial"]
Dimension = Literal["mass", "volume"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ScalingRule(_CamelModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    type: RuleType
    base_amount: float = Field(..., gt=0, strict=True, allow_inf_nan=False)
    base_servings: int = Field(..., gt=0, strict=True)


class ScaledResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: float
    rounded: float


class ConversionRate(BaseModel):
    model_config = ConfigDict(frozen=True)

    to_base_factor: float = Field(..., gt=0)
    description: str
    system: UnitSystem
    dimension: Dimension  # informational; conversion uses one shared axis


# --- Batch scaling ---

class IngredientIn(_CamelModel):
    name: Optional[str] = None
    amount: float
    unit: Optional[str] = None
    base_servings: Optional[int] = None
    # Left as a plain string so unknown tags surface as UnknownScalingRuleError
    scaling_rule: Optional[str] = None


class ScaledIngredient(_CamelModel):
    name: Optional[str] = None
    amount: float
    unit: Optional[str] = None
    base_servings: int
    scaling_rule: RuleType
    scaled_amount: float
    rounded_amount: float


# --- Whole recipe ---

class RecipeIngredient(_CamelModel):
    name: str = Field(..., min_length=1)
    amount: Optional[float] = None  # None = not filled in yet
    unit: str = Field(..., min_length=1)
    scaling_rule: Optional[str] = None


class RecipeCard(_CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    servings: int = Field(..., ge=1)
    prep_time: Optional[int] = Field(None, ge=0)
    cook_time: Optional[int] = Field(None, ge=0)
    ingredients: list[RecipeIngredient] = Field(..., min_length=1)


class ScaledRecipeIngredient(_CamelModel):
    name: str
    unit: str
    scaling_rule: RuleType
    amount: Optional[float] = None
    scaled_amount: Optional[float] = None
    rounded_amount: Optional[float] = None


class ScaledRecipe(_CamelModel):
    title: str
    base_servings: int
    servings: int
    scale_ratio: float
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None
    ingredients: list[ScaledRecipeIngredient]
