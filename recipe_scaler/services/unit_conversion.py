"""
Unit Conversion Service.

Converts amounts between named kitchen units through one shared base axis.
Grams and milliliters are treated as the same base unit: recipe amounts are a
single scalar whether the ingredient is weighed or measured by volume.
"""

import logging
import re
from types import MappingProxyType
from typing import Optional, Tuple

from ..errors import UnknownUnitError
from ..schemas import ConversionRate
from ..settings import settings
from .ingredient_normalize import first_keyword_match

logger = logging.getLogger("recipe_scaler.units")

UNKNOWN_UNIT = "unknown unit"


def _rate(factor: float, description: str, system: str, dimension: str) -> ConversionRate:
    return ConversionRate(
        to_base_factor=factor,
        description=description,
        system=system,
        dimension=dimension,
    )


# --- Data Tables ---

# Normalized unit -> rate (base: g / ml)
METRIC_CONVERSIONS = MappingProxyType({
    # Mass
    "g": _rate(1, "gram", "metric", "mass"),
    "gram": _rate(1, "gram", "metric", "mass"),
    "grams": _rate(1, "gram", "metric", "mass"),
    "kg": _rate(1000, "kilogram", "metric", "mass"),
    "kilogram": _rate(1000, "kilogram", "metric", "mass"),

    # Volume
    "ml": _rate(1, "milliliter", "metric", "volume"),
    "milliliter": _rate(1, "milliliter", "metric", "volume"),
    "l": _rate(1000, "liter", "metric", "volume"),
    "liter": _rate(1000, "liter", "metric", "volume"),
})

IMPERIAL_CONVERSIONS = MappingProxyType({
    # Mass
    "oz": _rate(28.35, "ounce", "imperial", "mass"),
    "ounce": _rate(28.35, "ounce", "imperial", "mass"),
    "lb": _rate(453.592, "pound", "imperial", "mass"),
    "pound": _rate(453.592, "pound", "imperial", "mass"),

    # Volume
    "tsp": _rate(5, "teaspoon", "imperial", "volume"),
    "teaspoon": _rate(5, "teaspoon", "imperial", "volume"),
    "tbsp": _rate(15, "tablespoon", "imperial", "volume"),
    "tablespoon": _rate(15, "tablespoon", "imperial", "volume"),
    "cup": _rate(240, "cup", "imperial", "volume"),
    "cups": _rate(240, "cup", "imperial", "volume"),
    "fl_oz": _rate(30, "fluid ounce", "imperial", "volume"),
    "pint": _rate(473.176, "pint", "imperial", "volume"),
    "quart": _rate(946.353, "quart", "imperial", "volume"),
    "gallon": _rate(3785.41, "gallon", "imperial", "volume"),
})

ALL_CONVERSIONS = MappingProxyType({
    **METRIC_CONVERSIONS,
    **IMPERIAL_CONVERSIONS,
})

# Spellings folded onto a registry key
SYNONYMS = MappingProxyType({
    "fl oz": "fl_oz",
    "fluid ounce": "fl_oz",
    "tbl": "tbsp",
    "litre": "liter",
    "millilitre": "milliliter",
    "kilo": "kg",
    "pt": "pint",
    "qt": "quart",
    "gal": "gallon",
})

# Approximate grams per cup. Ordered: first keyword found in the name wins.
# Display-time estimates only, not used by the scaling engine.
DENSITY_GRAMS_PER_CUP = (
    ("flour", 125.0),
    ("sugar", 200.0),
    ("butter", 227.0),
    ("oil", 240.0),
    ("water", 240.0),
    ("milk", 240.0),
    ("honey", 340.0),
    ("salt", 290.0),
    ("powder", 120.0),
)


# --- Lookup ---

def resolve_unit(unit: str) -> Optional[str]:
    """Resolve a unit string to its key in ALL_CONVERSIONS, or None."""
    if not unit:
        return None

    u = re.sub(r'\s+', ' ', unit.strip().rstrip('.').lower())

    if u in ALL_CONVERSIONS:
        return u

    if u in SYNONYMS:
        return SYNONYMS[u]

    # Plural s removal ("kilograms", "lbs")
    if u.endswith('s'):
        singular = u[:-1]
        if singular in ALL_CONVERSIONS:
            return singular
        if singular in SYNONYMS:
            return SYNONYMS[singular]

    return None


def get_rate(unit: str) -> Optional[ConversionRate]:
    key = resolve_unit(unit)
    if key is None:
        return None
    return ALL_CONVERSIONS[key]


def is_valid_unit(unit: str) -> bool:
    return resolve_unit(unit) is not None


def describe_unit(unit: str) -> str:
    rate = get_rate(unit)
    return rate.description if rate else UNKNOWN_UNIT


def normalize_unit(unit: str) -> str:
    """
    Return the canonical description for a known unit ("grams" -> "gram",
    "tbsp" -> "tablespoon"), or the input unchanged when the unit is unknown.

    The result is prose, not a unit symbol. Use resolve_unit for a registry key.
    """
    rate = get_rate(unit)
    return rate.description if rate else unit


def list_units() -> dict[str, list[str]]:
    return {
        "metric": list(METRIC_CONVERSIONS),
        "imperial": list(IMPERIAL_CONVERSIONS),
    }


# --- Conversion ---

def convert(amount: float, from_unit: str, to_unit: str) -> float:
    """
    Convert an amount from one unit to another through the shared base axis.

    Units that are equal after lowercasing and trimming short-circuit and
    return the amount unchanged, known or not.
    """
    if from_unit.strip().lower() == to_unit.strip().lower():
        return amount

    from_rate = get_rate(from_unit)
    if from_rate is None:
        raise UnknownUnitError(from_unit)

    to_rate = get_rate(to_unit)
    if to_rate is None:
        raise UnknownUnitError(to_unit)

    base_amount = amount * from_rate.to_base_factor
    result = base_amount / to_rate.to_base_factor

    logger.debug("convert %s %s -> %s %s", amount, from_unit, result, to_unit)
    return result


def auto_select_unit(amount: float, current_unit: str, target_system: Optional[str] = None) -> str:
    """
    Select a readable unit for the amount in the target system.
    target_system: "metric" or "us_customary" ("imperial" is accepted too).
    Unknown units and systems return current_unit unchanged.
    """
    rate = get_rate(current_unit)
    if rate is None:
        return current_unit

    system = target_system or settings.default_unit_system
    base = amount * rate.to_base_factor

    # 1. Metric
    if system == "metric":
        if rate.dimension == "volume":
            return "l" if base >= 1000 else "ml"
        return "kg" if base >= 1000 else "g"

    # 2. US Customary
    if system in ("us_customary", "imperial"):
        if rate.dimension == "volume":
            if base < ALL_CONVERSIONS["tbsp"].to_base_factor:
                return "tsp"
            if base < 4 * ALL_CONVERSIONS["tbsp"].to_base_factor:  # < 1/4 cup
                return "tbsp"
            if base < ALL_CONVERSIONS["quart"].to_base_factor:
                return "cup"
            if base < ALL_CONVERSIONS["gallon"].to_base_factor:
                return "quart"
            return "gallon"

        base_oz = base / ALL_CONVERSIONS["oz"].to_base_factor
        return "lb" if base_oz >= 16 else "oz"

    return current_unit


# --- Density estimates (approximate) ---

def estimate_grams_per_cup(ingredient: Optional[str] = None) -> Tuple[float, str]:
    """
    Approximate grams per cup for an ingredient name.
    Returns (grams_per_cup, confidence): "low" for a keyword match,
    "none" for the generic default.
    """
    if ingredient:
        factor = first_keyword_match(ingredient, DENSITY_GRAMS_PER_CUP)
        if factor is not None:
            return factor, "low"
    return settings.default_grams_per_cup, "none"


def _grams_per_cup(ingredient: Optional[str], grams_per_cup: Optional[float]) -> float:
    # Explicit override takes precedence over the keyword table
    if grams_per_cup:
        return grams_per_cup
    factor, _ = estimate_grams_per_cup(ingredient)
    return factor


def grams_to_cups(
    grams: float,
    ingredient: Optional[str] = None,
    grams_per_cup: Optional[float] = None
) -> float:
    """Convert grams to cups (approximate, varies by ingredient)."""
    return grams / _grams_per_cup(ingredient, grams_per_cup)


def cups_to_grams(
    cups: float,
    ingredient: Optional[str] = None,
    grams_per_cup: Optional[float] = None
) -> float:
    """Convert cups to grams (approximate)."""
    return cups * _grams_per_cup(ingredient, grams_per_cup)
