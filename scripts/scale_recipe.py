"""
Scale a recipe JSON file to a new serving count and print the result.

Usage: python scripts/scale_recipe.py recipe.json 8 [--system metric]
"""

import argparse
import json
import sys

from recipe_scaler import (
    ScalingError,
    auto_select_unit,
    convert,
    is_valid_unit,
    round_for_cooking,
    scale_recipe_card,
)
from recipe_scaler.log import configure_logging


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("path", help="Recipe JSON (title, servings, ingredients, ...)")
    parser.add_argument("servings", type=int, help="Target serving count")
    parser.add_argument("--system", choices=["metric", "us_customary"], help="Display unit system")
    args = parser.parse_args(argv)

    logger = configure_logging()

    with open(args.path, encoding="utf-8") as f:
        data = json.load(f)

    try:
        scaled = scale_recipe_card(data, args.servings)
    except ScalingError as e:
        logger.error("Cannot scale %s: %s", args.path, e)
        return 1

    out = scaled.model_dump(by_alias=True)

    if args.system:
        for ing in out["ingredients"]:
            qty = ing["roundedAmount"]
            if qty is None or not is_valid_unit(ing["unit"]):
                continue
            unit = auto_select_unit(qty, ing["unit"], args.system)
            ing["displayAmount"] = round_for_cooking(convert(ing["scaledAmount"], ing["unit"], unit))
            ing["displayUnit"] = unit

    print(json.dumps(out, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
