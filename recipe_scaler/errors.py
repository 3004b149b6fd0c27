"""Error types raised by the scaling engine and the unit table."""


class ScalingError(Exception):
    """Base exception for recipe scaling errors."""
    pass


class InvalidServingsError(ScalingError, ValueError):
    """Target or base servings is zero or negative."""
    pass


class UnknownScalingRuleError(ScalingError, ValueError):
    """Scaling rule tag is not one of linear, logarithmic, sqrt, fixed."""

    def __init__(self, rule_type):
        self.rule_type = rule_type
        super().__init__(f"Unknown scaling rule type: {rule_type!r}")


class UnknownUnitError(ScalingError, ValueError):
    """Unit name is not in the conversion registry."""

    def __init__(self, unit: str):
        self.unit = unit
        super().__init__(f"Unknown unit: {unit}")


class InvalidRuleShapeError(ScalingError, ValueError):
    """Rule object from an untrusted source is malformed."""
    pass
