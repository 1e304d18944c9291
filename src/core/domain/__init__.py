"""
Domain models and value objects.

Contains the decay curve and per-order decay configuration.
"""

from src.core.domain.decay_curve import (
    MAX_CURVE_POINTS,
    DecayCurve,
    DutchBlockDecayConfig,
    InvalidDecayCurve,
    MissingConfiguration,
    validate_curve_shape,
)

__all__ = [
    "MAX_CURVE_POINTS",
    "DecayCurve",
    "DutchBlockDecayConfig",
    "InvalidDecayCurve",
    "MissingConfiguration",
    "validate_curve_shape",
]
