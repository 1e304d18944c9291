"""
Block Decay

Расчёт суммы Dutch-ордера по номеру блока, как в settlement контракте.
"""

from src.core.decay.block_decay import (
    ConfigLike,
    bounded_decay,
    decay,
    decay_input,
    decay_output,
    get_block_decayed_amount,
    get_end_amount,
    linear_decay,
    locate_array_position,
)
from src.core.domain.decay_curve import (
    MAX_CURVE_POINTS,
    InvalidDecayCurve,
    MissingConfiguration,
)

__all__ = [
    # Constants
    "MAX_CURVE_POINTS",
    # Exceptions
    "InvalidDecayCurve",
    "MissingConfiguration",
    # Types
    "ConfigLike",
    # Functions
    "bounded_decay",
    "decay",
    "decay_input",
    "decay_output",
    "get_block_decayed_amount",
    "get_end_amount",
    "linear_decay",
    "locate_array_position",
]
