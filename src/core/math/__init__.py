"""
Core math modules для block decay

Целочисленная арифметика settlement контракта (uint256 / int256).
"""

# Uint256 arithmetic
from src.core.math.uint256 import (
    INT256_MAX,
    INT256_MIN,
    UINT256_MAX,
    Uint256RangeError,
    add_uint256,
    bound,
    is_uint256,
    mul_div_down,
    sub_uint256,
    validate_int256,
    validate_uint256,
)

__all__ = [
    # Constants
    "INT256_MAX",
    "INT256_MIN",
    "UINT256_MAX",
    # Exceptions
    "Uint256RangeError",
    # Functions
    "add_uint256",
    "bound",
    "is_uint256",
    "mul_div_down",
    "sub_uint256",
    "validate_int256",
    "validate_uint256",
]
