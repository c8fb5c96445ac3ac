"""
Core math modules для launchpad core

Целочисленные математические примитивы с гарантией детерминизма.
"""

# Checked Arithmetic
from src.core.math.checked_arithmetic import (
    # Type bounds
    BPS_DENOMINATOR,
    CURVE_SCALE,
    U16_MAX,
    U64_MAX,
    U128_MAX,
    # Checked operations
    checked_add,
    checked_div,
    checked_mul,
    checked_sub,
    mul_div,
    # Validation
    validate_bps,
    validate_u16,
    validate_u64,
)

# Fixed-Point Power Evaluator
from src.core.math.fixed_point import (
    DIRECT_ITERATION_MAX_SUPPLY,
    FLAT_RATE,
    price_at,
)

__all__ = [
    # Checked Arithmetic: Type bounds
    "BPS_DENOMINATOR",
    "CURVE_SCALE",
    "U16_MAX",
    "U64_MAX",
    "U128_MAX",
    # Checked Arithmetic: Operations
    "checked_add",
    "checked_div",
    "checked_mul",
    "checked_sub",
    "mul_div",
    # Checked Arithmetic: Validation
    "validate_bps",
    "validate_u16",
    "validate_u64",
    # Fixed-Point: Constants
    "DIRECT_ITERATION_MAX_SUPPLY",
    "FLAT_RATE",
    # Fixed-Point: Functions
    "price_at",
]
