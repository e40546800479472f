"""Arbitrary-precision unsigned arithmetic on explicit bit strings."""

from bitcalc.arith import DivZeroMode, Ordering, add, compare, div_mod, mul, sub
from bitcalc.bits import (
    MalformedBitStringError,
    from_value,
    is_normalized,
    is_well_formed,
    normalize,
    to_value,
    zeros,
)
from bitcalc.calculator import BitCalculator

__all__ = [
    "BitCalculator",
    "DivZeroMode",
    "MalformedBitStringError",
    "Ordering",
    "add",
    "compare",
    "div_mod",
    "from_value",
    "is_normalized",
    "is_well_formed",
    "mul",
    "normalize",
    "sub",
    "to_value",
    "zeros",
]
