"""Request and response models for the bit-string API.

Operand fields are validated for well-formedness here, so the handlers
only ever see strings the arithmetic accepts.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from bitcalc.arith import Ordering
from bitcalc.bits import is_well_formed


def _check_bits(v: str) -> str:
    if not is_well_formed(v):
        raise ValueError(f"must be a non-empty string of 0 and 1, got {v!r}")
    return v


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class BitStringIn(BaseModel):
    """A single operand."""

    value: str = Field(..., examples=["0011"])

    @field_validator("value")
    @classmethod
    def value_is_bits(cls, v: str) -> str:
        return _check_bits(v)


class OperandPair(BaseModel):
    """Two operands for a binary operation."""

    a: str = Field(..., examples=["1101"])
    b: str = Field(..., examples=["0110"])

    @field_validator("a", "b")
    @classmethod
    def operands_are_bits(cls, v: str) -> str:
        return _check_bits(v)


class IntegerIn(BaseModel):
    value: int = Field(..., ge=0)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class BitStringOut(BaseModel):
    result: str


class IntegerOut(BaseModel):
    value: int


class OrderingName(str, Enum):
    LESS = "less"
    EQUAL = "equal"
    GREATER = "greater"

    @classmethod
    def from_ordering(cls, ordering: Ordering) -> "OrderingName":
        return cls[ordering.name]


class CompareOut(BaseModel):
    ordering: OrderingName


class DivModOut(BaseModel):
    quotient: str
    remainder: str
