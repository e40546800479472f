"""FastAPI endpoints for bit-string arithmetic.

Routes
------
POST   /bits/normalize     Strip leading zeros
POST   /bits/to-value      Bit string -> integer
POST   /bits/from-value    Integer -> normalized bit string
POST   /bits/compare       Three-way comparison
POST   /bits/add           Sum
POST   /bits/sub           Difference (minuend must not be smaller)
POST   /bits/mul           Product
POST   /bits/divmod        Quotient and remainder
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from bitcalc.bits import from_value, normalize, to_value
from bitcalc.calculator import BitCalculator
from bitcalc.models import (
    BitStringIn,
    BitStringOut,
    CompareOut,
    DivModOut,
    IntegerIn,
    IntegerOut,
    OperandPair,
    OrderingName,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bits", tags=["bits"])

# The calculator instance is injected by the app factory (see app.py).
_calculator: BitCalculator | None = None


def set_calculator(calculator: BitCalculator) -> None:
    """Inject the calculator instance. Called once at app startup."""
    global _calculator
    _calculator = calculator


def get_calculator() -> BitCalculator:
    assert _calculator is not None, "Calculator not initialized"
    return _calculator


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------

@router.post("/normalize", response_model=BitStringOut)
def normalize_bits(payload: BitStringIn) -> BitStringOut:
    return BitStringOut(result=normalize(payload.value))


@router.post("/to-value", response_model=IntegerOut)
def bits_to_value(payload: BitStringIn) -> IntegerOut:
    return IntegerOut(value=to_value(payload.value))


@router.post("/from-value", response_model=BitStringOut)
def bits_from_value(payload: IntegerIn) -> BitStringOut:
    return BitStringOut(result=from_value(payload.value))


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------

@router.post("/compare", response_model=CompareOut)
def compare_bits(payload: OperandPair) -> CompareOut:
    ordering = get_calculator().compare(payload.a, payload.b)
    return CompareOut(ordering=OrderingName.from_ordering(ordering))


@router.post("/add", response_model=BitStringOut)
def add_bits(payload: OperandPair) -> BitStringOut:
    return BitStringOut(result=get_calculator().add(payload.a, payload.b))


@router.post("/sub", response_model=BitStringOut)
def sub_bits(payload: OperandPair) -> BitStringOut:
    try:
        result = get_calculator().sub(payload.a, payload.b)
    except ValueError as e:
        logger.info("Rejected subtraction %s - %s: %s", payload.a, payload.b, e)
        raise HTTPException(status_code=422, detail=str(e)) from e
    return BitStringOut(result=result)


@router.post("/mul", response_model=BitStringOut)
def mul_bits(payload: OperandPair) -> BitStringOut:
    return BitStringOut(result=get_calculator().mul(payload.a, payload.b))


@router.post("/divmod", response_model=DivModOut)
def divmod_bits(payload: OperandPair) -> DivModOut:
    try:
        quotient, remainder = get_calculator().div_mod(payload.a, payload.b)
    except ZeroDivisionError as e:
        logger.info("Rejected division %s / %s: %s", payload.a, payload.b, e)
        raise HTTPException(status_code=400, detail=str(e)) from e
    return DivModOut(quotient=quotient, remainder=remainder)
