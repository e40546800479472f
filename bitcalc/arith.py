"""Arithmetic on bit strings.

Every operation is a pure function from well-formed bit strings to a new
bit string.  Decision branches are annotated with their branch ids (see
``spec.build_spec``) so white-box tests can trace coverage back to the
contract.

Dependency order: compare -> add -> sub -> mul -> div_mod.
"""
from __future__ import annotations

from enum import Enum, IntEnum
from itertools import zip_longest

from bitcalc.bits import (
    ONE,
    ZERO,
    digits,
    from_digits,
    is_zero,
    normalize,
    zeros,
)


class Ordering(IntEnum):
    """Three-way comparison result.  Compares like the sign of ``a - b``."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


class DivZeroMode(str, Enum):
    """What ``div_mod`` does when the divisor represents 0."""

    SENTINEL = "sentinel"   # return ("0", "0")
    ERROR = "error"         # raise ZeroDivisionError


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------

def compare(a: str, b: str) -> Ordering:
    """Order ``a`` and ``b`` by the magnitude they represent.

    Branches: CMP-LEN-LESS, CMP-LEN-GREATER, CMP-DIGIT-LESS,
              CMP-DIGIT-GREATER, CMP-EQUAL
    """
    # validate first: normalize("") would read as zero
    digits(a)
    digits(b)
    da = digits(normalize(a))
    db = digits(normalize(b))

    # Without leading zeros, a longer string is a larger number.
    if len(da) < len(db):                                        # CMP-LEN-LESS
        return Ordering.LESS
    if len(da) > len(db):                                        # CMP-LEN-GREATER
        return Ordering.GREATER

    for x, y in zip(da, db):
        if x != y:
            if x < y:                                            # CMP-DIGIT-LESS
                return Ordering.LESS
            return Ordering.GREATER                              # CMP-DIGIT-GREATER
    return Ordering.EQUAL                                        # CMP-EQUAL


# ---------------------------------------------------------------------------
# Addition
# ---------------------------------------------------------------------------

def add(a: str, b: str) -> str:
    """Ripple-carry addition.

    Works LSB-first over both operands, treating the shorter one as
    zero-extended.  The output is at most one digit longer than the
    longer operand and is not normalized: ``add("0011", "0001")`` is
    ``"0100"``.

    Branches: ADD-CARRY-OUT, ADD-NO-CARRY-OUT
    """
    ra = digits(a)[::-1]
    rb = digits(b)[::-1]

    out: list[int] = []
    carry = 0
    for x, y in zip_longest(ra, rb, fillvalue=0):
        total = x + y + carry
        out.append(total % 2)
        carry = 1 if total >= 2 else 0

    if carry:                                                    # ADD-CARRY-OUT
        out.append(1)
    # else                                                       # ADD-NO-CARRY-OUT
    return from_digits(out[::-1])


# ---------------------------------------------------------------------------
# Subtraction
# ---------------------------------------------------------------------------

def _left_pad(s: str, width: int) -> str:
    missing = width - len(s)
    return zeros(missing) + s if missing > 0 else s


def sub(a: str, b: str) -> str:
    """Borrow-propagating subtraction, normalized.

    Requires ``a >= b`` by value; a borrow left over after the most
    significant position means it was not, and raises ``ValueError``.

    Branches: SUB-ZERO-SUBTRAHEND, SUB-EQUAL, SUB-BORROW, SUB-UNDERFLOW
    """
    digits(a)  # validate before the fast paths
    if is_zero(b):                                               # SUB-ZERO-SUBTRAHEND
        return normalize(a)
    if a == b:                                                   # SUB-EQUAL
        return ZERO

    width = max(len(a), len(b))
    pa = digits(_left_pad(a, width))
    pb = digits(_left_pad(b, width))

    out: list[int] = []
    borrow = 0
    for x, y in zip(reversed(pa), reversed(pb)):                 # SUB-BORROW
        raw = x - y - borrow
        if raw < 0:
            out.append(raw + 2)
            borrow = 1
        else:
            out.append(raw)
            borrow = 0

    if borrow:                                                   # SUB-UNDERFLOW
        raise ValueError(
            f"minuend {a!r} is smaller than subtrahend {b!r}"
        )
    return normalize(from_digits(out[::-1]))


# ---------------------------------------------------------------------------
# Multiplication
# ---------------------------------------------------------------------------

def mul(a: str, b: str) -> str:
    """Shift-and-add multiplication.

    Consumes the multiplier LSB-first; for every 1 digit the shifted
    multiplicand is added into the accumulator, and the multiplicand is
    doubled (one trailing zero) after every digit.

    Branches: MUL-ZERO, MUL-SHIFT-ADD
    """
    multiplier = digits(b)
    if is_zero(a) or is_zero(b):                                 # MUL-ZERO
        return ZERO

    shifted = a                                                  # MUL-SHIFT-ADD
    acc = ZERO
    for d in reversed(multiplier):
        if d:
            acc = add(acc, shifted)
        shifted = shifted + ZERO
    return normalize(acc)


# ---------------------------------------------------------------------------
# Division with remainder
# ---------------------------------------------------------------------------

def div_mod(
    dividend: str,
    divisor: str,
    div_zero_mode: DivZeroMode = DivZeroMode.SENTINEL,
) -> tuple[str, str]:
    """Restoring long division: ``(quotient, remainder)``, both normalized.

    Branches: DIV-ZERO-SENTINEL, DIV-ZERO-ERROR, DIV-ZERO-DIVIDEND,
              DIV-EQUAL, DIV-SMALLER, DIV-LONG
    """
    digits(dividend)  # validate before the fast paths
    if is_zero(divisor):
        if div_zero_mode == DivZeroMode.ERROR:                   # DIV-ZERO-ERROR
            raise ZeroDivisionError("bit-string division by zero")
        return ZERO, ZERO                                        # DIV-ZERO-SENTINEL

    if is_zero(dividend):                                        # DIV-ZERO-DIVIDEND
        return ZERO, ZERO

    order = compare(dividend, divisor)
    if order == Ordering.EQUAL:                                  # DIV-EQUAL
        return ONE, ZERO
    if order == Ordering.LESS:                                   # DIV-SMALLER
        return ZERO, normalize(dividend)

    remainder = ZERO                                             # DIV-LONG
    quotient: list[int] = []
    for c in dividend:
        # Appending to "0" replaces it instead of leaving a leading zero.
        remainder = c if remainder == ZERO else remainder + c
        if compare(remainder, divisor) != Ordering.LESS:
            quotient.append(1)
            remainder = sub(remainder, divisor)
        else:
            quotient.append(0)

    return normalize(from_digits(quotient)), remainder
