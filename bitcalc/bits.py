"""Bit-string representation, validation and conversion.

A bit string is a ``str`` of ``'0'`` and ``'1'`` characters, most
significant digit first.  It is *well-formed* when it is non-empty and
contains nothing else; it is *normalized* when it is also either a
single digit or free of leading zeros.  ``"0"`` is the canonical zero.

Layers
------
is_well_formed / normalize / zeros     representation rules
digits                                 validated view as a list of 0/1 ints
to_value / from_value                  bridge to native ``int``
"""
from __future__ import annotations

ZERO = "0"
ONE = "1"

_BINARY_DIGITS = frozenset("01")


class MalformedBitStringError(ValueError):
    """Raised when an operation receives a string that is not well-formed."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"not a well-formed bit string: {value!r}")


# ---------------------------------------------------------------------------
# Representation rules
# ---------------------------------------------------------------------------

def is_well_formed(s: object) -> bool:
    """True iff ``s`` is a non-empty string of '0'/'1' characters."""
    return isinstance(s, str) and bool(s) and set(s) <= _BINARY_DIGITS


def is_normalized(s: object) -> bool:
    return is_well_formed(s) and (len(s) == 1 or s[0] == ONE)


def normalize(s: str) -> str:
    """Strip leading zeros; an empty or all-zero string becomes ``"0"``.

    Total over strings: only leading ``'0'`` characters are removed, so a
    well-formed input keeps its value and an already normalized input is
    returned unchanged.
    """
    return s.lstrip(ZERO) or ZERO


def zeros(n: int) -> str:
    """``n`` zero digits.  Used for padding, so the result is not normalized."""
    if n < 1:
        raise ValueError(f"zeros() needs a positive width, got {n}")
    return ZERO * n


def digits(s: str) -> list[int]:
    """Return the digits of ``s`` as ints, MSB first, or raise if malformed."""
    if not is_well_formed(s):
        raise MalformedBitStringError(s)
    return [1 if c == ONE else 0 for c in s]


def from_digits(ds: list[int]) -> str:
    return "".join(ONE if d else ZERO for d in ds)


def is_zero(s: str) -> bool:
    """True iff the well-formed string ``s`` represents 0."""
    if not is_well_formed(s):
        raise MalformedBitStringError(s)
    return ONE not in s


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------

def to_value(s: str) -> int:
    """Magnitude of ``s``.  Leading zeros contribute nothing."""
    acc = 0
    for d in digits(s):
        acc = 2 * acc + d
    return acc


def from_value(n: int) -> str:
    """The unique normalized bit string whose value is ``n``."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"expected a non-negative int, got {type(n).__name__}")
    if n < 0:
        raise ValueError(f"unsigned values only, got {n}")
    if n == 0:
        return ZERO

    lsb_first: list[int] = []
    while n > 0:
        lsb_first.append(n % 2)
        n //= 2
    return from_digits(lsb_first[::-1])
