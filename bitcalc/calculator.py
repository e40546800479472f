"""Configured bit-string calculator.

Every operation validates its operands, then delegates to the pure
functions in ``arith``.  Validation branches are annotated with their
branch ids like the ones in ``arith``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from bitcalc import arith, bits
from bitcalc.arith import DivZeroMode, Ordering
from bitcalc.bits import ONE, ZERO, MalformedBitStringError, is_well_formed, normalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BitCalculator:
    div_zero_mode: DivZeroMode = DivZeroMode.SENTINEL

    # -- internal helpers ---------------------------------------------------

    def _validate(self, *values: str) -> None:
        """Reject operands that are not well-formed bit strings.

        Branches: INPUT-VALID, INPUT-INVALID-A, INPUT-INVALID-B
        """
        for v in values:
            if not is_well_formed(v):                            # INPUT-INVALID-*
                raise MalformedBitStringError(v)
        # (falls through) INPUT-VALID

    # -- core operations ----------------------------------------------------

    def compare(self, a: str, b: str) -> Ordering:
        self._validate(a, b)
        result = arith.compare(a, b)
        logger.debug("compare(%s, %s) = %s", a, b, result.name)
        return result

    def add(self, a: str, b: str) -> str:
        self._validate(a, b)
        result = arith.add(a, b)
        logger.debug("add(%s, %s) = %s", a, b, result)
        return result

    def sub(self, a: str, b: str) -> str:
        """Subtraction; raises ValueError when ``b`` exceeds ``a``."""
        self._validate(a, b)
        result = arith.sub(a, b)
        logger.debug("sub(%s, %s) = %s", a, b, result)
        return result

    def mul(self, a: str, b: str) -> str:
        self._validate(a, b)
        result = arith.mul(a, b)
        logger.debug("mul(%s, %s) = %s", a, b, result)
        return result

    def div_mod(self, a: str, b: str) -> tuple[str, str]:
        """Quotient and remainder, with division by zero per ``div_zero_mode``."""
        self._validate(a, b)
        quotient, remainder = arith.div_mod(a, b, self.div_zero_mode)
        logger.debug("div_mod(%s, %s) = (%s, %s)", a, b, quotient, remainder)
        return quotient, remainder

    # -- convenience --------------------------------------------------------

    def floordiv(self, a: str, b: str) -> str:
        return self.div_mod(a, b)[0]

    def mod(self, a: str, b: str) -> str:
        return self.div_mod(a, b)[1]

    def is_zero(self, a: str) -> bool:
        self._validate(a)
        return bits.is_zero(a)

    def shift_left(self, a: str, n: int) -> str:
        """Multiply by 2**n by appending ``n`` zero digits."""
        self._validate(a)
        if n < 0:
            raise ValueError("negative shifts not supported")
        result = normalize(a + ZERO * n)
        logger.debug("shift_left(%s, %d) = %s", a, n, result)
        return result

    def pow(self, base: str, exp: int) -> str:
        """Repeated multiplication (exp >= 0 only)."""
        self._validate(base)
        if exp < 0:
            raise ValueError("negative exponents not supported")
        result = ONE
        for _ in range(exp):
            result = self.mul(result, base)
        logger.debug("pow(%s, %d) = %s", base, exp, result)
        return result
