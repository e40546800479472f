"""Verified calculator factory.

The factory does not just construct calculators - it *verifies* them
against their spec before releasing them.

Flow:
  1. Caller requests a calculator for a div-by-zero mode.
  2. Factory builds the implementation.
  3. Factory runs the exhaustive counterexample search over every
     well-formed operand up to the configured width.
  4. If verification passes  -> return the calculator.
     If verification fails   -> raise, never hand out a broken instance.
"""
from __future__ import annotations

import logging
from typing import Any

from bitcalc.arith import DivZeroMode
from bitcalc.calculator import BitCalculator
from bitcalc.config import Settings
from bitcalc.search import SearchReport, run_search
from bitcalc.spec import build_spec

logger = logging.getLogger(__name__)


class VerificationError(Exception):
    """Raised when an implementation fails its spec."""

    def __init__(self, report: SearchReport):
        self.report = report
        super().__init__(f"Verification failed:\n{report.summary()}")


class VerifiedFactory:
    """Produces BitCalculator instances that have passed their spec.

    Every operand of length 1..width is checked, so the cost grows as
    4**width per binary operation; widths above 8 are refused.
    """

    MAX_WIDTH = 8
    DEFAULT_WIDTH = 4

    @classmethod
    def create(
        cls,
        div_zero_mode: DivZeroMode = DivZeroMode.SENTINEL,
        width: int = DEFAULT_WIDTH,
    ) -> BitCalculator:
        """Build, verify, and return a BitCalculator."""
        calc = BitCalculator(div_zero_mode=div_zero_mode)
        cls.verify(calc, div_zero_mode, width)
        return calc

    @classmethod
    def from_settings(cls, settings: Settings) -> BitCalculator:
        return cls.create(settings.div_zero_mode, settings.verify_width)

    @classmethod
    def verify(
        cls,
        calc: Any,
        div_zero_mode: DivZeroMode = DivZeroMode.SENTINEL,
        width: int = DEFAULT_WIDTH,
    ) -> SearchReport:
        """Check ``calc`` against the spec; raise VerificationError on failure."""
        if not 1 <= width <= cls.MAX_WIDTH:
            raise ValueError(f"width must be in [1, {cls.MAX_WIDTH}], got {width}")

        logger.info(
            "Verifying %s (div_zero_mode=%s, width=%d)",
            type(calc).__name__, div_zero_mode.value, width,
        )
        report = run_search(calc, build_spec(div_zero_mode), width)
        if not report.passed:
            logger.warning(
                "Verification failed with %d counterexample(s)",
                len(report.counterexamples),
            )
            raise VerificationError(report)

        logger.info("Verification passed (%d checks)", report.checks_run)
        return report

