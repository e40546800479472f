"""Factory and counterexample search tests.

These test the end-to-end verification:
  - A correct implementation passes verification.
  - A broken implementation is rejected, with a counterexample.
  - The search actually enumerates every operand up to the width.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import pytest

from bitcalc import arith
from bitcalc.arith import DivZeroMode
from bitcalc.calculator import BitCalculator
from bitcalc.config import Settings
from bitcalc.factory import VerificationError, VerifiedFactory
from bitcalc.search import (
    SearchReport,
    all_bit_strings,
    run_search,
    search_error_violations,
    search_postcondition_violations,
    search_property_violations,
)
from bitcalc.spec import build_spec


# ---------------------------------------------------------------------------
# Deliberately broken implementations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DroppedCarryCalculator(BitCalculator):
    """Forgets the final carry, so 1 + 1 == 0."""

    def add(self, a: str, b: str) -> str:
        result = arith.add(a, b)
        if len(result) > max(len(a), len(b)):
            return result[1:]
        return result


@dataclass(frozen=True)
class SilentUnderflowCalculator(BitCalculator):
    """Returns "0" instead of raising when b > a."""

    def sub(self, a: str, b: str) -> str:
        try:
            return arith.sub(a, b)
        except ValueError:
            return "0"


@dataclass(frozen=True)
class UnnormalizedProductCalculator(BitCalculator):
    """Correct value, but keeps a leading zero."""

    def mul(self, a: str, b: str) -> str:
        return "0" + arith.mul(a, b)


# ---------------------------------------------------------------------------
# Operand domain
# ---------------------------------------------------------------------------

class TestAllBitStrings:

    def test_counts(self):
        assert len(list(all_bit_strings(1))) == 2
        assert len(list(all_bit_strings(3))) == 2 + 4 + 8

    def test_includes_leading_zeros(self):
        domain = set(all_bit_strings(3))
        assert {"0", "00", "000", "001", "011"} <= domain

    def test_shortest_first(self):
        assert list(all_bit_strings(2)) == ["0", "1", "00", "01", "10", "11"]


# ---------------------------------------------------------------------------
# Factory produces verified calculators
# ---------------------------------------------------------------------------

class TestFactoryProducesVerified:

    def test_default(self):
        calc = VerifiedFactory.create()
        assert isinstance(calc, BitCalculator)
        assert calc.div_zero_mode == DivZeroMode.SENTINEL

    def test_error_mode(self):
        calc = VerifiedFactory.create(DivZeroMode.ERROR, width=3)
        assert calc.div_zero_mode == DivZeroMode.ERROR
        with pytest.raises(ZeroDivisionError):
            calc.div_mod("1", "0")

    def test_from_settings(self):
        settings = Settings(div_zero_mode="error", verify_width=2)
        calc = VerifiedFactory.from_settings(settings)
        assert calc.div_zero_mode == DivZeroMode.ERROR

    def test_verify_returns_report(self):
        report = VerifiedFactory.verify(BitCalculator(), width=2)
        assert isinstance(report, SearchReport)
        assert report.passed
        assert report.checks_run > 0

    @pytest.mark.parametrize("width", [0, 9])
    def test_width_out_of_range(self, width):
        with pytest.raises(ValueError):
            VerifiedFactory.create(width=width)

    def test_logs_outcome(self, caplog):
        with caplog.at_level(logging.INFO, logger="bitcalc.factory"):
            VerifiedFactory.create(width=2)
        assert "Verification passed" in caplog.text


# ---------------------------------------------------------------------------
# Factory rejects broken implementations
# ---------------------------------------------------------------------------

class TestFactoryRejectsBroken:

    def test_dropped_carry(self):
        with pytest.raises(VerificationError) as exc_info:
            VerifiedFactory.verify(DroppedCarryCalculator(), width=2)
        report = exc_info.value.report
        assert not report.passed
        assert any(cx.operation == "add" for cx in report.counterexamples)

    def test_silent_underflow(self):
        with pytest.raises(VerificationError) as exc_info:
            VerifiedFactory.verify(SilentUnderflowCalculator(), width=2)
        categories = {cx.category for cx in exc_info.value.report.counterexamples}
        assert "missing_error" in categories

    def test_unnormalized_product(self):
        with pytest.raises(VerificationError) as exc_info:
            VerifiedFactory.verify(UnnormalizedProductCalculator(), width=2)
        descriptions = {
            cx.description for cx in exc_info.value.report.counterexamples
        }
        assert "Postcondition 'result_normalized' violated" in descriptions

    def test_wrong_div_zero_mode(self):
        """A sentinel calculator does not satisfy the ERROR-mode contract."""
        with pytest.raises(VerificationError):
            VerifiedFactory.verify(
                BitCalculator(DivZeroMode.SENTINEL), DivZeroMode.ERROR, width=2,
            )

    def test_error_message_contains_summary(self):
        with pytest.raises(VerificationError, match="Counterexample Search Report"):
            VerifiedFactory.verify(DroppedCarryCalculator(), width=1)


# ---------------------------------------------------------------------------
# Individual searches
# ---------------------------------------------------------------------------

class TestSearches:
    spec = build_spec()

    def test_postcondition_search_clean(self):
        cxs, checks = search_postcondition_violations(BitCalculator(), self.spec, 2)
        assert cxs == []
        # 6 operands, 5 operations
        assert checks == 6 * 6 * 5

    def test_error_search_counts_only_triggered(self):
        cxs, checks = search_error_violations(BitCalculator(), self.spec, 1)
        assert cxs == []
        # only sub("0", "1") underflows in the width-1 domain
        assert checks == 1

    def test_property_search_finds_broken_add(self):
        cxs, _ = search_property_violations(DroppedCarryCalculator(), self.spec, 2)
        assert any(cx.category == "property_violation" for cx in cxs)

    def test_report_summary_clean(self):
        report = run_search(BitCalculator(), self.spec, 1)
        assert report.passed
        assert "No counterexamples found" in report.summary()

    def test_report_logs_counterexamples(self, caplog):
        with caplog.at_level(logging.WARNING, logger="bitcalc.search"):
            report = run_search(DroppedCarryCalculator(), self.spec, 1)
        assert not report.passed
        assert "postcondition_violation" in caplog.text
