"""Counterexample search: exhaustive checks of a calculator against its spec.

Searches every well-formed bit string up to a given width (leading
zeros included, since the contract holds for unnormalized operands
too) for:

1. Postcondition violations: operands where the result does not match
   the spec.
2. Error condition violations: operands that should raise but don't
   (or raise the wrong exception).
3. Property violations: algebraic relationships that fail for some
   operand combination.
"""
from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Iterator

from bitcalc.spec import CalculatorSpec

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass
class Counterexample:
    category: str
    operation: str
    inputs: tuple
    expected: str
    actual: str
    description: str


@dataclass
class SearchReport:
    width: int
    counterexamples: list[Counterexample] = field(default_factory=list)
    checks_run: int = 0

    @property
    def passed(self) -> bool:
        return len(self.counterexamples) == 0

    def summary(self) -> str:
        lines = [
            "Counterexample Search Report",
            "=" * 40,
            f"Operand width: 1..{self.width}",
            f"Total checks: {self.checks_run}",
            f"Counterexamples found: {len(self.counterexamples)}",
        ]
        if self.counterexamples:
            lines.append("")
            for i, cx in enumerate(self.counterexamples, 1):
                lines.append(f"  [{i}] {cx.category} / {cx.operation}")
                lines.append(f"      Inputs:   {cx.inputs}")
                lines.append(f"      Expected: {cx.expected}")
                lines.append(f"      Actual:   {cx.actual}")
                lines.append(f"      {cx.description}")
        else:
            lines.append("\nNo counterexamples found - all checks passed.")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Operand domain
# ---------------------------------------------------------------------------

def all_bit_strings(width: int) -> Iterator[str]:
    """Every well-formed bit string of length 1..width, shortest first."""
    for n in range(1, width + 1):
        for combo in itertools.product("01", repeat=n):
            yield "".join(combo)


# ---------------------------------------------------------------------------
# Search functions
# ---------------------------------------------------------------------------

def search_postcondition_violations(
    calc: Any,
    spec: CalculatorSpec,
    width: int,
) -> tuple[list[Counterexample], int]:
    """Verify postconditions for every operand pair that should not raise."""
    cxs: list[Counterexample] = []
    checks = 0
    domain = list(all_bit_strings(width))

    for op_name, op_spec in spec.operations.items():
        op = getattr(calc, op_name)
        for a, b in itertools.product(domain, repeat=2):
            checks += 1
            if op_spec.should_raise(a, b) is not None:
                continue

            try:
                result = op(a, b)
            except Exception as e:
                cxs.append(Counterexample(
                    category="unexpected_error",
                    operation=op_name,
                    inputs=(a, b),
                    expected="no error",
                    actual=f"{type(e).__name__}: {e}",
                    description="Operation raised an unexpected exception",
                ))
                continue

            for post in op_spec.postconditions:
                if not post.check(a, b, result):
                    cxs.append(Counterexample(
                        category="postcondition_violation",
                        operation=op_name,
                        inputs=(a, b),
                        expected=post.description,
                        actual=f"result={result!r}",
                        description=f"Postcondition '{post.name}' violated",
                    ))

    return cxs, checks


def search_error_violations(
    calc: Any,
    spec: CalculatorSpec,
    width: int,
) -> tuple[list[Counterexample], int]:
    """Verify that every triggered error condition raises the right exception."""
    cxs: list[Counterexample] = []
    checks = 0
    domain = list(all_bit_strings(width))

    for op_name, op_spec in spec.operations.items():
        if not op_spec.error_conditions:
            continue
        op = getattr(calc, op_name)
        for a, b in itertools.product(domain, repeat=2):
            expected = op_spec.should_raise(a, b)
            if expected is None:
                continue
            checks += 1
            try:
                result = op(a, b)
            except expected:
                continue
            except Exception as e:
                cxs.append(Counterexample(
                    category="wrong_exception",
                    operation=op_name,
                    inputs=(a, b),
                    expected=expected.__name__,
                    actual=f"{type(e).__name__}: {e}",
                    description="Operation raised the wrong exception type",
                ))
                continue
            cxs.append(Counterexample(
                category="missing_error",
                operation=op_name,
                inputs=(a, b),
                expected=expected.__name__,
                actual=f"result={result!r}",
                description="Operation returned instead of raising",
            ))

    return cxs, checks


def search_property_violations(
    calc: Any,
    spec: CalculatorSpec,
    width: int,
) -> tuple[list[Counterexample], int]:
    """Check every algebraic property over all operand combinations."""
    cxs: list[Counterexample] = []
    checks = 0
    domain = list(all_bit_strings(width))

    for op_name, prop in spec.all_properties:
        for combo in itertools.product(domain, repeat=prop.arity):
            checks += 1
            try:
                ok = prop.check(calc, *combo)
            except Exception as e:
                cxs.append(Counterexample(
                    category="property_error",
                    operation=op_name,
                    inputs=combo,
                    expected=prop.description,
                    actual=f"{type(e).__name__}: {e}",
                    description=f"Property '{prop.name}' raised",
                ))
                break
            if not ok:
                cxs.append(Counterexample(
                    category="property_violation",
                    operation=op_name,
                    inputs=combo,
                    expected=prop.description,
                    actual="predicate returned False",
                    description=f"Property '{prop.name}' violated",
                ))
                # one counterexample per property is enough
                break

    return cxs, checks


def run_search(calc: Any, spec: CalculatorSpec, width: int) -> SearchReport:
    """Run every search and collect the results into one report."""
    report = SearchReport(width=width)
    for search in (
        search_postcondition_violations,
        search_error_violations,
        search_property_violations,
    ):
        cxs, checks = search(calc, spec, width)
        report.counterexamples.extend(cxs)
        report.checks_run += checks

    for cx in report.counterexamples:
        logger.warning(
            "%s in %s for inputs %s: %s", cx.category, cx.operation,
            cx.inputs, cx.description,
        )
    return report
