"""Machine-readable contract for the bit-string calculator.

Each operation is specified as a collection of:
- preconditions: what operands must satisfy before the operation
- postconditions: what the output must satisfy given valid operands
- error conditions: which operands must raise, and what
- algebraic properties: relationships between calls that must hold

Postconditions are stated against native ``int`` arithmetic through
``to_value``, so the contract never trusts the implementation it checks.
``search`` iterates over it to hunt for counterexamples and the tests
iterate over it to generate conformance checks.

Layers
------
OperationSpec   per-operation contract (pre/post/error/properties)
BranchSpec      every decision point that white-box tests must cover
CalculatorSpec  the full contract for a configured calculator
build_spec()    constructs a CalculatorSpec for a given div-by-zero mode
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from bitcalc.arith import DivZeroMode, Ordering
from bitcalc.bits import is_normalized, is_well_formed, to_value


# ---------------------------------------------------------------------------
# Spec building blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Precondition:
    name: str
    description: str
    check: Callable[..., bool]


@dataclass(frozen=True)
class Postcondition:
    name: str
    description: str
    check: Callable[..., bool]


@dataclass(frozen=True)
class ErrorCondition:
    name: str
    description: str
    trigger: Callable[..., bool]
    exception: type


@dataclass(frozen=True)
class AlgebraicProperty:
    name: str
    description: str
    arity: int          # how many free bit strings the check needs
    check: Callable[..., bool]


@dataclass(frozen=True)
class OperationSpec:
    name: str
    preconditions: list[Precondition]
    postconditions: list[Postcondition]
    error_conditions: list[ErrorCondition]
    properties: list[AlgebraicProperty]

    def should_raise(self, a: str, b: str) -> type | None:
        """The exception the operands must trigger, if any."""
        for ec in self.error_conditions:
            if ec.trigger(a, b):
                return ec.exception
        return None


@dataclass(frozen=True)
class BranchSpec:
    """A decision point in the implementation that must be exercised."""

    id: str
    description: str
    condition: str      # human-readable boolean expression
    operation: str      # which operation / helper this belongs to


@dataclass(frozen=True)
class CalculatorSpec:
    """Complete contract for a configured calculator."""

    div_zero_mode: DivZeroMode
    operations: dict[str, OperationSpec]
    branches: list[BranchSpec]

    @property
    def all_properties(self) -> list[tuple[str, AlgebraicProperty]]:
        out: list[tuple[str, AlgebraicProperty]] = []
        for name, op in self.operations.items():
            for prop in op.properties:
                out.append((name, prop))
        return out

    @property
    def all_postconditions(self) -> list[tuple[str, Postcondition]]:
        out: list[tuple[str, Postcondition]] = []
        for name, op in self.operations.items():
            for post in op.postconditions:
                out.append((name, post))
        return out

    @property
    def branch_ids(self) -> set[str]:
        return {b.id for b in self.branches}


# ---------------------------------------------------------------------------
# Helpers used inside the spec predicates
# ---------------------------------------------------------------------------

def sign(n: int) -> int:
    return (n > 0) - (n < 0)


def _both_well_formed(a: str, b: str) -> bool:
    return is_well_formed(a) and is_well_formed(b)


_WELL_FORMED = Precondition(
    "operands_well_formed",
    "Both operands are non-empty strings of 0/1",
    _both_well_formed,
)


# ---------------------------------------------------------------------------
# Spec builder
# ---------------------------------------------------------------------------

def build_spec(div_zero_mode: DivZeroMode = DivZeroMode.SENTINEL) -> CalculatorSpec:
    """Construct the full calculator specification for a div-by-zero mode."""

    # -------------------------------------------------------------- compare
    compare_spec = OperationSpec(
        name="compare",
        preconditions=[_WELL_FORMED],
        postconditions=[
            Postcondition(
                "result_correct",
                "Ordering matches the sign of value(a) - value(b)",
                lambda a, b, result: (
                    int(result) == sign(to_value(a) - to_value(b))
                ),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "antisymmetry", "compare(a, b) == -compare(b, a)", 2,
                lambda calc, a, b: calc.compare(a, b) == -calc.compare(b, a),
            ),
            AlgebraicProperty(
                "reflexivity", "compare(a, a) == EQUAL", 1,
                lambda calc, a: calc.compare(a, a) == Ordering.EQUAL,
            ),
        ],
    )

    # ------------------------------------------------------------------ add
    add_spec = OperationSpec(
        name="add",
        preconditions=[_WELL_FORMED],
        postconditions=[
            Postcondition(
                "result_well_formed",
                "Result is a well-formed bit string",
                lambda a, b, result: is_well_formed(result),
            ),
            Postcondition(
                "result_correct",
                "value(result) == value(a) + value(b)",
                lambda a, b, result: to_value(result) == to_value(a) + to_value(b),
            ),
            Postcondition(
                "length_bound",
                "len(result) <= max(len(a), len(b)) + 1",
                lambda a, b, result: len(result) <= max(len(a), len(b)) + 1,
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "commutativity", "add(a, b) == add(b, a) by value", 2,
                lambda calc, a, b: (
                    to_value(calc.add(a, b)) == to_value(calc.add(b, a))
                ),
            ),
            AlgebraicProperty(
                "identity", "add(a, '0') == a by value", 1,
                lambda calc, a: to_value(calc.add(a, "0")) == to_value(a),
            ),
        ],
    )

    # ------------------------------------------------------------------ sub
    sub_spec = OperationSpec(
        name="sub",
        preconditions=[
            _WELL_FORMED,
            Precondition(
                "minuend_not_smaller",
                "value(a) >= value(b)",
                lambda a, b: to_value(a) >= to_value(b),
            ),
        ],
        postconditions=[
            Postcondition(
                "result_normalized",
                "Result is a normalized bit string",
                lambda a, b, result: is_normalized(result),
            ),
            Postcondition(
                "result_correct",
                "value(result) == value(a) - value(b)",
                lambda a, b, result: to_value(result) == to_value(a) - to_value(b),
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "underflow_error",
                "ValueError when value(a) < value(b)",
                lambda a, b: to_value(a) < to_value(b),
                ValueError,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "identity", "sub(a, '0') == normalize(a)", 1,
                lambda calc, a: to_value(calc.sub(a, "0")) == to_value(a),
            ),
            AlgebraicProperty(
                "self_inverse", "sub(a, a) == '0'", 1,
                lambda calc, a: calc.sub(a, a) == "0",
            ),
            AlgebraicProperty(
                "add_inverse", "sub(add(a, b), b) == a by value", 2,
                lambda calc, a, b: (
                    to_value(calc.sub(calc.add(a, b), b)) == to_value(a)
                ),
            ),
        ],
    )

    # ------------------------------------------------------------------ mul
    mul_spec = OperationSpec(
        name="mul",
        preconditions=[_WELL_FORMED],
        postconditions=[
            Postcondition(
                "result_normalized",
                "Result is a normalized bit string",
                lambda a, b, result: is_normalized(result),
            ),
            Postcondition(
                "result_correct",
                "value(result) == value(a) * value(b)",
                lambda a, b, result: to_value(result) == to_value(a) * to_value(b),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "commutativity", "mul(a, b) == mul(b, a)", 2,
                lambda calc, a, b: calc.mul(a, b) == calc.mul(b, a),
            ),
            AlgebraicProperty(
                "identity", "mul(a, '1') == normalize(a)", 1,
                lambda calc, a: to_value(calc.mul(a, "1")) == to_value(a),
            ),
            AlgebraicProperty(
                "zero", "mul(a, '0') == '0'", 1,
                lambda calc, a: calc.mul(a, "0") == "0",
            ),
        ],
    )

    # -------------------------------------------------------------- div_mod
    def _div_mod_correct(a: str, b: str, result: tuple[str, str]) -> bool:
        q, r = (to_value(x) for x in result)
        n, d = to_value(a), to_value(b)
        if d == 0:
            return (q, r) == (0, 0)
        return q * d + r == n and 0 <= r < d

    div_mod_spec = OperationSpec(
        name="div_mod",
        preconditions=[_WELL_FORMED],
        postconditions=[
            Postcondition(
                "result_normalized",
                "Quotient and remainder are normalized bit strings",
                lambda a, b, result: all(is_normalized(x) for x in result),
            ),
            Postcondition(
                "result_correct",
                "q * d + r == n and r < d (or ('0', '0') when d == 0)",
                _div_mod_correct,
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "div_by_zero_error",
                "ZeroDivisionError when divisor is zero in ERROR mode",
                lambda a, b: (
                    div_zero_mode == DivZeroMode.ERROR and to_value(b) == 0
                ),
                ZeroDivisionError,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "identity", "div_mod(a, '1') == (normalize(a), '0')", 1,
                lambda calc, a: (
                    tuple(to_value(x) for x in calc.div_mod(a, "1"))
                    == (to_value(a), 0)
                ),
            ),
            AlgebraicProperty(
                "self", "div_mod(a, a) == ('1', '0') for a != 0", 1,
                lambda calc, a: (
                    to_value(a) == 0 or calc.div_mod(a, a) == ("1", "0")
                ),
            ),
            AlgebraicProperty(
                "remainder_bound", "remainder < divisor for divisor != 0", 2,
                lambda calc, a, b: (
                    to_value(b) == 0
                    or calc.compare(calc.div_mod(a, b)[1], b) == Ordering.LESS
                ),
            ),
            AlgebraicProperty(
                "mul_inverse", "div_mod(mul(a, b), b) == (a, '0') for b != 0", 2,
                lambda calc, a, b: (
                    to_value(b) == 0
                    or tuple(to_value(x) for x in calc.div_mod(calc.mul(a, b), b))
                    == (to_value(a), 0)
                ),
            ),
        ],
    )

    # -------------------------------------------------------------- branches
    branches = [
        # Comparison
        BranchSpec("CMP-LEN-LESS", "Normalized a is shorter", "len(a) < len(b)", "compare"),
        BranchSpec("CMP-LEN-GREATER", "Normalized a is longer", "len(a) > len(b)", "compare"),
        BranchSpec("CMP-DIGIT-LESS", "First differing digit of a is 0", "a[i] < b[i]", "compare"),
        BranchSpec("CMP-DIGIT-GREATER", "First differing digit of a is 1", "a[i] > b[i]", "compare"),
        BranchSpec("CMP-EQUAL", "All digits equal", "normalize(a) == normalize(b)", "compare"),
        # Addition
        BranchSpec("ADD-CARRY-OUT", "Final carry grows the result", "carry after MSB", "add"),
        BranchSpec("ADD-NO-CARRY-OUT", "No final carry", "not carry after MSB", "add"),
        # Subtraction
        BranchSpec("SUB-ZERO-SUBTRAHEND", "b represents 0", "value(b) == 0", "sub"),
        BranchSpec("SUB-EQUAL", "Textually equal operands", "a == b", "sub"),
        BranchSpec("SUB-BORROW", "General borrow-propagating path", "otherwise", "sub"),
        BranchSpec("SUB-UNDERFLOW", "Borrow left after MSB", "value(a) < value(b)", "sub"),
        # Multiplication
        BranchSpec("MUL-ZERO", "Either operand represents 0", "value(a) == 0 or value(b) == 0", "mul"),
        BranchSpec("MUL-SHIFT-ADD", "Shift-and-add accumulation", "otherwise", "mul"),
        # Division
        BranchSpec("DIV-ZERO-SENTINEL", "Return ('0', '0') on zero divisor", "value(b) == 0 and mode == SENTINEL", "div_mod"),
        BranchSpec("DIV-ZERO-ERROR", "ZeroDivisionError on zero divisor", "value(b) == 0 and mode == ERROR", "div_mod"),
        BranchSpec("DIV-ZERO-DIVIDEND", "Dividend represents 0", "value(a) == 0", "div_mod"),
        BranchSpec("DIV-EQUAL", "Dividend equals divisor", "value(a) == value(b)", "div_mod"),
        BranchSpec("DIV-SMALLER", "Dividend below divisor", "value(a) < value(b)", "div_mod"),
        BranchSpec("DIV-LONG", "Restoring long division", "value(a) > value(b)", "div_mod"),
        # Input validation
        BranchSpec("INPUT-VALID", "Both operands well-formed", "is_well_formed(a) and is_well_formed(b)", "validation"),
        BranchSpec("INPUT-INVALID-A", "First operand malformed", "not is_well_formed(a)", "validation"),
        BranchSpec("INPUT-INVALID-B", "Second operand malformed", "not is_well_formed(b)", "validation"),
    ]

    return CalculatorSpec(
        div_zero_mode=div_zero_mode,
        operations={
            "compare": compare_spec,
            "add": add_spec,
            "sub": sub_spec,
            "mul": mul_spec,
            "div_mod": div_mod_spec,
        },
        branches=branches,
    )
