"""Formal contract for the 32-bit calculator.

Each operation is described as a collection of:
- preconditions: what inputs must satisfy before the operation
- postconditions: what the output must satisfy given valid inputs
- error conditions: what inputs must make ``Calculator.evaluate`` raise
- algebraic properties: mathematical relationships that must hold

The contract is machine-readable.  The conformance tests and
``validation.counterexample_search`` iterate over it instead of
hard-coding expectations.  Expected values are computed from first
principles (bit strings, exact integer arithmetic), never by calling
the calculator.

Layers
------
OperationContract   per-operation contract (pre/post/error/properties)
BranchSpec          every decision point that white-box tests must cover
CalculatorContract  the full contract for one operand mode
build_contract()    constructs a CalculatorContract for a mode
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from bounds import WIDTH, Bounds, OperandMode, to_unsigned
from errors import (
    ArithmeticOverflowError,
    DivisionByZeroError,
    NegativeBitwiseOperandError,
)
from operators import Operator


# ---------------------------------------------------------------------------
# Contract building blocks
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
    arity: int          # how many free input values the check needs
    check: Callable[..., bool]


@dataclass(frozen=True)
class OperationContract:
    name: str
    operator: Operator
    preconditions: list[Precondition]
    postconditions: list[Postcondition]
    error_conditions: list[ErrorCondition]
    properties: list[AlgebraicProperty]


@dataclass(frozen=True)
class BranchSpec:
    """A decision point in the implementation that must be exercised."""

    id: str
    description: str
    condition: str      # human-readable boolean expression
    operation: str      # which operation / helper this belongs to


@dataclass(frozen=True)
class CalculatorContract:
    """Complete contract for one operand mode."""

    mode: OperandMode
    operations: dict[str, OperationContract]
    branches: list[BranchSpec]

    @property
    def bounds(self) -> Bounds:
        return self.mode.bounds

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
# Reference helpers used inside the contract predicates
# ---------------------------------------------------------------------------

def truncdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero (not floor division)."""
    q, r = divmod(a, b)
    # divmod rounds toward -inf; adjust when the result is negative
    # and there is a remainder.
    if r != 0 and (a < 0) != (b < 0):
        q += 1
    return q


def truncmod(a: int, b: int) -> int:
    """Remainder matching ``truncdiv``: ``a == b * truncdiv(a, b) + truncmod(a, b)``."""
    return a - b * truncdiv(a, b)


def bits(value: int) -> str:
    """The 32-bit pattern of ``value`` as a string of '0'/'1'."""
    return format(to_unsigned(value), f"0{WIDTH}b")


def reference_rotate_left(value: int, count: int) -> int:
    s = bits(value)
    k = count % WIDTH
    return int(s[k:] + s[:k], 2)


def reference_rotate_right(value: int, count: int) -> int:
    s = bits(value)
    k = count % WIDTH
    return int(s[WIDTH - k:] + s[:WIDTH - k], 2)


# ---------------------------------------------------------------------------
# Contract builder
# ---------------------------------------------------------------------------

def build_contract(mode: OperandMode = OperandMode.SIGNED) -> CalculatorContract:
    """Construct the full calculator contract for an operand mode."""
    bounds = mode.bounds
    signed = mode is OperandMode.SIGNED

    def _apply(raw: int) -> int:
        # Signed mode: value returned as-is; the error condition covers
        # out-of-bounds results.
        return raw if signed else bounds.wrap(raw)

    def _view(pattern: int) -> int:
        return mode.from_pattern(pattern)

    inputs_in_bounds = Precondition(
        "inputs_in_bounds",
        "Both inputs within bounds",
        lambda a, b: bounds.contains(a) and bounds.contains(b),
    )
    result_in_bounds = Postcondition(
        "result_in_bounds",
        "Integer result is within bounds",
        lambda a, b, result: bounds.contains(result),
    )

    def _overflow(name: str, raw: Callable[[int, int], int]) -> list[ErrorCondition]:
        if not signed:
            return []
        return [
            ErrorCondition(
                "overflow_error",
                f"ArithmeticOverflowError when the exact {name} is out of bounds",
                lambda a, b: not bounds.contains(raw(a, b)),
                ArithmeticOverflowError,
            ),
        ]

    def _negative_bitwise() -> list[ErrorCondition]:
        if not signed:
            return []
        return [
            ErrorCondition(
                "negative_operand",
                "NegativeBitwiseOperandError when either operand is negative",
                lambda a, b: a < 0 or b < 0,
                NegativeBitwiseOperandError,
            ),
        ]

    def _zero_divisor() -> ErrorCondition:
        return ErrorCondition(
            "div_by_zero_error",
            "DivisionByZeroError when the divisor is zero",
            lambda a, b: b == 0,
            DivisionByZeroError,
        )

    # ------------------------------------------------------------------ add
    add = OperationContract(
        name="add",
        operator=Operator.ADD,
        preconditions=[inputs_in_bounds],
        postconditions=[
            result_in_bounds,
            Postcondition(
                "result_correct",
                "Result equals the (wrapped, in unsigned mode) sum",
                lambda a, b, result: result == _apply(a + b),
            ),
        ],
        error_conditions=_overflow("sum", lambda a, b: a + b),
        properties=[
            AlgebraicProperty(
                "commutativity", "add(a, b) == add(b, a)", 2,
                lambda calc, a, b: calc.add(a, b) == calc.add(b, a),
            ),
            AlgebraicProperty(
                "identity", "add(a, 0) == a", 1,
                lambda calc, a: calc.add(a, 0) == a,
            ),
        ],
    )

    # ------------------------------------------------------------------ sub
    sub = OperationContract(
        name="sub",
        operator=Operator.SUB,
        preconditions=[inputs_in_bounds],
        postconditions=[
            result_in_bounds,
            Postcondition(
                "result_correct",
                "Result equals the (wrapped, in unsigned mode) difference",
                lambda a, b, result: result == _apply(a - b),
            ),
        ],
        error_conditions=_overflow("difference", lambda a, b: a - b),
        properties=[
            AlgebraicProperty(
                "identity", "sub(a, 0) == a", 1,
                lambda calc, a: calc.sub(a, 0) == a,
            ),
            AlgebraicProperty(
                "self_inverse", "sub(a, a) == 0", 1,
                lambda calc, a: calc.sub(a, a) == 0,
            ),
        ],
    )

    # ------------------------------------------------------------------ mul
    mul = OperationContract(
        name="mul",
        operator=Operator.MUL,
        preconditions=[inputs_in_bounds],
        postconditions=[
            result_in_bounds,
            Postcondition(
                "result_correct",
                "Result equals the (wrapped, in unsigned mode) product",
                lambda a, b, result: result == _apply(a * b),
            ),
        ],
        error_conditions=_overflow("product", lambda a, b: a * b),
        properties=[
            AlgebraicProperty(
                "commutativity", "mul(a, b) == mul(b, a)", 2,
                lambda calc, a, b: calc.mul(a, b) == calc.mul(b, a),
            ),
            AlgebraicProperty(
                "identity", "mul(a, 1) == a", 1,
                lambda calc, a: calc.mul(a, 1) == a,
            ),
            AlgebraicProperty(
                "zero", "mul(a, 0) == 0", 1,
                lambda calc, a: calc.mul(a, 0) == 0,
            ),
        ],
    )

    # ------------------------------------------------------------------ div
    div = OperationContract(
        name="div",
        operator=Operator.DIV,
        preconditions=[inputs_in_bounds],
        postconditions=[
            Postcondition(
                "result_is_float",
                "Division always yields a float",
                lambda a, b, result: isinstance(result, float),
            ),
            Postcondition(
                "result_correct",
                "Result is the true quotient to two decimal places",
                lambda a, b, result: round(result, 2) == round(a / b, 2),
            ),
        ],
        error_conditions=[_zero_divisor()],
        properties=[
            AlgebraicProperty(
                "identity", "div(a, 1) == a", 1,
                lambda calc, a: calc.div(a, 1) == a,
            ),
            AlgebraicProperty(
                "self", "div(a, a) == 1 for a != 0", 1,
                lambda calc, a: a == 0 or calc.div(a, a) == 1.0,
            ),
            AlgebraicProperty(
                "no_truncation", "div(a, b) * b recovers a", 2,
                lambda calc, a, b: b == 0 or abs(calc.div(a, b) * b - a) < 1e-6 * max(1, abs(a)),
            ),
        ],
    )

    # ------------------------------------------------------------------ mod
    mod = OperationContract(
        name="mod",
        operator=Operator.MOD,
        preconditions=[inputs_in_bounds],
        postconditions=[
            result_in_bounds,
            Postcondition(
                "result_correct",
                "Result equals the truncating remainder",
                lambda a, b, result: result == truncmod(a, b),
            ),
            Postcondition(
                "sign_follows_dividend",
                "Result is zero or has the dividend's sign",
                lambda a, b, result: result == 0 or (result < 0) == (a < 0),
            ),
        ],
        error_conditions=[_zero_divisor()],
        properties=[
            AlgebraicProperty(
                "magnitude", "|mod(a, b)| < |b| for b != 0", 2,
                lambda calc, a, b: b == 0 or abs(calc.mod(a, b)) < abs(b),
            ),
            AlgebraicProperty(
                "by_one", "mod(a, 1) == 0", 1,
                lambda calc, a: calc.mod(a, 1) == 0,
            ),
        ],
    )

    # ------------------------------------------------------------------ shl
    shl = OperationContract(
        name="shl",
        operator=Operator.SHL,
        preconditions=[inputs_in_bounds],
        postconditions=[
            result_in_bounds,
            Postcondition(
                "result_correct",
                "Result is a * 2**(b mod 32) truncated to 32 bits",
                lambda a, b, result: (
                    result == _view(to_unsigned(a) * 2 ** (b % WIDTH) % 2 ** WIDTH)
                ),
            ),
        ],
        error_conditions=_negative_bitwise(),
        properties=[
            AlgebraicProperty(
                "zero_count", "shl(a, 0) == a", 1,
                lambda calc, a: calc.shl(a, 0) == a,
            ),
            AlgebraicProperty(
                "count_masked", "shl(a, b) == shl(a, b + 32)", 2,
                lambda calc, a, b: (
                    not bounds.contains(b + WIDTH) or calc.shl(a, b) == calc.shl(a, b + WIDTH)
                ),
            ),
        ],
    )

    # ------------------------------------------------------------------ shr
    shr = OperationContract(
        name="shr",
        operator=Operator.SHR,
        preconditions=[inputs_in_bounds],
        postconditions=[
            result_in_bounds,
            Postcondition(
                "result_correct",
                "Result is the 32-bit pattern floor-divided by 2**(b mod 32)",
                lambda a, b, result: result == _view(to_unsigned(a) // 2 ** (b % WIDTH)),
            ),
        ],
        error_conditions=_negative_bitwise(),
        properties=[
            AlgebraicProperty(
                "zero_count", "shr(a, 0) == a", 1,
                lambda calc, a: calc.shr(a, 0) == a,
            ),
            AlgebraicProperty(
                "zero_fill", "shr(a, 31) is 0 or 1", 1,
                lambda calc, a: calc.shr(a, 31) in (0, 1),
            ),
        ],
    )

    # ---------------------------------------------------------- and / or / xor
    def _bitwise(name: str, operator: Operator, bit: Callable[[str, str], str]) -> OperationContract:
        def expected(a: int, b: int) -> int:
            return _view(int("".join(bit(x, y) for x, y in zip(bits(a), bits(b))), 2))

        return OperationContract(
            name=name,
            operator=operator,
            preconditions=[inputs_in_bounds],
            postconditions=[
                result_in_bounds,
                Postcondition(
                    "result_correct",
                    f"Result is the bit-by-bit {name} of the 32-bit patterns",
                    lambda a, b, result: result == expected(a, b),
                ),
            ],
            error_conditions=_negative_bitwise(),
            properties=[
                AlgebraicProperty(
                    "commutativity", f"{name}(a, b) == {name}(b, a)", 2,
                    lambda calc, a, b: (
                        calc.operation(operator)(a, b) == calc.operation(operator)(b, a)
                    ),
                ),
            ],
        )

    and_ = _bitwise("and", Operator.AND, lambda x, y: "1" if x == y == "1" else "0")
    or_ = _bitwise("or", Operator.OR, lambda x, y: "1" if "1" in (x, y) else "0")
    xor = _bitwise("xor", Operator.XOR, lambda x, y: "1" if x != y else "0")
    xor.properties.append(AlgebraicProperty(
        "self_cancel", "xor(a, a) == 0", 1,
        lambda calc, a: calc.xor(a, a) == 0,
    ))

    # ----------------------------------------------------------------- rotl
    rotl = OperationContract(
        name="rotl",
        operator=Operator.ROTL,
        preconditions=[inputs_in_bounds],
        postconditions=[
            result_in_bounds,
            Postcondition(
                "result_correct",
                "Result is the bit string rotated left by b mod 32",
                lambda a, b, result: result == _view(reference_rotate_left(a, b)),
            ),
        ],
        error_conditions=_negative_bitwise(),
        properties=[
            AlgebraicProperty(
                "inverse", "rotr(rotl(a, k), k) == a", 2,
                lambda calc, a, k: calc.rotr(calc.rotl(a, k), k) == a,
            ),
            AlgebraicProperty(
                "zero_count", "rotl(a, 0) == a", 1,
                lambda calc, a: calc.rotl(a, 0) == a,
            ),
            AlgebraicProperty(
                "full_width", "rotl(a, 32) == a", 1,
                lambda calc, a: calc.rotl(a, WIDTH) == a,
            ),
        ],
    )

    # ----------------------------------------------------------------- rotr
    rotr = OperationContract(
        name="rotr",
        operator=Operator.ROTR,
        preconditions=[inputs_in_bounds],
        postconditions=[
            result_in_bounds,
            Postcondition(
                "result_correct",
                "Result is the bit string rotated right by b mod 32",
                lambda a, b, result: result == _view(reference_rotate_right(a, b)),
            ),
        ],
        error_conditions=_negative_bitwise(),
        properties=[
            AlgebraicProperty(
                "inverse", "rotl(rotr(a, k), k) == a", 2,
                lambda calc, a, k: calc.rotl(calc.rotr(a, k), k) == a,
            ),
            AlgebraicProperty(
                "full_width", "rotr(a, 32) == a", 1,
                lambda calc, a: calc.rotr(a, WIDTH) == a,
            ),
        ],
    )

    # -------------------------------------------------------------- branches
    branches = [
        # Input validation (Calculator._validate)
        BranchSpec("INPUT-VALID", "Both inputs within bounds",
                   "bounds.contains(a) and bounds.contains(b)", "validation"),
        BranchSpec("INPUT-INVALID", "An input is out of bounds",
                   "not bounds.contains(v)", "validation"),
        # Operand validation (validator.validate_operands)
        BranchSpec("VAL-PASS", "Operand pair accepted",
                   "no rejection rule applies", "validator"),
        BranchSpec("VAL-NEG-BITWISE", "Negative operand on a bitwise operator",
                   "mode == SIGNED and op is bitwise and (a < 0 or b < 0)", "validator"),
        BranchSpec("VAL-DIV-ZERO", "Zero divisor on / or %",
                   "op in (/, %) and b == 0", "validator"),
        # Overflow handling (Bounds.apply)
        BranchSpec("OVF-IN-BOUNDS", "Result within bounds, no adjustment",
                   "bounds.lo <= raw <= bounds.hi", "overflow"),
        BranchSpec("OVF-WRAP", "Result wrapped modulo 2**32",
                   "raw out of bounds and strategy == WRAP", "overflow"),
        BranchSpec("OVF-ERROR", "ArithmeticOverflowError raised",
                   "raw out of bounds and strategy == ERROR", "overflow"),
        # Division / modulo
        BranchSpec("DIV-NORMAL", "True quotient (b != 0)", "b != 0", "div"),
        BranchSpec("DIV-ZERO", "DivisionByZeroError on b == 0", "b == 0", "div"),
        BranchSpec("MOD-ZERO", "DivisionByZeroError on b == 0", "b == 0", "mod"),
        BranchSpec("MOD-NEGATIVE-DIVIDEND", "Remainder takes the dividend's sign",
                   "a < 0", "mod"),
        # Shifts and rotations
        BranchSpec("SHIFT-MASK", "Shift count masked to 0..31",
                   "b & 31", "shift"),
        BranchSpec("ROT-ZERO", "Rotation by a multiple of 32 is a no-op",
                   "b % 32 == 0", "rotate"),
        BranchSpec("ROT-NORMAL", "Rotation by 1..31",
                   "b % 32 != 0", "rotate"),
        # Dispatch
        BranchSpec("DISPATCH-UNSUPPORTED", "Token outside the operator table",
                   "token not in OPERATORS", "dispatch"),
    ]

    return CalculatorContract(
        mode=mode,
        operations={
            op.name: op
            for op in (add, sub, mul, div, mod, shl, shr, and_, or_, xor, rotl, rotr)
        },
        branches=branches,
    )
