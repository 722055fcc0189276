"""Counterexample search: discovers gaps in implementation or tests.

This module runs independently of the test suite.  The operand domain
is 32 bits wide, so instead of exhaustive enumeration it checks every
pair of edge values (bounds, zero, ones, shift-width neighbours) plus a
seeded random sample, looking for:

1. Postcondition violations: inputs where ``Calculator.evaluate``
   doesn't match the contract's expected output (or raises when no
   error condition applies).
2. Error condition violations: inputs that should raise but don't (or
   raise the wrong exception).
3. Property violations: algebraic relationships that fail for some
   input combination.

Run directly::

    python -m validation.counterexample_search [--samples N] [--seed S]
"""
from __future__ import annotations

import argparse
import itertools
import random
import sys
from dataclasses import dataclass, field
from typing import Sequence

from bounds import WIDTH, OperandMode
from calculator import Calculator
from contract import CalculatorContract, build_contract
from errors import CalculatorError


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
    counterexamples: list[Counterexample] = field(default_factory=list)
    checks_run: int = 0

    @property
    def passed(self) -> bool:
        return len(self.counterexamples) == 0

    def summary(self) -> str:
        lines = [
            "Counterexample Search Report",
            "=" * 40,
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
            lines.append("\nNo counterexamples found; all checks passed.")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Input generation
# ---------------------------------------------------------------------------

def edge_values(mode: OperandMode) -> list[int]:
    """Values most likely to expose overflow, sign and shift-width bugs."""
    b = mode.bounds
    candidates = [
        b.lo, b.lo + 1, -2, -1, 0, 1, 2, 3, 7,
        WIDTH - 1, WIDTH, WIDTH + 1, 2 * WIDTH,
        2**16, 2**31 - 1, 2**31, b.hi - 1, b.hi,
    ]
    return sorted({v for v in candidates if b.contains(v)})


def sample_pairs(mode: OperandMode, count: int, seed: int) -> list[tuple[int, int]]:
    """All edge-value pairs followed by ``count`` seeded random pairs."""
    edges = edge_values(mode)
    pairs = list(itertools.product(edges, repeat=2))
    rng = random.Random(seed)
    b = mode.bounds
    for _ in range(count):
        pairs.append((rng.randint(b.lo, b.hi), rng.randint(b.lo, b.hi)))
    return pairs


# ---------------------------------------------------------------------------
# Search functions
# ---------------------------------------------------------------------------

def search_postcondition_violations(
    calc: Calculator,
    contract: CalculatorContract,
    pairs: Sequence[tuple[int, int]],
) -> tuple[list[Counterexample], int]:
    """Verify postconditions wherever no error condition applies."""
    found: list[Counterexample] = []
    checks = 0
    for name, op in contract.operations.items():
        for a, b in pairs:
            if any(ec.trigger(a, b) for ec in op.error_conditions):
                continue
            checks += 1
            try:
                result = calc.evaluate(a, op.operator, b).value
            except CalculatorError as e:
                found.append(Counterexample(
                    "postcondition", name, (a, b),
                    "a result", f"{type(e).__name__}: {e}",
                    "Raised although no error condition applies",
                ))
                continue
            for post in op.postconditions:
                if not post.check(a, b, result):
                    found.append(Counterexample(
                        "postcondition", name, (a, b),
                        post.description, repr(result),
                        f"Postcondition '{post.name}' violated",
                    ))
    return found, checks


def search_error_condition_violations(
    calc: Calculator,
    contract: CalculatorContract,
    pairs: Sequence[tuple[int, int]],
) -> tuple[list[Counterexample], int]:
    """Every triggered error condition must raise its exception."""
    found: list[Counterexample] = []
    checks = 0
    for name, op in contract.operations.items():
        for ec in op.error_conditions:
            for a, b in pairs:
                if not ec.trigger(a, b):
                    continue
                checks += 1
                try:
                    result = calc.evaluate(a, op.operator, b)
                except ec.exception:
                    continue
                except CalculatorError as e:
                    found.append(Counterexample(
                        "error_condition", name, (a, b),
                        ec.exception.__name__, type(e).__name__,
                        f"Error condition '{ec.name}' raised the wrong exception",
                    ))
                    continue
                found.append(Counterexample(
                    "error_condition", name, (a, b),
                    ec.exception.__name__, repr(result.value),
                    f"Error condition '{ec.name}' did not raise",
                ))
    return found, checks


def search_property_violations(
    calc: Calculator,
    contract: CalculatorContract,
    pairs: Sequence[tuple[int, int]],
) -> tuple[list[Counterexample], int]:
    """Check every algebraic property; unary ones use the first operand."""
    found: list[Counterexample] = []
    checks = 0
    unary_inputs = sorted({a for a, _ in pairs})
    for name, prop in contract.all_properties:
        inputs = pairs if prop.arity == 2 else [(a,) for a in unary_inputs]
        for args in inputs:
            checks += 1
            try:
                ok = prop.check(calc, *args)
            except CalculatorError:
                continue
            if not ok:
                found.append(Counterexample(
                    "property", name, tuple(args),
                    prop.description, "False",
                    f"Property '{prop.name}' violated",
                ))
    return found, checks


# ---------------------------------------------------------------------------
# Top-level runner
# ---------------------------------------------------------------------------

def run_search(mode: OperandMode, samples: int = 500, seed: int = 0) -> SearchReport:
    """Run complete counterexample search for one operand mode."""
    calc = Calculator(mode)
    contract = build_contract(mode)
    pairs = sample_pairs(mode, samples, seed)
    report = SearchReport()

    for search_fn in (
        search_postcondition_violations,
        search_error_condition_violations,
        search_property_violations,
    ):
        cxs, checks = search_fn(calc, contract, pairs)
        report.counterexamples.extend(cxs)
        report.checks_run += checks

    return report


def main(argv: Sequence[str] | None = None) -> int:
    """Run counterexample search for both operand modes."""
    parser = argparse.ArgumentParser(prog="counterexample_search")
    parser.add_argument("--samples", type=int, default=500, help="random pairs per mode")
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args(argv)

    all_passed = True
    for mode in OperandMode:
        print(f"\n--- Mode: {mode.value} ---")
        report = run_search(mode, args.samples, args.seed)
        print(report.summary())
        if not report.passed:
            all_passed = False

    print("\n" + "=" * 40)
    if all_passed:
        print("ALL MODES PASSED")
        return 0
    print("SOME MODES HAD COUNTEREXAMPLES")
    return 1


if __name__ == "__main__":
    sys.exit(main())
