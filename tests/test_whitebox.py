"""White-box tests for the 32-bit calculator.

Each test class targets specific decision branches documented in the
contract (see ``BranchSpec`` ids).  A coverage matrix at the bottom of
this file records which test covers which branch, and a final test
checks the matrix against ``build_contract``.

Naming convention
-----------------
test_<branch_id_lowercase>_<scenario>
"""
from __future__ import annotations

import pytest

from bounds import INT32, UINT32, OperandMode
from calculator import Calculator, Result, ResultKind, calculate, evaluate, rotate_left, rotate_right
from contract import build_contract
from errors import (
    ArithmeticOverflowError,
    DivisionByZeroError,
    InvalidOperandError,
    NegativeBitwiseOperandError,
    UnsupportedOperatorError,
    ValidationFailedError,
)

MAX = INT32.hi
MIN = INT32.lo
UMAX = UINT32.hi


# ===================================================================
# INPUT VALIDATION  (INPUT-VALID, INPUT-INVALID)
# ===================================================================

class TestInputValidation:

    def test_input_valid(self, calc_signed):
        """Branch INPUT-VALID: both inputs in bounds accepted."""
        assert calc_signed.add(3, 4) == 7

    def test_input_invalid_signed_above(self, calc_signed):
        """Branch INPUT-INVALID: operand above INT32 max."""
        with pytest.raises(InvalidOperandError):
            calc_signed.add(MAX + 1, 0)

    def test_input_invalid_unsigned_negative(self, calc_unsigned):
        """Branch INPUT-INVALID: negative operand in unsigned mode."""
        with pytest.raises(ValueError):
            calc_unsigned.add(0, -1)

    @pytest.mark.parametrize("op", [
        "add", "sub", "mul", "div", "mod", "shl", "shr", "and_", "or_", "xor", "rotl", "rotr",
    ])
    def test_validation_on_all_ops(self, calc_signed, op):
        with pytest.raises(InvalidOperandError):
            getattr(calc_signed, op)(2**40, 1)


# ===================================================================
# OVERFLOW  (OVF-IN-BOUNDS, OVF-ERROR, OVF-WRAP)
# ===================================================================

class TestOverflowSigned:

    def test_ovf_in_bounds(self, calc_signed):
        """Branch OVF-IN-BOUNDS: result within bounds, no adjustment."""
        assert calc_signed.add(5, 3) == 8

    def test_ovf_error_add(self, calc_signed):
        """Branch OVF-ERROR: MAX + 1 raises instead of wrapping."""
        with pytest.raises(ArithmeticOverflowError):
            calc_signed.add(MAX, 1)

    def test_ovf_error_sub(self, calc_signed):
        with pytest.raises(ArithmeticOverflowError):
            calc_signed.sub(MIN, 1)

    def test_ovf_error_mul(self, calc_signed):
        with pytest.raises(OverflowError):
            calc_signed.mul(65536, 65536)

    def test_ovf_error_min_times_minus_one(self, calc_signed):
        with pytest.raises(ArithmeticOverflowError):
            calc_signed.mul(MIN, -1)

    def test_boundary_exact_max(self, calc_signed):
        assert calc_signed.add(MAX - 1, 1) == MAX

    def test_boundary_exact_min(self, calc_signed):
        assert calc_signed.sub(MIN + 1, 1) == MIN

    def test_widened_product_fits(self, calc_signed):
        assert calc_signed.mul(46340, 46340) == 2147395600


class TestOverflowUnsigned:

    def test_ovf_wrap_add(self, calc_unsigned):
        """Branch OVF-WRAP: UMAX + 1 wraps to 0."""
        assert calc_unsigned.add(UMAX, 1) == 0

    def test_ovf_wrap_sub(self, calc_unsigned):
        """Branch OVF-WRAP: 0 - 1 wraps to UMAX."""
        assert calc_unsigned.sub(0, 1) == UMAX

    def test_ovf_wrap_mul(self, calc_unsigned):
        assert calc_unsigned.mul(65536, 65536) == 0
        assert calc_unsigned.mul(UMAX, UMAX) == 1

    def test_no_wrap_needed(self, calc_unsigned):
        assert calc_unsigned.add(2**31, 2**31 - 1) == UMAX


# ===================================================================
# DIVISION / MODULO  (DIV-NORMAL, DIV-ZERO, MOD-ZERO, MOD-NEGATIVE-DIVIDEND)
# ===================================================================

class TestDivision:

    def test_div_normal(self, calc_signed):
        """Branch DIV-NORMAL: true quotient, not truncated."""
        assert calc_signed.div(7, 2) == 3.5

    def test_div_normal_negative(self, calc_signed):
        assert calc_signed.div(-7, 2) == -3.5

    def test_div_returns_float(self, calc_signed):
        assert isinstance(calc_signed.div(6, 3), float)

    def test_div_min_by_minus_one(self, calc_signed):
        """No overflow for the float quotient of MIN / -1."""
        assert calc_signed.div(MIN, -1) == 2147483648.0

    def test_div_zero(self, calc_signed):
        """Branch DIV-ZERO: the evaluator re-checks the divisor."""
        with pytest.raises(DivisionByZeroError):
            calc_signed.div(7, 0)

    def test_mod_zero(self, calc_signed):
        """Branch: MOD-ZERO."""
        with pytest.raises(ZeroDivisionError):
            calc_signed.mod(7, 0)

    def test_mod_positive(self, calc_signed):
        assert calc_signed.mod(7, 3) == 1

    def test_mod_negative_dividend(self, calc_signed):
        """Branch MOD-NEGATIVE-DIVIDEND: -7 % 3 == -1 (Python's % gives 2)."""
        assert calc_signed.mod(-7, 3) == -1

    def test_mod_negative_divisor(self, calc_signed):
        """Sign follows the dividend, not the divisor."""
        assert calc_signed.mod(7, -3) == 1

    def test_mod_min_by_minus_one(self, calc_signed):
        assert calc_signed.mod(MIN, -1) == 0

    def test_mod_unsigned(self, calc_unsigned):
        assert calc_unsigned.mod(UMAX, 10) == 5


# ===================================================================
# SHIFTS  (SHIFT-MASK)
# ===================================================================

class TestShifts:

    def test_shl_basic(self, calc_signed):
        assert calc_signed.shl(1, 4) == 16

    def test_shl_into_sign_bit(self, calc_signed):
        """The 32-bit pattern 0x80000000 reads back as INT32 min."""
        assert calc_signed.shl(1, 31) == MIN

    def test_shl_truncates(self, calc_unsigned):
        assert calc_unsigned.shl(0xFFFFFFFF, 4) == 0xFFFFFFF0

    def test_shift_mask_32(self, calc_signed):
        """Branch SHIFT-MASK: a count of 32 is masked to 0."""
        assert calc_signed.shl(5, 32) == 5
        assert calc_signed.shr(5, 32) == 5

    def test_shift_mask_33(self, calc_signed):
        assert calc_signed.shl(1, 33) == 2

    def test_shr_basic(self, calc_signed):
        assert calc_signed.shr(256, 4) == 16

    def test_shr_is_logical(self, calc_unsigned):
        assert calc_unsigned.shr(0x80000000, 31) == 1

    def test_shr_logical_on_signed_pattern(self, calc_signed):
        """Called directly, a negative value shifts in zeros."""
        assert calc_signed.shr(-1, 28) == 0xF


# ===================================================================
# BITWISE
# ===================================================================

class TestBitwise:

    def test_and(self, calc_signed):
        assert calc_signed.and_(12, 10) == 8

    def test_or(self, calc_signed):
        assert calc_signed.or_(12, 10) == 14

    def test_xor(self, calc_signed):
        assert calc_signed.xor(12, 10) == 6

    def test_full_width_unsigned(self, calc_unsigned):
        assert calc_unsigned.xor(UMAX, 0x0F0F0F0F) == 0xF0F0F0F0
        assert calc_unsigned.and_(UMAX, 0x12345678) == 0x12345678


# ===================================================================
# ROTATION  (ROT-ZERO, ROT-NORMAL)
# ===================================================================

class TestRotation:

    def test_rot_zero(self):
        """Branch ROT-ZERO: a zero count never shifts by 32."""
        assert rotate_left(0x12345678, 0) == 0x12345678
        assert rotate_right(0x12345678, 0) == 0x12345678

    def test_rot_zero_full_width(self):
        assert rotate_left(0x12345678, 32) == 0x12345678
        assert rotate_right(0x12345678, 64) == 0x12345678

    def test_rot_normal(self):
        """Branch: ROT-NORMAL."""
        assert rotate_left(1, 1) == 2
        assert rotate_left(0x80000000, 1) == 1
        assert rotate_right(1, 1) == 0x80000000

    def test_rotate_count_mod_32(self):
        assert rotate_left(1, 33) == 2
        assert rotate_right(2, 33) == 1

    def test_rotate_nibbles(self):
        assert rotate_left(0x12345678, 8) == 0x34567812
        assert rotate_right(0x12345678, 8) == 0x78123456

    def test_rotl_signed_view(self, calc_signed):
        assert calc_signed.rotl(0x40000000, 1) == MIN

    def test_rotr_unsigned_view(self, calc_unsigned):
        assert calc_unsigned.rotr(1, 1) == 0x80000000


# ===================================================================
# DISPATCH / EVALUATE  (VAL-*, DISPATCH-UNSUPPORTED)
# ===================================================================

class TestEvaluate:

    def test_scenario_add(self):
        assert evaluate(5, "+", 3) == Result(8, ResultKind.INTEGER)

    def test_scenario_overflow(self):
        with pytest.raises(ArithmeticOverflowError):
            evaluate(2147483647, "+", 1)

    def test_scenario_divide(self):
        result = evaluate(7, "/", 2)
        assert result.kind is ResultKind.FLOAT
        assert result.display == "3.50"

    def test_scenario_modulo_by_zero(self):
        with pytest.raises(DivisionByZeroError):
            evaluate(7, "%", 0)

    def test_scenario_rotate(self):
        assert evaluate(1, "<<<", 1).value == 0x00000002

    def test_scenario_negative_shift(self):
        with pytest.raises(ValidationFailedError):
            evaluate(-1, "<<", 2)

    def test_val_pass(self, calc_signed):
        """Branch: VAL-PASS."""
        assert calc_signed.evaluate(6, "*", 7).value == 42

    def test_val_neg_bitwise(self, calc_signed):
        """Branch VAL-NEG-BITWISE: rejected before evaluation."""
        with pytest.raises(NegativeBitwiseOperandError):
            calc_signed.evaluate(-1, "&", 5)

    def test_val_neg_bitwise_not_in_unsigned(self, calc_unsigned):
        assert calc_unsigned.evaluate(UMAX, "&", 5).value == 5

    def test_val_div_zero(self, calc_unsigned):
        """Branch VAL-DIV-ZERO: applies in both modes."""
        with pytest.raises(DivisionByZeroError):
            calc_unsigned.evaluate(7, "/", 0)

    def test_dispatch_unsupported(self, calc_signed):
        """Branch: DISPATCH-UNSUPPORTED."""
        with pytest.raises(UnsupportedOperatorError):
            calc_signed.evaluate(1, "**", 2)

    def test_dispatch_case_sensitive_exact(self, calc_signed):
        with pytest.raises(UnsupportedOperatorError):
            calc_signed.evaluate(1, "+ ", 2)

    def test_integer_display(self):
        assert evaluate(-7, "%", 3).display == "-1"

    def test_float_display_rounds(self):
        assert evaluate(2, "/", 3).display == "0.67"
        assert evaluate(-1, "/", 8).display == "-0.12"

    def test_calculate_parses_tokens(self):
        assert calculate("-5", "*", "+4").value == -20

    def test_calculate_unsigned(self):
        assert calculate("4294967295", "+", "1", OperandMode.UNSIGNED).value == 0

    def test_calculate_invalid_operand(self):
        with pytest.raises(InvalidOperandError):
            calculate("5x", "+", "1")

    def test_operand_error_before_operator_error(self):
        with pytest.raises(InvalidOperandError):
            calculate("x", "?", "1")


# ===================================================================
# BRANCH COVERAGE MATRIX
# ===================================================================
# Maps each contract branch-ID to the test(s) that exercise it.

BRANCH_COVERAGE = {
    "INPUT-VALID": [
        "TestInputValidation::test_input_valid",
    ],
    "INPUT-INVALID": [
        "TestInputValidation::test_input_invalid_signed_above",
        "TestInputValidation::test_input_invalid_unsigned_negative",
    ],
    "VAL-PASS": [
        "TestEvaluate::test_val_pass",
    ],
    "VAL-NEG-BITWISE": [
        "TestEvaluate::test_val_neg_bitwise",
    ],
    "VAL-DIV-ZERO": [
        "TestEvaluate::test_val_div_zero",
    ],
    "OVF-IN-BOUNDS": [
        "TestOverflowSigned::test_ovf_in_bounds",
    ],
    "OVF-WRAP": [
        "TestOverflowUnsigned::test_ovf_wrap_add",
        "TestOverflowUnsigned::test_ovf_wrap_sub",
    ],
    "OVF-ERROR": [
        "TestOverflowSigned::test_ovf_error_add",
    ],
    "DIV-NORMAL": [
        "TestDivision::test_div_normal",
    ],
    "DIV-ZERO": [
        "TestDivision::test_div_zero",
    ],
    "MOD-ZERO": [
        "TestDivision::test_mod_zero",
    ],
    "MOD-NEGATIVE-DIVIDEND": [
        "TestDivision::test_mod_negative_dividend",
    ],
    "SHIFT-MASK": [
        "TestShifts::test_shift_mask_32",
    ],
    "ROT-ZERO": [
        "TestRotation::test_rot_zero",
    ],
    "ROT-NORMAL": [
        "TestRotation::test_rot_normal",
    ],
    "DISPATCH-UNSUPPORTED": [
        "TestEvaluate::test_dispatch_unsupported",
    ],
}


def test_branch_coverage_matrix_matches_contract():
    for mode in OperandMode:
        assert set(BRANCH_COVERAGE) == build_contract(mode).branch_ids


def test_branch_coverage_entries_exist():
    for tests in BRANCH_COVERAGE.values():
        for ref in tests:
            cls_name, method = ref.split("::")
            assert hasattr(globals()[cls_name], method), ref
