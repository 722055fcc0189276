"""
Operand domains for the calculator.

Bounds define the *domain* an operand or integer result must live in.
Every operand the parser hands out, and every integer result the
calculator returns, is inside the bounds of the active mode.

Two modes exist, one per invocation:

  SIGNED    [-2**31, 2**31 - 1]   out-of-range results raise
  UNSIGNED  [0, 2**32 - 1]        out-of-range results wrap mod 2**32

Bitwise work always happens on the raw 32-bit pattern; ``to_unsigned``
and ``to_signed`` convert between the pattern and the mode's view.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from errors import ArithmeticOverflowError

WIDTH = 32
MASK = (1 << WIDTH) - 1


class OverflowStrategy(Enum):
    """What to do when a result would exceed the bounds."""

    WRAP = auto()        # Modular wrap-around (like C unsigned)
    ERROR = auto()       # Raise ArithmeticOverflowError


@dataclass(frozen=True)
class Bounds:
    """
    An integer domain [lo, hi] with explicit overflow semantics.
    """

    lo: int
    hi: int
    overflow: OverflowStrategy = OverflowStrategy.ERROR

    def __post_init__(self):
        if self.lo > self.hi:
            raise ValueError(f"lo ({self.lo}) must be <= hi ({self.hi})")

    @property
    def width(self) -> int:
        """Total number of representable values."""
        return self.hi - self.lo + 1

    def contains(self, value: int) -> bool:
        return self.lo <= value <= self.hi

    def wrap(self, value: int) -> int:
        return self.lo + (value - self.lo) % self.width

    def apply(self, raw: int) -> int:
        """Apply the overflow strategy to bring a raw result into bounds.

        Branches: OVF-IN-BOUNDS, OVF-WRAP, OVF-ERROR
        """
        if self.lo <= raw <= self.hi:                             # OVF-IN-BOUNDS
            return raw

        if self.overflow == OverflowStrategy.WRAP:                # OVF-WRAP
            return self.wrap(raw)

        # OverflowStrategy.ERROR                                  # OVF-ERROR
        raise ArithmeticOverflowError(raw, self.lo, self.hi)


INT32 = Bounds(lo=-(2**31), hi=2**31 - 1, overflow=OverflowStrategy.ERROR)
UINT32 = Bounds(lo=0, hi=2**32 - 1, overflow=OverflowStrategy.WRAP)


class OperandMode(str, Enum):
    """Operand representation used for a whole invocation."""

    SIGNED = "signed"
    UNSIGNED = "unsigned"

    @property
    def bounds(self) -> Bounds:
        return INT32 if self is OperandMode.SIGNED else UINT32

    @property
    def allows_negative(self) -> bool:
        return self is OperandMode.SIGNED

    def from_pattern(self, pattern: int) -> int:
        """Read a 32-bit pattern back as a value of this mode."""
        if self is OperandMode.SIGNED:
            return to_signed(pattern)
        return pattern & MASK


# ---------------------------------------------------------------------------
# 32-bit two's-complement helpers
# ---------------------------------------------------------------------------

def to_unsigned(value: int) -> int:
    """The 32-bit pattern of ``value`` as a non-negative int."""
    return value & MASK


def to_signed(value: int) -> int:
    """Interpret the low 32 bits of ``value`` as a signed integer."""
    value &= MASK
    return value - (1 << WIDTH) if value & (1 << (WIDTH - 1)) else value
