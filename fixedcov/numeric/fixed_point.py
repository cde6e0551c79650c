"""
Fixed-point arithmetic module.

This module implements a signed fixed-point scalar stored as a scaled
integer (value × 2**fractional_bits). Multiplication and division use
sign-magnitude truncation toward zero, so results are bit-for-bit
reproducible and never touch floating point.
"""

from dataclasses import dataclass
from typing import Union

from ..exceptions import (
    FixedPointOverflowError,
    FixedPointZeroDivisionError,
    PrecisionMismatchError,
)


@dataclass(frozen=True)
class FixedFormat:
    """
    Width of a fixed-point representation.

    Parameters:
    -----------
    integer_bits : int
        Bits available for the integer part of the magnitude
    fractional_bits : int
        Bits available for the fractional part of the magnitude
    """

    integer_bits: int = 16
    fractional_bits: int = 16

    def __post_init__(self):
        if self.integer_bits < 1 or self.fractional_bits < 0:
            raise ValueError(
                f"Invalid fixed-point format Q{self.integer_bits}.{self.fractional_bits}"
            )

    @property
    def one(self) -> int:
        """Raw value representing 1.0."""
        return 1 << self.fractional_bits

    @property
    def max_raw(self) -> int:
        """Largest representable raw magnitude."""
        return (1 << (self.integer_bits + self.fractional_bits)) - 1

    @property
    def resolution(self) -> float:
        return 1.0 / self.one

    def __str__(self) -> str:
        return f"Q{self.integer_bits}.{self.fractional_bits}"


Q16_16 = FixedFormat(16, 16)

Operand = Union["FixedPoint", int]


class FixedPoint:
    """
    Signed fixed-point number.

    Instances are immutable. Arithmetic between two values requires the
    same FixedFormat; plain ints are promoted with new_unscaled.
    """

    __slots__ = ("_raw", "_fmt")

    def __init__(self, raw: int, fmt: FixedFormat = Q16_16):
        if abs(raw) > fmt.max_raw:
            raise FixedPointOverflowError(
                f"Magnitude {abs(raw)} exceeds {fmt} range (max {fmt.max_raw})"
            )
        self._raw = int(raw)
        self._fmt = fmt

    @classmethod
    def new(cls, mag: int, sign: bool = False, fmt: FixedFormat = Q16_16) -> "FixedPoint":
        """Build from a raw (already scaled) magnitude and a sign flag."""
        return cls(-mag if sign else mag, fmt)

    @classmethod
    def new_unscaled(cls, mag: int, sign: bool = False, fmt: FixedFormat = Q16_16) -> "FixedPoint":
        """Build from an integer value and a sign flag."""
        return cls.new(mag * fmt.one, sign, fmt)

    @classmethod
    def zero(cls, fmt: FixedFormat = Q16_16) -> "FixedPoint":
        return cls(0, fmt)

    @classmethod
    def one(cls, fmt: FixedFormat = Q16_16) -> "FixedPoint":
        return cls(fmt.one, fmt)

    @classmethod
    def from_float(cls, value: float, fmt: FixedFormat = Q16_16) -> "FixedPoint":
        """
        Convert a float at the system boundary.

        Rounds half to even. Not used by the numeric core.
        """
        return cls(round(value * fmt.one), fmt)

    @property
    def raw(self) -> int:
        return self._raw

    @property
    def fmt(self) -> FixedFormat:
        return self._fmt

    @property
    def mag(self) -> int:
        return abs(self._raw)

    @property
    def sign(self) -> bool:
        return self._raw < 0

    def is_zero(self) -> bool:
        return self._raw == 0

    def to_float(self) -> float:
        return self._raw / self._fmt.one

    def _coerce(self, other: Operand) -> "FixedPoint":
        if isinstance(other, FixedPoint):
            if other._fmt != self._fmt:
                raise PrecisionMismatchError(
                    f"Cannot combine {self._fmt} with {other._fmt}"
                )
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return FixedPoint.new_unscaled(abs(other), other < 0, self._fmt)
        raise TypeError(f"Unsupported operand type: {type(other).__name__}")

    # Arithmetic

    def __add__(self, other: Operand) -> "FixedPoint":
        other = self._coerce(other)
        return FixedPoint(self._raw + other._raw, self._fmt)

    def __radd__(self, other: Operand) -> "FixedPoint":
        return self._coerce(other) + self

    def __sub__(self, other: Operand) -> "FixedPoint":
        other = self._coerce(other)
        return FixedPoint(self._raw - other._raw, self._fmt)

    def __rsub__(self, other: Operand) -> "FixedPoint":
        return self._coerce(other) - self

    def __mul__(self, other: Operand) -> "FixedPoint":
        other = self._coerce(other)
        mag = (self.mag * other.mag) >> self._fmt.fractional_bits
        return FixedPoint.new(mag, self.sign != other.sign, self._fmt)

    def __rmul__(self, other: Operand) -> "FixedPoint":
        return self._coerce(other) * self

    def __truediv__(self, other: Operand) -> "FixedPoint":
        other = self._coerce(other)
        if other._raw == 0:
            raise FixedPointZeroDivisionError("Fixed-point division by zero")
        mag = (self.mag << self._fmt.fractional_bits) // other.mag
        return FixedPoint.new(mag, self.sign != other.sign, self._fmt)

    def __rtruediv__(self, other: Operand) -> "FixedPoint":
        return self._coerce(other) / self

    def __neg__(self) -> "FixedPoint":
        return FixedPoint(-self._raw, self._fmt)

    def __pos__(self) -> "FixedPoint":
        return self

    def __abs__(self) -> "FixedPoint":
        return FixedPoint(self.mag, self._fmt)

    def pow(self, exponent: int) -> "FixedPoint":
        """
        Raise to an integer power by repeated squaring.

        Each intermediate product is rounded by __mul__, so the result
        depends only on the integer exponent.
        """
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            raise TypeError("Exponent must be an integer")
        if exponent < 0:
            return FixedPoint.one(self._fmt) / self.pow(-exponent)

        result = FixedPoint.one(self._fmt)
        base = self
        while exponent:
            if exponent & 1:
                result = result * base
            exponent >>= 1
            if exponent:
                base = base * base
        return result

    def __pow__(self, exponent: int) -> "FixedPoint":
        return self.pow(exponent)

    # Comparison

    def __eq__(self, other) -> bool:
        if isinstance(other, FixedPoint):
            return self._raw == other._raw and self._fmt == other._fmt
        if isinstance(other, int) and not isinstance(other, bool):
            return self._raw == other * self._fmt.one
        return NotImplemented

    def __hash__(self) -> int:
        # Whole values hash like the int they compare equal to
        whole, remainder = divmod(self._raw, self._fmt.one)
        if remainder == 0:
            return hash(whole)
        return hash((self._raw, self._fmt))

    def __lt__(self, other: Operand) -> bool:
        return self._raw < self._coerce(other)._raw

    def __le__(self, other: Operand) -> bool:
        return self._raw <= self._coerce(other)._raw

    def __gt__(self, other: Operand) -> bool:
        return self._raw > self._coerce(other)._raw

    def __ge__(self, other: Operand) -> bool:
        return self._raw >= self._coerce(other)._raw

    # Conversion

    def __float__(self) -> float:
        return self.to_float()

    def __bool__(self) -> bool:
        return self._raw != 0

    def __repr__(self) -> str:
        return f"FixedPoint({self.to_float()!r}, raw={self._raw}, fmt={self._fmt})"

    def __str__(self) -> str:
        return f"{self.to_float():.6f}"
