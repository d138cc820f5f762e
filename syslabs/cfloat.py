"""Characteristics of the C floating types on the 64-bit ARM target."""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction

FLT_ROUNDS = 1
FLT_EVAL_METHOD = 0


def _floor_log10(x: Fraction) -> int:
    """Exact floor(log10(x)) for a positive rational x."""
    if x <= 0:
        raise ValueError("logarithm of a non-positive number")
    k = math.floor(math.log10(x.numerator) - math.log10(x.denominator))
    while Fraction(10) ** k > x:
        k -= 1
    while Fraction(10) ** (k + 1) <= x:
        k += 1
    return k


def _ceil_log10(x: Fraction) -> int:
    """Exact ceil(log10(x)) for a positive rational x."""
    k = _floor_log10(x)
    return k if Fraction(10) ** k == x else k + 1


@dataclass(frozen=True)
class FloatFormat:
    """A floating type given by its radix, significand digits and exponent range."""

    name: str
    radix: int
    mant_dig: int
    min_exp: int
    max_exp: int
    has_subnorm: bool = True

    def __post_init__(self) -> None:
        if self.radix < 2:
            raise ValueError(f"radix must be at least 2, got {self.radix}")
        if self.mant_dig < 1:
            raise ValueError(f"significand must have at least one digit, got {self.mant_dig}")
        if self.min_exp > self.max_exp:
            raise ValueError("minimum exponent exceeds maximum exponent")

    def _radix_is_power_of_ten(self) -> bool:
        b = self.radix
        while b % 10 == 0:
            b //= 10
        return b == 1

    def digits(self) -> int:
        """Decimal digits that survive a round trip through the type (FLT_DIG)."""
        b = Fraction(self.radix)
        if self._radix_is_power_of_ten():
            return _floor_log10(b ** self.mant_dig)
        return _floor_log10(b ** (self.mant_dig - 1))

    def decimal_digits(self) -> int:
        """Decimal digits needed to round-trip any value of the type (FLT_DECIMAL_DIG)."""
        b = Fraction(self.radix)
        if self._radix_is_power_of_ten():
            return _floor_log10(b ** self.mant_dig)
        return 1 + _ceil_log10(b ** self.mant_dig)

    def min_10_exp(self) -> int:
        """Smallest power of ten that is a normalized value."""
        return _ceil_log10(Fraction(self.radix) ** (self.min_exp - 1))

    def max_10_exp(self) -> int:
        """Largest power of ten that is a finite value."""
        return _floor_log10(self.max_value())

    def max_value(self) -> Fraction:
        """Largest finite value, exactly."""
        b = Fraction(self.radix)
        return (1 - b ** -self.mant_dig) * b ** self.max_exp

    def min_value(self) -> Fraction:
        """Smallest positive normalized value, exactly."""
        return Fraction(self.radix) ** (self.min_exp - 1)

    def true_min(self) -> Fraction:
        """Smallest positive value, subnormals included, exactly."""
        if self.has_subnorm:
            return Fraction(self.radix) ** (self.min_exp - self.mant_dig)
        return self.min_value()

    def epsilon(self) -> Fraction:
        """Difference between 1 and the next representable value, exactly."""
        return Fraction(self.radix) ** (1 - self.mant_dig)


_FLOAT = FloatFormat("float", 2, 24, -125, 128)
_DOUBLE = FloatFormat("double", 2, 53, -1021, 1024)
_LONG_DOUBLE = FloatFormat("long double", 2, 113, -16381, 16384)

_FORMATS = {
    "float": _FLOAT,
    "double": _DOUBLE,
    "long double": _LONG_DOUBLE,
}

FLT_RADIX = 2
DECIMAL_DIG = _LONG_DOUBLE.decimal_digits()


def float_format(name: str) -> FloatFormat:
    """Return the format of "float", "double" or "long double"."""
    key = " ".join(name.split()).lower()
    try:
        return _FORMATS[key]
    except KeyError:
        raise ValueError(f"unknown floating type {name!r}") from None