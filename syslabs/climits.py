"""Ranges of the C integer types on the 64-bit ARM target (LP64, unsigned char)."""

from __future__ import annotations

from dataclasses import dataclass

CHAR_BIT = 8
MB_LEN_MAX = 1


@dataclass(frozen=True)
class IntType:
    """A C integer type described by its width in bits and its signedness."""

    name: str
    bits: int
    signed: bool

    def __post_init__(self) -> None:
        if self.bits <= 0:
            raise ValueError(f"integer width must be positive, got {self.bits}")

    def min(self) -> int:
        """Smallest value the type can hold."""
        return -(1 << (self.bits - 1)) if self.signed else 0

    def max(self) -> int:
        """Largest value the type can hold."""
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    def contains(self, value: int) -> bool:
        """Whether value lies within the range of the type."""
        return self.min() <= value <= self.max()

    def wrap(self, value: int) -> int:
        """Reduce value modulo 2**bits into the range of the type."""
        value &= (1 << self.bits) - 1
        if self.signed and value >> (self.bits - 1):
            value -= 1 << self.bits
        return value


def _t(name: str, bits: int, signed: bool) -> IntType:
    return IntType(name, bits, signed)


_CHAR = _t("char", 8, False)
_SCHAR = _t("signed char", 8, True)
_UCHAR = _t("unsigned char", 8, False)
_SHORT = _t("short", 16, True)
_USHORT = _t("unsigned short", 16, False)
_INT = _t("int", 32, True)
_UINT = _t("unsigned int", 32, False)
_LONG = _t("long", 64, True)
_ULONG = _t("unsigned long", 64, False)
_LLONG = _t("long long", 64, True)
_ULLONG = _t("unsigned long long", 64, False)

_TYPES: dict[str, IntType] = {
    "char": _CHAR,
    "signed char": _SCHAR,
    "unsigned char": _UCHAR,
    "short": _SHORT,
    "short int": _SHORT,
    "signed short": _SHORT,
    "signed short int": _SHORT,
    "unsigned short": _USHORT,
    "unsigned short int": _USHORT,
    "int": _INT,
    "signed": _INT,
    "signed int": _INT,
    "unsigned": _UINT,
    "unsigned int": _UINT,
    "long": _LONG,
    "long int": _LONG,
    "signed long": _LONG,
    "signed long int": _LONG,
    "unsigned long": _ULONG,
    "unsigned long int": _ULONG,
    "long long": _LLONG,
    "long long int": _LLONG,
    "signed long long": _LLONG,
    "signed long long int": _LLONG,
    "unsigned long long": _ULLONG,
    "unsigned long long int": _ULLONG,
}

for _bits in (8, 16, 32, 64):
    for _prefix in ("int", "int_least"):
        _TYPES[f"{_prefix}{_bits}_t"] = _t(f"{_prefix}{_bits}_t", _bits, True)
        _TYPES[f"u{_prefix}{_bits}_t"] = _t(f"u{_prefix}{_bits}_t", _bits, False)

_TYPES.update(
    {
        "intptr_t": _t("intptr_t", 64, True),
        "uintptr_t": _t("uintptr_t", 64, False),
        "intmax_t": _t("intmax_t", 64, True),
        "uintmax_t": _t("uintmax_t", 64, False),
        "ptrdiff_t": _t("ptrdiff_t", 64, True),
        "size_t": _t("size_t", 64, False),
    }
)


def int_type(name: str) -> IntType:
    """Return the integer type called name, such as "unsigned long" or "int16_t"."""
    key = " ".join(name.split()).lower()
    try:
        return _TYPES[key]
    except KeyError:
        raise ValueError(f"unknown integer type {name!r}") from None


LIMITS: dict[str, int] = {
    "CHAR_BIT": CHAR_BIT,
    "MB_LEN_MAX": MB_LEN_MAX,
    "SCHAR_MIN": _SCHAR.min(),
    "SCHAR_MAX": _SCHAR.max(),
    "UCHAR_MAX": _UCHAR.max(),
    "CHAR_MIN": _CHAR.min(),
    "CHAR_MAX": _CHAR.max(),
    "SHRT_MIN": _SHORT.min(),
    "SHRT_MAX": _SHORT.max(),
    "USHRT_MAX": _USHORT.max(),
    "INT_MIN": _INT.min(),
    "INT_MAX": _INT.max(),
    "UINT_MAX": _UINT.max(),
    "LONG_MIN": _LONG.min(),
    "LONG_MAX": _LONG.max(),
    "ULONG_MAX": _ULONG.max(),
    "LLONG_MIN": _LLONG.min(),
    "LLONG_MAX": _LLONG.max(),
    "ULLONG_MAX": _ULLONG.max(),
}