"""Conversions between single-precision floats and 62-bit fixed-point integers."""

from __future__ import annotations

import struct

_MANTISSA_BITS = 23
_WIDTH = 61
_MASK61 = (1 << _WIDTH) - 1
_MASK62 = (1 << 62) - 1
_MERSENNE = (1 << 61) - 1


def _signed8(value: int) -> int:
    value &= 0xFF
    return value - 256 if value & 0x80 else value


def _shift(value: int, amount: int, left: bool) -> int:
    return (value << amount) & _MASK61 if left else value >> amount


def float_to_int62(value: float, s: int) -> int:
    """Convert a float to fixed point with ``s`` fractional bits.

    The result is a 61-bit two's-complement number, zero-extended to 62 bits.
    Fractional bits beyond ``s`` are truncated.
    """
    bits = struct.unpack("<I", struct.pack("<f", value))[0]
    fraction = (bits & ((1 << _MANTISSA_BITS) - 1)) | (1 << _MANTISSA_BITS)
    raw_exp = (bits >> _MANTISSA_BITS) & 0xFF
    exp = _signed8(raw_exp - (127 + _MANTISSA_BITS - s))
    negexp = _signed8(-exp)
    if exp >= 0:
        fraction = _shift(fraction, exp, left=True)
    else:
        fraction = _shift(fraction, negexp & 0xFF, left=False)
    if negexp >= _WIDTH:
        fraction = 0
    if bits >> 31:
        fraction = -fraction & _MASK61
    return fraction


def int62_to_float(value: int, s: int) -> float:
    """Convert a fixed-point field element with ``s`` fractional bits to a float.

    Values above 2**60 - 1 are read as negatives modulo 2**61 - 1. The
    mantissa is truncated, not rounded.
    """
    if not 0 <= value <= _MASK62:
        raise ValueError("value must fit in 62 bits")
    if (1 << 60) <= value < (1 << 61):
        value = (value - _MERSENNE) & _MASK62
    value &= _MASK61
    sign = value >> 60
    magnitude = ((-value) & _MASK61) if sign else value

    first_one = _signed8(magnitude.bit_length() - 1)
    left_shift = first_one >= _MANTISSA_BITS
    if left_shift:
        offset = (first_one - _MANTISSA_BITS) & 0xFF
        shifted = _shift(magnitude, offset, left=False)
    else:
        offset = (_MANTISSA_BITS - first_one) & 0xFF
        shifted = _shift(magnitude, offset, left=True)
    exponent = (first_one + 127 - s) & 0xFF

    bits = (sign << 31) | (exponent << _MANTISSA_BITS)
    bits |= shifted & ((1 << _MANTISSA_BITS) - 1)
    return struct.unpack("<f", struct.pack("<I", bits))[0]