# Copyright (C) 2018 DataStorm
#
# This file is part of ZCell.
#
# ZCell is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# ZCell is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# A copy of the GNU General Public License is available in the LICENSE
# file or at <http://www.gnu.org/licenses/>.
"""
Fixed-point quantization and bit interleaving.

Coordinates live in the half-open unit interval [0, 1). They are quantized
into 2**32 equal buckets and the resulting 32-bit integers are spread over
the even bits of a 64-bit word, so that two spread words can be merged into
a Morton (Z-order) code.
"""
import math

from .errors import InvalidCoordinate


# The largest double strictly less than 1.0, i.e. 1 - 2**-53.
MAX_COORD = 0.99999999999999988897769753748434595763683319091796875

SCALE = float(1 << 32)

MASK32 = 0x00000000ffffffff
MASK64 = 0xffffffffffffffff


def clamp(x):
    """
    Restrict `x` to [0, MAX_COORD].

    Infinities clamp to the nearest bound. NaN has no bound to clamp to and
    raises :class:`InvalidCoordinate`.
    """
    if math.isnan(x):
        raise InvalidCoordinate("Coordinate is NaN")
    if x < 0:
        return 0.0
    if x > MAX_COORD:
        return MAX_COORD
    return x


def to_fixed(x):
    """Quantize a coordinate into an unsigned 32-bit integer."""
    # MAX_COORD * 2**32 < 2**32, so the result never overflows 32 bits.
    return int(clamp(x) * SCALE)


def from_fixed(value):
    """Map a 32-bit fixed-point integer back to [0, 1)."""
    return value / SCALE


# SWAR bit spreading, see
# https://lemire.me/blog/2018/01/08/how-fast-can-you-bit-interleave-32-bit-integers/
def interleave(value):
    """
    Spread the 32 low bits of `value` over the even bits of a 64-bit word.

    Bit i of the input lands at bit 2*i of the result.
    """
    word = value & MASK32
    word = (word ^ (word << 16)) & 0x0000ffff0000ffff
    word = (word ^ (word << 8)) & 0x00ff00ff00ff00ff
    word = (word ^ (word << 4)) & 0x0f0f0f0f0f0f0f0f
    word = (word ^ (word << 2)) & 0x3333333333333333
    word = (word ^ (word << 1)) & 0x5555555555555555
    return word


def deinterleave(word):
    """Inverse of :func:`interleave`: gather the even bits of `word`."""
    word &= 0x5555555555555555
    word = (word ^ (word >> 1)) & 0x3333333333333333
    word = (word ^ (word >> 2)) & 0x0f0f0f0f0f0f0f0f
    word = (word ^ (word >> 4)) & 0x00ff00ff00ff00ff
    word = (word ^ (word >> 8)) & 0x0000ffff0000ffff
    word = (word ^ (word >> 16)) & MASK32
    return word
