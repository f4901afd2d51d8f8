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
Cell codecs for 2, 3 and 4 dimensional coordinates.

A 2D cell is a plain 64-bit unsigned integer: the Morton code of the two
quantized coordinates, with X on the odd bits and Y on the even bits.

3D and 4D cells are 128-bit unsigned integers kept as a pair of 64-bit
halves (hi, lo). They are built in two stages. X/Z and Y/M are first
interleaved pairwise into the 64-bit words AC and BD, then AC and BD are
interleaved again, their upper 32 bits giving `hi` and their lower 32 bits
giving `lo`. The result is a plain 4D Morton code: bit i of x, y, z and m
lands at bit 4*i+3, 4*i+2, 4*i+1 and 4*i of the 128-bit value.

A 3D cell is the 4D cell with M = 0. The two share the same bit layout but
neither can be read as a 2D cell.
"""
import collections
import numbers

from .errors import InvalidCell
from .interleave import (
    MASK32, MASK64, deinterleave, from_fixed, interleave, to_fixed)


# ====================  Cell types  ===========================================

# The tuple order (hi, lo) is the big-endian order of the 128-bit value, so
# the builtin tuple comparison is the cell order.
class _Cell128(collections.namedtuple("_Cell128", "hi lo")):
    __slots__ = ()

    @property
    def value(self):
        """The cell as a single 128-bit integer."""
        return self.hi << 64 | self.lo

    @classmethod
    def from_value(cls, value):
        """Split a 128-bit integer into a cell."""
        value = _as_int(value, "value")
        if not 0 <= value <= (MASK64 << 64 | MASK64):
            raise InvalidCell(
                "{} does not fit in 128 bits".format(value))
        return cls(value >> 64, value & MASK64)


class CellXYZ(_Cell128):
    """A 3D cell: 128 bits as (hi, lo)."""
    __slots__ = ()


class CellXYZM(_Cell128):
    """A 4D cell: 128 bits as (hi, lo)."""
    __slots__ = ()


def _as_int(value, name):
    # numpy integers register as numbers.Integral, bool does too.
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidCell("{} must be an int, got {}".format(
            name, type(value).__name__))
    return int(value)


def check_u64(value, name="cell"):
    """
    Validate an unsigned 64-bit cell.

    Accepts Python and numpy integers, such as the items of the arrays
    built by :mod:`zcell.vect`.

    Returns:
        int: `value` as a Python int.
    """
    value = _as_int(value, name)
    if not 0 <= value <= MASK64:
        raise InvalidCell("{} {} does not fit in 64 bits".format(name, value))
    return value


def check_u128(cell):
    """
    Validate a (hi, lo) cell.

    Any pair is accepted, including a row of a (N, 2) uint64 array.

    Returns:
        tuple: (hi, lo) as Python ints.
    """
    try:
        hi, lo = cell
    except (TypeError, ValueError):
        raise InvalidCell(
            "Expected a (hi, lo) pair, got {!r}".format(cell)) from None
    return check_u64(hi, "hi"), check_u64(lo, "lo")


def _cmp(a, b):
    return (a > b) - (a < b)


# ====================  2D  ===================================================

def encode_xy(x, y):
    """
    Encode a 2D point into a 64-bit cell.

    Coordinates are expected in [0, 1). Values outside that range are
    clamped.
    """
    a = to_fixed(x)
    b = to_fixed(y)
    return interleave(a) << 1 | interleave(b)


def decode_xy(cell):
    """
    Decode a 64-bit cell.

    Returns:
        tuple: (x, y), each within one fixed-point bucket (2**-32) of the
            clamped coordinates that were encoded.
    """
    cell = check_u64(cell)
    return from_fixed(deinterleave(cell >> 1)), from_fixed(deinterleave(cell))


def compare_xy(a, b):
    """Compare two 2D cells. Returns -1, 0 or 1."""
    return _cmp(check_u64(a), check_u64(b))


# ====================  3D / 4D  ==============================================

def _encode128(a, b, c, d):
    ac = interleave(a) << 1 | interleave(c)
    bd = interleave(b) << 1 | interleave(d)
    hi = interleave(ac >> 32) << 1 | interleave(bd >> 32)
    lo = interleave(ac & MASK32) << 1 | interleave(bd & MASK32)
    return hi, lo


def _decode128(hi, lo):
    ac = deinterleave(hi >> 1) << 32 | deinterleave(lo >> 1)
    bd = deinterleave(hi) << 32 | deinterleave(lo)
    return (deinterleave(ac >> 1), deinterleave(bd >> 1),
            deinterleave(ac), deinterleave(bd))


def encode_xyzm(x, y, z, m):
    """
    Encode a 4D point into a 128-bit cell.

    Coordinates are expected in [0, 1). Values outside that range are
    clamped.
    """
    return CellXYZM(*_encode128(to_fixed(x), to_fixed(y),
                                to_fixed(z), to_fixed(m)))


def decode_xyzm(cell):
    """Decode a 4D cell into (x, y, z, m)."""
    return tuple(from_fixed(v) for v in _decode128(*check_u128(cell)))


def encode_xyz(x, y, z):
    """
    Encode a 3D point into a 128-bit cell.

    This is exactly :func:`encode_xyzm` with m = 0.
    """
    return CellXYZ(*encode_xyzm(x, y, z, 0.0))


def decode_xyz(cell):
    """Decode a 3D cell into (x, y, z)."""
    x, y, z, _ = decode_xyzm(cell)
    return x, y, z


def compare_xyzm(a, b):
    """Compare two 128-bit cells, `hi` first. Returns -1, 0 or 1."""
    return _cmp(check_u128(a), check_u128(b))


compare_xyz = compare_xyzm
