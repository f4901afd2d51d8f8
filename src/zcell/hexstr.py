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
Fixed-width hexadecimal representation of cells.

A 2D cell is written as 16 lowercase hex digits, a 3D or 4D cell as 32 (the
16 digits of `hi` followed by the 16 digits of `lo`). The most significant
nibble comes first, with no prefix or separator, so that the lexicographic
order of the strings is the order of the cells.

Parsing accepts upper and lower case digits. Strings shorter than the full
width are read as if left-padded with "0", so "ff" is the cell 0xff. Any
other character, or more digits than the width, raises
:class:`~zcell.errors.InvalidFormat`.
"""
from .cell import CellXYZ, CellXYZM, check_u64, check_u128
from .errors import InvalidFormat

HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

XY_WIDTH = 16
XYZM_WIDTH = 32


def _parse(text, width):
    """Validate `text` and return its value as an int."""
    if isinstance(text, (bytes, bytearray)):
        text = text.decode("latin-1")
    if not isinstance(text, str):
        raise InvalidFormat(text, "expected str or bytes, got {}".format(
            type(text).__name__))
    if len(text) > width:
        raise InvalidFormat(text, "longer than {} digits".format(width),
                            position=width)
    for pos, char in enumerate(text):
        if char not in HEX_DIGITS:
            raise InvalidFormat(
                text, "{!r} is not a hex digit".format(char), position=pos)
    if not text:
        return 0
    return int(text, 16)


def xy_to_string(cell):
    """Return the 16 digit hex string of a 2D cell."""
    return format(check_u64(cell), "016x")


def xy_from_string(text):
    """Parse a 2D cell from at most 16 hex digits."""
    return _parse(text, XY_WIDTH)


def xyzm_to_string(cell):
    """Return the 32 digit hex string of a 4D cell, `hi` first."""
    hi, lo = check_u128(cell)
    return format(hi, "016x") + format(lo, "016x")


def xyzm_from_string(text):
    """Parse a 4D cell from at most 32 hex digits."""
    return CellXYZM.from_value(_parse(text, XYZM_WIDTH))


def xyz_to_string(cell):
    """Return the 32 digit hex string of a 3D cell, `hi` first."""
    return xyzm_to_string(cell)


def xyz_from_string(text):
    """Parse a 3D cell from at most 32 hex digits."""
    return CellXYZ.from_value(_parse(text, XYZM_WIDTH))
