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
Vectorized cell codecs.

The functions of :mod:`zcell.cell` applied to whole numpy arrays at once.
Results are bit-identical to the scalar codec.

2D cells are stored in uint64 arrays of shape (N,). 3D and 4D cells are
stored in uint64 arrays of shape (N, 2), the columns being `hi` and `lo`.
"""
import logging

import numpy
import toolz

from .cell import CellXYZ, CellXYZM
from .errors import InvalidCell, InvalidCoordinate
from .interleave import MAX_COORD, SCALE

logger = logging.getLogger(__name__)

# Typed constants, so that numpy never promotes uint64 operands to float.
_U32 = numpy.uint64(0x00000000ffffffff)
_M16 = numpy.uint64(0x0000ffff0000ffff)
_M8 = numpy.uint64(0x00ff00ff00ff00ff)
_M4 = numpy.uint64(0x0f0f0f0f0f0f0f0f)
_M2 = numpy.uint64(0x3333333333333333)
_M1 = numpy.uint64(0x5555555555555555)
_S = {n: numpy.uint64(n) for n in (1, 2, 4, 8, 16, 32)}


def interleave_array(values):
    """Spread the 32 low bits of each value over the even bits."""
    word = numpy.asarray(values, dtype=numpy.uint64) & _U32
    word = (word ^ (word << _S[16])) & _M16
    word = (word ^ (word << _S[8])) & _M8
    word = (word ^ (word << _S[4])) & _M4
    word = (word ^ (word << _S[2])) & _M2
    word = (word ^ (word << _S[1])) & _M1
    return word


def deinterleave_array(words):
    """Inverse of :func:`interleave_array`."""
    word = numpy.asarray(words, dtype=numpy.uint64) & _M1
    word = (word ^ (word >> _S[1])) & _M2
    word = (word ^ (word >> _S[2])) & _M4
    word = (word ^ (word >> _S[4])) & _M8
    word = (word ^ (word >> _S[8])) & _M16
    word = (word ^ (word >> _S[16])) & _U32
    return word


def to_fixed_array(coords):
    """
    Clamp and quantize an array of coordinates.

    Raises:
        InvalidCoordinate: if any coordinate is NaN.
    """
    coords = numpy.asarray(coords, dtype=numpy.float64)
    nans = numpy.isnan(coords)
    if nans.any():
        raise InvalidCoordinate(
            "{} NaN coordinate(s), first at index {}".format(
                nans.sum(), numpy.argwhere(nans)[0].tolist()))
    clamped = numpy.count_nonzero((coords < 0) | (coords > MAX_COORD))
    if clamped:
        logger.debug("Clamped %d of %d coordinates", clamped, coords.size)
    return (numpy.clip(coords, 0.0, MAX_COORD) * SCALE).astype(numpy.uint64)


def from_fixed_array(values):
    return numpy.asarray(values, dtype=numpy.uint64).astype(numpy.float64) / SCALE


def _as_cells128(cells):
    cells = numpy.asarray(cells, dtype=numpy.uint64)
    if cells.ndim != 2 or cells.shape[1] != 2:
        raise InvalidCell(
            "Expected an array of shape (N, 2), got {}".format(cells.shape))
    return cells


# ====================  2D  ===================================================

def encode_xy_array(xs, ys):
    """
    Encode arrays of X and Y coordinates into 2D cells.

    Args:
        xs, ys (array-like): coordinates, broadcast against each other.

    Returns:
        uint64 array of cells.
    """
    xs, ys = numpy.broadcast_arrays(to_fixed_array(xs), to_fixed_array(ys))
    logger.debug("Encoding %d xy points", xs.size)
    return interleave_array(xs) << _S[1] | interleave_array(ys)


def decode_xy_array(cells):
    """Decode 2D cells. Returns the arrays (xs, ys)."""
    cells = numpy.asarray(cells, dtype=numpy.uint64)
    return (from_fixed_array(deinterleave_array(cells >> _S[1])),
            from_fixed_array(deinterleave_array(cells)))


# ====================  3D / 4D  ==============================================

def _encode128(a, b, c, d):
    ac = interleave_array(a) << _S[1] | interleave_array(c)
    bd = interleave_array(b) << _S[1] | interleave_array(d)
    hi = (interleave_array(ac >> _S[32]) << _S[1]
          | interleave_array(bd >> _S[32]))
    lo = (interleave_array(ac & _U32) << _S[1]
          | interleave_array(bd & _U32))
    return numpy.stack([hi, lo], axis=-1)


def encode_xyzm_array(xs, ys, zs, ms):
    """
    Encode arrays of 4D coordinates.

    Returns:
        uint64 array of shape (N, 2) with columns hi and lo.
    """
    a, b, c, d = numpy.broadcast_arrays(
        *(to_fixed_array(v) for v in (xs, ys, zs, ms)))
    logger.debug("Encoding %d xyzm points", a.size)
    return _encode128(a.ravel(), b.ravel(), c.ravel(), d.ravel())


def encode_xyz_array(xs, ys, zs):
    """Encode arrays of 3D coordinates, with m fixed at 0."""
    return encode_xyzm_array(xs, ys, zs, 0.0)


def decode_xyzm_array(cells):
    """Decode an (N, 2) array of 4D cells. Returns (xs, ys, zs, ms)."""
    cells = _as_cells128(cells)
    hi, lo = cells[:, 0], cells[:, 1]
    ac = (deinterleave_array(hi >> _S[1]) << _S[32]
          | deinterleave_array(lo >> _S[1]))
    bd = deinterleave_array(hi) << _S[32] | deinterleave_array(lo)
    return tuple(from_fixed_array(deinterleave_array(v))
                 for v in (ac >> _S[1], bd >> _S[1], ac, bd))


def decode_xyz_array(cells):
    """Decode an (N, 2) array of 3D cells. Returns (xs, ys, zs)."""
    return decode_xyzm_array(cells)[:3]


# ====================  Ordering  =============================================

def zorder(cells):
    """
    Indices sorting `cells` in cell order.

    Args:
        cells (array): 2D cells of shape (N,) or 3D/4D cells of shape (N, 2).

    Returns:
        int array: the permutation, as given by numpy.argsort.
    """
    cells = numpy.asarray(cells, dtype=numpy.uint64)
    if cells.ndim == 1:
        return numpy.argsort(cells, kind="stable")
    cells = _as_cells128(cells)
    # lexsort sorts on the last key first.
    return numpy.lexsort((cells[:, 1], cells[:, 0]))


# ====================  Lazy bulk encoding  ===================================

_ENCODERS = {
    2: lambda c: encode_xy_array(c[:, 0], c[:, 1]),
    3: lambda c: encode_xyz_array(c[:, 0], c[:, 1], c[:, 2]),
    4: lambda c: encode_xyzm_array(c[:, 0], c[:, 1], c[:, 2], c[:, 3]),
}

_WRAPPERS = {
    2: int,
    3: lambda row: CellXYZ(int(row[0]), int(row[1])),
    4: lambda row: CellXYZM(int(row[0]), int(row[1])),
}


def encode_iter(points, chunk_size=10000):
    """
    Lazily encode an iterable of points.

    Points are consumed `chunk_size` at a time and each chunk is encoded
    with the vectorized codec. All points must have the same dimension.

    Args:
        points (iterable): tuples of 2, 3 or 4 coordinates.
        chunk_size (int, optional): Defaults to 10000.

    Yields:
        int for 2D points, :class:`CellXYZ` or :class:`CellXYZM` otherwise.
    """
    ndims = None
    for chunk in toolz.partition_all(chunk_size, points):
        try:
            coords = numpy.asarray(chunk, dtype=numpy.float64)
        except (TypeError, ValueError) as exc:
            raise InvalidCoordinate(
                "Points must be sequences of numbers of equal length: {}"
                .format(exc)) from exc
        if coords.ndim != 2 or coords.shape[1] not in _ENCODERS:
            raise InvalidCoordinate(
                "Points must all have 2, 3 or 4 coordinates")
        if ndims is None:
            ndims = coords.shape[1]
        elif coords.shape[1] != ndims:
            raise InvalidCoordinate(
                "Mixed dimensions {} and {}".format(ndims, coords.shape[1]))
        yield from map(_WRAPPERS[ndims], _ENCODERS[ndims](coords))
