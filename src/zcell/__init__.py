"""
Locality preserving integer keys for points of the unit square, cube and
hypercube.

Coordinates in [0, 1) are quantized to 32 bits and their bits interleaved
into a Morton (Z-order) code, so that close points get close cells:

    >>> import zcell
    >>> zcell.encode_xy(0.0, 0.0)
    0
    >>> zcell.xy_to_string(zcell.encode_xy(zcell.MAX_COORD, zcell.MAX_COORD))
    'ffffffffffffffff'

2D cells are 64-bit integers. 3D and 4D cells are 128-bit integers kept as
(hi, lo) pairs. Each dimensionality has encode, decode, compare, to_string
and from_string functions, and :mod:`zcell.vect` provides numpy versions of
the codecs for bulk work.

This package does not index, project nor store anything.
"""
from .errors import (  # noqa: F401
    CellError, InvalidCell, InvalidCoordinate, InvalidFormat)
from .interleave import MAX_COORD, clamp, deinterleave, interleave  # noqa: F401
from .cell import (  # noqa: F401
    CellXYZ, CellXYZM,
    compare_xy, compare_xyz, compare_xyzm,
    decode_xy, decode_xyz, decode_xyzm,
    encode_xy, encode_xyz, encode_xyzm,
)
from .hexstr import (  # noqa: F401
    xy_from_string, xy_to_string,
    xyz_from_string, xyz_to_string,
    xyzm_from_string, xyzm_to_string,
)

__version__ = "0.1.0"
