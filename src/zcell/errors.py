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
Exceptions raised by zcell.

All of them derive from :class:`CellError`, and from ValueError so that
callers validating user input can catch the usual builtin.
"""


class CellError(Exception):
    """Base class for all zcell exceptions."""


class InvalidCoordinate(CellError, ValueError):
    """Raised when a coordinate cannot be quantized (NaN)."""


class InvalidCell(CellError, ValueError):
    """Raised when a cell does not fit its bit width."""


class InvalidFormat(CellError, ValueError):
    """
    Raised when a string is not a valid cell representation.

    Args:
        text: the offending input.
        reason (str): what is wrong with it.
        position (int, optional): index of the offending character.
    """

    def __init__(self, text, reason, position=None):
        self.text = text
        self.reason = reason
        self.position = position
        if position is None:
            message = "Invalid cell string {!r}: {}".format(text, reason)
        else:
            message = "Invalid cell string {!r} at position {}: {}".format(
                text, position, reason)
        super().__init__(message)
