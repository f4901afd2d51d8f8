import numpy
import pytest

import zcell
from zcell import CellXYZ, CellXYZM, MAX_COORD

MASK64 = 0xffffffffffffffff


@pytest.fixture
def rng():
    return numpy.random.default_rng(7)


def test_xy_to_string():
    assert zcell.xy_to_string(0) == "0" * 16
    assert zcell.xy_to_string(0x0123456789abcdef) == "0123456789abcdef"
    assert zcell.xy_to_string(1) == "0000000000000001"


def test_xy_max_scenario():
    cell = zcell.encode_xy(MAX_COORD, MAX_COORD)
    text = zcell.xy_to_string(cell)
    assert text == "ffffffffffffffff"
    assert zcell.xy_from_string(text) == cell == MASK64


def test_xy_from_string_case_insensitive():
    assert zcell.xy_from_string("FFFFFFFFFFFFFFFF") == MASK64
    assert zcell.xy_from_string("0123456789ABCDEF") == 0x0123456789abcdef


def test_xy_from_short_string_is_left_padded():
    assert zcell.xy_from_string("ff") == 0xff
    assert zcell.xy_from_string("1") == 1
    assert zcell.xy_from_string("") == 0


def test_xy_from_bytes():
    assert zcell.xy_from_string(b"00000000000000ff") == 0xff


@pytest.mark.parametrize("text, position", [
    ("0000000000000000g", 16),
    ("000000000000000g", 15),
    ("0x12", 1),
    (" ff", 0),
    ("ff ", 2),
    ("-1", 0),
    ("1_0", 1),
    (b"\xff", 0),
])
def test_xy_from_string_invalid(text, position):
    with pytest.raises(zcell.InvalidFormat) as excinfo:
        zcell.xy_from_string(text)
    assert excinfo.value.position == position
    assert isinstance(excinfo.value, ValueError)


def test_xy_from_string_too_long():
    with pytest.raises(zcell.InvalidFormat, match="longer than 16"):
        zcell.xy_from_string("0" * 17)


@pytest.mark.parametrize("text", [None, 12, ["ff"]])
def test_from_string_not_a_string(text):
    with pytest.raises(zcell.InvalidFormat):
        zcell.xy_from_string(text)
    with pytest.raises(zcell.InvalidFormat):
        zcell.xyzm_from_string(text)


def test_xy_to_string_invalid_cell():
    with pytest.raises(zcell.InvalidCell):
        zcell.xy_to_string(1 << 64)
    with pytest.raises(zcell.InvalidCell):
        zcell.xy_to_string(-1)


def test_xy_string_round_trip(rng):
    for x, y in rng.random((2000, 2)).tolist():
        cell = zcell.encode_xy(x, y)
        text = zcell.xy_to_string(cell)
        assert len(text) == 16
        assert text == text.lower()
        assert zcell.xy_from_string(text) == cell


def test_xy_string_order_matches_cell_order(rng):
    cells = [zcell.encode_xy(x, y) for x, y in rng.random((500, 2)).tolist()]
    assert sorted(cells, key=zcell.xy_to_string) == sorted(cells)


def test_xyzm_to_string():
    assert zcell.xyzm_to_string(CellXYZM(1, 2)) \
        == "0000000000000001" + "0000000000000002"
    assert zcell.xyzm_to_string((MASK64, MASK64)) == "f" * 32
    assert zcell.xyz_to_string(CellXYZ(0, 0)) == "0" * 32


def test_xyzm_from_string():
    text = "0123456789abcdef" + "fedcba9876543210"
    cell = zcell.xyzm_from_string(text)
    assert isinstance(cell, CellXYZM)
    assert cell == (0x0123456789abcdef, 0xfedcba9876543210)
    assert isinstance(zcell.xyz_from_string(text), CellXYZ)
    assert zcell.xyz_from_string(text) == cell


def test_xyzm_from_short_string_is_left_padded():
    assert zcell.xyzm_from_string("ff") == (0, 0xff)
    assert zcell.xyzm_from_string("1" + "0" * 16) == (1, 0)
    assert zcell.xyz_from_string("") == (0, 0)


def test_xyzm_from_string_invalid():
    with pytest.raises(zcell.InvalidFormat):
        zcell.xyzm_from_string("0" * 33)
    with pytest.raises(zcell.InvalidFormat) as excinfo:
        zcell.xyz_from_string("0" * 20 + "z")
    assert excinfo.value.position == 20


def test_xyzm_to_string_invalid_cell():
    with pytest.raises(zcell.InvalidCell):
        zcell.xyzm_to_string((1 << 64, 0))
    with pytest.raises(zcell.InvalidCell):
        zcell.xyz_to_string("ff")


def test_xyzm_string_round_trip(rng):
    for point in rng.random((2000, 4)).tolist():
        cell = zcell.encode_xyzm(*point)
        text = zcell.xyzm_to_string(cell)
        assert len(text) == 32
        assert zcell.xyzm_from_string(text) == cell
        assert zcell.compare_xyzm(zcell.xyzm_from_string(text), cell) == 0


def test_xyz_string_round_trip(rng):
    for point in rng.random((2000, 3)).tolist():
        cell = zcell.encode_xyz(*point)
        assert zcell.xyz_from_string(zcell.xyz_to_string(cell)) == cell
