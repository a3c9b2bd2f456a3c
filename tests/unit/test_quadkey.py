"""Unit tests for the quadkey codec and Tile helpers."""

import pytest

from tile_index import InvalidQuadKeyError, InvalidTileError, SimpleQuadKeyCodec, Tile
from tile_index.components.quadkey import quadkey, tile_from_quadkey


@pytest.fixture
def codec():
    """Create codec with the default zoom bound."""
    return SimpleQuadKeyCodec()


def test_quadkey_root_tile_is_empty(codec):
    """Test that the zoom-0 tile encodes to the empty string."""
    assert codec.quadkey(Tile(0, 0, 0)) == ""
    assert codec.tile_from_quadkey("") == Tile(0, 0, 0)


def test_quadkey_known_values(codec):
    """Test encoding against hand-computed quadkeys."""
    assert codec.quadkey(Tile(1, 0, 0)) == "0"
    assert codec.quadkey(Tile(1, 1, 0)) == "1"
    assert codec.quadkey(Tile(1, 0, 1)) == "2"
    assert codec.quadkey(Tile(1, 1, 1)) == "3"
    assert codec.quadkey(Tile(3, 3, 5)) == "213"


def test_quadkey_length_matches_zoom(codec):
    """Test that key length equals the tile's zoom level."""
    for z in range(0, 12):
        n = 1 << z
        assert len(codec.quadkey(Tile(z, n - 1, n // 2))) == z


def test_decode_known_values(codec):
    """Test decoding against hand-computed tiles."""
    assert codec.tile_from_quadkey("213") == Tile(3, 3, 5)
    assert codec.tile_from_quadkey("120") == Tile(3, 4, 2)


def test_decode_inverts_encode(codec):
    """Test that decoding recovers every tile at a small zoom."""
    z = 4
    for x in range(1 << z):
        for y in range(1 << z):
            t = Tile(z, x, y)
            assert codec.tile_from_quadkey(codec.quadkey(t)) == t


def test_ancestor_key_is_prefix(codec):
    """Test that a parent's key prefixes every child's key."""
    t = Tile(5, 19, 7)
    parent_key = codec.quadkey(t.parent())
    assert codec.quadkey(t).startswith(parent_key)
    for child in t.children():
        assert codec.quadkey(child).startswith(codec.quadkey(t))


def test_children_in_digit_order(codec):
    """Test that children() follows quadkey digit order."""
    keys = [codec.quadkey(c) for c in Tile(1, 1, 0).children()]
    assert keys == ["10", "11", "12", "13"]


def test_parent_of_root_is_none():
    """Test that the root tile has no parent."""
    assert Tile(0, 0, 0).parent() is None
    assert Tile(2, 3, 1).parent() == Tile(1, 1, 0)


def test_invalid_tile_rejected(codec):
    """Test that out-of-grid tiles raise InvalidTileError."""
    with pytest.raises(InvalidTileError):
        codec.quadkey(Tile(2, 4, 0))
    with pytest.raises(InvalidTileError):
        codec.quadkey(Tile(2, 0, -1))
    with pytest.raises(InvalidTileError):
        codec.quadkey(Tile(-1, 0, 0))


def test_invalid_quadkey_rejected(codec):
    """Test that keys with digits outside 0-3 raise InvalidQuadKeyError."""
    with pytest.raises(InvalidQuadKeyError):
        codec.tile_from_quadkey("124")
    with pytest.raises(InvalidQuadKeyError):
        codec.tile_from_quadkey("1a")


def test_max_zoom_enforced():
    """Test that a bounded codec rejects deeper tiles and keys."""
    codec = SimpleQuadKeyCodec(max_zoom=3)
    assert codec.quadkey(Tile(3, 7, 7)) == "333"
    with pytest.raises(InvalidTileError):
        codec.quadkey(Tile(4, 0, 0))
    with pytest.raises(InvalidQuadKeyError):
        codec.tile_from_quadkey("0000")


def test_invalid_errors_are_value_errors(codec):
    """Test that codec errors can be caught as ValueError."""
    with pytest.raises(ValueError):
        codec.tile_from_quadkey("9")


def test_module_level_helpers():
    """Test the default-codec convenience functions."""
    assert quadkey(Tile(3, 3, 5)) == "213"
    assert tile_from_quadkey("213") == Tile(3, 3, 5)
