"""Quadkey codec implementation.

Encodes tiles as quadtree path strings: one digit per zoom level, each digit
selecting a quadrant of its parent. A tile is an ancestor of another iff its
quadkey is a prefix of the other's.
"""

from __future__ import annotations

from ..core.errors import InvalidQuadKeyError, InvalidTileError
from ..core.types import QuadKey, Tile

_DIGITS = "0123"


class SimpleQuadKeyCodec:
    """Bing-maps style quadkey codec.

    Args:
        max_zoom: Deepest zoom level accepted in either direction
    """

    def __init__(self, max_zoom: int = 31):
        self.max_zoom = max_zoom

    def quadkey(self, tile: Tile) -> QuadKey:
        """Return the quadkey for tile. The zoom-0 tile encodes to ""."""
        if not tile.is_valid():
            raise InvalidTileError(f"Tile {tile} is outside the grid for zoom {tile.z}")
        if tile.z > self.max_zoom:
            raise InvalidTileError(f"Tile {tile} is deeper than max zoom {self.max_zoom}")

        digits = []
        for i in range(tile.z, 0, -1):
            mask = 1 << (i - 1)
            digit = 0
            if tile.x & mask:
                digit += 1
            if tile.y & mask:
                digit += 2
            digits.append(_DIGITS[digit])
        return "".join(digits)

    def tile_from_quadkey(self, qk: QuadKey) -> Tile:
        """Return the tile encoded by qk."""
        if len(qk) > self.max_zoom:
            raise InvalidQuadKeyError(
                f"Quadkey {qk!r} is deeper than max zoom {self.max_zoom}"
            )

        x = y = 0
        for ch in qk:
            digit = _DIGITS.find(ch)
            if digit < 0:
                raise InvalidQuadKeyError(f"Invalid quadkey digit {ch!r} in {qk!r}")
            x = (x << 1) | (digit & 1)
            y = (y << 1) | (digit >> 1)
        return Tile(len(qk), x, y)


_default_codec = SimpleQuadKeyCodec()


def quadkey(tile: Tile) -> QuadKey:
    """Encode tile with the default codec."""
    return _default_codec.quadkey(tile)


def tile_from_quadkey(qk: QuadKey) -> Tile:
    """Decode qk with the default codec."""
    return _default_codec.tile_from_quadkey(qk)
