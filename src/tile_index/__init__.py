"""Tile Index - concurrent quadkey-based spatial index."""

from .core.config import TileIndexConfig
from .core.errors import (
    TileIndexError,
    InvalidZoomRangeError,
    InvalidTileError,
    InvalidQuadKeyError,
    IndexClosedError,
    LockError,
)
from .core.index import TileIndex
from .core.types import QuadKey, Tile, Value, ValueRef, Entry
from .components.quadkey import SimpleQuadKeyCodec, quadkey, tile_from_quadkey

__all__ = [
    "TileIndexConfig",
    "TileIndexError",
    "InvalidZoomRangeError",
    "InvalidTileError",
    "InvalidQuadKeyError",
    "IndexClosedError",
    "LockError",
    "TileIndex",
    "QuadKey",
    "Tile",
    "Value",
    "ValueRef",
    "Entry",
    "SimpleQuadKeyCodec",
    "quadkey",
    "tile_from_quadkey",
]
