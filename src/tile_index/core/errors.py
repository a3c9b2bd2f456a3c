"""Exception hierarchy for the tile index.

Absence of data is never an error: lookups on unindexed tiles return
empty results. These exceptions cover argument and lifecycle misuse.
"""

from __future__ import annotations


class TileIndexError(Exception):
    """Base exception for all tile index errors."""
    pass


class InvalidZoomRangeError(TileIndexError, ValueError):
    """Raised when a zoom range is negative or inverted."""
    pass


class InvalidTileError(TileIndexError, ValueError):
    """Raised when a tile has coordinates outside its zoom level's grid."""
    pass


class InvalidQuadKeyError(TileIndexError, ValueError):
    """Raised when a quadkey string cannot be decoded to a tile."""
    pass


class IndexClosedError(TileIndexError):
    """Raised when writing to an index that has been closed."""
    pass


class LockError(TileIndexError, RuntimeError):
    """Raised when a lock is released by a caller that does not hold it."""
    pass
