"""Protocol definition for the Tile<->QuadKey codec."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..core.types import QuadKey, Tile


@runtime_checkable
class QuadKeyCodec(Protocol):
    """Converts tiles to prefix-compatible quadkey strings and back.

    A tile A is an ancestor of tile B iff quadkey(A) is a prefix of quadkey(B),
    and len(quadkey(t)) == t.z.
    """

    def quadkey(self, tile: Tile) -> QuadKey:
        """Return the quadkey for tile."""
        ...

    def tile_from_quadkey(self, qk: QuadKey) -> Tile:
        """Return the tile encoded by qk (left inverse of quadkey)."""
        ...
