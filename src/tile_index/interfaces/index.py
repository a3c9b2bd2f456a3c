"""Protocol definition for TileIndex."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol, runtime_checkable

from ..core.types import Tile, Value


@runtime_checkable
class SpatialTileIndex(Protocol):
    """Public API for the quadkey tile index."""

    def insert(self, tile: Tile, value: Value) -> None:
        """Store value at tile. Does not pay any indexing cost."""
        ...

    def values(self, tile: Tile) -> list[Value]:
        """Return values stored at tile or at any tile nested beneath it."""
        ...

    def tile_range(self, zmin: int, zmax: int) -> Iterator[Tile]:
        """Lazily enumerate distinct covering tiles for each zoom in [zmin, zmax]."""
        ...

    def ensure_sorted(self) -> None:
        """Sort pending entries if any insert happened since the last read."""
        ...
