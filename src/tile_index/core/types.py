"""Common type definitions for the tile index.

Defines fundamental types used across all components.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Core primitive types
QuadKey = str
Value = Any
ValueRef = int
Entry = tuple[QuadKey, ValueRef]


@dataclass(frozen=True, order=True)
class Tile:
    """A tile in the quadtree pyramid.

    Attributes:
        z: Zoom level (depth in the quadtree, 0 is the whole world)
        x: Column, 0 <= x < 2**z
        y: Row, 0 <= y < 2**z
    """

    z: int
    x: int
    y: int

    def is_valid(self) -> bool:
        """Return True if coordinates lie inside the grid for this zoom."""
        if self.z < 0:
            return False
        n = 1 << self.z
        return 0 <= self.x < n and 0 <= self.y < n

    def parent(self) -> Tile | None:
        """Return the enclosing tile one zoom level up, or None at zoom 0."""
        if self.z == 0:
            return None
        return Tile(self.z - 1, self.x >> 1, self.y >> 1)

    def children(self) -> list[Tile]:
        """Return the four tiles one zoom level down, in quadkey digit order."""
        z, x, y = self.z + 1, self.x << 1, self.y << 1
        return [Tile(z, x, y), Tile(z, x + 1, y), Tile(z, x, y + 1), Tile(z, x + 1, y + 1)]

    def __str__(self) -> str:
        return f"{self.z}/{self.x}/{self.y}"
