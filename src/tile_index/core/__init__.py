"""Tile index core package."""

from .index import TileIndex

__all__ = ["TileIndex"]
