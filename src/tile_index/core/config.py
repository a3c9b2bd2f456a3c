"""Configuration for the tile index.

Defines the tunable parameters for TileIndex.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TileIndexConfig:
    """Configuration parameters for TileIndex.

    Attributes:
        max_zoom: Deepest zoom level the default quadkey codec accepts
        sort_log_threshold: Lazy sorts of at least this many entries log at INFO
    """

    max_zoom: int = 31
    sort_log_threshold: int = 10_000

    def __post_init__(self) -> None:
        if self.max_zoom < 0:
            raise ValueError(f"max_zoom must be non-negative, got {self.max_zoom}")  # noqa: TRY003
        if self.sort_log_threshold < 0:
            raise ValueError(  # noqa: TRY003
                f"sort_log_threshold must be non-negative, got {self.sort_log_threshold}"
            )
