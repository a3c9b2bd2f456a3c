"""TileIndex implementation - main public API.

Stores values keyed by tile and answers subtree and zoom-range queries
over a lazily sorted quadkey keyset.
"""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING

from ..components.keyset import SimpleKeyset
from ..components.quadkey import SimpleQuadKeyCodec
from ..components.rwlock import SimpleRWLock
from .config import TileIndexConfig
from .errors import IndexClosedError, InvalidZoomRangeError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ..interfaces.codec import QuadKeyCodec
    from ..interfaces.keyset import Keyset
    from .types import Tile, Value

logger = logging.getLogger(__name__)


class TileIndex:
    """Thread-safe index of values by tile.

    If a value is added at a deep tile and a shallower one is requested,
    the value is aggregated up. Inserts only append; the keyset is sorted
    on the first read after a mutation.

    Args:
        config: Index configuration (defaults to TileIndexConfig())
        codec: Tile<->QuadKey codec (defaults to SimpleQuadKeyCodec)

    Public API:
        - insert(tile, value) / add(tile, value): Store a value at a tile
        - values(tile): Values at tile and every tile nested beneath it
        - tile_range(zmin, zmax): Lazy stream of covering tiles per zoom
        - ensure_sorted(): Force the pending lazy sort
        - close(): Reject further inserts

    Invariants:
        - A single reader/writer lock guards entries, values and sorted flag
        - Every read runs under the read lock on a sorted keyset
        - Inserts never reorder or remove existing entries
    """

    def __init__(self, config: TileIndexConfig | None = None, codec: QuadKeyCodec | None = None):
        self.config = config or TileIndexConfig()
        self._codec = codec or SimpleQuadKeyCodec(max_zoom=self.config.max_zoom)
        self._keyset: Keyset = SimpleKeyset()
        self._rwlock = SimpleRWLock()
        self._closed = False

        logger.info(f"Initialized TileIndex (max_zoom={self.config.max_zoom})")

    def insert(self, tile: Tile, value: Value) -> None:
        """Store value at tile. O(1) amortized; no ordering is done here."""
        qk = self._codec.quadkey(tile)

        with self._rwlock.write_locked():
            if self._closed:
                raise IndexClosedError(f"Cannot insert at {tile}: index is closed")
            self._keyset.append(qk, value)

    # Alias kept for callers using the add() name
    add = insert

    def values(self, tile: Tile) -> list[Value]:
        """Return values stored at tile or at any tile nested beneath it.

        Values come back in key order. Returns an empty list if nothing is
        stored at or below tile.
        """
        qk = self._codec.quadkey(tile)

        with self._sorted_read():
            return list(self._keyset.prefix_values(qk))

    def tile_range(self, zmin: int, zmax: int) -> Iterator[Tile]:
        """Lazily enumerate the tiles covering the index for zooms zmin..zmax.

        For each zoom, every distinct ancestor of the stored keys at that
        depth is yielded once, whether or not a value was stored exactly at
        it. Zooms deeper than a key are skipped for that key.

        The returned generator is single-use. It holds a read lock from its
        first next() until it is exhausted, closed, or garbage collected;
        inserts block meanwhile. Use contextlib.closing() when the stream
        may be abandoned early. The stream may be handed to another thread;
        the thread that started it may call values() meanwhile but not
        insert(), which raises LockError.

        Raises:
            InvalidZoomRangeError: If either zoom is negative or zmin > zmax
        """
        if zmin < 0 or zmax < 0:
            raise InvalidZoomRangeError(f"Zoom levels must be non-negative, got [{zmin}, {zmax}]")
        if zmin > zmax:
            raise InvalidZoomRangeError(f"zmin {zmin} is greater than zmax {zmax}")

        return self._stream_tiles(zmin, zmax)

    def _stream_tiles(self, zmin: int, zmax: int) -> Iterator[Tile]:
        # The hold belongs to the thread that opened the stream, which may
        # differ from the one that drains, closes or finalizes it
        owner = self._acquire_sorted_read()
        try:
            logger.debug(f"Opened tile range stream [{zmin}, {zmax}]")
            for qk in self._keyset.boundary_prefixes(zmin, zmax):
                yield self._codec.tile_from_quadkey(qk)
        finally:
            self._rwlock.release_read(owner=owner)
            logger.debug(f"Released tile range stream [{zmin}, {zmax}]")

    def ensure_sorted(self) -> None:
        """Sort pending entries if any insert happened since the last read."""
        with self._sorted_read():
            pass

    @property
    def is_sorted(self) -> bool:
        """True when no insert has happened since the last sort."""
        with self._rwlock.read_locked():
            return self._keyset.is_sorted

    @contextmanager
    def _sorted_read(self) -> Iterator[None]:
        """Hold the read lock over a keyset that is guaranteed sorted."""
        owner = self._acquire_sorted_read()
        try:
            yield
        finally:
            self._rwlock.release_read(owner=owner)

    def _acquire_sorted_read(self) -> int:
        """Take a read hold on a sorted keyset and return the owning thread ident.

        An unsorted keyset is sorted under the write lock, which is then
        downgraded so no insert can land between the sort and the read.
        """
        self._rwlock.acquire_read()
        if not self._keyset.is_sorted:
            self._rwlock.release_read()
            self._rwlock.acquire_write()
            try:
                self._sort_locked()
            except BaseException:
                self._rwlock.release_write()
                raise
            self._rwlock.downgrade()
        return threading.get_ident()

    def _sort_locked(self) -> None:
        """Internal sort (must hold write lock). No-op if already sorted."""
        start = time.perf_counter()
        count = self._keyset.ensure_sorted()
        if count == 0:
            return

        elapsed_ms = (time.perf_counter() - start) * 1000
        msg = f"Sorted {count} pending entries into {len(self._keyset)} in {elapsed_ms:.2f}ms"
        if count >= self.config.sort_log_threshold:
            logger.info(msg)
        else:
            logger.debug(msg)

    def close(self) -> None:
        """Close the index. Further inserts raise IndexClosedError; reads still work."""
        logger.info("Closing TileIndex")
        with self._rwlock.write_locked():
            self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        with self._rwlock.read_locked():
            return len(self._keyset)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
