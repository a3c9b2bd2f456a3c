"""Sorted keyset implementation.

Uses sortedcontainers.SortedKeyList for the sorted entry sequence. Inserts
land in an unsorted pending buffer and are merged in on the next read.
Not thread-safe; TileIndex guards it with a single reader/writer lock.
"""

from __future__ import annotations

from operator import itemgetter
from typing import TYPE_CHECKING

from sortedcontainers import SortedKeyList

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ..core.types import Entry, QuadKey, Value, ValueRef


class SimpleKeyset:
    """Quadkey-sorted entries over an append-only value store.

    Each entry is (quadkey, value_ref) where value_ref indexes the value
    store. Keys need not be unique and may be of any length.

    Invariants:
        - Values are never removed or overwritten; value_ref is stable
        - is_sorted is True iff the pending buffer is empty, and then every
          entry is in the sorted sequence in ascending key order
    """

    def __init__(self):
        """Initialize empty keyset."""
        self._values: list[Value] = []
        self._pending: list[Entry] = []
        self._entries: SortedKeyList = SortedKeyList(key=itemgetter(0))

    @property
    def is_sorted(self) -> bool:
        """True when every entry has been merged into sorted order."""
        return not self._pending

    def append(self, key: QuadKey, value: Value) -> ValueRef:
        """Store value and record an entry for key. Clears the sorted flag."""
        self._values.append(value)
        ref = len(self._values) - 1
        self._pending.append((key, ref))
        return ref

    def ensure_sorted(self) -> int:
        """Merge pending entries into sorted order.

        Returns:
            Number of entries merged; 0 if already sorted
        """
        if not self._pending:
            return 0
        count = len(self._pending)
        self._entries.update(self._pending)
        self._pending = []
        return count

    def prefix_values(self, qk: QuadKey) -> Iterator[Value]:
        """Yield values whose key equals or extends qk, in key order.

        Requires a sorted keyset.
        """
        self._require_sorted()
        start = self._entries.bisect_key_left(qk)
        for key, ref in self._entries.islice(start):
            if not key.startswith(qk):
                break
            yield self._values[ref]

    def boundary_prefixes(self, zmin: int, zmax: int) -> Iterator[QuadKey]:
        """Yield each distinct key prefix of length zmin..zmax exactly once.

        Walks adjacent pairs of sorted entries. A prefix of the current key
        is yielded when the next key no longer shares it, i.e. at the last
        entry of its group. The final entry closes every group it is in.
        Prefixes longer than a key are never produced from that key.

        Requires a sorted keyset.
        """
        self._require_sorted()
        it = iter(self._entries)
        prev = next(it, None)
        if prev is None:
            return

        for cur in it:
            q, n = prev[0], cur[0]
            for z in range(zmin, min(zmax, len(q)) + 1):
                if not n.startswith(q[:z]):
                    yield q[:z]
            prev = cur

        q = prev[0]
        for z in range(zmin, min(zmax, len(q)) + 1):
            yield q[:z]

    def _require_sorted(self) -> None:
        if self._pending:
            raise RuntimeError("keyset has unsorted entries; call ensure_sorted() first")  # noqa: TRY003

    def __len__(self) -> int:
        return len(self._values)
