"""Protocol definition for the sorted keyset."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol, runtime_checkable

from ..core.types import QuadKey, Value, ValueRef


@runtime_checkable
class Keyset(Protocol):
    """Quadkey-ordered entries over an append-only value store."""

    @property
    def is_sorted(self) -> bool:
        """True when all entries are in ascending key order."""
        ...

    def append(self, key: QuadKey, value: Value) -> ValueRef:
        """Store value under key without ordering it."""
        ...

    def ensure_sorted(self) -> int:
        """Sort pending entries; return how many were merged."""
        ...

    def prefix_values(self, qk: QuadKey) -> Iterator[Value]:
        """Values whose key equals or extends qk."""
        ...

    def boundary_prefixes(self, zmin: int, zmax: int) -> Iterator[QuadKey]:
        """Distinct key prefixes of length zmin..zmax, each once."""
        ...

    def __len__(self) -> int:
        ...
