"""Reader/writer lock implementation.

Many readers or one writer. A writer can downgrade to a reader atomically,
so a caller that sorted under the write lock keeps reading the sorted state
without a window in which another writer could slip in.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from ..core.errors import LockError


class SimpleRWLock:
    """Writer-preferring reader/writer lock with reentrant reads.

    New readers queue behind waiting writers so a steady stream of readers
    cannot starve inserts. A thread that already holds a read lock may take
    another one without queueing, so nested reads never deadlock.

    Invariants:
        - At most one writer holds the lock, and never alongside readers
        - Read and write holds are owned by the thread that acquired them
        - A thread holding a read lock cannot acquire the write lock
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers: dict[int, int] = {}  # thread ident -> read holds
        self._writer: int | None = None  # thread ident of the writer
        self._writers_waiting: int = 0

    def acquire_read(self) -> None:
        """Block until no writer holds or awaits the lock, then register as a reader."""
        me = threading.get_ident()
        with self._cond:
            if self._writer == me:
                raise LockError("cannot take a read lock while holding the write lock; use downgrade()")
            while self._writer is not None or (self._writers_waiting and me not in self._readers):
                self._cond.wait()
            self._readers[me] = self._readers.get(me, 0) + 1

    def release_read(self, owner: int | None = None) -> None:
        """Release one read hold.

        Args:
            owner: Thread ident the hold was taken on. Defaults to the
                calling thread; pass it when the hold outlives its thread
                of origin, as with a stream finished elsewhere.
        """
        me = threading.get_ident() if owner is None else owner
        with self._cond:
            held = self._readers.get(me, 0)
            if held == 0:
                raise LockError(f"release_read called without a read lock held by thread {me}")
            if held == 1:
                del self._readers[me]
            else:
                self._readers[me] = held - 1
            if not self._readers:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        """Block until there are no readers and no writer, then take the lock."""
        me = threading.get_ident()
        with self._cond:
            if self._writer == me:
                raise LockError("write lock is not reentrant")
            if me in self._readers:
                raise LockError("cannot upgrade a read lock to a write lock")
            self._writers_waiting += 1
            try:
                while self._writer is not None or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = me

    def release_write(self) -> None:
        """Release the write lock."""
        with self._cond:
            self._check_writer()
            self._writer = None
            self._cond.notify_all()

    def downgrade(self) -> None:
        """Atomically turn the held write lock into a read lock."""
        with self._cond:
            me = self._check_writer()
            self._writer = None
            self._readers[me] = 1
            # Waiting writers keep waiting on us
            self._cond.notify_all()

    def _check_writer(self) -> int:
        """Raise unless the calling thread holds the write lock (must hold _cond)."""
        me = threading.get_ident()
        if self._writer != me:
            raise LockError("write lock is not held by this thread")
        return me

    @property
    def readers(self) -> int:
        """Number of read holds currently outstanding, across all threads."""
        with self._cond:
            return sum(self._readers.values())

    @property
    def is_write_locked(self) -> bool:
        """True while some thread holds the write lock."""
        with self._cond:
            return self._writer is not None

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        """Hold a read lock for the duration of the with-block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        """Hold the write lock for the duration of the with-block."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
