# webshare/services/registry.py
"""
In-memory share-code registry.

Maps short share codes to the stored upload they point at. One registry is
built per application and handed to the routes; nothing here touches the
filesystem or the random source, so the lock is only ever held for a dict
access.
"""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional


@dataclass(frozen=True)
class ShareEntry:
    code: str
    path: str
    filename: str
    size: int = 0
    created_at: float = field(default_factory=time.time)


class ReadWriteLock:
    """
    Many concurrent readers, or one writer.

    Writers are preferred: once a writer is waiting, new readers queue behind
    it so a steady stream of downloads cannot starve uploads.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    def acquire_read(self):
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1

    def release_read(self):
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self):
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True

    def release_write(self):
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


class ShareRegistry:
    """Thread-safe code -> ShareEntry map. Entries live until the process exits."""

    def __init__(self):
        self._lock = ReadWriteLock()
        self._entries: Dict[str, ShareEntry] = {}

    def put(self, code: str, entry: ShareEntry) -> None:
        """Insert or overwrite the entry for ``code``."""
        with self._lock.write():
            self._entries[code] = entry

    def put_if_absent(self, code: str, entry: ShareEntry) -> bool:
        """Insert only when ``code`` is unused. Returns False on collision."""
        with self._lock.write():
            if code in self._entries:
                return False
            self._entries[code] = entry
            return True

    def get(self, code: str) -> Optional[ShareEntry]:
        with self._lock.read():
            return self._entries.get(code)

    def __contains__(self, code: object) -> bool:
        with self._lock.read():
            return code in self._entries

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)
