"""Monotonic todo id allocation."""

from __future__ import annotations

import threading


class IdAllocator:
    """Issues strictly increasing integer ids, starting after ``start``.

    Thread-safe. Ids are never reused for the lifetime of the instance.
    """

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError("start must be >= 0")
        self._last = start
        self._lock = threading.Lock()

    @property
    def last_issued(self) -> int:
        with self._lock:
            return self._last

    def next_id(self) -> int:
        with self._lock:
            self._last += 1
            return self._last
