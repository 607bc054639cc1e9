"""A fixed-capacity, thread-safe FIFO buffer for handing work to a thread pool."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Deque


class BoundedBuffer:
    """FIFO queue whose ``put`` blocks while full and ``get`` blocks while empty."""

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self._items: Deque[Any] = deque()
        self._lock = threading.Lock()
        self._not_full = threading.Condition(self._lock)
        self._not_empty = threading.Condition(self._lock)

    def put(self, item: Any) -> None:
        """Append ``item``, waiting for free space if necessary."""
        with self._not_full:
            while len(self._items) >= self.capacity:
                self._not_full.wait()
            self._items.append(item)
            self._not_empty.notify()

    def get(self) -> Any:
        """Remove and return the oldest item, waiting for one if necessary."""
        with self._not_empty:
            while not self._items:
                self._not_empty.wait()
            item = self._items.popleft()
            self._not_full.notify()
            return item

    def is_full(self) -> bool:
        with self._lock:
            return len(self._items) == self.capacity

    def is_empty(self) -> bool:
        with self._lock:
            return not self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)