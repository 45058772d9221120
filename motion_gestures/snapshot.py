"""
Latest-value cell shared between an estimator callback and the render loop.
"""

import threading
from typing import Generic, Optional, TypeVar

T = TypeVar('T')


class SnapshotCell(Generic[T]):
    """Single-writer, multi-reader holder for the most recent result."""

    def __init__(self):
        self._lock = threading.Lock()
        self._value: Optional[T] = None
        self._version = 0

    def set(self, value: Optional[T]):
        """Replace the stored value wholesale."""
        with self._lock:
            self._value = value
            self._version += 1

    def get(self) -> Optional[T]:
        """Return the latest value, or None before the first result."""
        with self._lock:
            return self._value

    @property
    def version(self) -> int:
        with self._lock:
            return self._version
