"""Small data structures: ring buffer, binary max-heap, interval map, call limiter."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from typing import Any, Generic, Iterable, TypeVar

__all__ = [
    "RingBuffer",
    "max_heapify",
    "make_heap",
    "heap_drain",
    "IntervalMap",
    "LimitExceeded",
    "CallLimiter",
    "get_result",
]

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")


class RingBuffer(Generic[T]):
    """Fixed-capacity FIFO queue."""

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._data: list[Any] = [None] * capacity
        self._front = 0
        self._rear = 0
        self._size = 0

    @property
    def capacity(self) -> int:
        return len(self._data)

    def __len__(self) -> int:
        return self._size

    def empty(self) -> bool:
        return self._size == 0

    def full(self) -> bool:
        return self._size == len(self._data)

    def push(self, item: T) -> None:
        """Append an item; raise OverflowError when the buffer is full."""
        if self.full():
            raise OverflowError("ring buffer is full")
        self._data[self._front] = item
        self._front = (self._front + 1) % len(self._data)
        self._size += 1

    def pop(self) -> T:
        """Remove and return the oldest item; raise IndexError when empty."""
        if self.empty():
            raise IndexError("ring buffer is empty")
        item = self._data[self._rear]
        self._data[self._rear] = None
        self._rear = (self._rear + 1) % len(self._data)
        self._size -= 1
        return item


def max_heapify(items: list, index: int, n: int) -> None:
    """Sift ``items[index]`` down within the first ``n`` elements."""
    while True:
        largest = index
        left, right = 2 * index + 1, 2 * index + 2
        if left < n and items[left] > items[largest]:
            largest = left
        if right < n and items[right] > items[largest]:
            largest = right
        if largest == index:
            return
        items[largest], items[index] = items[index], items[largest]
        index = largest


def make_heap(items: list) -> None:
    """Rearrange ``items`` in place into a max-heap."""
    n = len(items)
    for index in range(n // 2 - 1, -1, -1):
        max_heapify(items, index, n)


def heap_drain(items: Iterable) -> list:
    """Return the items largest first, by repeatedly popping a max-heap."""
    heap = list(items)
    make_heap(heap)
    drained = []
    for n in range(len(heap) - 1, -1, -1):
        drained.append(heap[0])
        heap[0] = heap[n]
        max_heapify(heap, 0, n)
    return drained


class IntervalMap(Generic[K, V]):
    """Maps every key to a value, storing only the boundaries where it changes.

    Initially every key maps to ``initial``. Keys need only ``<``; values only ``==``.
    """

    def __init__(self, initial: V) -> None:
        self.initial = initial
        self._keys: list[K] = []
        self._values: list[V] = []

    def __getitem__(self, key: K) -> V:
        index = bisect_right(self._keys, key) - 1
        return self.initial if index < 0 else self._values[index]

    def assign(self, key_begin: K, key_end: K, value: V) -> None:
        """Map every key in [key_begin, key_end) to ``value``; empty ranges do nothing."""
        if not key_begin < key_end:
            return
        end_value = self[key_end]
        lo = bisect_left(self._keys, key_begin)
        hi = bisect_right(self._keys, key_end)
        del self._keys[lo:hi]
        del self._values[lo:hi]
        before = self._values[lo - 1] if lo > 0 else self.initial
        boundaries = []
        if not before == value:
            boundaries.append((key_begin, value))
        if not end_value == value:
            boundaries.append((key_end, end_value))
        for offset, (key, val) in enumerate(boundaries):
            self._keys.insert(lo + offset, key)
            self._values.insert(lo + offset, val)

    def items(self) -> list[tuple[K, V]]:
        """Boundaries as (key, value) pairs, excluding the implicit lowest one."""
        return list(zip(self._keys, self._values))


class LimitExceeded(Exception):
    """Raised when a CallLimiter is called more often than allowed."""


class CallLimiter:
    """Callable that sums its arguments, accepting at most ``limit`` calls."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        self.calls = 0
        self.total = 0

    def __call__(self, value: int) -> CallLimiter:
        if self.calls >= self.limit:
            raise LimitExceeded(f"more than {self.limit} calls")
        self.calls += 1
        self.total += value
        return self


def get_result(limit: int, values: Iterable[int]) -> list[int]:
    """Running sums of ``values``, frozen once ``limit`` calls are used up."""
    limiter = CallLimiter(limit)
    sums = []
    for value in values:
        try:
            limiter(value)
        except LimitExceeded:
            pass
        sums.append(limiter.total)
    return sums