"""Binary-heap priority queue configurable as a min-heap or max-heap.

Ties between equal priorities come out in no particular order.
``update_priority`` locates items with a linear scan, so it is meant for
occasional re-prioritisation rather than decrease-key heavy workloads.
"""
from __future__ import annotations

import operator
from typing import Any, Callable, Generic, List, NamedTuple, Optional, TypeVar

T = TypeVar("T")


class PriorityItem(NamedTuple):
    item: Any
    priority: float


class PriorityQueue(Generic[T]):
    """Heap ordered by a comparator fixed at construction time."""

    def __init__(self, *, min_heap: bool = True) -> None:
        self._heap: List[PriorityItem] = []
        self.min_heap = min_heap
        self._before: Callable[[float, float], bool] = operator.lt if min_heap else operator.gt

    def enqueue(self, item: T, priority: float) -> None:
        self._heap.append(PriorityItem(item, priority))
        self._sift_up(len(self._heap) - 1)

    def dequeue(self) -> Optional[T]:
        """Remove and return the front item, or ``None`` when empty."""

        if not self._heap:
            return None
        last = self._heap.pop()
        if not self._heap:
            return last.item
        front = self._heap[0]
        self._heap[0] = last
        self._sift_down(0)
        return front.item

    def peek(self) -> Optional[T]:
        return self._heap[0].item if self._heap else None

    def peek_priority(self) -> Optional[float]:
        return self._heap[0].priority if self._heap else None

    def update_priority(self, item: T, priority: float) -> bool:
        """Re-prioritise ``item`` in place.

        If ``item`` is not queued it is enqueued and ``False`` is returned.
        """

        for index, entry in enumerate(self._heap):
            if entry.item == item:
                break
        else:
            self.enqueue(item, priority)
            return False

        old_priority = self._heap[index].priority
        self._heap[index] = PriorityItem(item, priority)
        if self._before(priority, old_priority):
            self._sift_up(index)
        else:
            self._sift_down(index)
        return True

    def size(self) -> int:
        return len(self._heap)

    def is_empty(self) -> bool:
        return not self._heap

    def clear(self) -> None:
        self._heap = []

    def to_list(self) -> List[T]:
        return [entry.item for entry in self._heap]

    def to_list_with_priorities(self) -> List[PriorityItem]:
        return list(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __contains__(self, item: object) -> bool:
        return any(entry.item == item for entry in self._heap)

    def _sift_up(self, index: int) -> None:
        heap = self._heap
        while index > 0:
            parent = (index - 1) // 2
            if not self._before(heap[index].priority, heap[parent].priority):
                break
            heap[index], heap[parent] = heap[parent], heap[index]
            index = parent

    def _sift_down(self, index: int) -> None:
        heap = self._heap
        size = len(heap)
        while True:
            best = index
            for child in (2 * index + 1, 2 * index + 2):
                if child < size and self._before(heap[child].priority, heap[best].priority):
                    best = child
            if best == index:
                return
            heap[index], heap[best] = heap[best], heap[index]
            index = best


def min_priority_queue() -> PriorityQueue:
    return PriorityQueue(min_heap=True)


def max_priority_queue() -> PriorityQueue:
    return PriorityQueue(min_heap=False)
