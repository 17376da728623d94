"""Tests for :mod:`graphlab.structures.priority_queue`."""

from __future__ import annotations

import random

from graphlab.structures import PriorityQueue, max_priority_queue, min_priority_queue


def drain(queue: PriorityQueue) -> list:
    items = []
    while queue:
        items.append(queue.dequeue())
    return items


def test_min_heap_dequeues_in_non_decreasing_order():
    rng = random.Random(3)
    priorities = [rng.randint(-20, 20) for _ in range(60)]
    queue = min_priority_queue()
    for priority in priorities:
        queue.enqueue(priority, priority)

    assert drain(queue) == sorted(priorities)


def test_max_heap_dequeues_in_non_increasing_order():
    queue = max_priority_queue()
    for priority in [3, 9, 1, 9, 4]:
        queue.enqueue(f"item{priority}", priority)

    assert queue.peek_priority() == 9
    assert [queue.dequeue() for _ in range(2)] == ["item9", "item9"]
    assert drain(queue) == ["item4", "item3", "item1"]


def test_size_tracks_enqueues_minus_dequeues():
    queue = PriorityQueue()
    for index in range(7):
        queue.enqueue(index, index)
    for _ in range(3):
        queue.dequeue()

    assert queue.size() == len(queue) == 4


def test_empty_queue_returns_none():
    queue = PriorityQueue()

    assert queue.is_empty()
    assert queue.dequeue() is None
    assert queue.peek() is None and queue.peek_priority() is None


def test_update_priority_reorders_or_enqueues():
    queue = PriorityQueue()
    queue.enqueue("a", 5)
    queue.enqueue("b", 3)

    assert queue.update_priority("a", 1) is True
    assert queue.peek() == "a"
    assert queue.update_priority("c", 0) is False
    assert drain(queue) == ["c", "a", "b"]


def test_list_views_and_clear():
    queue = PriorityQueue()
    queue.enqueue("x", 2)
    queue.enqueue("y", 1)

    assert sorted(queue.to_list()) == ["x", "y"]
    assert sorted((entry.item, entry.priority) for entry in queue.to_list_with_priorities()) == [
        ("x", 2),
        ("y", 1),
    ]
    assert "x" in queue
    queue.clear()
    assert queue.is_empty() and "x" not in queue


def test_raising_priority_in_min_heap_sifts_down():
    queue = min_priority_queue()
    for item, priority in (("a", 1), ("b", 2), ("c", 3), ("d", 4)):
        queue.enqueue(item, priority)

    assert queue.update_priority("a", 10) is True
    assert queue.peek() == "b"
    assert drain(queue) == ["b", "c", "d", "a"]


def test_max_heap_update_priority_moves_both_ways():
    queue = max_priority_queue()
    for item, priority in (("a", 5), ("b", 3), ("c", 1)):
        queue.enqueue(item, priority)

    assert queue.update_priority("a", 0) is True
    assert queue.peek() == "b"
    assert queue.update_priority("c", 9) is True
    assert drain(queue) == ["c", "b", "a"]
