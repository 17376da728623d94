"""Primitive data structures used by the algorithm library."""

from .disjoint_set import DisjointSet
from .priority_queue import PriorityQueue, max_priority_queue, min_priority_queue

__all__ = ["DisjointSet", "PriorityQueue", "max_priority_queue", "min_priority_queue"]
