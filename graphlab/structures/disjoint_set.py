"""Disjoint-set (union-find) structure with union by rank and path compression.

``find`` and ``union`` run in amortised ``O(α(n))``. Both optimisations are
required for that bound; ``find`` is iterative so long parent chains never
hit the interpreter recursion limit.
"""
from __future__ import annotations

from typing import Dict, Generic, Hashable, Iterable, List, TypeVar

from graphlab.errors import UnknownElementError

T = TypeVar("T", bound=Hashable)


class DisjointSet(Generic[T]):
    """Union-find over arbitrary hashable elements."""

    def __init__(self, elements: Iterable[T] = ()) -> None:
        self._parent: Dict[T, T] = {}
        self._rank: Dict[T, int] = {}
        self._components = 0
        for element in elements:
            self.add(element)

    def add(self, element: T) -> bool:
        """Register ``element`` as a singleton set; ``False`` if already known."""

        if element in self._parent:
            return False
        self._parent[element] = element
        self._rank[element] = 0
        self._components += 1
        return True

    def find(self, element: T) -> T:
        """Return the representative of ``element``'s set."""

        if element not in self._parent:
            raise UnknownElementError(f"Element {element!r} not found in disjoint set")

        root = element
        while self._parent[root] != root:
            root = self._parent[root]

        current = element
        while current != root:
            parent = self._parent[current]
            self._parent[current] = root
            current = parent
        return root

    def union(self, first: T, second: T) -> bool:
        """Merge the sets of ``first`` and ``second``.

        Returns ``False`` when both already share a set.
        """

        root_a = self.find(first)
        root_b = self.find(second)
        if root_a == root_b:
            return False

        rank_a = self._rank[root_a]
        rank_b = self._rank[root_b]
        if rank_a < rank_b:
            self._parent[root_a] = root_b
        elif rank_a > rank_b:
            self._parent[root_b] = root_a
        else:
            self._parent[root_b] = root_a
            self._rank[root_a] = rank_a + 1

        self._components -= 1
        return True

    def is_connected(self, first: T, second: T) -> bool:
        return self.find(first) == self.find(second)

    def component_count(self) -> int:
        return self._components

    def component(self, element: T) -> List[T]:
        """Return every element sharing ``element``'s representative."""

        root = self.find(element)
        return [item for item in self._parent if self.find(item) == root]

    def component_size(self, element: T) -> int:
        return len(self.component(element))

    def all_components(self) -> List[List[T]]:
        groups: Dict[T, List[T]] = {}
        for item in self._parent:
            groups.setdefault(self.find(item), []).append(item)
        return list(groups.values())

    def contains(self, element: T) -> bool:
        return element in self._parent

    def __contains__(self, element: object) -> bool:
        return element in self._parent

    def __len__(self) -> int:
        return len(self._parent)
