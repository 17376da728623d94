"""Utility helpers for generating identifiers and timestamps."""
from __future__ import annotations

import datetime as _dt
import itertools
import string
import uuid
from dataclasses import dataclass, field
from typing import Container, Iterator

from .model import EdgeId, VertexId

_ALPHABET = string.ascii_uppercase


def new_token(prefix: str | None = None) -> str:
    """Return a globally unique identifier, optionally with ``prefix``."""

    token = uuid.uuid4().hex
    return f"{prefix}_{token}" if prefix else token


def utc_now() -> str:
    """Return the current UTC time formatted as an ISO 8601 string."""

    return _dt.datetime.now(_dt.timezone.utc).isoformat()


def _candidate_names() -> Iterator[str]:
    yield from _ALPHABET
    for first, second in itertools.product(_ALPHABET, repeat=2):
        yield first + second


@dataclass
class VertexNameAllocator:
    """Hand out human readable vertex names: ``A``..``Z``, then ``AA``..``ZZ``.

    Once the two-letter space is exhausted a random token is returned. The
    scan always restarts from ``A`` so released early letters are reused
    before new names are minted.
    """

    used: set[VertexId] = field(default_factory=set)

    def reset(self) -> None:
        self.used.clear()

    def generate_name(self) -> VertexId:
        for name in _candidate_names():
            if name not in self.used:
                self.used.add(name)
                return name
        name = new_token()
        self.used.add(name)
        return name

    def reserve_name(self, name: VertexId) -> bool:
        """Mark ``name`` as used; return ``False`` if it already was."""

        if name in self.used:
            return False
        self.used.add(name)
        return True

    def release_name(self, name: VertexId) -> None:
        self.used.discard(name)

    def is_name_available(self, name: VertexId) -> bool:
        return name not in self.used

    def used_names(self) -> list[VertexId]:
        return sorted(self.used)


def canonical_edge_key(source: VertexId, target: VertexId, *, directed: bool) -> str:
    """Return the naming key for an endpoint pair.

    Undirected pairs are ordered lexicographically so ``(A, B)`` and
    ``(B, A)`` share a key.
    """

    if not directed and target < source:
        source, target = target, source
    return f"{source}-{target}"


def base_edge_key(edge_id: EdgeId) -> str:
    """Strip a ``#n`` parallel-edge suffix from ``edge_id``."""

    return edge_id.split("#", 1)[0]


@dataclass
class EdgeIdAllocator:
    """Derive deterministic edge identifiers from their endpoints.

    The first edge between a pair is named ``"source-target"``, parallel
    edges get ``"source-target#2"``, ``"source-target#3"`` and so on.
    """

    counters: dict[str, int] = field(default_factory=dict)

    def reset(self) -> None:
        self.counters.clear()

    def generate_edge_id(
        self,
        source: VertexId,
        target: VertexId,
        *,
        directed: bool,
        taken: Container[EdgeId] = (),
    ) -> EdgeId:
        """Return the next identifier for ``source``/``target``.

        Identifiers present in ``taken`` are skipped so removing an earlier
        parallel edge never causes a later one to be named twice.
        """

        key = canonical_edge_key(source, target, directed=directed)
        while True:
            count = self.counters.get(key, 0) + 1
            self.counters[key] = count
            edge_id = key if count == 1 else f"{key}#{count}"
            if edge_id not in taken:
                return edge_id

    def release_edge_id(self, edge_id: EdgeId) -> None:
        key = base_edge_key(edge_id)
        count = self.counters.get(key, 0)
        if count > 0:
            self.counters[key] = count - 1

    def edge_count(self, source: VertexId, target: VertexId, *, directed: bool) -> int:
        return self.counters.get(canonical_edge_key(source, target, directed=directed), 0)
