"""
Weighted Graph
==============
Directed weighted graph over arbitrary hashable vertices, stored as a
nested adjacency mapping:

    vertex -> {neighbor: weight}

Mutations report failure with a boolean instead of raising, so callers
can feed candidate edges in bulk and let the graph reject the invalid ones.

Usage:
    graph = WeightedGraph(["a", "b", "c"])
    graph.add_edge("a", "b", 4)
    graph.add_edge("b", "c", 1)
    graph.shortest_paths("a")   # {"a": 0, "b": 4, "c": 5}
"""

from __future__ import annotations

import heapq
import itertools
import logging
from collections.abc import Hashable, Iterable
from typing import Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)


class VertexNotFoundError(LookupError):
    """Raised when a query requires a vertex that is not in the graph."""

    def __init__(self, vertex):
        super().__init__(f"Vertex not in graph: {vertex!r}")
        self.vertex = vertex


class WeightedGraph(Generic[T]):
    """
    Directed graph with non-negative integer edge weights.

    Invariants:
        - each vertex appears once
        - each (u, v) edge appears once; re-adding it is rejected
        - edges only join vertices already in the graph
        - weights are >= 0
    """

    def __init__(self, vertices: Optional[Iterable[T]] = None):
        self._adjacency: dict[T, dict[T, int]] = {}
        for vertex in vertices or ():
            self.add_vertex(vertex)

    # ─── Mutation ─────────────────────────────────────────────────────────

    def add_vertex(self, vertex: T) -> bool:
        """Register a vertex. Returns False for None or a duplicate."""
        if vertex is None or vertex in self._adjacency:
            return False
        self._adjacency[vertex] = {}
        return True

    def add_edge(self, u: T, v: T, weight: int = 1) -> bool:
        """
        Add the directed edge (u, v).

        Returns:
            True if the edge was added. False if either endpoint is
            missing, the edge already exists, or the weight is negative.
            An existing edge is never overwritten.
        """
        if (
            not self.has_vertex(u)
            or not self.has_vertex(v)
            or self.has_edge(u, v)
            or weight < 0
        ):
            return False
        self._adjacency[u][v] = weight
        return True

    # ─── Queries ──────────────────────────────────────────────────────────

    def has_vertex(self, vertex: T) -> bool:
        if vertex is None:
            return False
        return vertex in self._adjacency

    def has_edge(self, u: T, v: T) -> bool:
        if u is None or v is None:
            return False
        edges = self._adjacency.get(u)
        return edges is not None and v in edges

    def are_neighbors(self, u: T, v: T) -> bool:
        return self.has_edge(u, v)

    def vertex_count(self) -> int:
        return len(self._adjacency)

    def edge_count(self) -> int:
        return sum(len(edges) for edges in self._adjacency.values())

    def vertices(self) -> Iterable[T]:
        return self._adjacency.keys()

    def neighbors(self, u: T) -> list[T]:
        """
        Out-neighbors of u.

        Raises:
            VertexNotFoundError: If u is not in the graph. Check
                has_vertex() first.
        """
        if not self.has_vertex(u):
            raise VertexNotFoundError(u)
        return list(self._adjacency[u])

    def weight(self, u: T, v: T) -> int:
        """Weight of edge (u, v). KeyError if the edge does not exist."""
        if not self.has_vertex(u):
            raise VertexNotFoundError(u)
        return self._adjacency[u][v]

    def __contains__(self, vertex) -> bool:
        return self.has_vertex(vertex)

    def __len__(self) -> int:
        return self.vertex_count()

    # ─── Shortest Paths ───────────────────────────────────────────────────

    def shortest_paths(self, source: T) -> dict[T, int]:
        """
        Dijkstra's algorithm from a single source.

        The heap may hold superseded entries for a vertex; they are
        skipped once the vertex has been finalized, so no decrease-key
        is needed. Entries carry an insertion sequence number as a
        tie-breaker, which keeps vertices themselves out of comparisons.

        Args:
            source: Start vertex.

        Returns:
            Mapping of every reachable vertex to its distance from source.
            Unreachable vertices are absent. Empty if source is not in the
            graph.
        """
        if not self.has_vertex(source):
            return {}

        sequence = itertools.count()
        heap: list[tuple[int, int, T]] = [(0, next(sequence), source)]
        visited: set[T] = set()
        distances: dict[T, int] = {source: 0}

        while heap:
            distance, _, vertex = heapq.heappop(heap)
            if vertex in visited:
                continue
            visited.add(vertex)

            for neighbor, weight in self._adjacency[vertex].items():
                candidate = distance + weight
                best = distances.get(neighbor)
                if best is None or candidate < best:
                    distances[neighbor] = candidate
                    heapq.heappush(heap, (candidate, next(sequence), neighbor))

        logger.debug(
            f"Shortest paths from {source!r}: "
            f"{len(distances)}/{len(self._adjacency)} vertices reachable"
        )
        return distances
