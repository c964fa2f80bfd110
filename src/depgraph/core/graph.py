"""Dependency graph construction, draining and introspection.

The graph is built once from an ordered collection of ``Node`` items and then
consumed by iteration. Every item gets one ``Resolved`` vertex. Every declared
dependency becomes an edge pointing from the dependent to the *first* item (in
input order) that matches it, or to a fresh ``Unresolved`` vertex when nothing
matches. Unmatched descriptors are not deduplicated.

Iterating the graph repeatedly removes a terminal vertex (one with no
outgoing edges) and yields its step, so dependencies always come out before
their dependents (Kahn's algorithm). Candidates are scanned in reverse
creation order and the first terminal one wins.

If no vertex is terminal, iteration ends even though vertices remain. This
only happens with circular or self dependencies; use ``is_stalled()``,
``residual()`` or ``check_drained()`` after draining to detect it.

Thread safety: This class is NOT thread-safe. A graph is drained once, from
one thread.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, cast

from depgraph.core.node import Node, Resolved, Step, Unresolved
from depgraph.exceptions import CycleError

logger = logging.getLogger(__name__)

N = TypeVar("N", bound=Node)


@dataclass(frozen=True)
class Edge:
    """A dependency edge between two live vertices.

    Attributes:
        source: Vertex index of the dependent.
        target: Vertex index of the vertex satisfying the dependency.
        dependency: The descriptor the dependent declared.
    """

    source: int
    target: int
    dependency: Any


class DependencyGraph(Generic[N]):
    """Directed graph of items and their dependencies, drained in order.

    The graph keeps a frozen snapshot of the input order and holds
    references to the caller's items and descriptors; they are never copied
    or mutated, and must not be mutated by the caller while the graph (or
    any step it yielded) is in use.

    Vertices live in an index-stable arena: a removed vertex leaves a
    tombstone, so the indices of all other vertices stay valid and removal
    costs time proportional to the vertex degree.

    Args:
        items: Ordered collection of objects implementing ``Node``.
    """

    def __init__(self, items: Iterable[N]) -> None:
        self._items: tuple[N, ...] = tuple(items)
        self._steps: list[Step | None] = []
        self._outgoing: list[dict[int, Edge]] = []
        self._incoming: list[dict[int, Edge]] = []
        self._live = 0
        self._next_edge = 0
        self._stall_logged = False

        # One resolved vertex per item; vertex index == input position.
        for item in self._items:
            self._add_vertex(Resolved(item))

        for index, item in enumerate(self._items):
            for dependency in item.dependencies():
                target = self._find_satisfier(dependency)
                if target is None:
                    target = self._add_vertex(Unresolved(dependency))
                self._add_edge(index, target, dependency)

        logger.debug(
            "Built dependency graph: %d items, %d unresolved, %d edges",
            len(self._items),
            self._live - len(self._items),
            self._next_edge,
        )

    @classmethod
    def from_items(cls, items: Iterable[N]) -> DependencyGraph[N]:
        """Build a graph from an ordered collection of items."""
        return cls(items)

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    def _find_satisfier(self, dependency: Any) -> int | None:
        for position, candidate in enumerate(self._items):
            if candidate.matches(dependency):
                return position
        return None

    def _add_vertex(self, step: Step) -> int:
        self._steps.append(step)
        self._outgoing.append({})
        self._incoming.append({})
        self._live += 1
        return len(self._steps) - 1

    def _add_edge(self, source: int, target: int, dependency: Any) -> None:
        edge = Edge(source=source, target=target, dependency=dependency)
        edge_id = self._next_edge
        self._next_edge += 1
        self._outgoing[source][edge_id] = edge
        self._incoming[target][edge_id] = edge

    def _remove_vertex(self, index: int) -> Step:
        step = cast(Step, self._steps[index])
        for edge_id, edge in self._incoming[index].items():
            self._outgoing[edge.source].pop(edge_id, None)
        for edge_id, edge in self._outgoing[index].items():
            self._incoming[edge.target].pop(edge_id, None)
        self._incoming[index] = {}
        self._outgoing[index] = {}
        self._steps[index] = None
        self._live -= 1
        return step

    def _live_indices(self) -> Iterator[int]:
        return (i for i, step in enumerate(self._steps) if step is not None)

    # ------------------------------------------------------------------
    # Draining
    # ------------------------------------------------------------------

    def __iter__(self) -> DependencyGraph[N]:
        return self

    def __next__(self) -> Step:
        for index in range(len(self._steps) - 1, -1, -1):
            if self._steps[index] is not None and not self._outgoing[index]:
                return self._remove_vertex(index)

        if self._live and not self._stall_logged:
            self._stall_logged = True
            logger.warning(
                "Draining stopped with %d vertices left (circular dependency)",
                self._live,
            )
        raise StopIteration

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return self._live

    @property
    def vertex_count(self) -> int:
        """Number of vertices still in the graph."""
        return self._live

    @property
    def edge_count(self) -> int:
        """Number of edges still in the graph."""
        return sum(len(out) for out in self._outgoing)

    @property
    def items(self) -> Sequence[N]:
        """The input items, in their original order."""
        return self._items

    def steps(self) -> list[Step]:
        """Return the live steps in creation order, without draining."""
        return [self._steps[i] for i in self._live_indices()]  # type: ignore[misc]

    def edges(self) -> list[Edge]:
        """Return the live edges, grouped by source vertex."""
        return [
            edge
            for index in self._live_indices()
            for edge in self._outgoing[index].values()
        ]

    def is_internally_resolvable(self) -> bool:
        """True if no live vertex is ``Unresolved``.

        Reflects the current state, so it becomes True once every unresolved
        step has been drained.
        """
        return all(
            step is None or step.is_resolved for step in self._steps
        )

    def unresolved_dependencies(self) -> Iterator[Any]:
        """Iterate over the descriptors of live ``Unresolved`` vertices.

        Does not drain the graph, so it is suitable for validating or
        prefetching external dependencies before iteration starts. Each
        call returns a fresh iterator.
        """
        return (
            step.dependency
            for step in self._steps
            if isinstance(step, Unresolved)
        )

    def is_drained(self) -> bool:
        """True once every vertex has been yielded."""
        return self._live == 0

    def is_stalled(self) -> bool:
        """True if vertices remain but none of them is terminal.

        A stalled graph yields nothing more: its remaining vertices sit on
        or behind a dependency cycle.
        """
        if self._live == 0:
            return False
        return all(self._outgoing[i] for i in self._live_indices())

    def residual(self) -> list[Step]:
        """Return the steps that draining could not reach.

        Empty for a drained graph. Only meaningful once iteration has
        stopped; before that it is the same as ``steps()``.
        """
        return self.steps()

    def check_drained(self) -> None:
        """Raise ``CycleError`` if the graph is stalled on a cycle.

        Raises:
            CycleError: If vertices remain and none of them is terminal.
        """
        if self.is_stalled():
            raise CycleError(self.residual())

    def __repr__(self) -> str:
        return (
            f"DependencyGraph(items={len(self._items)}, "
            f"vertices={self._live}, edges={self.edge_count})"
        )
