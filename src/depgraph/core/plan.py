"""Drain helpers that drive a graph to completion.

``drain`` collects the steps of a graph into a ``DrainResult``; ``walk`` also
hands each step to caller-supplied callbacks as it comes out. Neither knows
how to build an item or fetch an external dependency: that work belongs to
the callbacks, which run strictly between iteration steps.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from depgraph.core.graph import DependencyGraph
from depgraph.core.node import Resolved, Step, Unresolved
from depgraph.exceptions import CycleError

logger = logging.getLogger(__name__)


@dataclass
class DrainResult:
    """Outcome of draining a dependency graph.

    Attributes:
        steps: Steps in the order they were yielded.
        residual: Steps left in the graph when draining stopped. Non-empty
            only when the input contains a dependency cycle.
    """

    steps: list[Step] = field(default_factory=list)
    residual: list[Step] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        """True if every vertex was yielded."""
        return not self.residual

    @property
    def builds(self) -> list[Any]:
        """Items from ``Resolved`` steps, in drain order."""
        return [s.node for s in self.steps if isinstance(s, Resolved)]

    @property
    def lookups(self) -> list[Any]:
        """Descriptors from ``Unresolved`` steps, in drain order."""
        return [s.dependency for s in self.steps if isinstance(s, Unresolved)]

    def raise_for_residual(self) -> None:
        """Raise ``CycleError`` if draining stopped short."""
        if self.residual:
            raise CycleError(self.residual)


def drain(graph: DependencyGraph) -> DrainResult:
    """Consume ``graph`` and return everything it yielded plus the residue."""
    result = DrainResult()
    for step in graph:
        result.steps.append(step)
    result.residual = graph.residual()
    return result


def walk(
    items: Iterable[Any],
    build: Callable[[Any], object],
    lookup: Callable[[Any], object] | None = None,
    strict: bool = False,
) -> DrainResult:
    """Visit ``items`` in dependency order, invoking a callback per step.

    ``lookup`` receives each unresolved descriptor before any dependent
    item is built; ``build`` receives each item after all of its
    dependencies. Return values are ignored and exceptions propagate,
    leaving the rest of the graph undrained.

    Args:
        items: Ordered collection of ``Node`` items.
        build: Called with each resolved item.
        lookup: Called with each unresolved descriptor. If None, unresolved
            steps are only recorded in the result.
        strict: If True, raise ``CycleError`` when draining stops short.

    Returns:
        The ``DrainResult`` of the walk.

    Raises:
        CycleError: If ``strict`` is set and a cycle blocked draining.
    """
    graph = DependencyGraph(items)
    result = DrainResult()

    for step in graph:
        if isinstance(step, Unresolved):
            if lookup is not None:
                logger.debug("Looking up external dependency %r", step.dependency)
                lookup(step.dependency)
        else:
            logger.debug("Building %r", step.node)
            build(step.node)
        result.steps.append(step)

    result.residual = graph.residual()
    if strict:
        result.raise_for_residual()
    return result
