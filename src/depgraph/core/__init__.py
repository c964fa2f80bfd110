"""Dependency resolution engine.

Builds a graph from items implementing the ``Node`` protocol and drains it
so that every item comes out after everything it depends on. Public names
are re-exported here, so ``from depgraph.core import X`` works for all of
them.
"""

from depgraph.core.graph import DependencyGraph, Edge
from depgraph.core.node import Node, Resolved, Step, Unresolved
from depgraph.core.plan import DrainResult, drain, walk

__all__ = [
    "DependencyGraph",
    "DrainResult",
    "Edge",
    "Node",
    "Resolved",
    "Step",
    "Unresolved",
    "drain",
    "walk",
]
