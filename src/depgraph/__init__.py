"""depgraph: Dependency-ordered traversal of interdependent items."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

from depgraph.core import (
    DependencyGraph,
    DrainResult,
    Edge,
    Node,
    Resolved,
    Step,
    Unresolved,
    drain,
    walk,
)
from depgraph.exceptions import (
    CycleError,
    DepGraphError,
    ManifestError,
    ResolutionError,
)

__all__ = [
    "CycleError",
    "DepGraphError",
    "DependencyGraph",
    "DrainResult",
    "Edge",
    "ManifestError",
    "Node",
    "Resolved",
    "ResolutionError",
    "Step",
    "Unresolved",
    "drain",
    "walk",
]
