"""Item capability and vertex classification.

Any object can take part in a dependency graph as long as it exposes the two
operations of the ``Node`` protocol. The graph wraps every vertex in a
``Step``: either ``Resolved`` (an input item) or ``Unresolved`` (a dependency
descriptor that no input item matched).

An unresolved step does not mean the dependency *cannot* be satisfied, only
that nothing inside the graph satisfies it. Resolving it externally (from a
registry, a cache, the network) is the caller's job.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar, Union, runtime_checkable

D = TypeVar("D")
N = TypeVar("N")


@runtime_checkable
class Node(Protocol[D]):
    """Capability required of every item placed in a ``DependencyGraph``.

    ``D`` is the dependency descriptor type. For a package manager this is
    typically a (name, version requirement) pair; it can also be the item
    type itself, in which case ``matches`` is plain equality.

    Both methods must be pure and stable for the lifetime of a graph.
    """

    def dependencies(self) -> Sequence[D]:
        """Return the ordered descriptors this item requires."""
        ...

    def matches(self, dependency: D) -> bool:
        """Return True if this item satisfies ``dependency``."""
        ...


@dataclass(frozen=True)
class Resolved(Generic[N]):
    """A vertex backed by one of the input items."""

    node: N

    @property
    def is_resolved(self) -> bool:
        return True

    def as_resolved(self) -> N | None:
        return self.node

    def as_unresolved(self) -> None:
        return None


@dataclass(frozen=True)
class Unresolved(Generic[D]):
    """A vertex for a descriptor no input item could satisfy."""

    dependency: D

    @property
    def is_resolved(self) -> bool:
        return False

    def as_resolved(self) -> None:
        return None

    def as_unresolved(self) -> D | None:
        return self.dependency


Step = Union[Resolved[Any], Unresolved[Any]]
