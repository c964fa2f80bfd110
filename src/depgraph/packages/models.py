"""Versioned packages as dependency graph items.

``Package`` implements the ``Node`` protocol: it declares ``Dependency``
descriptors and matches a descriptor when the names agree and its version
satisfies the descriptor's constraint.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from depgraph.packages.constraints import VersionConstraint, parse_version


@dataclass(frozen=True)
class Dependency:
    """A requirement on some version of a named package.

    Attributes:
        name: Name of the required package.
        constraint: Versions of that package that are acceptable.
    """

    name: str
    constraint: VersionConstraint

    def __str__(self) -> str:
        return f"{self.name} {self.constraint}"


@dataclass(frozen=True)
class Package:
    """A named, versioned unit of work with declared dependencies."""

    name: str
    version: str
    requires: tuple[Dependency, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        parse_version(self.version)

    def dependencies(self) -> tuple[Dependency, ...]:
        return self.requires

    def matches(self, dependency: Dependency) -> bool:
        return (
            self.name == dependency.name
            and dependency.constraint.satisfies(self.version)
        )

    def __str__(self) -> str:
        return f"{self.name}@{self.version}"
