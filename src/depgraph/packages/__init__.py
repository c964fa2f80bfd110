"""Versioned packages with SemVer requirements, usable as graph items."""

from depgraph.packages.constraints import Version, VersionConstraint, parse_version
from depgraph.packages.models import Dependency, Package

__all__ = [
    "Dependency",
    "Package",
    "Version",
    "VersionConstraint",
    "parse_version",
]
