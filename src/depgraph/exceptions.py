"""depgraph exception hierarchy.

All public exceptions inherit from DepGraphError, giving callers a single
base class to catch when they want to handle any depgraph-specific failure
without swallowing unrelated errors.

The engine never raises while building or draining a graph. Exceptions come
only from the manifest reader and from the opt-in post-drain checks.
"""

from __future__ import annotations

from typing import Any


class DepGraphError(Exception):
    """Base exception for all depgraph errors."""


class ManifestError(DepGraphError):
    """Raised when a package manifest cannot be read.

    Covers unreadable files, YAML/JSON syntax errors, missing fields and
    invalid version strings or constraints.
    """


class ResolutionError(DepGraphError):
    """Raised when a dependency graph cannot be fully resolved."""


class CycleError(ResolutionError):
    """Raised when draining stops while vertices remain.

    Circular or self dependencies leave vertices that never become terminal.

    Attributes:
        residual: The steps still present in the graph when draining stopped.
    """

    def __init__(self, residual: list[Any]) -> None:
        self.residual = residual
        super().__init__(
            f"Dependency cycle: {len(residual)} item(s) could not be ordered"
        )
