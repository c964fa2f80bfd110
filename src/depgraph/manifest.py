"""Read package manifests into ``Package`` items.

A manifest is a YAML (or JSON) document listing packages in the order they
should be considered when matching dependencies::

    packages:
      - name: base
        version: 1.2.3
      - name: derived
        version: 1.2.3
        dependencies:
          - name: base
            version: ">=1.0.0"

A bare top-level list of package records is accepted as well.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from depgraph.exceptions import ManifestError
from depgraph.packages import Dependency, Package, VersionConstraint

logger = logging.getLogger(__name__)


def _require_str(record: dict[str, Any], key: str, where: str) -> str:
    value = record.get(key)
    if value is None:
        raise ManifestError(f"{where}: missing required field {key!r}")
    # Floats are rejected: YAML reads 1.10 as 1.1, so such values must be quoted.
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ManifestError(
            f"{where}: field {key!r} must be a string, got {value!r}"
        )
    return str(value)


def _parse_dependency(record: Any, where: str) -> Dependency:
    if not isinstance(record, dict):
        raise ManifestError(f"{where}: dependency must be a mapping")
    name = _require_str(record, "name", where)
    raw = _require_str(record, "version", where) if "version" in record else "*"
    try:
        constraint = VersionConstraint(raw)
    except ValueError as exc:
        raise ManifestError(f"{where}: {exc}") from exc
    return Dependency(name=name, constraint=constraint)


def _parse_package(record: Any, index: int) -> Package:
    where = f"packages[{index}]"
    if not isinstance(record, dict):
        raise ManifestError(f"{where}: package must be a mapping")
    name = _require_str(record, "name", where)
    version = _require_str(record, "version", where)

    deps = record.get("dependencies") or []
    if not isinstance(deps, list):
        raise ManifestError(f"{where}: 'dependencies' must be a list")
    requires = tuple(
        _parse_dependency(dep, f"{where}.dependencies[{i}]")
        for i, dep in enumerate(deps)
    )

    try:
        return Package(name=name, version=version, requires=requires)
    except ValueError as exc:
        raise ManifestError(f"{where}: {exc}") from exc


def parse_manifest(data: Any) -> list[Package]:
    """Convert a decoded manifest document into packages, keeping order.

    Args:
        data: The result of decoding a manifest (a mapping with a
            ``packages`` list, a bare list, or None for an empty file).

    Returns:
        The packages in document order.

    Raises:
        ManifestError: If the document does not describe a package list.
    """
    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("packages") or []
    if not isinstance(data, list):
        raise ManifestError("Manifest must contain a list of packages")
    return [_parse_package(record, i) for i, record in enumerate(data)]


def load_manifest(path: Path | str) -> list[Package]:
    """Read a YAML or JSON manifest file.

    Raises:
        ManifestError: If the file cannot be read or parsed.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
        data = yaml.safe_load(raw)
    except OSError as exc:
        raise ManifestError(f"Cannot read manifest {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ManifestError(f"Invalid manifest {path}: {exc}") from exc

    packages = parse_manifest(data)
    logger.debug("Loaded %d packages from %s", len(packages), path)
    return packages
