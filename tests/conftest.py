"""Shared fixtures for depgraph tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def chain_manifest(tmp_path: Path) -> Path:
    """Manifest where app -> derived -> base, plus one external dependency."""
    path = tmp_path / "packages.yaml"
    path.write_text(
        "packages:\n"
        "  - name: base\n"
        "    version: 1.2.3\n"
        "  - name: derived\n"
        "    version: 1.2.3\n"
        "    dependencies:\n"
        "      - name: base\n"
        "        version: '>=1.0.0'\n"
        "  - name: app\n"
        "    version: 0.1.0\n"
        "    dependencies:\n"
        "      - name: derived\n"
        "        version: '^1.0.0'\n"
        "      - name: zlib\n"
        "        version: '>=1.2.0'\n"
    )
    return path


@pytest.fixture
def internal_manifest(tmp_path: Path) -> Path:
    """Manifest whose dependencies all resolve internally."""
    path = tmp_path / "internal.yaml"
    path.write_text(
        "- name: core\n"
        "  version: 1.0.0\n"
        "- name: cli\n"
        "  version: 1.0.0\n"
        "  dependencies:\n"
        "    - name: core\n"
    )
    return path


@pytest.fixture
def cycle_manifest(tmp_path: Path) -> Path:
    """Manifest with a two-package cycle."""
    path = tmp_path / "cycle.yaml"
    path.write_text(
        "packages:\n"
        "  - name: ping\n"
        "    version: 1.0.0\n"
        "    dependencies: [{name: pong}]\n"
        "  - name: pong\n"
        "    version: 1.0.0\n"
        "    dependencies: [{name: ping}]\n"
    )
    return path


@pytest.fixture
def broken_manifest(tmp_path: Path) -> Path:
    """Manifest with a package missing its version."""
    path = tmp_path / "broken.yaml"
    path.write_text("packages:\n  - name: nameless-version\n")
    return path
