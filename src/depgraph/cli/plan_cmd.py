"""``depgraph plan`` and ``depgraph unresolved``: Read-only manifest reports.

Neither command builds or fetches anything; they only show what the
dependency graph would yield.

Exit Codes:
    0 : The whole manifest could be ordered.
    1 : Ordering stopped on a dependency cycle (``plan`` only).
    2 : The manifest could not be read.
"""

from __future__ import annotations

import json
import sys

import click

from depgraph.cli.output import print_plan, print_unresolved, step_to_dict
from depgraph.core import DependencyGraph, drain
from depgraph.exceptions import ManifestError
from depgraph.manifest import load_manifest
from depgraph.packages import Package


def _load_or_exit(path: str) -> list[Package]:
    try:
        return load_manifest(path)
    except ManifestError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)


@click.command("plan")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Emit JSON instead of a table.")
def plan_command(manifest: str, as_json: bool) -> None:
    """Show the build order for the packages in MANIFEST.

    External lookups appear in the order they are needed, ahead of the
    packages that depend on them. Exits with code 1 if a dependency cycle
    leaves packages unordered.
    """
    packages = _load_or_exit(manifest)
    result = drain(DependencyGraph(packages))

    if as_json:
        payload = {
            "steps": [step_to_dict(s) for s in result.steps],
            "residual": [step_to_dict(s) for s in result.residual],
            "complete": result.complete,
        }
        click.echo(json.dumps(payload, indent=2))
    else:
        print_plan(result)

    if not result.complete:
        sys.exit(1)


@click.command("unresolved")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Emit JSON instead of a table.")
def unresolved_command(manifest: str, as_json: bool) -> None:
    """List the dependencies in MANIFEST that no listed package satisfies."""
    packages = _load_or_exit(manifest)
    graph = DependencyGraph(packages)
    missing = list(graph.unresolved_dependencies())

    if as_json:
        click.echo(json.dumps(
            [{"name": d.name, "version": d.constraint.raw} for d in missing],
            indent=2,
        ))
    else:
        print_unresolved(missing)
