"""depgraph CLI: Preview the dependency order of a package manifest.

Entry point for the ``depgraph`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    plan       : Show the order in which packages would be built.
    unresolved : List dependencies that must be resolved externally.

Usage::

    depgraph plan packages.yaml
    depgraph plan packages.yaml --json
    depgraph unresolved packages.yaml
"""

from __future__ import annotations

import logging

import click

from depgraph import __version__
from depgraph.cli.plan_cmd import plan_command, unresolved_command


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """depgraph: Dependency-ordered planning for interdependent packages.

    Reads a package manifest, orders packages so each comes after its
    dependencies, and reports dependencies no package in the manifest
    satisfies.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


cli.add_command(plan_command)
cli.add_command(unresolved_command)
