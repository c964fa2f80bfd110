"""Rich output formatting helpers for the depgraph CLI."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from depgraph.core import DrainResult, Resolved, Step
from depgraph.packages import Dependency

console = Console()


def step_to_dict(step: Step) -> dict[str, Any]:
    """Convert a package step to a JSON-serializable dict."""
    if isinstance(step, Resolved):
        return {
            "action": "build",
            "name": step.node.name,
            "version": step.node.version,
        }
    return {
        "action": "lookup",
        "name": step.dependency.name,
        "version": step.dependency.constraint.raw,
    }


def print_plan(result: DrainResult) -> None:
    """Print the drain order, followed by any residual cycle members."""
    if not result.steps and not result.residual:
        console.print("[dim]No packages in manifest.[/dim]")
        return

    table = Table(title="Build Plan", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Action", justify="center")
    table.add_column("Package", style="bold")
    table.add_column("Version")

    for position, step in enumerate(result.steps, start=1):
        row = step_to_dict(step)
        if row["action"] == "build":
            action = Text("BUILD", style="green")
        else:
            action = Text("LOOKUP", style="yellow")
        table.add_row(str(position), action, row["name"], row["version"])

    console.print(table)

    builds = len(result.builds)
    lookups = len(result.lookups)
    parts = [f"[bold]{builds}[/bold] builds", f"{lookups} external lookups"]
    if result.residual:
        parts.append(f"[red]{len(result.residual)} blocked by a cycle[/red]")
    console.print(" | ".join(parts))

    if result.residual:
        names = ", ".join(
            f"{d['name']}@{d['version']}" for d in map(step_to_dict, result.residual)
        )
        console.print(f"[bold red]Circular dependency among:[/bold red] {names}")


def print_unresolved(missing: list[Dependency]) -> None:
    """Print the dependencies that need external resolution."""
    if not missing:
        console.print("[green]All dependencies resolve within the manifest.[/green]")
        return

    table = Table(title="External Dependencies", show_header=True, header_style="bold")
    table.add_column("Package", style="bold")
    table.add_column("Requirement")
    for dep in missing:
        table.add_row(dep.name, dep.constraint.raw)
    console.print(table)
