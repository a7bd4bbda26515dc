"""CLI entry point for aumos-rebac.

Invoked as::

    aumos-rebac [OPTIONS] COMMAND [ARGS]...

or during development::

    python -m aumos_rebac.cli.main

Commands
--------
- check      Decide whether a subject may perform an action on a resource
- explain    Show the decision for every action on a resource
- relations  List the edges leaving (or entering) an entity
- version    Show version information

Exit codes for ``check``: 0 granted, 1 denied (no relation), 2 invalid
config or resource id, 3 denied because the search hit its depth budget.
"""
from __future__ import annotations

import sys
from pathlib import Path

import click
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from aumos_rebac.config.loader import ConfigLoader, ReBACConfigError, ReBACSettings
from aumos_rebac.resource.decision import AccessGranted, ReBACDecision
from aumos_rebac.resource.protected_resource import ReBACProtectedResource
from aumos_rebac.resource.rules import KNOWN_ACTIONS

console = Console()
err_console = Console(stderr=True)

_DEFAULT_CONFIG = Path("rebac.yaml")

EXIT_GRANTED = 0
EXIT_DENIED = 1
EXIT_USAGE = 2
EXIT_INDETERMINATE = 3


def _load_settings(config_path: str) -> ReBACSettings:
    try:
        return ConfigLoader().load(Path(config_path))
    except ReBACConfigError as exc:
        err_console.print(f"[red]Invalid config:[/red] {exc}")
        sys.exit(EXIT_USAGE)


def _build_resource(settings: ReBACSettings, resource_id: str) -> ReBACProtectedResource:
    try:
        return settings.build_resource(resource_id)
    except ValueError as exc:
        err_console.print(f"[red]Invalid resource:[/red] {exc}")
        sys.exit(EXIT_USAGE)


def _decision_label(decision: ReBACDecision) -> str:
    if isinstance(decision, AccessGranted):
        return "[green]GRANTED[/green]"
    if decision.is_indeterminate:
        return "[yellow]DENIED (max depth exceeded)[/yellow]"
    return "[red]DENIED (no relation)[/red]"


def _exit_code(decision: ReBACDecision) -> int:
    if decision:
        return EXIT_GRANTED
    return EXIT_INDETERMINATE if decision.is_indeterminate else EXIT_DENIED


# ---------------------------------------------------------------------------
# Root command group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="aumos-rebac")
def cli() -> None:
    """ReBAC CLI: relationship-based access checks over a YAML graph."""


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from aumos_rebac import __version__

    console.print(
        Panel(
            f"[bold]aumos-rebac[/bold]  v[cyan]{__version__}[/cyan]\n"
            "Relationship-based access control over a relation graph.",
            title="Version",
            border_style="blue",
        )
    )


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


@cli.command(name="check")
@click.option("--subject", "-s", required=True, help="Entity requesting access.")
@click.option("--resource", "-r", "resource_id", required=True, help="Protected resource id.")
@click.option(
    "--action",
    "-a",
    type=click.Choice(list(KNOWN_ACTIONS)),
    required=True,
    help="Permission action to check.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    default=str(_DEFAULT_CONFIG),
    show_default=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to rebac.yaml.",
)
def check_command(subject: str, resource_id: str, action: str, config_path: str) -> None:
    """Decide whether SUBJECT may perform ACTION on RESOURCE."""
    settings = _load_settings(config_path)
    resource = _build_resource(settings, resource_id)
    decision = resource.check_relation(subject, action)  # type: ignore[arg-type]

    console.print(Panel(_decision_label(decision), title="ReBAC Check Result", border_style="blue"))
    console.print(f"  Subject:  [cyan]{subject}[/cyan]")
    console.print(f"  Action:   [cyan]{action}[/cyan]")
    console.print(f"  Resource: [cyan]{resource_id}[/cyan]")

    if isinstance(decision, AccessGranted):
        console.print(f"  Relation: [bold green]{decision.relation.value}[/bold green]")
        table = Table(title="Relation Path", box=box.SIMPLE)
        table.add_column("#", style="dim")
        table.add_column("Subject", style="cyan")
        table.add_column("Relation", style="magenta")
        table.add_column("Object", style="cyan")
        for hop, edge in enumerate(decision.path, start=1):
            table.add_row(str(hop), edge.subject, edge.relation.value, edge.object)
        console.print(table)
    elif decision.is_indeterminate:
        console.print(f"  Max depth: [yellow]{decision.max_depth}[/yellow]")
    else:
        searched = ", ".join(r.value for r in decision.searched_relations) or "(none)"
        console.print(f"  Searched relations: {searched}")

    sys.exit(_exit_code(decision))


# ---------------------------------------------------------------------------
# explain
# ---------------------------------------------------------------------------


@cli.command(name="explain")
@click.option("--subject", "-s", required=True, help="Entity requesting access.")
@click.option("--resource", "-r", "resource_id", required=True, help="Protected resource id.")
@click.option(
    "--config",
    "-c",
    "config_path",
    default=str(_DEFAULT_CONFIG),
    show_default=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to rebac.yaml.",
)
def explain_command(subject: str, resource_id: str, config_path: str) -> None:
    """Show the decision for every action SUBJECT might take on RESOURCE."""
    settings = _load_settings(config_path)
    resource = _build_resource(settings, resource_id)
    decisions = resource.explain_access(subject)

    table = Table(title=f"Access for {subject} on {resource_id}", box=box.SIMPLE)
    table.add_column("Action", style="cyan")
    table.add_column("Decision")
    table.add_column("Detail")
    for action, decision in decisions.items():
        if isinstance(decision, AccessGranted):
            detail = " -> ".join([decision.path[0].subject] + [e.object for e in decision.path])
            detail = f"{decision.relation.value} via {detail}"
        elif decision.is_indeterminate:
            detail = f"max_depth={decision.max_depth}"
        else:
            detail = "searched: " + (", ".join(r.value for r in decision.searched_relations) or "(none)")
        table.add_row(action, _decision_label(decision), detail)
    console.print(table)


# ---------------------------------------------------------------------------
# relations
# ---------------------------------------------------------------------------


@cli.command(name="relations")
@click.argument("entity")
@click.option("--reverse", is_flag=True, default=False, help="List incoming edges instead.")
@click.option(
    "--config",
    "-c",
    "config_path",
    default=str(_DEFAULT_CONFIG),
    show_default=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to rebac.yaml.",
)
def relations_command(entity: str, reverse: bool, config_path: str) -> None:
    """List the relation tuples leaving (or with --reverse, entering) ENTITY."""
    settings = _load_settings(config_path)
    graph = settings.build_graph()
    edges = graph.get_reverse_relations(entity) if reverse else graph.get_relations(entity)

    if not edges:
        console.print(f"[yellow]No {'incoming' if reverse else 'outgoing'} relations for {entity}.[/yellow]")
        return

    table = Table(
        title=f"{'Incoming' if reverse else 'Outgoing'} relations of {entity}",
        box=box.SIMPLE,
    )
    table.add_column("Subject", style="cyan")
    table.add_column("Relation", style="magenta")
    table.add_column("Object", style="cyan")
    for edge in edges:
        table.add_row(edge.subject, edge.relation.value, edge.object)
    console.print(table)
    console.print(f"  Total: [cyan]{len(edges)}[/cyan]")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    cli()
