"""
Stats Command - Structural metrics of a template's dependency graph.
"""

import click
from rich.console import Console
from rich.table import Table

from ...core.exceptions import CfnGraphError
from ...core.types import GraphMetrics
from ...graph.analytics import compute_metrics
from ..renderers import JsonRenderer
from ..utils import exit_with_error, load_graph

console = Console()


def render_metrics(metrics: GraphMetrics) -> None:
    summary = Table(title="Graph Metrics", show_header=False)
    summary.add_column("Metric", style="cyan")
    summary.add_column("Value", justify="right")
    summary.add_row("Resources", str(metrics.total_resources))
    summary.add_row("Dependencies", str(metrics.total_dependencies))
    # Depth is not defined on a cyclic graph
    summary.add_row("Max depth", "n/a" if metrics.has_cycles else str(metrics.max_depth))
    summary.add_row("Leaf resources", str(metrics.leaf_nodes))
    summary.add_row("Root resources", str(metrics.root_nodes))
    summary.add_row("Cycles", "[red]yes[/red]" if metrics.has_cycles else "[green]no[/green]")
    console.print(summary)

    by_service = Table(title="Resources by Service")
    by_service.add_column("Service", style="cyan")
    by_service.add_column("Count", justify="right")
    for service, count in metrics.resources_by_service.items():
        by_service.add_row(service, str(count))
    console.print(by_service)


@click.command()
@click.argument("template")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def stats(template: str, as_json: bool):
    """Show dependency graph metrics for TEMPLATE."""
    renderer = JsonRenderer("stats")

    try:
        data = load_graph(template)
    except CfnGraphError as e:
        exit_with_error(e, renderer if as_json else None)

    metrics = compute_metrics(data.nodes, data.edges)

    if as_json:
        renderer.render_success(metrics)
        return

    render_metrics(metrics)
