"""
Groups Command - Resources clustered by AWS service.
"""

import click
from rich.console import Console
from rich.table import Table

from ...config import load_settings
from ...core.exceptions import CfnGraphError
from ...graph.grouping import group_by_service
from ..renderers import JsonRenderer
from ..utils import echo_info, exit_with_error, load_graph

console = Console()


@click.command()
@click.argument("template")
@click.option("--min-size", type=click.IntRange(min=1),
              help="Smallest group worth showing (default from settings: 2)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def groups(template: str, min_size: int | None, as_json: bool):
    """List service groups in TEMPLATE, largest first."""
    renderer = JsonRenderer("groups")

    try:
        grouping = load_settings().grouping.model_copy(update={"enabled": True})
        if min_size is not None:
            grouping = grouping.model_copy(update={"min_group_size": min_size})
        data = load_graph(template)
    except CfnGraphError as e:
        exit_with_error(e, renderer if as_json else None)

    result = group_by_service(data.nodes, grouping)

    if as_json:
        renderer.render_success([group.model_dump(by_alias=True) for group in result])
        return

    if not result:
        echo_info(f"No service has at least {grouping.min_group_size} resources")
        return

    table = Table(title="Service Groups")
    table.add_column("Group", style="cyan")
    table.add_column("Color")
    table.add_column("Resources")
    for group in result:
        table.add_row(
            group.label,
            f"[{group.color}]■[/] {group.color}",
            ", ".join(group.node_ids),
        )
    console.print(table)
