"""
Paths Command - Upstream and downstream dependencies of one resource.
"""

from typing import Dict, Iterable

import click
from rich.console import Console
from rich.tree import Tree

from ...core.exceptions import CfnGraphError, NodeNotFoundError
from ...graph.analytics import find_dependency_paths
from ...graph.export import paths_to_dict
from ..renderers import JsonRenderer
from ..utils import exit_with_error, load_graph

console = Console()


def _add_branch(tree: Tree, title: str, node_ids: Iterable[str], types: Dict[str, str]) -> None:
    ids = sorted(node_ids)
    branch = tree.add(f"[bold]{title}[/bold] ({len(ids)})")
    if not ids:
        branch.add("[dim]none[/dim]")
    for node_id in ids:
        branch.add(f"{node_id} [dim]{types[node_id]}[/dim]")


@click.command()
@click.argument("template")
@click.argument("resource")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def paths(template: str, resource: str, as_json: bool):
    """
    Show what RESOURCE depends on and what depends on it.

    Dependencies are followed transitively in both directions.
    """
    renderer = JsonRenderer("paths")

    try:
        data = load_graph(template)
        types = {node.id: node.resource_type for node in data.nodes}
        if resource not in types:
            raise NodeNotFoundError(resource)
    except CfnGraphError as e:
        exit_with_error(e, renderer if as_json else None)

    result = find_dependency_paths(resource, data.edges)

    if as_json:
        renderer.render_success({"resource": resource, **paths_to_dict(result)})
        return

    tree = Tree(f"[bold cyan]{resource}[/bold cyan] [dim]{types[resource]}[/dim]")
    _add_branch(tree, "Depends on", result.upstream, types)
    _add_branch(tree, "Used by", result.downstream, types)
    console.print(tree)
