"""
Graph Command - Build, lay out and export the dependency graph.

Writes the JSON output contract (or Graphviz DOT) to a file, or prints it.
"""

import sys
from pathlib import Path

import click

from ...config import LayoutDirection, load_settings
from ...core.exceptions import CfnGraphError
from ...graph.export import to_dict, to_dot, to_json
from ...graph.grouping import group_by_service
from ...graph.layout import compute_layout
from ..renderers import JsonRenderer
from ..utils import echo_error, echo_info, echo_success, exit_with_error, load_graph


@click.command()
@click.argument("template")
@click.option("-o", "--output", type=click.Path(dir_okay=False),
              help="Output file (.json or .dot). Prints JSON to stdout when omitted.")
@click.option("--direction", type=click.Choice([d.value for d in LayoutDirection], case_sensitive=False),
              help="Layout direction (default from settings: DOWN)")
@click.option("--group/--no-group", "group", default=None,
              help="Cluster resources by AWS service")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON (standard envelope)")
def graph(template: str, output: str | None, direction: str | None, group: bool | None, as_json: bool):
    """
    Generate a positioned dependency graph.

    \b
    Examples:
      cfngraph graph stack.json -o stack.dot
      cfngraph graph stack.json --direction right --no-group
      cat stack.json | cfngraph graph - --json
    """
    renderer = JsonRenderer("graph")

    if as_json and output is not None:
        echo_error("--json prints to stdout and cannot be combined with -o/--output")
        sys.exit(1)

    try:
        settings = load_settings()
        layout_options = settings.layout
        if direction:
            layout_options = layout_options.model_copy(update={"direction": LayoutDirection(direction.upper())})

        grouping = settings.grouping
        if group is not None:
            grouping = grouping.model_copy(update={"enabled": group})

        data = load_graph(template)
        compute_layout(data.nodes, data.edges, layout_options)
        groups = group_by_service(data.nodes, grouping)
    except CfnGraphError as e:
        exit_with_error(e, renderer if as_json else None)

    if as_json:
        renderer.render_success(to_dict(data, groups=groups))
        return

    if output is None:
        click.echo(to_json(data, groups=groups))
        return

    output_path = Path(output)
    if output_path.suffix == ".dot":
        output_path.write_text(to_dot(data, groups))
        echo_success(f"Generated: {output_path}")
        echo_info(f"Render with: dot -Tpng {output_path} -o graph.png")
    elif output_path.suffix == ".json":
        output_path.write_text(to_json(data, groups=groups))
        echo_success(f"Generated: {output_path}")
    else:
        echo_error(f"Unsupported format: {output_path.suffix}")
        click.echo("Supported: .json, .dot")
        sys.exit(1)
