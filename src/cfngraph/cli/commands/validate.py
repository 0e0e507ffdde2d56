"""
Validate Command - Structural check of a template.

Runs the parser only. Exit status 1 when the template is rejected.
"""

import click

from ...core.exceptions import CfnGraphError
from ..renderers import JsonRenderer
from ..utils import echo_info, echo_success, exit_with_error, load_template


@click.command()
@click.argument("template")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def validate(template: str, as_json: bool):
    """
    Validate a CloudFormation JSON template.

    TEMPLATE is a file path, or - to read from stdin.
    """
    renderer = JsonRenderer("validate")

    try:
        parsed = load_template(template)
    except CfnGraphError as e:
        exit_with_error(e, renderer if as_json else None)

    if as_json:
        renderer.render_success({
            "valid": True,
            "resourceCount": len(parsed.resources),
            "resourceTypes": parsed.resource_types(),
        })
        return

    echo_success(f"Valid template: {len(parsed.resources)} resource(s)")
    for resource_type in parsed.resource_types():
        echo_info(resource_type)
