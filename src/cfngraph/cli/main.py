"""
cfngraph CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import click

from .commands import graph, groups, paths, stats, validate
from .utils import configure_logging


@click.group()
@click.version_option(package_name="cfngraph")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging on stderr")
def main(verbose: bool):
    """cfngraph: CloudFormation dependency graphs.

    Validates a JSON template, resolves Ref / Fn::GetAtt / Fn::Sub
    references into dependency edges and lays the result out for
    rendering.

    \b
    Quick Start:
      cfngraph validate stack.json
      cfngraph stats stack.json
      cfngraph paths stack.json MyFunction
      cfngraph graph stack.json -o stack.dot
    """
    configure_logging(verbose)


# Register commands
main.add_command(validate.validate)
main.add_command(graph.graph)
main.add_command(stats.stats)
main.add_command(paths.paths)
main.add_command(groups.groups)

if __name__ == "__main__":
    main()
