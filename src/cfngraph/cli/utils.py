"""
CLI Utilities - Shared helper functions for command line operations.

Formatted printing, template loading and uniform error exits.
"""

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler

from ..core.exceptions import (
    InvalidTemplateError,
    TemplateError,
    TemplateErrorKind,
    TemplateNotFoundError,
)
from ..core.types import GraphData, Template
from ..graph.builder import build_graph
from ..parsing.template import parse_template
from .renderers import JsonRenderer

STDIN_MARKER = "-"


def configure_logging(verbose: bool) -> None:
    """Route cfngraph's loggers to stderr through rich."""
    package_logger = logging.getLogger("cfngraph")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        package_logger.addHandler(handler)


def echo_success(message: str) -> None:
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_info(message: str) -> None:
    click.echo(click.style(f"   {message}", dim=True))


def exit_with_error(error: Exception, renderer: JsonRenderer | None = None) -> NoReturn:
    """
    Report an error and exit with status 1.

    Args:
        error: The failure to report.
        renderer: When given, the error is written as a JSON envelope on
            stdout instead of a styled line on stderr.
    """
    if renderer is not None:
        renderer.render_error(error)
    elif isinstance(error, InvalidTemplateError):
        echo_error(f"{error.kind}: {error}")
    else:
        echo_error(str(error))
    sys.exit(1)


def read_template_text(source: str) -> str:
    """
    Read template text from a file path, or stdin when source is "-".

    Raises:
        TemplateNotFoundError: The path does not point at a file.
        InvalidTemplateError: The bytes are not UTF-8 (kind InvalidJson).
    """
    try:
        if source == STDIN_MARKER:
            return click.get_text_stream("stdin", encoding="utf-8").read()

        path = Path(source)
        if not path.is_file():
            raise TemplateNotFoundError(source)
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InvalidTemplateError(
            TemplateError(TemplateErrorKind.INVALID_JSON, f"Template is not valid UTF-8: {e}")
        ) from e


def load_template(source: str) -> Template:
    """
    Read and validate a template.

    Raises:
        TemplateNotFoundError: See read_template_text().
        InvalidTemplateError: The template failed validation.
    """
    parsed = parse_template(read_template_text(source))
    if parsed.is_err():
        raise InvalidTemplateError(parsed.error)
    return parsed.unwrap()


def load_graph(source: str) -> GraphData:
    """Load a template and build its (unpositioned) dependency graph."""
    return build_graph(load_template(source))
