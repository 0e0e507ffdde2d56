"""Unit tests for CLI utilities."""

import json
import logging

import click
import pytest
from click.testing import CliRunner
from rich.logging import RichHandler

from cfngraph.cli.renderers import JsonRenderer
from cfngraph.cli.utils import (
    configure_logging,
    exit_with_error,
    load_graph,
    load_template,
    read_template_text,
)
from cfngraph.core.exceptions import (
    InvalidTemplateError,
    NodeNotFoundError,
    TemplateErrorKind,
    TemplateNotFoundError,
)

TEMPLATE = {"Resources": {"Bucket": {"Type": "AWS::S3::Bucket"}}}


class TestTemplateLoading:
    def test_read_from_file(self, tmp_path):
        path = tmp_path / "stack.json"
        path.write_text(json.dumps(TEMPLATE))
        assert json.loads(read_template_text(str(path))) == TEMPLATE

    def test_missing_file(self, tmp_path):
        with pytest.raises(TemplateNotFoundError, match="missing.json"):
            read_template_text(str(tmp_path / "missing.json"))

    def test_directory_is_not_a_template(self, tmp_path):
        with pytest.raises(TemplateNotFoundError):
            read_template_text(str(tmp_path))

    def test_invalid_template_raises(self, tmp_path):
        path = tmp_path / "stack.json"
        path.write_text('{"Resources": {}}')
        with pytest.raises(InvalidTemplateError) as excinfo:
            load_template(str(path))
        assert excinfo.value.kind == TemplateErrorKind.MISSING_REQUIRED_FIELD

    def test_load_graph(self, tmp_path):
        path = tmp_path / "stack.json"
        path.write_text(json.dumps(TEMPLATE))
        graph = load_graph(str(path))
        assert [n.id for n in graph.nodes] == ["Bucket"]

    def test_read_from_stdin(self):
        @click.command()
        def show():
            click.echo(read_template_text("-").upper())

        result = CliRunner().invoke(show, input="stdin text")
        assert result.output.strip() == "STDIN TEXT"

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "stack.json"
        path.write_bytes(b"\xff")
        with pytest.raises(InvalidTemplateError) as excinfo:
            read_template_text(str(path))
        assert excinfo.value.kind == TemplateErrorKind.INVALID_JSON


class TestErrorReporting:
    def test_json_envelope(self):
        @click.command()
        def fail():
            exit_with_error(NodeNotFoundError("Ghost"), JsonRenderer("paths"))

        result = CliRunner().invoke(fail)
        assert result.exit_code == 1
        envelope = json.loads(result.output)
        assert envelope["meta"] == {"status": "error", "command": "paths"}
        assert envelope["error"] == {"type": "NodeNotFoundError", "message": "Resource not found: Ghost"}

    def test_text_mode(self):
        @click.command()
        def fail():
            exit_with_error(NodeNotFoundError("Ghost"))

        result = CliRunner().invoke(fail)
        assert result.exit_code == 1
        assert "Resource not found: Ghost" in result.output


class TestConfigureLogging:
    def test_levels(self):
        package_logger = logging.getLogger("cfngraph")
        configure_logging(verbose=True)
        assert package_logger.level == logging.DEBUG
        configure_logging(verbose=False)
        assert package_logger.level == logging.WARNING

    def test_single_handler(self):
        configure_logging(verbose=False)
        configure_logging(verbose=False)
        handlers = [h for h in logging.getLogger("cfngraph").handlers if isinstance(h, RichHandler)]
        assert len(handlers) == 1
