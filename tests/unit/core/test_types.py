"""Unit tests for core models."""

import pytest
from pydantic import ValidationError

from cfngraph.core.exceptions import (
    CfnGraphError,
    InvalidTemplateError,
    NodeNotFoundError,
    TemplateError,
    TemplateErrorKind,
    WorkerTerminatedError,
)
from cfngraph.core.types import GraphEdge, GraphNode, RefType, Resource


class TestResource:
    def test_dependencies_normalized(self):
        assert Resource(Type="AWS::S3::Bucket").dependencies == []
        assert Resource(Type="AWS::S3::Bucket", DependsOn="A").dependencies == ["A"]
        assert Resource(Type="AWS::S3::Bucket", DependsOn=["A", "B"]).dependencies == ["A", "B"]

    def test_extra_attributes_kept(self):
        resource = Resource.model_validate({"Type": "AWS::S3::Bucket", "DeletionPolicy": "Retain"})
        assert resource.model_extra == {"DeletionPolicy": "Retain"}

    def test_frozen(self):
        resource = Resource(Type="AWS::S3::Bucket")
        with pytest.raises(ValidationError):
            resource.type = "AWS::SQS::Queue"


class TestGraphEdge:
    def test_make_id_without_attribute(self):
        assert GraphEdge.make_id("A", RefType.REF, "B") == "A-Ref-B"

    def test_make_id_with_attribute(self):
        assert GraphEdge.make_id("A", RefType.GET_ATT, "B", "Arn") == "A-GetAtt-B-Arn"

    def test_serializes_camel_case(self):
        edge = GraphEdge(id="A-Ref-B", source="A", target="B", ref_type=RefType.REF)
        dumped = edge.model_dump(by_alias=True, exclude_none=True, mode="json")
        assert dumped == {"id": "A-Ref-B", "source": "A", "target": "B", "refType": "Ref"}


class TestGraphNode:
    def test_position_defaults_to_origin(self):
        node = GraphNode(id="A", resource_type="AWS::S3::Bucket")
        assert (node.position.x, node.position.y) == (0, 0)
        assert "resourceType" in node.model_dump(by_alias=True)


class TestExceptions:
    def test_hierarchy(self):
        assert issubclass(NodeNotFoundError, CfnGraphError)
        assert issubclass(WorkerTerminatedError, CfnGraphError)

    def test_messages(self):
        assert str(NodeNotFoundError("Bucket")) == "Resource not found: Bucket"
        assert WorkerTerminatedError("req-3").request_id == "req-3"

    def test_invalid_template_error_carries_kind(self):
        error = InvalidTemplateError(TemplateError(TemplateErrorKind.INVALID_JSON, "Invalid JSON: x"))
        assert error.kind == TemplateErrorKind.INVALID_JSON
        assert str(error) == "Invalid JSON: x"

    def test_error_kind_values_are_names(self):
        assert TemplateErrorKind.MISSING_REQUIRED_FIELD == "MissingRequiredField"
