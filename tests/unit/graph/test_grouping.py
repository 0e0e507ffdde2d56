"""Unit tests for resource grouping."""

import pytest

from cfngraph.config import GroupingConfig
from cfngraph.core.types import GraphNode
from cfngraph.graph.grouping import (
    get_node_group,
    get_service_color,
    get_service_label,
    group_by_service,
    is_node_grouped,
)


def nodes_of(*pairs):
    return [GraphNode(id=node_id, resource_type=resource_type) for node_id, resource_type in pairs]


@pytest.fixture
def mixed_nodes():
    return nodes_of(
        ("Fn1", "AWS::Lambda::Function"),
        ("Bucket1", "AWS::S3::Bucket"),
        ("Table", "AWS::DynamoDB::Table"),
        ("Fn2", "AWS::Lambda::Function"),
        ("Bucket2", "AWS::S3::Bucket"),
    )


class TestGroupByService:
    def test_default_min_size(self, mixed_nodes):
        groups = group_by_service(mixed_nodes)
        assert [(g.service, g.node_ids) for g in groups] == [
            ("Lambda", ["Fn1", "Fn2"]),
            ("S3", ["Bucket1", "Bucket2"]),
        ]
        assert groups[0].label == "Lambda (2)"
        assert groups[0].color == "#ff9900"
        assert groups[1].color == "#569a31"

    def test_disabled(self, mixed_nodes):
        assert group_by_service(mixed_nodes, GroupingConfig(enabled=False)) == []

    def test_min_size_one_includes_singletons(self, mixed_nodes):
        groups = group_by_service(mixed_nodes, GroupingConfig(min_group_size=1))
        assert [g.service for g in groups] == ["Lambda", "S3", "DynamoDB"]

    def test_sorted_by_size_descending(self):
        nodes = nodes_of(
            ("Q1", "AWS::SQS::Queue"),
            ("Fn1", "AWS::Lambda::Function"),
            ("Fn2", "AWS::Lambda::Function"),
            ("Fn3", "AWS::Lambda::Function"),
            ("Q2", "AWS::SQS::Queue"),
        )
        groups = group_by_service(nodes)
        assert [g.label for g in groups] == ["Lambda (3)", "SQS (2)"]

    def test_non_aws_types_grouped_as_other(self):
        nodes = nodes_of(("A", "Custom::One"), ("B", "Custom::Two"))
        groups = group_by_service(nodes)
        assert groups[0].service == "Other"
        assert groups[0].color == "#687078"

    def test_empty(self):
        assert group_by_service([]) == []


class TestHelpers:
    def test_label(self):
        assert get_service_label("S3", 4) == "S3 (4)"

    def test_color_fallback(self):
        assert get_service_color("IAM") == "#dd344c"
        assert get_service_color("Braket") == "#687078"

    def test_membership(self, mixed_nodes):
        groups = group_by_service(mixed_nodes)
        assert get_node_group("Fn2", groups).service == "Lambda"
        assert get_node_group("Table", groups) is None
        assert is_node_grouped("Bucket1", groups)
        assert not is_node_grouped("Table", groups)
