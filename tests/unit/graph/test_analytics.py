"""Unit tests for graph analytics."""

from cfngraph.core.types import GraphEdge, GraphNode, RefType
from cfngraph.graph.analytics import (
    AdjacencyMaps,
    compute_metrics,
    detect_cycles,
    extract_service_name,
    find_dependency_paths,
)


def node(node_id, resource_type="AWS::S3::Bucket"):
    return GraphNode(id=node_id, resource_type=resource_type)


def edge(source, target):
    """source is the dependency, target the consumer."""
    return GraphEdge(
        id=GraphEdge.make_id(source, RefType.REF, target),
        source=source,
        target=target,
        ref_type=RefType.REF,
    )


def chain(*ids):
    """chain("D", "C", "B", "A"): A depends on B, B on C, C on D."""
    return [edge(source, target) for source, target in zip(ids, ids[1:])]


class TestServiceName:
    def test_aws_types(self):
        assert extract_service_name("AWS::Lambda::Function") == "Lambda"
        assert extract_service_name("AWS::S3::Bucket") == "S3"

    def test_everything_else_is_other(self):
        assert extract_service_name("Custom::Seeder") == "Other"
        assert extract_service_name("Alexa::ASK::Skill") == "Other"
        assert extract_service_name("AWS") == "Other"


class TestAdjacency:
    def test_both_directions(self):
        maps = AdjacencyMaps.from_edges([edge("B", "A"), edge("C", "A")])
        assert maps.dependencies_of("A") == ["B", "C"]
        assert maps.dependents_of("B") == ["A"]
        assert maps.dependencies_of("Z") == []


class TestMetrics:
    def test_empty_graph(self):
        metrics = compute_metrics([], [])
        assert metrics.total_resources == 0
        assert metrics.max_depth == 0
        assert metrics.has_cycles is False

    def test_isolated_node(self):
        metrics = compute_metrics([node("A")], [])
        assert metrics.max_depth == 0
        assert metrics.leaf_nodes == 1
        assert metrics.root_nodes == 1

    def test_linear_chain_depth(self):
        nodes = [node(i) for i in "ABCD"]
        metrics = compute_metrics(nodes, chain("D", "C", "B", "A"))
        assert metrics.max_depth == 3
        assert metrics.total_dependencies == 3
        assert metrics.leaf_nodes == 1  # D has no dependencies
        assert metrics.root_nodes == 1  # nothing depends on A
        assert metrics.has_cycles is False

    def test_depth_takes_longest_branch(self):
        nodes = [node(i) for i in "ABCDE"]
        edges = chain("E", "D", "C", "A") + [edge("B", "A")]
        assert compute_metrics(nodes, edges).max_depth == 3

    def test_three_node_ring(self):
        nodes = [node(i) for i in "ABC"]
        metrics = compute_metrics(nodes, chain("A", "B", "C", "A"))
        assert metrics.has_cycles is True

    def test_diamond_is_not_a_cycle(self):
        nodes = [node(i) for i in "ABCD"]
        edges = [edge("D", "B"), edge("D", "C"), edge("B", "A"), edge("C", "A")]
        metrics = compute_metrics(nodes, edges)
        assert metrics.has_cycles is False
        assert metrics.max_depth == 2

    def test_cycle_away_from_first_node(self):
        nodes = [node(i) for i in "XABC"]
        edges = [edge("A", "X")] + chain("A", "B", "C", "A")
        assert compute_metrics(nodes, edges).has_cycles is True

    def test_long_chain_does_not_recurse(self):
        ids = [f"N{i}" for i in range(5000)]
        maps = AdjacencyMaps.from_edges(chain(*ids))
        # Start from the far end so the walk runs the whole chain deep
        nodes = [node(i) for i in reversed(ids)]
        assert detect_cycles(nodes, maps) is False

    def test_resources_by_service_insertion_ordered(self):
        nodes = [
            node("F1", "AWS::Lambda::Function"),
            node("B1", "AWS::S3::Bucket"),
            node("F2", "AWS::Lambda::Function"),
            node("X", "Custom::Thing"),
        ]
        metrics = compute_metrics(nodes, [])
        assert list(metrics.resources_by_service.items()) == [("Lambda", 2), ("S3", 1), ("Other", 1)]

    def test_accepts_prebuilt_adjacency(self):
        edges = chain("B", "A")
        maps = AdjacencyMaps.from_edges(edges)
        assert compute_metrics([node("A"), node("B")], edges, adjacency=maps).max_depth == 1


class TestDependencyPaths:
    def test_upstream_and_downstream(self):
        # A depends on B, B on C, C on D
        edges = [edge("B", "A"), edge("C", "B"), edge("D", "C")]
        paths = find_dependency_paths("B", edges)
        assert paths.upstream == {"C", "D"}
        assert paths.downstream == {"A"}
        assert paths.edge_ids == {e.id for e in edges}

    def test_edges_outside_path_excluded(self):
        edges = [edge("B", "A"), edge("X", "Y")]
        paths = find_dependency_paths("A", edges)
        assert paths.upstream == {"B"}
        assert paths.edge_ids == {"B-Ref-A"}

    def test_sibling_edges_between_path_nodes_included(self):
        # B and C are both upstream of A and C also feeds B
        edges = [edge("B", "A"), edge("C", "A"), edge("C", "B")]
        paths = find_dependency_paths("A", edges)
        assert paths.edge_ids == {"B-Ref-A", "C-Ref-A", "C-Ref-B"}

    def test_focus_excluded_in_cycle(self):
        paths = find_dependency_paths("A", chain("A", "B", "C", "A"))
        assert "A" not in paths.upstream
        assert "A" not in paths.downstream
        assert paths.upstream == {"B", "C"}

    def test_unknown_node(self):
        paths = find_dependency_paths("Ghost", chain("B", "A"))
        assert paths.upstream == set()
        assert paths.downstream == set()
        assert paths.edge_ids == set()
