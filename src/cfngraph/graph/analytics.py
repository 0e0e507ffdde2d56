"""
Graph Analytics.

Structural metrics over a built graph and dependency-path extraction for a
focus resource. Everything here works from the edge list alone, so it runs
equally on a freshly built graph or on one loaded back from JSON.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

from ..core.types import DependencyPaths, GraphEdge, GraphMetrics, GraphNode

logger = logging.getLogger(__name__)

OTHER_SERVICE = "Other"


def extract_service_name(resource_type: str) -> str:
    """
    Second segment of an AWS resource type.

    Example:
        >>> extract_service_name("AWS::Lambda::Function")
        'Lambda'
        >>> extract_service_name("Custom::Thing")
        'Other'
    """
    parts = resource_type.split("::")
    if len(parts) >= 2 and parts[0] == "AWS":
        return parts[1]
    return OTHER_SERVICE


@dataclass
class AdjacencyMaps:
    """
    Both directions of the edge list, built once.

    dependencies[x] holds what x depends on (edge sources pointing at x);
    dependents[x] holds what depends on x (edge targets leaving x).
    Neighbour sets are dicts so iteration follows edge order.
    """
    dependencies: Dict[str, Dict[str, None]] = field(default_factory=dict)
    dependents: Dict[str, Dict[str, None]] = field(default_factory=dict)

    @classmethod
    def from_edges(cls, edges: Iterable[GraphEdge]) -> "AdjacencyMaps":
        maps = cls()
        for edge in edges:
            maps.dependencies.setdefault(edge.target, {})[edge.source] = None
            maps.dependents.setdefault(edge.source, {})[edge.target] = None
        return maps

    def dependencies_of(self, node_id: str) -> List[str]:
        return list(self.dependencies.get(node_id, ()))

    def dependents_of(self, node_id: str) -> List[str]:
        return list(self.dependents.get(node_id, ()))


# =============================================================================
# Metrics
# =============================================================================

def calculate_max_depth(nodes: List[GraphNode], adjacency: AdjacencyMaps) -> int:
    """
    Longest dependency chain length, by repeated relaxation.

    Bounded to len(nodes) rounds, so a cyclic graph terminates with an
    approximate value.
    """
    if not nodes:
        return 0

    depths: Dict[str, int] = {node.id: 0 for node in nodes}
    changed = True
    rounds = 0

    while changed and rounds < len(nodes):
        changed = False
        rounds += 1

        for node in nodes:
            deps = adjacency.dependencies.get(node.id)
            if not deps:
                continue
            new_depth = 1 + max(depths.get(dep, 0) for dep in deps)
            if new_depth > depths[node.id]:
                depths[node.id] = new_depth
                changed = True

    return max(depths.values())


def detect_cycles(nodes: List[GraphNode], adjacency: AdjacencyMaps) -> bool:
    """DFS along dependencies; a neighbour still on the stack is a back edge."""
    visited: Set[str] = set()
    on_stack: Set[str] = set()

    for node in nodes:
        if node.id in visited:
            continue

        visited.add(node.id)
        on_stack.add(node.id)
        stack = [(node.id, iter(adjacency.dependencies_of(node.id)))]

        while stack:
            current, neighbours = stack[-1]
            advanced = False

            for neighbour in neighbours:
                if neighbour in on_stack:
                    logger.debug(f"Cycle detected through {current} -> {neighbour}")
                    return True
                if neighbour not in visited:
                    visited.add(neighbour)
                    on_stack.add(neighbour)
                    stack.append((neighbour, iter(adjacency.dependencies_of(neighbour))))
                    advanced = True
                    break

            if not advanced:
                stack.pop()
                on_stack.discard(current)

    return False


def compute_metrics(
    nodes: List[GraphNode],
    edges: List[GraphEdge],
    adjacency: AdjacencyMaps | None = None,
) -> GraphMetrics:
    """
    Summary statistics for a graph.

    Leaf nodes have no dependencies, root nodes have no dependents; an
    isolated node counts as both. max_depth is only meaningful when
    has_cycles is False.
    """
    adjacency = adjacency or AdjacencyMaps.from_edges(edges)

    resources_by_service: Dict[str, int] = {}
    for node in nodes:
        service = extract_service_name(node.resource_type)
        resources_by_service[service] = resources_by_service.get(service, 0) + 1

    leaf_nodes = sum(1 for node in nodes if not adjacency.dependencies.get(node.id))
    root_nodes = sum(1 for node in nodes if not adjacency.dependents.get(node.id))

    return GraphMetrics(
        total_resources=len(nodes),
        total_dependencies=len(edges),
        max_depth=calculate_max_depth(nodes, adjacency),
        resources_by_service=resources_by_service,
        leaf_nodes=leaf_nodes,
        root_nodes=root_nodes,
        has_cycles=detect_cycles(nodes, adjacency),
    )


# =============================================================================
# Dependency paths
# =============================================================================

def find_reachable(start: str, neighbours: Dict[str, Dict[str, None]]) -> Set[str]:
    """Every node reachable from start, start itself excluded."""
    reachable: Set[str] = set()
    visited: Set[str] = set()
    stack = [start]

    while stack:
        current = stack.pop()
        if current in visited:
            continue
        visited.add(current)

        for neighbour in neighbours.get(current, ()):
            if neighbour not in visited:
                reachable.add(neighbour)
                stack.append(neighbour)

    reachable.discard(start)
    return reachable


def find_dependency_paths(
    node_id: str,
    edges: List[GraphEdge],
    adjacency: AdjacencyMaps | None = None,
) -> DependencyPaths:
    """
    Upstream dependencies, downstream dependents and the edges between them.

    Args:
        node_id: The focus resource. An id that appears in no edge yields
            empty sets.
        edges: All edges of the graph.
        adjacency: Maps built from the same edges, when the caller has them.
    """
    adjacency = adjacency or AdjacencyMaps.from_edges(edges)

    upstream = find_reachable(node_id, adjacency.dependencies)
    downstream = find_reachable(node_id, adjacency.dependents)

    path_nodes = {node_id} | upstream | downstream
    edge_ids = {
        edge.id
        for edge in edges
        if edge.source in path_nodes and edge.target in path_nodes
    }

    return DependencyPaths(upstream=upstream, downstream=downstream, edge_ids=edge_ids)
