"""
Graph Builder.

Turns a validated Template into nodes (one per resource) and dependency
edges. References that point outside Resources (parameters, pseudo
parameters, typos) and self-references are dropped without error.
"""

import logging
from typing import Dict, List

from ..core.types import (
    GraphData,
    GraphEdge,
    GraphNode,
    Reference,
    RefType,
    Resource,
    Template,
)
from ..parsing.intrinsics import resolve_references

logger = logging.getLogger(__name__)


def create_node(logical_id: str, resource: Resource) -> GraphNode:
    return GraphNode(
        id=logical_id,
        resource_type=resource.type,
        properties=resource.properties,
    )


def create_edge(consumer_id: str, reference: Reference) -> GraphEdge:
    """Edge from the referenced resource to the one holding the reference."""
    return GraphEdge(
        id=GraphEdge.make_id(
            reference.target_id, reference.ref_type, consumer_id, reference.attribute
        ),
        source=reference.target_id,
        target=consumer_id,
        ref_type=reference.ref_type,
        attribute=reference.attribute,
    )


def collect_references(resource: Resource) -> List[Reference]:
    """Property references first, then explicit DependsOn entries."""
    references = resolve_references(resource.properties) if resource.properties else []
    references.extend(
        Reference(target_id=dependency, ref_type=RefType.DEPENDS_ON)
        for dependency in resource.dependencies
    )
    return references


def build_graph(template: Template) -> GraphData:
    """
    Build the dependency graph of a template.

    Nodes follow the order of the Resources section. Edges follow resource
    order, then discovery order within a resource; a reference whose edge
    id was already produced is skipped.
    """
    resources: Dict[str, Resource] = template.resources
    nodes: List[GraphNode] = []
    edges: List[GraphEdge] = []
    seen_edges: set[str] = set()

    for logical_id, resource in resources.items():
        nodes.append(create_node(logical_id, resource))

        for reference in collect_references(resource):
            if reference.target_id not in resources:
                logger.debug(f"{logical_id}: ignoring reference to non-resource {reference.target_id}")
                continue
            if reference.target_id == logical_id:
                logger.debug(f"{logical_id}: ignoring self-reference")
                continue

            edge = create_edge(logical_id, reference)
            if edge.id in seen_edges:
                continue
            seen_edges.add(edge.id)
            edges.append(edge)

    return GraphData(nodes=nodes, edges=edges)
