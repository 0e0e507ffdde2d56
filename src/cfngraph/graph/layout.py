"""
Graph Layout.

Layered placement for dependency graphs: dependencies sit in earlier layers
than their consumers, so with the default DOWN direction the graph reads
top to bottom from foundational resources to the ones built on them.

Ranking is done on the condensation of the graph (each strongly connected
component collapsed to one vertex), which keeps cyclic templates layable;
members of one cycle share a layer.
"""

import asyncio
import logging
from typing import Dict, List

import networkx as nx

from ..config import LayoutDirection, LayoutOptions
from ..core.exceptions import LayoutError
from ..core.types import GraphEdge, GraphNode, Position

logger = logging.getLogger(__name__)


def _build_digraph(nodes: List[GraphNode], edges: List[GraphEdge]) -> nx.DiGraph:
    graph = nx.DiGraph()
    graph.add_nodes_from(node.id for node in nodes)

    for edge in edges:
        # Edges to nodes outside this layout are ignored
        if edge.source in graph and edge.target in graph and edge.source != edge.target:
            graph.add_edge(edge.source, edge.target)

    return graph


def assign_ranks(graph: nx.DiGraph) -> Dict[str, int]:
    """
    Layer index per node.

    Every dependency ranks strictly below its consumer unless both belong
    to the same cycle.
    """
    condensed = nx.condensation(graph)
    component_of = condensed.graph["mapping"]

    component_rank: Dict[int, int] = {}
    for rank, generation in enumerate(nx.topological_generations(condensed)):
        for component in generation:
            component_rank[component] = rank

    return {node_id: component_rank[component_of[node_id]] for node_id in graph}


def order_layers(
    nodes: List[GraphNode],
    ranks: Dict[str, int],
    graph: nx.DiGraph,
) -> List[List[str]]:
    """
    Group nodes into layers and order each one.

    A layer starts in model order and is then sorted once by the mean slot
    of each node's already-placed predecessors. Nodes without placed
    predecessors keep their model-order slot as their key.
    """
    layer_count = max(ranks.values()) + 1
    layers: List[List[str]] = [[] for _ in range(layer_count)]
    for node in nodes:
        layers[ranks[node.id]].append(node.id)

    slots: Dict[str, int] = {}
    for layer in layers:
        keys: Dict[str, float] = {}
        for index, node_id in enumerate(layer):
            placed = [slots[pred] for pred in graph.predecessors(node_id) if pred in slots]
            keys[node_id] = sum(placed) / len(placed) if placed else float(index)

        layer.sort(key=lambda node_id: keys[node_id])
        for slot, node_id in enumerate(layer):
            slots[node_id] = slot

    return layers


def compute_layout(
    nodes: List[GraphNode],
    edges: List[GraphEdge],
    options: LayoutOptions | None = None,
) -> List[GraphNode]:
    """
    Position every node, in place.

    Args:
        nodes: Nodes to place. Their position is overwritten.
        edges: Dependency edges; only those between the given nodes count.
        options: Direction, node size and spacing.

    Returns:
        The same node objects, in the order given.

    Raises:
        LayoutError: The graph could not be ranked.
    """
    if not nodes:
        return []

    options = options or LayoutOptions()
    try:
        graph = _build_digraph(nodes, edges)
        ranks = assign_ranks(graph)
    except nx.NetworkXException as e:
        raise LayoutError(f"Layout failed: {e}") from e
    layers = order_layers(nodes, ranks, graph)

    if options.direction == LayoutDirection.RIGHT:
        layer_step = options.node_width + options.layer_spacing
        slot_step = options.node_height + options.node_spacing
    else:
        layer_step = options.node_height + options.layer_spacing
        slot_step = options.node_width + options.node_spacing

    widest = max(len(layer) for layer in layers)
    coordinates: Dict[str, tuple[float, float]] = {}

    for rank, layer in enumerate(layers):
        # Center each layer against the widest one
        offset = (widest - len(layer)) * slot_step / 2
        for slot, node_id in enumerate(layer):
            coordinates[node_id] = (rank * layer_step, offset + slot * slot_step)

    for node in nodes:
        primary, secondary = coordinates[node.id]
        if options.direction == LayoutDirection.RIGHT:
            node.position = Position(x=primary, y=secondary)
        else:
            node.position = Position(x=secondary, y=primary)

    logger.debug(f"Laid out {len(nodes)} nodes in {len(layers)} layers ({options.direction})")
    return nodes


async def layout(
    nodes: List[GraphNode],
    edges: List[GraphEdge],
    options: LayoutOptions | None = None,
) -> List[GraphNode]:
    """
    Run compute_layout off the event loop.

    An empty node list short-circuits without starting a thread. Single
    shot: a failure propagates as LayoutError and is not retried.
    """
    if not nodes:
        return []
    return await asyncio.to_thread(compute_layout, nodes, edges, options)
