"""
Graph export.

to_dict()/to_json() produce the camelCase contract read by renderers;
to_dot() produces Graphviz text with one cluster per resource group.
"""

import json
from typing import Any, Dict, List

from ..core.types import (
    DependencyPaths,
    GraphData,
    GraphMetrics,
    RefType,
    ResourceGroup,
)
from .services import extract_resource_name, get_service_info


def paths_to_dict(paths: DependencyPaths) -> Dict[str, List[str]]:
    """Sets become sorted lists so output is stable across runs."""
    return {
        "upstream": sorted(paths.upstream),
        "downstream": sorted(paths.downstream),
        "edgeIds": sorted(paths.edge_ids),
    }


def to_dict(
    graph: GraphData,
    metrics: GraphMetrics | None = None,
    groups: List[ResourceGroup] | None = None,
    paths: DependencyPaths | None = None,
) -> Dict[str, Any]:
    """
    Serialize a graph and whichever derived views were computed.

    Edges omit attribute when they have none.
    """
    data: Dict[str, Any] = {
        "nodes": [node.model_dump(by_alias=True, mode="json") for node in graph.nodes],
        "edges": [
            edge.model_dump(by_alias=True, exclude_none=True, mode="json")
            for edge in graph.edges
        ],
    }
    if metrics is not None:
        data["metrics"] = metrics.model_dump(by_alias=True, mode="json")
    if groups is not None:
        data["groups"] = [group.model_dump(by_alias=True, mode="json") for group in groups]
    if paths is not None:
        data["dependencyPaths"] = paths_to_dict(paths)
    return data


def to_json(
    graph: GraphData,
    metrics: GraphMetrics | None = None,
    groups: List[ResourceGroup] | None = None,
    paths: DependencyPaths | None = None,
    indent: int | None = 2,
) -> str:
    return json.dumps(to_dict(graph, metrics, groups, paths), indent=indent)


def _quote(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def to_dot(graph: GraphData, groups: List[ResourceGroup] | None = None) -> str:
    """Export as DOT for Graphviz, dependencies pointing at their consumers."""
    lines = ["digraph cloudformation {"]
    lines.append("  rankdir=TB;")
    lines.append('  node [shape=box, style="rounded,filled", fontcolor=white];')
    lines.append("")

    for index, group in enumerate(groups or []):
        lines.append(f"  subgraph cluster_{index} {{")
        lines.append(f'    label="{_quote(group.label)}";')
        lines.append(f'    color="{group.color}";')
        for node_id in group.node_ids:
            lines.append(f'    "{_quote(node_id)}";')
        lines.append("  }")
        lines.append("")

    for node in graph.nodes:
        info = get_service_info(node.resource_type)
        resource_name = _quote(extract_resource_name(node.resource_type))
        # \n inside a DOT string is a line break
        label = f"{_quote(node.id)}\\n{info.abbreviation} {resource_name}"
        lines.append(
            f'  "{_quote(node.id)}" [label="{label}", '
            f'fillcolor="{info.color}", color="{info.border_color}"];'
        )

    lines.append("")

    for edge in graph.edges:
        style = "dashed" if edge.ref_type == RefType.DEPENDS_ON else "solid"
        attrs = f"style={style}"
        if edge.attribute:
            attrs += f', label="{_quote(edge.attribute)}"'
        lines.append(f'  "{_quote(edge.source)}" -> "{_quote(edge.target)}" [{attrs}];')

    lines.append("}")
    return "\n".join(lines)
