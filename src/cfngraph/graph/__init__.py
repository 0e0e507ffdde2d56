"""
Graph module for cfngraph.

Builds the dependency graph of a Template and derives everything a
renderer needs from it: metrics, dependency paths, service groups and
node positions.
"""

from .analytics import compute_metrics, extract_service_name, find_dependency_paths
from .builder import build_graph
from .grouping import group_by_service
from .layout import compute_layout, layout

__all__ = [
    "build_graph",
    "compute_metrics",
    "extract_service_name",
    "find_dependency_paths",
    "group_by_service",
    "compute_layout",
    "layout",
]
