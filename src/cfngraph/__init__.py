"""
cfngraph - CloudFormation template dependency graphs.

Validates a CloudFormation JSON template, resolves the references between
its resources (Ref, Fn::GetAtt, Fn::Sub, DependsOn) into typed edges and
positions the resulting graph for rendering.

Key Components:
- parsing: Template validation and intrinsic reference resolution
- graph: Graph construction, analytics, grouping, layout and export
- pipeline: One-call processing and the background worker

Usage:
    from cfngraph import process_template

    result = process_template(open("stack.json").read())
    if result.is_ok():
        graph = result.unwrap()
"""

__version__ = "0.1.0"

from .core.exceptions import CfnGraphError, TemplateError, TemplateErrorKind
from .core.result import Err, Ok, Result
from .core.types import GraphData, GraphEdge, GraphNode, RefType, Template
from .pipeline import TemplateWorker, process_template

__all__ = [
    "__version__",
    "CfnGraphError",
    "TemplateError",
    "TemplateErrorKind",
    "Ok",
    "Err",
    "Result",
    "GraphData",
    "GraphEdge",
    "GraphNode",
    "RefType",
    "Template",
    "TemplateWorker",
    "process_template",
]
