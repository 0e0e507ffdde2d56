"""
Core type definitions for cfngraph.

Template models mirror CloudFormation's own section names through field
aliases. Graph models serialize with camelCase aliases, which is the data
contract consumed by rendering layers.
"""

from enum import StrEnum
from typing import Any, Dict, List, Set

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RefType(StrEnum):
    """How one resource refers to another."""
    REF = "Ref"
    GET_ATT = "GetAtt"
    DEPENDS_ON = "DependsOn"


# =============================================================================
# Template
# =============================================================================

class Resource(BaseModel):
    """A single entry of the Resources section."""
    type: str = Field(alias="Type")
    properties: Dict[str, Any] = Field(default_factory=dict, alias="Properties")
    depends_on: str | List[str] | None = Field(default=None, alias="DependsOn")
    condition: str | None = Field(default=None, alias="Condition")
    metadata: Any = Field(default=None, alias="Metadata")

    # DeletionPolicy, UpdatePolicy, CreationPolicy, ... are kept as-is
    model_config = ConfigDict(frozen=True, extra="allow")

    @property
    def dependencies(self) -> List[str]:
        """DependsOn normalized to a list."""
        if not self.depends_on:
            return []
        if isinstance(self.depends_on, str):
            return [self.depends_on]
        return list(self.depends_on)


class Template(BaseModel):
    """
    A structurally validated CloudFormation template.

    Only parse_template() should build one; it is frozen afterwards and
    never re-validated.
    """
    format_version: str | None = Field(default=None, alias="AWSTemplateFormatVersion")
    description: str | None = Field(default=None, alias="Description")
    metadata: Any = Field(default=None, alias="Metadata")
    parameters: Dict[str, Dict[str, Any]] = Field(default_factory=dict, alias="Parameters")
    rules: Any = Field(default=None, alias="Rules")
    mappings: Dict[str, Dict[str, Dict[str, Any]]] = Field(default_factory=dict, alias="Mappings")
    conditions: Dict[str, Any] = Field(default_factory=dict, alias="Conditions")
    transform: str | List[str] | None = Field(default=None, alias="Transform")
    resources: Dict[str, Resource] = Field(alias="Resources")
    outputs: Dict[str, Dict[str, Any]] = Field(default_factory=dict, alias="Outputs")

    model_config = ConfigDict(frozen=True)

    def resource_ids(self) -> List[str]:
        return list(self.resources)

    def get_resource(self, logical_id: str) -> Resource | None:
        return self.resources.get(logical_id)

    def resources_by_type(self, resource_type: str) -> Dict[str, Resource]:
        return {
            logical_id: resource
            for logical_id, resource in self.resources.items()
            if resource.type == resource_type
        }

    def resource_types(self) -> List[str]:
        """Unique resource types, sorted."""
        return sorted({resource.type for resource in self.resources.values()})

    def resource_dependencies(self, logical_id: str) -> List[str]:
        """Explicit DependsOn entries of a resource; empty for unknown ids."""
        resource = self.resources.get(logical_id)
        if resource is None:
            return []
        return resource.dependencies

    def parameter_names(self) -> List[str]:
        return list(self.parameters)

    def output_names(self) -> List[str]:
        return list(self.outputs)


# =============================================================================
# Graph
# =============================================================================

class _ContractModel(BaseModel):
    """Base for models that cross into the rendering layer."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Reference(BaseModel):
    """A reference found inside a resource, before it becomes an edge."""
    target_id: str
    ref_type: RefType
    attribute: str | None = None

    model_config = ConfigDict(frozen=True)


class Position(_ContractModel):
    x: float = 0.0
    y: float = 0.0


class GraphNode(_ContractModel):
    """One resource of the template."""
    id: str
    resource_type: str
    properties: Dict[str, Any] = Field(default_factory=dict)
    position: Position = Field(default_factory=Position)


class GraphEdge(_ContractModel):
    """
    A dependency between two resources.

    Direction runs from the referenced resource (source) to the resource
    holding the reference (target), so dependencies precede consumers.
    """
    id: str
    source: str
    target: str
    ref_type: RefType
    attribute: str | None = None

    model_config = ConfigDict(frozen=True)

    @staticmethod
    def make_id(source: str, ref_type: RefType, target: str, attribute: str | None = None) -> str:
        base = f"{source}-{ref_type.value}-{target}"
        return f"{base}-{attribute}" if attribute else base


class GraphData(_ContractModel):
    nodes: List[GraphNode] = Field(default_factory=list)
    edges: List[GraphEdge] = Field(default_factory=list)


class GraphMetrics(_ContractModel):
    total_resources: int
    total_dependencies: int
    max_depth: int
    resources_by_service: Dict[str, int] = Field(default_factory=dict)
    leaf_nodes: int
    root_nodes: int
    has_cycles: bool


class DependencyPaths(_ContractModel):
    """Transitive neighbourhood of a focus node (the node itself excluded)."""
    upstream: Set[str] = Field(default_factory=set)
    downstream: Set[str] = Field(default_factory=set)
    edge_ids: Set[str] = Field(default_factory=set)


class ResourceGroup(_ContractModel):
    service: str
    label: str
    node_ids: List[str] = Field(default_factory=list)
    color: str
