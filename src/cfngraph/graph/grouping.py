"""
Resource Grouping.

Clusters nodes by AWS service so a renderer can draw one box per service.
"""

from typing import Dict, List

from ..config import GroupingConfig
from ..core.types import GraphNode, ResourceGroup
from .analytics import OTHER_SERVICE, extract_service_name

# Service group colors, after the AWS Architecture Icons palette
SERVICE_COLORS: Dict[str, str] = {
    # Compute
    "Lambda": "#ff9900",
    "EC2": "#ff9900",
    "ECS": "#ff9900",
    "EKS": "#ff9900",
    "Batch": "#ff9900",
    # Storage
    "S3": "#569a31",
    "EFS": "#569a31",
    "FSx": "#569a31",
    # Database
    "DynamoDB": "#4053d6",
    "RDS": "#4053d6",
    "Aurora": "#4053d6",
    "ElastiCache": "#4053d6",
    "Neptune": "#4053d6",
    "DocumentDB": "#4053d6",
    # Networking
    "VPC": "#8c4fff",
    "CloudFront": "#8c4fff",
    "Route53": "#8c4fff",
    "APIGateway": "#8c4fff",
    "ELB": "#8c4fff",
    "ElasticLoadBalancingV2": "#8c4fff",
    # Security
    "IAM": "#dd344c",
    "Cognito": "#dd344c",
    "SecretsManager": "#dd344c",
    "KMS": "#dd344c",
    # Application integration
    "SNS": "#e7157b",
    "SQS": "#e7157b",
    "EventBridge": "#e7157b",
    "StepFunctions": "#e7157b",
    # Analytics
    "Kinesis": "#8c4fff",
    "Athena": "#8c4fff",
    "Glue": "#8c4fff",
    # Developer tools
    "CodeBuild": "#4b612c",
    "CodeDeploy": "#4b612c",
    "CodePipeline": "#4b612c",
    # Management
    "CloudWatch": "#759c3e",
    "CloudFormation": "#759c3e",
    "Systems": "#759c3e",
    OTHER_SERVICE: "#687078",
}


def get_service_label(service: str, count: int) -> str:
    return f"{service} ({count})"


def get_service_color(service: str) -> str:
    return SERVICE_COLORS.get(service, SERVICE_COLORS[OTHER_SERVICE])


def group_by_service(
    nodes: List[GraphNode],
    config: GroupingConfig | None = None,
) -> List[ResourceGroup]:
    """
    Partition nodes by service and keep the partitions large enough to draw.

    Groups come back largest first; equal sizes keep the order in which
    their service first appeared among the nodes.

    Args:
        nodes: Graph nodes in model order.
        config: Defaults to grouping enabled with a minimum size of 2.
    """
    config = config or GroupingConfig()
    if not config.enabled:
        return []

    members: Dict[str, List[str]] = {}
    for node in nodes:
        members.setdefault(extract_service_name(node.resource_type), []).append(node.id)

    groups = [
        ResourceGroup(
            service=service,
            label=get_service_label(service, len(node_ids)),
            node_ids=node_ids,
            color=get_service_color(service),
        )
        for service, node_ids in members.items()
        if len(node_ids) >= config.min_group_size
    ]

    # sort() is stable, so ties keep first-seen order
    groups.sort(key=lambda group: len(group.node_ids), reverse=True)
    return groups


def get_node_group(node_id: str, groups: List[ResourceGroup]) -> ResourceGroup | None:
    """The group holding node_id, or None when it was left ungrouped."""
    return next((group for group in groups if node_id in group.node_ids), None)


def is_node_grouped(node_id: str, groups: List[ResourceGroup]) -> bool:
    return get_node_group(node_id, groups) is not None
