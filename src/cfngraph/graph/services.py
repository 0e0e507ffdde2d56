"""
AWS Service Registry.

Display metadata (name, brand colors, category, short abbreviation) for the
services that appear in CloudFormation resource types. Presentation only:
nothing in graph construction or analytics consults it.
"""

from enum import StrEnum
from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ServiceCategory(StrEnum):
    COMPUTE = "compute"
    STORAGE = "storage"
    DATABASE = "database"
    NETWORKING = "networking"
    SECURITY = "security"
    INTEGRATION = "integration"
    MANAGEMENT = "management"
    ANALYTICS = "analytics"
    OTHER = "other"


class ServiceInfo(BaseModel):
    name: str
    color: str
    border_color: str = Field(alias="borderColor")
    category: ServiceCategory
    abbreviation: str

    model_config = ConfigDict(frozen=True, populate_by_name=True)


# (main, border) per AWS Architecture Icons color family
PALETTE: Dict[str, Tuple[str, str]] = {
    "orange": ("#FF9900", "#CC7A00"),
    "green": ("#569A31", "#3D6D23"),
    "blue": ("#3B48CC", "#2D37A0"),
    "red": ("#DD344C", "#A82639"),
    "purple": ("#8C4FFF", "#6B3CC7"),
    "pink": ("#E7157B", "#B8115F"),
    "management": ("#E63B5F", "#B82D4A"),
    "gray": ("#687078", "#4A5157"),
}

C = ServiceCategory

# service key -> (display name, color family, category, abbreviation)
_DEFINITIONS: Dict[str, Tuple[str, str, ServiceCategory, str]] = {
    # Compute
    "EC2": ("EC2", "orange", C.COMPUTE, "EC2"),
    "Lambda": ("Lambda", "orange", C.COMPUTE, "LMB"),
    "ECS": ("ECS", "orange", C.COMPUTE, "ECS"),
    "EKS": ("EKS", "orange", C.COMPUTE, "EKS"),
    "AutoScaling": ("Auto Scaling", "orange", C.COMPUTE, "ASG"),
    "Batch": ("Batch", "orange", C.COMPUTE, "BAT"),
    "ElasticBeanstalk": ("Elastic Beanstalk", "orange", C.COMPUTE, "EB"),
    # Storage
    "S3": ("S3", "green", C.STORAGE, "S3"),
    "EFS": ("EFS", "green", C.STORAGE, "EFS"),
    "EBS": ("EBS", "green", C.STORAGE, "EBS"),
    "Glacier": ("S3 Glacier", "green", C.STORAGE, "GLC"),
    "Backup": ("Backup", "green", C.STORAGE, "BKP"),
    # Database
    "DynamoDB": ("DynamoDB", "blue", C.DATABASE, "DDB"),
    "RDS": ("RDS", "blue", C.DATABASE, "RDS"),
    "Aurora": ("Aurora", "blue", C.DATABASE, "AUR"),
    "ElastiCache": ("ElastiCache", "blue", C.DATABASE, "EC"),
    "Redshift": ("Redshift", "blue", C.DATABASE, "RS"),
    "Neptune": ("Neptune", "blue", C.DATABASE, "NEP"),
    "DocumentDB": ("DocumentDB", "blue", C.DATABASE, "DOC"),
    # Security and identity
    "IAM": ("IAM", "red", C.SECURITY, "IAM"),
    "Cognito": ("Cognito", "red", C.SECURITY, "COG"),
    "SecretsManager": ("Secrets Manager", "red", C.SECURITY, "SM"),
    "KMS": ("KMS", "red", C.SECURITY, "KMS"),
    "WAF": ("WAF", "red", C.SECURITY, "WAF"),
    "WAFv2": ("WAF", "red", C.SECURITY, "WAF"),
    "Shield": ("Shield", "red", C.SECURITY, "SHD"),
    "ACM": ("ACM", "red", C.SECURITY, "ACM"),
    "CertificateManager": ("ACM", "red", C.SECURITY, "ACM"),
    # Networking
    "VPC": ("VPC", "purple", C.NETWORKING, "VPC"),
    "CloudFront": ("CloudFront", "purple", C.NETWORKING, "CF"),
    "Route53": ("Route 53", "purple", C.NETWORKING, "R53"),
    "ElasticLoadBalancing": ("ELB", "purple", C.NETWORKING, "ELB"),
    "ElasticLoadBalancingV2": ("ELB", "purple", C.NETWORKING, "ELB"),
    "DirectConnect": ("Direct Connect", "purple", C.NETWORKING, "DX"),
    "GlobalAccelerator": ("Global Accelerator", "purple", C.NETWORKING, "GA"),
    # Application integration
    "APIGateway": ("API Gateway", "pink", C.INTEGRATION, "API"),
    "ApiGateway": ("API Gateway", "pink", C.INTEGRATION, "API"),
    "ApiGatewayV2": ("API Gateway", "pink", C.INTEGRATION, "API"),
    "SNS": ("SNS", "pink", C.INTEGRATION, "SNS"),
    "SQS": ("SQS", "pink", C.INTEGRATION, "SQS"),
    "StepFunctions": ("Step Functions", "pink", C.INTEGRATION, "SFN"),
    "EventBridge": ("EventBridge", "pink", C.INTEGRATION, "EB"),
    "Events": ("EventBridge", "pink", C.INTEGRATION, "EVT"),
    "AppSync": ("AppSync", "pink", C.INTEGRATION, "AS"),
    # Management and governance
    "CloudFormation": ("CloudFormation", "management", C.MANAGEMENT, "CFN"),
    "CloudWatch": ("CloudWatch", "management", C.MANAGEMENT, "CW"),
    "Logs": ("CloudWatch Logs", "management", C.MANAGEMENT, "LOG"),
    "CloudTrail": ("CloudTrail", "management", C.MANAGEMENT, "CT"),
    "Config": ("Config", "management", C.MANAGEMENT, "CFG"),
    "SSM": ("Systems Manager", "management", C.MANAGEMENT, "SSM"),
    "ServiceCatalog": ("Service Catalog", "management", C.MANAGEMENT, "SC"),
    # Analytics
    "Kinesis": ("Kinesis", "purple", C.ANALYTICS, "KIN"),
    "Athena": ("Athena", "purple", C.ANALYTICS, "ATH"),
    "Glue": ("Glue", "purple", C.ANALYTICS, "GLU"),
    "EMR": ("EMR", "purple", C.ANALYTICS, "EMR"),
    # Custom resources
    "Custom": ("Custom Resource", "gray", C.OTHER, "CST"),
}


def _info(name: str, family: str, category: ServiceCategory, abbreviation: str) -> ServiceInfo:
    color, border_color = PALETTE[family]
    return ServiceInfo(
        name=name,
        color=color,
        border_color=border_color,
        category=category,
        abbreviation=abbreviation,
    )


SERVICE_DEFINITIONS: Dict[str, ServiceInfo] = {
    key: _info(*definition) for key, definition in _DEFINITIONS.items()
}

DEFAULT_SERVICE_INFO = _info("Unknown", "gray", C.OTHER, "???")


def service_key(resource_type: str) -> str:
    """
    Registry key for a resource type.

    Unlike grouping, custom resources get their own key ("Custom") and
    anything else that is not AWS::* maps to "Unknown".
    """
    parts = resource_type.split("::")
    if len(parts) >= 2 and parts[0] == "AWS":
        return parts[1]
    if resource_type.startswith("Custom::"):
        return "Custom"
    return "Unknown"


def extract_resource_name(resource_type: str) -> str:
    """
    Resource part of a type name.

    Example:
        >>> extract_resource_name("AWS::EC2::SecurityGroup")
        'SecurityGroup'
        >>> extract_resource_name("Custom::Seeder")
        'Seeder'
    """
    parts = resource_type.split("::")
    if len(parts) >= 3:
        return "::".join(parts[2:])
    if len(parts) == 2:
        return parts[1]
    return resource_type


def get_service_info(resource_type: str) -> ServiceInfo:
    """Registry entry for a resource type, or a gray default named after the service."""
    key = service_key(resource_type)
    known = SERVICE_DEFINITIONS.get(key)
    if known is not None:
        return known
    return DEFAULT_SERVICE_INFO.model_copy(
        update={"name": key, "abbreviation": key[:3].upper()}
    )
