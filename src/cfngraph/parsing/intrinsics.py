"""
Intrinsic Reference Resolver.

Walks a CloudFormation value tree and reports every resource it points at
through Ref, Fn::GetAtt or Fn::Sub. Other intrinsics (Fn::Join, Fn::If,
Fn::Select, ...) are not reference sources themselves, but their arguments
are walked like any other object, so nested references are still found.
"""

import re
from typing import Any, Iterator, List

from ..core.types import Reference, RefType
from ..core.values import (
    ArrayValue,
    CfnValue,
    GetAttCall,
    ObjectValue,
    RefCall,
    Scalar,
    SubCall,
    is_value,
    to_value,
)

AWS_PSEUDO_PARAMETERS = frozenset({
    "AWS::AccountId",
    "AWS::NotificationARNs",
    "AWS::NoValue",
    "AWS::Partition",
    "AWS::Region",
    "AWS::StackId",
    "AWS::StackName",
    "AWS::URLSuffix",
})

# ${Name} or ${Name.Attr}; ${!Literal} is an escape and never matches
SUB_PLACEHOLDER = re.compile(r"\$\{([^!}][^}]*)\}")


def is_pseudo_parameter(name: str) -> bool:
    return name in AWS_PSEUDO_PARAMETERS or name.startswith("AWS::")


def extract_sub_placeholders(template_string: str) -> List[Reference]:
    """
    Find resource references in an Fn::Sub template string.

    ${Name} becomes a Ref, ${Name.Attr} a GetAtt split on the first dot.
    Escaped placeholders and pseudo-parameters are skipped.
    """
    references: List[Reference] = []

    for match in SUB_PLACEHOLDER.finditer(template_string):
        expression = match.group(1)
        if is_pseudo_parameter(expression):
            continue

        logical_id, dot, attribute = expression.partition(".")
        if dot:
            references.append(Reference(
                target_id=logical_id,
                ref_type=RefType.GET_ATT,
                attribute=attribute or None,
            ))
        else:
            references.append(Reference(target_id=expression, ref_type=RefType.REF))

    return references


def _walk(value: CfnValue) -> Iterator[Reference]:
    if isinstance(value, Scalar):
        return

    if isinstance(value, RefCall):
        yield Reference(target_id=value.target, ref_type=RefType.REF)

    elif isinstance(value, GetAttCall):
        yield Reference(
            target_id=value.target,
            ref_type=RefType.GET_ATT,
            attribute=value.attribute,
        )

    elif isinstance(value, SubCall):
        local_names = value.variable_names
        for reference in extract_sub_placeholders(value.template):
            # Placeholders bound by the substitution map are local variables
            if reference.target_id not in local_names:
                yield reference
        for _, bound in value.variables or ():
            yield from _walk(bound)

    elif isinstance(value, ArrayValue):
        for item in value.items:
            yield from _walk(item)

    elif isinstance(value, ObjectValue):
        for _, child in value.entries:
            yield from _walk(child)

    else:
        raise TypeError(f"Unexpected value node: {type(value).__name__}")


def resolve_references(tree: Any) -> List[Reference]:
    """
    Collect references from a property tree in discovery order.

    Args:
        tree: Raw JSON (as found in a resource's Properties) or a CfnValue
            already produced by to_value().

    Returns:
        Every reference found, duplicates included. Targets are not checked
        against the template; that is the graph builder's job.
    """
    value = tree if is_value(tree) else to_value(tree)
    return list(_walk(value))
