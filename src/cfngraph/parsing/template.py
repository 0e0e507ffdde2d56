"""
CloudFormation Template Parser.

Turns raw JSON text into a validated, frozen Template. Validation runs
section by section in a fixed order and stops at the first violation; the
failure comes back as Err(TemplateError), never as an exception.
"""

import json
import logging
import re
from typing import Any, Callable, List

from pydantic import ValidationError

from ..config import MAX_DESCRIPTION_LENGTH, MAX_NESTING_DEPTH, SUPPORTED_FORMAT_VERSION
from ..core.exceptions import TemplateError
from ..core.exceptions import TemplateErrorKind as Kind
from ..core.result import Err, Ok, Result
from ..core.types import Template

logger = logging.getLogger(__name__)

VALID_TEMPLATE_KEYS = (
    "AWSTemplateFormatVersion",
    "Description",
    "Metadata",
    "Parameters",
    "Rules",
    "Mappings",
    "Conditions",
    "Transform",
    "Resources",
    "Outputs",
)

LOGICAL_ID_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9]*$")

# A validator returns None when its section is acceptable
Validator = Callable[[Any], TemplateError | None]


def _fail(kind: Kind, message: str) -> TemplateError:
    return TemplateError(kind, message)


def _is_object(value: Any) -> bool:
    return isinstance(value, dict)


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


# =============================================================================
# Section validators
# =============================================================================

def validate_format_version(version: Any) -> TemplateError | None:
    if version is None:
        return None
    if version != SUPPORTED_FORMAT_VERSION:
        return _fail(
            Kind.UNSUPPORTED_FORMAT_VERSION,
            f'Invalid AWSTemplateFormatVersion: "{version}". '
            f'Only "{SUPPORTED_FORMAT_VERSION}" is supported.',
        )
    return None


def validate_description(description: Any) -> TemplateError | None:
    if description is None:
        return None
    if not isinstance(description, str):
        return _fail(
            Kind.INVALID_FIELD_TYPE,
            f"Description must be a string, got {_type_name(description)}.",
        )
    if len(description) > MAX_DESCRIPTION_LENGTH:
        return _fail(
            Kind.DESCRIPTION_TOO_LONG,
            f"Description exceeds maximum length of {MAX_DESCRIPTION_LENGTH} "
            f"characters (got {len(description)}).",
        )
    return None


def validate_resource(logical_id: str, resource: Any) -> TemplateError | None:
    """Validate one resource definition; the logical id is already checked."""
    if not _is_object(resource):
        return _fail(Kind.INVALID_FIELD_TYPE, f'Resource "{logical_id}" must be an object.')

    if "Type" not in resource:
        return _fail(
            Kind.MISSING_REQUIRED_FIELD,
            f'Resource "{logical_id}" is missing required "Type" property.',
        )

    resource_type = resource["Type"]
    if not isinstance(resource_type, str):
        return _fail(
            Kind.INVALID_FIELD_TYPE,
            f'Resource "{logical_id}" has invalid Type: must be a string.',
        )
    if not resource_type:
        return _fail(Kind.INVALID_FIELD_TYPE, f'Resource "{logical_id}" has empty Type.')

    depends_on = resource.get("DependsOn")
    if depends_on is not None and not (isinstance(depends_on, str) or _is_string_list(depends_on)):
        return _fail(
            Kind.INVALID_FIELD_TYPE,
            f'Resource "{logical_id}" has invalid DependsOn: '
            f"must be a string or array of strings.",
        )

    properties = resource.get("Properties")
    if properties is not None and not _is_object(properties):
        return _fail(
            Kind.INVALID_FIELD_TYPE,
            f'Resource "{logical_id}" has invalid Properties: must be an object.',
        )

    condition = resource.get("Condition")
    if condition is not None and not isinstance(condition, str):
        return _fail(
            Kind.INVALID_FIELD_TYPE,
            f'Resource "{logical_id}" has invalid Condition: must be a string.',
        )

    return None


def validate_resources(resources: Any) -> TemplateError | None:
    if resources is None:
        return _fail(
            Kind.MISSING_REQUIRED_FIELD,
            "Template is missing required 'Resources' section.",
        )
    if not _is_object(resources):
        return _fail(Kind.INVALID_FIELD_TYPE, "Resources section must be an object.")
    if not resources:
        return _fail(
            Kind.MISSING_REQUIRED_FIELD,
            "Resources section must contain at least one resource.",
        )

    for logical_id, resource in resources.items():
        if not LOGICAL_ID_PATTERN.match(logical_id):
            return _fail(
                Kind.INVALID_LOGICAL_ID,
                f'Invalid resource logical ID "{logical_id}": must start with a letter '
                f"and contain only alphanumeric characters.",
            )
        error = validate_resource(logical_id, resource)
        if error:
            return error

    return None


def validate_parameters(parameters: Any) -> TemplateError | None:
    if parameters is None:
        return None
    if not _is_object(parameters):
        return _fail(Kind.INVALID_FIELD_TYPE, "Parameters section must be an object.")

    for name, param in parameters.items():
        if not _is_object(param):
            return _fail(Kind.INVALID_FIELD_TYPE, f'Parameter "{name}" must be an object.')
        if "Type" not in param:
            return _fail(
                Kind.MISSING_REQUIRED_FIELD,
                f'Parameter "{name}" is missing required "Type" property.',
            )
        if not isinstance(param["Type"], str):
            return _fail(
                Kind.INVALID_FIELD_TYPE,
                f'Parameter "{name}" has invalid Type: must be a string.',
            )
    return None


def validate_outputs(outputs: Any) -> TemplateError | None:
    if outputs is None:
        return None
    if not _is_object(outputs):
        return _fail(Kind.INVALID_FIELD_TYPE, "Outputs section must be an object.")

    for name, output in outputs.items():
        if not _is_object(output):
            return _fail(Kind.INVALID_FIELD_TYPE, f'Output "{name}" must be an object.')
        if "Value" not in output:
            return _fail(
                Kind.MISSING_REQUIRED_FIELD,
                f'Output "{name}" is missing required "Value" property.',
            )
    return None


def validate_mappings(mappings: Any) -> TemplateError | None:
    if mappings is None:
        return None
    if not _is_object(mappings):
        return _fail(Kind.INVALID_FIELD_TYPE, "Mappings section must be an object.")

    for map_name, top_level in mappings.items():
        if not _is_object(top_level):
            return _fail(Kind.INVALID_FIELD_TYPE, f'Mapping "{map_name}" must be an object.')
        for top_key, second_level in top_level.items():
            if not _is_object(second_level):
                return _fail(
                    Kind.INVALID_FIELD_TYPE,
                    f'Mapping "{map_name}.{top_key}" must be an object.',
                )
    return None


def validate_conditions(conditions: Any) -> TemplateError | None:
    if conditions is None:
        return None
    if not _is_object(conditions):
        return _fail(Kind.INVALID_FIELD_TYPE, "Conditions section must be an object.")
    return None


def validate_transform(transform: Any) -> TemplateError | None:
    if transform is None:
        return None
    if not (isinstance(transform, str) or _is_string_list(transform)):
        return _fail(
            Kind.INVALID_FIELD_TYPE,
            "Transform must be a string or array of strings.",
        )
    return None


def validate_top_level_keys(document: dict) -> TemplateError | None:
    unknown_keys = [key for key in document if key not in VALID_TEMPLATE_KEYS]
    if unknown_keys:
        return _fail(
            Kind.UNKNOWN_SECTION,
            f"Unknown top-level keys in template: {', '.join(unknown_keys)}. "
            f"Valid keys are: {', '.join(VALID_TEMPLATE_KEYS)}.",
        )
    return None


def validate_document(document: Any) -> TemplateError | None:
    """Run every structural check in order and return the first failure."""
    if not _is_object(document):
        return _fail(Kind.INVALID_SHAPE, "Template must be a JSON object.")

    error = validate_top_level_keys(document)
    if error:
        return error

    sections: List[tuple[str, Validator]] = [
        ("AWSTemplateFormatVersion", validate_format_version),
        ("Description", validate_description),
        ("Resources", validate_resources),
        ("Parameters", validate_parameters),
        ("Outputs", validate_outputs),
        ("Mappings", validate_mappings),
        ("Conditions", validate_conditions),
        ("Transform", validate_transform),
    ]
    for key, validator in sections:
        error = validator(document.get(key))
        if error:
            return error

    return None


# =============================================================================
# Parser
# =============================================================================

def parse_template(raw_text: str) -> Result[Template, TemplateError]:
    """
    Parse a CloudFormation JSON template.

    Args:
        raw_text: The template text, already decoded.

    Returns:
        Ok(Template) on success, Err(TemplateError) describing the first
        structural violation otherwise.

    Example:
        >>> result = parse_template('{"Resources": {"B": {"Type": "AWS::S3::Bucket"}}}')
        >>> result.unwrap().resource_ids()
        ['B']
    """
    if not raw_text or not raw_text.strip():
        return Err(_fail(Kind.EMPTY_INPUT, "Input is empty or contains only whitespace."))

    try:
        document = json.loads(raw_text)
    except (json.JSONDecodeError, RecursionError) as e:
        return Err(_fail(Kind.INVALID_JSON, f"Invalid JSON: {e}"))

    error = validate_document(document) or validate_nesting(document)
    if error:
        logger.debug(f"Template rejected ({error.kind}): {error.message}")
        return Err(error)

    try:
        return Ok(Template.model_validate(_drop_nulls(document)))
    except ValidationError as e:
        return Err(_fail(Kind.INVALID_FIELD_TYPE, f"Invalid template: {e}"))


def nesting_depth(value: Any, limit: int = MAX_NESTING_DEPTH) -> int:
    """
    Depth of the deepest object or array in a JSON value.

    Scalars have depth 0. Counting stops as soon as the depth passes limit.
    """
    deepest = 0
    stack = [(value, 1)]

    while stack:
        node, depth = stack.pop()
        if isinstance(node, dict):
            children = node.values()
        elif isinstance(node, list):
            children = node
        else:
            continue

        deepest = max(deepest, depth)
        if deepest > limit:
            break
        stack.extend((child, depth + 1) for child in children)

    return deepest


def validate_nesting(document: dict) -> TemplateError | None:
    if nesting_depth(document) > MAX_NESTING_DEPTH:
        return _fail(
            Kind.INVALID_FIELD_TYPE,
            f"Template is nested more than {MAX_NESTING_DEPTH} levels deep.",
        )
    return None


def _drop_nulls(document: dict) -> dict:
    """JSON null in a section or resource field means the field is absent."""
    cleaned = {key: value for key, value in document.items() if value is not None}
    cleaned["Resources"] = {
        logical_id: {key: value for key, value in resource.items() if value is not None}
        for logical_id, resource in cleaned["Resources"].items()
    }
    return cleaned
