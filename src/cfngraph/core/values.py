"""
CloudFormation value trees as a tagged union.

Property values mix primitives, intrinsic-function calls, arrays and plain
objects arbitrarily. to_value() classifies raw JSON once so that consumers
dispatch on a closed set of node types instead of probing dict keys.
"""

from dataclasses import dataclass
from typing import Any, Tuple, Union

REF = "Ref"
GET_ATT = "Fn::GetAtt"
SUB = "Fn::Sub"


@dataclass(frozen=True)
class Scalar:
    """String, number, boolean or null."""
    value: Any


@dataclass(frozen=True)
class RefCall:
    """{"Ref": "LogicalId"}"""
    target: str


@dataclass(frozen=True)
class GetAttCall:
    """{"Fn::GetAtt": ["LogicalId", "Attr"]} or {"Fn::GetAtt": "LogicalId.Attr"}"""
    target: str
    attribute: str | None


@dataclass(frozen=True)
class SubCall:
    """{"Fn::Sub": "..."} or {"Fn::Sub": ["...", {variables}]}"""
    template: str
    variables: Tuple[Tuple[str, "CfnValue"], ...] | None = None

    @property
    def variable_names(self) -> frozenset:
        return frozenset(name for name, _ in self.variables or ())


@dataclass(frozen=True)
class ArrayValue:
    items: Tuple["CfnValue", ...]


@dataclass(frozen=True)
class ObjectValue:
    """A plain object, or an intrinsic without special handling (Fn::Join, Fn::If, ...)."""
    entries: Tuple[Tuple[str, "CfnValue"], ...]


CfnValue = Union[Scalar, RefCall, GetAttCall, SubCall, ArrayValue, ObjectValue]


def to_value(raw: Any) -> CfnValue:
    """Classify a raw JSON value into the CfnValue union."""
    if isinstance(raw, dict):
        return _classify_object(raw)
    if isinstance(raw, list):
        return ArrayValue(tuple(to_value(item) for item in raw))
    return Scalar(raw)


def _classify_object(raw: dict) -> CfnValue:
    if REF in raw and isinstance(raw[REF], str):
        return RefCall(raw[REF])

    if GET_ATT in raw:
        call = _parse_get_att(raw[GET_ATT])
        if call is not None:
            return call

    if SUB in raw:
        call = _parse_sub(raw[SUB])
        if call is not None:
            return call

    # Malformed intrinsics fall through to structural recursion
    return ObjectValue(tuple((key, to_value(value)) for key, value in raw.items()))


def _parse_get_att(arg: Any) -> GetAttCall | None:
    if isinstance(arg, str):
        logical_id, _, attribute = arg.partition(".")
        return GetAttCall(logical_id, attribute or None)

    if isinstance(arg, list) and len(arg) >= 2 and isinstance(arg[0], str):
        attribute = arg[1] if isinstance(arg[1], str) else None
        return GetAttCall(arg[0], attribute or None)

    return None


def _parse_sub(arg: Any) -> SubCall | None:
    if isinstance(arg, str):
        return SubCall(arg)

    if isinstance(arg, list) and arg and isinstance(arg[0], str):
        if len(arg) >= 2 and isinstance(arg[1], dict):
            variables = tuple((name, to_value(value)) for name, value in arg[1].items())
            return SubCall(arg[0], variables)
        return SubCall(arg[0])

    return None


CFN_VALUE_TYPES = (Scalar, RefCall, GetAttCall, SubCall, ArrayValue, ObjectValue)


def is_value(obj: Any) -> bool:
    """True when obj is already a CfnValue rather than raw JSON."""
    return isinstance(obj, CFN_VALUE_TYPES)
