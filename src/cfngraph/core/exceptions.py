"""
Error types for cfngraph.

Input-validation failures are values (TemplateError) carried in an Err.
Everything else that can go wrong is an exception rooted at CfnGraphError.
"""

from dataclasses import dataclass
from enum import StrEnum


class TemplateErrorKind(StrEnum):
    """Categories of template validation failure."""
    EMPTY_INPUT = "EmptyInput"
    INVALID_JSON = "InvalidJson"
    INVALID_SHAPE = "InvalidShape"
    UNKNOWN_SECTION = "UnknownSection"
    MISSING_REQUIRED_FIELD = "MissingRequiredField"
    INVALID_FIELD_TYPE = "InvalidFieldType"
    INVALID_LOGICAL_ID = "InvalidLogicalId"
    UNSUPPORTED_FORMAT_VERSION = "UnsupportedFormatVersion"
    DESCRIPTION_TOO_LONG = "DescriptionTooLong"


@dataclass(frozen=True)
class TemplateError:
    """A single, human-readable template validation failure."""
    kind: TemplateErrorKind
    message: str

    def __str__(self) -> str:
        return self.message


class CfnGraphError(Exception):
    """Base class for all cfngraph exceptions."""


class LayoutError(CfnGraphError):
    """The layout algorithm could not position the graph."""


class WorkerTerminatedError(CfnGraphError):
    """A background request was in flight when its worker shut down."""

    def __init__(self, request_id: str):
        self.request_id = request_id
        super().__init__(f"Worker terminated before request {request_id} completed")


class NodeNotFoundError(CfnGraphError):
    """A resource id was requested that is not in the graph."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Resource not found: {node_id}")


class TemplateNotFoundError(CfnGraphError):
    """The template file given on the command line does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Template file not found: {path}")


class ConfigError(CfnGraphError):
    """The settings file exists but cannot be used."""


class InvalidTemplateError(CfnGraphError):
    """Raised where a caller needs the parser's Err as an exception (the CLI)."""

    def __init__(self, error: TemplateError):
        self.error = error
        super().__init__(error.message)

    @property
    def kind(self) -> TemplateErrorKind:
        return self.error.kind
