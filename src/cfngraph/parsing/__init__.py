"""
Parsing module for cfngraph.

- template: structural validation of raw JSON into a Template
- intrinsics: Ref / Fn::GetAtt / Fn::Sub reference extraction
"""

from .intrinsics import extract_sub_placeholders, resolve_references
from .template import parse_template

__all__ = ["parse_template", "resolve_references", "extract_sub_placeholders"]
