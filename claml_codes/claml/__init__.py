"""ClaML parsing into an owned code tree."""

from claml_codes.claml.errors import (
    CircularReferenceError,
    ClaMLError,
    ClaMLSyntaxError,
    DuplicateCodeError,
    SchemaViolationError,
    UnknownModifierReferenceError,
    UnresolvedChildReferenceError,
)
from claml_codes.claml.parser import (
    get_code_meta,
    parse_claml,
    parse_flat_codes,
    parse_modifiers,
)
from claml_codes.claml.tree import build_code_tree, get_top_level_codes
from claml_codes.claml.xml_adapter import ensure_list, xml_to_dict

__all__ = [
    # Entry point
    "parse_claml",
    # Stages
    "xml_to_dict",
    "ensure_list",
    "parse_modifiers",
    "parse_flat_codes",
    "get_code_meta",
    "build_code_tree",
    "get_top_level_codes",
    # Errors
    "ClaMLError",
    "SchemaViolationError",
    "ClaMLSyntaxError",
    "DuplicateCodeError",
    "UnresolvedChildReferenceError",
    "CircularReferenceError",
    "UnknownModifierReferenceError",
]
