"""Data models for classification codes."""

from claml_codes.models.code import (
    Code,
    CodeMeta,
    FlatCode,
    ModifierAttachment,
    ModifiersMap,
    ParseResult,
    SubModifier,
)
from claml_codes.models.enums import ClassKind, Sex

__all__ = [
    # Enums
    "ClassKind",
    "Sex",
    # Tree models
    "Code",
    "CodeMeta",
    # Staging models
    "FlatCode",
    "ModifierAttachment",
    "ModifiersMap",
    "SubModifier",
    # Results
    "ParseResult",
]
