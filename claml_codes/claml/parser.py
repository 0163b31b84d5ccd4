"""ClaML parser: modifier registry, flat category records and metadata.

The entry point is :func:`parse_claml`, which runs the whole batch from XML
text to a :class:`~claml_codes.models.code.ParseResult`.
"""

import logging
import time

from claml_codes.claml.elements import (
    ClaMLDocument,
    MetaElement,
    RubricElement,
    load_document,
)
from claml_codes.claml.errors import SchemaViolationError
from claml_codes.claml.tree import build_code_tree, get_top_level_codes
from claml_codes.claml.xml_adapter import xml_to_dict
from claml_codes.models.code import (
    CodeMeta,
    FlatCode,
    ModifierAttachment,
    ModifiersMap,
    ParseResult,
    SubModifier,
)
from claml_codes.models.enums import ClassKind, Sex

logger = logging.getLogger(__name__)

PREFERRED_RUBRIC = "preferred"

# Meta keys
AMBULATORY_KEY = "Para295"
STATIONARY_KEY = "Para301"
AGE_LOW_KEY = "AgeLow"
AGE_HIGH_KEY = "AgeHigh"
SEX_KEY = "SexCode"

NOT_APPLICABLE = "V"
UNBOUNDED_AGE = "9999"
DAYS_MARKER = "t"  # ages given in days decode to one year
SEX_CODES = {"M": Sex.MALE, "F": Sex.FEMALE}


def get_rubric_label(rubrics: list[RubricElement], owner: str) -> str:
    """Select the display label among a class's rubrics.

    Args:
        rubrics: Rubrics of the element.
        owner: Code of the element, for error messages.

    Returns:
        The single rubric's label, or the preferred one when there are several.

    Raises:
        SchemaViolationError: If no usable label exists.
    """
    if not rubrics:
        raise SchemaViolationError(f"{owner!r} has no Rubric")

    if len(rubrics) == 1:
        rubric = rubrics[0]
    else:
        rubric = next((r for r in rubrics if r.kind == PREFERRED_RUBRIC), None)
        if rubric is None:
            raise SchemaViolationError(
                f"{owner!r} has {len(rubrics)} rubrics but none is preferred"
            )

    if not rubric.label:
        raise SchemaViolationError(f"{owner!r} has a rubric without label text")
    return rubric.label


def _get_meta_value(meta: list[MetaElement], name: str) -> str | None:
    return next((m.value for m in meta if m.name == name), None)


def decode_age(value: str | None) -> int | None:
    """Decode an AgeLow/AgeHigh value.

    The first character is a unit marker. ``"9999"`` or no value means
    unbounded; a ``t`` (days) marker always decodes to 1.

    Raises:
        SchemaViolationError: If the remainder is not a number.
    """
    if not value or value == UNBOUNDED_AGE:
        return None
    if value.startswith(DAYS_MARKER):
        return 1

    remainder = value[1:]
    if not (remainder.isascii() and remainder.isdigit()):
        raise SchemaViolationError(f"Invalid age value: {value!r}")
    return int(remainder)


def get_code_meta(meta: list[MetaElement]) -> CodeMeta:
    """Decode a class's Meta pairs into CodeMeta."""
    return CodeMeta(
        applicable_for_ambulatory=_get_meta_value(meta, AMBULATORY_KEY) != NOT_APPLICABLE,
        applicable_for_stationary=_get_meta_value(meta, STATIONARY_KEY) != NOT_APPLICABLE,
        min_age=decode_age(_get_meta_value(meta, AGE_LOW_KEY)),
        max_age=decode_age(_get_meta_value(meta, AGE_HIGH_KEY)),
        sex=SEX_CODES.get(_get_meta_value(meta, SEX_KEY)),
    )


def parse_modifiers(document: ClaMLDocument) -> ModifiersMap:
    """Group every ModifierClass under its modifier identifier."""
    modifiers: ModifiersMap = {}
    for modifier_class in document.modifier_classes:
        label = get_rubric_label(
            modifier_class.rubrics,
            f"{modifier_class.modifier}/{modifier_class.code}",
        )
        modifiers.setdefault(modifier_class.modifier, []).append(
            SubModifier(code=modifier_class.code, label=label)
        )
    return modifiers


def parse_flat_codes(document: ClaMLDocument) -> list[FlatCode]:
    """Extract a FlatCode for every category class, in document order."""
    flat_codes: list[FlatCode] = []
    for element in document.classes:
        if element.kind != ClassKind.CATEGORY.value:
            continue

        modifiers = [
            ModifierAttachment(
                code=modified_by.code,
                sub_modifiers=[v.code for v in modified_by.valid_modifier_classes]
                or None,
            )
            for modified_by in element.modified_by
        ]
        flat_codes.append(
            FlatCode(
                code=element.code,
                label=get_rubric_label(element.rubrics, element.code),
                sub_codes=[sub_class.code for sub_class in element.sub_classes],
                modifiers=modifiers,
                meta=get_code_meta(element.meta),
            )
        )
    return flat_codes


def parse_claml(source: str | bytes) -> ParseResult:
    """Parse a ClaML document into a code tree.

    Args:
        source: Complete ClaML XML text.

    Returns:
        ParseResult with all codes, the root codes and the identifier map.

    Raises:
        ClaMLError: If the document is malformed or inconsistent. No partial
            result is returned.
    """
    start = time.perf_counter()

    document = load_document(xml_to_dict(source))
    modifiers = parse_modifiers(document)
    flat_codes = parse_flat_codes(document)
    logger.debug(
        "Read %d modifiers and %d category classes",
        len(modifiers),
        len(flat_codes),
    )

    code_map, codes = build_code_tree(flat_codes, modifiers)
    top_level_codes = get_top_level_codes(codes)

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "Parsed %d codes (%d top-level) in %.0fms",
        len(codes),
        len(top_level_codes),
        elapsed_ms,
    )
    return ParseResult(codes=codes, top_level_codes=top_level_codes, code_map=code_map)
