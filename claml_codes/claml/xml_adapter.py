"""Generic XML to nested-dict adapter.

Conversion convention:

* attributes become keys prefixed with ``@`` (namespaced attributes use their
  local name, so ``xml:lang`` becomes ``@lang``);
* direct text content is stored under ``#text`` with whitespace collapsed;
* child elements become keys named after their tag, holding a single value
  when the tag occurs once and a list when it occurs several times;
* an element with neither attributes nor children collapses to its text, or
  ``None`` when it has none.
"""

import logging
from typing import Any

from lxml import etree

from claml_codes.claml.errors import ClaMLSyntaxError

logger = logging.getLogger(__name__)

ATTRIBUTE_PREFIX = "@"
TEXT_KEY = "#text"


def _make_parser(encoding: str | None = None) -> etree.XMLParser:
    """Create a parser that never touches the network or expands entities."""
    return etree.XMLParser(
        encoding=encoding,
        resolve_entities=False,
        no_network=True,
        load_dtd=False,
        remove_comments=True,
        remove_pis=True,
        huge_tree=True,
    )


def _local_name(name: str) -> str:
    return etree.QName(name).localname


def ensure_list(value: Any) -> list[Any]:
    """Normalize a field of ambiguous cardinality to a list.

    Args:
        value: ``None``, a single value, or a list.

    Returns:
        ``[]`` for ``None``, the list itself for lists, else ``[value]``.
    """
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def element_to_value(element: etree._Element) -> dict[str, Any] | str | None:
    """Convert one element (and its subtree) using the module convention."""
    children = [child for child in element if isinstance(child.tag, str)]
    text_parts = [element.text or ""] + [child.tail or "" for child in children]
    text = " ".join("".join(text_parts).split())

    if not element.attrib and not children:
        return text or None

    value: dict[str, Any] = {
        ATTRIBUTE_PREFIX + _local_name(key): attr_value
        for key, attr_value in element.attrib.items()
    }
    for child in children:
        key = _local_name(child.tag)
        child_value = element_to_value(child)
        if key not in value:
            value[key] = child_value
        elif isinstance(value[key], list):
            value[key].append(child_value)
        else:
            value[key] = [value[key], child_value]

    if text:
        value[TEXT_KEY] = text
    return value


def xml_to_dict(source: str | bytes) -> dict[str, Any]:
    """Parse a complete XML document into a nested dict.

    Args:
        source: XML text. ``str`` input is treated as already decoded and any
            encoding declaration is ignored; ``bytes`` honour the declaration.

    Returns:
        A one-key dict mapping the root tag to its converted value.

    Raises:
        ClaMLSyntaxError: If the source is not well-formed XML.
    """
    if isinstance(source, str):
        data = source.encode("utf-8")
        parser = _make_parser("utf-8")
    else:
        data = source
        parser = _make_parser()

    try:
        root = etree.fromstring(data, parser=parser)
    except etree.XMLSyntaxError as e:
        logger.error("Failed to parse XML document: %s", e)
        raise ClaMLSyntaxError(f"Malformed XML: {e}") from e

    return {_local_name(root.tag): element_to_value(root)}
