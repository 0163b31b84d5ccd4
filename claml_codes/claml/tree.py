"""Code tree construction and root resolution."""

import logging

from claml_codes.claml.errors import (
    CircularReferenceError,
    DuplicateCodeError,
    SchemaViolationError,
    UnknownModifierReferenceError,
    UnresolvedChildReferenceError,
)
from claml_codes.models.code import Code, FlatCode, ModifiersMap, SubModifier

logger = logging.getLogger(__name__)


def _select_sub_modifiers(
    flat_code: FlatCode,
    modifier_code: str,
    allowed: list[str] | None,
    modifiers: ModifiersMap,
) -> list[SubModifier]:
    """Pick the registered submodifiers an attachment applies."""
    registered = modifiers.get(modifier_code)
    if registered is None:
        raise UnknownModifierReferenceError(flat_code.code, modifier_code)
    if allowed is None:
        return registered

    known = {sub_modifier.code for sub_modifier in registered}
    for sub_code in allowed:
        if sub_code not in known:
            raise UnknownModifierReferenceError(flat_code.code, modifier_code, sub_code)

    allowed_set = set(allowed)
    return [sub_modifier for sub_modifier in registered if sub_modifier.code in allowed_set]


def expand_modifiers(flat_code: FlatCode, modifiers: ModifiersMap) -> list[Code]:
    """Turn a record's modifier attachments into synthetic child codes.

    Args:
        flat_code: The record carrying the attachments.
        modifiers: Registry of submodifiers per modifier identifier.

    Returns:
        One leaf per applicable submodifier, in attachment then registry order.

    Raises:
        UnknownModifierReferenceError: If an attachment or allow-list entry is
            not in the registry.
    """
    synthetic: list[Code] = []
    for attachment in flat_code.modifiers:
        selected = _select_sub_modifiers(
            flat_code, attachment.code, attachment.sub_modifiers, modifiers
        )
        synthetic.extend(
            Code(
                code=f"{flat_code.code}{sub_modifier.code}",
                label=flat_code.label,
                modifier_label=sub_modifier.label,
                meta=flat_code.meta,
            )
            for sub_modifier in selected
        )
    return synthetic


class CodeTreeBuilder:
    """Builds the owned code tree from flat records in two phases.

    Phase one indexes every record by identifier. Phase two resolves each
    record depth-first, building its children before itself, so the result
    does not depend on the order or length of identifiers.
    """

    def __init__(self, flat_codes: list[FlatCode], modifiers: ModifiersMap):
        self.modifiers = modifiers
        self.records: dict[str, FlatCode] = {}
        for flat_code in flat_codes:
            if flat_code.code in self.records:
                raise DuplicateCodeError(flat_code.code)
            self.records[flat_code.code] = flat_code

        self.code_map: dict[str, Code] = {}
        self.codes: list[Code] = []
        self._built: dict[str, Code] = {}
        self._owners: dict[str, str] = {}
        self._path: list[str] = []

    def build(self) -> tuple[dict[str, Code], list[Code]]:
        """Resolve every record.

        Returns:
            Tuple of (identifier -> node map, all nodes in registration order).
        """
        for code_id in self.records:
            self._resolve(code_id)
        logger.debug(
            "Built %d codes from %d records", len(self.codes), len(self.records)
        )
        return self.code_map, self.codes

    def _register(self, code: Code) -> Code:
        if code.code in self.code_map:
            raise DuplicateCodeError(code.code)
        self.code_map[code.code] = code
        self.codes.append(code)
        return code

    def _resolve_child(self, parent_id: str, child_id: str) -> Code:
        if child_id in self._path:
            raise CircularReferenceError(parent_id, child_id, list(self._path))
        if child_id not in self.records:
            raise UnresolvedChildReferenceError(parent_id, child_id)

        owner = self._owners.get(child_id)
        if owner is not None:
            raise SchemaViolationError(
                f"Code {child_id!r} is listed as a child of both "
                f"{owner!r} and {parent_id!r}"
            )
        self._owners[child_id] = parent_id
        return self._resolve(child_id)

    def _resolve(self, code_id: str) -> Code:
        built = self._built.get(code_id)
        if built is not None:
            return built

        record = self.records[code_id]
        self._path.append(code_id)
        sub_codes = [
            self._resolve_child(code_id, child_id) for child_id in record.sub_codes
        ]
        self._path.pop()

        for synthetic in expand_modifiers(record, self.modifiers):
            sub_codes.append(self._register(synthetic))

        node = Code(
            code=record.code,
            label=record.label,
            meta=record.meta,
            sub_codes=sub_codes,
        )
        self._built[code_id] = node
        return self._register(node)


def build_code_tree(
    flat_codes: list[FlatCode], modifiers: ModifiersMap
) -> tuple[dict[str, Code], list[Code]]:
    """Build the code tree and lookup map from flat records.

    Args:
        flat_codes: Category records with unresolved child identifiers.
        modifiers: Submodifier registry, threaded through explicitly.

    Returns:
        Tuple of (identifier -> node map, all nodes, children before parents).

    Raises:
        DuplicateCodeError: If two nodes share an identifier.
        UnresolvedChildReferenceError: If a child identifier is unknown or
            part of a cycle.
        UnknownModifierReferenceError: If a modifier reference is unknown.
        SchemaViolationError: If a code is claimed by more than one parent.
    """
    return CodeTreeBuilder(flat_codes, modifiers).build()


def get_top_level_codes(codes: list[Code]) -> list[Code]:
    """Return the codes that are no other code's child.

    Membership is checked by object identity since distinct nodes may compare
    equal by value.
    """
    child_ids = {id(child) for code in codes for child in code.sub_codes}
    return [code for code in codes if id(code) not in child_ids]
