"""Classification code data models."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from claml_codes.models.enums import Sex

# Serialized with camelCase keys (modifierLabel, subCodes, minAge, ...)
_MODEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CodeMeta(BaseModel):
    """Applicability restrictions decoded from a class's Meta pairs."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    applicable_for_ambulatory: bool = Field(
        default=True, description="Code may be used in ambulatory care"
    )
    applicable_for_stationary: bool = Field(
        default=True, description="Code may be used in inpatient care"
    )
    min_age: int | None = Field(
        default=None, ge=0, description="Lower age bound (None = unbounded)"
    )
    max_age: int | None = Field(
        default=None, ge=0, description="Upper age bound (None = unbounded)"
    )
    sex: Sex | None = Field(default=None, description="Sex restriction")


class Code(BaseModel):
    """A node of the final code tree.

    Children in ``sub_codes`` are owned exclusively by this node. Nodes are
    compared by identity when resolving roots, never by value.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    code: str = Field(..., description="Globally unique code identifier")
    label: str = Field(..., description="Display label")
    modifier_label: str | None = Field(
        default=None, description="Submodifier label for synthesized codes"
    )
    meta: CodeMeta = Field(default_factory=CodeMeta, description="Code metadata")
    sub_codes: list["Code"] = Field(
        default_factory=list, description="Direct children, in order"
    )

    @property
    def full_label(self) -> str:
        """Return the label followed by the modifier label, if any."""
        if self.modifier_label:
            return f"{self.label} {self.modifier_label}"
        return self.label

    @property
    def is_leaf(self) -> bool:
        """Check if this code has no children."""
        return not self.sub_codes


class SubModifier(BaseModel):
    """One value of a modifier axis."""

    model_config = _MODEL_CONFIG

    code: str = Field(..., description="Submodifier code appended to the parent")
    label: str = Field(..., description="Preferred label of the submodifier")


class ModifierAttachment(BaseModel):
    """A modifier attached to a category via ModifiedBy."""

    model_config = _MODEL_CONFIG

    code: str = Field(..., description="Modifier identifier")
    sub_modifiers: list[str] | None = Field(
        default=None,
        description="Allowed submodifier codes (None = all registered ones)",
    )


class FlatCode(BaseModel):
    """A category record before its children are resolved into nodes."""

    model_config = _MODEL_CONFIG

    code: str
    label: str
    sub_codes: list[str] = Field(
        default_factory=list, description="Child identifiers, resolved later"
    )
    modifiers: list[ModifierAttachment] = Field(default_factory=list)
    meta: CodeMeta = Field(default_factory=CodeMeta)


# Modifier identifier -> submodifiers in document order
ModifiersMap = dict[str, list[SubModifier]]


class ParseResult(BaseModel):
    """Output of a ClaML parse."""

    model_config = _MODEL_CONFIG

    codes: list[Code] = Field(
        default_factory=list, description="Every node, children before parents"
    )
    top_level_codes: list[Code] = Field(
        default_factory=list, description="Codes that are nobody's child"
    )
    code_map: dict[str, Code] = Field(
        default_factory=dict, description="Identifier -> node"
    )
