"""Typed view of the adapter output for the ClaML elements the parser reads.

Every repeatable element is normalized to a list here, so the parser never
has to check whether it got a single object or an array.
"""

from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from claml_codes.claml.errors import SchemaViolationError
from claml_codes.claml.xml_adapter import TEXT_KEY, ensure_list

ROOT_TAG = "ClaML"


def _label_text(value: Any) -> str | None:
    """Return the text of the first Label of a rubric."""
    labels = ensure_list(value)
    if not labels:
        return None
    first = labels[0]
    if isinstance(first, dict):
        return first.get(TEXT_KEY)
    return first


class RubricElement(BaseModel):
    """A Rubric; only its kind and the text of its first Label are kept."""

    kind: str | None = Field(default=None, alias="@kind")
    label: str | None = Field(default=None, alias="Label")

    @field_validator("label", mode="before")
    @classmethod
    def extract_label_text(cls, v: Any) -> str | None:
        """Reduce the Label structure to its text."""
        return _label_text(v)


class CodeReferenceElement(BaseModel):
    """An element whose only relevant content is a code attribute.

    Used for both SubClass and ValidModifierClass.
    """

    code: str = Field(..., alias="@code")


class MetaElement(BaseModel):
    """A name/value Meta pair."""

    name: str = Field(..., alias="@name")
    value: str | None = Field(default=None, alias="@value")


class ModifiedByElement(BaseModel):
    """A modifier attachment, optionally restricted to some submodifiers."""

    code: str = Field(..., alias="@code")
    valid_modifier_classes: list[CodeReferenceElement] = Field(
        default_factory=list, alias="ValidModifierClass"
    )

    @field_validator("valid_modifier_classes", mode="before")
    @classmethod
    def normalize_lists(cls, v: Any) -> list[Any]:
        return ensure_list(v)


class ModifierClassElement(BaseModel):
    """One submodifier value belonging to a modifier."""

    modifier: str = Field(..., alias="@modifier")
    code: str = Field(..., alias="@code")
    rubrics: list[RubricElement] = Field(default_factory=list, alias="Rubric")

    @field_validator("rubrics", mode="before")
    @classmethod
    def normalize_lists(cls, v: Any) -> list[Any]:
        return ensure_list(v)


class ClassElement(BaseModel):
    """A Class element of any kind."""

    code: str = Field(..., alias="@code")
    kind: str | None = Field(default=None, alias="@kind")
    rubrics: list[RubricElement] = Field(default_factory=list, alias="Rubric")
    sub_classes: list[CodeReferenceElement] = Field(
        default_factory=list, alias="SubClass"
    )
    modified_by: list[ModifiedByElement] = Field(
        default_factory=list, alias="ModifiedBy"
    )
    meta: list[MetaElement] = Field(default_factory=list, alias="Meta")

    @field_validator("rubrics", "sub_classes", "modified_by", "meta", mode="before")
    @classmethod
    def normalize_lists(cls, v: Any) -> list[Any]:
        return ensure_list(v)


class ClaMLDocument(BaseModel):
    """The parts of a ClaML root element used to build the code tree."""

    modifier_classes: list[ModifierClassElement] = Field(
        default_factory=list, alias="ModifierClass"
    )
    classes: list[ClassElement] = Field(default_factory=list, alias="Class")

    @field_validator("modifier_classes", "classes", mode="before")
    @classmethod
    def normalize_lists(cls, v: Any) -> list[Any]:
        return ensure_list(v)


def load_document(data: dict[str, Any]) -> ClaMLDocument:
    """Validate adapter output into a ClaMLDocument.

    Args:
        data: Output of :func:`claml_codes.claml.xml_adapter.xml_to_dict`.

    Returns:
        The typed document.

    Raises:
        SchemaViolationError: If the root is not ClaML or a required
            attribute is missing.
    """
    if ROOT_TAG not in data:
        found = ", ".join(data) or "nothing"
        raise SchemaViolationError(f"Expected a {ROOT_TAG} root element, found {found}")

    root = data[ROOT_TAG]
    if root is None or isinstance(root, str):
        return ClaMLDocument()

    try:
        return ClaMLDocument.model_validate(root)
    except ValidationError as e:
        raise SchemaViolationError(f"Invalid ClaML document: {e}") from e
