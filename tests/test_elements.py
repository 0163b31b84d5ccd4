"""Tests for the typed ClaML element boundary."""

import pytest

from claml_codes.claml import SchemaViolationError, xml_to_dict
from claml_codes.claml.elements import (
    ClassElement,
    RubricElement,
    load_document,
)


class TestRubricElement:
    """Tests for rubric label extraction."""

    def test_label_with_attributes(self) -> None:
        rubric = RubricElement.model_validate(
            {"@kind": "preferred", "Label": {"@lang": "de", "#text": "Cholera"}}
        )
        assert rubric.kind == "preferred"
        assert rubric.label == "Cholera"

    def test_plain_string_label(self) -> None:
        rubric = RubricElement.model_validate({"Label": "Cholera"})
        assert rubric.kind is None
        assert rubric.label == "Cholera"

    def test_first_of_several_labels(self) -> None:
        """Test only the first Label of a rubric is used."""
        rubric = RubricElement.model_validate(
            {"Label": [{"@lang": "de", "#text": "Cholera"}, "Cholera (en)"]}
        )
        assert rubric.label == "Cholera"

    def test_label_without_text(self) -> None:
        rubric = RubricElement.model_validate({"Label": {"Reference": "A00"}})
        assert rubric.label is None


class TestClassElement:
    """Tests for cardinality normalization on Class elements."""

    def test_single_children_become_lists(self) -> None:
        element = ClassElement.model_validate(
            {
                "@code": "A00",
                "@kind": "category",
                "Rubric": {"@kind": "preferred", "Label": "Cholera"},
                "SubClass": {"@code": "A00.0"},
                "ModifiedBy": {"@code": "S01", "ValidModifierClass": {"@code": "0"}},
                "Meta": {"@name": "SexCode", "@value": "M"},
            }
        )
        assert [r.label for r in element.rubrics] == ["Cholera"]
        assert [s.code for s in element.sub_classes] == ["A00.0"]
        assert element.modified_by[0].code == "S01"
        assert [v.code for v in element.modified_by[0].valid_modifier_classes] == ["0"]
        assert element.meta[0].name == "SexCode"
        assert element.meta[0].value == "M"

    def test_absent_children_become_empty_lists(self) -> None:
        element = ClassElement.model_validate({"@code": "A00"})
        assert element.kind is None
        assert element.rubrics == []
        assert element.sub_classes == []
        assert element.modified_by == []
        assert element.meta == []


class TestLoadDocument:
    """Tests for load_document."""

    def test_sample_document(self, sample_claml_xml: str) -> None:
        """Test every Class and ModifierClass is read."""
        document = load_document(xml_to_dict(sample_claml_xml))
        assert len(document.modifier_classes) == 3
        assert [c.code for c in document.classes] == [
            "IX",
            "I30-I52",
            "I50",
            "I50.0",
            "I50.1",
            "R62",
            "I44",
        ]

    def test_single_class_document(self) -> None:
        """Test a document with one Class still yields a list."""
        document = load_document(
            xml_to_dict('<ClaML><Class code="A00" kind="category"/></ClaML>')
        )
        assert len(document.classes) == 1
        assert document.modifier_classes == []

    def test_empty_claml_root(self) -> None:
        document = load_document(xml_to_dict("<ClaML/>"))
        assert document.classes == []
        assert document.modifier_classes == []

    def test_wrong_root_raises(self) -> None:
        with pytest.raises(SchemaViolationError, match="ClaML root"):
            load_document(xml_to_dict("<Classification/>"))

    def test_missing_code_attribute_raises(self) -> None:
        """Test a Class without a code is a schema violation."""
        with pytest.raises(SchemaViolationError, match="Invalid ClaML document"):
            load_document(xml_to_dict('<ClaML><Class kind="category"/></ClaML>'))

    def test_missing_modifier_attribute_raises(self) -> None:
        with pytest.raises(SchemaViolationError):
            load_document(
                xml_to_dict('<ClaML><ModifierClass code="0"/></ClaML>')
            )
