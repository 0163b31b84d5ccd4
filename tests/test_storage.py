"""Tests for ClaML loading and code tree JSON export."""

import json
from pathlib import Path

import pytest

from claml_codes.claml import SchemaViolationError
from claml_codes.storage import (
    export_codes_json,
    load_claml_file,
    load_codes_json,
    load_top_level_codes,
)


class TestLoadClamlFile:
    """Tests for load_claml_file."""

    def test_load_sample(self, sample_claml_file: Path) -> None:
        result = load_claml_file(sample_claml_file)
        assert len(result.codes) == 10

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_claml_file(tmp_path / "missing.xml")


class TestExportCodesJson:
    """Tests for the JSON export."""

    def test_writes_camel_case_tree(self, sample_result, tmp_path: Path) -> None:
        path = tmp_path / "out" / "codes.json"
        export_codes_json(sample_result.top_level_codes, path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert [c["code"] for c in data] == ["I50", "R62", "I44"]
        acute = data[0]["subCodes"][0]
        assert acute["code"] == "I50.0"
        assert acute["meta"]["minAge"] == 18
        assert acute["subCodes"][0]["modifierLabel"] == "mild"

    def test_pretty_output_is_indented(self, sample_result, tmp_path: Path) -> None:
        path = tmp_path / "codes.json"
        export_codes_json(sample_result.top_level_codes, path, pretty=True)
        assert "\n  " in path.read_text(encoding="utf-8")

    def test_non_ascii_is_kept(self, tmp_path: Path) -> None:
        from claml_codes.models import Code

        path = tmp_path / "codes.json"
        export_codes_json([Code(code="S02", label="Schädelfraktur")], path)
        assert "Schädelfraktur" in path.read_text(encoding="utf-8")


class TestLoadCodesJson:
    """Tests for reading an exported tree."""

    def test_reload_exported_tree(self, sample_result, tmp_path: Path) -> None:
        path = tmp_path / "codes.json"
        export_codes_json(sample_result.top_level_codes, path)

        codes = load_codes_json(path)

        assert codes == sample_result.top_level_codes

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "codes.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SchemaViolationError, match="Invalid JSON"):
            load_codes_json(path)

    def test_invalid_tree_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "codes.json"
        path.write_text(json.dumps([{"code": "A00"}]), encoding="utf-8")
        with pytest.raises(SchemaViolationError, match="Invalid code tree"):
            load_codes_json(path)


class TestLoadTopLevelCodes:
    """Tests for source type detection."""

    def test_from_xml(self, sample_claml_file: Path) -> None:
        codes = load_top_level_codes(sample_claml_file)
        assert [c.code for c in codes] == ["I50", "R62", "I44"]

    def test_from_json(self, sample_result, tmp_path: Path) -> None:
        path = tmp_path / "codes.JSON"
        export_codes_json(sample_result.top_level_codes, path)
        codes = load_top_level_codes(path)
        assert [c.code for c in codes] == ["I50", "R62", "I44"]
