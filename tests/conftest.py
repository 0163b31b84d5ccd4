"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from claml_codes.claml import parse_claml
from claml_codes.models import ParseResult

SAMPLE_CLAML_XML = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE ClaML SYSTEM "ClaML.dtd">
<ClaML version="2.0.0">
  <Title name="ICD-10-GM" version="2025">Test classification</Title>
  <Modifier code="S01_4">
    <SubClass code="0"/>
    <SubClass code="1"/>
    <SubClass code="2"/>
  </Modifier>
  <ModifierClass modifier="S01_4" code="0">
    <SuperClass code="S01_4"/>
    <Rubric kind="preferred"><Label xml:lang="en">mild</Label></Rubric>
  </ModifierClass>
  <ModifierClass modifier="S01_4" code="1">
    <SuperClass code="S01_4"/>
    <Rubric kind="preferred"><Label xml:lang="en">severe</Label></Rubric>
    <Rubric kind="note"><Label xml:lang="en">Requires hospital admission</Label></Rubric>
  </ModifierClass>
  <ModifierClass modifier="S01_4" code="2">
    <SuperClass code="S01_4"/>
    <Rubric kind="preferred"><Label xml:lang="en">unspecified</Label></Rubric>
  </ModifierClass>
  <Class code="IX" kind="chapter">
    <SubClass code="I30-I52"/>
    <Rubric kind="preferred"><Label xml:lang="en">Diseases of the circulatory system</Label></Rubric>
  </Class>
  <Class code="I30-I52" kind="block">
    <SuperClass code="IX"/>
    <SubClass code="I50"/>
    <Rubric kind="preferred"><Label xml:lang="en">Other forms of heart disease</Label></Rubric>
  </Class>
  <Class code="I50" kind="category">
    <Meta name="Para295" value="P"/>
    <Meta name="Para301" value="P"/>
    <Meta name="AgeLow" value="9999"/>
    <Meta name="AgeHigh" value="9999"/>
    <Meta name="SexCode" value="9"/>
    <SuperClass code="I30-I52"/>
    <SubClass code="I50.0"/>
    <SubClass code="I50.1"/>
    <Rubric kind="preferred"><Label xml:lang="en">Heart failure</Label></Rubric>
    <Rubric kind="exclusion"><Label xml:lang="en">following surgery</Label></Rubric>
  </Class>
  <Class code="I50.0" kind="category">
    <Meta name="Para295" value="P"/>
    <Meta name="Para301" value="P"/>
    <Meta name="AgeLow" value="j018"/>
    <Meta name="AgeHigh" value="j124"/>
    <Meta name="SexCode" value="M"/>
    <SuperClass code="I50"/>
    <ModifiedBy code="S01_4" all="false">
      <ValidModifierClass code="0"/>
      <ValidModifierClass code="1"/>
    </ModifiedBy>
    <Rubric kind="preferred"><Label xml:lang="en">Acute heart failure</Label></Rubric>
  </Class>
  <Class code="I50.1" kind="category">
    <Meta name="Para295" value="V"/>
    <Meta name="Para301" value="P"/>
    <Meta name="AgeLow" value="t000"/>
    <Meta name="AgeHigh" value="9999"/>
    <Meta name="SexCode" value="F"/>
    <SuperClass code="I50"/>
    <ModifiedBy code="S01_4"/>
    <Rubric kind="preferred"><Label xml:lang="en">Subacute heart disease</Label></Rubric>
  </Class>
  <Class code="R62" kind="category">
    <Rubric kind="inclusion"><Label xml:lang="en">Failure to thrive</Label></Rubric>
  </Class>
  <Class code="I44" kind="category">
    <Meta name="Para301" value="V"/>
    <Rubric kind="preferred"><Label xml:lang="en">Heart block</Label></Rubric>
  </Class>
</ClaML>
"""


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def sample_claml_xml() -> str:
    """Return a small ClaML document with modifiers."""
    return SAMPLE_CLAML_XML


@pytest.fixture
def sample_claml_file(tmp_path: Path, sample_claml_xml: str) -> Path:
    """Write the sample document to a file."""
    path = tmp_path / "sample.xml"
    path.write_text(sample_claml_xml, encoding="utf-8")
    return path


@pytest.fixture
def sample_result(sample_claml_xml: str) -> ParseResult:
    """Return the parsed sample document."""
    return parse_claml(sample_claml_xml)
