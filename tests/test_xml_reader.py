"""Tests for reading Doxygen XML into compound definitions."""

from pathlib import Path

import pytest

from doxygen2docusaurus.elements import DocAnchor, DocImage, DocPara, DocRefText, RefText
from doxygen2docusaurus.models import MemberDef, MemberRefDef
from doxygen2docusaurus.xml_reader import DoxygenXmlReader, parse_doxygen_xml_folder

CLASS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<doxygen version="1.9.8">
  <compounddef id="classns_1_1_widget" kind="class" language="C++" prot="public">
    <compoundname>ns::Widget</compoundname>
    <basecompoundref refid="classns_1_1_base" prot="public" virt="virtual">ns::Base</basecompoundref>
    <includes local="no">widget.h</includes>
    <sectiondef kind="public-func">
      <memberdef kind="function" id="classns_1_1_widget_1a01" prot="public" static="yes" const="no">
        <type>int</type>
        <definition>static int ns::Widget::size</definition>
        <argsstring>(const <ref refid="classns_1_1_base" kindref="compound">Base</ref> &amp;b)</argsstring>
        <name>size</name>
        <qualifiedname>ns::Widget::size</qualifiedname>
        <param>
          <type>const <ref refid="classns_1_1_base" kindref="compound">Base</ref> &amp;</type>
          <declname>b</declname>
        </param>
        <briefdescription><para>Returns the size.</para></briefdescription>
        <detaileddescription></detaileddescription>
        <location file="include/widget.h" line="12" column="5" bodyfile="src/widget.cpp" bodystart="3" bodyend="-1"/>
      </memberdef>
      <member refid="classns_1_1_base_1a02" kind="function"><name>base_only</name></member>
    </sectiondef>
    <briefdescription><para>A <ref refid="classns_1_1_base" kindref="compound">Base</ref> with a <mystery>twist</mystery>.</para></briefdescription>
    <detaileddescription></detaileddescription>
    <location file="include/widget.h" line="10"/>
  </compounddef>
</doxygen>
"""


def test_read_compound() -> None:
    """Verify the compound level fields."""
    (compound_def,) = DoxygenXmlReader().read_string(CLASS_XML)
    assert compound_def.id == "classns_1_1_widget"
    assert compound_def.kind == "class"
    assert compound_def.compoundname == "ns::Widget"
    assert compound_def.language == "C++"
    assert [r.refid for r in compound_def.basecompoundrefs] == ["classns_1_1_base"]
    assert compound_def.basecompoundrefs[0].virt == "virtual"
    assert compound_def.location is not None
    assert compound_def.location.line == 10


def test_read_members() -> None:
    """Verify member definitions and references to members defined elsewhere."""
    (compound_def,) = DoxygenXmlReader().read_string(CLASS_XML)
    (section_def,) = compound_def.sectiondefs
    assert section_def.kind == "public-func"
    member_def, member_ref = section_def.items
    assert isinstance(member_def, MemberDef)
    assert member_def.name == "size"
    assert member_def.static
    assert not member_def.flag("const")
    assert member_def.location is not None
    assert member_def.location.bodystart == 3
    assert member_def.location.bodyend is None
    assert member_def.params[0].declname == "b"
    type_refs = member_def.params[0].type.find_all(RefText)
    assert [r.refid for r in type_refs] == ["classns_1_1_base"]
    assert isinstance(member_ref, MemberRefDef)
    assert member_ref.refid == "classns_1_1_base_1a02"
    assert member_ref.name == "base_only"


def test_unknown_tag_is_inlined(caplog: pytest.LogCaptureFixture) -> None:
    """Verify that an unsupported element keeps its text and is reported once."""
    reader = DoxygenXmlReader()
    (compound_def,) = reader.read_string(CLASS_XML)
    para = compound_def.briefdescription.find(DocPara)
    assert para is not None
    assert para.text_content() == "A Base with a twist."
    assert isinstance(para.find(DocRefText), DocRefText)
    assert "mystery" in reader.warned_tags
    assert "Element <mystery> not supported" in caplog.text


def test_read_folder(tmp_path: Path) -> None:
    """Verify that a folder is read with its Doxyfile options and without the index."""
    (tmp_path / "classns_1_1_widget.xml").write_text(CLASS_XML, encoding="utf-8")
    (tmp_path / "index.xml").write_text("<doxygenindex/>", encoding="utf-8")
    (tmp_path / "Doxyfile.xml").write_text(
        '<doxyfile><option id="PROJECT_NAME"><value>Widgets</value></option>'
        '<option id="PROJECT_BRIEF"><value>Widget toolkit</value></option></doxyfile>',
        encoding="utf-8",
    )
    data = parse_doxygen_xml_folder(tmp_path)
    assert [c.id for c in data.compound_defs] == ["classns_1_1_widget"]
    assert data.doxygen_version == "1.9.8"
    assert data.project_name == "Widgets"
    assert data.project_brief == "Widget toolkit"


def test_read_missing_folder(tmp_path: Path) -> None:
    """Verify that a missing input folder stops the run."""
    with pytest.raises(SystemExit):
        parse_doxygen_xml_folder(tmp_path / "missing")


def test_read_empty_folder(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        parse_doxygen_xml_folder(tmp_path)


PARA_XML = """<doxygen version="1.9.8">
  <compounddef id="namespacea" kind="namespace" language="C++">
    <compoundname>A</compoundname>
    <briefdescription><para>Hi <ref refid="namespacea_1a01" kindref="member">f</ref>.</para></briefdescription>
    <detaileddescription><para><anchor id="namespacea_1ausage"/>See <image type="html" name="diagram.png"/><para/></para></detaileddescription>
  </compounddef>
</doxygen>
"""


def test_paragraph_keeps_its_content() -> None:
    """Verify that paragraphs hold their text, references, anchors and images."""
    reader = DoxygenXmlReader()
    (compound_def,) = reader.read_string(PARA_XML)
    para = compound_def.briefdescription.find(DocPara)
    assert para is not None
    assert para.text_content() == "Hi f."
    ref = para.find(DocRefText)
    assert ref is not None
    assert ref.refid == "namespacea_1a01"
    assert ref.kindref == "member"

    detailed = compound_def.detaileddescription.find(DocPara)
    assert detailed is not None
    assert detailed.find(DocAnchor).id == "namespacea_1ausage"
    assert detailed.find(DocImage) is not None
    assert isinstance(detailed.find(DocPara), DocPara)
    assert reader.images == {"diagram.png"}
