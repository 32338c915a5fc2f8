"""Tests for building the view model and resolving permalinks."""

import pytest

from doxygen2docusaurus.errors import BuildPhaseError
from doxygen2docusaurus.models import DoxygenData
from doxygen2docusaurus.options import GeneratorOptions
from doxygen2docusaurus.workspace import BuildPhase, Workspace
from doxygen2docusaurus.xml_reader import DoxygenXmlReader

NAMESPACES_XML = """<doxygen version="1.9.8">
  <compounddef id="namespacea" kind="namespace" language="C++">
    <compoundname>A</compoundname>
    <innernamespace refid="namespacea_1_1b">A::B</innernamespace>
    <briefdescription></briefdescription>
    <detaileddescription></detaileddescription>
    <location file="a.h" line="1"/>
  </compounddef>
  <compounddef id="namespacea_1_1b" kind="namespace" language="C++">
    <compoundname>A::B</compoundname>
    <sectiondef kind="func">
      <memberdef kind="function" id="namespacea_1_1b_1a0123abcd" prot="public" static="no">
        <type>void</type>
        <definition>void A::B::f</definition>
        <argsstring>()</argsstring>
        <name>f</name>
        <qualifiedname>A::B::f</qualifiedname>
        <briefdescription><para>Does f.</para></briefdescription>
        <detaileddescription></detaileddescription>
        <location file="a.h" line="5" column="6"/>
      </memberdef>
    </sectiondef>
    <briefdescription><para>The B namespace.</para></briefdescription>
    <detaileddescription></detaileddescription>
    <location file="a.h" line="3"/>
  </compounddef>
  <compounddef id="namespacec" kind="namespace" language="C++">
    <compoundname>C</compoundname>
    <briefdescription></briefdescription>
    <detaileddescription></detaileddescription>
    <location file="a.h" line="9"/>
  </compounddef>
  <compounddef id="group__tools" kind="group">
    <compoundname>tools</compoundname>
    <title>Tools</title>
    <sectiondef kind="func">
      <memberdef kind="function" id="namespacea_1_1b_1a0123abcd" prot="public" static="no">
        <type>void</type>
        <definition>void A::B::f</definition>
        <argsstring>()</argsstring>
        <name>f</name>
        <briefdescription><para>Does f.</para></briefdescription>
        <detaileddescription></detaileddescription>
        <location file="a.h" line="5" column="6"/>
      </memberdef>
    </sectiondef>
    <briefdescription><para>The tools.</para></briefdescription>
    <detaileddescription></detaileddescription>
  </compounddef>
</doxygen>
"""

CLASSES_XML = """<doxygen version="1.9.8">
  <compounddef id="class_foo" kind="class" language="C++">
    <compoundname>Foo</compoundname>
    <briefdescription><para>Upper case.</para></briefdescription>
    <detaileddescription></detaileddescription>
  </compounddef>
  <compounddef id="classfoo" kind="class" language="C++">
    <compoundname>foo</compoundname>
    <briefdescription><para>Lower case.</para></briefdescription>
    <detaileddescription></detaileddescription>
  </compounddef>
  <compounddef id="classfoo" kind="class" language="C++">
    <compoundname>FooAgain</compoundname>
    <briefdescription><para>Same id.</para></briefdescription>
    <detaileddescription></detaileddescription>
  </compounddef>
  <compounddef id="conceptc" kind="concept" language="C++">
    <compoundname>C</compoundname>
  </compounddef>
</doxygen>
"""


def create_workspace(xml: str, **options) -> Workspace:
    data = DoxygenData(
        compound_defs=DoxygenXmlReader().read_string(xml),
        doxygen_version="1.9.8",
        project_name="Demo",
    )
    return Workspace(data, GeneratorOptions(**options))


def build_workspace(xml: str, **options) -> Workspace:
    workspace = create_workspace(xml, **options)
    workspace.build()
    return workspace


def test_default_urls() -> None:
    """Verify the output folder and URL prefixes derived from the default options."""
    workspace = create_workspace(NAMESPACES_XML)
    assert workspace.output_folder_path == "docs/api/"
    assert workspace.sidebar_base_id == "api/"
    assert workspace.page_base_url == "/docs/api/"
    assert workspace.slug_base_url == "/api/"
    assert workspace.menu_base_url == "/docs/api/"


def test_custom_urls() -> None:
    """Verify that the base URL gets a trailing slash and the parts are joined once."""
    workspace = create_workspace(
        NAMESPACES_XML, base_url="/site", docs_base_url="/reference/", api_base_url="cpp"
    )
    assert workspace.page_base_url == "/site/reference/cpp/"
    assert workspace.slug_base_url == "/cpp/"
    assert workspace.menu_base_url == "/reference/cpp/"


def test_namespace_hierarchy() -> None:
    """Verify that nested namespaces are linked to their parents."""
    workspace = build_workspace(NAMESPACES_XML)
    outer = workspace.compounds_by_id["namespacea"]
    inner = workspace.compounds_by_id["namespacea_1_1b"]
    assert inner.parent is outer
    assert outer.children == [inner]
    assert inner.sidebar_label == "B"
    assert inner.page_title == "The `B` Namespace Reference"
    assert outer in workspace.collections["namespaces"].top_level_namespaces
    assert inner not in workspace.collections["namespaces"].top_level_namespaces


def test_compound_and_member_permalinks() -> None:
    """Verify the page URL of a compound and the anchor URL of one of its members."""
    workspace = build_workspace(NAMESPACES_XML)
    assert workspace.get_permalink("namespacea_1_1b", "compound") == "/docs/api/namespaces/a/b"
    assert (
        workspace.get_permalink("namespacea_1_1b_1a0123abcd", "member")
        == "/docs/api/namespaces/a/b/#a0123abcd"
    )


def test_unknown_member_permalink(caplog: pytest.LogCaptureFixture) -> None:
    """Verify that an unresolvable member reference is reported and has no URL."""
    workspace = build_workspace(NAMESPACES_XML)
    assert workspace.get_permalink("namespacez_1a99", "member") is None
    assert "Unknown permalink for member namespacez_1a99" in caplog.text


def test_unsupported_kindref(caplog: pytest.LogCaptureFixture) -> None:
    workspace = build_workspace(NAMESPACES_XML)
    assert workspace.get_permalink("namespacea", "other") is None
    assert "Unsupported kindref other" in caplog.text


def test_empty_namespace_is_retracted() -> None:
    """Verify that a namespace without content has no page but stays known by id."""
    workspace = build_workspace(NAMESPACES_XML)
    empty = workspace.compounds_by_id["namespacec"]
    assert empty.relative_permalink is None
    assert empty.docusaurus_id is None
    assert empty.sidebar_label is None
    assert workspace.get_permalink("namespacec", "compound") is None


def test_namespace_with_content_below_is_kept() -> None:
    """Verify that a namespace is kept when only a nested namespace has content."""
    workspace = build_workspace(NAMESPACES_XML)
    assert workspace.compounds_by_id["namespacea"].relative_permalink == "namespaces/a"


def test_members_index_keeps_defining_compound() -> None:
    """Verify that a member listed by a group is indexed under its own namespace."""
    workspace = build_workspace(NAMESPACES_XML)
    member = workspace.members_by_id["namespacea_1_1b_1a0123abcd"]
    assert member.section.compound.id == "namespacea_1_1b"


def test_sections_grouped_by_kind() -> None:
    """Verify that members are regrouped into sections with known headers."""
    workspace = build_workspace(NAMESPACES_XML)
    inner = workspace.compounds_by_id["namespacea_1_1b"]
    assert [section.kind for section in inner.sections] == ["function"]
    assert inner.sections[0].header_name == "Functions"
    assert [m.name for m in inner.sections[0].definition_members] == ["f"]


def test_duplicate_permalinks_get_suffixes(caplog: pytest.LogCaptureFixture) -> None:
    """Verify that the second compound mapping to the same URL gets a numbered suffix."""
    workspace = build_workspace(CLASSES_XML)
    first = workspace.compounds_by_id["class_foo"]
    second = workspace.compounds_by_id["classfoo"]
    assert first.relative_permalink == "classes/foo"
    assert second.relative_permalink == "classes/foo-1"
    assert second.docusaurus_id == "classes/foo-1"
    assert "Permalink classes/foo of class classfoo already used" in caplog.text


def test_duplicate_compound_id_keeps_first() -> None:
    workspace = build_workspace(CLASSES_XML)
    assert workspace.compounds_by_id["classfoo"].compound_name == "foo"
    assert workspace.collections["classes"].compounds_by_id["classfoo"].compound_name == "foo"


def test_unsupported_compound_kind_ignored(caplog: pytest.LogCaptureFixture) -> None:
    workspace = build_workspace(CLASSES_XML)
    assert "conceptc" not in workspace.compounds_by_id
    assert "Compound kind concept not supported" in caplog.text


def test_build_phases_in_order() -> None:
    """Verify that phases cannot be skipped or repeated."""
    workspace = create_workspace(NAMESPACES_XML)
    with pytest.raises(BuildPhaseError):
        workspace.link()
    with pytest.raises(BuildPhaseError):
        workspace.check_built()
    workspace.collect()
    with pytest.raises(BuildPhaseError):
        workspace.collect()
    workspace.link()
    workspace.initialize_compounds()
    workspace.initialize_members()
    assert workspace.phase == BuildPhase.COMPLETE
    workspace.check_built()


def test_renderer_registry_frozen_after_creation() -> None:
    workspace = create_workspace(NAMESPACES_XML)
    assert workspace.registry.frozen


INHERITANCE_XML = """<doxygen version="1.9.8">
  <compounddef id="classbase" kind="class" language="C++">
    <compoundname>Base</compoundname>
    <derivedcompoundref refid="classderived" prot="public" virt="non-virtual">Derived</derivedcompoundref>
    <briefdescription><para>A base.</para></briefdescription>
    <detaileddescription></detaileddescription>
  </compounddef>
  <compounddef id="classderived" kind="class" language="C++">
    <compoundname>Derived</compoundname>
    <basecompoundref refid="classbase" prot="public" virt="non-virtual">Base</basecompoundref>
    <briefdescription><para>A derived class.</para></briefdescription>
    <detaileddescription></detaileddescription>
  </compounddef>
  <compounddef id="classwidget" kind="class" language="C++">
    <compoundname>Widget</compoundname>
    <basecompoundref refid="classexternal" prot="public" virt="non-virtual">External</basecompoundref>
    <briefdescription><para>Derived from an undocumented class.</para></briefdescription>
    <detaileddescription></detaileddescription>
  </compounddef>
</doxygen>
"""


def test_class_hierarchy_follows_inheritance() -> None:
    """Verify that derived classes are children and undocumented bases are ignored."""
    workspace = build_workspace(INHERITANCE_XML)
    classes = workspace.collections["classes"]
    base = workspace.compounds_by_id["classbase"]
    derived = workspace.compounds_by_id["classderived"]
    widget = workspace.compounds_by_id["classwidget"]
    assert base.children == [derived]
    assert classes.top_level_classes == [base, widget]


MAIN_PAGE_XML = """<doxygen version="1.9.8">
  <compounddef id="indexpage" kind="page">
    <compoundname>index</compoundname>
    <title>Demo</title>
    <briefdescription></briefdescription>
    <detaileddescription><para><anchor id="indexpage_1ainstall"/>Install it.</para></detaileddescription>
  </compounddef>
</doxygen>
"""


def test_main_page_links_to_top_index() -> None:
    """Verify that the main page and its anchors resolve to the top index page."""
    workspace = build_workspace(MAIN_PAGE_XML)
    assert workspace.main_page is workspace.compounds_by_id["indexpage"]
    assert workspace.main_page.docusaurus_id is None
    assert workspace.get_permalink("indexpage", "compound") == "/docs/api/"
    assert workspace.get_permalink("indexpage_1ainstall", "member") == "/docs/api/#ainstall"


LINKS_XML = """<doxygen version="1.9.8">
  <compounddef id="guide" kind="page">
    <compoundname>guide</compoundname>
    <title>Guide</title>
    <briefdescription></briefdescription>
    <detaileddescription><para><toclist><tocitem id="guide_1autotoc_md1">Usage</tocitem></toclist></para>
<sect1 id="guide_1usage"><title>Usage</title><para>Run it.</para></sect1></detaileddescription>
  </compounddef>
  <compounddef id="todo" kind="page">
    <compoundname>todo</compoundname>
    <title>Todo List</title>
    <briefdescription></briefdescription>
    <detaileddescription><para><anchor id="todo_1_todo000001"/>Write more.</para></detaileddescription>
  </compounddef>
</doxygen>
"""


def test_toc_item_and_section_permalinks() -> None:
    """Verify that table of contents items and section ids resolve to their page."""
    workspace = build_workspace(LINKS_XML)
    assert workspace.get_permalink("guide_1autotoc_md1", "member") == "/docs/api/pages/guide/#autotoc_md1"
    assert workspace.get_permalink("guide_1usage", "member") == "/docs/api/pages/guide/#usage"


def test_xrefsect_permalink() -> None:
    """Verify that a todo entry resolves to its anchor on the todo page."""
    workspace = build_workspace(LINKS_XML)
    assert workspace.get_permalink("todo_1_todo000001", "xrefsect") == "/docs/api/pages/todo/#_todo000001"


SORTED_XML = """<doxygen version="1.9.8">
  <compounddef id="namespaces" kind="namespace" language="C++">
    <compoundname>s</compoundname>
    <sectiondef kind="func">
      <memberdef kind="function" id="namespaces_1a02" prot="public" static="no">
        <type>void</type>
        <name>zeta</name>
        <briefdescription><para>Last.</para></briefdescription>
      </memberdef>
      <member refid="namespacet_1a03" kind="function"><name>beta</name></member>
      <memberdef kind="function" id="namespaces_1a01" prot="public" static="no">
        <type>void</type>
        <name>alpha</name>
        <briefdescription><para>First.</para></briefdescription>
      </memberdef>
    </sectiondef>
    <sectiondef kind="enum">
      <memberdef kind="enum" id="namespaces_1a0f" prot="public" static="no" strong="yes">
        <type></type>
        <name>Mode</name>
        <enumvalue id="namespaces_1a0fa01" prot="public">
          <name>Read&amp;Write</name>
          <briefdescription><para>Both.</para></briefdescription>
        </enumvalue>
        <briefdescription><para>Modes.</para></briefdescription>
      </memberdef>
    </sectiondef>
    <briefdescription><para>Sorted.</para></briefdescription>
  </compounddef>
</doxygen>
"""


def test_definition_members_sorted_by_name() -> None:
    """Verify that definitions are sorted while the index keeps references in input order."""
    workspace = build_workspace(SORTED_XML)
    sections = workspace.compounds_by_id["namespaces"].sections
    assert [s.kind for s in sections] == ["enum", "function"]
    section = sections[1]
    assert [m.name for m in section.index_members] == ["zeta", "beta", "alpha"]
    assert [m.name for m in section.definition_members] == ["alpha", "zeta"]


def test_enum_value_names_escaped() -> None:
    """Verify that enum value names are escaped in the enum table."""
    workspace = build_workspace(SORTED_XML)
    member = workspace.members_by_id["namespaces_1a0f"]
    assert member.enum_lines is not None
    text = "\n".join(member.enum_lines)
    assert '<td class="doxyEnumItemName">Read&amp;Write<a id="a0fa01"></a></td>' in text
    assert '<td class="doxyEnumItemDescription">Both</td>' in text


EMPTY_GROUP_AND_PAGES_XML = """<doxygen version="1.9.8">
  <compounddef id="group__empty" kind="group">
    <compoundname>empty</compoundname>
    <title>Empty</title>
    <briefdescription></briefdescription>
    <detaileddescription></detaileddescription>
  </compounddef>
  <compounddef id="group__parent" kind="group">
    <compoundname>parent</compoundname>
    <title>Parent</title>
    <innergroup refid="group__empty">empty</innergroup>
    <briefdescription></briefdescription>
    <detaileddescription></detaileddescription>
  </compounddef>
  <compounddef id="blank" kind="page">
    <compoundname>blank</compoundname>
    <title>Blank</title>
    <briefdescription></briefdescription>
    <detaileddescription></detaileddescription>
  </compounddef>
  <compounddef id="indexpage" kind="page">
    <compoundname>index</compoundname>
    <title>Demo</title>
    <briefdescription></briefdescription>
    <detaileddescription></detaileddescription>
  </compounddef>
</doxygen>
"""


def test_empty_group_is_retracted() -> None:
    """Verify that a group with only a title has no page, unlike one with subgroups."""
    workspace = build_workspace(EMPTY_GROUP_AND_PAGES_XML)
    empty = workspace.compounds_by_id["group__empty"]
    assert empty.relative_permalink is None
    assert empty.sidebar_label is None
    assert workspace.compounds_by_id["group__parent"].relative_permalink == "groups/parent"


def test_empty_page_is_retracted() -> None:
    """Verify that a page with only a title is hidden while the main page is kept."""
    workspace = build_workspace(EMPTY_GROUP_AND_PAGES_XML)
    assert workspace.compounds_by_id["blank"].relative_permalink is None
    assert workspace.get_permalink("indexpage", "compound") == "/docs/api/"


CYCLIC_GROUPS_XML = """<doxygen version="1.9.8">
  <compounddef id="group__a" kind="group">
    <compoundname>a</compoundname>
    <title>A</title>
    <innergroup refid="group__b">b</innergroup>
    <briefdescription><para>Group A.</para></briefdescription>
  </compounddef>
  <compounddef id="group__b" kind="group">
    <compoundname>b</compoundname>
    <title>B</title>
    <innergroup refid="group__a">a</innergroup>
    <briefdescription><para>Group B.</para></briefdescription>
  </compounddef>
</doxygen>
"""


def test_groups_without_top_level_have_no_menu() -> None:
    """Verify that groups nested in each other give no menu items."""
    workspace = build_workspace(CYCLIC_GROUPS_XML)
    groups = workspace.collections["groups"]
    assert groups.top_level_groups == []
    assert groups.create_menu_items() == []
