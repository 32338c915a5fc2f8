"""End to end tests: Doxygen XML folder in, Docusaurus pages, sidebar and menu out."""

import json
from pathlib import Path

import pytest

from doxygen2docusaurus.cli import main

COMPOUNDS = {
    "namespacea.xml": """
  <compounddef id="namespacea" kind="namespace" language="C++">
    <compoundname>A</compoundname>
    <innernamespace refid="namespacea_1_1b">A::B</innernamespace>
    <briefdescription></briefdescription>
    <detaileddescription></detaileddescription>
    <location file="include/a.h" line="1"/>
  </compounddef>""",
    "namespacea_1_1b.xml": """
  <compounddef id="namespacea_1_1b" kind="namespace" language="C++">
    <compoundname>A::B</compoundname>
    <innerclass refid="classa_1_1b_1_1_widget" prot="public">A::B::Widget</innerclass>
    <sectiondef kind="func">
      <memberdef kind="function" id="namespacea_1_1b_1a0123abcd" prot="public" static="no">
        <type>void</type>
        <definition>void A::B::reset</definition>
        <argsstring>()</argsstring>
        <name>reset</name>
        <qualifiedname>A::B::reset</qualifiedname>
        <briefdescription><para>Resets all widgets.</para></briefdescription>
        <detaileddescription></detaileddescription>
        <location file="include/a.h" line="1" column="6"/>
      </memberdef>
    </sectiondef>
    <briefdescription><para>The B namespace.</para></briefdescription>
    <detaileddescription></detaileddescription>
    <location file="include/a.h" line="1"/>
  </compounddef>""",
    "namespacec.xml": """
  <compounddef id="namespacec" kind="namespace" language="C++">
    <compoundname>C</compoundname>
    <briefdescription></briefdescription>
    <detaileddescription></detaileddescription>
    <location file="include/a.h" line="3"/>
  </compounddef>""",
    "classa_1_1b_1_1_widget.xml": """
  <compounddef id="classa_1_1b_1_1_widget" kind="class" language="C++" prot="public">
    <compoundname>A::B::Widget</compoundname>
    <includes refid="a_8h" local="no">a.h</includes>
    <sectiondef kind="public-func">
      <memberdef kind="function" id="classa_1_1b_1_1_widget_1a01" prot="public" static="no" const="yes">
        <type>int</type>
        <definition>int A::B::Widget::size</definition>
        <argsstring>() const</argsstring>
        <name>size</name>
        <qualifiedname>A::B::Widget::size</qualifiedname>
        <briefdescription><para>See <ref refid="namespacea_1_1b_1a0123abcd" kindref="member">reset</ref>.</para></briefdescription>
        <detaileddescription></detaileddescription>
        <location file="include/a.h" line="2" column="9"/>
      </memberdef>
    </sectiondef>
    <briefdescription><para>A widget.</para></briefdescription>
    <detaileddescription><para>Widgets have a <bold>size</bold>.</para></detaileddescription>
    <location file="include/a.h" line="2"/>
  </compounddef>""",
    "a_8h.xml": """
  <compounddef id="a_8h" kind="file" language="C++">
    <compoundname>a.h</compoundname>
    <innerclass refid="classa_1_1b_1_1_widget" prot="public">A::B::Widget</innerclass>
    <innernamespace refid="namespacea">A</innernamespace>
    <innernamespace refid="namespacea_1_1b">A::B</innernamespace>
    <briefdescription><para>The widgets header.</para></briefdescription>
    <detaileddescription></detaileddescription>
    <programlisting>
      <codeline lineno="1"><highlight class="keyword">namespace</highlight><sp/><highlight class="normal">A::B<sp/>{<sp/>void<sp/>reset();<sp/>}</highlight></codeline>
      <codeline lineno="2"><highlight class="keyword">class</highlight><sp/><highlight class="normal">Widget;</highlight></codeline>
    </programlisting>
    <location file="include/a.h"/>
  </compounddef>""",
    "dir_include.xml": """
  <compounddef id="dir_include" kind="dir">
    <compoundname>include</compoundname>
    <innerfile refid="a_8h">a.h</innerfile>
    <briefdescription></briefdescription>
    <detaileddescription></detaileddescription>
    <location file="include/"/>
  </compounddef>""",
    "group__tools.xml": """
  <compounddef id="group__tools" kind="group">
    <compoundname>tools</compoundname>
    <title>Tools.</title>
    <innerclass refid="classa_1_1b_1_1_widget" prot="public">A::B::Widget</innerclass>
    <briefdescription><para>The tools.</para></briefdescription>
    <detaileddescription></detaileddescription>
  </compounddef>""",
    "indexpage.xml": """
  <compounddef id="indexpage" kind="page">
    <compoundname>index</compoundname>
    <title>Demo</title>
    <briefdescription></briefdescription>
    <detaileddescription><para>Welcome to the <ref refid="classa_1_1b_1_1_widget" kindref="compound">Widget</ref> docs.</para></detaileddescription>
  </compounddef>""",
    "intro.xml": """
  <compounddef id="intro" kind="page">
    <compoundname>intro</compoundname>
    <title>Introduction</title>
    <briefdescription></briefdescription>
    <detaileddescription><para>Read this first.</para><para><image type="html" name="logo.png"></image></para></detaileddescription>
  </compounddef>""",
}

DOXYFILE = (
    '<doxyfile><option id="PROJECT_NAME"><value>Demo</value></option>'
    '<option id="PROJECT_BRIEF"><value>Demo Project</value></option></doxyfile>'
)


@pytest.fixture
def site(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A site folder with the Doxygen XML output below xml/."""
    xml_folder = tmp_path / "xml"
    xml_folder.mkdir()
    for name, compound in COMPOUNDS.items():
        (xml_folder / name).write_text(
            f'<?xml version="1.0"?>\n<doxygen version="1.9.8">{compound}\n</doxygen>\n',
            encoding="utf-8",
        )
    (xml_folder / "Doxyfile.xml").write_text(DOXYFILE, encoding="utf-8")
    (xml_folder / "logo.png").write_bytes(b"\x89PNG")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def run(*argv: str) -> int:
    return main(["--input", "xml", "--redirects-folder", "reference", *argv])


def output_files(site: Path) -> dict[str, str]:
    api = site / "docs" / "api"
    return {
        p.relative_to(api).as_posix(): p.read_text(encoding="utf-8")
        for p in sorted(api.rglob("*.md"))
    }


def test_pages_written(site: Path) -> None:
    """Verify one page per shown compound plus the index pages."""
    assert run() == 0
    files = output_files(site)
    for name in (
        "index.md",
        "namespaces/a.md",
        "namespaces/a-b.md",
        "classes/a-b-widget.md",
        "files/include-a-h.md",
        "folders/include.md",
        "groups/tools.md",
        "pages/intro.md",
        "indices/namespaces/index.md",
        "indices/namespaces/all.md",
        "indices/classes/index.md",
        "indices/classes/functions.md",
        "indices/files/index.md",
    ):
        assert name in files, name
    assert "namespaces/c.md" not in files
    assert "pages/index.md" not in files
    assert "indices/groups/index.md" not in files


def test_page_content(site: Path) -> None:
    """Verify front matter, cross references and local anchors of a class page."""
    run()
    text = (site / "docs" / "api" / "classes" / "a-b-widget.md").read_text(encoding="utf-8")
    assert "slug: /api/classes/a/b/widget" in text
    assert "custom_edit_url: null" in text
    assert "# `Widget` Class" in text
    assert "class A::B::Widget" in text
    assert '<a href="/docs/api/namespaces/a/b/#a0123abcd">reset</a>' in text
    assert "### size() {#a01}" in text
    assert "<b>size</b>" in text
    assert 'Definition at line <a href="/docs/api/files/include/a-h/#l00002">2</a>' in text


def test_member_anchor_on_own_page(site: Path) -> None:
    """Verify that links to members of the same page keep only the fragment."""
    run()
    text = (site / "docs" / "api" / "namespaces" / "a-b.md").read_text(encoding="utf-8")
    assert '<a href="#a0123abcd">reset</a>' in text
    assert "/docs/api/namespaces/a/b/#a0123abcd" not in text


def test_top_index(site: Path) -> None:
    """Verify the topics table and the main page text on the top index."""
    run()
    text = (site / "docs" / "api" / "index.md").read_text(encoding="utf-8")
    assert "title: Demo Project API Reference" in text
    assert "Demo Project topics with brief descriptions are:" in text
    assert '<a href="/docs/api/groups/tools">Tools.</a>' in text
    assert 'Welcome to the <a href="/docs/api/classes/a/b/widget">Widget</a> docs.' in text


def test_per_initial_index(site: Path) -> None:
    run()
    text = (site / "docs" / "api" / "indices" / "classes" / "functions.md").read_text(
        encoding="utf-8"
    )
    assert "## - S -" in text
    assert '<li><b>size()</b>: as function in class <a href="/docs/api/classes/a/b/widget/#a01">' in text


def test_sidebar_file(site: Path) -> None:
    """Verify the sidebar category and the order of its collections."""
    run()
    sidebar = json.loads((site / "sidebar-category-doxygen.json").read_text(encoding="utf-8"))
    assert sidebar["type"] == "category"
    assert sidebar["label"] == "API Reference (Doxygen)"
    assert sidebar["link"] == {"type": "doc", "id": "api/index"}
    labels = [item["label"] for item in sidebar["items"]]
    assert labels == ["Introduction", "Tools", "Namespaces", "Classes", "Files"]

    namespaces = sidebar["items"][2]
    hierarchy = namespaces["items"][0]
    assert hierarchy["label"] == "Hierarchy"
    (outer,) = hierarchy["items"]
    assert outer["label"] == "A"
    assert outer["link"] == {"type": "doc", "id": "api/namespaces/a"}
    assert outer["items"] == [{"type": "doc", "label": "B", "id": "api/namespaces/a-b"}]
    assert {"type": "doc", "label": "All", "id": "api/indices/namespaces/all"} in namespaces["items"]


def test_menu_file(site: Path) -> None:
    run()
    menu = json.loads(
        (site / "docusaurus-config-navbar-doxygen.json").read_text(encoding="utf-8")
    )
    assert menu["type"] == "dropdown"
    assert menu["label"] == "Reference"
    assert menu["to"] == "/docs/api/"
    assert [item["label"] for item in menu["items"]] == ["Tools", "Namespaces", "Classes", "Files"]
    assert menu["items"][0]["to"] == "/docs/api/groups/tools/"


def test_redirects(site: Path) -> None:
    """Verify redirect pages for compounds and the Doxygen index pages."""
    run()
    redirects = site / "static" / "reference"
    assert "url=/docs/api/namespaces/a/b/" in (redirects / "namespacea_1_1b.html").read_text()
    assert (redirects / "classa_1_1b_1_1_widget-members.html").exists()
    assert (redirects / "a_8h_source.html").exists()
    assert "url=/docs/api/" in (redirects / "index.html").read_text()
    assert "url=/docs/api/classes/" in (redirects / "classes.html").read_text()
    assert not (redirects / "namespacec.html").exists()


def test_images_copied(site: Path) -> None:
    run()
    assert (site / "static" / "img" / "doxygen" / "logo.png").read_bytes() == b"\x89PNG"
    text = (site / "docs" / "api" / "pages" / "intro.md").read_text(encoding="utf-8")
    assert '<img src="/img/doxygen/logo.png"></img>' in text


def test_second_run_same_output(site: Path) -> None:
    """Verify that a rerun replaces the previous output with identical files."""
    run()
    first = output_files(site)
    stale = site / "docs" / "api" / "stale.md"
    stale.write_text("old", encoding="utf-8")
    run()
    assert output_files(site) == first
    assert not stale.exists()


def test_named_configuration(site: Path) -> None:
    """Verify the output names derived from a configuration id."""
    (site / "doxygen2docusaurus.yml").write_text(
        "configurations:\n  cpp:\n    navbar_label: C++\n", encoding="utf-8"
    )
    assert run("--id", "cpp") == 0
    assert (site / "docs" / "cpp" / "index.md").exists()
    menu = json.loads(
        (site / "docusaurus-config-navbar-doxygen-cpp.json").read_text(encoding="utf-8")
    )
    assert menu["label"] == "C++"
    assert menu["to"] == "/docs/cpp/"
    text = (site / "docs" / "cpp" / "classes" / "a-b-widget.md").read_text(encoding="utf-8")
    assert "slug: /cpp/classes/a/b/widget" in text


def test_missing_input_folder(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit):
        run()
