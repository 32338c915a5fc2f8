"""Tests for the renderer registry and the generic render entry points."""

import pytest

from doxygen2docusaurus.elements import Element
from doxygen2docusaurus.errors import BuildPhaseError, RendererNotFoundError
from doxygen2docusaurus.models import DoxygenData
from doxygen2docusaurus.options import GeneratorOptions
from doxygen2docusaurus.render_dispatch import RenderDispatch
from doxygen2docusaurus.renderer_registry import RendererRegistry
from doxygen2docusaurus.workspace import Workspace
from doxygen2docusaurus.xml_reader import DoxygenXmlReader


class Block(Element):
    pass


class Quote(Block):
    pass


class Inline(Element):
    pass


class BlockRenderer:
    def render_to_lines(self, element, flavor):
        return [f"<{element.tag}>", *element.text_content().split(" "), f"</{element.tag}>"]


class InlineRenderer:
    def render_to_string(self, element, flavor):
        return f"[{element.text_content()}]\n[end]"


def make_dispatch() -> RenderDispatch:
    registry = RendererRegistry()
    registry.register_lines(Block, BlockRenderer())
    registry.register_string(Inline, InlineRenderer())
    registry.freeze()
    return RenderDispatch(registry)


def test_lookup_walks_the_class_hierarchy() -> None:
    """Verify that a subclass without its own renderer uses its base class renderer."""
    dispatch = make_dispatch()
    quote = Quote(tag="blockquote", children=["a b"])
    assert dispatch.render_element_to_lines(quote, "html") == ["<blockquote>", "a", "b", "</blockquote>"]


def test_lookup_is_stable() -> None:
    """Verify that repeated lookups return the same renderer."""
    registry = RendererRegistry()
    renderer = BlockRenderer()
    registry.register_lines(Block, renderer)
    first = registry.lines_renderer_for(Quote())
    assert first is renderer
    assert registry.lines_renderer_for(Quote()) is first


def test_registration_closed_after_freeze() -> None:
    """Verify that a frozen registry rejects new renderers."""
    registry = RendererRegistry()
    registry.freeze()
    with pytest.raises(BuildPhaseError):
        registry.register_lines(Block, BlockRenderer())


def test_lines_fall_back_to_string_renderer() -> None:
    """Verify that a string renderer is split on newlines when lines are wanted."""
    dispatch = make_dispatch()
    inline = Inline(tag="bold", children=["x"])
    assert dispatch.render_element_to_lines(inline, "html") == ["[x]", "[end]"]


def test_string_falls_back_to_lines_renderer() -> None:
    """Verify that lines are joined with newlines when a string is wanted."""
    dispatch = make_dispatch()
    block = Block(tag="para", children=["a b"])
    assert dispatch.render_element_to_string(block, "html") == "<para>\na\nb\n</para>"


def test_missing_renderer_raises() -> None:
    """Verify that an element without any renderer is an error."""
    dispatch = make_dispatch()
    with pytest.raises(RendererNotFoundError) as excinfo:
        dispatch.render_element_to_lines(Element(tag="mystery"), "html")
    assert "mystery" in str(excinfo.value)
    assert excinfo.value.direction == "lines"


def test_render_plain_values() -> None:
    """Verify the handling of undefined values, strings and lists."""
    dispatch = make_dispatch()
    assert dispatch.render_element_to_lines(None, "html") == []
    assert dispatch.render_element_to_string(None, "html") == ""
    assert dispatch.render_element_to_string("a<b", "html") == "a&lt;b"
    assert dispatch.render_element_to_lines("\n  ", "html") == []
    assert dispatch.render_element_to_string(["a", Inline(tag="b", children=["c"])], "text") == (
        "a[c]\n[end]"
    )


GUIDE_XML = """<doxygen version="1.9.8">
  <compounddef id="guide" kind="page">
    <compoundname>guide</compoundname>
    <title>Guide</title>
    <briefdescription></briefdescription>
    <detaileddescription>
<para><toclist><tocitem id="guide_1autotoc_md1">Usage</tocitem></toclist></para>
<para>Steps:<itemizedlist><listitem><para>Build &amp; test</para></listitem><listitem><para>Ship</para></listitem></itemizedlist></para>
<para><orderedlist><listitem><para>First</para></listitem></orderedlist></para>
<para><table rows="2" cols="2"><row><entry thead="yes"><para>Name</para></entry><entry thead="yes"><para>Value</para></entry></row><row><entry thead="no" colspan="2" rowspan="1"><para>Both</para></entry></row></table></para>
<para><variablelist><varlistentry><term>Term</term></varlistentry><listitem><para>Meaning</para></listitem></variablelist></para>
<para><parameterlist kind="param"><parameteritem><parameternamelist><parametername direction="in">count</parametername></parameternamelist><parameterdescription><para>How many.</para></parameterdescription></parameteritem></parameterlist></para>
<para><simplesect kind="return"><para>The total.</para></simplesect><simplesect kind="note"><para>Be careful.</para></simplesect></para>
<para><xrefsect id="todo_1_todo000001"><xreftitle>Todo</xreftitle><xrefdescription><para>Write more.</para></xrefdescription></xrefsect></para>
<para><verbatim>a &lt; b
</verbatim></para>
<sect1 id="guide_1usage"><title>Usage</title><para>Run it.</para></sect1>
    </detaileddescription>
  </compounddef>
  <compounddef id="todo" kind="page">
    <compoundname>todo</compoundname>
    <title>Todo List</title>
    <briefdescription></briefdescription>
    <detaileddescription><para><anchor id="todo_1_todo000001"/>Page Guide: Write more.</para></detaileddescription>
  </compounddef>
</doxygen>
"""


@pytest.fixture
def guide_text() -> str:
    """The rendered detailed description of the guide page."""
    data = DoxygenData(
        compound_defs=DoxygenXmlReader().read_string(GUIDE_XML), doxygen_version="1.9.8"
    )
    workspace = Workspace(data, GeneratorOptions())
    workspace.build()
    lines = workspace.compounds_by_id["guide"].detailed_lines
    assert lines is not None
    return "\n".join(lines)


def test_render_lists(guide_text: str) -> None:
    """Verify that list items are rendered without paragraph tags."""
    assert "<p>Steps:</p>" in guide_text
    assert '<ul class="doxyList">' in guide_text
    assert "<li>Build &amp; test</li>\n<li>Ship</li>\n</ul>" in guide_text
    assert '<ol class="doxyList" type="1">\n<li>First</li>\n</ol>' in guide_text


def test_render_table(guide_text: str) -> None:
    """Verify header cells and the span attributes of table entries."""
    assert '<table class="doxyTable">' in guide_text
    assert "<tr>\n<th>Name</th>\n<th>Value</th>\n</tr>" in guide_text
    assert '<td colspan="2" rowspan="1">Both</td>' in guide_text


def test_render_variable_list(guide_text: str) -> None:
    assert '<dl class="doxyVariableList">\n<dt>Term</dt>\n<dd><p>Meaning</p></dd>\n</dl>' in guide_text


def test_render_parameter_list(guide_text: str) -> None:
    """Verify the parameter table with the parameter direction."""
    assert '<dt class="doxyParamsTableTitle">Parameters</dt>' in guide_text
    assert '<td class="doxyParamItemName">[in] count</td>' in guide_text
    assert '<td class="doxyParamItemDescription"><p>How many.</p></td>' in guide_text


def test_render_simple_sections(guide_text: str) -> None:
    """Verify that titled simple sections are definition lists and notes are admonitions."""
    assert (
        '<dl class="doxySectionUser">\n<dt>Returns</dt>\n<dd><p>The total.</p></dd>\n</dl>'
        in guide_text
    )
    assert ":::info\n<p>Be careful.</p>\n:::" in guide_text


def test_render_xref_section(guide_text: str) -> None:
    """Verify that a todo entry links to its place on the todo page."""
    assert (
        '<dt class="doxyXrefSectTitle"><a href="/docs/api/pages/todo/#_todo000001">Todo</a></dt>'
        in guide_text
    )
    assert '<dd class="doxyXrefSectDescription">\n<p>Write more.</p>\n</dd>' in guide_text


def test_render_toc_list(guide_text: str) -> None:
    assert (
        '<ul class="doxyTocList">\n'
        '<li><a class="doxyTocListItem" href="#autotoc_md1">Usage</a></li>\n'
        "</ul>"
    ) in guide_text


def test_render_verbatim_and_sections(guide_text: str) -> None:
    """Verify escaped verbatim text and section headings with their anchors."""
    assert "<pre><code>a &lt; b\n</code></pre>" in guide_text
    assert "## Usage {#usage}" in guide_text
    assert "<p>Run it.</p>" in guide_text
