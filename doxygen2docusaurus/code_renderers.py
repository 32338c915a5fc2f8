"""Renderers for program listings and member signature content."""

from __future__ import annotations

import logging

from doxygen2docusaurus.description_renderers import ElementRenderer
from doxygen2docusaurus.elements import (
    CodeLine,
    DocSp,
    Highlight,
    Inc,
    LinkedText,
    Listing,
    Param,
    Reference,
)
from doxygen2docusaurus.permalinks import sanitize_anonymous_namespace

logger = logging.getLogger(__name__)

HIGHLIGHT_CLASSES = {
    "normal": "doxyHighlight",
    "charliteral": "doxyHighlightCharLiteral",
    "comment": "doxyHighlightComment",
    "preprocessor": "doxyHighlightPreprocessor",
    "keyword": "doxyHighlightKeyword",
    "keywordtype": "doxyHighlightKeywordType",
    "keywordflow": "doxyHighlightKeywordFlow",
    "token": "doxyHighlightToken",
    "stringliteral": "doxyHighlightStringLiteral",
    "vhdlchar": "doxyHighlightVhdlChar",
    "vhdlkeyword": "doxyHighlightVhdlKeyword",
    "vhdllogic": "doxyHighlightVhdlLogic",
}


class MemberListing(Listing):
    """An excerpt of a file listing shown under a member; lines carry no anchors."""


class ListingRenderer(ElementRenderer):
    def render_to_lines(self, element: Listing, flavor: str) -> list[str]:
        code_lines = element.find_all(CodeLine)
        if not code_lines:
            return []
        show_anchor = not isinstance(element, MemberListing)
        lines = ["", '<div class="doxyProgramListing">', ""]
        lines.extend(self._render_code_line(line, show_anchor) for line in code_lines)
        lines.extend(["", "</div>", ""])
        return lines

    def _render_code_line(self, element: CodeLine, show_anchor: bool) -> str:
        permalink = None
        refid = element.attr("refid")
        refkind = element.attr("refkind")
        if refid and refkind:
            permalink = self.workspace.get_permalink(refid, refkind)

        text = '<div class="doxyCodeLine">'
        lineno = element.lineno
        if lineno is not None:
            text += '<span class="doxyLineNumber">'
            if show_anchor:
                text += f'<a id="l{lineno:05d}"></a>'
            if permalink:
                text += f'<a href="{permalink}">{lineno}</a>'
            else:
                text += str(lineno)
            text += "</span>"
        else:
            text += '<span class="doxyNoLineNumber">&nbsp;</span>'

        content = self.workspace.render_elements_to_string(
            element.find_all(Highlight), "html"
        )
        if content:
            text += f'<span class="doxyLineContent">{content}</span>'
        text += "</div>"
        return text


class HighlightRenderer(ElementRenderer):
    def render_to_lines(self, element: Highlight, flavor: str) -> list[str]:
        if not element.children:
            return [""]
        span_class = HIGHLIGHT_CLASSES.get(element.highlight_class, "doxyHighlight")
        content = self.workspace.render_elements_to_string(element.children, flavor)
        return [f'<span class="{span_class}">{content}</span>']


class SpRenderer(ElementRenderer):
    def render_to_string(self, element: DocSp, flavor: str) -> str:
        return " " * max(element.count, 1)


class LinkedTextRenderer(ElementRenderer):
    def render_to_string(self, element: LinkedText, flavor: str) -> str:
        return self.workspace.render_elements_to_string(element.children, flavor)


class IncRenderer(ElementRenderer):
    """One ``#include`` line, linked to the file page when documented."""

    def render_to_lines(self, element: Inc, flavor: str) -> list[str]:
        permalink = None
        if element.refid:
            permalink = self.workspace.get_page_permalink(element.refid)
        content = self.workspace.render_string(element.text_content().strip(), flavor)
        if permalink:
            content = f'<a href="{permalink}">{content}</a>'
        if element.local:
            return [f'#include "{content}"']
        return [f"#include &lt;{content}&gt;"]


class ParamRenderer(ElementRenderer):
    def render_to_lines(self, element: Param, flavor: str) -> list[str]:
        text = self.workspace.render_element_to_string(element.type, flavor)
        if element.declname:
            text += f" {element.declname}"
            if element.array:
                text += element.array
            if element.defval is not None:
                text += "=" + self.workspace.render_element_to_string(
                    element.defval, flavor
                )
        return [text]


class ReferenceRenderer(ElementRenderer):
    """references and referencedby: a link to the referenced member."""

    def render_to_string(self, element: Reference, flavor: str) -> str:
        name = self.workspace.render_string(
            sanitize_anonymous_namespace(element.text_content().strip()), flavor
        )
        permalink = self.workspace.get_permalink(element.refid, "member")
        if not permalink:
            return name
        return f'<a href="{permalink}">{name}</a>'
