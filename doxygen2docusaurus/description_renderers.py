"""Renderers for description content: paragraphs, markup, lists, sections."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from doxygen2docusaurus.elements import (
    DocAnchor,
    DocBlockQuote,
    DocEmoji,
    DocEmpty,
    DocFormula,
    DocHeading,
    DocHtmlOnly,
    DocImage,
    DocList,
    DocListItem,
    DocMarkup,
    DocPara,
    DocRefText,
    DocSect,
    DocSimpleSect,
    DocSubstring,
    DocTitle,
    DocTocItem,
    DocUrlLink,
    DocXRefSect,
    Description,
    Element,
)
from doxygen2docusaurus.permalinks import get_permalink_anchor
from doxygen2docusaurus.text_processing import (
    is_url,
    strip_leading_and_trailing_new_lines,
    strip_trailing_period,
)

if TYPE_CHECKING:
    from doxygen2docusaurus.workspace import Workspace

logger = logging.getLogger(__name__)

INLINE_CLASSES = (
    DocUrlLink,
    DocMarkup,
    DocImage,
    DocAnchor,
    DocFormula,
    DocRefText,
    DocEmoji,
    DocEmpty,
)

MARKUP_HTML_TAGS = {
    "bold": "b",
    "emphasis": "em",
    "underline": "u",
    "subscript": "sub",
    "superscript": "sup",
    "strike": "s",
    "s": "s",
    "del": "del",
    "ins": "ins",
    "small": "small",
    "center": "center",
}

SIMPLE_SECT_TITLES = {
    "see": "See Also",
    "return": "Returns",
    "author": "Author",
    "authors": "Authors",
    "version": "Version",
    "since": "Since",
    "date": "Date",
    "pre": "Precondition",
    "post": "Postcondition",
    "copyright": "Copyright",
    "invariant": "Invariant",
    "remark": "Remarks",
}

ADMONITIONS = {
    "note": "info",
    "warning": "warning",
    "attention": "danger",
    "important": "tip",
}


class ElementRenderer:
    """Base for all renderers; gives access to the workspace for recursion."""

    def __init__(self, workspace: Workspace) -> None:
        self.workspace = workspace


def is_inline(child: Element | str) -> bool:
    """Return True for content that flows inside a paragraph."""
    if isinstance(child, str):
        return True
    if isinstance(child, DocEmpty) and child.tag == "hruler":
        return False
    return isinstance(child, INLINE_CLASSES)


def definition_list_lines(title: str, body: str, css_class: str) -> list[str]:
    lines = [f'<dl class="{css_class}">', f"<dt>{title}</dt>"]
    if not body:
        lines.append("<dd></dd>")
    elif "\n" not in body:
        lines.append(f"<dd>{body}</dd>")
    else:
        lines.append("<dd>")
        lines.extend(body.split("\n"))
        lines.append("</dd>")
    lines.append("</dl>")
    return lines


def render_without_para(
    workspace: Workspace, elements: list[Element | str], flavor: str
) -> str:
    """Render content with its paragraphs unwrapped (no <p> tags)."""
    parts: list[str] = []
    for element in elements:
        renderer = None
        if isinstance(element, DocPara):
            renderer = workspace.registry.lines_renderer_for(element)
        if isinstance(renderer, DocParaRenderer):
            lines = renderer.render_to_lines(element, flavor, skip_para=True)
            text = "\n".join(lines)
        else:
            text = workspace.render_element_to_string(element, flavor)
        text = text.strip()
        if text:
            parts.append(text)
    return "\n\n".join(parts)


class DescriptionRenderer(ElementRenderer):
    def render_to_lines(self, element: Description, flavor: str) -> list[str]:
        children = [c for c in element.children if not isinstance(c, DocTitle)]
        return self.workspace.render_elements_to_lines(children, flavor)


class DocParaRenderer(ElementRenderer):
    """Group inline runs into <p> blocks; block children stand alone."""

    def render_to_lines(
        self, element: DocPara, flavor: str, skip_para: bool = False
    ) -> list[str]:
        lines: list[str] = []
        text = ""
        for child in element.children:
            if is_inline(child):
                text += self.workspace.render_element_to_string(child, "html")
                continue
            lines.extend(self._flush(text, skip_para))
            text = ""
            lines.extend(self.workspace.render_element_to_lines(child, flavor))
        lines.extend(self._flush(text, skip_para))
        return lines

    def _flush(self, text: str, skip_para: bool) -> list[str]:
        text = text.strip()
        if not text:
            return []
        if skip_para:
            return ["", text]
        return ["", f"<p>{text}</p>", ""]


class DocMarkupRenderer(ElementRenderer):
    def render_to_string(self, element: DocMarkup, flavor: str) -> str:
        html_tag = MARKUP_HTML_TAGS.get(element.tag)
        content = self.workspace.render_elements_to_string(element.children, flavor)
        if html_tag is None:
            logger.error("Markup <%s> not supported, rendered as text", element.tag)
            return content
        return f"<{html_tag}>{content}</{html_tag}>"


class DocComputerOutputRenderer(ElementRenderer):
    def render_to_string(self, element: DocMarkup, flavor: str) -> str:
        content = self.workspace.render_elements_to_string(element.children, flavor)
        return f'<span class="doxyComputerOutput">{content}</span>'


class DocSubstringRenderer(ElementRenderer):
    def render_to_string(self, element: DocSubstring, flavor: str) -> str:
        return element.text


class DocEmptyRenderer(ElementRenderer):
    def render_to_string(self, element: DocEmpty, flavor: str) -> str:
        if element.tag == "hruler":
            return "\n<hr/>\n"
        if element.tag == "linebreak":
            return "\n<br/>"
        if element.tag == "nonbreakablespace":
            return "&nbsp;"
        logger.error("Empty element <%s> not supported", element.tag)
        return ""


class DocUrlLinkRenderer(ElementRenderer):
    def render_to_string(self, element: DocUrlLink, flavor: str) -> str:
        content = self.workspace.render_elements_to_string(element.children, flavor)
        return f'<a href="{element.url}">{content}</a>'


class DocRefTextRenderer(ElementRenderer):
    """A link to a compound or member; plain text when unresolved."""

    def render_to_string(self, element: DocRefText, flavor: str) -> str:
        content = self.workspace.render_elements_to_string(element.children, flavor)
        permalink = None
        if element.refid:
            permalink = self.workspace.get_permalink(element.refid, element.kindref)
        if permalink:
            return f'<a href="{permalink}">{content}</a>'
        return content


class DocAnchorRenderer(ElementRenderer):
    def render_to_lines(self, element: DocAnchor, flavor: str) -> list[str]:
        return [f'<a id="{get_permalink_anchor(element.id)}"></a>']


class DocFormulaRenderer(ElementRenderer):
    def render_to_string(self, element: DocFormula, flavor: str) -> str:
        formula = self.workspace.render_string(element.text_content(), "html")
        return f"<code>{formula}</code>"


class DocEmojiRenderer(ElementRenderer):
    def render_to_string(self, element: DocEmoji, flavor: str) -> str:
        unicode = element.attr("unicode", "")
        return f'<span class="doxyEmoji">{unicode}</span>'


class DocImageRenderer(ElementRenderer):
    def render_to_string(self, element: DocImage, flavor: str) -> str:
        image_type = element.attr("type", "html")
        if image_type != "html":
            if image_type not in ("latex", "rtf", "docbook", "xml"):
                logger.error("Image type %s not supported", image_type)
            return ""

        text = "\n<figure>\n  <img"
        name = element.attr("name")
        if name:
            if is_url(name):
                src = name
            else:
                options = self.workspace.options
                src = f"{options.base_url}{options.images_folder_path}/{name}"
            text += f' src="{src}"'
        for attr_name in ("width", "height", "alt"):
            value = element.attr(attr_name)
            if value is not None:
                text += f' {attr_name}="{value}"'
        if element.attr("inline") == "yes":
            text += ' class="inline"'
        text += "></img>"
        caption = self.workspace.render_elements_to_string(
            element.children, "html"
        ).strip()
        if caption:
            text += f"\n  <figcaption>{caption}</figcaption>"
        text += "\n</figure>"
        return text


class DocHtmlOnlyRenderer(ElementRenderer):
    def render_to_string(self, element: DocHtmlOnly, flavor: str) -> str:
        return element.text_content()


class DocHeadingRenderer(ElementRenderer):
    def render_to_lines(self, element: DocHeading, flavor: str) -> list[str]:
        if element.level == 1:
            logger.debug("Level 1 heading interferes with the page title")
        title = self.workspace.render_elements_to_string(element.children, "markdown")
        return ["", "#" * element.level + " " + title]


class DocSectRenderer(ElementRenderer):
    """sect1 to sect6, rendered one heading level below their nesting."""

    def render_to_lines(self, element: DocSect, flavor: str) -> list[str]:
        lines: list[str] = []
        title_element = element.find(DocTitle)
        title = strip_trailing_period(
            self.workspace.render_element_to_string(title_element, "markdown")
        )
        if title:
            hashes = "#" * (element.level + 1)
            lines.append("")
            if element.id:
                lines.append(f"{hashes} {title} {{#{get_permalink_anchor(element.id)}}}")
            else:
                lines.append(f"{hashes} {title}")
        lines.append("")
        children = [c for c in element.children if not isinstance(c, DocTitle)]
        lines.extend(self.workspace.render_elements_to_lines(children, flavor))
        return lines


class DocTitleRenderer(ElementRenderer):
    def render_to_lines(self, element: DocTitle, flavor: str) -> list[str]:
        return [self.workspace.render_elements_to_string(element.children, flavor)]


class DocInternalRenderer(ElementRenderer):
    def render_to_lines(self, element: Element, flavor: str) -> list[str]:
        return self.workspace.render_elements_to_lines(element.children, flavor)


class DocBlockQuoteRenderer(ElementRenderer):
    def render_to_lines(self, element: DocBlockQuote, flavor: str) -> list[str]:
        lines = ['<blockquote class="doxyBlockQuote">']
        lines.extend(self.workspace.render_elements_to_lines(element.children, "html"))
        lines.append("</blockquote>")
        return lines


class DocVerbatimRenderer(ElementRenderer):
    """verbatim and preformatted blocks."""

    def render_to_string(self, element: Element, flavor: str) -> str:
        content = strip_leading_and_trailing_new_lines(
            self.workspace.render_elements_to_string(element.children, "html")
        )
        return f"\n\n<pre><code>{content}\n</code></pre>\n"


class DocListRenderer(ElementRenderer):
    def render_to_lines(self, element: DocList, flavor: str) -> list[str]:
        items = element.find_all(DocListItem)
        check_class = ""
        if any(item.attr("override") for item in items):
            check_class = " check"

        lines = [""]
        if element.tag == "orderedlist":
            list_type = element.attr("type") or "1"
            lines.append(f'<ol class="doxyList" type="{list_type}">')
        else:
            lines.append(f'<ul class="doxyList{check_class}">')

        for item in items:
            paras = [c for c in item.children if not isinstance(c, str)]
            if not paras:
                continue
            override = item.attr("override")
            item_class = f' class="{override}"' if override else ""
            body = render_without_para(self.workspace, paras, "html")
            lines.append(f"<li{item_class}>{body}</li>")

        lines.append("</ol>" if element.tag == "orderedlist" else "</ul>")
        return lines


class DocSimpleSectRenderer(ElementRenderer):
    def render_to_lines(self, element: DocSimpleSect, flavor: str) -> list[str]:
        lines = [""]
        kind = element.kind
        children = [c for c in element.children if not isinstance(c, DocTitle)]
        if kind in SIMPLE_SECT_TITLES or kind == "par":
            if kind == "par":
                title = strip_trailing_period(
                    self.workspace.render_element_to_string(
                        element.find(DocTitle), "html"
                    )
                )
            else:
                title = SIMPLE_SECT_TITLES[kind]
            body = self.workspace.render_elements_to_string(children, "html").strip()
            lines.extend(definition_list_lines(title, body, "doxySectionUser"))
        elif kind in ADMONITIONS:
            body = self.workspace.render_elements_to_string(children, "html").strip()
            lines.extend(["", f":::{ADMONITIONS[kind]}", body, ":::"])
        else:
            logger.error("Simple section kind %s not supported", kind)
        lines.append("")
        return lines


class DocXRefSectRenderer(ElementRenderer):
    def render_to_lines(self, element: DocXRefSect, flavor: str) -> list[str]:
        title = self.workspace.render_string(
            (element.find(DocTitle) or DocTitle()).text_content() or "???", "html"
        )
        permalink = self.workspace.get_permalink(element.id, "xrefsect")
        link = f'<a href="{permalink}">{title}</a>' if permalink else title
        lines = [
            "",
            '<div class="doxyXrefSect">',
            '<dl class="doxyXrefSectList">',
            f'<dt class="doxyXrefSectTitle">{link}</dt>',
            '<dd class="doxyXrefSectDescription">',
        ]
        description = element.find(Description)
        if description is not None:
            lines.append(
                self.workspace.render_element_to_string(description, "html").strip()
            )
        lines.extend(["</dd>", "</dl>", "</div>"])
        return lines


class DocTocListRenderer(ElementRenderer):
    def render_to_lines(self, element: Element, flavor: str) -> list[str]:
        lines = ["", "", '<ul class="doxyTocList">']
        for item in element.find_all(DocTocItem):
            anchor = get_permalink_anchor(item.id)
            content = self.workspace.render_elements_to_string(
                item.children, "html"
            ).strip()
            lines.append(
                f'<li><a class="doxyTocListItem" href="#{anchor}">{content}</a></li>'
            )
        lines.append("</ul>")
        return lines
