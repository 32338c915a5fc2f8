"""Typed element tree for Doxygen description and code content.

Every XML element the reader understands becomes an instance of one of the
classes below. Renderers are registered against these classes and are found
by walking the class hierarchy, so families of tags (the six section levels,
the markup spans) share one renderer registered on their common base.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeVar

E = TypeVar("E", bound="Element")


@dataclass(eq=False)
class Element:
    """A node of the parsed tree: an XML tag, its attributes and its content."""

    tag: str = ""
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[Element | str] = field(default_factory=list)

    def attr(self, name: str, default: str | None = None) -> str | None:
        return self.attributes.get(name, default)

    def find(self, cls: type[E]) -> E | None:
        """Return the first direct child of the given class."""
        for child in self.children:
            if isinstance(child, cls):
                return child
        return None

    def find_all(self, cls: type[E]) -> list[E]:
        return [child for child in self.children if isinstance(child, cls)]

    def text_content(self) -> str:
        """Concatenate all text below this node, ignoring markup."""
        parts: list[str] = []
        for child in self.children:
            if isinstance(child, str):
                parts.append(child)
            else:
                parts.append(child.text_content())
        return "".join(parts)


# Descriptions and paragraphs


class Description(Element):
    """briefdescription, detaileddescription, inbodydescription and friends."""


class DocPara(Element):
    """A paragraph; mixes inline text with block content."""


class DocInternal(Element):
    """Content marked with @internal."""


class DocTitle(Element):
    """A title of a section, simple section or cross-reference section."""


class DocTerm(DocTitle):
    """The term of a variable list entry."""


class DocHeading(Element):
    """An HTML/Markdown heading inside a description."""

    @property
    def level(self) -> int:
        return int(self.attributes.get("level", "1"))


class DocSect(Element):
    """Base of the nested documentation sections."""

    level = 0

    @property
    def id(self) -> str:
        return self.attributes.get("id", "")


class DocSect1(DocSect):
    level = 1


class DocSect2(DocSect):
    level = 2


class DocSect3(DocSect):
    level = 3


class DocSect4(DocSect):
    level = 4


class DocSect5(DocSect):
    level = 5


class DocSect6(DocSect):
    level = 6


# Inline content


class DocMarkup(Element):
    """Inline markup spans: bold, emphasis, underline, subscript and so on."""


class DocComputerOutput(DocMarkup):
    """Inline code."""


@dataclass(eq=False)
class DocSubstring(DocMarkup):
    """A character entity such as ``<ndash/>`` carrying its text."""

    text: str = ""


class DocEmpty(Element):
    """Content-less elements: horizontal rule, line break, non-breaking space."""


class DocUrlLink(Element):
    @property
    def url(self) -> str:
        return self.attributes.get("url", "")


class DocRefText(Element):
    """A cross-reference inside a description."""

    @property
    def refid(self) -> str:
        return self.attributes.get("refid", "")

    @property
    def kindref(self) -> str:
        return self.attributes.get("kindref", "compound")


class RefText(DocRefText):
    """A cross-reference inside a type, initializer or default value."""


class DocAnchor(Element):
    @property
    def id(self) -> str:
        return self.attributes.get("id", "")


class DocFormula(Element):
    pass


class DocEmoji(Element):
    pass


class DocImage(Element):
    pass


class DocSp(Element):
    """Whitespace inside code lines."""

    @property
    def count(self) -> int:
        return int(self.attributes.get("value", "1"))


# Block content


class DocList(Element):
    """itemizedlist and orderedlist."""


class DocListItem(Element):
    pass


class DocTable(Element):
    pass


class DocCaption(Element):
    pass


class DocRow(Element):
    pass


class DocEntry(Element):
    pass


class DocSimpleSect(Element):
    """@see, @return, @note and the other simple sections."""

    @property
    def kind(self) -> str:
        return self.attributes.get("kind", "")


class DocParamList(Element):
    """parameterlist: params, template params, return values, exceptions."""

    @property
    def kind(self) -> str:
        return self.attributes.get("kind", "param")


class DocParamListItem(Element):
    pass


class DocParamNameList(Element):
    pass


class DocParamName(Element):
    pass


class DocParamType(Element):
    pass


class DocXRefSect(Element):
    """A @todo, @deprecated or @bug entry linking to its collected page."""

    @property
    def id(self) -> str:
        return self.attributes.get("id", "")


class DocVerbatim(Element):
    pass


class DocPreformatted(Element):
    pass


class DocBlockQuote(Element):
    pass


class DocHtmlOnly(Element):
    pass


class DocVariableList(Element):
    """Pairs of varlistentry terms and listitem bodies."""


class DocVarListEntry(Element):
    pass


class DocTocList(Element):
    pass


class DocTocItem(Element):
    @property
    def id(self) -> str:
        return self.attributes.get("id", "")


# Code content


class Listing(Element):
    """A program listing made of code lines."""

    @property
    def filename(self) -> str | None:
        return self.attributes.get("filename")


class CodeLine(Element):
    @property
    def lineno(self) -> int | None:
        value = self.attributes.get("lineno")
        return int(value) if value is not None else None


class Highlight(Element):
    @property
    def highlight_class(self) -> str:
        return self.attributes.get("class", "normal")


# Compound and member level content


class LinkedText(Element):
    """Text with embedded references: type, initializer, defval."""


class Inc(Element):
    """An included or including file."""

    @property
    def refid(self) -> str | None:
        return self.attributes.get("refid")

    @property
    def local(self) -> bool:
        return self.attributes.get("local") == "yes"


class Reference(Element):
    """A member referenced by the current member's body."""

    @property
    def refid(self) -> str:
        return self.attributes.get("refid", "")


class ReferencedBy(Reference):
    pass


@dataclass(eq=False)
class Param(Element):
    """A function or template parameter."""

    type: LinkedText | None = None
    declname: str | None = None
    defname: str | None = None
    array: str | None = None
    defval: LinkedText | None = None
    typeconstraint: LinkedText | None = None
    briefdescription: Description | None = None
