"""Read a Doxygen XML output folder into compound definitions."""

from __future__ import annotations

import logging
from pathlib import Path

from lxml import etree

from doxygen2docusaurus.elements import (
    CodeLine,
    Description,
    DocAnchor,
    DocBlockQuote,
    DocCaption,
    DocComputerOutput,
    DocEmoji,
    DocEmpty,
    DocEntry,
    DocFormula,
    DocHeading,
    DocHtmlOnly,
    DocImage,
    DocInternal,
    DocList,
    DocListItem,
    DocMarkup,
    DocPara,
    DocParamList,
    DocParamListItem,
    DocParamName,
    DocParamNameList,
    DocParamType,
    DocPreformatted,
    DocRefText,
    DocRow,
    DocSect1,
    DocSect2,
    DocSect3,
    DocSect4,
    DocSect5,
    DocSect6,
    DocSimpleSect,
    DocSp,
    DocSubstring,
    DocTable,
    DocTerm,
    DocTitle,
    DocTocItem,
    DocTocList,
    DocUrlLink,
    DocVariableList,
    DocVarListEntry,
    DocVerbatim,
    DocXRefSect,
    Element,
    Highlight,
    Inc,
    LinkedText,
    Listing,
    Param,
    Reference,
    ReferencedBy,
    RefText,
)
from doxygen2docusaurus.models import (
    CompoundDef,
    CompoundRef,
    DoxygenData,
    EnumValueDef,
    InnerRef,
    Location,
    MemberDef,
    MemberRefDef,
    SectionDef,
)

logger = logging.getLogger(__name__)

ELEMENT_CLASSES: dict[str, type[Element]] = {
    "briefdescription": Description,
    "detaileddescription": Description,
    "inbodydescription": Description,
    "description": Description,
    "parameterdescription": Description,
    "xrefdescription": Description,
    "para": DocPara,
    "internal": DocInternal,
    "title": DocTitle,
    "xreftitle": DocTitle,
    "term": DocTerm,
    "heading": DocHeading,
    "sect1": DocSect1,
    "sect2": DocSect2,
    "sect3": DocSect3,
    "sect4": DocSect4,
    "sect5": DocSect5,
    "sect6": DocSect6,
    "bold": DocMarkup,
    "emphasis": DocMarkup,
    "underline": DocMarkup,
    "strike": DocMarkup,
    "s": DocMarkup,
    "del": DocMarkup,
    "ins": DocMarkup,
    "subscript": DocMarkup,
    "superscript": DocMarkup,
    "small": DocMarkup,
    "center": DocMarkup,
    "computeroutput": DocComputerOutput,
    "hruler": DocEmpty,
    "linebreak": DocEmpty,
    "nonbreakablespace": DocEmpty,
    "ulink": DocUrlLink,
    "ref": DocRefText,
    "anchor": DocAnchor,
    "formula": DocFormula,
    "emoji": DocEmoji,
    "image": DocImage,
    "sp": DocSp,
    "itemizedlist": DocList,
    "orderedlist": DocList,
    "listitem": DocListItem,
    "table": DocTable,
    "caption": DocCaption,
    "row": DocRow,
    "entry": DocEntry,
    "simplesect": DocSimpleSect,
    "parameterlist": DocParamList,
    "parameteritem": DocParamListItem,
    "parameternamelist": DocParamNameList,
    "parametername": DocParamName,
    "parametertype": DocParamType,
    "xrefsect": DocXRefSect,
    "verbatim": DocVerbatim,
    "preformatted": DocPreformatted,
    "blockquote": DocBlockQuote,
    "htmlonly": DocHtmlOnly,
    "variablelist": DocVariableList,
    "varlistentry": DocVarListEntry,
    "toclist": DocTocList,
    "tocitem": DocTocItem,
    "programlisting": Listing,
    "codeline": CodeLine,
    "highlight": Highlight,
}

SUBSTRINGS: dict[str, str] = {
    "lsquo": "‘",
    "rsquo": "’",
    "ldquo": "“",
    "rdquo": "”",
    "ndash": "–",
    "mdash": "—",
    "copy": "©",
    "trademark": "™",
    "tm": "™",
    "registered": "®",
    "plusmn": "±",
    "times": "×",
    "divide": "÷",
    "deg": "°",
    "laquo": "«",
    "raquo": "»",
    "hellip": "…",
    "middot": "·",
    "bull": "•",
    "larr": "←",
    "rarr": "→",
    "uarr": "↑",
    "darr": "↓",
    "harr": "↔",
    "le": "≤",
    "ge": "≥",
    "ne": "≠",
    "infin": "∞",
    "sect": "§",
    "euro": "€",
}

INNER_TAGS = (
    "innerdir",
    "innerfile",
    "innerclass",
    "innerconcept",
    "innernamespace",
    "innerpage",
    "innergroup",
    "innermodule",
)

SKIPPED_FILES = ("index.xml", "Doxyfile.xml")


def _to_int(value: str | None) -> int | None:
    if value is None or not value.strip().isdigit():
        return None
    return int(value)


class DoxygenXmlReader:
    """Parses compounddef files into the typed tree."""

    def __init__(self) -> None:
        self.warned_tags: set[str] = set()
        self.images: set[str] = set()

    def read_folder(self, folder: Path) -> DoxygenData:
        """Parse every compound file in a Doxygen XML output folder."""
        if not folder.is_dir():
            msg = f"Doxygen XML folder not found: {folder}"
            raise SystemExit(msg)

        xml_files = sorted(
            p for p in folder.glob("*.xml") if p.name not in SKIPPED_FILES
        )
        if not xml_files:
            msg = f"No .xml files found under: {folder}"
            raise SystemExit(msg)

        data = DoxygenData(compound_defs=[])
        for path in xml_files:
            version, compound_defs = self.read_file(path)
            if version and not data.doxygen_version:
                data.doxygen_version = version
            data.compound_defs.extend(compound_defs)

        doxyfile = folder / "Doxyfile.xml"
        if doxyfile.exists():
            options = read_doxyfile_options(doxyfile)
            data.project_name = options.get("PROJECT_NAME", "")
            data.project_brief = options.get("PROJECT_BRIEF", "")

        data.images = sorted(self.images)
        return data

    def read_file(self, path: Path) -> tuple[str, list[CompoundDef]]:
        """Parse one XML file, returning the Doxygen version and its compounds."""
        tree = etree.parse(str(path))
        root = tree.getroot()
        compound_defs = [
            self.parse_compound_def(node)
            for node in root.iterchildren(tag="compounddef")
        ]
        return root.get("version", ""), compound_defs

    def read_string(self, xml: str | bytes) -> list[CompoundDef]:
        if isinstance(xml, str):
            xml = xml.encode("utf-8")
        root = etree.fromstring(xml)
        return [
            self.parse_compound_def(node)
            for node in root.iterchildren(tag="compounddef")
        ]

    # Compound level

    def parse_compound_def(self, node: etree._Element) -> CompoundDef:
        compound_def = CompoundDef(
            id=node.get("id", ""),
            kind=node.get("kind", ""),
            compoundname="",
            language=node.get("language"),
            prot=node.get("prot"),
            attributes=dict(node.attrib),
        )
        for child in node.iterchildren(tag=etree.Element):
            tag = child.tag
            if tag == "compoundname":
                compound_def.compoundname = (child.text or "").strip()
            elif tag == "title":
                compound_def.title = "".join(child.itertext()).strip()
            elif tag == "basecompoundref":
                compound_def.basecompoundrefs.append(self._parse_compound_ref(child))
            elif tag == "derivedcompoundref":
                compound_def.derivedcompoundrefs.append(
                    self._parse_compound_ref(child)
                )
            elif tag == "includes":
                compound_def.includes.append(self._parse_element(child, Inc))
            elif tag == "includedby":
                compound_def.includedby.append(self._parse_element(child, Inc))
            elif tag in INNER_TAGS:
                compound_def.inner.setdefault(tag, []).append(
                    InnerRef(
                        name=(child.text or "").strip(),
                        refid=child.get("refid", ""),
                        prot=child.get("prot"),
                    )
                )
            elif tag == "templateparamlist":
                compound_def.templateparamlist = self._parse_template_params(child)
            elif tag == "sectiondef":
                compound_def.sectiondefs.append(self.parse_section_def(child))
            elif tag == "briefdescription":
                compound_def.briefdescription = self._parse_description(child)
            elif tag == "detaileddescription":
                compound_def.detaileddescription = self._parse_description(child)
            elif tag == "location":
                compound_def.location = self._parse_location(child)
            elif tag == "programlisting":
                compound_def.programlisting = self._parse_element(child, Listing)
        return compound_def

    def parse_section_def(self, node: etree._Element) -> SectionDef:
        section_def = SectionDef(kind=node.get("kind", ""))
        for child in node.iterchildren(tag=etree.Element):
            if child.tag == "header":
                section_def.header = "".join(child.itertext()).strip()
            elif child.tag == "description":
                section_def.description = self._parse_description(child)
            elif child.tag == "memberdef":
                section_def.items.append(self.parse_member_def(child))
            elif child.tag == "member":
                name = child.findtext("name") or ""
                section_def.items.append(
                    MemberRefDef(
                        refid=child.get("refid", ""),
                        kind=child.get("kind", ""),
                        name=name.strip(),
                    )
                )
        return section_def

    def parse_member_def(self, node: etree._Element) -> MemberDef:
        member_def = MemberDef(
            kind=node.get("kind", ""),
            id=node.get("id", ""),
            name="",
            prot=node.get("prot", "public"),
            static=node.get("static") == "yes",
            attributes=dict(node.attrib),
        )
        for child in node.iterchildren(tag=etree.Element):
            tag = child.tag
            if tag == "name":
                member_def.name = (child.text or "").strip()
            elif tag == "qualifiedname":
                member_def.qualifiedname = (child.text or "").strip()
            elif tag == "definition":
                member_def.definition = child.text or ""
            elif tag == "argsstring":
                member_def.argsstring = child.text or ""
            elif tag == "type":
                member_def.type = self._parse_linked_text(child)
            elif tag == "initializer":
                member_def.initializer = self._parse_linked_text(child)
            elif tag == "templateparamlist":
                member_def.templateparamlist = self._parse_template_params(child)
            elif tag == "param":
                member_def.params.append(self._parse_param(child))
            elif tag == "enumvalue":
                member_def.enumvalues.append(self._parse_enum_value(child))
            elif tag == "briefdescription":
                member_def.briefdescription = self._parse_description(child)
            elif tag == "detaileddescription":
                member_def.detaileddescription = self._parse_description(child)
            elif tag == "inbodydescription":
                member_def.inbodydescription = self._parse_description(child)
            elif tag == "location":
                member_def.location = self._parse_location(child)
            elif tag == "references":
                member_def.references.append(self._parse_element(child, Reference))
            elif tag == "referencedby":
                member_def.referencedby.append(
                    self._parse_element(child, ReferencedBy)
                )
        return member_def

    def _parse_enum_value(self, node: etree._Element) -> EnumValueDef:
        enum_value = EnumValueDef(
            id=node.get("id", ""),
            name="",
            prot=node.get("prot", "public"),
        )
        for child in node.iterchildren(tag=etree.Element):
            if child.tag == "name":
                enum_value.name = (child.text or "").strip()
            elif child.tag == "initializer":
                enum_value.initializer = self._parse_linked_text(child)
            elif child.tag == "briefdescription":
                enum_value.briefdescription = self._parse_description(child)
            elif child.tag == "detaileddescription":
                enum_value.detaileddescription = self._parse_description(child)
        return enum_value

    def _parse_compound_ref(self, node: etree._Element) -> CompoundRef:
        return CompoundRef(
            name=(node.text or "").strip(),
            refid=node.get("refid"),
            prot=node.get("prot", "public"),
            virt=node.get("virt", "non-virtual"),
        )

    def _parse_location(self, node: etree._Element) -> Location:
        return Location(
            file=node.get("file", ""),
            line=_to_int(node.get("line")),
            column=_to_int(node.get("column")),
            declfile=node.get("declfile"),
            declline=_to_int(node.get("declline")),
            bodyfile=node.get("bodyfile"),
            bodystart=_to_int(node.get("bodystart")),
            bodyend=_to_int(node.get("bodyend")),
        )

    def _parse_template_params(self, node: etree._Element) -> list[Param]:
        return [self._parse_param(p) for p in node.iterchildren(tag="param")]

    def _parse_param(self, node: etree._Element) -> Param:
        param = Param(tag="param", attributes=dict(node.attrib))
        for child in node.iterchildren(tag=etree.Element):
            tag = child.tag
            if tag == "type":
                param.type = self._parse_linked_text(child)
            elif tag == "declname":
                param.declname = (child.text or "").strip()
            elif tag == "defname":
                param.defname = (child.text or "").strip()
            elif tag == "array":
                param.array = child.text or ""
            elif tag == "defval":
                param.defval = self._parse_linked_text(child)
            elif tag == "typeconstraint":
                param.typeconstraint = self._parse_linked_text(child)
            elif tag == "briefdescription":
                param.briefdescription = self._parse_description(child)
        return param

    def _parse_linked_text(self, node: etree._Element) -> LinkedText:
        linked_text = LinkedText(tag=node.tag, attributes=dict(node.attrib))
        if node.text:
            linked_text.children.append(node.text)
        for child in node.iterchildren():
            if child.tag == "ref":
                linked_text.children.append(
                    RefText(
                        tag="ref",
                        attributes=dict(child.attrib),
                        children=[child.text or ""],
                    )
                )
            elif isinstance(child.tag, str):
                linked_text.children.append("".join(child.itertext()))
            if child.tail:
                linked_text.children.append(child.tail)
        return linked_text

    def _parse_description(self, node: etree._Element) -> Description:
        return self._parse_element(node, Description)

    # Description content

    def _parse_element(self, node: etree._Element, cls: type[Element]) -> Element:
        if cls is DocImage:
            name = node.get("name")
            if name and node.get("type", "html") == "html":
                self.images.add(name)
        element = cls(tag=node.tag, attributes=dict(node.attrib))
        element.children = self._parse_children(node)
        return element

    def _parse_children(self, node: etree._Element) -> list[Element | str]:
        children: list[Element | str] = []
        if node.text:
            children.append(node.text)
        for child in node.iterchildren():
            if isinstance(child.tag, str):
                children.extend(self._parse_child(child))
            if child.tail:
                children.append(child.tail)
        return children

    def _parse_child(self, node: etree._Element) -> list[Element | str]:
        tag = node.tag
        cls = ELEMENT_CLASSES.get(tag)
        if cls is None and tag in SUBSTRINGS:
            return [DocSubstring(tag=tag, text=SUBSTRINGS[tag])]
        if cls is None:
            if tag not in self.warned_tags:
                self.warned_tags.add(tag)
                logger.warning("Element <%s> not supported, content inlined", tag)
            return self._parse_children(node)
        return [self._parse_element(node, cls)]


def read_doxyfile_options(path: Path) -> dict[str, str]:
    """Return the single-valued options of a Doxyfile.xml."""
    options: dict[str, str] = {}
    root = etree.parse(str(path)).getroot()
    for option in root.iterchildren(tag="option"):
        values = [v.text or "" for v in option.iterchildren(tag="value")]
        if len(values) == 1:
            options[option.get("id", "")] = values[0]
    return options


def parse_doxygen_xml_folder(folder: Path) -> DoxygenData:
    return DoxygenXmlReader().read_folder(folder)
