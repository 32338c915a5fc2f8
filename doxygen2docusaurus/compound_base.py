"""Common state and rendering helpers of the compound view models."""

from __future__ import annotations

import logging
import posixpath
from typing import TYPE_CHECKING, Any

from doxygen2docusaurus.elements import (
    Description,
    DocPara,
    DocSect1,
    DocTitle,
    Element,
    Inc,
    Param,
    Reference,
    ReferencedBy,
)
from doxygen2docusaurus.models import CompoundDef, InnerRef, Location, MemberDef
from doxygen2docusaurus.permalinks import sanitize_anonymous_namespace
from doxygen2docusaurus.sections import Section, regroup_section_defs
from doxygen2docusaurus.text_processing import join_with_last

if TYPE_CHECKING:
    from doxygen2docusaurus.collection_base import CollectionBase
    from doxygen2docusaurus.workspace import Workspace

logger = logging.getLogger(__name__)

# Inner index suffix: (compounddef tag, header)
INNER_INDICES = {
    "Dirs": ("innerdir", "Folders"),
    "Files": ("innerfile", "Files"),
    "Namespaces": ("innernamespace", "Namespaces"),
    "Classes": ("innerclass", "Classes"),
    "Groups": ("innergroup", "Topics"),
    "Pages": ("innerpage", "Pages"),
}


def has_description_content(description: Description | None) -> bool:
    """True if a description holds any text or non-paragraph content."""
    if description is None:
        return False
    return _has_content(description)


def _has_content(element: Element) -> bool:
    for child in element.children:
        if isinstance(child, str):
            if child.strip():
                return True
        elif isinstance(child, DocTitle):
            continue
        elif not isinstance(child, DocPara) or _has_content(child):
            return True
    return False


def _has_sect1(description: Description | None) -> bool:
    if description is None:
        return False
    for child in description.children:
        if isinstance(child, DocSect1):
            return True
        if isinstance(child, DocPara) and child.find(DocSect1) is not None:
            return True
    return False


def template_parameter_text(param: Param, with_defaults: bool = False) -> str:
    text = param.type.text_content() if param.type is not None else ""
    if param.declname:
        text += f" {param.declname}"
    if with_defaults and param.defval is not None:
        text += " = " + param.defval.text_content()
    return text


def template_parameter_name(param: Param) -> str:
    if param.declname:
        name = param.declname
    else:
        name = param.type.text_content() if param.type is not None else ""
    return name.replace("class ", "").replace("typename ", "")


class CompoundBase:
    """A class, namespace, file, folder, group or page.

    Names and permalinks are computed when the object is created. Content
    that may refer to other compounds is rendered later, in
    ``initialize_late``, once every compound exists.
    """

    # Compounds of kinds that set this are hidden when they have no content.
    retract_when_empty = False

    def __init__(self, collection: CollectionBase, compound_def: CompoundDef) -> None:
        self.collection = collection
        self._compound_def: CompoundDef | None = compound_def

        self.id = compound_def.id
        self.kind = compound_def.kind
        self.compound_name = sanitize_anonymous_namespace(compound_def.compoundname)
        self.title_html: str | None = None
        if compound_def.title is not None:
            self.title_html = self.workspace.render_string(compound_def.title, "html")
        self.location_file_path: str | None = None
        if compound_def.location is not None:
            self.location_file_path = compound_def.location.file

        self.parent: CompoundBase | None = None
        self.children: list[CompoundBase] = []
        self.children_ids: list[str] = []

        self.relative_permalink: str | None = None
        self.docusaurus_id: str | None = None
        self.sidebar_label: str | None = None
        self.index_name = ""
        self.tree_entry_name = ""
        self.page_title = ""

        self.brief_html: str | None = None
        self.detailed_lines: list[str] | None = None
        self.location_lines: list[str] | None = None
        self.location_set: set[str] = set()
        self.includes: list[Inc] = []
        self.inner: dict[str, list[InnerRef]] = {
            tag: refs for tag, refs in compound_def.inner.items() if refs
        }
        self.template_param_list: list[Param] | None = compound_def.templateparamlist
        self.has_sect1_in_description = _has_sect1(compound_def.detaileddescription)
        self.sections: list[Section] = []

    @property
    def workspace(self) -> Workspace:
        return self.collection.workspace

    def create_sections(self, class_name: str | None = None) -> None:
        assert self._compound_def is not None
        section_defs = regroup_section_defs(self._compound_def.sectiondefs, class_name)
        sections = [Section(self, section_def) for section_def in section_defs]
        self.sections = sorted(sections, key=lambda s: s.order)

    # Phase 3

    def has_any_content(self) -> bool:
        """Content check on the raw definition, before late initialization."""
        compound_def = self._compound_def
        if compound_def is not None:
            if has_description_content(compound_def.briefdescription):
                return True
            if has_description_content(compound_def.detaileddescription):
                return True
        return any(section.has_definition_members() for section in self.sections)

    def retract(self) -> None:
        """Hide the compound from navigation and pages; it stays resolvable by id."""
        logger.debug("%s %s has no content, not shown", self.kind, self.compound_name)
        self.relative_permalink = None
        self.docusaurus_id = None
        self.sidebar_label = None

    def initialize_late(self) -> None:
        compound_def = self._compound_def
        if compound_def is None:
            return
        workspace = self.workspace

        brief = compound_def.briefdescription
        if brief is not None:
            paras = brief.find_all(DocPara)
            if paras:
                self.brief_html = workspace.render_elements_to_string(
                    paras[0].children, "html"
                ).strip()
            else:
                self.brief_html = workspace.render_element_to_string(brief, "html").strip()

        if compound_def.detaileddescription is not None:
            lines = workspace.render_element_to_lines(compound_def.detaileddescription, "html")
            if any(line.strip() for line in lines):
                self.detailed_lines = lines

        if self.kind not in ("page", "dir") and compound_def.location is not None:
            self.location_lines = self.render_location_to_lines(compound_def.location)

        for section_def in compound_def.sectiondefs:
            for item in section_def.items:
                if isinstance(item, MemberDef) and item.location is not None:
                    self.location_set.add(item.location.file)
                    if item.location.bodyfile is not None:
                        self.location_set.add(item.location.bodyfile)

        self.includes = list(compound_def.includes)

    def cleanup(self) -> None:
        self._compound_def = None

    # Rendering helpers

    def render_to_lines(self) -> list[str]:
        raise NotImplementedError

    def render_brief_description_to_string(
        self, brief_html: str | None, more_permalink: str | None = None
    ) -> str:
        if not brief_html:
            return ""
        text = f"<p>{brief_html}"
        if more_permalink:
            text += f' <a href="{more_permalink}">More...</a>'
        return text + "</p>"

    def render_detailed_description_to_lines(
        self,
        brief_html: str | None = None,
        detailed_lines: list[str] | None = None,
        show_header: bool = True,
        show_brief: bool = False,
    ) -> list[str]:
        lines: list[str] = []
        if show_header and (detailed_lines or (show_brief and brief_html)):
            lines.extend(["", "## Description {#details}"])
        if show_brief:
            if show_header:
                lines.append("")
            if brief_html:
                lines.append(f"<p>{brief_html}</p>")
        if detailed_lines:
            lines.append("")
            lines.extend(detailed_lines)
        return lines

    def has_inner_indices(self) -> bool:
        return len(self.inner) > 0

    def render_inner_indices_to_lines(self, suffixes: list[str]) -> list[str]:
        workspace = self.workspace
        handled = {INNER_INDICES[suffix][0] for suffix in suffixes}
        for tag in self.inner:
            if tag not in handled:
                logger.debug("%s not rendered for %s", tag, self.compound_name)

        lines: list[str] = []
        for suffix in suffixes:
            tag, header = INNER_INDICES[suffix]
            refs = self.inner.get(tag)
            if not refs:
                continue
            lines.extend(["", f"## {header} Index", "", '<table class="doxyMembersIndex">'])
            for ref in refs:
                lines.append("")
                inner_compound = workspace.compounds_by_id.get(ref.refid)
                if inner_compound is None:
                    logger.debug("Inner %s not found, rendered summarily", ref.refid)
                    lines.extend(
                        workspace.render_members_index_item_to_lines(
                            type="class",
                            name=workspace.render_string(ref.name, "html"),
                            children_lines=[],
                        )
                    )
                    continue
                lines.extend(self._render_inner_item_to_lines(inner_compound))
            lines.extend(["", "</table>"])
        return lines

    def _render_inner_item_to_lines(self, inner: CompoundBase) -> list[str]:
        workspace = self.workspace
        if inner.kind == "dir":
            item_type = "folder"
        elif inner.kind == "group":
            item_type = "&nbsp;"
        else:
            item_type = inner.kind
        permalink = workspace.get_page_permalink(inner.id)
        name = workspace.render_string(inner.index_name, "html")
        item_name = f'<a href="{permalink}">{name}</a>' if permalink else name
        children_lines: list[str] = []
        if inner.brief_html:
            more = f"{permalink}/#details" if permalink and inner.detailed_lines else None
            children_lines.append(self.render_brief_description_to_string(inner.brief_html, more))
        return workspace.render_members_index_item_to_lines(
            type=item_type, name=item_name, children_lines=children_lines
        )

    def has_sections(self) -> bool:
        return len(self.sections) > 0

    def render_section_indices_to_lines(self) -> list[str]:
        lines: list[str] = []
        for section in self.sections:
            lines.extend(section.render_index_to_lines())
        return lines

    def render_sections_to_lines(self) -> list[str]:
        lines: list[str] = []
        for section in self.sections:
            lines.extend(section.render_to_lines())
        return lines

    def render_includes_index_to_lines(self) -> list[str]:
        if not self.includes:
            return []
        include_lines = self.workspace.render_elements_to_lines(self.includes, "html")
        lines = ["", "## Included Headers", "", f'<div class="doxyIncludesList">{include_lines[0]}']
        lines.extend(include_lines[1:])
        lines.append("</div>")
        return lines

    def _line_link(self, file: Any, line: int, permalink: str | None) -> str:
        if permalink and line in file.listing_line_numbers:
            return f'<a href="{permalink}/#l{line:05d}">{line}</a>'
        return str(line)

    def _file_link(self, file_path: str, permalink: str | None) -> str:
        name = self.workspace.render_string(posixpath.basename(file_path), "html")
        if permalink:
            return f'<a href="{permalink}">{name}</a>'
        return name

    def render_location_to_lines(self, location: Location | None) -> list[str]:
        """The "Declaration/Definition at line N of file F." paragraph."""
        if location is None or "[" in location.file:
            return []
        workspace = self.workspace
        file = workspace.files_by_path.get(location.file)
        if file is None:
            logger.debug("File %s not a known location", location.file)
            return []
        permalink = workspace.get_page_permalink(file.id)

        if location.bodyfile is not None and location.bodyfile != location.file:
            text = "<p>Declaration "
        else:
            text = "<p>Definition "
        if location.line is not None:
            text += "at line " + self._line_link(file, location.line, permalink) + " of file "
        else:
            text += "in file "
        text += self._file_link(location.file, permalink)

        if location.bodyfile is not None and location.bodyfile != location.file:
            definition_file = workspace.files_by_path.get(location.bodyfile)
            if definition_file is not None:
                definition_permalink = workspace.get_page_permalink(definition_file.id)
                text += ", definition "
                if location.bodystart is not None:
                    text += (
                        "at line "
                        + self._line_link(
                            definition_file, location.bodystart, definition_permalink
                        )
                        + " of file "
                    )
                else:
                    text += "in file "
                text += self._file_link(location.bodyfile, definition_permalink)
            else:
                logger.debug("File %s not a known location", location.bodyfile)
        text += ".</p>"
        return ["", text]

    def render_generated_from_to_lines(self) -> list[str]:
        if not self.location_set:
            return []
        workspace = self.workspace
        plural = "s" if len(self.location_set) > 1 else ""
        lines = [
            "",
            "<hr/>",
            "",
            f"The documentation for this {self.kind} was generated from the "
            f"following file{plural}:",
            "",
            "<ul>",
        ]
        for file_path in sorted(self.location_set):
            file = workspace.files_by_path.get(file_path)
            permalink = workspace.get_page_permalink(file.id) if file is not None else None
            lines.append(f"<li>{self._file_link(file_path, permalink)}</li>")
        lines.append("</ul>")
        return lines

    def _render_reference_list(self, references: list[Reference]) -> list[str]:
        return [self.workspace.render_element_to_string(r, "html") for r in references]

    def render_references_to_string(self, references: list[Reference]) -> str:
        if not references:
            return ""
        items = self._render_reference_list(references)
        prefix = "Reference " if len(items) == 1 else "References "
        return f"<p>{prefix}{join_with_last(items)}.</p>"

    def render_referenced_by_to_string(self, referenced_by: list[ReferencedBy]) -> str:
        if not referenced_by:
            return ""
        items = self._render_reference_list(list(referenced_by))
        return f"<p>Referenced by {join_with_last(items)}.</p>"

    # Templates

    def is_template(self, template_param_list: list[Param] | None) -> bool:
        return bool(template_param_list)

    def render_template_parameters_to_string(
        self, template_param_list: list[Param] | None, with_defaults: bool = False
    ) -> str:
        if not template_param_list:
            return ""
        params = [template_parameter_text(p, with_defaults) for p in template_param_list]
        return f"<{', '.join(params)}>"

    def render_template_parameter_names_to_string(
        self, template_param_list: list[Param] | None
    ) -> str:
        if not template_param_list:
            return ""
        return f"<{', '.join(template_parameter_name(p) for p in template_param_list)}>"
