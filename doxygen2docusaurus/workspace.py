"""The view model of one generation run and the lookups shared by renderers."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import TYPE_CHECKING, Any

from doxygen2docusaurus.classes import Classes
from doxygen2docusaurus.collection_base import CollectionBase
from doxygen2docusaurus.description_anchors import DescriptionIndex
from doxygen2docusaurus.errors import BuildPhaseError
from doxygen2docusaurus.files_and_folders import FilesAndFolders
from doxygen2docusaurus.groups import Groups
from doxygen2docusaurus.md_file_writer import MarkdownFileWriter
from doxygen2docusaurus.members import Member
from doxygen2docusaurus.namespaces import Namespaces
from doxygen2docusaurus.pages import Pages
from doxygen2docusaurus.permalinks import (
    get_permalink_anchor,
    strip_permalink_hex_anchor,
    strip_permalink_text_anchor,
)
from doxygen2docusaurus.register_renderers import create_renderer_registry
from doxygen2docusaurus.render_dispatch import RenderDispatch

if TYPE_CHECKING:
    from doxygen2docusaurus.compound_base import CompoundBase
    from doxygen2docusaurus.models import DoxygenData
    from doxygen2docusaurus.options import GeneratorOptions

logger = logging.getLogger(__name__)

COLLECTION_NAMES_BY_KIND = {
    "class": "classes",
    "struct": "classes",
    "union": "classes",
    "namespace": "namespaces",
    "file": "files",
    "dir": "files",
    "group": "groups",
    "page": "pages",
}

# Sidebar order.
COLLECTION_NAMES = ("groups", "namespaces", "classes", "files", "pages")


class BuildPhase(IntEnum):
    """Progress of the view model build; each phase ends a global pass."""

    CREATED = 0
    COLLECTED = 1
    LINKED = 2
    COMPOUNDS_INITIALIZED = 3
    COMPLETE = 4


class Workspace(RenderDispatch):
    """Compounds, members and the indexes used to resolve references between them."""

    def __init__(self, data: DoxygenData, options: GeneratorOptions) -> None:
        super().__init__()
        self.data = data
        self.options = options
        self.registry = create_renderer_registry(self)

        self.doxygen_version = data.doxygen_version
        self.project_brief = data.project_brief or data.project_name

        docs_folder = options.docs_folder_path.strip("/")
        api_folder = options.api_folder_path.strip("/")
        self.output_folder_path = f"{docs_folder}/{api_folder}/"
        self.sidebar_base_id = f"{api_folder}/"

        docs_base_url = options.docs_base_url.strip("/")
        api_base_url = options.api_base_url.strip("/")
        if api_base_url:
            api_base_url += "/"
        base_url = options.base_url if options.base_url.endswith("/") else options.base_url + "/"
        self.page_base_url = f"{base_url}{docs_base_url}/{api_base_url}"
        self.absolute_base_url = self.page_base_url
        self.slug_base_url = f"/{api_base_url}"
        self.menu_base_url = f"/{docs_base_url}/{api_base_url}"

        self.collections: dict[str, CollectionBase] = {
            "groups": Groups(self),
            "namespaces": Namespaces(self),
            "classes": Classes(self),
            "files": FilesAndFolders(self),
            "pages": Pages(self),
        }

        self.compounds_by_id: dict[str, CompoundBase] = {}
        self.members_by_id: dict[str, Member] = {}
        self.description_index = DescriptionIndex()
        self.files_by_path: dict[str, Any] = {}
        self.indices_maps: dict[str, set[str]] = {}
        self.main_page: CompoundBase | None = None

        self.writer = MarkdownFileWriter(self.doxygen_version)
        self.phase = BuildPhase.CREATED

    @property
    def groups(self) -> Groups:
        return self.collections["groups"]

    @property
    def pages(self) -> Pages:
        return self.collections["pages"]

    # Build

    def build(self) -> None:
        """Run all build phases; afterwards the view model is read only."""
        self.collect()
        self.link()
        self.initialize_compounds()
        self.initialize_members()

    def _enter_phase(self, expected: BuildPhase) -> None:
        if self.phase != expected:
            msg = f"build phase {self.phase.name} found, {expected.name} expected"
            raise BuildPhaseError(msg)

    def check_built(self) -> None:
        if self.phase != BuildPhase.COMPLETE:
            msg = f"view model not complete (phase {self.phase.name})"
            raise BuildPhaseError(msg)

    def collect(self) -> None:
        self._enter_phase(BuildPhase.CREATED)
        for compound_def in self.data.compound_defs:
            collection_name = COLLECTION_NAMES_BY_KIND.get(compound_def.kind)
            if collection_name is None:
                logger.error(
                    "Compound kind %s not supported, %s ignored", compound_def.kind, compound_def.id
                )
                continue
            if compound_def.id in self.compounds_by_id:
                logger.warning("Compound %s defined more than once, first kept", compound_def.id)
                continue
            compound = self.collections[collection_name].add_child(compound_def)
            self.compounds_by_id[compound.id] = compound
            if compound_def.detaileddescription is not None:
                self.description_index.scan(compound, compound_def.detaileddescription)
        self.phase = BuildPhase.COLLECTED

    def link(self) -> None:
        self._enter_phase(BuildPhase.COLLECTED)
        for collection in self.collections.values():
            collection.create_compounds_hierarchies()
        self.phase = BuildPhase.LINKED

    def initialize_compounds(self) -> None:
        self._enter_phase(BuildPhase.LINKED)
        # Decided on the raw definitions, so every retraction is known
        # before any content that links to the compound is rendered.
        retracted = [
            compound
            for compound in self.compounds_by_id.values()
            if compound.retract_when_empty and not compound.has_any_content()
        ]
        for compound in retracted:
            compound.retract()
        self.validate_permalinks()
        for compound in self.compounds_by_id.values():
            compound.initialize_late()
        self.phase = BuildPhase.COMPOUNDS_INITIALIZED

    def initialize_members(self) -> None:
        self._enter_phase(BuildPhase.COMPOUNDS_INITIALIZED)
        self.create_members_index()
        for compound in self.compounds_by_id.values():
            for section in compound.sections:
                section.initialize_late()
                for member in section.definition_members:
                    member.initialize_late()
        for compound in self.compounds_by_id.values():
            compound.cleanup()
        self.phase = BuildPhase.COMPLETE

    def create_members_index(self) -> None:
        """Index the members defined by each compound; references elsewhere are skipped."""
        for compound in self.compounds_by_id.values():
            for section in compound.sections:
                for member in section.index_members:
                    if not isinstance(member, Member):
                        continue
                    if strip_permalink_hex_anchor(member.id) != compound.id:
                        continue
                    if member.id in self.members_by_id:
                        logger.warning(
                            "Member %s already in index, %s ignored", member.id, compound.id
                        )
                        continue
                    self.members_by_id[member.id] = member

    def validate_permalinks(self) -> None:
        """Give each shown compound a unique permalink, suffixing the later ones."""
        by_permalink: dict[str, list[CompoundBase]] = {}
        for compound in self.compounds_by_id.values():
            if compound.relative_permalink is not None:
                by_permalink.setdefault(compound.relative_permalink, []).append(compound)

        for permalink, compounds in by_permalink.items():
            if len(compounds) < 2:
                continue
            for suffix, compound in enumerate(compounds[1:], start=1):
                compound.relative_permalink = f"{permalink}-{suffix}"
                if compound.docusaurus_id is not None:
                    compound.docusaurus_id = f"{compound.docusaurus_id}-{suffix}"
                logger.warning(
                    "Permalink %s of %s %s already used, %s used instead",
                    permalink,
                    compound.kind,
                    compound.id,
                    compound.relative_permalink,
                )

    # Permalinks

    def get_page_permalink(self, refid: str) -> str | None:
        compound = self.compounds_by_id.get(refid)
        if compound is None:
            logger.debug("Unknown compound id %s", refid)
            return None
        if compound.relative_permalink is None:
            logger.debug("Compound %s has no page", refid)
            return None
        return f"{self.page_base_url}{compound.relative_permalink}"

    def get_permalink(self, refid: str, kindref: str) -> str | None:
        """The URL of a compound page, or of an anchor within one."""
        if kindref == "compound":
            permalink = self.get_page_permalink(refid)
            if permalink is None and refid not in self.compounds_by_id:
                logger.warning("Unknown permalink for compound %s", refid)
            return permalink

        anchor = get_permalink_anchor(refid)
        if kindref == "member":
            permalink = self.get_page_permalink(strip_permalink_hex_anchor(refid))
            if permalink is None:
                owner = self._description_owner(refid)
                if owner is not None:
                    permalink = self.get_page_permalink(owner.id)
            if permalink is None:
                logger.error("Unknown permalink for member %s", refid)
                return None
            return f"{permalink.rstrip('/')}/#{anchor}"

        if kindref == "xrefsect":
            permalink = self.get_page_permalink(strip_permalink_text_anchor(refid))
            if permalink is None:
                logger.error("Unknown permalink for %s", refid)
                return None
            return f"{permalink.rstrip('/')}/#{anchor}"

        logger.error("Unsupported kindref %s for %s", kindref, refid)
        return None

    def _description_owner(self, refid: str) -> CompoundBase | None:
        toc_item = self.description_index.toc_items_by_id.get(refid)
        if toc_item is not None:
            return toc_item.toc_list.compound
        description_anchor = self.description_index.anchors_by_id.get(refid)
        if description_anchor is not None:
            return description_anchor.compound
        return None

    # Shared HTML fragments

    def render_members_index_item_to_lines(
        self,
        template: str = "",
        type: str = "",
        name: str = "",
        children_lines: list[str] | None = None,
    ) -> list[str]:
        """One entry of a ``doxyMembersIndex`` table."""
        lines: list[str] = []
        if template:
            lines.append('<tr class="doxyMemberIndexTemplate">')
            lines.append(
                f'<td class="doxyMemberIndexTemplate" colspan="2"><div>{template}</div></td>'
            )
            lines.append("</tr>")
            lines.append('<tr class="doxyMemberIndexItem">')
            if type:
                lines.append(
                    f'<td class="doxyMemberIndexItemTypeTemplate" align="left" valign="top">{type}</td>'
                )
                lines.append(
                    f'<td class="doxyMemberIndexItemNameTemplate" align="left" valign="top">{name}</td>'
                )
            else:
                lines.append(
                    '<td class="doxyMemberIndexItemNoTypeNameTemplate" colspan="2" '
                    f'align="left" valign="top">{name}</td>'
                )
            lines.append("</tr>")
        else:
            lines.append('<tr class="doxyMemberIndexItem">')
            lines.append(
                f'<td class="doxyMemberIndexItemType" align="left" valign="top">{type}</td>'
            )
            lines.append(
                f'<td class="doxyMemberIndexItemName" align="left" valign="top">{name}</td>'
            )
            lines.append("</tr>")

        if children_lines is not None:
            lines.append('<tr class="doxyMemberIndexDescription">')
            lines.append('<td class="doxyMemberIndexDescriptionLeft"></td>')
            lines.append('<td class="doxyMemberIndexDescriptionRight">')
            lines.extend(children_lines)
            lines.append("</td>")
            lines.append("</tr>")

        lines.append('<tr class="doxyMemberIndexSeparator">')
        lines.append('<td class="doxyMemberIndexSeparator" colspan="2"></td>')
        lines.append("</tr>")
        return lines

    def render_tree_table_to_lines(self, content_lines: list[str]) -> list[str]:
        lines = ["", '<table class="doxyTreeTable">', '<colgroup><col style="width:40%"><col></colgroup>']
        lines.extend(content_lines)
        lines.extend(["", "</table>"])
        return lines

    def render_tree_table_row_to_lines(
        self,
        label: str,
        link: str,
        depth: int,
        description: str,
        icon_letter: str | None = None,
        icon_class: str | None = None,
    ) -> list[str]:
        lines = ['<tr class="doxyTreeItem">', '<td class="doxyTreeItemLeft" align="left" valign="top">']
        lines.append(f'<span style="width: {depth * 12}px; display: inline-block;"></span>')
        if icon_letter:
            lines.append(
                f'<span class="doxyTreeIconBox"><span class="doxyTreeIcon">{icon_letter}</span></span>'
            )
        if icon_class:
            lines.append(f'<a href="{link}"><span class="{icon_class}">{label}</span></a>')
        else:
            lines.append(f'<a href="{link}">{label}</a>')
        lines.append("</td>")
        lines.append(f'<td class="doxyTreeItemRight" align="left" valign="top">{description}</td>')
        lines.append("</tr>")
        return lines

    # Output

    def write_md_file(
        self,
        file_path: str,
        front_matter: dict[str, Any],
        body_lines: list[str],
        title: str | None = None,
        page_permalink: str | None = None,
    ) -> None:
        self.writer.write(file_path, front_matter, body_lines, title, page_permalink)

    @property
    def written_files_count(self) -> int:
        return self.writer.count
