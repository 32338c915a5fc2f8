"""Groups, shown as topics."""

from __future__ import annotations

import logging
from typing import Any

from doxygen2docusaurus.collection_base import CollectionBase
from doxygen2docusaurus.compound_base import CompoundBase
from doxygen2docusaurus.models import CompoundDef
from doxygen2docusaurus.permalinks import flatten_path, sanitize_hierarchical_path

logger = logging.getLogger(__name__)


class Groups(CollectionBase):
    def __init__(self, workspace) -> None:
        super().__init__(workspace)
        self.top_level_groups: list[Group] = []

    def add_child(self, compound_def: CompoundDef) -> CompoundBase:
        group = Group(self, compound_def)
        self.compounds_by_id[group.id] = group
        return group

    def create_compounds_hierarchies(self) -> None:
        for group in self.compounds_by_id.values():
            for child_id in group.children_ids:
                child = self.compounds_by_id.get(child_id)
                if child is None:
                    logger.warning("Group %s child %s not found", group.id, child_id)
                    continue
                child.parent = group
                group.children.append(child)
        self.top_level_groups = [g for g in self.compounds_by_id.values() if g.parent is None]

    def _shown_top_level_groups(self) -> list[Group]:
        return [g for g in self.top_level_groups if g.relative_permalink is not None]

    def add_sidebar_items(self, sidebar_category: dict[str, Any]) -> None:
        top_level_groups = self._shown_top_level_groups()
        items = []
        for group in top_level_groups:
            item = self._create_sidebar_item_recursively(group)
            if item is not None:
                items.append(item)
        if len(top_level_groups) > 1:
            sidebar_category["items"].append(
                {
                    "type": "category",
                    "label": "Topics",
                    "link": {"type": "doc", "id": self.sidebar_doc_id("indices/groups/index")},
                    "collapsed": True,
                    "items": items,
                }
            )
        else:
            sidebar_category["items"].extend(items)

    def _create_sidebar_item_recursively(self, group: Group) -> dict[str, Any] | None:
        if group.sidebar_label is None or group.docusaurus_id is None:
            return None
        doc_id = self.sidebar_doc_id(group.docusaurus_id)
        if not group.children:
            return {"type": "doc", "label": group.sidebar_label, "id": doc_id}
        category: dict[str, Any] = {
            "type": "category",
            "label": group.sidebar_label,
            "link": {"type": "doc", "id": doc_id},
            "collapsed": True,
            "items": [],
        }
        for child in group.children:
            item = self._create_sidebar_item_recursively(child)
            if item is not None:
                category["items"].append(item)
        return category

    def create_menu_items(self) -> list[dict[str, Any]]:
        menu_base_url = self.workspace.menu_base_url
        top_level_groups = self._shown_top_level_groups()
        if not top_level_groups:
            return []
        if len(top_level_groups) > 1:
            return [{"label": "Topics", "to": f"{menu_base_url}groups/"}]
        group = top_level_groups[0]
        return [{"label": group.sidebar_label, "to": f"{menu_base_url}{group.relative_permalink}/"}]

    def generate_index_md_file(self) -> None:
        # A single topic is reached directly, without an index.
        if len(self._shown_top_level_groups()) <= 1:
            return
        content_lines = self._tree_rows()
        if not content_lines:
            return

        workspace = self.workspace
        front_matter = {
            "title": "Topics",
            "slug": f"{workspace.slug_base_url}groups",
            "custom_edit_url": None,
            "keywords": ["doxygen", "topics", "reference"],
        }
        lines = ["The topics defined in this project are:"]
        lines.extend(workspace.render_tree_table_to_lines(content_lines))
        file_path = f"{workspace.output_folder_path}indices/groups/index.md"
        logger.debug("Writing groups index file %s", file_path)
        workspace.write_md_file(file_path, front_matter, lines)

    def generate_topics_table(self) -> list[str]:
        """The topics tree shown on the top index page."""
        content_lines = self._tree_rows()
        if not content_lines:
            return []
        workspace = self.workspace
        lines = [f"{workspace.project_brief} topics with brief descriptions are:"]
        lines.extend(workspace.render_tree_table_to_lines(content_lines))
        return lines

    def _tree_rows(self) -> list[str]:
        lines: list[str] = []
        for group in self.top_level_groups:
            lines.extend(self._index_rows_recursively(group, 1))
        return lines

    def _index_rows_recursively(self, group: Group, depth: int) -> list[str]:
        workspace = self.workspace
        permalink = workspace.get_page_permalink(group.id)
        if not permalink:
            return []
        lines = [""]
        lines.extend(
            workspace.render_tree_table_row_to_lines(
                label=group.title_html or "???",
                link=permalink,
                depth=depth,
                description=(group.brief_html or "").removesuffix("."),
            )
        )
        for child in group.children:
            lines.extend(self._index_rows_recursively(child, depth + 1))
        return lines


class Group(CompoundBase):
    retract_when_empty = True

    def __init__(self, collection: Groups, compound_def: CompoundDef) -> None:
        super().__init__(collection, compound_def)
        self.children: list[Group] = []
        self.children_ids = [ref.refid for ref in compound_def.inner_refs("innergroup")]

        title = (compound_def.title or "").strip()
        self.sidebar_label = title.removesuffix(".") if title else "???"
        self.index_name = self.sidebar_label
        self.tree_entry_name = self.sidebar_label
        self.page_title = self.sidebar_label

        sanitized_path = sanitize_hierarchical_path(self.compound_name)
        self.relative_permalink = f"groups/{sanitized_path}"
        self.docusaurus_id = f"groups/{flatten_path(sanitized_path)}"
        self.create_sections()

    def has_any_content(self) -> bool:
        if self.children_ids or self.inner:
            return True
        return super().has_any_content()

    def render_to_lines(self) -> list[str]:
        has_indices = self.has_inner_indices() or self.has_sections()
        more = "#details" if has_indices else None
        lines = [self.render_brief_description_to_string(self.brief_html, more)]
        lines.extend(self.render_inner_indices_to_lines(["Groups", "Classes"]))
        lines.extend(self.render_section_indices_to_lines())
        lines.extend(
            self.render_detailed_description_to_lines(
                brief_html=self.brief_html,
                detailed_lines=self.detailed_lines,
                show_header=not self.has_sect1_in_description,
                show_brief=has_indices,
            )
        )
        lines.extend(self.render_sections_to_lines())
        return lines
