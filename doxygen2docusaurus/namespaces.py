"""Namespaces collection and namespace pages."""

from __future__ import annotations

import logging
import posixpath
import re
from typing import Any

from doxygen2docusaurus.collection_base import CollectionBase
from doxygen2docusaurus.compound_base import CompoundBase
from doxygen2docusaurus.models import CompoundDef
from doxygen2docusaurus.permalinks import (
    flatten_path,
    sanitize_anonymous_namespace,
    sanitize_hierarchical_path,
)
from doxygen2docusaurus.tree_entries import CLASS_KINDS, TreeEntry, namespace_tree_entry

logger = logging.getLogger(__name__)

ANONYMOUS_NAMESPACE_ID = re.compile(r"^namespace.*_0d\d{48}")

INDEX_TEXTS = {
    "all": ("The Namespaces Definitions Index", "The definitions part of the namespaces are:"),
    "classes": (
        "The Namespaces Classes Index",
        "The classes, structs, unions defined in the namespaces are:",
    ),
    "functions": (
        "The Namespaces Functions Index",
        "The functions defined in the namespaces are:",
    ),
    "variables": (
        "The Namespaces Variables Index",
        "The variables defined in the namespaces are:",
    ),
    "typedefs": (
        "The Namespaces Type Definitions Index",
        "The typedefs defined in the namespaces are:",
    ),
    "enums": ("The Namespaces Enums Index", "The enums defined in the namespaces are:"),
    "enumvalues": (
        "The Namespaces Enum Values Index",
        "The enum values defined in the namespaces are:",
    ),
}


def _last_part(name: str) -> str:
    return name.rsplit("::", 1)[-1]


class Namespaces(CollectionBase):
    def __init__(self, workspace) -> None:
        super().__init__(workspace)
        self.top_level_namespaces: list[Namespace] = []

    def add_child(self, compound_def: CompoundDef) -> CompoundBase:
        namespace = Namespace(self, compound_def)
        # The unnamed namespace stays reachable by id but is not listed.
        if namespace.compound_name:
            self.compounds_by_id[namespace.id] = namespace
        return namespace

    def create_compounds_hierarchies(self) -> None:
        for namespace in self.compounds_by_id.values():
            for child_id in namespace.children_ids:
                child = self.compounds_by_id.get(child_id)
                if child is None:
                    logger.warning("Namespace %s child %s not found", namespace.id, child_id)
                    continue
                child.parent = namespace
                namespace.children.append(child)
        self.top_level_namespaces = [
            ns for ns in self.compounds_by_id.values() if ns.parent is None
        ]

    def add_sidebar_items(self, sidebar_category: dict[str, Any]) -> None:
        if "namespaces" not in self.workspace.indices_maps:
            return
        items = []
        for namespace in self.top_level_namespaces:
            item = self._create_sidebar_item_recursively(namespace)
            if item is not None:
                items.append(item)
        sidebar_category["items"].append(
            self.hierarchy_category("namespaces", "Namespaces", items)
        )

    def _create_sidebar_item_recursively(self, namespace: Namespace) -> dict[str, Any] | None:
        if namespace.sidebar_label is None or namespace.docusaurus_id is None:
            return None
        doc_id = self.sidebar_doc_id(namespace.docusaurus_id)
        if not namespace.children:
            return {"type": "doc", "label": namespace.sidebar_label, "id": doc_id}
        category: dict[str, Any] = {
            "type": "category",
            "label": namespace.sidebar_label,
            "link": {"type": "doc", "id": doc_id},
            "collapsed": True,
            "items": [],
        }
        for child in namespace.children:
            item = self._create_sidebar_item_recursively(child)
            if item is not None:
                category["items"].append(item)
        return category

    def create_menu_items(self) -> list[dict[str, Any]]:
        return [{"label": "Namespaces", "to": f"{self.workspace.menu_base_url}namespaces/"}]

    def generate_index_md_file(self) -> None:
        if not self.top_level_namespaces:
            return
        content_lines: list[str] = []
        for namespace in self.top_level_namespaces:
            content_lines.extend(self._index_rows_recursively(namespace, 1))
        if not content_lines:
            return

        workspace = self.workspace
        front_matter = {
            "title": "The Namespaces Reference",
            "slug": f"{workspace.slug_base_url}namespaces",
            "custom_edit_url": None,
            "keywords": ["doxygen", "namespaces", "reference"],
        }
        lines = ["The namespaces used by this project are:"]
        lines.extend(workspace.render_tree_table_to_lines(content_lines))
        file_path = f"{workspace.output_folder_path}indices/namespaces/index.md"
        workspace.write_md_file(file_path, front_matter, lines)

    def _index_rows_recursively(self, namespace: Namespace, depth: int) -> list[str]:
        workspace = self.workspace
        permalink = workspace.get_page_permalink(namespace.id)
        if not permalink:
            return []
        lines = [""]
        lines.extend(
            workspace.render_tree_table_row_to_lines(
                label=workspace.render_string(namespace.tree_entry_name, "html"),
                link=permalink,
                depth=depth,
                description=(namespace.brief_html or "").removesuffix("."),
                icon_letter="N",
            )
        )
        for child in namespace.children:
            lines.extend(self._index_rows_recursively(child, depth + 1))
        return lines

    def generate_per_initials_index_md_files(self) -> None:
        if not self.top_level_namespaces:
            return
        workspace = self.workspace
        entries: dict[str, TreeEntry] = {}
        for namespace in self.compounds_by_id.values():
            if namespace.relative_permalink is None:
                continue
            entry = namespace_tree_entry(namespace, namespace)
            entries[entry.id] = entry
            for ref in namespace.inner.get("innerclass", []):
                clazz = workspace.compounds_by_id.get(ref.refid)
                if clazz is not None and clazz.kind in CLASS_KINDS:
                    entry = namespace_tree_entry(clazz, namespace)
                    entries[entry.id] = entry
            for section in namespace.sections:
                for member in section.definition_members:
                    entry = namespace_tree_entry(member, namespace)
                    entries[entry.id] = entry
                    for enum_value in member.enum_values or []:
                        entry = namespace_tree_entry(enum_value, namespace)
                        entries[entry.id] = entry
        self.generate_standard_index_files("namespaces", entries, INDEX_TEXTS)


class Namespace(CompoundBase):
    retract_when_empty = True

    def __init__(self, collection: Namespaces, compound_def: CompoundDef) -> None:
        super().__init__(collection, compound_def)
        self.children: list[Namespace] = []
        self.children_ids = [ref.refid for ref in compound_def.inner_refs("innernamespace")]
        self.is_anonymous = False

        if ANONYMOUS_NAMESPACE_ID.match(self.id):
            self._init_anonymous(compound_def)
        else:
            self.unqualified_name = sanitize_anonymous_namespace(
                _last_part(compound_def.compoundname)
            )
            self.index_name = _last_part(self.compound_name)
            self.page_title = f"The `{self.unqualified_name}` Namespace Reference"
            if compound_def.compoundname:
                self._set_permalink(self.compound_name)
            else:
                logger.warning(
                    "Skipping unnamed namespace %s %s", self.id, self.location_file_path or ""
                )

        self.tree_entry_name = self.index_name
        self.create_sections()

    def _init_anonymous(self, compound_def: CompoundDef) -> None:
        file_name = posixpath.basename(self.location_file_path or "")
        if self.compound_name.startswith("::"):
            self.unqualified_name = _last_part(compound_def.compoundname)
            self.index_name = f"anonymous{{{file_name}}}{self.compound_name}"
        else:
            self.unqualified_name = f"anonymous{{{file_name}}}"
            self.is_anonymous = True
            if self.compound_name:
                self.index_name = f"{self.compound_name}::{self.unqualified_name}"
            else:
                self.index_name = self.unqualified_name
        self.page_title = f"The `{self.index_name}` Namespace Reference"
        self._set_permalink(self.index_name)

    def _set_permalink(self, name: str) -> None:
        sanitized_path = sanitize_hierarchical_path(name.replace("::", "/"))
        self.relative_permalink = f"namespaces/{sanitized_path}"
        self.docusaurus_id = f"namespaces/{flatten_path(sanitized_path)}"
        self.sidebar_label = self.unqualified_name

    def has_any_content(self) -> bool:
        if any(child.has_any_content() for child in self.children):
            return True
        if any(tag != "innernamespace" for tag in self.inner):
            return True
        return super().has_any_content()

    def render_to_lines(self) -> list[str]:
        workspace = self.workspace
        more = "#details" if self.detailed_lines is not None else None
        lines = [self.render_brief_description_to_string(self.brief_html, more)]

        dots = workspace.render_string("{ ... }", "html")
        lines.extend(["", "## Definition", "", '<div class="doxyDefinition">'])
        if self.compound_name.startswith("anonymous{"):
            lines.append(f"namespace {dots}")
        else:
            lines.append(f"namespace {workspace.render_string(self.compound_name, 'html')} {dots}")
        lines.append("</div>")

        lines.extend(self.render_inner_indices_to_lines(["Namespaces", "Classes"]))
        lines.extend(self.render_section_indices_to_lines())
        lines.extend(
            self.render_detailed_description_to_lines(
                brief_html=self.brief_html,
                detailed_lines=self.detailed_lines,
                show_header=True,
                show_brief=not self.has_sect1_in_description,
            )
        )
        lines.extend(self.render_sections_to_lines())
        lines.extend(self.render_generated_from_to_lines())
        return lines
