"""Classes, structs and unions."""

from __future__ import annotations

import logging
import re
from typing import Any

from doxygen2docusaurus.collection_base import CollectionBase
from doxygen2docusaurus.compound_base import CompoundBase
from doxygen2docusaurus.models import CompoundDef, CompoundRef
from doxygen2docusaurus.permalinks import (
    flatten_path,
    sanitize_anonymous_namespace,
    sanitize_hierarchical_path,
)
from doxygen2docusaurus.tree_entries import TreeEntry, class_tree_entry

logger = logging.getLogger(__name__)

KIND_PLURALS = {"class": "Classes", "struct": "Structs", "union": "Unions"}
ICON_LETTERS = {"class": "C", "struct": "S", "union": "U"}

INDEX_TEXTS = {
    "all": ("Classes and Members Index", "The classes, structs, unions and their members are:"),
    "classes": ("Classes Index", "The classes, structs, unions defined in the project are:"),
    "functions": (
        "Class Functions Index",
        "The class member functions defined in the project are:",
    ),
    "variables": (
        "Class Variables Index",
        "The class member variables defined in the project are:",
    ),
    "typedefs": (
        "Class Type Definitions Index",
        "The class member typedefs defined in the project are:",
    ),
    "enums": ("Class Enums Index", "The class member enums defined in the project are:"),
    "enumvalues": (
        "Class Enum Values Index",
        "The class member enum values defined in the project are:",
    ),
}

TREE_ENTRY_MAX_LENGTH = 42


class Classes(CollectionBase):
    def __init__(self, workspace) -> None:
        super().__init__(workspace)
        self.top_level_classes: list[Class] = []

    def add_child(self, compound_def: CompoundDef) -> CompoundBase:
        clazz = Class(self, compound_def)
        self.compounds_by_id[clazz.id] = clazz
        return clazz

    def create_compounds_hierarchies(self) -> None:
        for class_id, clazz in self.compounds_by_id.items():
            for base_class_id in clazz.base_class_ids:
                base_class = self.compounds_by_id.get(base_class_id)
                if base_class is None:
                    logger.warning("%s ignored as base class for %s", base_class_id, class_id)
                    continue
                base_class.children.append(clazz)
                clazz.base_classes.append(base_class)
        self.top_level_classes = [
            clazz for clazz in self.compounds_by_id.values() if not clazz.base_classes
        ]

    def add_sidebar_items(self, sidebar_category: dict[str, Any]) -> None:
        if "classes" not in self.workspace.indices_maps:
            return
        items = []
        for clazz in self.top_level_classes:
            item = self._create_sidebar_item_recursively(clazz)
            if item is not None:
                items.append(item)
        sidebar_category["items"].append(self.hierarchy_category("classes", "Classes", items))

    def _create_sidebar_item_recursively(self, clazz: Class) -> dict[str, Any] | None:
        if clazz.sidebar_label is None or clazz.docusaurus_id is None:
            return None
        doc_id = self.sidebar_doc_id(clazz.docusaurus_id)
        if not clazz.children:
            return {
                "type": "doc",
                "label": clazz.sidebar_label,
                "className": "doxyEllipsis",
                "id": doc_id,
            }
        category: dict[str, Any] = {
            "type": "category",
            "label": clazz.sidebar_label,
            "link": {"type": "doc", "id": doc_id},
            "className": "doxyEllipsis",
            "collapsed": True,
            "items": [],
        }
        for child in clazz.children:
            item = self._create_sidebar_item_recursively(child)
            if item is not None:
                category["items"].append(item)
        return category

    def create_menu_items(self) -> list[dict[str, Any]]:
        return [{"label": "Classes", "to": f"{self.workspace.menu_base_url}classes/"}]

    def generate_index_md_file(self) -> None:
        if not self.top_level_classes:
            return
        content_lines: list[str] = []
        for clazz in self.top_level_classes:
            content_lines.extend(self._index_rows_recursively(clazz, 1))
        if not content_lines:
            return

        workspace = self.workspace
        front_matter = {
            "title": "Classes",
            "slug": f"{workspace.slug_base_url}classes",
            "custom_edit_url": None,
            "keywords": ["doxygen", "classes", "reference"],
        }
        lines = ["The classes, structs, union and interfaces used by this project are:"]
        lines.extend(workspace.render_tree_table_to_lines(content_lines))
        file_path = f"{workspace.output_folder_path}indices/classes/index.md"
        logger.debug("Writing classes index file %s", file_path)
        workspace.write_md_file(file_path, front_matter, lines)

    def _index_rows_recursively(self, clazz: Class, depth: int) -> list[str]:
        workspace = self.workspace
        lines: list[str] = []
        permalink = workspace.get_page_permalink(clazz.id)
        if permalink:
            icon_letter = ICON_LETTERS.get(clazz.kind)
            if icon_letter is None:
                logger.error("Icon kind %s not supported, using ?", clazz.kind)
                icon_letter = "?"
            lines.append("")
            lines.extend(
                workspace.render_tree_table_row_to_lines(
                    label=workspace.render_string(clazz.tree_entry_name, "html"),
                    link=permalink,
                    depth=depth,
                    description=(clazz.brief_html or "").removesuffix("."),
                    icon_letter=icon_letter,
                )
            )
        for child in clazz.children:
            lines.extend(self._index_rows_recursively(child, depth + 1))
        return lines

    def generate_per_initials_index_md_files(self) -> None:
        if not self.top_level_classes:
            return
        entries: dict[str, TreeEntry] = {}
        for clazz in self.compounds_by_id.values():
            if clazz.relative_permalink is None:
                continue
            entry = class_tree_entry(clazz, clazz)
            entries[entry.id] = entry
            for section in clazz.sections:
                for member in section.definition_members:
                    entry = class_tree_entry(member, clazz)
                    entries[entry.id] = entry
                    for enum_value in member.enum_values or []:
                        entry = class_tree_entry(enum_value, clazz)
                        entries[entry.id] = entry
        self.generate_standard_index_files("classes", entries, INDEX_TEXTS)


class Class(CompoundBase):
    retract_when_empty = True

    def __init__(self, collection: Classes, compound_def: CompoundDef) -> None:
        super().__init__(collection, compound_def)
        self.children: list[Class] = []
        self.base_classes: list[Class] = []
        # Multiple inheritance; one entry per base, in declaration order.
        self.base_class_ids: list[str] = []
        for ref in compound_def.basecompoundrefs:
            if ref.refid is not None and ref.refid not in self.base_class_ids:
                self.base_class_ids.append(ref.refid)

        compound_name = compound_def.compoundname
        self.fully_qualified_name = sanitize_anonymous_namespace(
            re.sub(r"<.*>", "", compound_name)
        )
        self.unqualified_name = self.fully_qualified_name.rsplit("::", 1)[-1]

        self.template_parameters = ""
        index = compound_name.find("<")
        if index >= 0:
            name_parameters = compound_name[index:]
            name_parameters = re.sub(r"^< ", "<", name_parameters)
            name_parameters = re.sub(r" >$", ">", name_parameters)
            self.template_parameters = name_parameters
        else:
            name_parameters = self.render_template_parameter_names_to_string(
                compound_def.templateparamlist
            )

        self.index_name = f"{self.unqualified_name}{name_parameters}"
        self.sidebar_label = self.index_name
        if len(self.index_name) < TREE_ENTRY_MAX_LENGTH:
            self.tree_entry_name = self.index_name
        else:
            self.tree_entry_name = f"{self.unqualified_name}<...>"

        name_html = self.workspace.render_string(self.unqualified_name, "html")
        self.page_title = f"`{name_html}` {self.kind.capitalize()}"
        if compound_def.templateparamlist is not None:
            self.page_title += " Template"

        plural_kind = KIND_PLURALS[self.kind].lower()
        sanitized_path = sanitize_hierarchical_path(
            self.fully_qualified_name.replace("::", "/")
        )
        self.relative_permalink = f"{plural_kind}/{sanitized_path}"
        self.docusaurus_id = f"{plural_kind}/{flatten_path(sanitized_path)}"

        self.class_full_name = self.fully_qualified_name
        self.template: str | None = None
        self.base_compound_refs: list[CompoundRef] = []
        self.derived_compound_refs: list[CompoundRef] = []

        self.create_sections(self.unqualified_name)

    def initialize_late(self) -> None:
        compound_def = self._compound_def
        super().initialize_late()
        if compound_def is None:
            return
        workspace = self.workspace

        if self.template_parameters:
            parameters = self.template_parameters
        else:
            parameters = self.render_template_parameter_names_to_string(
                compound_def.templateparamlist
            )
        self.class_full_name = self.fully_qualified_name + workspace.render_string(
            parameters, "html"
        )

        if compound_def.templateparamlist is not None:
            self.template = workspace.render_string(
                self.render_template_parameters_to_string(
                    compound_def.templateparamlist, with_defaults=True
                ),
                "html",
            )

        self.base_compound_refs = list(compound_def.basecompoundrefs)
        self.derived_compound_refs = list(compound_def.derivedcompoundrefs)

    def has_any_content(self) -> bool:
        compound_def = self._compound_def
        if self.children_ids or self.children or self.inner or self.sections:
            return True
        if compound_def is not None and compound_def.includes:
            return True
        return super().has_any_content()

    def render_to_lines(self) -> list[str]:
        workspace = self.workspace
        lines = [self.render_brief_description_to_string(self.brief_html, "#details")]

        lines.extend(["", "## Declaration", "", '<div class="doxyDeclaration">'])
        if self.template is not None:
            lines.append(f"template {self.template}")
        lines.append(f"{self.kind} {self.class_full_name} {workspace.render_string('{ ... }', 'html')}")
        lines.append("</div>")

        lines.extend(self.render_includes_index_to_lines())

        if self.kind in ("class", "struct"):
            lines.extend(self._render_base_classes_to_lines())
            lines.extend(self._render_derived_classes_to_lines())

        lines.extend(self.render_inner_indices_to_lines(["Classes"]))
        lines.extend(self.render_section_indices_to_lines())
        lines.extend(
            self.render_detailed_description_to_lines(
                brief_html=self.brief_html,
                detailed_lines=self.detailed_lines,
                show_header=True,
                show_brief=not self.has_sect1_in_description,
            )
        )
        if self.location_lines:
            lines.extend(self.location_lines)
        lines.extend(self.render_sections_to_lines())
        lines.extend(self.render_generated_from_to_lines())
        return lines

    def _render_ref_to_lines(self, ref: CompoundRef) -> list[str]:
        """Index row for a base or derived class, linked when it is documented."""
        if ref.refid is not None:
            clazz = self.collection.compounds_by_id.get(ref.refid)
            if isinstance(clazz, Class):
                return clazz.render_index_to_lines()
            logger.debug("Class id %s referred by %s not a defined class", ref.refid, self.id)
        workspace = self.workspace
        lines = [""]
        lines.extend(
            workspace.render_members_index_item_to_lines(
                type=self.kind, name=workspace.render_string(ref.name.strip(), "html")
            )
        )
        return lines

    def _render_base_classes_to_lines(self) -> list[str]:
        unique_refs: dict[str, CompoundRef] = {}
        for ref in self.base_compound_refs:
            unique_refs.setdefault(ref.name, ref)
        if not unique_refs:
            return []

        lines = [""]
        if len(unique_refs) > 1:
            lines.append(f"## Base {KIND_PLURALS[self.kind].lower()}")
        else:
            lines.append(f"## Base {self.kind}")
        lines.extend(["", '<table class="doxyMembersIndex">'])
        for ref in unique_refs.values():
            lines.extend(self._render_ref_to_lines(ref))
        lines.extend(["", "</table>"])
        return lines

    def _render_derived_classes_to_lines(self) -> list[str]:
        if not self.derived_compound_refs:
            return []
        lines = ["", f"## Derived {KIND_PLURALS[self.kind]}", "", '<table class="doxyMembersIndex">']
        for ref in self.derived_compound_refs:
            lines.extend(self._render_ref_to_lines(ref))
        lines.extend(["", "</table>"])
        return lines

    def render_index_to_lines(self) -> list[str]:
        """The row describing this class in another class' base or derived list."""
        workspace = self.workspace
        permalink = workspace.get_page_permalink(self.id)
        index_name = workspace.render_string(self.index_name, "html")
        item_name = f'<a href="{permalink}">{index_name}</a>' if permalink else index_name

        children_lines: list[str] = []
        if self.brief_html:
            more = f"{permalink}/#details" if permalink and self.detailed_lines else None
            children_lines.append(self.render_brief_description_to_string(self.brief_html, more))

        lines = [""]
        lines.extend(
            workspace.render_members_index_item_to_lines(
                type=self.kind, name=item_name, children_lines=children_lines
            )
        )
        return lines
