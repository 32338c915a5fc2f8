"""Source files and the folders containing them."""

from __future__ import annotations

import logging
from typing import Any

from doxygen2docusaurus.collection_base import CollectionBase
from doxygen2docusaurus.compound_base import CompoundBase
from doxygen2docusaurus.elements import CodeLine, Listing
from doxygen2docusaurus.models import CompoundDef
from doxygen2docusaurus.permalinks import flatten_path, sanitize_hierarchical_path
from doxygen2docusaurus.tree_entries import CLASS_KINDS, TreeEntry, file_tree_entry

logger = logging.getLogger(__name__)

INDEX_TEXTS = {
    "all": ("Files Definitions Index", "The definitions part of the files are:"),
    "classes": ("Files Classes Index", "The classes, structs, unions defined in the project are:"),
    "namespaces": ("Files Namespaces Index", "The namespaces defined in the project are:"),
    "functions": ("Files Functions Index", "The functions defined in the project are:"),
    "variables": ("Files Variables Index", "The variables defined in the project are:"),
    "typedefs": ("Files Type Definitions Index", "The typedefs defined in the project are:"),
    "enums": ("Files Enums Index", "The enums defined in the project are:"),
    "enumvalues": ("Files Enum Values Index", "The enum values defined in the project are:"),
    "defines": ("Files Macro Definitions Index", "The macros defined in the project are:"),
}


class FilesAndFolders(CollectionBase):
    def __init__(self, workspace) -> None:
        super().__init__(workspace)
        self.folders_by_id: dict[str, Folder] = {}
        self.files_by_id: dict[str, File] = {}
        self.top_level_folders: list[Folder] = []
        self.top_level_files: list[File] = []

    def add_child(self, compound_def: CompoundDef) -> CompoundBase:
        if compound_def.kind == "file":
            file = File(self, compound_def)
            self.compounds_by_id[file.id] = file
            self.files_by_id[file.id] = file
            return file
        if compound_def.kind == "dir":
            folder = Folder(self, compound_def)
            self.compounds_by_id[folder.id] = folder
            self.folders_by_id[folder.id] = folder
            return folder
        raise ValueError(f"kind {compound_def.kind} not handled by {type(self).__name__}")

    def create_compounds_hierarchies(self) -> None:
        for folder in self.folders_by_id.values():
            for child_id in folder.children_folder_ids:
                child_folder = self.folders_by_id.get(child_id)
                if child_folder is None:
                    logger.warning("Folder %s not a child of %s", child_id, folder.id)
                    continue
                child_folder.parent = folder
                folder.children.append(child_folder)
            for child_id in folder.children_file_ids:
                child_file = self.files_by_id.get(child_id)
                if child_file is None:
                    logger.warning("File %s not a child of %s", child_id, folder.id)
                    continue
                child_file.parent = folder
                folder.children.append(child_file)

        self.top_level_folders = [f for f in self.folders_by_id.values() if f.parent is None]
        self.top_level_files = [f for f in self.files_by_id.values() if f.parent is None]

        files_by_path = self.workspace.files_by_path
        for file in self.files_by_id.values():
            if file.location_file_path is None:
                logger.warning("File %s has no location", file.id)
            else:
                files_by_path[file.location_file_path] = file

        for folder in self.folders_by_id.values():
            folder.relative_path = self._relative_path(folder)
            sanitized_path = sanitize_hierarchical_path(folder.relative_path)
            folder.relative_permalink = f"folders/{sanitized_path}"
            folder.docusaurus_id = f"folders/{flatten_path(sanitized_path)}"
        for file in self.files_by_id.values():
            file.relative_path = self._relative_path(file)
            sanitized_path = sanitize_hierarchical_path(file.relative_path)
            file.relative_permalink = f"files/{sanitized_path}"
            file.docusaurus_id = f"files/{flatten_path(sanitized_path)}"

    def _relative_path(self, compound: CompoundBase) -> str:
        if isinstance(compound.parent, Folder):
            return f"{self._relative_path(compound.parent)}/{compound.compound_name}"
        return compound.compound_name

    def is_visible_in_sidebar(self) -> bool:
        for compound in self.compounds_by_id.values():
            if isinstance(compound, File) and compound.has_any_content():
                return True
            if isinstance(compound, Folder) and compound.children:
                return True
        return False

    def add_sidebar_items(self, sidebar_category: dict[str, Any]) -> None:
        if "files" not in self.workspace.indices_maps:
            return
        items = []
        for folder in self.top_level_folders:
            item = self._create_folder_sidebar_item(folder)
            if item is not None:
                items.append(item)
        for file in self.top_level_files:
            item = self._create_file_sidebar_item(file)
            if item is not None:
                items.append(item)
        sidebar_category["items"].append(self.hierarchy_category("files", "Files", items))

    def _create_folder_sidebar_item(self, folder: Folder) -> dict[str, Any] | None:
        if folder.sidebar_label is None or folder.docusaurus_id is None:
            return None
        category: dict[str, Any] = {
            "type": "category",
            "label": folder.sidebar_label,
            "link": {"type": "doc", "id": self.sidebar_doc_id(folder.docusaurus_id)},
            "className": "doxyEllipsis",
            "collapsed": True,
            "items": [],
        }
        # Subfolders first, then files.
        for child in folder.children:
            if isinstance(child, Folder):
                item = self._create_folder_sidebar_item(child)
                if item is not None:
                    category["items"].append(item)
        for child in folder.children:
            if isinstance(child, File):
                item = self._create_file_sidebar_item(child)
                if item is not None:
                    category["items"].append(item)
        return category

    def _create_file_sidebar_item(self, file: File) -> dict[str, Any] | None:
        if file.sidebar_label is None or file.docusaurus_id is None:
            return None
        return {
            "type": "doc",
            "label": file.sidebar_label,
            "className": "doxyEllipsis",
            "id": self.sidebar_doc_id(file.docusaurus_id),
        }

    def create_menu_items(self) -> list[dict[str, Any]]:
        return [{"label": "Files", "to": f"{self.workspace.menu_base_url}files/"}]

    def generate_index_md_file(self) -> None:
        if not self.top_level_folders and not self.top_level_files:
            return
        content_lines: list[str] = []
        for folder in self.top_level_folders:
            content_lines.extend(self._folder_rows_recursively(folder, 0))
        for file in self.top_level_files:
            content_lines.extend(self._file_row(file, 0))
        if not content_lines:
            return

        workspace = self.workspace
        front_matter = {
            "title": "Files & Folders",
            "slug": f"{workspace.slug_base_url}files",
            "custom_edit_url": None,
            "keywords": ["doxygen", "files", "folders", "reference"],
        }
        lines = ["The files & folders that contributed content to this site are:"]
        lines.extend(workspace.render_tree_table_to_lines(content_lines))
        file_path = f"{workspace.output_folder_path}indices/files/index.md"
        logger.debug("Writing files index file %s", file_path)
        workspace.write_md_file(file_path, front_matter, lines)

    def _tree_row(self, compound: CompoundBase, depth: int, icon_class: str) -> list[str]:
        workspace = self.workspace
        permalink = workspace.get_page_permalink(compound.id)
        if not permalink:
            return []
        lines = [""]
        lines.extend(
            workspace.render_tree_table_row_to_lines(
                label=workspace.render_string(compound.compound_name, "html"),
                link=permalink,
                depth=depth,
                description=(compound.brief_html or "").removesuffix("."),
                icon_class=icon_class,
            )
        )
        return lines

    def _folder_rows_recursively(self, folder: Folder, depth: int) -> list[str]:
        lines = self._tree_row(folder, depth, "doxyIconFolder")
        if not lines:
            return []
        for child in folder.children:
            if isinstance(child, Folder):
                lines.extend(self._folder_rows_recursively(child, depth + 1))
        for child in folder.children:
            if isinstance(child, File):
                lines.extend(self._file_row(child, depth + 1))
        return lines

    def _file_row(self, file: File, depth: int) -> list[str]:
        return self._tree_row(file, depth, "doxyIconFile")

    def generate_per_initials_index_md_files(self) -> None:
        if not self.files_by_id:
            return
        compounds_by_id = self.workspace.compounds_by_id
        entries: dict[str, TreeEntry] = {}
        for file in self.files_by_id.values():
            for ref in file.inner.get("innerclass", []):
                clazz = compounds_by_id.get(ref.refid)
                if clazz is not None and clazz.kind in CLASS_KINDS:
                    entry = file_tree_entry(clazz, file)
                    entries[entry.id] = entry
            for ref in file.inner.get("innernamespace", []):
                namespace = compounds_by_id.get(ref.refid)
                if namespace is not None and namespace.kind == "namespace":
                    entry = file_tree_entry(namespace, file)
                    entries[entry.id] = entry
            for section in file.sections:
                for member in section.definition_members:
                    entry = file_tree_entry(member, file)
                    entries[entry.id] = entry
                    for enum_value in member.enum_values or []:
                        entry = file_tree_entry(enum_value, file)
                        entries[entry.id] = entry
        self.generate_standard_index_files("files", entries, INDEX_TEXTS)


class Folder(CompoundBase):
    retract_when_empty = True

    def __init__(self, collection: FilesAndFolders, compound_def: CompoundDef) -> None:
        super().__init__(collection, compound_def)
        self.children_folder_ids = [ref.refid for ref in compound_def.inner_refs("innerdir")]
        self.children_file_ids = [ref.refid for ref in compound_def.inner_refs("innerfile")]
        self.children_ids = self.children_folder_ids + self.children_file_ids
        self.relative_path = ""

        self.sidebar_label = compound_def.compoundname
        self.index_name = compound_def.compoundname
        self.tree_entry_name = compound_def.compoundname
        self.page_title = f"`{compound_def.compoundname}` Folder"
        self.create_sections()

    def has_children(self) -> bool:
        """True if any file lives below this folder."""
        for child in self.children:
            if isinstance(child, File):
                return True
            if isinstance(child, Folder) and child.has_children():
                return True
        return False

    def has_any_content(self) -> bool:
        return self.has_children() or super().has_any_content()

    def render_to_lines(self) -> list[str]:
        lines = [self.render_brief_description_to_string(self.brief_html, "#details")]
        lines.extend(self.render_inner_indices_to_lines(["Dirs", "Files"]))
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
        return lines


class File(CompoundBase):
    retract_when_empty = True

    def __init__(self, collection: FilesAndFolders, compound_def: CompoundDef) -> None:
        super().__init__(collection, compound_def)
        self.relative_path = ""

        self.sidebar_label = compound_def.compoundname
        self.index_name = compound_def.compoundname
        self.tree_entry_name = compound_def.compoundname
        self.page_title = f"`{compound_def.compoundname}` File"

        # Needed by the location paragraphs of other compounds, so kept
        # from the start rather than in initialize_late.
        self.program_listing: Listing | None = compound_def.programlisting
        self.listing_line_numbers: set[int] = set()
        if self.program_listing is not None and self.workspace.options.render_program_listing:
            for code_line in self.program_listing.find_all(CodeLine):
                if code_line.lineno is not None:
                    self.listing_line_numbers.add(code_line.lineno)

        self.create_sections()

    def has_any_content(self) -> bool:
        compound_def = self._compound_def
        if self.children_ids or self.children or self.inner:
            return True
        if compound_def is not None and compound_def.includes:
            return True
        return super().has_any_content()

    def render_to_lines(self) -> list[str]:
        workspace = self.workspace
        lines = [self.render_brief_description_to_string(self.brief_html, "#details")]
        lines.extend(self.render_includes_index_to_lines())
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

        if self.program_listing is not None and workspace.options.render_program_listing:
            lines.extend(
                [
                    "",
                    "## File Listing",
                    "",
                    "The file content with the documentation metadata removed is:",
                ]
            )
            lines.extend(workspace.render_element_to_lines(self.program_listing, "html"))
        return lines
