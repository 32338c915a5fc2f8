"""Shared behaviour of the compound collections."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from doxygen2docusaurus.tree_entries import CLASS_KINDS, TreeEntry

if TYPE_CHECKING:
    from doxygen2docusaurus.compound_base import CompoundBase
    from doxygen2docusaurus.models import CompoundDef
    from doxygen2docusaurus.workspace import Workspace

logger = logging.getLogger(__name__)

# (file kind, sidebar label) of the per-initial index pages, in sidebar order.
INDEX_LABELS = [
    ("all", "All"),
    ("classes", "Classes"),
    ("namespaces", "Namespaces"),
    ("functions", "Functions"),
    ("variables", "Variables"),
    ("typedefs", "Typedefs"),
    ("enums", "Enums"),
    ("enumvalues", "Enum Values"),
    ("defines", "Macro Definitions"),
]


def _sort_name(name: str) -> str:
    return name.removeprefix("~").lower()


class CollectionBase:
    """The compounds of one kind family and the pages listing them."""

    def __init__(self, workspace: Workspace) -> None:
        self.workspace = workspace
        self.compounds_by_id: dict[str, CompoundBase] = {}

    def add_child(self, compound_def: CompoundDef) -> CompoundBase:
        raise NotImplementedError

    def create_compounds_hierarchies(self) -> None:
        pass

    def is_visible_in_sidebar(self) -> bool:
        return len(self.compounds_by_id) > 0

    def add_sidebar_items(self, sidebar_category: dict[str, Any]) -> None:
        pass

    def create_menu_items(self) -> list[dict[str, Any]]:
        return []

    def generate_index_md_file(self) -> None:
        pass

    def generate_per_initials_index_md_files(self) -> None:
        pass

    def sidebar_doc_id(self, doc_id: str) -> str:
        return f"{self.workspace.sidebar_base_id}{doc_id}"

    def index_sidebar_items(self, group: str) -> list[dict[str, Any]]:
        """Doc items for the per-initial index pages written for a group."""
        written = self.workspace.indices_maps.get(group, set())
        return [
            {
                "type": "doc",
                "label": label,
                "id": self.sidebar_doc_id(f"indices/{group}/{file_kind}"),
            }
            for file_kind, label in INDEX_LABELS
            if file_kind in written
        ]

    def hierarchy_category(self, group: str, label: str, items: list[dict[str, Any]]) -> dict[str, Any]:
        """A collection category: a Hierarchy subcategory followed by the index pages."""
        return {
            "type": "category",
            "label": label,
            "link": {"type": "doc", "id": self.sidebar_doc_id(f"indices/{group}/index")},
            "collapsed": True,
            "items": [
                {"type": "category", "label": "Hierarchy", "collapsed": True, "items": items},
                *self.index_sidebar_items(group),
            ],
        }

    # Per-initial indices

    def order_per_initials(self, entries: Iterable[TreeEntry]) -> dict[str, list[TreeEntry]]:
        """Group entries by lower case initial; both levels sorted."""
        per_initial: dict[str, list[TreeEntry]] = {}
        for entry in entries:
            initial = _sort_name(entry.name)[:1]
            if initial:
                per_initial.setdefault(initial, []).append(entry)
        return {
            initial: sorted(
                per_initial[initial],
                key=lambda e: (_sort_name(e.name), e.long_name.lower()),
            )
            for initial in sorted(per_initial)
        }

    def output_entries(self, per_initial: dict[str, list[TreeEntry]]) -> list[str]:
        lines: list[str] = []
        total = 0
        for initial, entries in per_initial.items():
            lines.extend(["", f"## - {initial.upper()} -", "", "<ul>"])
            for entry in entries:
                kind = entry.kind.replace("enumvalue", "enum value").replace(
                    "define", "macro definition"
                )
                text = f"<li><b>{entry.name}</b>: as "
                if entry.name != entry.comparable_link_name:
                    text += f"{kind} in "
                if entry.link_kind:
                    text += f"{entry.link_kind} "
                if entry.permalink:
                    text += f'<a href="{entry.permalink}">{entry.link_name}</a>'
                else:
                    text += entry.link_name
                text += "</li>"
                lines.append(text)
            lines.append("</ul>")
            if len(entries) > 1:
                lines.append(f"<p>{len(entries)} entries</p>")
            total += len(entries)
        lines.append("<br/>")
        lines.append(f"<p>Total: {total} entries.</p>")
        return lines

    def generate_index_file(
        self,
        group: str,
        file_kind: str,
        title: str,
        description: str,
        entries: dict[str, TreeEntry],
        accept: Callable[[str], bool],
    ) -> None:
        """Write ``indices/<group>/<file_kind>.md`` when any entry is accepted."""
        selected = [entry for entry in entries.values() if accept(entry.kind)]
        if not selected:
            return
        self.workspace.indices_maps.setdefault(group, set()).add(file_kind)

        workspace = self.workspace
        permalink = f"indices/{group}/{file_kind}"
        front_matter = {
            "title": title,
            "slug": f"{workspace.slug_base_url}{permalink}",
            "custom_edit_url": None,
            "keywords": ["doxygen", group, "index"],
        }
        lines = [f"<p>{description}</p>"]
        lines.extend(self.output_entries(self.order_per_initials(selected)))
        file_path = f"{workspace.output_folder_path}{permalink}.md"
        logger.debug("Writing %s index file %s", group, file_path)
        workspace.write_md_file(file_path, front_matter, lines)

    def generate_standard_index_files(
        self, group: str, entries: dict[str, TreeEntry], texts: dict[str, tuple[str, str]]
    ) -> None:
        """Write the index pages named in ``texts`` (file kind -> title, description)."""
        filters: dict[str, Callable[[str], bool]] = {
            "all": lambda kind: True,
            "classes": lambda kind: kind in CLASS_KINDS,
            "namespaces": lambda kind: kind == "namespace",
            "functions": lambda kind: kind == "function",
            "variables": lambda kind: kind == "variable",
            "typedefs": lambda kind: kind == "typedef",
            "enums": lambda kind: kind == "enum",
            "enumvalues": lambda kind: kind == "enumvalue",
            "defines": lambda kind: kind == "define",
        }
        for file_kind, (title, description) in texts.items():
            self.generate_index_file(
                group, file_kind, title, description, entries, filters[file_kind]
            )
