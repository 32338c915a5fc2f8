"""Entries of the per-initial index pages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from doxygen2docusaurus.members import EnumValue, Member
from doxygen2docusaurus.permalinks import sanitize_anonymous_namespace

if TYPE_CHECKING:
    from doxygen2docusaurus.compound_base import CompoundBase

CLASS_KINDS = ("class", "struct", "union")


@dataclass
class TreeEntry:
    """One line of an index: what it is and where it is defined."""

    id: str
    name: str
    long_name: str
    kind: str
    permalink: str | None
    link_kind: str = ""
    link_name: str = ""
    comparable_link_name: str = ""


def create_tree_entry(entry: CompoundBase | Member | EnumValue) -> TreeEntry:
    """Build the entry for a class, namespace, member or enum value."""
    if isinstance(entry, Member):
        workspace = entry.workspace
        name = entry.name + ("()" if entry.kind == "function" else "")
        return TreeEntry(
            id=entry.id,
            name=name,
            long_name=entry.qualified_name or "???",
            kind=entry.kind,
            permalink=workspace.get_permalink(entry.id, "member"),
        )
    if isinstance(entry, EnumValue):
        workspace = entry.member.workspace
        return TreeEntry(
            id=entry.id,
            name=entry.name,
            long_name=entry.name,
            kind="enumvalue",
            permalink=workspace.get_permalink(entry.id, "member"),
        )

    workspace = entry.workspace
    permalink = workspace.get_permalink(entry.id, "compound")
    if entry.kind in CLASS_KINDS:
        fully_qualified_name = getattr(entry, "fully_qualified_name", entry.compound_name)
        return TreeEntry(
            id=entry.id,
            name=workspace.render_string(entry.tree_entry_name, "html"),
            long_name=fully_qualified_name,
            kind=entry.kind,
            permalink=permalink,
            link_kind=entry.kind,
            link_name=fully_qualified_name,
        )
    return TreeEntry(
        id=entry.id,
        name=entry.tree_entry_name,
        long_name=getattr(entry, "unqualified_name", entry.compound_name),
        kind=entry.kind,
        permalink=permalink,
        link_kind=entry.kind,
        link_name=entry.tree_entry_name,
    )


def class_tree_entry(entry: CompoundBase | Member | EnumValue, clazz: CompoundBase) -> TreeEntry:
    tree_entry = create_tree_entry(entry)
    tree_entry.link_kind = clazz.kind
    tree_entry.link_name = getattr(clazz, "class_full_name", clazz.compound_name)
    tree_entry.comparable_link_name = clazz.workspace.render_string(
        clazz.tree_entry_name, "html"
    )
    return tree_entry


def namespace_tree_entry(
    entry: CompoundBase | Member | EnumValue, namespace: CompoundBase
) -> TreeEntry:
    tree_entry = create_tree_entry(entry)
    tree_entry.link_kind = "namespace"
    tree_entry.link_name = sanitize_anonymous_namespace(namespace.compound_name)
    tree_entry.comparable_link_name = namespace.tree_entry_name
    return tree_entry


def file_tree_entry(entry: CompoundBase | Member | EnumValue, file: CompoundBase) -> TreeEntry:
    tree_entry = create_tree_entry(entry)
    tree_entry.link_kind = "file"
    tree_entry.link_name = getattr(file, "relative_path", file.compound_name)
    return tree_entry
