"""Anchors and table-of-contents items found inside detailed descriptions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from doxygen2docusaurus.elements import DocAnchor, DocSect, DocTocItem, DocTocList, Element

if TYPE_CHECKING:
    from doxygen2docusaurus.compound_base import CompoundBase


@dataclass(eq=False)
class DescriptionAnchor:
    compound: CompoundBase
    id: str


@dataclass(eq=False)
class DescriptionTocList:
    compound: CompoundBase
    toc_items: list[DescriptionTocItem] = field(default_factory=list)


@dataclass(eq=False)
class DescriptionTocItem:
    id: str
    toc_list: DescriptionTocList


@dataclass
class DescriptionIndex:
    """The by-id lookups filled by scanning every compound's description."""

    toc_lists: list[DescriptionTocList] = field(default_factory=list)
    toc_items_by_id: dict[str, DescriptionTocItem] = field(default_factory=dict)
    anchors_by_id: dict[str, DescriptionAnchor] = field(default_factory=dict)

    def scan(self, compound: CompoundBase, element: Element) -> None:
        """Record the toc items, section ids and anchors below an element."""
        for child in element.children:
            if isinstance(child, str):
                continue
            if isinstance(child, DocTocList):
                toc_list = DescriptionTocList(compound)
                for item in child.find_all(DocTocItem):
                    toc_item = DescriptionTocItem(item.id, toc_list)
                    toc_list.toc_items.append(toc_item)
                    self.toc_items_by_id.setdefault(toc_item.id, toc_item)
                self.toc_lists.append(toc_list)
            elif isinstance(child, DocSect):
                if child.id:
                    self.anchors_by_id.setdefault(child.id, DescriptionAnchor(compound, child.id))
                self.scan(compound, child)
            elif isinstance(child, DocAnchor):
                if child.id:
                    self.anchors_by_id.setdefault(child.id, DescriptionAnchor(compound, child.id))
            else:
                self.scan(compound, child)
