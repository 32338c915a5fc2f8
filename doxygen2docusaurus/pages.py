"""Related pages, including the main page."""

from __future__ import annotations

from typing import Any

from doxygen2docusaurus.collection_base import CollectionBase
from doxygen2docusaurus.compound_base import CompoundBase
from doxygen2docusaurus.models import CompoundDef
from doxygen2docusaurus.permalinks import flatten_path, sanitize_hierarchical_path

MAIN_PAGE_ID = "indexpage"

# Pages Doxygen generates itself; listed with the other pages, never at the top.
GENERATED_PAGE_IDS = ("todo", "deprecated")


class Pages(CollectionBase):
    def add_child(self, compound_def: CompoundDef) -> CompoundBase:
        page = Page(self, compound_def)
        self.compounds_by_id[page.id] = page
        if page.id == MAIN_PAGE_ID:
            self.workspace.main_page = page
        return page

    def _doc_item(self, page: Page) -> dict[str, Any] | None:
        if page.sidebar_label is None or page.docusaurus_id is None:
            return None
        return {
            "type": "doc",
            "label": page.sidebar_label,
            "id": self.sidebar_doc_id(page.docusaurus_id),
        }

    def add_sidebar_items(self, sidebar_category: dict[str, Any]) -> None:
        list_pages_at_top = self.workspace.options.list_pages_at_top
        items = []
        for page in self.compounds_by_id.values():
            if page.id == MAIN_PAGE_ID:
                continue
            if list_pages_at_top and page.is_top_page():
                continue
            item = self._doc_item(page)
            if item is not None:
                items.append(item)
        if items:
            sidebar_category["items"].append(
                {"type": "category", "label": "Pages", "collapsed": True, "items": items}
            )

    def create_top_pages_sidebar_items(self, sidebar_category: dict[str, Any]) -> None:
        """Add the user pages directly below the top category."""
        if not self.workspace.options.list_pages_at_top:
            return
        for page in self.compounds_by_id.values():
            if page.id == MAIN_PAGE_ID or not page.is_top_page():
                continue
            item = self._doc_item(page)
            if item is not None:
                sidebar_category["items"].append(item)


class Page(CompoundBase):
    retract_when_empty = True

    def __init__(self, collection: Pages, compound_def: CompoundDef) -> None:
        super().__init__(collection, compound_def)
        title = (compound_def.title or compound_def.compoundname).strip()
        self.sidebar_label = title.removesuffix(".")
        self.index_name = self.sidebar_label
        self.tree_entry_name = self.sidebar_label
        self.page_title = self.sidebar_label

        if self.id == MAIN_PAGE_ID:
            # Rendered into the top index page.
            self.relative_permalink = ""
        else:
            sanitized_path = sanitize_hierarchical_path(self.compound_name)
            self.relative_permalink = f"pages/{sanitized_path}"
            self.docusaurus_id = f"pages/{flatten_path(sanitized_path)}"
        self.create_sections()

    def has_any_content(self) -> bool:
        # The title alone is not content; the main page is always kept.
        if self.id == MAIN_PAGE_ID or self.inner:
            return True
        return super().has_any_content()

    def is_top_page(self) -> bool:
        return self.id not in GENERATED_PAGE_IDS

    def render_to_lines(self) -> list[str]:
        more = "#details" if self.detailed_lines is not None else None
        lines = [self.render_brief_description_to_string(self.brief_html, more)]
        lines.extend(self.render_inner_indices_to_lines(["Pages"]))
        lines.extend(self.render_section_indices_to_lines())
        lines.extend(
            self.render_detailed_description_to_lines(
                brief_html=self.brief_html,
                detailed_lines=self.detailed_lines,
                show_header=False,
            )
        )
        lines.extend(self.render_sections_to_lines())
        return lines
