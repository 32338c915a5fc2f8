"""Write the Docusaurus pages, sidebar, menu and redirects of a built workspace."""

from __future__ import annotations

import json
import logging
import shutil
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import TYPE_CHECKING, Any

from doxygen2docusaurus.errors import RendererNotFoundError
from doxygen2docusaurus.pages import MAIN_PAGE_ID
from doxygen2docusaurus.redirect_stubs import generate_compatibility_redirects
from doxygen2docusaurus.workspace import COLLECTION_NAMES

if TYPE_CHECKING:
    from doxygen2docusaurus.compound_base import CompoundBase
    from doxygen2docusaurus.workspace import Workspace

logger = logging.getLogger(__name__)


class DocusaurusGenerator:
    def __init__(self, workspace: Workspace) -> None:
        self.workspace = workspace
        self.options = workspace.options

    def run(self) -> int:
        """Write every output; returns the number of Markdown files written."""
        self.workspace.check_built()

        self.prepare_output_folder()
        self.generate_pages()
        self.generate_top_index_md_file()
        for collection in self.workspace.collections.values():
            collection.generate_index_md_file()
        for collection in self.workspace.collections.values():
            collection.generate_per_initials_index_md_files()

        written = self.workspace.written_files_count
        print(f"{written} .md files written")
        if written == 0:
            msg = "No pages were generated"
            raise SystemExit(msg)

        self.generate_sidebar_file()
        self.generate_menu_file()
        generate_compatibility_redirects(self.workspace)
        self.copy_image_files()
        return written

    def prepare_output_folder(self) -> None:
        output_folder = Path(self.workspace.output_folder_path)
        if output_folder.exists():
            print(f"Removing existing folder {output_folder}...")
            shutil.rmtree(output_folder)
        output_folder.mkdir(parents=True)

    # Pages

    def _visible_compounds(self) -> list[CompoundBase]:
        compounds = []
        for compound in self.workspace.compounds_by_id.values():
            if compound.id == MAIN_PAGE_ID:
                continue
            if compound.relative_permalink is None or compound.docusaurus_id is None:
                logger.debug("Skip %s, no permalink", compound.id)
                continue
            compounds.append(compound)
        return compounds

    def generate_pages(self) -> None:
        compounds = self._visible_compounds()
        print(f"Writing {len(compounds)} pages...")
        failed = 0
        with ThreadPoolExecutor(max_workers=max(1, self.options.max_parallel_writes)) as executor:
            futures = {executor.submit(self.generate_page, c): c for c in compounds}
            for future in as_completed(futures):
                compound = futures[future]
                try:
                    future.result()
                except RendererNotFoundError:
                    raise
                except Exception:
                    failed += 1
                    logger.exception("Page of %s %s not written", compound.kind, compound.id)
        if failed:
            logger.error("%d pages not written", failed)

    def generate_page(self, compound: CompoundBase) -> None:
        workspace = self.workspace
        logger.debug(
            "%s: %s -> %s%s",
            compound.kind,
            compound.compound_name.replace(" ", ""),
            workspace.absolute_base_url,
            compound.relative_permalink,
        )
        front_matter: dict[str, Any] = {
            "slug": f"{workspace.slug_base_url}{compound.relative_permalink}",
            "custom_edit_url": None,
            "toc_max_heading_level": 4,
            "keywords": [*self.options.keywords, compound.kind],
        }
        body_lines = compound.render_to_lines()
        workspace.write_md_file(
            f"{workspace.output_folder_path}{compound.docusaurus_id}.md",
            front_matter,
            body_lines,
            title=compound.page_title,
            page_permalink=f"{workspace.page_base_url}{compound.relative_permalink}",
        )

    def generate_top_index_md_file(self) -> None:
        workspace = self.workspace
        title = self.options.main_page_title or f"{workspace.project_brief} API Reference"
        front_matter = {
            "title": title,
            "slug": workspace.slug_base_url,
            "custom_edit_url": None,
            "keywords": list(self.options.keywords),
        }

        lines: list[str] = []
        topics_lines = workspace.groups.generate_topics_table()
        lines.extend(topics_lines)

        main_page = workspace.main_page
        if main_page is not None:
            if topics_lines:
                lines.extend(["", "## Description"])
            if main_page.detailed_lines:
                lines.append("")
                lines.extend(
                    main_page.render_detailed_description_to_lines(
                        brief_html=main_page.brief_html,
                        detailed_lines=main_page.detailed_lines,
                        show_header=False,
                        show_brief=False,
                    )
                )

        if self.options.original_pages_note:
            lines.extend(["", ":::note", self.options.original_pages_note, ":::"])

        workspace.write_md_file(
            f"{workspace.output_folder_path}index.md",
            front_matter,
            lines,
            page_permalink=workspace.page_base_url.rstrip("/"),
        )

    # Navigation

    def _visible_collections(self):
        for name in COLLECTION_NAMES:
            collection = self.workspace.collections[name]
            if collection.is_visible_in_sidebar():
                yield collection

    def create_sidebar_category(self) -> dict[str, Any]:
        sidebar_category: dict[str, Any] = {
            "type": "category",
            "label": self.options.sidebar_category_label,
            "link": {"type": "doc", "id": f"{self.workspace.sidebar_base_id}index"},
            "collapsed": False,
            "items": [],
        }
        self.workspace.pages.create_top_pages_sidebar_items(sidebar_category)
        for collection in self._visible_collections():
            collection.add_sidebar_items(sidebar_category)
        return sidebar_category

    def create_menu_dropdown(self) -> dict[str, Any]:
        items: list[dict[str, Any]] = []
        for collection in self._visible_collections():
            items.extend(collection.create_menu_items())
        menu: dict[str, Any] = {
            "label": self.options.navbar_label,
            "to": self.workspace.menu_base_url,
            "position": self.options.navbar_position,
        }
        if items:
            menu = {"type": "dropdown", **menu, "items": items}
        return menu

    def generate_sidebar_file(self) -> None:
        _write_json(self.options.sidebar_category_file_path, self.create_sidebar_category())

    def generate_menu_file(self) -> None:
        if not self.options.navbar_file_path.strip():
            return
        _write_json(self.options.navbar_file_path, self.create_menu_dropdown())

    # Images

    def copy_image_files(self) -> None:
        images = sorted({name for name in self.workspace.data.images if name})
        if not images:
            return
        print(f"Copying {len(images)} image files...")
        destination = Path(self.options.static_folder_path, *self.options.images_folder_path.split("/"))
        destination.mkdir(parents=True, exist_ok=True)
        source = Path(self.options.doxygen_xml_input_folder_path)
        for name in images:
            from_path = source / name
            if not from_path.exists():
                logger.warning("Image %s not found in %s", name, source)
                continue
            logger.debug("Copying image file %s", destination / name)
            shutil.copyfile(from_path, destination / name)


def _write_json(file_path: str, data: dict[str, Any]) -> None:
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    print(f"Writing {path}...")
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
