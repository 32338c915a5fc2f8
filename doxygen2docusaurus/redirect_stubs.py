"""HTML pages redirecting the original Doxygen URLs to the new pages."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from doxygen2docusaurus.workspace import Workspace

logger = logging.getLogger(__name__)

# Doxygen index pages and the permalinks replacing them.
INDEX_REDIRECTS = {
    "classes.html": "classes",
    "files.html": "files",
    "index.html": "",
    "namespaces.html": "namespaces",
    "pages.html": "pages",
    "topics.html": "groups",
}


class RedirectStubGenerator:
    def __init__(self, base_output_dir: str | Path):
        self.base_dir = Path(base_output_dir)
        self.count = 0

    def generate_stub(self, old_file_name: str, permalink: str) -> str | None:
        """
        Writes a redirect page at old_file_name pointing to permalink.
        Returns the content if generated, or None if skipped.
        """
        old_path = self.base_dir / old_file_name
        try:
            old_path.resolve().relative_to(self.base_dir.resolve())
        except ValueError:
            logger.warning("Redirect %s outside %s, skipped", old_file_name, self.base_dir)
            return None

        if old_path.exists():
            return None

        content = create_redirect_content(permalink)
        old_path.parent.mkdir(parents=True, exist_ok=True)
        with open(old_path, "w", encoding="utf-8") as f:
            f.write(content)
        self.count += 1
        return content


def create_redirect_content(permalink: str) -> str:
    lines = [
        "<!DOCTYPE html>",
        "<html>",
        "  <head>",
        '    <meta charset="UTF-8">',
        f'    <meta http-equiv="refresh" content="0; url={permalink}">',
        f'    <link rel="canonical" href="{permalink}" />',
        "  </head>",
        "  <script>",
        f"    window.location.href = '{permalink}' + window.location.search + window.location.hash;",
        "  </script>",
        "</html>",
        "",
    ]
    return "\n".join(lines)


def generate_compatibility_redirects(workspace: Workspace) -> int:
    """Write the redirect pages; returns how many were written."""
    options = workspace.options
    folder = options.compatibility_redirects_output_folder_path
    if not folder:
        return 0

    base_dir = Path(options.static_folder_path) / folder
    if base_dir.exists():
        print(f"Removing existing folder {base_dir}...")
        shutil.rmtree(base_dir)
    print("Writing redirect files...")

    stubs = RedirectStubGenerator(base_dir)
    for compound_id in sorted(workspace.compounds_by_id):
        compound = workspace.compounds_by_id[compound_id]
        # The main page is index.html, redirected below.
        if not compound.relative_permalink:
            continue
        permalink = f"{workspace.absolute_base_url}{compound.relative_permalink}/"
        stubs.generate_stub(f"{compound_id}.html", permalink)
        if compound.kind == "file":
            stubs.generate_stub(f"{compound_id}_source.html", permalink)
        elif compound.kind in ("class", "struct"):
            stubs.generate_stub(f"{compound_id}-members.html", permalink)

    for old_file_name, target in INDEX_REDIRECTS.items():
        permalink = f"{workspace.absolute_base_url}{target}/" if target else workspace.absolute_base_url
        stubs.generate_stub(old_file_name, permalink)

    logger.info("%d html files written", stubs.count)
    return stubs.count
