"""Write Markdown pages with their front matter."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

import yaml

GENERATOR_URL = "https://github.com/xpack/doxygen2docusaurus"
DOXYGEN_URL = "https://www.doxygen.nl"


def render_front_matter_lines(front_matter: dict[str, Any]) -> list[str]:
    dumped = yaml.safe_dump(front_matter, sort_keys=False, allow_unicode=True, width=1000)
    lines = [
        "---",
        "",
        "# DO NOT EDIT!",
        "# Automatically generated via doxygen2docusaurus by Doxygen.",
        "",
    ]
    lines.extend(dumped.rstrip("\n").split("\n"))
    lines.extend(["", "---", ""])
    return lines


class MarkdownFileWriter:
    """Writes pages and counts them; safe to share between threads."""

    def __init__(self, doxygen_version: str) -> None:
        self.doxygen_version = doxygen_version
        self.count = 0
        self._lock = threading.Lock()

    def render(
        self,
        front_matter: dict[str, Any],
        body_lines: list[str],
        title: str | None = None,
        page_permalink: str | None = None,
    ) -> str:
        lines = render_front_matter_lines(front_matter)
        lines.extend(["", '<div class="doxyPage">'])
        if title is not None and "title" not in front_matter:
            lines.extend(["", f"# {title}"])
        lines.append("")
        lines.extend(body_lines)
        lines.extend(
            [
                "",
                "<hr/>",
                "",
                f'<p class="doxyGeneratedBy">Generated via <a href="{GENERATOR_URL}">'
                f'doxygen2docusaurus</a> by <a href="{DOXYGEN_URL}">Doxygen</a> '
                f"{self.doxygen_version}.</p>",
                "",
                "</div>",
                "",
            ]
        )
        text = "\n".join(lines)
        if page_permalink:
            # Links to anchors on the same page stay local.
            text = text.replace(f'"{page_permalink}/#', '"#')
        return text

    def write(
        self,
        file_path: str | Path,
        front_matter: dict[str, Any],
        body_lines: list[str],
        title: str | None = None,
        page_permalink: str | None = None,
    ) -> None:
        """Create the file; an existing file is an error."""
        text = self.render(front_matter, body_lines, title, page_permalink)
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("x", encoding="utf-8") as f:
            f.write(text)
        with self._lock:
            self.count += 1
