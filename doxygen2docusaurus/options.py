"""Generator options derived from the merged configuration."""

from dataclasses import dataclass, field, fields
from typing import Any


@dataclass
class GeneratorOptions:
    """Settings controlling input, output layout and URLs."""

    doxygen_xml_input_folder_path: str = "doxygen/xml"
    docs_folder_path: str = "docs"
    api_folder_path: str = "api"
    base_url: str = "/"
    docs_base_url: str = "docs"
    api_base_url: str = "api"
    images_folder_path: str = "img/doxygen"
    compatibility_redirects_output_folder_path: str | None = None
    static_folder_path: str = "static"
    main_page_title: str = ""
    sidebar_category_file_path: str = "sidebar-category-doxygen.json"
    sidebar_category_label: str = "API Reference (Doxygen)"
    navbar_file_path: str = "docusaurus-config-navbar-doxygen.json"
    navbar_label: str = "Reference"
    navbar_position: str = "left"
    list_pages_at_top: bool = True
    render_program_listing: bool = True
    render_program_listing_inline: bool = True
    original_pages_note: str = ""
    max_parallel_writes: int = 8
    verbose: bool = False
    debug: bool = False
    keywords: list[str] = field(default_factory=lambda: ["doxygen", "reference"])
    id: str = "default"

    @classmethod
    def from_config(
        cls, config: dict[str, Any], config_id: str | None = None
    ) -> "GeneratorOptions":
        """Build options from a config dict.

        A non-default id derives the output folder, URL and file names from
        the id, unless the configuration sets them explicitly.
        """
        known = {f.name for f in fields(cls)}
        options = cls(**{k: v for k, v in config.items() if k in known})
        if not config_id or config_id == "default":
            return options

        defaults = cls()
        options.id = config_id
        derived = {
            "api_folder_path": config_id,
            "api_base_url": config_id,
            "images_folder_path": f"img/doxygen-{config_id}",
            "sidebar_category_file_path": f"sidebar-category-doxygen-{config_id}.json",
            "navbar_file_path": f"docusaurus-config-navbar-doxygen-{config_id}.json",
        }
        for name, value in derived.items():
            if getattr(options, name) == getattr(defaults, name):
                setattr(options, name, value)
        return options
