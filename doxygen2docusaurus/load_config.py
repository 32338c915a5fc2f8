"""Logic for loading and merging configuration files."""

import copy
import logging
from pathlib import Path
from typing import Any

import yaml

from doxygen2docusaurus.deep_merge import deep_merge

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE_NAMES = (
    "config/doxygen2docusaurus.yml",
    "doxygen2docusaurus.yml",
)

DEFAULT_CONFIG: dict[str, Any] = {
    "doxygen_xml_input_folder_path": "doxygen/xml",
    "docs_folder_path": "docs",
    "api_folder_path": "api",
    "base_url": "/",
    "docs_base_url": "docs",
    "api_base_url": "api",
    "images_folder_path": "img/doxygen",
    "compatibility_redirects_output_folder_path": None,
    "static_folder_path": "static",
    "main_page_title": "",
    "sidebar_category_file_path": "sidebar-category-doxygen.json",
    "sidebar_category_label": "API Reference (Doxygen)",
    "navbar_file_path": "docusaurus-config-navbar-doxygen.json",
    "navbar_label": "Reference",
    "navbar_position": "left",
    "list_pages_at_top": True,
    "render_program_listing": True,
    "render_program_listing_inline": True,
    "original_pages_note": "",
    "max_parallel_writes": 8,
    "verbose": False,
    "debug": False,
    "keywords": ["doxygen", "reference"],
}


def load_config(path: str | None = None, config_id: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults.

    Without an explicit path, the first existing default file name is used.
    A file may hold several configurations under ``configurations:``, keyed
    by id; ``config_id`` selects one of them.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    config_path = _find_config_file(path)
    if config_path is None:
        return config

    user_config = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(user_config, dict):
        msg = f"Configuration file {config_path} must contain a mapping"
        raise SystemExit(msg)

    configurations = user_config.pop("configurations", None)
    if isinstance(configurations, dict) and config_id:
        selected = configurations.get(config_id)
        if selected is None:
            msg = f"Configuration {config_id!r} not found in {config_path}"
            raise SystemExit(msg)
        user_config = deep_merge(user_config, selected)

    for key in list(user_config):
        if key not in DEFAULT_CONFIG:
            logger.warning("Unknown configuration key %r in %s ignored", key, config_path)
            del user_config[key]

    return deep_merge(config, user_config)


def _find_config_file(path: str | None) -> Path | None:
    if path:
        p = Path(path)
        if not p.exists():
            msg = f"Configuration file not found: {p}"
            raise SystemExit(msg)
        return p
    for name in DEFAULT_CONFIG_FILE_NAMES:
        p = Path(name)
        if p.exists():
            return p
    return None
