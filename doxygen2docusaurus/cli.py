"""Command line entry point."""

import argparse
import logging
from collections.abc import Sequence

from doxygen2docusaurus.errors import Doxygen2DocusaurusError
from doxygen2docusaurus.run_conversion import run_conversion

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="doxygen2docusaurus",
        description="Convert Doxygen XML to Docusaurus Markdown pages, sidebar and menu.",
    )
    ap.add_argument("--config", help="Path to configuration file (YAML)")
    ap.add_argument("--id", help="Select a named configuration; also derives output names")
    ap.add_argument(
        "--input",
        dest="doxygen_xml_input_folder_path",
        help="Folder with the Doxygen XML files (default: doxygen/xml)",
    )
    ap.add_argument(
        "--docs-folder",
        dest="docs_folder_path",
        help="Docusaurus docs folder (default: docs)",
    )
    ap.add_argument(
        "--api-folder",
        dest="api_folder_path",
        help="Output folder below the docs folder (default: api)",
    )
    ap.add_argument("--base-url", dest="base_url", help="Site base URL (default: /)")
    ap.add_argument(
        "--redirects-folder",
        dest="compatibility_redirects_output_folder_path",
        help="Folder below static/ for redirects from the Doxygen HTML URLs",
    )
    ap.add_argument("--verbose", action="store_true", help="Show more progress messages")
    ap.add_argument("--debug", action="store_true", help="Show debug messages")
    return ap


def main(argv: Sequence[str] | None = None) -> int:
    """Run the conversion process."""
    args = create_parser().parse_args(argv)
    logging.basicConfig(
        format="%(levelname)s: %(message)s",
        level=logging.DEBUG if args.debug else logging.INFO,
    )
    try:
        return run_conversion(args)
    except Doxygen2DocusaurusError:
        logger.exception("Conversion failed")
        return 1
