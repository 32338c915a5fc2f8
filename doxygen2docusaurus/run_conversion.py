"""Orchestration logic for converting Doxygen XML to Docusaurus pages."""

import argparse
import time
from pathlib import Path

from doxygen2docusaurus.generator import DocusaurusGenerator
from doxygen2docusaurus.load_config import load_config
from doxygen2docusaurus.options import GeneratorOptions
from doxygen2docusaurus.text_processing import format_duration
from doxygen2docusaurus.workspace import Workspace
from doxygen2docusaurus.xml_reader import parse_doxygen_xml_folder

# Command line options overriding configuration keys.
OVERRIDES = (
    "doxygen_xml_input_folder_path",
    "docs_folder_path",
    "api_folder_path",
    "base_url",
    "compatibility_redirects_output_folder_path",
)


def build_options(args: argparse.Namespace) -> GeneratorOptions:
    """Merge the configuration file and the command line."""
    config = load_config(args.config, args.id)
    for name in OVERRIDES:
        value = getattr(args, name, None)
        if value is not None:
            config[name] = value
    if args.verbose:
        config["verbose"] = True
    if args.debug:
        config["debug"] = True
    return GeneratorOptions.from_config(config, args.id)


def run_conversion(args: argparse.Namespace) -> int:
    """Execute the full conversion pipeline."""
    start = time.monotonic()
    options = build_options(args)

    print(f"Reading Doxygen XML files from {options.doxygen_xml_input_folder_path}...")
    data = parse_doxygen_xml_folder(Path(options.doxygen_xml_input_folder_path))

    workspace = Workspace(data, options)
    workspace.build()

    written = DocusaurusGenerator(workspace).run()

    elapsed = format_duration((time.monotonic() - start) * 1000)
    print(f"Generated {written} Markdown pages into: {workspace.output_folder_path} in {elapsed}")
    return 0
