"""Main orchestration script for running Doxygen and generating the Docusaurus pages."""

import argparse
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path


def run_command(cmd_list: Sequence[str | Path], cwd: Path | str | None = None) -> None:
    """Run a command and exit if it fails."""
    cmd_str = " ".join(str(x) for x in cmd_list)
    print(f"Running: {cmd_str}")
    try:
        subprocess.run(cmd_list, check=True, cwd=cwd)
    except subprocess.CalledProcessError as e:
        print(f"Error executing command: {cmd_str}")
        sys.exit(e.returncode)


def main() -> None:
    """Run the full documentation generation pipeline."""
    parser = argparse.ArgumentParser(
        description="Generate Doxygen XML and convert it to Docusaurus pages."
    )
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Run development checks (linting, tests) before generating documentation",
    )
    parser.add_argument(
        "--skip-doxygen",
        action="store_true",
        help="Reuse the existing Doxygen XML output",
    )
    parser.add_argument(
        "--doxyfile",
        default="Doxyfile",
        help="Doxygen configuration file (default: Doxyfile)",
    )
    parser.add_argument(
        "--config",
        help="Path to configuration file",
    )
    parser.add_argument(
        "--id",
        help="Named configuration to use",
    )
    args = parser.parse_args()

    root_dir = Path(__file__).parent

    if args.dev:
        print("--- Running Development Checks ---")
        run_command([sys.executable, str(root_dir / "dev.py"), "--ci"])
        print("\nDevelopment checks passed. Proceeding with documentation generation.\n")

    if not args.skip_doxygen:
        print("--- Step 1: Generating Doxygen XML ---")
        run_command(["doxygen", args.doxyfile])

    print("\n--- Step 2: Converting Doxygen XML to Docusaurus Markdown ---")
    cmd = [sys.executable, "-m", "doxygen2docusaurus"]
    if args.config:
        cmd.extend(["--config", args.config])
    if args.id:
        cmd.extend(["--id", args.id])

    run_command(cmd)

    print("\nSUCCESS: Documentation generated.")


if __name__ == "__main__":
    main()
