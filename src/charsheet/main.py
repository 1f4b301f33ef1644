"""Entry-point for launching the CLI application."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from .presentation.cli.app import main as cli_main
from .presentation.cli.config import get_default_config_path, get_log_dir, load_config
from .presentation.cli.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Terminal D&D character sheet editor")
    parser.add_argument("--characters-dir", type=Path, help="Directory holding saved character files")
    parser.add_argument("--reference-dir", type=Path, help="Directory holding the SRD reference JSON files")
    parser.add_argument("--config", type=Path, help="Config file to read instead of the per-user default")
    parser.add_argument("--verbose", action="store_true", help="Write debug records to the log file")
    return parser


def resolve_settings(args: argparse.Namespace) -> dict[str, Path]:
    """Merge command-line flags over the config file."""
    config = load_config(args.config or get_default_config_path())
    return {
        "characters_dir": args.characters_dir or Path(config["characters_dir"]),
        "reference_dir": args.reference_dir or Path(config["reference_dir"]),
    }


def main(argv: Sequence[str] | None = None) -> None:
    """Run the CLI presentation layer."""
    args = build_parser().parse_args(argv)
    setup_logging(get_log_dir(), verbose=args.verbose)
    settings = resolve_settings(args)
    cli_main(characters_dir=settings["characters_dir"], reference_dir=settings["reference_dir"])


if __name__ == "__main__":
    main()
