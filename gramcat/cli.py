"""CLI entrypoint for creating grammar catalogue entries."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .formatters import get_formatter
from .logging import Verbosity, configure_logging, get_logger
from .orchestrator import CatalogueBuilder

_NOTICE = (
    "NOTE: Now attempting to extract data for the catalogue entry.\n"
    "      This could take several minutes, so please be patient.\n"
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gramcat",
        description=(
            "Extract grammar information and format it as a catalogue entry "
            "for the DELPH-IN wiki, for LaTeX, or for HTML."
        ),
    )
    parser.add_argument(
        "-d",
        "--debug",
        dest="verbosity",
        action="store_const",
        const=Verbosity.DEBUG,
        default=Verbosity.WARNING,
        help="Print debug messages.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        dest="verbosity",
        action="store_const",
        const=Verbosity.ERROR,
        default=Verbosity.WARNING,
        help="Suppress warning messages.",
    )
    formats = parser.add_mutually_exclusive_group()
    formats.add_argument(
        "-l",
        "--latex",
        dest="output_format",
        action="store_const",
        const="latex",
        default="wiki",
        help="Format output for LaTeX.",
    )
    formats.add_argument(
        "-w",
        "--www",
        dest="output_format",
        action="store_const",
        const="html",
        default="wiki",
        help="Format output as HTML.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Create a catalogue entry for the grammar at PATH (defaults to current directory).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for gramcat."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbosity=args.verbosity)
    logger = get_logger("cli")
    logger.debug("Formatter: %s", args.output_format)
    logger.debug("Verbosity: %d", args.verbosity)

    directory = Path(args.path).expanduser().resolve()
    if not directory.is_dir():
        parser.error(f"{args.path} is not a directory")

    try:
        config = load_config(directory)
    except ConfigError as exc:
        parser.exit(1, f"gramcat: {exc}\n")

    sys.stderr.write(_NOTICE)

    builder = CatalogueBuilder(get_formatter(args.output_format), config=config)
    entry = builder.build(directory)
    sys.stdout.write(builder.render(entry))


if __name__ == "__main__":
    main(sys.argv[1:])
