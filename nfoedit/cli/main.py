"""Command line interface for inspecting and editing movie NFO files."""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

import structlog
from pydantic import ValidationError
from ruamel.yaml.error import YAMLError

from ..common.config import Config, LoggingConfig
from ..common.logging_config import setup_logging
from ..core.library import discover_nfo_files, read_document, write_document
from ..parsers.movie_parser import MovieNFOParser
from ..parsers.schema import BOOLEAN_FIELDS, STRING_FIELDS

logger = structlog.get_logger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _parse_bool_argument(value: str) -> Optional[bool]:
    """Map a CLI value to a tri-state boolean ('' clears the field)."""
    lowered = value.strip().lower()
    if lowered == "":
        return None
    if lowered in ("true", "1", "yes"):
        return True
    if lowered in ("false", "0", "no"):
        return False
    raise ValueError(f"Invalid boolean value: {value}")


def cmd_scan(config: Config, directory: Path) -> int:
    """Print every NFO file found below ``directory``."""
    for path in discover_nfo_files(directory, config.scan):
        print(path)
    return 0


def cmd_show(config: Config, file_path: Path) -> int:
    """Print the decoded record as JSON."""
    result = read_document(file_path)
    if not result.success:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    record = MovieNFOParser(config.nfo).parse_string(result.content or "")
    print(json.dumps(record.model_dump(mode="json"), indent=2, ensure_ascii=False))
    return 0


def cmd_normalize(config: Config, file_path: Path, write: bool) -> int:
    """Print (or write back) the canonical encoding of a document."""
    result = read_document(file_path)
    if not result.success:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    parser = MovieNFOParser(config.nfo)
    output = parser.to_xml_string(parser.parse_string(result.content or ""))

    if not write:
        sys.stdout.write(output)
        return 0

    written = write_document(file_path, output)
    if not written.success:
        print(f"Error: {written.error}", file=sys.stderr)
        return 1
    return 0


def cmd_set(config: Config, file_path: Path, field: str, value: str) -> int:
    """Replace one scalar or boolean field and write the document back."""
    if field not in STRING_FIELDS and field not in BOOLEAN_FIELDS:
        print(f"Error: '{field}' is not a scalar field", file=sys.stderr)
        return 1

    result = read_document(file_path)
    if not result.success:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    if field in BOOLEAN_FIELDS:
        try:
            new_value = _parse_bool_argument(value)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    else:
        new_value = value

    parser = MovieNFOParser(config.nfo)
    record = parser.update_field(parser.parse_string(result.content or ""), field, new_value)

    written = write_document(file_path, parser.to_xml_string(record))
    if not written.success:
        print(f"Error: {written.error}", file=sys.stderr)
        return 1

    logger.info("field_set_via_cli", file_path=str(file_path), field=field)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the nfoedit command."""
    parser = argparse.ArgumentParser(
        prog="nfoedit",
        description="Inspect, normalize and edit movie NFO metadata files",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        help="Override the configured log level",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    scan_parser = subparsers.add_parser(
        "scan",
        help="List NFO files below a directory",
        description="Recursively discover NFO files, skipping hidden and tooling directories",
    )
    scan_parser.add_argument("directory", type=Path, help="Library root directory")

    show_parser = subparsers.add_parser(
        "show",
        help="Print a decoded NFO file as JSON",
    )
    show_parser.add_argument("file", type=Path, help="NFO file")

    normalize_parser = subparsers.add_parser(
        "normalize",
        help="Rewrite an NFO file in canonical form",
        description="Decode and re-encode a document (CDATA plots, nested fanart, fixed order)",
    )
    normalize_parser.add_argument("file", type=Path, help="NFO file")
    normalize_parser.add_argument(
        "--write",
        "-w",
        action="store_true",
        help="Write the result back to the file instead of printing it",
    )

    set_parser = subparsers.add_parser(
        "set",
        help="Set a scalar field and write the file back",
        description="Empty VALUE removes the field",
    )
    set_parser.add_argument("file", type=Path, help="NFO file")
    set_parser.add_argument("field", help="Field name (e.g. title, year, watched)")
    set_parser.add_argument("value", help="New value")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the nfoedit command."""
    import nfoedit

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    # Anything logged while the config loads goes to stderr, never stdout
    setup_logging(LoggingConfig(level=args.log_level or "WARNING"))

    try:
        config = Config.from_yaml(args.config) if args.config else Config()
    except (OSError, YAMLError, ValidationError) as e:
        print(f"Error: cannot load config {args.config}: {e}", file=sys.stderr)
        return 1

    if args.log_level:
        config.logging = config.logging.model_copy(update={"level": args.log_level})
    config = nfoedit.configure(config=config)

    if args.command == "scan":
        return cmd_scan(config, args.directory)
    if args.command == "show":
        return cmd_show(config, args.file)
    if args.command == "normalize":
        return cmd_normalize(config, args.file, args.write)
    if args.command == "set":
        return cmd_set(config, args.file, args.field, args.value)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
