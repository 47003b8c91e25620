# File: schemagen/cli.py
"""
schemagen - Command-Line Interface
===================================

CLI built with the standard-library ``argparse`` module.

Usage examples::

    # Generate entities, DTOs and validators into ./out
    python -m schemagen --request request.yaml --output ./out

    # Validate the request only
    python -m schemagen -r request.yaml --validate-only

    # Generate without writing, listing what would be produced
    python -m schemagen -r request.yaml --dry-run

    # Override namespaces and line endings
    python -m schemagen -r request.yaml -o ./out \\
        --entity-namespace "Shop\\Entity" --line-ending crlf

    # Translate a single column type between dialects
    python -m schemagen --translate "character varying(64)" --source postgresql --target mysql

Exit codes:
    0 — success
    1 — validation error
    2 — generation error
    3 — export error
    4 — input/argument error
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional, Sequence

from schemagen.models import DatabaseType

# ---------------------------------------------------------------------------
# Logger (configured in _setup_logging)
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemagen")


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_VALIDATION_ERROR: int = 1
EXIT_GENERATION_ERROR: int = 2
EXIT_EXPORT_ERROR: int = 3
EXIT_INPUT_ERROR: int = 4


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(verbosity: int) -> None:
    """
    Configure the ``schemagen`` logger.

    Args:
        verbosity: -1 = quiet, 0 = WARNING, 1 = INFO, 2+ = DEBUG.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    elif verbosity == 0:
        level = logging.WARNING
    else:
        level = logging.CRITICAL + 1

    handler: logging.StreamHandler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    fmt: str = "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s"
    handler.setFormatter(logging.Formatter(fmt, datefmt="%H:%M:%S"))

    root_logger: logging.Logger = logging.getLogger("schemagen")
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    from schemagen import __version__

    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="schemagen",
        description=(
            "schemagen — database schema type mapping and MagicObject class generator.\n\n"
            "Reads column metadata and validation definitions from a JSON/YAML "
            "request and writes entity, DTO and validator classes."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  %(prog)s -r request.yaml -o ./out\n"
            "  %(prog)s -r request.yaml --validate-only\n"
            "  %(prog)s -r request.json --dry-run -v\n"
            "  %(prog)s --translate 'tinyint(1)' --source mysql --target postgresql\n"
        ),
    )

    parser.add_argument("--version", action="version", version=f"schemagen v{__version__}")

    parser.add_argument(
        "-r", "--request",
        type=str,
        default=None,
        metavar="PATH",
        help="Path to the generation request file (JSON or YAML).",
    )
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        metavar="DIR",
        help="Output directory. Required unless --validate-only or --dry-run is set.",
    )

    # --- Modes ---
    mode_group = parser.add_argument_group("operation modes")
    mode_group.add_argument(
        "--validate-only",
        action="store_true",
        default=False,
        help="Only validate the request without generating classes.",
    )
    mode_group.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        help="Generate in memory and list the files without writing them.",
    )
    mode_group.add_argument(
        "--translate",
        type=str,
        default=None,
        metavar="TYPE",
        help="Translate one column type from --source to --target and print it.",
    )
    mode_group.add_argument("--source", type=str, default="mysql", metavar="DB",
                            help="Source dialect for --translate (default: mysql).")
    mode_group.add_argument("--target", type=str, default="postgresql", metavar="DB",
                            help="Target dialect for --translate (default: postgresql).")

    # --- Config overrides ---
    config_group = parser.add_argument_group("configuration overrides")
    config_group.add_argument(
        "--database-type",
        type=str,
        default=None,
        choices=[d.value for d in DatabaseType],
        help="Override the adapter row shape / database type.",
    )
    config_group.add_argument("--entity-namespace", type=str, default=None, metavar="NS")
    config_group.add_argument("--dto-namespace", type=str, default=None, metavar="NS")
    config_group.add_argument("--validator-namespace", type=str, default=None, metavar="NS")
    config_group.add_argument(
        "--prettify",
        dest="prettify",
        action="store_true",
        default=None,
        help="Emit @JSON(prettify=true).",
    )
    config_group.add_argument(
        "--no-prettify-labels",
        dest="prettify_labels",
        action="store_false",
        default=None,
        help="Keep 'Id'/'Ip' label segments as written.",
    )
    config_group.add_argument(
        "--line-ending",
        type=str,
        default=None,
        choices=["lf", "crlf"],
        help="Line terminator of generated files.",
    )
    config_group.add_argument(
        "--non-updatable",
        action="append",
        default=None,
        metavar="COLUMN",
        help="Column annotated updatable=false (repeatable).",
    )
    config_group.add_argument(
        "--no-dto",
        dest="generate_dto",
        action="store_false",
        default=None,
        help="Skip DTO generation.",
    )

    # --- Behaviour flags ---
    behaviour_group = parser.add_argument_group("behaviour flags")
    behaviour_group.add_argument(
        "--clean",
        action="store_true",
        default=False,
        help="Clean output directory before writing.",
    )
    behaviour_group.add_argument(
        "--no-strict",
        action="store_true",
        default=False,
        help="Continue even if validation has errors (skip bad tables).",
    )
    behaviour_group.add_argument(
        "--fail-on-warnings",
        action="store_true",
        default=False,
        help="Treat validation warnings as errors.",
    )

    # --- Verbosity ---
    verbosity_group = parser.add_argument_group("verbosity")
    verbosity_group.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG).",
    )
    verbosity_group.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=False,
        help="Suppress all log output.",
    )

    return parser


# ---------------------------------------------------------------------------
# Config override builder
# ---------------------------------------------------------------------------

_OVERRIDE_FIELDS: Sequence[str] = (
    "database_type",
    "entity_namespace",
    "dto_namespace",
    "validator_namespace",
    "prettify",
    "prettify_labels",
    "line_ending",
    "non_updatable",
    "generate_dto",
)


def _build_config_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Config override dictionary from the CLI arguments that were given."""
    return {
        name: getattr(args, name)
        for name in _OVERRIDE_FIELDS
        if getattr(args, name) is not None
    }


# ---------------------------------------------------------------------------
# Modes
# ---------------------------------------------------------------------------


def _run_translate(raw_type: str, source: str, target: str) -> int:
    from schemagen.type_tables import translate_type

    print(translate_type(raw_type, source, target))
    return EXIT_SUCCESS


def _run_validate_only(request_path: Path, overrides: Dict[str, Any]) -> int:
    """Validate the request and print a report."""
    from schemagen.generator import load_request_file, parse_raw_request
    from schemagen.utils import Timer
    from schemagen.validators import validate_request

    logger.info("Running validation-only mode for: %s", request_path)
    try:
        request = parse_raw_request(load_request_file(request_path), overrides)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Failed to load request: %s", exc)
        return EXIT_INPUT_ERROR

    with Timer("validation") as t:
        result = validate_request(request)

    print(f"\n{'='*50}")
    print("  Request Validation Report")
    print(f"{'='*50}")
    print(f"  File:        {request_path.name}")
    print(f"  Tables:      {len(request.tables)}")
    print(f"  Validators:  {len(request.validators)}")
    print(f"  Time:        {t.elapsed:.3f}s")
    print(f"  Valid:       {'Yes' if result.is_valid else 'No'}")
    print()
    print(result.format_report())
    print(f"{'='*50}\n")

    return EXIT_SUCCESS if result.is_valid else EXIT_VALIDATION_ERROR


def _run_generation(
    request_path: Path,
    output_dir: Optional[Path],
    args: argparse.Namespace,
) -> int:
    """Run the full pipeline and map the report to an exit code."""
    from schemagen.generator import GenerationReport, SchemaGenerator

    generator: SchemaGenerator = SchemaGenerator(
        strict_validation=not args.no_strict,
        fail_on_warnings=args.fail_on_warnings,
        clean_output=args.clean,
    )
    if output_dir is None:
        logger.info("Dry-run mode: files will not be written to disk.")

    report: GenerationReport = generator.generate_from_file(
        request_path,
        output_dir,
        config_overrides=_build_config_overrides(args) or None,
    )

    print(report.summary())
    if output_dir is None:
        for generated in report.files:
            print(f"  {generated.path}  ({generated.size_bytes:,} bytes, {generated.line_count} lines)")

    if report.success:
        return EXIT_SUCCESS
    if report.input_errors:
        return EXIT_INPUT_ERROR
    if report.validation_errors:
        return EXIT_VALIDATION_ERROR
    if report.generation_errors:
        return EXIT_GENERATION_ERROR
    if report.export_errors:
        return EXIT_EXPORT_ERROR
    return EXIT_GENERATION_ERROR


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def cli_main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """
    Main CLI entry point.

    Args:
        argv: Optional argument list (defaults to sys.argv[1:]).
    """
    parser: argparse.ArgumentParser = _build_parser()
    args: argparse.Namespace = parser.parse_args(argv)

    verbosity: int = -1 if args.quiet else args.verbose
    _setup_logging(verbosity)

    if args.translate is not None:
        sys.exit(_run_translate(args.translate, args.source, args.target))

    if args.request is None:
        logger.error("A request file is required. Use -r/--request.")
        parser.print_usage(sys.stderr)
        sys.exit(EXIT_INPUT_ERROR)

    request_path: Path = Path(args.request).resolve()
    if not request_path.is_file():
        logger.error("Request file not found: %s", request_path)
        sys.exit(EXIT_INPUT_ERROR)

    if args.validate_only:
        sys.exit(_run_validate_only(request_path, _build_config_overrides(args)))

    output_dir: Optional[Path] = None
    if not args.dry_run:
        if args.output is None:
            logger.error("Output directory is required. Use -o/--output, --dry-run or --validate-only.")
            parser.print_usage(sys.stderr)
            sys.exit(EXIT_INPUT_ERROR)
        output_dir = Path(args.output).resolve()

    logger.info("Request: %s", request_path)
    logger.info("Output:  %s", output_dir if output_dir is not None else "(dry run)")
    logger.info("Strict:  %s", not args.no_strict)

    exit_code: int = _run_generation(request_path, output_dir, args)
    if exit_code == EXIT_SUCCESS:
        logger.info("Generation completed successfully.")
    else:
        logger.error("Generation failed with exit code %d.", exit_code)
    sys.exit(exit_code)


def main() -> None:
    """Console-script entry point."""
    cli_main()


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "cli_main",
    "main",
    "EXIT_SUCCESS",
    "EXIT_VALIDATION_ERROR",
    "EXIT_GENERATION_ERROR",
    "EXIT_EXPORT_ERROR",
    "EXIT_INPUT_ERROR",
]

logger.debug("schemagen.cli loaded — %d public symbols.", len(__all__))
