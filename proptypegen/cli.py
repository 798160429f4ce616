# File: proptypegen/cli.py
"""
PropTypeGen - Command-Line Interface
=====================================

CLI built with the standard-library ``argparse`` module.

Usage examples::

    # Render to stdout
    python -m proptypegen --graph graph.yaml

    # Write a file, replacing it if present
    python -m proptypegen -g graph.json -o src/propTypes.js --force

    # Keep acronyms as written and add a header comment
    python -m proptypegen -g graph.yaml --acronym-style original \\
        --leading-comment "Generated file, do not edit."

    # Validate only (no output)
    python -m proptypegen -g graph.yaml --validate-only

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
from typing import Dict, List, NoReturn, Optional, Sequence

from proptypegen.models import AcronymStyle

# ---------------------------------------------------------------------------
# Logger (configured in _setup_logging)
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("proptypegen")


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
    Configure the root proptypegen logger based on verbosity level.

    Args:
        verbosity: -1 = ERROR, 0 = WARNING, 1 = INFO, 2+ = DEBUG.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    elif verbosity >= 0:
        level = logging.WARNING
    else:
        level = logging.ERROR

    handler: logging.StreamHandler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    fmt: str = "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s"
    datefmt: str = "%H:%M:%S"
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root_logger: logging.Logger = logging.getLogger("proptypegen")
    root_logger.setLevel(level)

    # Remove existing handlers to prevent duplication
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    from proptypegen import __version__

    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="proptypegen",
        description=(
            "PropTypeGen — PropTypes validator generator.\n\n"
            "Renders a type graph (JSON/YAML) as a JavaScript module of "
            "runtime PropTypes validators."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  %(prog)s -g graph.yaml\n"
            "  %(prog)s -g graph.json -o propTypes.js --force\n"
            "  %(prog)s -g graph.yaml --validate-only\n"
        ),
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"PropTypeGen v{__version__}",
    )

    # --- Required arguments ---
    parser.add_argument(
        "-g", "--graph",
        type=str,
        required=True,
        metavar="PATH",
        help="Path to the type graph file (JSON or YAML).",
    )

    # --- Output ---
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        metavar="FILE",
        help="Output file for the generated module. Defaults to stdout.",
    )

    # --- Modes ---
    mode_group = parser.add_argument_group("operation modes")
    mode_group.add_argument(
        "--validate-only",
        action="store_true",
        default=False,
        help="Only validate the type graph without rendering.",
    )
    mode_group.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        help="Render the module but don't write it to disk.",
    )

    # --- Config overrides ---
    config_group = parser.add_argument_group("configuration overrides")
    config_group.add_argument(
        "--acronym-style",
        type=str,
        default=None,
        choices=[style.value for style in AcronymStyle],
        help="Casing for all-caps words in generated names (default: pascal).",
    )
    config_group.add_argument(
        "--leading-comment",
        dest="leading_comments",
        action="append",
        default=None,
        metavar="TEXT",
        help="Comment line replacing the usage comment. Repeatable.",
    )

    # --- Behaviour flags ---
    behaviour_group = parser.add_argument_group("behaviour flags")
    behaviour_group.add_argument(
        "--force",
        action="store_true",
        default=False,
        help="Overwrite the output file if it already exists.",
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
        help="Suppress all output except errors.",
    )

    return parser


# ---------------------------------------------------------------------------
# Config override builder
# ---------------------------------------------------------------------------


def _build_config_overrides(args: argparse.Namespace) -> Dict[str, object]:
    """Build a config override dictionary from CLI arguments."""
    overrides: Dict[str, object] = {}

    if args.acronym_style is not None:
        overrides["acronym_style"] = args.acronym_style

    if args.leading_comments is not None:
        overrides["leading_comments"] = list(args.leading_comments)

    if args.output is not None:
        overrides["output_path"] = str(Path(args.output).resolve())

    if args.force:
        overrides["overwrite_existing"] = True

    return overrides


# ---------------------------------------------------------------------------
# Validate-only mode
# ---------------------------------------------------------------------------


def _run_validate_only(graph_path: Path, args: argparse.Namespace) -> int:
    """
    Run validation only (no rendering).

    Returns the appropriate exit code.
    """
    from proptypegen.generator import load_graph_file, parse_raw_graph
    from proptypegen.utils import Timer
    from proptypegen.validators import validate_full

    logger.info("Running validation-only mode for: %s", graph_path)

    try:
        raw_data = load_graph_file(graph_path)
        overrides = _build_config_overrides(args)
        if overrides:
            raw_data["config"] = {**(raw_data.get("config") or {}), **overrides}
        graph, config = parse_raw_graph(raw_data)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Failed to load type graph: %s", exc)
        return EXIT_INPUT_ERROR

    with Timer("validation") as t:
        result = validate_full(graph, config)

    failed: bool = not result.is_valid or (
        args.fail_on_warnings and result.has_warnings
    )

    if not args.quiet:
        print(f"\n{'='*50}")
        print("  Type Graph Validation Report")
        print(f"{'='*50}")
        print(f"  File:     {graph_path.name}")
        print(f"  Objects:  {graph.object_count}")
        print(f"  Enums:    {graph.enum_count}")
        print(f"  Roots:    {len(graph.top_levels)}")
        print(f"  Time:     {t.elapsed:.3f}s")
        print(f"  Valid:    {'No' if failed else 'Yes'}")

        if result.errors:
            print(f"\n  Errors ({len(result.errors)}):")
            for err in result.errors:
                print(f"    ✗ {err}")

        if result.warnings:
            print(f"\n  Warnings ({len(result.warnings)}):")
            for warn in result.warnings:
                print(f"    ⚠ {warn}")

        if result.is_valid and not result.warnings:
            print("\n  ✅ All validations passed!")

        print(f"{'='*50}\n")

    return EXIT_VALIDATION_ERROR if failed else EXIT_SUCCESS


# ---------------------------------------------------------------------------
# Full generation mode
# ---------------------------------------------------------------------------


def _run_generation(graph_path: Path, args: argparse.Namespace) -> int:
    """
    Run the full generation pipeline.

    The module goes to stdout when no output file was given or in dry-run
    mode; the report then goes to stderr so the two never mix.
    """
    from proptypegen.generator import GenerationReport, PropTypesGenerator

    generator: PropTypesGenerator = PropTypesGenerator(
        fail_on_warnings=args.fail_on_warnings,
        dry_run=args.dry_run,
    )

    if args.dry_run:
        logger.info("Dry-run mode: nothing will be written to disk.")

    report: GenerationReport = generator.generate_from_file(
        graph_path,
        config_overrides=_build_config_overrides(args) or None,
    )

    to_stdout: bool = args.output is None or args.dry_run
    if report.success and to_stdout and report.output is not None:
        sys.stdout.write(report.output.content)

    if not args.quiet:
        print(report.summary(), file=sys.stderr if to_stdout else sys.stdout)

    if not report.success:
        if report.input_errors:
            return EXIT_INPUT_ERROR
        elif report.validation_errors:
            return EXIT_VALIDATION_ERROR
        elif report.generation_errors:
            return EXIT_GENERATION_ERROR
        elif report.export_errors:
            return EXIT_EXPORT_ERROR
        return EXIT_GENERATION_ERROR

    return EXIT_SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def cli_main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """
    Main CLI entry point.

    Can be called from ``__main__.py`` or directly for testing.

    Args:
        argv: Optional argument list (defaults to sys.argv[1:]).
    """
    parser: argparse.ArgumentParser = _build_parser()
    args: argparse.Namespace = parser.parse_args(argv)

    if args.quiet:
        verbosity: int = -1
    else:
        verbosity = args.verbose

    _setup_logging(verbosity)

    graph_path: Path = Path(args.graph).resolve()

    if not graph_path.exists():
        logger.error("Graph file not found: %s", graph_path)
        sys.exit(EXIT_INPUT_ERROR)

    if not graph_path.is_file():
        logger.error("Graph path is not a file: %s", graph_path)
        sys.exit(EXIT_INPUT_ERROR)

    if args.validate_only:
        sys.exit(_run_validate_only(graph_path, args))

    logger.info("Graph:   %s", graph_path)
    logger.info("Output:  %s", args.output or "<stdout>")
    logger.info("Dry run: %s", args.dry_run)

    exit_code: int = _run_generation(graph_path, args)

    if exit_code == EXIT_SUCCESS:
        logger.info("Generation completed successfully.")
    else:
        logger.error("Generation failed with exit code %d.", exit_code)

    sys.exit(exit_code)


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "cli_main",
    "EXIT_SUCCESS",
    "EXIT_VALIDATION_ERROR",
    "EXIT_GENERATION_ERROR",
    "EXIT_EXPORT_ERROR",
    "EXIT_INPUT_ERROR",
]

logger.debug("proptypegen.cli loaded.")
