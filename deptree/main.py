"""Main CLI entry point for deptree.

Prints the dependency tree of a JavaScript/TypeScript module as JSON:

    deptree src/index.js -d src            # nested tree
    deptree src/index.js -d src --list     # bundling order
    deptree src/index.js -d src --package  # installed packages used
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from deptree.config.loader import load_options_config
from deptree.export.graph import export_graph, list_to_graph, tree_to_graph
from deptree.export.render import render_result
from deptree.parsers.base import ConfigurationError
from deptree.runtime.api import compute_dependencies

logger = logging.getLogger("deptree.cli")

RECOVERABLE_CLI_ERRORS = (
    ConfigurationError,
    ValidationError,
    OSError,
    ValueError,
)


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=[handler],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="deptree",
        description="Deptree - dependency tree of a JavaScript/TypeScript module",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "filename",
        help="Module whose dependency tree to compute",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "-d",
        "--directory",
        help="Directory containing all source files",
    )
    form = parser.add_mutually_exclusive_group()
    form.add_argument(
        "-l",
        "--list",
        dest="list_form",
        action="store_true",
        help="Output the post-order list of files (bundling order)",
    )
    form.add_argument(
        "-p",
        "--package",
        dest="package_form",
        action="store_true",
        help="Output the installed package roots the module depends on",
    )
    parser.add_argument(
        "-c",
        "--require-config",
        help="Path to a RequireJS config",
    )
    parser.add_argument(
        "-w",
        "--webpack-config",
        help="Path to a webpack config",
    )
    parser.add_argument(
        "-t",
        "--ts-config",
        help="Path to a TypeScript config (tsconfig.json)",
    )
    parser.add_argument(
        "--config",
        help=(
            "Optional options file or inline TOML/JSON string. Command-line "
            "flags take precedence over its values."
        ),
    )
    parser.add_argument(
        "--graph",
        help="Also write the result as a graph (.json node-link or .dot)",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Render the result with rich instead of printing JSON",
    )
    return parser


def build_options(args: argparse.Namespace, non_existent: List[str]) -> Dict[str, Any]:
    """Merge the config source with command-line flags.

    Args:
        args: Parsed command-line arguments.
        non_existent: List collecting unresolved specifiers.

    Returns:
        Dict[str, Any]: Options mapping for ``compute_dependencies``.
    """
    options = load_options_config(args.config)
    overrides = {
        "filename": args.filename,
        "directory": args.directory,
        "require_config": args.require_config,
        "webpack_config": args.webpack_config,
        "ts_config": args.ts_config,
    }
    options.update({key: value for key, value in overrides.items() if value})
    if args.list_form:
        options["is_list_form"] = True
    if args.package_form:
        options["is_package_form"] = True
    options["non_existent"] = non_existent
    return options


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    non_existent: List[str] = []
    try:
        options = build_options(args, non_existent)
        result = compute_dependencies(options)
    except RECOVERABLE_CLI_ERRORS as e:
        logger.error("Cannot compute dependencies: %s", e)
        return 1

    for specifier in non_existent:
        logger.warning("Unresolved dependency: %s", specifier)

    if args.graph:
        graph = tree_to_graph(result) if isinstance(result, dict) else list_to_graph(result)
        try:
            export_graph(graph, Path(args.graph))
        except OSError as e:
            logger.error("Graph export failed: %s", e)
            return 1

    if args.pretty:
        render_result(result, Console(), directory=options.get("directory"))
    else:
        print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
