"""
rootline.cli - Command-line interface.

Main entry point for the rootline CLI tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rootline import __version__
from rootline.commands import analyze, build, completion, config_cmd, serve


def _add_table_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by every command that reads a table."""
    parser.add_argument(
        "table",
        type=Path,
        help="Table file (.csv or .json)",
    )
    parser.add_argument(
        "--parent",
        help="Parent column name (overrides columns.parent)",
        metavar="COLUMN",
    )
    parser.add_argument(
        "--child",
        help="Child column name (overrides columns.child)",
        metavar="COLUMN",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="rootline",
        description="Lineage forests and tree layouts from parent/child tables",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  rootline build lineage.csv                   # JSON graph, trees and layout
  rootline build lineage.csv -f html -o out.html
  rootline roots lineage.csv                   # List independent roots
  rootline tree lineage.csv --parent src --child dst
  rootline serve lineage.csv                   # Live view, rebuilt on change

Configuration:
  rootline config init          # Create .rootline.toml in current directory
  rootline config path          # Show config file location
  rootline config show          # View merged settings

For detailed command help: rootline <command> --help
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"rootline {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output (debug logging, full tracebacks)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # build command
    build_parser = subparsers.add_parser(
        "build",
        help="Build the lineage forest and layout",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Formats:
  json    Graph, roots, hierarchies and positioned layout (default)
  html    Standalone SVG page with pan and zoom
  csv     One row per positioned node
  text    Indented outline of each root tree
""",
    )
    _add_table_arguments(build_parser)
    build_parser.add_argument(
        "-f",
        "--format",
        choices=["json", "html", "csv", "text"],
        default="json",
        help="Output format (default: json)",
    )
    build_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file (default: stdout)",
        metavar="PATH",
    )

    # roots command
    roots_parser = subparsers.add_parser(
        "roots",
        help="List nodes that never appear as a child",
    )
    _add_table_arguments(roots_parser)

    # tree command
    tree_parser = subparsers.add_parser(
        "tree",
        help="Print each root tree as an outline",
    )
    _add_table_arguments(tree_parser)

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve a live lineage view, rebuilt when the table changes",
    )
    _add_table_arguments(serve_parser)
    serve_parser.add_argument("--host", help="Bind address (default: server.host)")
    serve_parser.add_argument("--port", type=int, help="Port (default: server.port)")

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="View and create configuration",
    )
    config_subparsers = config_parser.add_subparsers(dest="config_action")
    config_show = config_subparsers.add_parser("show", help="Show merged configuration")
    config_show.add_argument("--json", action="store_true", help="Output as JSON")
    config_subparsers.add_parser("path", help="Show config file location")
    config_init = config_subparsers.add_parser("init", help="Create .rootline.toml")
    config_init.add_argument("--force", action="store_true", help="Overwrite existing file")

    # version command
    subparsers.add_parser("version", help="Show version")

    # completion command
    completion_parser = subparsers.add_parser(
        "completion",
        help="Print the shell line that enables tab-completion",
    )
    completion_parser.add_argument(
        "--shell",
        choices=completion.SHELLS,
        help="Target shell (default: detected from $SHELL)",
    )

    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)
    _configure_logging(args)

    if not args.command:
        parser.print_help()
        return 0

    try:
        if args.command == "build":
            return build.run(args)
        elif args.command == "roots":
            return analyze.run_roots(args)
        elif args.command == "tree":
            return analyze.run_tree(args)
        elif args.command == "serve":
            return serve.run(args)
        elif args.command == "config":
            return config_cmd.run(args)
        elif args.command == "version":
            print(f"rootline {__version__}")
            return 0
        elif args.command == "completion":
            return completion.run(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
