"""
notethreads.cli - Command-line interface.

Main entry point for the notethreads CLI tool.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from notethreads import __version__
from notethreads.commands import config_cmd, graph_cmd, insert, show
from notethreads.log_config import configure_logging, level_for_args


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="notethreads",
        description="Threads of linked markdown notes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  notethreads show notes/idea.md      # Main thread and replies around a note
  notethreads insert notes/idea.md    # Add a note after idea.md
  notethreads graph --json            # Dump the thread graph

Configuration:
  notethreads config path             # Show config file location
  notethreads config show             # View all settings

For detailed command help: notethreads <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"notethreads {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "--vault",
        type=Path,
        help="Override vault directory",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # show command
    show_parser = subparsers.add_parser(
        "show",
        help="Show the thread a note belongs to",
    )
    show_parser.add_argument("note", help="Note path (vault-relative or filesystem)")
    show_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output JSON",
    )

    # insert command
    insert_parser = subparsers.add_parser(
        "insert",
        help="Insert a new note after a note",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
If the note has a main continuation, the new note is spliced in between
and the continuation's prev is rewritten. Reply branches are untouched.
""",
    )
    insert_parser.add_argument("note", help="Note to insert after")

    # graph command
    graph_parser = subparsers.add_parser(
        "graph",
        help="Dump the thread graph and broken references",
    )
    graph_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output JSON",
    )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Inspect configuration",
    )
    config_sub = config_parser.add_subparsers(dest="config_action")
    config_sub.add_parser("path", help="Show config file location")
    config_sub.add_parser("show", help="Show merged configuration")

    return parser


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
    # Install with: pip install notethreads[completion]
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)

    configure_logging(level_for_args(args.verbose, args.quiet, "WARNING"))

    if not args.command:
        parser.print_help()
        return 0

    try:
        if args.command == "show":
            return show.run(args)
        elif args.command == "insert":
            return insert.run(args)
        elif args.command == "graph":
            return graph_cmd.run(args)
        elif args.command == "config":
            return config_cmd.run(args)
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
