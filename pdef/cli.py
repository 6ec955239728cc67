"""
Command-line interface for pdef.

Provides the main entry point for the PDef-light syntax checker with
subcommands for parsing and tokenizing source files.
"""

import argparse
import sys
from pathlib import Path

from .core import SyntaxChecker
from .exceptions import SourceReadError
from .utils.settings import Settings
from .utils.trace import configure_logging


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        argparse.ArgumentParser: The configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="pdef",
        description="pdef: PDef-light syntax checker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m pdef parse prog.pdef
  python -m pdef parse prog.pdef etp
  python -m pdef parse prog.pdef --trace parser
  python -m pdef tokens prog.pdef

Flag letters: e = echo input, t = trace tokenizer, p = trace parser
        """
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("parse", "Check that a file is a valid PDef-light program"),
        ("tokens", "Print the tokens of a file, one per line"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "input",
            type=str,
            help="Input PDef-light source file"
        )
        sub.add_argument(
            "flags",
            nargs="?",
            default="",
            help="Debug flag letters: e (echo), t (tokenizer trace), p (parser trace)"
        )
        sub.add_argument(
            "--echo",
            action="store_true",
            help="Echo the input as it is read"
        )
        sub.add_argument(
            "--trace",
            action="append",
            choices=["tokenizer", "parser"],
            default=[],
            help="Enable a trace channel (may be repeated)"
        )
        sub.add_argument(
            "-v", "--verbose",
            action="store_true",
            help="Enable verbose output"
        )

    # Version command
    subparsers.add_parser(
        "version",
        help="Show version information"
    )

    return parser


def _settings_from_args(args: argparse.Namespace) -> Settings:
    settings = Settings.from_flags(args.flags)
    settings.echo = settings.echo or args.echo
    settings.trace_tokenizer = settings.trace_tokenizer or "tokenizer" in args.trace
    settings.trace_parser = settings.trace_parser or "parser" in args.trace
    return settings


def handle_parse(args: argparse.Namespace) -> int:
    """Handle the parse command.

    Args:
        args: Parsed command-line arguments

    Returns:
        int: Exit code (0 if the program parsed, 1 otherwise)
    """
    settings = _settings_from_args(args)
    configure_logging(args.verbose)

    if args.verbose:
        print(f"[pdef] Checking: {args.input}")
        print(f"[pdef] Settings: {settings}")

    result = SyntaxChecker(settings).check_file(Path(args.input))

    if settings.echo:
        print()

    if result.fatal:
        print(f"[pdef] Error: {result.error_message}", file=sys.stderr)
        return 1

    if result.success:
        print("Program parsed!")
        return 0

    for error in result.errors:
        print(error)
    count = len(result.errors)
    print(f"{count} syntax error{'s' if count != 1 else ''} found")
    return 1


def handle_tokens(args: argparse.Namespace) -> int:
    """Handle the tokens command.

    Args:
        args: Parsed command-line arguments

    Returns:
        int: Exit code (0 for success, 1 if the file could not be read)
    """
    settings = _settings_from_args(args)
    configure_logging(args.verbose)
    checker = SyntaxChecker(settings)

    try:
        stream = open(args.input, "r", encoding="utf-8")
    except OSError:
        print(f"[pdef] Error: Could not open file `{args.input}'", file=sys.stderr)
        return 1

    with stream:
        try:
            for token in checker.tokens(stream):
                print(token)
        except SourceReadError as e:
            print(f"[pdef] Error: {e}", file=sys.stderr)
            return 1
    return 0


def handle_version(args: argparse.Namespace) -> int:
    """Handle the version command.

    Args:
        args: Parsed command-line arguments

    Returns:
        int: Exit code (always 0 for version)
    """
    from . import __version__, __author__
    print(f"pdef version {__version__}")
    print(f"Author: {__author__}")
    return 0


def main(argv: list = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        int: Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == "parse":
        return handle_parse(args)
    elif args.command == "tokens":
        return handle_tokens(args)
    elif args.command == "version":
        return handle_version(args)
    else:
        parser.print_help()
        return 2


if __name__ == "__main__":
    sys.exit(main())
