"""
Command-line interface for the complexity scanner.

Provides a CLI for analyzing files, directories and git repositories
and printing the cognitive complexity of every function found.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from complexityscanner import __version__
from complexityscanner.config import create_default_config, load_analysis_config
from complexityscanner.core.engine import AnalysisEngine
from complexityscanner.formatters import get_formatter
from complexityscanner.parsers import ParserRegistry

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="complexityscanner",
        description="Multi-language cognitive complexity analyzer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  complexityscanner analyze ./src --recursive      # Analyze a directory tree
  complexityscanner analyze app.py                  # Analyze a single file
  complexityscanner analyze . --format json         # Output as JSON
  complexityscanner analyze . --threshold 10        # Only functions scoring 10+
  complexityscanner analyze . --ignore '.*_test.py' # Skip matching paths
  complexityscanner list-languages                  # Show supported languages
  complexityscanner init                            # Create config file
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Analyze command
    analyze_parser = subparsers.add_parser("analyze", help="Compute cognitive complexity")
    analyze_parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help="File, directory or git repository to analyze (default: target from the config file, else '.')",
    )
    analyze_parser.add_argument(
        "-c", "--config",
        help="Path to configuration file",
    )
    analyze_parser.add_argument(
        "-l", "--language",
        help="Analyze every file as this language",
    )
    analyze_parser.add_argument(
        "-t", "--threshold",
        type=int,
        help="Only report functions with at least this complexity (default: 0)",
    )
    analyze_parser.add_argument(
        "-f", "--format",
        choices=["text", "json", "table"],
        help="Output format (default: text)",
    )
    analyze_parser.add_argument(
        "-o", "--output",
        help="Output file (default: stdout)",
    )
    analyze_parser.add_argument(
        "--ignore",
        action="append",
        help="Regular expression for paths to skip (can be specified multiple times)",
    )
    analyze_parser.add_argument(
        "-r", "--recursive",
        action="store_true",
        help="Recursively analyze directories",
    )
    analyze_parser.add_argument(
        "-j", "--jobs",
        type=int,
        help="Number of parallel workers (default: 4)",
    )
    analyze_parser.add_argument(
        "--max-complexity",
        type=int,
        help="Exit with status 1 if any function exceeds this complexity",
    )
    analyze_parser.add_argument(
        "--no-factors",
        action="store_true",
        help="Hide the per-function complexity factors",
    )
    analyze_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )
    analyze_parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    # List-languages command
    subparsers.add_parser("list-languages", help="List supported languages")

    # Init command
    init_parser = subparsers.add_parser("init", help="Create a configuration file")
    init_parser.add_argument(
        "-f", "--force",
        action="store_true",
        help="Overwrite existing config file",
    )

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def cmd_analyze(args: argparse.Namespace) -> int:
    """Execute the analyze command."""
    if args.target is None:
        start_dir = "."
    elif os.path.isdir(args.target):
        start_dir = args.target
    else:
        start_dir = os.path.dirname(os.path.abspath(args.target))
    config = load_analysis_config(args.config, start_dir=start_dir)

    # Apply command-line overrides
    if args.target is not None:
        config.target = args.target
    if args.threshold is not None:
        config.threshold = args.threshold
    if args.language:
        config.language = args.language
    if args.ignore:
        config.ignore_patterns = list(config.ignore_patterns) + args.ignore
    if args.recursive:
        config.recursive = True
    if args.jobs is not None:
        config.max_workers = args.jobs
    if args.format:
        config.output.format = args.format
    if args.output:
        config.output.output_file = args.output
    if args.verbose:
        config.output.verbose = True
    if args.no_color:
        config.output.color = False
    if args.no_factors:
        config.output.show_factors = False

    engine = AnalysisEngine(config.to_engine_config())

    target = config.target or "."
    logger.info("Analyzing %s", os.path.abspath(target))
    report = engine.analyze_path(target)

    formatter = get_formatter(config.output.format)

    if hasattr(formatter, "verbose"):
        formatter.verbose = config.output.verbose
    if hasattr(formatter, "use_color"):
        formatter.use_color = formatter.use_color and config.output.color and not config.output.output_file
    if hasattr(formatter, "show_factors"):
        formatter.show_factors = config.output.show_factors

    output = formatter.format_report(report)

    if config.output.output_file:
        with open(config.output.output_file, "w", encoding="utf-8") as f:
            f.write(output + "\n")
        if config.output.format == "text":
            print(f"Results written to {config.output.output_file}")
    else:
        print(output)

    if args.max_complexity is not None:
        offenders = report.exceeding(args.max_complexity)
        if offenders:
            print(
                f"{len(offenders)} function(s) exceed maximum complexity {args.max_complexity}",
                file=sys.stderr,
            )
            return 1
    return 0


def cmd_list_languages(args: argparse.Namespace) -> int:
    """Execute the list-languages command."""
    registry = ParserRegistry.with_defaults()

    print("\nSupported Languages")
    print("=" * 50)
    for language in registry.languages():
        extensions = ", ".join(f".{ext}" for ext in registry.extensions(language))
        print(f"  {language:<10} {extensions}")

    return 0


def cmd_init(args: argparse.Namespace) -> int:
    """Execute the init command."""
    config_file = ".complexityscanner.yaml"

    if os.path.exists(config_file) and not args.force:
        print(f"Configuration file {config_file} already exists.")
        print("Use --force to overwrite.")
        return 1

    content = create_default_config()

    with open(config_file, "w", encoding="utf-8") as f:
        f.write(content)

    print(f"Created configuration file: {config_file}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(getattr(args, "verbose", False))

    if args.command is None:
        parser.print_help()
        return 0

    try:
        if args.command == "analyze":
            return cmd_analyze(args)
        elif args.command == "list-languages":
            return cmd_list_languages(args)
        elif args.command == "init":
            return cmd_init(args)
        else:
            parser.print_help()
            return 0

    except KeyboardInterrupt:
        print("\nAnalysis interrupted.")
        return 130
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if os.environ.get("DEBUG"):
            raise
        return 1


if __name__ == "__main__":
    sys.exit(main())
